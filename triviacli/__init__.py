"""triviacli: a rate-limited, session-aware client for the Open Trivia question bank."""

__version__ = "0.1.0"
