"""Core Application Layer: Orchestrates use cases and application logic.

Holds the question-fetch state machine, the catalog and summary services,
the client facade that owns session state, and the command handler.
"""
