"""Main entry point for the triviacli application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Optional

import typer
from typing_extensions import Annotated

# --- Core Layer ---
from triviacli.core.client import TriviaClient
from triviacli.core.command_handler import CommandHandler
from triviacli.core.services.summary_service import SummaryService

# --- Infrastructure Layer ---
from triviacli.infrastructure.cli.display import ConsoleDisplay
from triviacli.infrastructure.config.settings import (
    DEFAULT_CONFIG_FILE,
    get_log_settings,
    load_configuration,
)
from triviacli.infrastructure.monitoring.logger_setup import setup_logging

logger = logging.getLogger(__name__)

# --- Dependency Injection Container (Manual) ---

def create_dependencies(token: Optional[str] = None) -> Dict[str, Any]:
    """Creates and wires up all dependencies for one CLI invocation.

    This acts as the Composition Root. Configuration and logging are set up
    by the app callback before any command runs.
    """
    logger.debug("Initializing application dependencies...")
    dependencies: Dict[str, Any] = {}
    dependencies['ui'] = ConsoleDisplay()
    dependencies['client'] = TriviaClient.from_settings(token=token)
    dependencies['summary_service'] = SummaryService()
    dependencies['command_handler'] = CommandHandler(
        client=dependencies['client'],
        summary_service=dependencies['summary_service'],
        ui=dependencies['ui'],
    )
    logger.debug("All dependencies initialized successfully.")
    return dependencies

# --- Typer App Definition ---
app = typer.Typer(
    name="triviacli",
    help="Fetch trivia questions with session tokens and automatic rate limiting.",
    add_completion=False,
)

# --- Helper for Running Async Commands ---
def run_command(
    action: Callable[[CommandHandler], Awaitable[int]],
    token: Optional[str] = None,
) -> None:
    """Builds dependencies, runs one async handler, closes the client and exits with its code."""

    async def runner() -> int:
        dependencies = create_dependencies(token=token)
        client: TriviaClient = dependencies['client']
        try:
            return await action(dependencies['command_handler'])
        finally:
            await client.aclose()

    exit_code = asyncio.run(runner())
    if exit_code:
        raise typer.Exit(code=exit_code)

# --- CLI Options ---

class DifficultyChoice(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"

class TypeChoice(str, Enum):
    multiple = "multiple"
    boolean = "boolean"

TokenOption = Annotated[
    Optional[str],
    typer.Option("--token", "-t", help="Use an existing session token instead of requesting one."),
]

# --- CLI Commands ---

@app.command()
def questions(
    amount: Annotated[int, typer.Option("--amount", "-n", min=1, max=50, help="Number of questions.")] = 10,
    category: Annotated[int, typer.Option("--category", "-c", min=0, help="Category id (0 = any).")] = 0,
    difficulty: Annotated[Optional[DifficultyChoice], typer.Option("--difficulty", "-d")] = None,
    question_type: Annotated[Optional[TypeChoice], typer.Option("--type")] = None,
    token: TokenOption = None,
    session: Annotated[bool, typer.Option(help="Request a session token so questions are not repeated.")] = True,
    timeout: Annotated[Optional[float], typer.Option(min=0.1, help="Give up after this many seconds.")] = None,
    answers: Annotated[bool, typer.Option(help="Show correct and incorrect answers.")] = True,
    summary: Annotated[bool, typer.Option("--summary", "-s", help="Show counts by difficulty, type and category.")] = False,
):
    """Fetch a batch of questions."""
    run_command(
        lambda handler: handler.handle_questions(
            amount,
            category or None,
            difficulty.value if difficulty else None,
            question_type.value if question_type else None,
            use_session=session,
            timeout=timeout,
            show_answers=answers,
            summary=summary,
        ),
        token=token,
    )

@app.command()
def categories():
    """List the available categories."""
    run_command(lambda handler: handler.handle_categories())

@app.command()
def count(
    category: Annotated[int, typer.Option("--category", "-c", min=1, help="Category id.")],
):
    """Show question totals for one category."""
    run_command(lambda handler: handler.handle_category_count(category))

@app.command(name="global-count")
def global_count():
    """Show question totals for the whole bank."""
    run_command(lambda handler: handler.handle_global_count())

@app.command()
def token():
    """Request a new session token and print it."""
    run_command(lambda handler: handler.handle_token_request())

@app.command(name="token-reset")
def token_reset(
    token: Annotated[str, typer.Option("--token", "-t", help="The session token to reset.")],
):
    """Clear the question history of an existing session token."""
    run_command(lambda handler: handler.handle_token_reset(), token=token)

@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
    config: Annotated[Path, typer.Option(help="Path to a YAML configuration file.")] = DEFAULT_CONFIG_FILE,
):
    """Load configuration and logging before any command runs."""
    load_configuration(config_file=config)
    log_settings = get_log_settings()
    setup_logging(
        log_level="DEBUG" if verbose else log_settings["level"],
        log_format=log_settings["format"],
        log_file=log_settings["file"],
    )
    logger.debug(f"Configuration loaded (config file: {config}).")

# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()

if __name__ == "__main__":
    cli_entry_point()
