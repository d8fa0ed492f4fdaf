"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py), delegates the work to
the TriviaClient and SummaryService, and turns every client error into a
user-facing message. Each handler returns a process exit code.
"""

import logging
import time
from typing import List, Optional

from triviacli.core.client import TriviaClient
from triviacli.core.services.summary_service import SummaryService
from triviacli.domain.exceptions import (
    DeadlineExceededError,
    NetworkError,
    NoTokenToResetError,
    TokenAcquisitionFailedError,
    TokenResetFailedError,
    TriviaApiError,
)
from triviacli.domain.interfaces.user_interface import UserInterface
from triviacli.domain.models.common import CategoryId
from triviacli.domain.models.trivia import Category, ResponseCode

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1

# Messages keyed by the response code an error carries
FRIENDLY_MESSAGES = {
    ResponseCode.NO_RESULTS: "No questions found for your criteria. Try adjusting your filters.",
    ResponseCode.INVALID_PARAMETER: "Invalid request parameters. Please check your settings.",
    ResponseCode.TOKEN_NOT_FOUND: "Session expired. Please request a new session.",
    ResponseCode.TOKEN_EMPTY: "You've seen all available questions! Reset your session to start over.",
    ResponseCode.RATE_LIMIT: "Too many requests. Please wait a moment before trying again.",
}

def friendly_error_message(error: Exception) -> str:
    """Maps an error to the message shown to the user."""
    if isinstance(error, NoTokenToResetError):
        return "No session token to reset. Pass --token or request one first."
    if isinstance(error, (TokenAcquisitionFailedError, TokenResetFailedError)):
        # Keep the token-specific wording; the code alone would mislead here
        return str(error)
    if isinstance(error, DeadlineExceededError):
        return f"Gave up waiting: {error}"
    if isinstance(error, NetworkError):
        return f"Could not reach the question bank: {error}"
    if isinstance(error, TriviaApiError):
        code = ResponseCode.from_raw(error.response_code)
        return FRIENDLY_MESSAGES.get(code, str(error))
    return "An unexpected error occurred. Please try again."


class CommandHandler:
    """Handles incoming commands and delegates to the trivia client."""

    def __init__(
        self,
        client: TriviaClient,
        summary_service: SummaryService,
        ui: UserInterface,
    ):
        self.client = client
        self.summary_service = summary_service
        self.ui = ui

    def _fail(self, action: str, error: Exception) -> int:
        if isinstance(error, TriviaApiError):
            logger.warning(f"{action} failed: {type(error).__name__} - {error}")
        else:
            logger.error(f"{action} failed unexpectedly: {error}", exc_info=True)
        self.ui.display_error(friendly_error_message(error))
        return EXIT_FAILURE

    async def handle_questions(
        self,
        amount: int,
        category: Optional[int] = None,
        difficulty: Optional[str] = None,
        question_type: Optional[str] = None,
        *,
        use_session: bool = True,
        timeout: Optional[float] = None,
        show_answers: bool = True,
        summary: bool = False,
    ) -> int:
        """Handles the 'questions' command."""
        logger.info(
            f"Handling 'questions': amount={amount} category={category} "
            f"difficulty={difficulty} type={question_type}"
        )
        # --timeout covers starting the session and the fetch together
        deadline = time.monotonic() + timeout if timeout is not None else None
        try:
            if use_session and not self.client.has_token():
                await self.client.request_token(timeout=timeout)
                self.ui.display_info("Started a new question session.")
            remaining = max(deadline - time.monotonic(), 0.0) if deadline is not None else None
            questions = await self.client.get_questions(
                amount, CategoryId(category) if category else None, difficulty, question_type, timeout=remaining
            )
        except Exception as e:
            return self._fail("Fetching questions", e)

        self.ui.display_questions(questions, show_answers=show_answers)

        if summary:
            categories: List[Category] = []
            try:
                categories = await self.client.get_categories()
            except TriviaApiError as e:
                # The summary still works without ids, just less resolved
                logger.warning(f"Category list unavailable for summary: {e}")
                self.ui.display_warning("Category list unavailable; category ids are not resolved.")
            self.ui.display_summary(
                self.summary_service.summarize(questions, categories, CategoryId(category) if category else None)
            )
        return EXIT_OK

    async def handle_categories(self) -> int:
        logger.info("Handling 'categories' command.")
        try:
            categories = await self.client.get_categories()
        except Exception as e:
            return self._fail("Listing categories", e)
        self.ui.display_categories(categories)
        return EXIT_OK

    async def handle_category_count(self, category_id: int) -> int:
        logger.info(f"Handling 'count' command for category {category_id}.")
        try:
            count = await self.client.get_category_question_count(CategoryId(category_id))
        except Exception as e:
            return self._fail("Counting category questions", e)

        # Best effort: show the name if the category list can be read
        name = None
        try:
            categories = await self.client.get_categories()
            name = next((c.name for c in categories if c.id == category_id), None)
        except TriviaApiError as e:
            logger.debug(f"Category name lookup failed: {e}")
        self.ui.display_category_count(count, category_name=name)
        return EXIT_OK

    async def handle_global_count(self) -> int:
        logger.info("Handling 'global-count' command.")
        try:
            count = await self.client.get_global_question_count()
        except Exception as e:
            return self._fail("Counting questions", e)
        self.ui.display_global_count(count)
        return EXIT_OK

    async def handle_token_request(self) -> int:
        logger.info("Handling 'token' command.")
        try:
            token = await self.client.request_token()
        except Exception as e:
            return self._fail("Requesting a token", e)
        self.ui.display_info(f"Session token: {token}")
        return EXIT_OK

    async def handle_token_reset(self) -> int:
        logger.info("Handling 'token-reset' command.")
        try:
            token = await self.client.reset_token()
        except Exception as e:
            return self._fail("Resetting the token", e)
        self.ui.display_info(f"Session token {token} reset; its question history is cleared.")
        return EXIT_OK
