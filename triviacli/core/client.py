"""Client facade over the question bank.

A TriviaClient owns everything that is stateful per caller: the HTTP client,
the session token, the rate gate and the lock that serializes fetches. The
services it wires together stay stateless apart from what it hands them.
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Union

import httpx

from triviacli.core.services.catalog_service import CatalogService
from triviacli.core.services.question_service import QuestionFetchOrchestrator
from triviacli.domain.events.api_events import EventSink
from triviacli.domain.interfaces.clock import Clock
from triviacli.domain.models.common import CategoryId, SessionTokenValue
from triviacli.domain.models.trivia import (
    Category,
    CategoryQuestionCount,
    Difficulty,
    GlobalQuestionCount,
    Question,
    QuestionType,
)
from triviacli.infrastructure.api.session_token import SessionToken
from triviacli.infrastructure.config.settings import (
    get_base_url,
    get_http_timeout,
    get_rate_limit_interval,
    get_user_agent,
)
from triviacli.infrastructure.http.dispatcher import RequestDispatcher, build_async_client
from triviacli.infrastructure.resilience.deadline import run_within
from triviacli.infrastructure.resilience.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class TriviaClient:
    """Session-aware, rate-limited access to the trivia endpoints."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        min_interval: float = 5.0,
        clock: Optional[Clock] = None,
        event_sink: Optional[EventSink] = None,
        token: Optional[str] = None,
    ):
        self.http_client = http_client
        self.dispatcher = RequestDispatcher(http_client)
        self.session_token = SessionToken(self.dispatcher, token)
        self.rate_limiter = RateLimiter(min_interval=min_interval, clock=clock)
        self._lock = asyncio.Lock()
        self.questions = QuestionFetchOrchestrator(
            dispatcher=self.dispatcher,
            session_token=self.session_token,
            rate_limiter=self.rate_limiter,
            lock=self._lock,
            event_sink=event_sink,
        )
        self.catalog = CatalogService(self.dispatcher)

    @classmethod
    def from_settings(
        cls,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Optional[Clock] = None,
        event_sink: Optional[EventSink] = None,
        token: Optional[str] = None,
    ) -> "TriviaClient":
        """Builds a client from the loaded configuration.

        Args:
            transport: Optional httpx transport (tests pass a MockTransport).
            clock: Time source for the rate gate.
            event_sink: Receives question-fetch domain events.
            token: A previously issued session token to start with.
        """
        http_client = build_async_client(
            get_base_url(),
            timeout=get_http_timeout(),
            user_agent=get_user_agent(),
            transport=transport,
        )
        logger.debug(f"TriviaClient created for {http_client.base_url}")
        return cls(http_client, min_interval=get_rate_limit_interval(), clock=clock, event_sink=event_sink, token=token)

    async def __aenter__(self) -> "TriviaClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http_client.aclose()

    # --- Session token ---

    @property
    def token(self) -> Optional[SessionTokenValue]:
        return self.session_token.get()

    def has_token(self) -> bool:
        return self.session_token.has()

    def clear_token(self) -> None:
        self.session_token.invalidate()

    async def request_token(self, *, timeout: Optional[float] = None) -> SessionTokenValue:
        """Requests a new session token; `timeout` bounds the lock wait and the call together."""
        return await run_within(self._locked(self.session_token.acquire, timeout), timeout, "Token request")

    async def reset_token(self, *, timeout: Optional[float] = None) -> SessionTokenValue:
        return await run_within(self._locked(self.session_token.reset, timeout), timeout, "Token reset")

    async def _locked(
        self, action: Callable[..., Awaitable[SessionTokenValue]], timeout: Optional[float]
    ) -> SessionTokenValue:
        # Shares the fetch lock so a manual token change never interleaves with a recovery
        async with self._lock:
            return await action(timeout=timeout)

    # --- Questions ---

    async def get_questions(
        self,
        amount: int = 10,
        category: Optional[CategoryId] = None,
        difficulty: Optional[Union[Difficulty, str]] = None,
        type: Optional[Union[QuestionType, str]] = None,
        *,
        timeout: Optional[float] = None,
    ) -> List[Question]:
        return await self.questions.fetch_questions(
            amount, category, difficulty, type, timeout=timeout
        )

    # --- Catalog ---

    async def get_categories(self) -> List[Category]:
        return await self.catalog.get_categories()

    async def get_category_question_count(self, category_id: CategoryId) -> CategoryQuestionCount:
        return await self.catalog.get_category_question_count(category_id)

    async def get_global_question_count(self) -> GlobalQuestionCount:
        return await self.catalog.get_global_question_count()
