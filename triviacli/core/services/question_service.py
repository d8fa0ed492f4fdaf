"""Question fetch orchestration: the bounded-retry state machine.

One logical fetch runs Start -> Throttled -> Dispatched and ends in Done or
Failed. Two response codes are recoverable with a single corrective action:

* TokenNotFound: forget the token, acquire a new one, dispatch again.
* TokenEmpty (only while a token is held): reset the token, dispatch again.

At most MAX_ATTEMPTS dispatches happen per logical fetch, so a call recovers
from one of the two codes once and never from both. Every other outcome is
raised to the caller unchanged. Fetches on one orchestrator are serialized
through a lock so token recovery and the rate-gate timestamp never race.
A timeout bounds the whole fetch: waiting for the lock, the rate gate, the
question requests and any token recovery.
"""

import asyncio
import logging
from typing import List, Optional, Union

from triviacli.domain.events.api_events import (
    DomainEvent,
    EventSink,
    FetchCompleted,
    FetchFailed,
    RecoveryTriggered,
    RequestDeferred,
    RequestDispatched,
    ResponseReceived,
)
from triviacli.domain.exceptions import (
    DeadlineExceededError,
    DecodeError,
    InvalidParameterError,
    NetworkError,
    NoResultsError,
    RateLimitExceededError,
    TokenEmptyError,
    TokenNotFoundError,
    TriviaApiError,
    UnknownResponseCodeError,
)
from triviacli.domain.models.common import CategoryId, JsonPayload
from triviacli.domain.models.trivia import (
    RECOVERABLE_CODES,
    Difficulty,
    Question,
    QuestionType,
    RequestParameters,
    ResponseCode,
)
from triviacli.infrastructure.api.session_token import SessionToken
from triviacli.infrastructure.http.dispatcher import QUESTIONS_PATH, RequestDispatcher
from triviacli.infrastructure.resilience.deadline import run_within
from triviacli.infrastructure.resilience.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

# First dispatch plus one recovery retry
MAX_ATTEMPTS = 2


def log_event(event: DomainEvent) -> None:
    logger.debug(f"EVENT: {event}")


class QuestionFetchOrchestrator:
    """Fetches questions while honoring the session-token and rate-limit protocols."""

    def __init__(
        self,
        dispatcher: RequestDispatcher,
        session_token: SessionToken,
        rate_limiter: RateLimiter,
        lock: Optional[asyncio.Lock] = None,
        event_sink: Optional[EventSink] = None,
    ):
        """Initializes the orchestrator.

        Args:
            dispatcher: Sends the question requests.
            session_token: Token state shared with the owning client.
            rate_limiter: Gate consulted before every question dispatch.
            lock: Serialization point shared with other token mutators.
            event_sink: Receives domain events; defaults to debug logging.
        """
        self.dispatcher = dispatcher
        self.session_token = session_token
        self.rate_limiter = rate_limiter
        self.clock = rate_limiter.clock
        self.lock = lock or asyncio.Lock()
        self.event_sink = event_sink or log_event

    async def fetch_questions(
        self,
        amount: int = 10,
        category: Optional[CategoryId] = None,
        difficulty: Optional[Union[Difficulty, str]] = None,
        type: Optional[Union[QuestionType, str]] = None,
        *,
        timeout: Optional[float] = None,
    ) -> List[Question]:
        """Runs one logical fetch to completion.

        Args:
            amount: Number of questions to request.
            category: Category id; None or 0 means any category.
            difficulty: Optional difficulty filter.
            type: Optional question type filter.
            timeout: Seconds the whole fetch may take, counting the wait for a running
                fetch, rate-gate waits, the requests and any token recovery.

        Returns:
            The questions in the order the server sent them.

        Raises:
            TriviaApiError: One of its subclasses describing the terminal failure.
        """
        params = RequestParameters(amount=amount, category=category, difficulty=difficulty, type=type)
        deadline = self.clock.monotonic() + timeout if timeout is not None else None

        try:
            return await run_within(self._locked_run(params, deadline), timeout, "Question fetch")
        except TriviaApiError as e:
            logger.warning(f"Question fetch failed: {type_name(e)} - {e}")
            self.event_sink(FetchFailed(
                error_type=type_name(e),
                error_message=str(e),
                response_code=e.response_code,
            ))
            raise

    async def _locked_run(self, params: RequestParameters, deadline: Optional[float]) -> List[Question]:
        async with self.lock:
            return await self._run(params, deadline)

    async def _run(self, params: RequestParameters, deadline: Optional[float]) -> List[Question]:
        attempt = 0
        while True:
            payload = await self._dispatch(params, attempt, deadline)
            raw_code = payload.get("response_code")
            code = ResponseCode.from_raw(raw_code)

            if code is ResponseCode.SUCCESS:
                questions = _parse_results(payload)
                logger.debug(f"Fetched {len(questions)} questions on attempt {attempt}.")
                self.event_sink(FetchCompleted(question_count=len(questions), attempts=attempt + 1))
                return questions

            if code is ResponseCode.TOKEN_NOT_FOUND:
                # The server no longer knows this token; holding on to it is useless either way
                self.session_token.invalidate()

            # A retry only happens while the attempt budget lasts, so the loop is bounded
            if (
                code in RECOVERABLE_CODES
                and attempt + 1 < MAX_ATTEMPTS
                and await self._recover(code, deadline)
            ):
                attempt += 1
                continue

            raise _failure_for(code, raw_code)

    async def _dispatch(self, params: RequestParameters, attempt: int, deadline: Optional[float]) -> JsonPayload:
        """Throttled -> Dispatched for a single attempt."""
        wait_needed = self.rate_limiter.wait_time()
        if wait_needed > 0:
            self.event_sink(RequestDeferred(endpoint=QUESTIONS_PATH, wait_time_seconds=wait_needed))
        await self.rate_limiter.gate(deadline)

        remaining = self._remaining(deadline)
        token = self.session_token.get()
        self.event_sink(RequestDispatched(endpoint=QUESTIONS_PATH, attempt=attempt, with_token=token is not None))

        start_time = self.clock.monotonic()
        try:
            payload = await self.dispatcher.get_json(QUESTIONS_PATH, params.to_query(token), timeout=remaining)
        except NetworkError as e:
            if deadline is not None and self.clock.monotonic() >= deadline:
                raise DeadlineExceededError("Question request did not complete before the deadline.") from e
            raise
        finally:
            # Stamp completion, not start, so slow calls do not shorten the next gap
            self.rate_limiter.record_dispatch()

        latency_ms = (self.clock.monotonic() - start_time) * 1000
        self.event_sink(ResponseReceived(
            endpoint=QUESTIONS_PATH,
            attempt=attempt,
            response_code=payload.get("response_code"),
            latency_ms=latency_ms,
        ))
        return payload

    async def _recover(self, code: ResponseCode, deadline: Optional[float]) -> bool:
        """Recovering: performs the corrective action for a recoverable code.

        Returns False when no corrective action applies. Failures of the action
        itself propagate and end the fetch.
        """
        if code is ResponseCode.TOKEN_NOT_FOUND:
            logger.info("Session token unknown to the server; acquiring a new one.")
            self.event_sink(RecoveryTriggered(response_code=code, action="acquire"))
            await self.session_token.acquire(timeout=self._remaining(deadline))
            return True

        if code is ResponseCode.TOKEN_EMPTY:
            if not self.session_token.has():
                logger.debug("TokenEmpty reported while no token is held; nothing to reset.")
                return False
            logger.info("Session token exhausted; resetting it.")
            self.event_sink(RecoveryTriggered(response_code=code, action="reset"))
            await self.session_token.reset(timeout=self._remaining(deadline))
            return True

        return False

    def _remaining(self, deadline: Optional[float]) -> Optional[float]:
        if deadline is None:
            return None
        remaining = deadline - self.clock.monotonic()
        if remaining <= 0:
            raise DeadlineExceededError("Deadline expired before the request could be sent.")
        return remaining


def _parse_results(payload: JsonPayload) -> List[Question]:
    results = payload.get("results")
    if not isinstance(results, list):
        raise DecodeError("Success payload is missing its results list")
    try:
        return [Question.from_payload(item) for item in results]
    except (KeyError, TypeError) as e:
        raise DecodeError(f"Malformed question record: {e}") from e


def _failure_for(code: Optional[ResponseCode], raw_code: object) -> TriviaApiError:
    if code is ResponseCode.NO_RESULTS:
        return NoResultsError()
    if code is ResponseCode.INVALID_PARAMETER:
        return InvalidParameterError()
    if code is ResponseCode.TOKEN_NOT_FOUND:
        return TokenNotFoundError()
    if code is ResponseCode.TOKEN_EMPTY:
        return TokenEmptyError()
    if code is ResponseCode.RATE_LIMIT:
        return RateLimitExceededError()
    return UnknownResponseCodeError(raw_code)


def type_name(error: Exception) -> str:
    return error.__class__.__name__
