import asyncio
from collections import defaultdict
from typing import Any, Dict, List, Optional

import httpx

from triviacli.domain.interfaces.clock import Clock

BASE_URL = "https://opentdb.test"


class FakeClock(Clock):
    """Deterministic clock: sleeping advances time instantly and is recorded."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []

    def monotonic(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        # Yield so concurrent fetches can interleave like they would on a real loop
        await asyncio.sleep(0)

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeBank:
    """Scripted question bank behind an httpx.MockTransport.

    Responses are queued per path and served in order. A queued item may be a
    JSON-able dict, a ready httpx.Response, or an exception class/instance.
    """

    def __init__(self, clock: Optional[FakeClock] = None, latency: float = 0.0):
        self.clock = clock
        self.latency = latency
        self.responses: Dict[str, List[Any]] = defaultdict(list)
        self.requests: List[httpx.Request] = []
        self.timeline: List[Dict[str, float]] = []

    def queue(self, path: str, *items: Any) -> "FakeBank":
        self.responses[path].extend(items)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        started = self.clock.now if self.clock else 0.0
        if self.clock and self.latency:
            self.clock.advance(self.latency)
        finished = self.clock.now if self.clock else 0.0
        self.timeline.append({"path": request.url.path, "started": started, "finished": finished})

        pending = self.responses[request.url.path]
        if not pending:
            raise AssertionError(f"Unexpected request to {request.url}")
        item = pending.pop(0)
        if isinstance(item, type) and issubclass(item, Exception):
            raise item("scripted failure", request=request)
        if isinstance(item, Exception):
            raise item
        if isinstance(item, httpx.Response):
            return item
        return httpx.Response(200, json=item)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, path: str) -> List[Dict[str, str]]:
        """Query params of every request made to path, in order."""
        return [dict(r.url.params) for r in self.requests if r.url.path == path]


class SlowTransport(httpx.AsyncBaseTransport):
    """Async transport that really sleeps before the bank answers.

    Delays are per path in wall-clock seconds; httpx timeouts do not apply to it.
    A request cancelled during its delay never reaches the bank.
    """

    def __init__(self, bank: FakeBank, delays: Dict[str, float]):
        self.bank = bank
        self.delays = delays

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(self.delays.get(request.url.path, 0.0))
        return self.bank.handler(request)


def question_payload(n: int, category: str = "General Knowledge", difficulty: str = "easy",
                     qtype: str = "multiple") -> Dict[str, Any]:
    return {
        "category": category,
        "type": qtype,
        "difficulty": difficulty,
        "question": f"Question {n}?",
        "correct_answer": f"Right {n}",
        "incorrect_answers": [f"Wrong {n}a", f"Wrong {n}b", f"Wrong {n}c"],
    }


def questions_response(count: int, code: int = 0, **kwargs: Any) -> Dict[str, Any]:
    return {"response_code": code, "results": [question_payload(i, **kwargs) for i in range(count)]}

