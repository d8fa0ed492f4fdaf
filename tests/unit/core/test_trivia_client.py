import asyncio
import time

import pytest

from triviacli.core.client import TriviaClient
from triviacli.domain.exceptions import DeadlineExceededError
from triviacli.infrastructure.config.settings import set_config_for_testing

from tests.fakes import FakeBank, SlowTransport, questions_response


def test_from_settings_uses_configuration():
    set_config_for_testing({
        "api.base_url": "https://bank.example/",
        "api.rate_limit_seconds": 1.5,
        "http.user_agent": "tests/2.0",
    })

    client = TriviaClient.from_settings(token="T1")

    assert str(client.http_client.base_url).rstrip("/") == "https://bank.example"
    assert client.http_client.headers["User-Agent"] == "tests/2.0"
    assert client.rate_limiter.min_interval == 1.5
    assert client.token == "T1"
    asyncio.run(client.aclose())


def test_context_manager_closes_http_client():
    bank = FakeBank()
    bank.queue("/api.php", questions_response(1))

    async def scenario():
        async with TriviaClient.from_settings(transport=bank.transport) as client:
            await client.get_questions(1)
        return client

    client = asyncio.run(scenario())

    assert client.http_client.is_closed
    assert len(bank.requests) == 1


def test_clear_token_is_local(make_client, bank):
    client = make_client(token="T1")
    client.clear_token()

    assert not client.has_token()
    assert bank.requests == []


def test_request_token_honours_timeout(make_client, bank):
    bank.queue("/api_token.php", {"response_code": 0, "token": "T2"})
    client = make_client(transport=SlowTransport(bank, {"/api_token.php": 1.0}))

    started = time.monotonic()
    with pytest.raises(DeadlineExceededError):
        asyncio.run(client.request_token(timeout=0.2))

    assert time.monotonic() - started < 0.8
    assert not client.has_token()


def test_reset_token_without_timeout(make_client, bank):
    bank.queue("/api_token.php", {"response_code": 0})
    client = make_client(token="T1")

    assert asyncio.run(client.reset_token()) == "T1"
    assert bank.calls("/api_token.php") == [{"command": "reset", "token": "T1"}]
