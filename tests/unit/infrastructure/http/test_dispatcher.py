import asyncio

import httpx
import pytest

from triviacli.domain.exceptions import DecodeError, NetworkError
from triviacli.infrastructure.http.dispatcher import (
    QUESTIONS_PATH,
    RequestDispatcher,
    _redact,
    build_async_client,
)

from tests.fakes import BASE_URL


@pytest.fixture
def dispatcher(bank):
    return RequestDispatcher(build_async_client(BASE_URL, timeout=3.0, user_agent="tests/1.0", transport=bank.transport))


def test_build_async_client_defaults(bank):
    client = build_async_client(BASE_URL, timeout=3.0, user_agent="tests/1.0", transport=bank.transport)

    assert str(client.base_url).rstrip("/") == BASE_URL
    assert client.headers["User-Agent"] == "tests/1.0"
    assert client.timeout.read == 3.0
    assert client.follow_redirects is True


def test_get_json_sends_params_and_headers(dispatcher, bank):
    bank.queue(QUESTIONS_PATH, {"response_code": 0, "results": []})

    payload = asyncio.run(dispatcher.get_json(QUESTIONS_PATH, {"amount": "3"}))

    assert payload == {"response_code": 0, "results": []}
    request = bank.requests[0]
    assert request.url.params["amount"] == "3"
    assert request.headers["Accept"] == "application/json"


def test_per_call_timeout_overrides_default(dispatcher, bank):
    bank.queue(QUESTIONS_PATH, {"response_code": 0})

    asyncio.run(dispatcher.get_json(QUESTIONS_PATH, timeout=1.5))

    assert bank.requests[0].extensions["timeout"]["read"] == 1.5


def test_timeout_maps_to_network_error(dispatcher, bank):
    bank.queue(QUESTIONS_PATH, httpx.ReadTimeout)

    with pytest.raises(NetworkError, match="timed out"):
        asyncio.run(dispatcher.get_json(QUESTIONS_PATH))


def test_non_success_status_is_network_error(dispatcher, bank):
    bank.queue(QUESTIONS_PATH, httpx.Response(429, json={"response_code": 5}))

    with pytest.raises(NetworkError, match="429"):
        asyncio.run(dispatcher.get_json(QUESTIONS_PATH))


def test_malformed_json_is_decode_error(dispatcher, bank):
    bank.queue(QUESTIONS_PATH, httpx.Response(200, text="{not json"))

    with pytest.raises(DecodeError):
        asyncio.run(dispatcher.get_json(QUESTIONS_PATH))


def test_decode_error_is_a_network_error(dispatcher, bank):
    bank.queue(QUESTIONS_PATH, httpx.Response(200, json=[1, 2, 3]))

    with pytest.raises(NetworkError):
        asyncio.run(dispatcher.get_json(QUESTIONS_PATH))


def test_redact_shortens_token():
    assert _redact({"amount": "1", "token": "0123456789abcdef"}) == {"amount": "1", "token": "012345..."}
    assert _redact(None) == {}
