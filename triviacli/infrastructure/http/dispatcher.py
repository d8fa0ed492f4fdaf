"""Performs single GET requests against the question bank and decodes the JSON envelope.

Hides httpx behind one method so services deal only in decoded payloads and
the client's own error types. Response codes inside the payload are not
interpreted here.
"""

import json
import logging
from typing import Mapping, Optional

import httpx

from triviacli.domain.exceptions import DecodeError, NetworkError
from triviacli.domain.models.common import EndpointPath, JsonPayload

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://opentdb.com"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_USER_AGENT = "triviacli/0.1"

# Endpoint paths
TOKEN_PATH = EndpointPath("/api_token.php")
QUESTIONS_PATH = EndpointPath("/api.php")
CATEGORIES_PATH = EndpointPath("/api_category.php")
CATEGORY_COUNT_PATH = EndpointPath("/api_count.php")
GLOBAL_COUNT_PATH = EndpointPath("/api_count_global.php")


def build_async_client(
    base_url: str = DEFAULT_BASE_URL,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    user_agent: str = DEFAULT_USER_AGENT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Creates an `httpx.AsyncClient` with the defaults every endpoint shares."""
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
        headers={"User-Agent": user_agent, "Accept": "application/json"},
        transport=transport,
    )


class RequestDispatcher:
    """Issues one GET per call and returns the decoded JSON object."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def get_json(
        self,
        path: EndpointPath,
        params: Optional[Mapping[str, str]] = None,
        *,
        timeout: Optional[float] = None,
    ) -> JsonPayload:
        """Sends a GET and decodes the body.

        Args:
            path: Endpoint path relative to the base URL.
            params: Query parameters, sent as given.
            timeout: Per-call timeout in seconds, overriding the client default.

        Returns:
            The decoded JSON object.

        Raises:
            NetworkError: On transport failure or a non-2xx status.
            DecodeError: If the body is not a JSON object.
        """
        extra = {"timeout": httpx.Timeout(timeout)} if timeout is not None else {}
        logger.debug(f"GET {path} params={_redact(params)}")
        try:
            response = await self.client.get(path, params=dict(params or {}), **extra)
        except httpx.TimeoutException as e:
            logger.warning(f"Timed out calling {path}: {e}")
            raise NetworkError(f"Request to {path} timed out") from e
        except httpx.HTTPError as e:
            logger.warning(f"Transport error calling {path}: {type(e).__name__} - {e}")
            raise NetworkError(f"Network error while calling {path}: {e}") from e

        if not response.is_success:
            logger.warning(f"{path} answered HTTP {response.status_code}")
            raise NetworkError(f"{path} answered HTTP {response.status_code}")

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Malformed JSON from {path}: {e}")
            raise DecodeError(f"Malformed JSON from {path}") from e

        if not isinstance(payload, dict):
            logger.error(f"Unexpected JSON shape from {path}: {type(payload).__name__}")
            raise DecodeError(f"Expected a JSON object from {path}, got {type(payload).__name__}")
        return payload


def _redact(params: Optional[Mapping[str, str]]) -> dict:
    """Copies params for logging with the session token shortened."""
    shown = dict(params or {})
    token = shown.get("token")
    if token:
        shown["token"] = f"{token[:6]}..."
    return shown
