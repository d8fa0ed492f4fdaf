"""Session token lifecycle against the token endpoint.

The server uses the token to avoid repeating questions already served under
it. The token string is held only in memory for the lifetime of the client.
"""

import logging
from typing import Optional

from triviacli.domain.exceptions import (
    NoTokenToResetError,
    TokenAcquisitionFailedError,
    TokenResetFailedError,
)
from triviacli.domain.models.common import SessionTokenValue
from triviacli.domain.models.trivia import ResponseCode
from triviacli.infrastructure.http.dispatcher import TOKEN_PATH, RequestDispatcher

logger = logging.getLogger(__name__)


class SessionToken:
    """Holds the optional session token and performs acquire/reset calls."""

    def __init__(self, dispatcher: RequestDispatcher, token: Optional[str] = None):
        self.dispatcher = dispatcher
        # Never stored as an empty string
        self._token: Optional[SessionTokenValue] = SessionTokenValue(token) if token else None

    def has(self) -> bool:
        return self._token is not None

    def get(self) -> Optional[SessionTokenValue]:
        return self._token

    def invalidate(self) -> None:
        """Forgets the token locally; the server is not contacted."""
        if self._token is not None:
            logger.info(f"Invalidating session token {_short(self._token)}.")
        self._token = None

    async def acquire(self, *, timeout: Optional[float] = None) -> SessionTokenValue:
        """Requests a fresh token and stores it.

        Raises:
            TokenAcquisitionFailedError: If the server does not hand out a token.
            NetworkError: On transport or decoding failure.
        """
        payload = await self.dispatcher.get_json(TOKEN_PATH, {"command": "request"}, timeout=timeout)
        code = payload.get("response_code")
        token = payload.get("token")

        if ResponseCode.from_raw(code) is ResponseCode.SUCCESS and isinstance(token, str) and token:
            self._token = SessionTokenValue(token)
            logger.info(f"Acquired session token {_short(self._token)}.")
            return self._token

        logger.warning(f"Token request refused with response_code={code!r}.")
        raise TokenAcquisitionFailedError(
            code if isinstance(code, int) and not isinstance(code, bool) else None,
            payload.get("response_message"),
        )

    async def reset(self, *, timeout: Optional[float] = None) -> SessionTokenValue:
        """Asks the server to forget which questions the current token has seen.

        The token string itself does not change.

        Raises:
            NoTokenToResetError: If no token is held (no network call is made).
            TokenResetFailedError: If the server refuses the reset.
            NetworkError: On transport or decoding failure.
        """
        if self._token is None:
            raise NoTokenToResetError()

        token = self._token
        payload = await self.dispatcher.get_json(
            TOKEN_PATH, {"command": "reset", "token": token}, timeout=timeout
        )
        code = payload.get("response_code")
        if ResponseCode.from_raw(code) is not ResponseCode.SUCCESS:
            logger.warning(f"Token reset refused with response_code={code!r}.")
            raise TokenResetFailedError(
                code if isinstance(code, int) and not isinstance(code, bool) else None,
                payload.get("response_message"),
            )

        logger.info(f"Reset session token {_short(token)}.")
        return token


def _short(token: str) -> str:
    return f"{token[:6]}..."
