"""Error taxonomy for the trivia client.

Every failure outcome is a subclass of TriviaApiError and carries the response
code that produced it (when the server sent one) so the presentation layer can
render a specific message.
"""

from typing import Optional

from triviacli.domain.models.trivia import ResponseCode


class TriviaApiError(Exception):
    """Base error for all trivia client failures."""

    def __init__(
        self,
        message: str,
        response_code: Optional[int] = None,
        response_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.response_code = response_code
        self.response_message = response_message

    def __str__(self) -> str:
        if self.response_message:
            return f"{self.message} ({self.response_message})"
        return self.message


# --- Transport ---

class NetworkError(TriviaApiError):
    """Transport failure or non-success HTTP status. Never retried by the client."""


class DecodeError(NetworkError):
    """The body could not be decoded into the expected JSON object."""


class DeadlineExceededError(TriviaApiError):
    """The caller's deadline expired before the fetch could complete."""


# --- Question endpoint outcomes ---

class NoResultsError(TriviaApiError):
    def __init__(self, message: str = "No results found for the specified query parameters"):
        super().__init__(message, ResponseCode.NO_RESULTS)


class InvalidParameterError(TriviaApiError):
    def __init__(self, message: str = "Invalid parameter provided"):
        super().__init__(message, ResponseCode.INVALID_PARAMETER)


class TokenNotFoundError(TriviaApiError):
    def __init__(self, message: str = "Session token not found. Please request a new token."):
        super().__init__(message, ResponseCode.TOKEN_NOT_FOUND)


class NoTokenToResetError(TokenNotFoundError):
    """Reset was requested while no session token is held."""

    def __init__(self, message: str = "No token to reset"):
        super().__init__(message)


class TokenEmptyError(TriviaApiError):
    def __init__(
        self,
        message: str = "Session token has returned all possible questions. Reset the token to continue.",
    ):
        super().__init__(message, ResponseCode.TOKEN_EMPTY)


class RateLimitExceededError(TriviaApiError):
    def __init__(
        self,
        message: str = "Rate limit exceeded. Please wait 5 seconds before making another request.",
    ):
        super().__init__(message, ResponseCode.RATE_LIMIT)


class UnknownResponseCodeError(TriviaApiError):
    """The server answered with a code outside the known taxonomy."""

    def __init__(self, raw_code: object):
        super().__init__(f"Unknown response code: {raw_code!r}")
        self.response_code = raw_code if isinstance(raw_code, int) and not isinstance(raw_code, bool) else None
        self.raw_code = raw_code


# --- Token endpoint outcomes ---

class TokenAcquisitionFailedError(TriviaApiError):
    def __init__(self, response_code: Optional[int], response_message: Optional[str] = None):
        super().__init__("Failed to retrieve session token", response_code, response_message)


class TokenResetFailedError(TriviaApiError):
    def __init__(self, response_code: Optional[int], response_message: Optional[str] = None):
        super().__init__("Failed to reset token", response_code, response_message)
