"""Error types for the HackMD client.

Every error raised by the library is a ``HackMDError`` tagged with an
``ErrorKind``. Each variant carries only the fields of its own kind:

- MISSING_ARGUMENT: client constructed without a required argument
- SERVER_ERROR: 5xx response from the API
- RATE_LIMITED: 429 response, with the parsed rate limit quota
- HTTP_ERROR: any other failure status

Network-level failures (no response at all) are not wrapped; the original
``httpx.TransportError`` propagates to the caller.
"""

from enum import Enum


ErrorDetail = str | int | None


class ErrorKind(str, Enum):
    """Classification tag of a HackMD error."""

    MISSING_ARGUMENT = "MISSING_ARGUMENT"
    SERVER_ERROR = "SERVER_ERROR"
    RATE_LIMITED = "RATE_LIMITED"
    HTTP_ERROR = "HTTP_ERROR"


class HackMDError(Exception):
    """Base exception for all HackMD client errors."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, ErrorDetail]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {"kind": self.kind.value, "message": self.message}


class MissingArgumentError(HackMDError):
    """Raised at construction time when a required argument is missing."""

    kind = ErrorKind.MISSING_ARGUMENT

    def __init__(self, message: str, argument: str) -> None:
        super().__init__(message)
        self.argument = argument

    def to_dict(self) -> dict[str, ErrorDetail]:
        result = super().to_dict()
        result["argument"] = self.argument
        return result


class ServerError(HackMDError):
    """The API answered with a 5xx status."""

    kind = ErrorKind.SERVER_ERROR

    def __init__(self, message: str, status: int, status_text: str) -> None:
        super().__init__(message)
        self.status = status
        self.status_text = status_text

    def to_dict(self) -> dict[str, ErrorDetail]:
        result = super().to_dict()
        result["status"] = self.status
        result["status_text"] = self.status_text
        return result


class RateLimitedError(HackMDError):
    """The API answered with 429 Too Many Requests.

    Attributes:
        user_limit: Value of ``x-ratelimit-userlimit``, if parseable.
        user_remaining: Value of ``x-ratelimit-userremaining``, if parseable.
        reset_after: Value of ``x-ratelimit-userreset``, if parseable.
    """

    kind = ErrorKind.RATE_LIMITED

    def __init__(  # noqa: PLR0913
        self,
        message: str,
        status: int,
        status_text: str,
        user_limit: int | None,
        user_remaining: int | None,
        reset_after: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.status_text = status_text
        self.user_limit = user_limit
        self.user_remaining = user_remaining
        self.reset_after = reset_after

    def to_dict(self) -> dict[str, ErrorDetail]:
        result = super().to_dict()
        result["status"] = self.status
        result["status_text"] = self.status_text
        result["user_limit"] = self.user_limit
        result["user_remaining"] = self.user_remaining
        result["reset_after"] = self.reset_after
        return result


class HttpResponseError(HackMDError):
    """The API answered with a non-retryable failure status."""

    kind = ErrorKind.HTTP_ERROR

    def __init__(self, message: str, status: int, status_text: str) -> None:
        super().__init__(message)
        self.status = status
        self.status_text = status_text

    def to_dict(self) -> dict[str, ErrorDetail]:
        result = super().to_dict()
        result["status"] = self.status
        result["status_text"] = self.status_text
        return result
