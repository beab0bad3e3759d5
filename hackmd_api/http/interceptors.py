"""Classification of failed request outcomes into HackMD errors.

The chain is an ordered tuple of pure classifier functions. Each takes the
failed response and returns an error, or None to defer to the next one.
"""

from collections.abc import Callable, Sequence

import httpx

from hackmd_api.constants import (
    HEADER_RATELIMIT_USER_LIMIT,
    HEADER_RATELIMIT_USER_REMAINING,
    HEADER_RATELIMIT_USER_RESET,
    HTTP_STATUS_SERVER_ERROR_MIN,
    HTTP_STATUS_TOO_MANY_REQUESTS,
)
from hackmd_api.errors import (
    HackMDError,
    HttpResponseError,
    RateLimitedError,
    ServerError,
)
from hackmd_api.http.models import AttemptOutcome


Classifier = Callable[[httpx.Response], HackMDError | None]


def parse_int_header(headers: httpx.Headers, name: str) -> int | None:
    """Parse an integer header value.

    Args:
        headers: Response headers (case-insensitive).
        name: Header name.

    Returns:
        The parsed integer, or None if the header is absent or not an integer.
    """
    value = headers.get(name)
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def classify_server_error(response: httpx.Response) -> HackMDError | None:
    if response.status_code < HTTP_STATUS_SERVER_ERROR_MIN:
        return None
    return ServerError(
        f"HackMD internal error ({response.status_code} {response.reason_phrase})",
        status=response.status_code,
        status_text=response.reason_phrase,
    )


def classify_rate_limited(response: httpx.Response) -> HackMDError | None:
    if response.status_code != HTTP_STATUS_TOO_MANY_REQUESTS:
        return None
    return RateLimitedError(
        f"Too many requests ({response.status_code} {response.reason_phrase})",
        status=response.status_code,
        status_text=response.reason_phrase,
        user_limit=parse_int_header(response.headers, HEADER_RATELIMIT_USER_LIMIT),
        user_remaining=parse_int_header(
            response.headers, HEADER_RATELIMIT_USER_REMAINING
        ),
        reset_after=parse_int_header(response.headers, HEADER_RATELIMIT_USER_RESET),
    )


def classify_http_error(response: httpx.Response) -> HackMDError:
    return HttpResponseError(
        f"Received an error response ({response.status_code} "
        f"{response.reason_phrase}) from HackMD",
        status=response.status_code,
        status_text=response.reason_phrase,
    )


DEFAULT_CLASSIFIERS: tuple[Classifier, ...] = (
    classify_server_error,
    classify_rate_limited,
    classify_http_error,
)


class ResponseInterceptorChain:
    """Turns a failed outcome into the exception raised to the caller.

    Checked in order:
    - no response (network failure): the transport error, unmodified
    - error wrapping disabled: ``httpx.HTTPStatusError`` with the raw response
    - otherwise the first classifier that returns an error
    """

    def __init__(
        self,
        wrap_response_errors: bool = True,
        classifiers: Sequence[Classifier] = DEFAULT_CLASSIFIERS,
    ) -> None:
        self._wrap_response_errors = wrap_response_errors
        self._classifiers = tuple(classifiers)

    @property
    def wraps_errors(self) -> bool:
        return self._wrap_response_errors

    def to_exception(self, outcome: AttemptOutcome) -> Exception:
        """Build the exception for a failed outcome.

        Args:
            outcome: The failed attempt.

        Returns:
            Exception to raise.

        Raises:
            ValueError: If the outcome has neither response nor error.
        """
        response = outcome.response
        if response is None:
            if outcome.error is None:
                msg = "Outcome carries neither a response nor an error"
                raise ValueError(msg)
            return outcome.error

        if not self._wrap_response_errors:
            return httpx.HTTPStatusError(
                f"Received an error response ({response.status_code} "
                f"{response.reason_phrase})",
                request=response.request,
                response=response,
            )

        for classify in self._classifiers:
            error = classify(response)
            if error is not None:
                return error

        return classify_http_error(response)
