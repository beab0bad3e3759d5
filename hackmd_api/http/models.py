"""Data models for the HTTP request pipeline."""

from dataclasses import dataclass
from typing import Annotated, Any, Literal

import httpx
from pydantic import BaseModel, ConfigDict, Field

from hackmd_api.constants import (
    HEADER_ETAG,
    HTTP_STATUS_NOT_MODIFIED,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
)


HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]


class RequestDescriptor(BaseModel):
    """Description of one logical API call.

    Built per call by the endpoint methods and handed to the dispatcher.
    A retried request is re-issued from the same descriptor.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    method: HttpMethod
    path: Annotated[str, Field(min_length=1, description="Path relative to endpoint")]
    body: dict[str, Any] | None = None
    extra_headers: dict[str, str] = Field(default_factory=dict)
    unwrap_data: bool = True
    etag: str | None = Field(
        default=None, description="Sent as If-None-Match; 304 becomes a success"
    )
    include_etag_in_result: bool = False

    def accepts_status(self, status_code: int) -> bool:
        """Check whether a status code counts as a successful outcome.

        Args:
            status_code: HTTP status code of the response.

        Returns:
            True for 2xx, and for 304 when a conditional request was made.
        """
        if HTTP_STATUS_OK_MIN <= status_code < HTTP_STATUS_OK_MAX:
            return True
        return self.etag is not None and status_code == HTTP_STATUS_NOT_MODIFIED


@dataclass(frozen=True)
class AttemptOutcome:
    """Result of a single request attempt.

    Exactly one of ``response`` and ``error`` is set. ``error`` holds a
    transport failure where no response was received at all.
    """

    response: httpx.Response | None = None
    error: httpx.TransportError | None = None
    succeeded: bool = False

    @property
    def status_code(self) -> int | None:
        """Status code of the response, if there is one."""
        if self.response is None:
            return None
        return self.response.status_code


@dataclass(frozen=True)
class RawResponse:
    """Untouched transport response returned when ``unwrap_data`` is False.

    Attributes:
        status: HTTP status code.
        status_text: Reason phrase of the status.
        headers: Case-insensitive response headers.
        data: Decoded body, None when the body is empty.
        http_response: The underlying httpx response.
    """

    status: int
    status_text: str
    headers: httpx.Headers
    data: Any
    http_response: httpx.Response

    @property
    def etag(self) -> str | None:
        """ETag header of the response, if present."""
        return self.headers.get(HEADER_ETAG)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "RawResponse":
        """Create from an httpx response."""
        return cls(
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=response.headers,
            data=decode_body(response),
            http_response=response,
        )


Envelope = dict[str, Any] | list[Any] | str | RawResponse | None


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body.

    Args:
        response: HTTP response.

    Returns:
        Parsed JSON, the body text if it is not JSON, or None when empty.
    """
    if response.status_code == HTTP_STATUS_NOT_MODIFIED or not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
