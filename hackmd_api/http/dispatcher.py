"""Request dispatcher shared by every API call."""

import asyncio
from types import TracebackType
from typing import Any

import httpx
import structlog

from hackmd_api.constants import (
    HEADER_AUTHORIZATION,
    HEADER_ETAG,
    HEADER_IF_NONE_MATCH,
    HTTP_STATUS_NOT_MODIFIED,
    USER_AGENT,
)
from hackmd_api.errors import MissingArgumentError
from hackmd_api.http.config import ClientConfig
from hackmd_api.http.interceptors import ResponseInterceptorChain
from hackmd_api.http.metrics import ClientMetrics
from hackmd_api.http.models import (
    AttemptOutcome,
    Envelope,
    RawResponse,
    RequestDescriptor,
    decode_body,
)
from hackmd_api.http.redact import redact_headers
from hackmd_api.http.retry import RetryCoordinator, Sleep


logger = structlog.get_logger()


class RequestDispatcher:
    """Executes API requests against the HackMD endpoint.

    Owns the ``httpx.AsyncClient`` and composes:
    - bearer token injection
    - conditional requests (If-None-Match, 304 as success)
    - retries with exponential backoff
    - error classification
    - response unwrapping with optional status/etag merge
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            config: Client configuration.
            transport: Optional transport, used to mock the API in tests.
            sleep: Awaitable used between retries.

        Raises:
            MissingArgumentError: If no access token is configured.
        """
        if not config.access_token:
            msg = "Missing access token when creating HackMD client"
            raise MissingArgumentError(msg, argument="access_token")

        self._config = config
        self._metrics = ClientMetrics()
        self._interceptors = ResponseInterceptorChain(config.wrap_response_errors)
        self._retry = RetryCoordinator(
            config.retry_policy,
            self._interceptors,
            sleep=sleep,
            metrics=self._metrics,
        )
        self._client = httpx.AsyncClient(
            base_url=config.api_endpoint,
            timeout=config.timeout_seconds,
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": USER_AGENT,
            },
            follow_redirects=True,
            transport=transport,
        )
        self._log = logger.bind(component="http", subcomponent="dispatcher")

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def metrics(self) -> ClientMetrics:
        return self._metrics

    async def __aenter__(self) -> "RequestDispatcher":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def execute(self, descriptor: RequestDescriptor) -> Envelope:
        """Execute a request and unwrap its response.

        Args:
            descriptor: The request to make.

        Returns:
            The decoded body, the body merged with ``status`` and ``etag``,
            or a ``RawResponse`` when ``unwrap_data`` is False.

        Raises:
            HackMDError: Classified failure, when error wrapping is enabled.
            httpx.HTTPStatusError: Failure response, when wrapping is disabled.
            httpx.TransportError: Network failure after the last attempt.
        """
        headers = self._build_headers(descriptor)

        async def send() -> AttemptOutcome:
            return await self._attempt(descriptor, headers)

        response = await self._retry.run(send)
        return self._unwrap(descriptor, response)

    def _build_headers(self, descriptor: RequestDescriptor) -> dict[str, str]:
        """Build per-request headers.

        The descriptor etag replaces any caller-supplied If-None-Match, and the
        Authorization header is set last so callers cannot override it.
        """
        headers = dict(descriptor.extra_headers)
        if descriptor.etag is not None:
            _replace_header(headers, HEADER_IF_NONE_MATCH, descriptor.etag)
        _replace_header(
            headers, HEADER_AUTHORIZATION, f"Bearer {self._config.access_token}"
        )
        return headers

    async def _attempt(
        self,
        descriptor: RequestDescriptor,
        headers: dict[str, str],
    ) -> AttemptOutcome:
        """Issue a single attempt of a request."""
        log = self._log.bind(
            method=descriptor.method,
            path=descriptor.path,
            headers=redact_headers(headers),
        )
        try:
            response = await self._client.request(
                descriptor.method,
                descriptor.path,
                json=descriptor.body,
                headers=headers,
            )
        except httpx.TransportError as exc:
            self._metrics.record_network_error()
            log.debug("request_transport_error", error=str(exc))
            return AttemptOutcome(error=exc)

        self._metrics.record_request(response.status_code)
        if response.status_code == HTTP_STATUS_NOT_MODIFIED:
            self._metrics.record_not_modified()
        log.debug("request_complete", status_code=response.status_code)

        return AttemptOutcome(
            response=response,
            succeeded=descriptor.accepts_status(response.status_code),
        )

    def _unwrap(
        self,
        descriptor: RequestDescriptor,
        response: httpx.Response,
    ) -> Envelope:
        if not descriptor.unwrap_data:
            return RawResponse.from_response(response)

        data = decode_body(response)
        if not descriptor.include_etag_in_result:
            return data

        result: dict[str, Any]
        if data is None:
            result = {}
        elif isinstance(data, dict):
            result = dict(data)
        else:
            result = {"data": data}
        result["status"] = response.status_code
        result["etag"] = response.headers.get(HEADER_ETAG)
        return result


def _replace_header(headers: dict[str, str], name: str, value: str) -> None:
    """Set a header, dropping every existing spelling of its name."""
    for key in [k for k in headers if k.lower() == name.lower()]:
        del headers[key]
    headers[name] = value
