"""HTTP test doubles for the HackMD client."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from hackmd_api.client import HackMDAPI
from hackmd_api.http.config import ClientConfig, RetryPolicy


TEST_TOKEN = "test-token"  # noqa: S105
API_BASE = "https://api.hackmd.io/v1"


@dataclass(frozen=True)
class Reply:
    """Recipe for a mocked response; a fresh response is built per request."""

    status_code: int = 200
    json: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    def build(self) -> httpx.Response:
        if self.json is None:
            return httpx.Response(self.status_code, headers=self.headers)
        return httpx.Response(self.status_code, json=self.json, headers=self.headers)


@dataclass(frozen=True)
class Fail:
    """Recipe for a transport failure."""

    error_type: type[httpx.TransportError] = httpx.ConnectError
    message: str = "Connection refused"


class ScriptedHandler:
    """Mock transport handler answering with scripted replies in order.

    The last reply is repeated once the script is exhausted. Every request
    is recorded.
    """

    def __init__(self, *script: Reply | Fail) -> None:
        self._script = list(script) or [Reply()]
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        step = self._script.pop(0) if len(self._script) > 1 else self._script[0]
        if isinstance(step, Fail):
            raise step.error_type(step.message, request=request)
        return step.build()

    @property
    def call_count(self) -> int:
        return len(self.requests)


class RecordingSleep:
    """Async sleep replacement that records delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)

    @property
    def delays_ms(self) -> list[int]:
        return [round(d * 1000) for d in self.delays]


def make_api(
    handler: Callable[[httpx.Request], httpx.Response],
    *,
    retry_policy: RetryPolicy | None = None,
    wrap_response_errors: bool = True,
    sleep: RecordingSleep | None = None,
) -> HackMDAPI:
    """Create a client backed by a mock transport.

    Args:
        handler: Mock transport handler.
        retry_policy: Retry policy, defaults to 3 retries with 100ms base.
        wrap_response_errors: Whether failures are classified.
        sleep: Recorder for backoff delays.

    Returns:
        A HackMDAPI client that never touches the network.
    """
    config = ClientConfig(
        access_token=TEST_TOKEN,
        wrap_response_errors=wrap_response_errors,
        retry_policy=retry_policy or RetryPolicy(max_retries=3, base_delay_ms=100),
    )
    return HackMDAPI(
        config=config,
        transport=httpx.MockTransport(handler),
        sleep=sleep or RecordingSleep(),
    )
