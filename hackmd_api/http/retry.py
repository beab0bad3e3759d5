"""Retry coordination for API requests.

A request chain is retried on transient failures (network errors, 5xx and
429) with exponential backoff, up to the policy's ceiling. Retry state lives
in the scope of a single ``run`` call, so concurrent chains sharing one
client never see each other's attempt counters.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import httpx
import structlog

from hackmd_api.constants import (
    HEADER_RATELIMIT_USER_REMAINING,
    HTTP_STATUS_SERVER_ERROR_MAX,
    HTTP_STATUS_SERVER_ERROR_MIN,
    HTTP_STATUS_TOO_MANY_REQUESTS,
)
from hackmd_api.errors import HackMDError
from hackmd_api.http.config import RetryPolicy
from hackmd_api.http.interceptors import ResponseInterceptorChain, parse_int_header
from hackmd_api.http.metrics import ClientMetrics
from hackmd_api.http.models import AttemptOutcome


logger = structlog.get_logger()

SendAttempt = Callable[[], Awaitable[AttemptOutcome]]
Sleep = Callable[[float], Awaitable[None]]


@dataclass
class RetryState:
    """Retry bookkeeping for one logical request chain."""

    attempt_count: int = 0


def is_retryable(outcome: AttemptOutcome) -> bool:
    """Check whether a failed outcome is transient.

    Args:
        outcome: The failed attempt.

    Returns:
        True for network failures, 5xx and 429 responses.
    """
    status = outcome.status_code
    if status is None:
        return True
    return (
        HTTP_STATUS_SERVER_ERROR_MIN <= status < HTTP_STATUS_SERVER_ERROR_MAX
        or status == HTTP_STATUS_TOO_MANY_REQUESTS
    )


def remaining_quota(outcome: AttemptOutcome) -> int | None:
    """Read the remaining rate limit quota from a failed outcome.

    Returns:
        The parsed ``x-ratelimit-userremaining`` value, or None if unknown.
    """
    if outcome.response is None:
        return None
    return parse_int_header(outcome.response.headers, HEADER_RATELIMIT_USER_REMAINING)


class RetryCoordinator:
    """Runs a request chain, retrying transient failures.

    On a terminal failure the outcome is handed to the interceptor chain and
    the resulting exception is raised.
    """

    def __init__(
        self,
        policy: RetryPolicy | None,
        interceptors: ResponseInterceptorChain,
        *,
        sleep: Sleep = asyncio.sleep,
        metrics: ClientMetrics | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            policy: Retry policy, None disables retries.
            interceptors: Classifies terminal failures.
            sleep: Awaitable used for the backoff wait, in seconds.
            metrics: Counters to update.
        """
        self._policy = policy
        self._interceptors = interceptors
        self._sleep = sleep
        self._metrics = metrics or ClientMetrics()
        self._log = logger.bind(component="http", subcomponent="retry")

    def should_retry(self, outcome: AttemptOutcome, state: RetryState) -> bool:
        """Decide whether a failed outcome is retried.

        Args:
            outcome: The failed attempt.
            state: Retry state of the current chain.

        Returns:
            True if another attempt should be made.
        """
        if self._policy is None or state.attempt_count >= self._policy.max_retries:
            return False
        if not is_retryable(outcome):
            return False
        remaining = remaining_quota(outcome)
        return remaining is None or remaining > 0

    async def run(self, send: SendAttempt) -> httpx.Response:
        """Run a request chain to a terminal outcome.

        Args:
            send: Issues one attempt of the request.

        Returns:
            The successful response.

        Raises:
            HackMDError: Classified failure, when error wrapping is enabled.
            httpx.HTTPStatusError: Failure response, when wrapping is disabled.
            httpx.TransportError: Network failure after the last attempt.
        """
        state = RetryState()

        while True:
            outcome = await send()
            if outcome.succeeded and outcome.response is not None:
                return outcome.response

            if not self.should_retry(outcome, state):
                raise self._fail(outcome, state)

            state.attempt_count += 1
            delay_ms = self._delay_ms(state.attempt_count)
            self._metrics.record_retry()
            self._log.warning(
                "request_retry",
                attempt=state.attempt_count,
                delay_ms=delay_ms,
                status_code=outcome.status_code,
                error=str(outcome.error) if outcome.error else None,
            )
            await self._sleep(delay_ms / 1000.0)

    def _delay_ms(self, attempt: int) -> int:
        if self._policy is None:
            return 0
        return self._policy.get_delay_ms(attempt)

    def _fail(self, outcome: AttemptOutcome, state: RetryState) -> Exception:
        error = self._interceptors.to_exception(outcome)
        if isinstance(error, HackMDError):
            kind = error.kind.value
        elif outcome.response is None:
            kind = "NETWORK"
        else:
            kind = "UNWRAPPED"
        self._metrics.record_failure(kind)
        self._log.info(
            "request_failed",
            attempts=state.attempt_count + 1,
            status_code=outcome.status_code,
            kind=kind,
        )
        return error
