"""Configuration models for the HTTP request pipeline."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from hackmd_api.constants import (
    DEFAULT_API_ENDPOINT,
    DEFAULT_BASE_DELAY_MS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT_MS,
)
from hackmd_api.http.backoff import backoff_delay_ms


class RetryPolicy(BaseModel):
    """Configuration for retry behavior.

    Uses exponential backoff: delay = base_delay_ms * 2 ^ attempt
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_retries: Annotated[int, Field(ge=0)] = DEFAULT_MAX_RETRIES
    base_delay_ms: Annotated[int, Field(gt=0)] = DEFAULT_BASE_DELAY_MS

    def get_delay_ms(self, attempt: int) -> int:
        """Calculate delay before the given retry attempt.

        Args:
            attempt: Retry attempt number (1 for the first retry).

        Returns:
            Delay in milliseconds.
        """
        return backoff_delay_ms(attempt, self.base_delay_ms)


class ClientConfig(BaseModel):
    """Configuration for a HackMD API client.

    Immutable after construction. The access token is checked by the
    dispatcher so that a missing token raises ``MissingArgumentError``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    access_token: str = ""
    api_endpoint: Annotated[str, Field(min_length=1)] = DEFAULT_API_ENDPOINT
    timeout_ms: Annotated[int, Field(gt=0)] | None = DEFAULT_TIMEOUT_MS
    wrap_response_errors: bool = True
    retry_policy: RetryPolicy | None = Field(
        default_factory=RetryPolicy,
        description="Retry settings, None disables retries",
    )

    @property
    def timeout_seconds(self) -> float | None:
        """Per-attempt transport timeout in seconds."""
        if self.timeout_ms is None:
            return None
        return self.timeout_ms / 1000.0
