"""Application settings powered by Pydantic BaseSettings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hackmd_api.constants import (
    DEFAULT_API_ENDPOINT,
    DEFAULT_BASE_DELAY_MS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT_MS,
)
from hackmd_api.http.config import ClientConfig, RetryPolicy


class AppSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="", case_sensitive=False, env_file=".env", env_file_encoding="utf-8"
    )

    access_token: str | None = Field(
        default=None, validation_alias="HACKMD_ACCESS_TOKEN"
    )
    api_endpoint: str = Field(
        default=DEFAULT_API_ENDPOINT, validation_alias="HACKMD_API_ENDPOINT"
    )
    timeout_ms: int = Field(
        default=DEFAULT_TIMEOUT_MS, validation_alias="HACKMD_TIMEOUT_MS"
    )
    max_retries: int = Field(
        default=DEFAULT_MAX_RETRIES, validation_alias="HACKMD_MAX_RETRIES"
    )
    retry_base_delay_ms: int = Field(
        default=DEFAULT_BASE_DELAY_MS, validation_alias="HACKMD_RETRY_BASE_DELAY_MS"
    )

    def to_client_config(self) -> ClientConfig:
        """Build the client configuration from the environment."""
        return ClientConfig(
            access_token=self.access_token or "",
            api_endpoint=self.api_endpoint,
            timeout_ms=self.timeout_ms,
            retry_policy=RetryPolicy(
                max_retries=self.max_retries,
                base_delay_ms=self.retry_base_delay_ms,
            ),
        )


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
