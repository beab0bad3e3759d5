"""HTTP request pipeline for the HackMD API.

This module provides the request path shared by every endpoint:
- Bearer token injection
- ETag conditional requests with 304 handled as success
- Exponential backoff retries aware of the rate limit quota
- Classification of failure responses into HackMD errors
- Response unwrapping with optional status/etag merge
"""

from hackmd_api.http.backoff import backoff_delay_ms
from hackmd_api.http.config import ClientConfig, RetryPolicy
from hackmd_api.http.dispatcher import RequestDispatcher
from hackmd_api.http.interceptors import (
    DEFAULT_CLASSIFIERS,
    ResponseInterceptorChain,
    classify_http_error,
    classify_rate_limited,
    classify_server_error,
    parse_int_header,
)
from hackmd_api.http.metrics import ClientMetrics
from hackmd_api.http.models import (
    AttemptOutcome,
    Envelope,
    RawResponse,
    RequestDescriptor,
    decode_body,
)
from hackmd_api.http.redact import redact_headers
from hackmd_api.http.retry import RetryCoordinator, RetryState, is_retryable


__all__ = [
    # Dispatcher
    "RequestDispatcher",
    # Config
    "ClientConfig",
    "RetryPolicy",
    # Models
    "AttemptOutcome",
    "Envelope",
    "RawResponse",
    "RequestDescriptor",
    "decode_body",
    # Retry
    "RetryCoordinator",
    "RetryState",
    "backoff_delay_ms",
    "is_retryable",
    # Interceptors
    "DEFAULT_CLASSIFIERS",
    "ResponseInterceptorChain",
    "classify_http_error",
    "classify_rate_limited",
    "classify_server_error",
    "parse_int_header",
    # Observability
    "ClientMetrics",
    "redact_headers",
]
