"""HTTP and API constants for the HackMD client.

Centralizes status ranges, header names and defaults used across modules.
"""

DEFAULT_API_ENDPOINT = "https://api.hackmd.io/v1"
DEFAULT_HACKMD_HOST = "https://hackmd.io"
DEFAULT_TIMEOUT_MS = 30000
DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY_MS = 100
USER_AGENT = "hackmd-api-python/0.1.0"

# HTTP Status Code Ranges
HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 300
HTTP_STATUS_NOT_MODIFIED = 304
HTTP_STATUS_TOO_MANY_REQUESTS = 429
HTTP_STATUS_SERVER_ERROR_MIN = 500
HTTP_STATUS_SERVER_ERROR_MAX = 600

# Rate limit headers sent by the API
HEADER_RATELIMIT_USER_LIMIT = "x-ratelimit-userlimit"
HEADER_RATELIMIT_USER_REMAINING = "x-ratelimit-userremaining"
HEADER_RATELIMIT_USER_RESET = "x-ratelimit-userreset"

HEADER_ETAG = "etag"
HEADER_IF_NONE_MATCH = "If-None-Match"
HEADER_AUTHORIZATION = "Authorization"
