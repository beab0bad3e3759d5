"""Exponential backoff for retried requests."""


def backoff_delay_ms(attempt: int, base_delay_ms: int) -> int:
    """Calculate the delay before a retry attempt.

    delay = base_delay_ms * 2 ^ attempt, without jitter. The first retry
    uses attempt 1.

    Args:
        attempt: Retry attempt number (1 for the first retry).
        base_delay_ms: Base delay in milliseconds.

    Returns:
        Delay in milliseconds.
    """
    return base_delay_ms * (2**attempt)
