"""Request metrics for a HackMD API client."""

from dataclasses import dataclass, field


@dataclass
class ClientMetrics:
    """Counters for one client instance.

    Tracks attempts by status code, retries, conditional-request hits and
    terminal failures by error kind.
    """

    requests_total: dict[int, int] = field(default_factory=dict)
    not_modified_total: int = 0
    retry_total: int = 0
    failures_total: dict[str, int] = field(default_factory=dict)
    network_errors_total: int = 0

    def record_request(self, status_code: int) -> None:
        """Record a completed HTTP attempt.

        Args:
            status_code: HTTP status code.
        """
        self.requests_total[status_code] = self.requests_total.get(status_code, 0) + 1

    def record_not_modified(self) -> None:
        """Record a 304 answer to a conditional request."""
        self.not_modified_total += 1

    def record_network_error(self) -> None:
        self.network_errors_total += 1

    def record_retry(self) -> None:
        self.retry_total += 1

    def record_failure(self, kind: str) -> None:
        """Record a failure surfaced to the caller.

        Args:
            kind: Error kind, or "NETWORK" for transport failures.
        """
        self.failures_total[kind] = self.failures_total.get(kind, 0) + 1

    def to_dict(self) -> dict[str, int | dict[str, int] | dict[int, int]]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "requests_total": dict(self.requests_total),
            "not_modified_total": self.not_modified_total,
            "retry_total": self.retry_total,
            "failures_total": dict(self.failures_total),
            "network_errors_total": self.network_errors_total,
        }
