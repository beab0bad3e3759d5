"""Unit tests for header redaction."""

from hackmd_api.http.redact import REDACTED_VALUE, redact_headers


class TestRedactHeaders:
    """Tests for redact_headers."""

    def test_authorization_redacted(self) -> None:
        """Test that the bearer token never reaches the logs."""
        result = redact_headers({"Authorization": "Bearer secret-token"})

        assert result == {"Authorization": REDACTED_VALUE}

    def test_case_insensitive(self) -> None:
        result = redact_headers({"COOKIE": "session=1", "set-cookie": "a=b"})

        assert result == {"COOKIE": REDACTED_VALUE, "set-cookie": REDACTED_VALUE}

    def test_other_headers_kept(self) -> None:
        headers = {"If-None-Match": 'W/"abc"', "Content-Type": "application/json"}

        assert redact_headers(headers) == headers

    def test_original_not_modified(self) -> None:
        headers = {"Authorization": "Bearer secret-token"}

        redact_headers(headers)

        assert headers["Authorization"] == "Bearer secret-token"
