"""Integration tests for conditional requests and retries over real HTTP."""

import json
import threading
from collections.abc import Generator
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import cast

import httpx
import pytest

from hackmd_api.client import HackMDAPI
from hackmd_api.errors import RateLimitedError
from hackmd_api.http.config import ClientConfig, RetryPolicy
from tests.helpers.http import TEST_TOKEN, RecordingSleep


def get_api_endpoint(server: HTTPServer) -> str:
    """Get the API endpoint URL for a test server.

    Args:
        server: The HTTP server instance.

    Returns:
        Base URL of the fake API.
    """
    host, port = server.server_address[0], server.server_address[1]
    if isinstance(host, bytes):
        host = host.decode("utf-8")
    return f"http://{host}:{port}/v1"


def make_client(server: HTTPServer, sleep: RecordingSleep, max_retries: int = 3) -> HackMDAPI:
    config = ClientConfig(
        access_token=TEST_TOKEN,
        api_endpoint=get_api_endpoint(server),
        retry_policy=RetryPolicy(max_retries=max_retries, base_delay_ms=100),
    )
    # Explicit transport keeps environment proxies out of the way
    return HackMDAPI(config=config, transport=httpx.AsyncHTTPTransport(), sleep=sleep)


class RecordingHTTPServer(HTTPServer):
    """HTTP server recording the Authorization header of each request."""

    def __init__(
        self,
        server_address: tuple[str, int],
        handler: type[BaseHTTPRequestHandler],
    ) -> None:
        super().__init__(server_address, handler)
        self.seen_authorization: list[str] = []


class NoteHandler(BaseHTTPRequestHandler):
    """Serves a single note with ETag support."""

    etag: str = 'W/"abc123"'
    note: bytes = json.dumps({"id": "n1", "title": "Cached", "content": "# Hi"}).encode()

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        """Suppress log messages during tests."""

    def do_GET(self) -> None:  # noqa: N802
        """Answer 304 when the client already holds the current version."""
        server = cast(RecordingHTTPServer, self.server)
        server.seen_authorization.append(self.headers.get("Authorization", ""))
        if self.path != "/v1/notes/n1":
            self.send_response(404)
            self.end_headers()
            return

        if self.headers.get("If-None-Match") == self.etag:
            self.send_response(304)
            self.send_header("ETag", self.etag)
            self.end_headers()
            return

        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(self.note)))
        self.send_header("ETag", self.etag)
        self.end_headers()
        self.wfile.write(self.note)


class FlakyHandler(BaseHTTPRequestHandler):
    """Returns 503 for the first N requests, then the user."""

    request_count: int = 0
    error_count: int = 2

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        """Suppress log messages during tests."""

    def do_GET(self) -> None:  # noqa: N802
        FlakyHandler.request_count += 1

        if FlakyHandler.request_count <= FlakyHandler.error_count:
            self.send_response(503)
            self.send_header("Content-Type", "text/plain")
            self.end_headers()
            self.wfile.write(b"Service Unavailable")
            return

        body = json.dumps({"id": "u1", "name": "Ada"}).encode()
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)


class ExhaustedQuotaHandler(BaseHTTPRequestHandler):
    """Always answers 429 with no quota left."""

    request_count: int = 0

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        """Suppress log messages during tests."""

    def do_GET(self) -> None:  # noqa: N802
        ExhaustedQuotaHandler.request_count += 1
        self.send_response(429)
        self.send_header("Content-Type", "text/plain")
        self.send_header("X-RateLimit-UserLimit", "100")
        self.send_header("X-RateLimit-UserRemaining", "0")
        self.end_headers()
        self.wfile.write(b"Too Many Requests")


def _serve(
    handler: type[BaseHTTPRequestHandler],
) -> Generator[RecordingHTTPServer]:
    server = RecordingHTTPServer(("127.0.0.1", 0), handler)
    thread = threading.Thread(target=server.serve_forever)
    thread.daemon = True
    thread.start()
    yield server
    server.shutdown()


@pytest.fixture
def note_server() -> Generator[RecordingHTTPServer]:
    """Start a local API server with ETag support."""
    yield from _serve(NoteHandler)


@pytest.fixture
def flaky_server() -> Generator[HTTPServer]:
    """Start a local API server that fails twice with 503."""
    FlakyHandler.request_count = 0
    FlakyHandler.error_count = 2
    yield from _serve(FlakyHandler)


@pytest.fixture
def exhausted_server() -> Generator[HTTPServer]:
    """Start a local API server with an exhausted rate limit."""
    ExhaustedQuotaHandler.request_count = 0
    yield from _serve(ExhaustedQuotaHandler)


class TestConditionalRequests:
    """Integration tests for ETag conditional requests."""

    @pytest.mark.asyncio
    async def test_first_fetch_returns_note_and_etag(
        self, note_server: RecordingHTTPServer
    ) -> None:
        async with make_client(note_server, RecordingSleep()) as api:
            note = await api.get_note("n1")

        assert note == {
            "id": "n1",
            "title": "Cached",
            "content": "# Hi",
            "status": 200,
            "etag": 'W/"abc123"',
        }
        assert note_server.seen_authorization == [f"Bearer {TEST_TOKEN}"]

    @pytest.mark.asyncio
    async def test_second_fetch_not_modified(self, note_server: HTTPServer) -> None:
        """Test that replaying the etag yields a 304 result."""
        async with make_client(note_server, RecordingSleep()) as api:
            note = await api.get_note("n1")
            assert isinstance(note, dict)
            cached = await api.get_note("n1", etag=note["etag"])

        assert cached == {"status": 304, "etag": 'W/"abc123"'}
        assert api.metrics.not_modified_total == 1


class TestRetries:
    """Integration tests for retries against a real server."""

    @pytest.mark.asyncio
    async def test_recovers_after_server_errors(self, flaky_server: HTTPServer) -> None:
        sleep = RecordingSleep()

        async with make_client(flaky_server, sleep) as api:
            user = await api.get_me()

        assert user == {"id": "u1", "name": "Ada"}
        assert FlakyHandler.request_count == 3
        assert sleep.delays_ms == [200, 400]

    @pytest.mark.asyncio
    async def test_exhausted_quota_fails_fast(self, exhausted_server: HTTPServer) -> None:
        sleep = RecordingSleep()

        async with make_client(exhausted_server, sleep) as api:
            with pytest.raises(RateLimitedError) as exc_info:
                await api.get_me()

        assert ExhaustedQuotaHandler.request_count == 1
        assert sleep.delays == []
        assert exc_info.value.user_limit == 100
        assert exc_info.value.user_remaining == 0
