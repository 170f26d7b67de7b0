"""Shared test fixtures for all test modules."""

import io
from datetime import datetime, timezone

import pytest

from flatlog.core.models import FormatMode, LoggerConfig, Severity
from flatlog.core.routing import SeverityRouter
from flatlog.logger import Logger

try:
    import httpx
except ImportError:
    httpx = None

FIXED_ID = "3f2a9c4e-1b7d-4e8a-9c0f-5d6e7f8a9b0c"
FIXED_MOMENT = datetime(2024, 3, 9, 14, 5, 7, 42000, tzinfo=timezone.utc)
FIXED_TIME = "2024-03-09T14:05:07.042Z"


@pytest.fixture
def fixed_id() -> str:
    """Event id produced by the fixed id factory."""
    return FIXED_ID


@pytest.fixture
def fixed_time() -> str:
    """Formatted event time produced by the fixed clock."""
    return FIXED_TIME


@pytest.fixture
def event_defaults() -> dict:
    """Keyword defaults for build_event/format_event with deterministic id and time."""
    return {
        "host": "web-1",
        "app": "billing",
        "id_factory": lambda: FIXED_ID,
        "clock": lambda: FIXED_MOMENT,
    }


@pytest.fixture
def streams() -> tuple[io.StringIO, io.StringIO]:
    """In-memory (stdout, stderr) pair."""
    return io.StringIO(), io.StringIO()


@pytest.fixture
def make_logger(streams):
    """Factory fixture for Loggers writing to the in-memory streams.

    Usage:
        def test_something(make_logger, streams):
            log = make_logger(format_mode=FormatMode.JSON)
            log.info("hello")
            out, err = streams
    """
    stdout, stderr = streams

    def _make(
        host: str = "web-1",
        app: str = "billing",
        format_mode: FormatMode = FormatMode.KVP,
        threshold: Severity = Severity.INFO,
        exempt_paths: tuple[str, ...] = (),
    ) -> Logger:
        config = LoggerConfig(
            host=host,
            app=app,
            format_mode=format_mode,
            threshold=threshold,
            exempt_paths=exempt_paths,
        )
        return Logger(
            config,
            router=SeverityRouter(threshold, stdout=stdout, stderr=stderr),
            id_factory=lambda: FIXED_ID,
            clock=lambda: FIXED_MOMENT,
        )

    return _make


# === ASGI Test Fixtures ===


@pytest.fixture
def basic_asgi_app():
    """Basic ASGI app fixture that returns 200 OK."""
    from flatlog.adapters.frameworks.asgi import Receive, Scope, Send

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        """Simple ASGI app that returns 200 OK."""
        await send({"type": "http.response.start", "status": 200, "headers": []})
        await send({"type": "http.response.body", "body": b"OK"})

    return app


@pytest.fixture
def asgi_scope():
    """Factory fixture for creating ASGI scope dicts."""
    from flatlog.adapters.frameworks.asgi import Scope

    def _scope(
        method: str = "GET",
        path: str = "/test",
        headers: list[tuple[bytes, bytes]] | None = None,
    ) -> Scope:
        return {
            "type": "http",
            "method": method,
            "path": path,
            "query_string": b"",
            "headers": headers or [],
        }

    return _scope


@pytest.fixture
def asgi_receive():
    """Async receive stub."""

    async def receive() -> dict[str, object]:
        return {"type": "http.request", "body": b""}

    return receive


@pytest.fixture
def asgi_send_capture():
    """Fixture that returns a send callable and a responses list for capture."""

    responses: list[dict[str, object]] = []

    async def send(message: dict[str, object]) -> None:
        """Capture ASGI messages."""
        responses.append(message)

    return send, responses


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client):
            async with asgi_test_client(app) as client:
                response = await client.get("/endpoint")
    """
    if httpx is None:
        pytest.skip("httpx not installed")

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client
