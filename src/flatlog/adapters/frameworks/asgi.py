"""ASGI access-log middleware.

The middleware is framework-agnostic and works with any ASGI server
(uvicorn, hypercorn, daphne) or framework (FastAPI, Starlette).
"""

import fnmatch
import time
from collections.abc import Callable, Coroutine, Iterable
from typing import Any

from flatlog.core.events import format_timestamp, utc_now, with_message, with_payload
from flatlog.logger import Logger

# ASGI type aliases
Scope = dict[str, Any]
Receive = Callable[[], Coroutine[Any, Any, dict[str, Any]]]
Send = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
ASGIApp = Callable[[Scope, Receive, Send], Coroutine[Any, Any, None]]


def _extract_header(scope: Scope, header_name: str) -> str:
    """Return a request header value from ASGI scope, or "" when missing.

    Args:
        scope: ASGI scope dictionary containing request metadata.
        header_name: Header to search for (case-insensitive).
    """
    header_bytes = header_name.lower().encode()
    headers: list[tuple[bytes, bytes]] = scope.get("headers", [])
    for name, value in headers:
        if name.lower() == header_bytes:
            return value.decode("utf-8", errors="replace")
    return ""


class AccessLogMiddleware:
    """ASGI middleware that writes one INFO event per HTTP request.

    The event payload holds req_time, req_status, req_elapsed (milliseconds),
    req_x_fwd_for, req_method and req_url_path.
    """

    def __init__(
        self,
        app: ASGIApp,
        logger: Logger,
        exempt_paths: Iterable[str] | None = None,
    ) -> None:
        """Initialize the middleware with a wrapped app and a Logger.

        Args:
            app: The ASGI application to wrap.
            logger: Logger that renders and routes access events.
            exempt_paths: Paths not logged. Supports exact matches and
                wildcard patterns (e.g., "/internal/*"). Defaults to the
                logger's configured exempt paths.
        """
        self.app = app
        self.logger = logger
        if exempt_paths is None:
            exempt_paths = logger.config.exempt_paths
        self.exempt_paths = list(exempt_paths)

    def _path_exempt(self, path: str) -> bool:
        """Check if path matches any pattern in exempt_paths."""
        return any(fnmatch.fnmatch(path, pattern) for pattern in self.exempt_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI callable interface that processes requests through the wrapped app."""
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        started = utc_now()
        start_time = time.perf_counter()
        captured: dict[str, Any] = {"status": None, "exception": None}

        async def wrapped_send(message: dict[str, Any]) -> None:
            if message["type"] == "http.response.start":
                captured["status"] = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, wrapped_send)
        except Exception as e:
            captured["exception"] = e
            captured["status"] = 500

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        if not self._path_exempt(scope["path"]):
            payload = {
                "req_time": format_timestamp(started),
                "req_status": captured["status"] or 0,
                "req_elapsed": round(elapsed_ms, 3),
                "req_x_fwd_for": _extract_header(scope, "X-Forwarded-For"),
                "req_method": scope["method"],
                "req_url_path": scope["path"],
            }
            self.logger.info(
                with_message(f"{scope['method']} {scope['path']}"),
                with_payload(payload),
            )
        if captured["exception"] is not None:
            raise captured["exception"]
