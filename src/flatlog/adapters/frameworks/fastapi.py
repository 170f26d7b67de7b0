"""FastAPI adapter for access logging."""

from collections.abc import Iterable

from fastapi import FastAPI

from flatlog.adapters.frameworks.asgi import AccessLogMiddleware
from flatlog.logger import Logger


def instrument_app(
    app: FastAPI,
    logger: Logger,
    exempt_paths: Iterable[str] | None = None,
) -> FastAPI:
    """Install access logging on a FastAPI application.

    Args:
        app: FastAPI application to instrument.
        logger: Logger that renders and routes access events.
        exempt_paths: Paths not logged; defaults to the logger's configuration.

    Returns:
        The same app, for chaining.
    """
    app.add_middleware(AccessLogMiddleware, logger=logger, exempt_paths=exempt_paths)
    return app
