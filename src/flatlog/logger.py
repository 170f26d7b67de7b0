"""Logger façade: one call per severity level.

Each call accepts either event options or a printf-style ``(format, *args)``
pair that becomes the event message:

    log = new_logger(app="billing", format_mode="json")
    log.info("charged %s", customer_id)
    log.warn(with_message("retrying"), with_payload({"attempt": 2}))
"""

import functools
import logging
import os
import socket
import sys
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime
from typing import Any

from flatlog.core.errors import FlatlogError
from flatlog.core.events import EventOption, format_event, utc_now, with_message_f
from flatlog.core.ids import generate_id
from flatlog.core.models import FormatMode, LoggerConfig, Severity
from flatlog.core.routing import SeverityRouter, get_default_threshold

logger = logging.getLogger(__name__)

EVENT_ERROR = "could not generate log event"


def _to_options(args: Sequence[Any]) -> list[EventOption]:
    if not args:
        return []
    first = args[0]
    if isinstance(first, str):
        return [with_message_f(first, *args[1:])]
    if len(args) == 1 and isinstance(first, (list, tuple)):
        args = first
    if not all(callable(arg) for arg in args):
        raise TypeError(
            "log calls take event options or a (format, *args) pair, not a mix"
        )
    return list(args)


class Logger:
    """Renders events and routes them to stdout/stderr by severity.

    Attributes:
        config: Host, application, format and routing settings.
        router: Chooses the output stream for each event.
    """

    def __init__(
        self,
        config: LoggerConfig,
        *,
        router: SeverityRouter | None = None,
        id_factory: Callable[[], str] = generate_id,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.config = config
        self.router = router or SeverityRouter(config.threshold)
        self._id_factory = id_factory
        self._clock = clock

    def format(self, level: Severity, options: Iterable[EventOption] = ()) -> bytes:
        """Render one event with this logger's defaults without writing it.

        Raises:
            FlatlogError: The event could not be built or encoded.
        """
        return format_event(
            level,
            options,
            host=self.config.host,
            app=self.config.app,
            format_mode=self.config.format_mode,
            id_factory=self._id_factory,
            clock=self._clock,
        )

    def log(self, level: "str | Severity", *args: Any) -> None:
        """Render and emit one event at ``level``.

        Build or encoding failures are reported on the operational log and
        nothing is written for the call.

        Raises:
            TypeError: ``args`` mixes event options with other values.
            SystemExit: After writing a CRITICAL event.
        """
        level = Severity.parse(level)
        options = _to_options(args)
        try:
            data = self.format(level, options)
        except FlatlogError:
            logger.exception(EVENT_ERROR)
            return
        self.router.emit(level, data)

    def trace(self, *args: Any) -> None:
        self.log(Severity.TRACE, *args)

    def debug(self, *args: Any) -> None:
        self.log(Severity.DEBUG, *args)

    def info(self, *args: Any) -> None:
        self.log(Severity.INFO, *args)

    def warn(self, *args: Any) -> None:
        self.log(Severity.WARN, *args)

    def error(self, *args: Any) -> None:
        self.log(Severity.ERROR, *args)

    def critical(self, *args: Any) -> None:
        """Emit at CRITICAL, then exit the process with status 2."""
        self.log(Severity.CRITICAL, *args)


@functools.lru_cache(maxsize=1)
def discover_host() -> str:
    """Return this machine's host name (cached)."""
    return socket.gethostname()


def _program_name() -> str:
    return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else ""


def new_logger(
    host: str | None = None,
    app: str = "",
    format_mode: "str | FormatMode" = FormatMode.KVP,
    threshold: "str | Severity" = Severity.INFO,
    exempt_paths: Iterable[str] | None = None,
    **kwargs: Any,
) -> Logger:
    """Create a Logger from plain settings.

    Unknown format modes fall back to KVP and unknown severity names to INFO,
    each with a warning on the operational log.

    Args:
        host: Host name; discovered with socket.gethostname() when None.
        app: Application name.
        format_mode: "json" or "kvp".
        threshold: Severity name, case-insensitive.
        exempt_paths: URL paths skipped by HTTP access logging.
        **kwargs: Forwarded to Logger (router, id_factory, clock).
    """
    config = LoggerConfig(
        host=discover_host() if host is None else host,
        app=app,
        format_mode=FormatMode.parse(format_mode),
        threshold=Severity.parse(threshold),
        exempt_paths=tuple(exempt_paths or ()),
    )
    return Logger(config, **kwargs)


def default_logger() -> Logger:
    """Logger used by the module-level functions.

    Built per call so it always reflects the current default threshold.
    """
    return new_logger(app=_program_name(), threshold=get_default_threshold())


def trace(*args: Any) -> None:
    default_logger().trace(*args)


def debug(*args: Any) -> None:
    default_logger().debug(*args)


def info(*args: Any) -> None:
    default_logger().info(*args)


def warn(*args: Any) -> None:
    default_logger().warn(*args)


def error(*args: Any) -> None:
    default_logger().error(*args)


def critical(*args: Any) -> None:
    default_logger().critical(*args)
