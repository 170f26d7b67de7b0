"""Python logging handler adapter for flatlog.

This adapter bridges Python's standard library logging module to a flatlog
Logger, so records logged through ``logging`` come out as flatlog events.
"""

import logging
from typing import Any

from flatlog.core.events import with_message, with_payload
from flatlog.core.models import Severity
from flatlog.logger import Logger

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


class FlatlogHandler(logging.Handler):
    """Logging handler that renders log records through a flatlog Logger.

    Records at CRITICAL are emitted at Severity.CRITICAL, which ends the
    process like any other critical flatlog event.

    Example:
        ```python
        from flatlog import FlatlogHandler, new_logger

        handler = FlatlogHandler(new_logger(app="worker"))
        logging.getLogger("worker").addHandler(handler)
        ```
    """

    def __init__(self, logger: Logger, level: int = logging.NOTSET) -> None:
        """Initialize the handler with the Logger that writes events.

        Args:
            logger: flatlog Logger used to render and route records.
            level: Minimum stdlib level handled.
        """
        super().__init__(level)
        self._logger = logger

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record as a flatlog event.

        Args:
            record: The log record to emit.
        """
        # Extra attributes passed via the logging call become the payload
        payload: dict[str, Any] = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_LOGRECORD_ATTRS
        }
        payload["logger"] = record.name

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            if exc_type is not None:
                payload["exc_type"] = exc_type.__name__
            if exc_value is not None:
                payload["exc_message"] = str(exc_value)

        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            self.handleError(record)
            return
        self._logger.log(
            Severity.from_logging_level(record.levelno),
            with_message(message),
            with_payload(payload),
        )
