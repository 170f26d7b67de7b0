"""flatlog - structured event logging with KVP and JSON line output."""

from flatlog.adapters.logging import FlatlogHandler
from flatlog.core.errors import (
    FlatlogError,
    IdGenerationError,
    InvalidInputError,
    SerializationError,
    UnsupportedConfigValueError,
)
from flatlog.core.events import (
    EventOption,
    format_event,
    with_app,
    with_format,
    with_host,
    with_message,
    with_message_f,
    with_payload,
)
from flatlog.core.flatten import flatten
from flatlog.core.models import FormatMode, LogEvent, LoggerConfig, Severity
from flatlog.core.routing import (
    CRITICAL_EXIT_STATUS,
    SeverityRouter,
    get_default_threshold,
    set_default_threshold,
)
from flatlog.logger import (
    Logger,
    critical,
    debug,
    error,
    info,
    new_logger,
    trace,
    warn,
)

__all__ = [
    "CRITICAL_EXIT_STATUS",
    "EventOption",
    "FlatlogError",
    "FlatlogHandler",
    "FormatMode",
    "IdGenerationError",
    "InvalidInputError",
    "LogEvent",
    "Logger",
    "LoggerConfig",
    "SerializationError",
    "Severity",
    "SeverityRouter",
    "UnsupportedConfigValueError",
    "critical",
    "debug",
    "error",
    "flatten",
    "format_event",
    "get_default_threshold",
    "info",
    "new_logger",
    "set_default_threshold",
    "trace",
    "warn",
    "with_app",
    "with_format",
    "with_host",
    "with_message",
    "with_message_f",
    "with_payload",
]
