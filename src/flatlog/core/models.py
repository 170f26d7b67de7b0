"""Core domain models for structured log events."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

from flatlog.core.errors import UnsupportedConfigValueError

logger = logging.getLogger(__name__)


class Severity(IntEnum):
    """Ordered severity scale.

    Values line up with the stdlib logging levels so records can be mapped
    in both directions.
    """

    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    CRITICAL = 50

    @classmethod
    def parse(
        cls, name: "str | Severity", *, strict: bool = False
    ) -> "Severity":
        """Resolve a severity name case-insensitively.

        Args:
            name: Severity name (e.g. "info", "WARN", "warning") or a Severity.
            strict: Raise instead of falling back to INFO.

        Returns:
            The matching Severity, or INFO for unknown names when not strict.

        Raises:
            UnsupportedConfigValueError: Unknown name and strict is set.
        """
        if isinstance(name, Severity):
            return name
        key = str(name).strip().upper()
        key = _SEVERITY_ALIASES.get(key, key)
        try:
            return cls[key]
        except KeyError:
            if strict:
                raise UnsupportedConfigValueError("severity", name) from None
            logger.warning("unsupported severity %r, using INFO", name)
            return cls.INFO

    @classmethod
    def from_logging_level(cls, levelno: int) -> "Severity":
        """Map a stdlib logging level number to the nearest lower Severity."""
        for severity in sorted(cls, reverse=True):
            if levelno >= severity:
                return severity
        return cls.TRACE


_SEVERITY_ALIASES = {"WARNING": "WARN", "FATAL": "CRITICAL"}


class FormatMode(str, Enum):
    """Wire format of a rendered event."""

    JSON = "json"
    KVP = "kvp"

    @classmethod
    def parse(
        cls, value: "str | FormatMode", *, strict: bool = False
    ) -> "FormatMode":
        """Resolve a format mode name, falling back to KVP when not strict."""
        if isinstance(value, FormatMode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            if strict:
                raise UnsupportedConfigValueError("format mode", value) from None
            logger.warning("unsupported format mode %r, using kvp", value)
            return cls.KVP


class ValueKind(Enum):
    """Closed set of payload leaf kinds.

    UNSUPPORTED is the catch-all arm: such values render as "-" when
    coerced and are dropped by the KVP renderer.
    """

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    MESSAGE = "message"
    ABSENT = "absent"
    UNSUPPORTED = "unsupported"


Payload = Mapping[str, Any] | Sequence[Any]


@dataclass(frozen=True)
class LogEvent:
    """A single rendered-once log event.

    Attributes:
        time: UTC timestamp, YYYY-MM-DDTHH:MM:SS.mmmZ.
        uuid: Unique event id.
        host: Emitting host.
        app: Emitting application name.
        level: Event severity.
        msg: Free-text message (may be empty).
        event: Nested payload (may be None).
        format: Wire format to serialize with.
    """

    time: str
    uuid: str
    host: str
    app: str
    level: Severity
    msg: str = ""
    event: Payload | None = None
    format: FormatMode = FormatMode.KVP

    def fixed_fields(self) -> list[tuple[str, str]]:
        """Return the fixed KVP fields in output order."""
        return [
            ("date", self.time),
            ("uuid", self.uuid),
            ("host", self.host),
            ("app", self.app),
            ("level", self.level.name),
            ("msg", self.msg),
        ]


@dataclass(frozen=True)
class LoggerConfig:
    """Settings shared by every event a Logger emits.

    Attributes:
        host: Host name stamped on events.
        app: Application name stamped on events.
        format_mode: Default wire format.
        threshold: Minimum severity routed to stdout; lower goes to stderr.
        exempt_paths: URL paths skipped by HTTP access logging. Entries match
            exactly or as shell-style wildcards (e.g. "/internal/*").

    format_mode and threshold also accept names ("json", "warn"); they are
    resolved with FormatMode.parse and Severity.parse.
    """

    host: str
    app: str = ""
    format_mode: FormatMode = FormatMode.KVP
    threshold: Severity = Severity.INFO
    exempt_paths: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept plain names for the enum fields, leniently like new_logger
        object.__setattr__(self, "format_mode", FormatMode.parse(self.format_mode))
        object.__setattr__(self, "threshold", Severity.parse(self.threshold))
        object.__setattr__(self, "exempt_paths", tuple(self.exempt_paths))
