"""Event options and the event formatter.

An event is built from the owning logger's defaults plus a list of options.
Each option is a pure function that returns a copy of the draft with one
field set; options apply in call order, so a later option for the same field
wins.

Example:
    >>> data = format_event(
    ...     Severity.INFO,
    ...     [with_message("user created"), with_payload({"user": {"id": 7}})],
    ...     host="web-1",
    ...     app="accounts",
    ... )
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any

from flatlog.core.encoding import kvp, ndjson
from flatlog.core.errors import SerializationError
from flatlog.core.ids import generate_id
from flatlog.core.models import FormatMode, LogEvent, Payload, Severity


@dataclass(frozen=True)
class EventDraft:
    """Per-call event fields before defaults are filled in."""

    msg: str = ""
    event: Payload | None = None
    host: str | None = None
    app: str | None = None
    format: FormatMode | None = None


EventOption = Callable[[EventDraft], EventDraft]


def with_message(msg: str) -> EventOption:
    """Set the event message."""
    return lambda draft: replace(draft, msg=msg)


def with_message_f(fmt: str, *args: Any) -> EventOption:
    """Set the event message from a %-style format string and arguments.

    A format/argument mismatch surfaces as SerializationError when the
    option is applied.
    """

    def apply(draft: EventDraft) -> EventDraft:
        if not args:
            return replace(draft, msg=fmt)
        try:
            msg = fmt % args
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"could not format message {fmt!r}: {exc}") from exc
        return replace(draft, msg=msg)

    return apply


def with_payload(payload: Payload | None) -> EventOption:
    """Attach a nested payload to the event."""
    return lambda draft: replace(draft, event=payload)


def with_host(host: str) -> EventOption:
    """Override the logger's host for this event."""
    return lambda draft: replace(draft, host=host)


def with_app(app: str) -> EventOption:
    """Override the logger's application name for this event."""
    return lambda draft: replace(draft, app=app)


def with_format(mode: "str | FormatMode") -> EventOption:
    """Override the wire format for this event."""
    resolved = FormatMode.parse(mode)
    return lambda draft: replace(draft, format=resolved)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as UTC with exactly three millisecond digits."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def build_event(
    level: Severity,
    options: Iterable[EventOption] = (),
    *,
    host: str = "",
    app: str = "",
    format_mode: FormatMode | None = None,
    id_factory: Callable[[], str] = generate_id,
    clock: Callable[[], datetime] = utc_now,
) -> LogEvent:
    """Build an immutable LogEvent from logger defaults and options.

    Args:
        level: Event severity.
        options: Field-setting options, applied in order.
        host: Default host when no option sets one.
        app: Default application name when no option sets one.
        format_mode: Default wire format; KVP when None and no option sets one.
        id_factory: Produces the event id.
        clock: Produces the event time.

    Raises:
        IdGenerationError: id_factory could not produce an id.
    """
    event_id = id_factory()
    moment = clock()
    draft = EventDraft()
    for option in options:
        draft = option(draft)

    mode = draft.format or format_mode or FormatMode.KVP
    return LogEvent(
        time=format_timestamp(moment),
        uuid=event_id,
        host=draft.host if draft.host is not None else host,
        app=draft.app if draft.app is not None else app,
        level=level,
        msg=draft.msg,
        event=draft.event,
        format=mode,
    )


def encode_event(event: LogEvent) -> str:
    """Serialize an event in its own format mode."""
    if event.format is FormatMode.JSON:
        return ndjson.encode_event(event)
    return kvp.encode_event(event)


def format_event(
    level: Severity, options: Iterable[EventOption] = (), **defaults: Any
) -> bytes:
    """Build and serialize one event.

    Args:
        level: Event severity.
        options: Field-setting options, applied in order.
        **defaults: Keyword arguments forwarded to build_event().

    Returns:
        UTF-8 encoded record without a trailing newline.

    Raises:
        IdGenerationError: No event id could be generated.
        InvalidInputError: KVP payload is not a mapping or sequence.
        SerializationError: JSON payload could not be encoded.
    """
    return encode_event(build_event(level, options, **defaults)).encode("utf-8")
