"""JSON encoder for log events, one object per line."""

import json
from collections.abc import Mapping
from typing import Any

from flatlog.core.errors import InvalidInputError, SerializationError
from flatlog.core.models import LogEvent


def _default(value: Any) -> Any:
    if isinstance(value, BaseException):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def event_to_dict(event: LogEvent) -> dict[str, Any]:
    """Build the JSON object for an event.

    Empty host and app are kept; an empty message and an absent or empty
    payload are omitted.

    Raises:
        InvalidInputError: The payload is not a mapping or sequence.
    """
    if event.event is not None and not isinstance(event.event, (Mapping, list, tuple)):
        raise InvalidInputError(event.event)
    obj: dict[str, Any] = {
        "time": event.time,
        "uuid": event.uuid,
        "host": event.host,
        "app": event.app,
        "level": event.level.name,
    }
    if event.msg:
        obj["msg"] = event.msg
    if event.event:
        obj["event"] = event.event
    return obj


def encode_event(event: LogEvent) -> str:
    """Encode an event as a compact JSON string (without trailing newline).

    The nested payload is written verbatim, not flattened.

    Raises:
        InvalidInputError: The payload is not a mapping or sequence.
        SerializationError: The payload holds values JSON cannot represent,
            refers to itself or is nested too deeply.
    """
    obj = event_to_dict(event)
    try:
        return json.dumps(
            obj,
            default=_default,
            allow_nan=False,
            separators=(",", ":"),
        )
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationError(f"could not encode event {event.uuid}: {exc}") from exc
