"""KVP encoder: single-line "key"="value" rendering of events."""

import logging
from collections.abc import Mapping
from typing import Any

from flatlog.core.coercion import to_string, value_kind
from flatlog.core.flatten import flatten
from flatlog.core.models import LogEvent, ValueKind

logger = logging.getLogger(__name__)

PAYLOAD_PREFIX = "event_"


def render(flat: Mapping[str, Any]) -> str:
    """Render a flat mapping as space-terminated "key"="value" tokens.

    Values of an unsupported kind are left out and reported on the
    operational log.

    Args:
        flat: Single-level mapping, usually the output of flatten().

    Returns:
        Concatenated tokens, each followed by one space. Empty for {}.
    """
    parts = []
    for key, value in flat.items():
        if value_kind(value) is ValueKind.UNSUPPORTED:
            logger.warning(
                "dropping unsupported value for key %r: type %s",
                key,
                type(value).__name__,
            )
            continue
        parts.append(f'"{key}"="{to_string(value)}" ')
    return "".join(parts)


def encode_event(event: LogEvent) -> str:
    """Encode an event as a KVP line (without trailing newline).

    Raises:
        InvalidInputError: The payload is not a mapping or sequence.
    """
    rendered = render(flatten(event.event, PAYLOAD_PREFIX))
    fixed = " ".join(f'"{name}"="{value}"' for name, value in event.fixed_fields())
    return f"{fixed} {rendered}"
