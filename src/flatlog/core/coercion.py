"""Scalar coercion of payload leaves to their KVP string form."""

import math
from decimal import Decimal
from typing import Any

from flatlog.core.models import ValueKind

UNSUPPORTED_SENTINEL = "-"


def value_kind(value: Any) -> ValueKind:
    """Classify a payload leaf into the closed set of value kinds."""
    if value is None:
        return ValueKind.ABSENT
    # bool first: it subclasses int
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        return ValueKind.INT
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, BaseException):
        return ValueKind.MESSAGE
    return ValueKind.UNSUPPORTED


def _float_to_string(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def to_string(value: Any) -> str:
    """Render a scalar the way it appears inside a KVP token.

    Never raises: values outside the supported kinds become "-".

    Args:
        value: Payload leaf.

    Returns:
        Canonical string form of the value.
    """
    kind = value_kind(value)
    if kind is ValueKind.ABSENT:
        return ""
    if kind is ValueKind.STRING:
        return str.__str__(value)
    if kind is ValueKind.BOOL:
        return "true" if value else "false"
    if kind is ValueKind.INT:
        return str(int(value))
    if kind is ValueKind.FLOAT:
        return _float_to_string(value)
    if kind is ValueKind.MESSAGE:
        return str(value)
    return UNSUPPORTED_SENTINEL


def coerce_from_string(text: str) -> Any:
    """Parse a KVP value string back into the most specific scalar.

    "" becomes None, "true"/"false" become bools, integer and float literals
    become numbers, anything else stays a string.
    """
    if text == "":
        return None
    if text in ("true", "false"):
        return text == "true"
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text
