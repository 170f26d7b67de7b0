"""Flattening of nested payloads into single-level key/value mappings."""

from collections.abc import Mapping
from typing import Any

from flatlog.core.errors import InvalidInputError


def _is_nested(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def _key(first: bool, prefix: str, subkey: str) -> str:
    if first:
        return prefix + subkey
    return f"{prefix}_{subkey}"


def _flatten(
    first: bool,
    flat: dict[str, Any],
    nested: Any,
    prefix: str,
    ancestors: set[int],
) -> None:
    if isinstance(nested, Mapping):
        items = ((str(k), v) for k, v in nested.items())
    elif isinstance(nested, (list, tuple)):
        items = ((str(i), v) for i, v in enumerate(nested))
    else:
        raise InvalidInputError(nested)

    ancestors.add(id(nested))
    for subkey, value in items:
        new_key = _key(first, prefix, subkey)
        if not _is_nested(value):
            flat[new_key] = value
        elif id(value) in ancestors:
            raise InvalidInputError(value, reason=f"payload refers to itself at {new_key!r}")
        else:
            _flatten(False, flat, value, new_key, ancestors)
    ancestors.discard(id(nested))


def flatten(root: Any, prefix: str = "") -> dict[str, Any]:
    """Flatten a nested mapping or sequence into a single-level dict.

    Top-level keys are appended to ``prefix`` directly; every deeper level is
    joined with "_". Sequence positions use their zero-based index as key.
    Colliding synthesized keys resolve last-write-wins in the input's
    iteration order.

    Args:
        root: Mapping, list or tuple to flatten. None flattens to {}.
        prefix: String prepended to every synthesized key.

    Returns:
        Dict from synthesized key to leaf value.

    Raises:
        InvalidInputError: root is not a mapping, list, tuple or None, or it
            refers to itself or is nested deeper than the recursion limit.

    Example:
        >>> flatten({"a": {"b": 2}, "c": [1, 2]}, "p")
        {'pa_b': 2, 'pc_0': 1, 'pc_1': 2}
    """
    flat: dict[str, Any] = {}
    if root is None:
        return flat
    try:
        _flatten(True, flat, root, prefix, set())
    except RecursionError:
        raise InvalidInputError(root, reason="payload nested too deeply") from None
    return flat
