"""Exception hierarchy for flatlog.

Core functions raise these; the Logger catches FlatlogError per call and
reports it on the operational log instead of writing an event.
"""


class FlatlogError(Exception):
    """Base class for all flatlog errors."""


class InvalidInputError(FlatlogError, TypeError):
    """Payload is not a mapping or sequence, or cannot be walked."""

    def __init__(self, value: object, reason: str | None = None) -> None:
        if reason is None:
            reason = f"must be map or sequence, got {type(value).__name__}"
        super().__init__(f"invalid input: {reason}")
        self.value = value


class IdGenerationError(FlatlogError):
    """Randomness source could not produce an event id."""


class SerializationError(FlatlogError):
    """An event could not be encoded to its wire format."""


class UnsupportedConfigValueError(FlatlogError, ValueError):
    """A configuration value (format mode, severity name) is not recognized."""

    def __init__(self, setting: str, value: object) -> None:
        super().__init__(f"unsupported {setting}: {value!r}")
        self.setting = setting
        self.value = value
