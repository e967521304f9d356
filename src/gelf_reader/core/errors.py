"""Error taxonomy for decoding and validating GELF messages."""

from __future__ import annotations

from typing import Any


class ParseError(ValueError):
    """Base class for every rejection of an input buffer."""

    kind = "parse_error"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": str(self)}


class DecodeError(ParseError):
    """Input is not UTF-8 JSON, or not a JSON object at the top level."""

    kind = "decode_error"

    def __init__(self, reason: str) -> None:
        super().__init__(f"cannot decode GELF message: {reason}")
        self.reason = reason


class ValidationError(ParseError):
    """A mandatory GELF field failed validation."""

    kind = "validation_error"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d["field"] = self.field
        return d


class MissingField(ValidationError):
    kind = "missing_field"

    def __init__(self, field: str) -> None:
        super().__init__(field, f"missing field `{field}`")


class TypeMismatch(ValidationError):
    kind = "type_mismatch"

    def __init__(self, field: str, expected: str) -> None:
        super().__init__(field, f"invalid type for `{field}`, expected {expected}")
        self.expected = expected

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d["expected"] = self.expected
        return d


class InvalidValue(ValidationError):
    kind = "invalid_value"

    def __init__(self, field: str, expected: str | None = None) -> None:
        msg = f"invalid value for `{field}`"
        if expected:
            msg += f", expected {expected}"
        super().__init__(field, msg)


class InternalError(ParseError):
    """The reader failed in an unexpected way; the original exception is chained."""

    kind = "internal_error"
