"""Structured error types for formgate.

Field validation failures are data, not exceptions: the engine returns a
FieldError (or None) for every field it is asked about, and malformed values
never raise. The only exception in the package is SchemaConfigurationError,
raised when the field registration itself is broken.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from formgate.types import ErrorKind, FieldCategory


REQUIRED_MESSAGE = "required"
POSITIVE_NUMBER_MESSAGE = "must be a positive number"
INVALID_DATE_MESSAGE = "invalid date"


@dataclass(frozen=True)
class FieldError:
    """Per-field validation failure.

    Attributes:
        field: Identifier of the field that failed
        kind: REQUIRED or TYPE_MISMATCH
        message: Human-readable message shown as field feedback
        received: Optional - the raw payload that was rejected

    Examples:
        >>> err = FieldError(
        ...     field="salary",
        ...     kind=ErrorKind.TYPE_MISMATCH,
        ...     message="must be a positive number",
        ...     received="-5",
        ... )
        >>> err.kind
        <ErrorKind.TYPE_MISMATCH: 'type_mismatch'>
    """
    field: str
    kind: ErrorKind
    message: str
    received: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {
            "field": self.field,
            "kind": self.kind.value if isinstance(self.kind, ErrorKind) else self.kind,
            "message": self.message,
        }
        if self.received is not None:
            result["received"] = self.received
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldError":
        """Create FieldError from dict."""
        kind = data["kind"]
        if isinstance(kind, str):
            kind = ErrorKind(kind)
        return cls(
            field=data["field"],
            kind=kind,
            message=data["message"],
            received=data.get("received"),
        )


class SchemaConfigurationError(ValueError):
    """Raised when field registration data is invalid.

    Covers an identifier registered under more than one category and
    registration documents that do not match the expected shape.

    Attributes:
        conflicts: Identifier -> categories it was registered under
            (empty for structural problems)
    """

    def __init__(self, message: str, conflicts: Optional[Dict[str, List[FieldCategory]]] = None):
        self.conflicts = conflicts or {}
        super().__init__(message)


__all__ = [
    "FieldError",
    "SchemaConfigurationError",
    "REQUIRED_MESSAGE",
    "POSITIVE_NUMBER_MESSAGE",
    "INVALID_DATE_MESSAGE",
]
