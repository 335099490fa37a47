"""Core type definitions for formgate.

This module defines the fundamental types used throughout the engine:
- FieldCategory: Validation rule class a field is registered under
- ErrorKind: Structured kinds of per-field validation failure
- Indicator / FeedbackClass: Presentation tokens derived from (touched, error)
- FormEventType: Event types published by the gate and form state
- FieldValue: Tagged union of raw field values (TextValue, NumberValue, FileRef, DateValue)

A field's category always comes from the FieldSchema, never from the shape of
its value. The FieldValue variants only carry the payload the host collected.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Union

from typing_extensions import TypeAlias


FieldIdentifier: TypeAlias = str
ErrorMap: TypeAlias = Dict[FieldIdentifier, Optional[str]]
TouchedSet: TypeAlias = FrozenSet[FieldIdentifier]


class FieldCategory(str, Enum):
    """Validation categories.

    Identifiers not registered in any category resolve to UNCLASSIFIED,
    which accepts every value.
    """
    TEXT = "text"
    NUMERIC = "numeric"
    FILE = "file"
    DATE = "date"
    UNCLASSIFIED = "unclassified"


class ErrorKind(str, Enum):
    """Kinds of field validation failure.

    REQUIRED is the "RequiredFieldMissing" case, TYPE_MISMATCH covers a
    present value that does not parse as the category's expected shape.
    """
    REQUIRED = "required"
    TYPE_MISMATCH = "type_mismatch"


class Indicator(str, Enum):
    """Three-state field indicator."""
    NEUTRAL = "neutral"
    VALID = "valid"
    INVALID = "invalid"


class FeedbackClass(str, Enum):
    """Feedback class tokens consumed by rendering code.

    NONE renders as the empty string (no class applied).
    """
    NONE = ""
    VALID = "valid"
    INVALID = "invalid"


class FormEventType(str, Enum):
    """Event types published through the EventEmitter."""
    SELECTION_COMMITTED = "selection.committed"
    VALIDATION_PASSED = "validation.passed"
    VALIDATION_FAILED = "validation.failed"
    SUBMISSION_ALLOWED = "submission.allowed"
    SUBMISSION_BLOCKED = "submission.blocked"


@dataclass(frozen=True)
class TextValue:
    """Free-text input."""
    text: Optional[str] = None

    @property
    def raw(self) -> Any:
        return self.text


@dataclass(frozen=True)
class NumberValue:
    """Numeric input, either a number or the string the user typed."""
    number: Union[int, float, str, None] = None

    @property
    def raw(self) -> Any:
        return self.number


@dataclass(frozen=True)
class FileRef:
    """Reference to an uploaded file.

    ``ref`` is whatever handle the host uses (a filename, a path, a file
    object). ``None`` or an empty string means no file was chosen.

    Examples:
        >>> FileRef("resume.pdf").present
        True
        >>> FileRef().present
        False
    """
    ref: Any = None

    @property
    def present(self) -> bool:
        return self.ref is not None and self.ref != ""

    @property
    def raw(self) -> Any:
        return self.ref


@dataclass(frozen=True)
class DateValue:
    """Date input, usually an ISO-8601 string from a date picker."""
    date: Any = None

    @property
    def raw(self) -> Any:
        return self.date


FieldValue: TypeAlias = Union[TextValue, NumberValue, FileRef, DateValue]

TAGGED_VALUE_TYPES = (TextValue, NumberValue, FileRef, DateValue)


def unwrap(value: Any) -> Any:
    """Return the payload of a tagged FieldValue, or ``value`` unchanged.

    Examples:
        >>> unwrap(TextValue("abc"))
        'abc'
        >>> unwrap(42)
        42
    """
    if isinstance(value, TAGGED_VALUE_TYPES):
        return value.raw
    return value


__all__ = [
    "FieldIdentifier",
    "ErrorMap",
    "TouchedSet",
    "FieldCategory",
    "ErrorKind",
    "Indicator",
    "FeedbackClass",
    "FormEventType",
    "TextValue",
    "NumberValue",
    "FileRef",
    "DateValue",
    "FieldValue",
    "unwrap",
]
