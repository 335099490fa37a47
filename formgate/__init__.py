"""formgate: field validation and submission-gating engine.

formgate provides:
- FieldSchema: immutable registration of field identifiers into validation categories
- ValidationEngine: per-field rules (text, numeric, file, date) and presentation tokens
- SubmissionGate: full-form validation pass that gates the host's submit action
- FormState: immutable host-owned snapshot of values, touched fields and errors

The engine keeps no state between calls and performs no I/O; field failures
are returned as data, never raised.

Basic usage:
    >>> from formgate import FieldSchema, SubmissionGate, ValidationEngine
    >>> schema = FieldSchema(text=["firstName"], numeric=["salary"])
    >>> gate = SubmissionGate(ValidationEngine(schema))
    >>> gate.validate_all({"firstName": "John", "salary": "50000"}).all_valid
    True
"""

__version__ = "0.1.0"
__author__ = "formgate developers"

# Version info
VERSION = (0, 1, 0)

# Core exports
from formgate.errors import FieldError, SchemaConfigurationError
from formgate.events import EventEmitter, FormEvent
from formgate.form_state import FormState, SelectionCommitted
from formgate.gate import SubmissionGate, ValidationVerdict
from formgate.schema import FieldSchema
from formgate.types import (
    DateValue,
    ErrorKind,
    FeedbackClass,
    FieldCategory,
    FileRef,
    FormEventType,
    Indicator,
    NumberValue,
    TextValue,
)
from formgate.validation import PresentationState, ValidationEngine

# Package metadata
__all__ = [
    "__version__",
    "VERSION",
    "FieldSchema",
    "ValidationEngine",
    "PresentationState",
    "SubmissionGate",
    "ValidationVerdict",
    "FormState",
    "SelectionCommitted",
    "FieldError",
    "SchemaConfigurationError",
    "EventEmitter",
    "FormEvent",
    "FieldCategory",
    "ErrorKind",
    "Indicator",
    "FeedbackClass",
    "FormEventType",
    "TextValue",
    "NumberValue",
    "FileRef",
    "DateValue",
]
