"""Field validation engine for formgate.

This module provides a ValidationEngine that checks a single field value
against the rule of the category its identifier is registered under, and
derives the presentation tokens a renderer applies to that field.

Rules by category:
    - text: required unless the value is non-blank after trimming
    - numeric: required if blank, otherwise must parse as a number > 0
    - file: required unless a file reference is present
    - date: required if blank, otherwise must be a date or an ISO-8601 string
      (partial dates such as "2024" or "2024-W01" and date-times are accepted)
    - unclassified: every value is accepted

Malformed values never raise; they produce a FieldError instead.
"""

import math
import numbers
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, Optional, Union

from dateutil.parser import isoparse

from formgate.errors import (
    INVALID_DATE_MESSAGE,
    POSITIVE_NUMBER_MESSAGE,
    REQUIRED_MESSAGE,
    FieldError,
)
from formgate.schema import FieldSchema
from formgate.types import (
    ErrorKind,
    FeedbackClass,
    FieldCategory,
    FieldIdentifier,
    FileRef,
    Indicator,
    unwrap,
)

@dataclass(frozen=True)
class PresentationState:
    """Presentation tokens for one field.

    Attributes:
        indicator: NEUTRAL, VALID or INVALID
        feedback_class: Class token for the feedback element ("" when neutral)
        feedback_message: Text to show under the field ("" unless invalid)
    """
    indicator: Indicator
    feedback_class: FeedbackClass
    feedback_message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "indicator": self.indicator.value,
            "feedbackClass": self.feedback_class.value,
            "feedbackMessage": self.feedback_message,
        }


NEUTRAL_STATE = PresentationState(Indicator.NEUTRAL, FeedbackClass.NONE, "")
VALID_STATE = PresentationState(Indicator.VALID, FeedbackClass.VALID, "")


def _is_blank(payload: Any) -> bool:
    if payload is None:
        return True
    if isinstance(payload, str):
        return payload.strip() == ""
    return False


def _required(identifier: FieldIdentifier, payload: Any) -> FieldError:
    return FieldError(
        field=identifier,
        kind=ErrorKind.REQUIRED,
        message=REQUIRED_MESSAGE,
        received=payload,
    )


def _mismatch(identifier: FieldIdentifier, message: str, payload: Any) -> FieldError:
    return FieldError(
        field=identifier,
        kind=ErrorKind.TYPE_MISMATCH,
        message=message,
        received=payload,
    )


def _check_text(identifier: FieldIdentifier, value: Any) -> Optional[FieldError]:
    payload = unwrap(value)
    if payload is None or str(payload).strip() == "":
        return _required(identifier, payload)
    return None


def _is_positive_number(payload: Any) -> bool:
    """Whether ``payload`` is a finite number, or numeric string, above zero."""
    # bool is an int subclass but never a quantity
    if isinstance(payload, bool):
        return False
    # Decimal is not registered as numbers.Real
    if isinstance(payload, (numbers.Real, Decimal)):
        try:
            number = float(payload)
        except OverflowError:
            # exact integers beyond float range
            return payload > 0
        except ValueError:
            # signaling NaN
            return False
    elif isinstance(payload, str):
        try:
            number = float(payload.strip())
        except ValueError:
            return False
    else:
        return False
    return math.isfinite(number) and number > 0


def _check_numeric(identifier: FieldIdentifier, value: Any) -> Optional[FieldError]:
    payload = unwrap(value)
    if _is_blank(payload):
        return _required(identifier, payload)
    if not _is_positive_number(payload):
        return _mismatch(identifier, POSITIVE_NUMBER_MESSAGE, payload)
    return None


def _check_file(identifier: FieldIdentifier, value: Any) -> Optional[FieldError]:
    payload = unwrap(value)
    if isinstance(value, FileRef):
        present = value.present
    else:
        present = payload is not None and payload != ""
    if not present:
        return _required(identifier, payload)
    return None


def _check_date(identifier: FieldIdentifier, value: Any) -> Optional[FieldError]:
    payload = unwrap(value)
    if _is_blank(payload):
        return _required(identifier, payload)
    if isinstance(payload, date):
        return None
    if not isinstance(payload, str):
        return _mismatch(identifier, INVALID_DATE_MESSAGE, payload)
    try:
        isoparse(payload.strip())
    except (ValueError, OverflowError):
        return _mismatch(identifier, INVALID_DATE_MESSAGE, payload)
    return None


CategoryRule = Callable[[FieldIdentifier, Any], Optional[FieldError]]

CATEGORY_RULES: Dict[FieldCategory, CategoryRule] = {
    FieldCategory.TEXT: _check_text,
    FieldCategory.NUMERIC: _check_numeric,
    FieldCategory.FILE: _check_file,
    FieldCategory.DATE: _check_date,
}


class ValidationEngine:
    """Per-field validation against a FieldSchema.

    The engine holds no state besides the schema it was given, so the same
    instance can serve any number of forms at once.

    Attributes:
        schema: The FieldSchema used to classify identifiers

    Examples:
        >>> schema = FieldSchema(text=["firstName"], numeric=["salary"])
        >>> engine = ValidationEngine(schema)
        >>> engine.validate_field("firstName", "John") is None
        True
        >>> engine.validate_field("salary", "-5").message
        'must be a positive number'
        >>> engine.validate_field("nickname", "") is None
        True
    """

    def __init__(self, schema: FieldSchema) -> None:
        self.schema = schema

    def validate_field(self, identifier: FieldIdentifier, value: Any) -> Optional[FieldError]:
        """Validate one field value.

        Args:
            identifier: Field identifier, classified through the schema
            value: A tagged FieldValue or a plain payload (str, number, None, ...)

        Returns:
            FieldError describing the failure, or None if the value is accepted
        """
        category = self.schema.classify(identifier)
        rule = CATEGORY_RULES.get(category)
        if rule is None:
            return None
        return rule(identifier, value)

    def error_message(self, identifier: FieldIdentifier, value: Any) -> Optional[str]:
        """Message-only form of validate_field."""
        error = self.validate_field(identifier, value)
        return error.message if error else None

    def presentation_state(
        self,
        identifier: FieldIdentifier,
        touched: bool,
        error: Union[str, FieldError, None],
    ) -> PresentationState:
        """Derive presentation tokens for a field.

        Untouched fields stay neutral whatever their error, so feedback does
        not flash before the user has interacted with the field.

        Args:
            identifier: Field identifier (tokens do not depend on it)
            touched: Whether the user has interacted with the field
            error: Current error message or FieldError, None if valid

        Returns:
            PresentationState for the field

        Examples:
            >>> engine = ValidationEngine(FieldSchema())
            >>> engine.presentation_state("x", False, "required").indicator
            <Indicator.NEUTRAL: 'neutral'>
            >>> engine.presentation_state("x", True, "required").feedback_message
            'required'
        """
        if not touched:
            return NEUTRAL_STATE
        if error is None:
            return VALID_STATE
        message = error.message if isinstance(error, FieldError) else error
        return PresentationState(Indicator.INVALID, FeedbackClass.INVALID, message)


__all__ = [
    "ValidationEngine",
    "PresentationState",
    "CATEGORY_RULES",
]
