"""Host-owned form state for formgate.

FormState bundles the three pieces of state a host keeps for one form: the
current field values, the touched set, and the error map. It is immutable;
every transform returns a new FormState, so no component ever mutates
another's state in place.

SelectionCommitted is the message a selection dialog hands back to its owner
when the user confirms a choice. The owner applies it in one step with
FormState.apply_selection.

Usage:
    >>> from formgate.form_state import FormState
    >>> from formgate.schema import FieldSchema
    >>> from formgate.validation import ValidationEngine
    >>> engine = ValidationEngine(FieldSchema(text=["firstName"]))
    >>> state = FormState().with_value(engine, "firstName", "")
    >>> state.errors
    {'firstName': 'required'}
    >>> state.presentation(engine, "firstName").feedback_class
    <FeedbackClass.INVALID: 'invalid'>
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, Mapping, Optional

from formgate.events import EventEmitter, FormEvent
from formgate.gate import ValidationVerdict
from formgate.types import ErrorMap, FieldIdentifier, FormEventType
from formgate.validation import PresentationState, ValidationEngine


@dataclass(frozen=True)
class SelectionCommitted:
    """Values chosen in a selection dialog, committed as a single unit.

    Attributes:
        values: Field identifier -> selected value
        source: Optional name of the dialog that produced the selection

    Examples:
        >>> selection = SelectionCommitted({"candidate": "Jane Doe", "candidateId": "17"})
        >>> sorted(selection.values)
        ['candidate', 'candidateId']
    """
    values: Mapping[FieldIdentifier, Any]
    source: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {"values": dict(self.values)}
        if self.source is not None:
            result["source"] = self.source
        return result


@dataclass(frozen=True)
class FormState:
    """Immutable snapshot of one form's values, touched set and errors.

    Attributes:
        values: Field identifier -> current value
        touched: Identifiers the user has interacted with
        errors: Field identifier -> current error message (None if valid).
            Only fields that have been validated have an entry.

    Examples:
        >>> state = FormState(values={"salary": "100"})
        >>> state.is_touched("salary")
        False
        >>> state.touch_all().is_touched("salary")
        True
    """
    values: Dict[FieldIdentifier, Any] = field(default_factory=dict)
    touched: FrozenSet[FieldIdentifier] = frozenset()
    errors: ErrorMap = field(default_factory=dict)

    def with_value(
        self,
        engine: ValidationEngine,
        identifier: FieldIdentifier,
        value: Any,
        touch: bool = True,
    ) -> "FormState":
        """Set a field value and revalidate that field.

        Args:
            engine: Engine used to validate the new value
            identifier: Field being changed
            value: New value
            touch: Whether the change also marks the field touched

        Returns:
            New FormState with the value, error and touched set updated
        """
        values = dict(self.values)
        values[identifier] = value
        errors = dict(self.errors)
        errors[identifier] = engine.error_message(identifier, value)
        touched = self.touched | {identifier} if touch else self.touched
        return replace(self, values=values, errors=errors, touched=touched)

    def touch(self, engine: ValidationEngine, identifier: FieldIdentifier) -> "FormState":
        """Mark a field touched (e.g. on blur) and validate its current value."""
        errors = dict(self.errors)
        errors[identifier] = engine.error_message(identifier, self.values.get(identifier))
        return replace(self, touched=self.touched | {identifier}, errors=errors)

    def touch_all(self) -> "FormState":
        """Mark every field with a value as touched, without revalidating."""
        return replace(self, touched=self.touched | frozenset(self.values))

    def with_verdict(self, verdict: ValidationVerdict) -> "FormState":
        """Apply the result of a full validation pass.

        Errors of the validated fields are replaced and every validated field
        becomes touched.
        """
        errors = dict(self.errors)
        errors.update(verdict.errors)
        return replace(self, errors=errors, touched=self.touched | verdict.touched)

    def apply_selection(
        self,
        engine: ValidationEngine,
        selection: SelectionCommitted,
        emitter: Optional[EventEmitter] = None,
    ) -> "FormState":
        """Apply a committed selection in one step.

        Every selected field gets its new value, is validated and marked
        touched. The dialog's own state is never consulted.

        Args:
            engine: Engine used to validate the selected values
            selection: Selection produced by the dialog
            emitter: Optional EventEmitter notified with SELECTION_COMMITTED

        Returns:
            New FormState
        """
        values = dict(self.values)
        errors = dict(self.errors)
        for identifier, value in selection.values.items():
            values[identifier] = value
            errors[identifier] = engine.error_message(identifier, value)

        if emitter is not None:
            emitter.emit(FormEvent.create(FormEventType.SELECTION_COMMITTED, payload=selection.to_dict()))

        return replace(
            self,
            values=values,
            errors=errors,
            touched=self.touched | frozenset(selection.values),
        )

    def is_touched(self, identifier: FieldIdentifier) -> bool:
        return identifier in self.touched

    def error_for(self, identifier: FieldIdentifier) -> Optional[str]:
        return self.errors.get(identifier)

    def presentation(self, engine: ValidationEngine, identifier: FieldIdentifier) -> PresentationState:
        """Presentation tokens for a field from this snapshot."""
        return engine.presentation_state(identifier, self.is_touched(identifier), self.error_for(identifier))

    @property
    def has_errors(self) -> bool:
        return any(message is not None for message in self.errors.values())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "values": dict(self.values),
            "touched": sorted(self.touched),
            "errors": dict(self.errors),
        }


__all__ = [
    "FormState",
    "SelectionCommitted",
]
