"""Submission gate for formgate.

The SubmissionGate runs the exhaustive validation pass a form performs at
submit time: every field the host currently holds is re-validated, every one
of them is promoted to touched, and the aggregate verdict decides whether
the host's success action may run.

Usage:
    >>> from formgate.gate import SubmissionGate
    >>> from formgate.schema import FieldSchema
    >>> from formgate.validation import ValidationEngine
    >>> schema = FieldSchema(text=["firstName"], numeric=["salary"])
    >>> gate = SubmissionGate(ValidationEngine(schema))
    >>> verdict = gate.validate_all({"firstName": "", "salary": "-5"})
    >>> verdict.all_valid
    False
    >>> sorted(verdict.touched)
    ['firstName', 'salary']
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional

import structlog

from formgate.errors import FieldError
from formgate.events import EventEmitter, FormEvent
from formgate.types import ErrorMap, FieldIdentifier, FormEventType
from formgate.validation import ValidationEngine

logger = structlog.get_logger()


SuccessAction = Callable[[Mapping[FieldIdentifier, Any]], Any]


@dataclass(frozen=True)
class ValidationVerdict:
    """Result of a full-form validation pass.

    Attributes:
        errors: Field identifier -> error message, None for valid fields.
            Keys are exactly the identifiers that were validated.
        all_valid: True iff no field has an error
        touched: Identifiers promoted to touched by the pass
        field_errors: Field identifier -> FieldError, failing fields only

    Examples:
        >>> verdict = ValidationVerdict(errors={"name": None}, all_valid=True)
        >>> verdict.failed_fields
        []
    """
    errors: ErrorMap
    all_valid: bool
    touched: FrozenSet[FieldIdentifier] = frozenset()
    field_errors: Dict[FieldIdentifier, FieldError] = field(default_factory=dict)

    @property
    def failed_fields(self) -> List[FieldIdentifier]:
        """Identifiers with an error, in validation order."""
        return [ident for ident, message in self.errors.items() if message is not None]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "allValid": self.all_valid,
            "errors": dict(self.errors),
            "touched": sorted(self.touched),
            "fieldErrors": [e.to_dict() for e in self.field_errors.values()],
        }


class SubmissionGate:
    """Full-form validation and submission gating.

    Attributes:
        engine: ValidationEngine applied to every field
        emitter: Optional EventEmitter receiving verdict and submission events
        form_id: Optional identifier stamped on emitted events

    Examples:
        >>> from formgate.schema import FieldSchema
        >>> gate = SubmissionGate(ValidationEngine(FieldSchema(text=["firstName"])))
        >>> sent = []
        >>> gate.submit({"firstName": "John"}, on_success=sent.append).all_valid
        True
        >>> sent
        [{'firstName': 'John'}]
    """

    def __init__(
        self,
        engine: ValidationEngine,
        emitter: Optional[EventEmitter] = None,
        form_id: Optional[str] = None,
    ) -> None:
        self.engine = engine
        self.emitter = emitter
        self.form_id = form_id

    def validate_all(self, values: Mapping[FieldIdentifier, Any]) -> ValidationVerdict:
        """Validate every field present in ``values``.

        Only the identifiers in ``values`` are checked, not the whole schema.
        A field holding a value of an unexpected shape gets its own error;
        the remaining fields are still evaluated.

        Args:
            values: The host's current field values

        Returns:
            ValidationVerdict with the error map, pass/fail flag and the
            full set of touched identifiers
        """
        errors: ErrorMap = {}
        field_errors: Dict[FieldIdentifier, FieldError] = {}

        for identifier, value in values.items():
            error = self.engine.validate_field(identifier, value)
            errors[identifier] = error.message if error else None
            if error is not None:
                field_errors[identifier] = error

        verdict = ValidationVerdict(
            errors=errors,
            all_valid=not field_errors,
            touched=frozenset(values),
            field_errors=field_errors,
        )

        logger.info(
            "validation_complete",
            form_id=self.form_id,
            all_valid=verdict.all_valid,
            total_fields=len(errors),
            failed_fields=verdict.failed_fields,
        )

        self._emit(
            FormEventType.VALIDATION_PASSED if verdict.all_valid else FormEventType.VALIDATION_FAILED,
            {"errors": dict(errors), "touched": sorted(verdict.touched)},
        )
        return verdict

    def submit(
        self,
        values: Mapping[FieldIdentifier, Any],
        on_success: Optional[SuccessAction] = None,
    ) -> ValidationVerdict:
        """Validate all fields and run ``on_success`` only if they all pass.

        Exceptions raised by ``on_success`` propagate to the caller.

        Args:
            values: The host's current field values
            on_success: Host action (e.g. sending the form) called with ``values``

        Returns:
            The ValidationVerdict of the full pass
        """
        verdict = self.validate_all(values)
        if not verdict.all_valid:
            logger.info("submission_blocked", form_id=self.form_id, failed_fields=verdict.failed_fields)
            self._emit(FormEventType.SUBMISSION_BLOCKED, {"failedFields": verdict.failed_fields})
            return verdict

        self._emit(FormEventType.SUBMISSION_ALLOWED, {"fields": sorted(values)})
        if on_success is not None:
            on_success(values)
        return verdict

    def _emit(self, event_type: FormEventType, payload: Dict[str, Any]) -> None:
        if self.emitter is None:
            return
        self.emitter.emit(FormEvent.create(event_type, form_id=self.form_id, payload=payload))


__all__ = [
    "SubmissionGate",
    "ValidationVerdict",
    "SuccessAction",
]
