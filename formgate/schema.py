"""Field registration for formgate.

A FieldSchema classifies field identifiers into validation categories. It is
built once from four disjoint identifier sets and never changes afterwards,
so a single instance can be shared by every form that uses it.

Usage:
    >>> from formgate.schema import FieldSchema
    >>> schema = FieldSchema(text=["firstName"], numeric=["salary"])
    >>> schema.classify("salary")
    <FieldCategory.NUMERIC: 'numeric'>
    >>> schema.classify("nickname")
    <FieldCategory.UNCLASSIFIED: 'unclassified'>
"""

from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

from formgate.errors import SchemaConfigurationError
from formgate.types import FieldCategory, FieldIdentifier


# Shape of a registration document accepted by FieldSchema.from_dict
REGISTRATION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        category.value: {
            "type": "array",
            "items": {"type": "string", "minLength": 1},
        }
        for category in (
            FieldCategory.TEXT,
            FieldCategory.NUMERIC,
            FieldCategory.FILE,
            FieldCategory.DATE,
        )
    },
    "additionalProperties": False,
}

_registration_validator = Draft7Validator(REGISTRATION_SCHEMA)


class FieldSchema:
    """Immutable mapping of field identifiers to validation categories.

    Args:
        text: Identifiers whose value must be non-blank text
        numeric: Identifiers whose value must be a positive number
        file: Identifiers that require a file reference
        date: Identifiers whose value must be a calendar date

    Raises:
        SchemaConfigurationError: If an identifier appears in more than one set,
            or a set is given as a bare string
    """

    def __init__(
        self,
        text: Optional[Iterable[FieldIdentifier]] = None,
        numeric: Optional[Iterable[FieldIdentifier]] = None,
        file: Optional[Iterable[FieldIdentifier]] = None,
        date: Optional[Iterable[FieldIdentifier]] = None,
    ) -> None:
        registrations = [
            (FieldCategory.TEXT, text),
            (FieldCategory.NUMERIC, numeric),
            (FieldCategory.FILE, file),
            (FieldCategory.DATE, date),
        ]

        seen: Dict[FieldIdentifier, List[FieldCategory]] = {}
        for category, identifiers in registrations:
            if isinstance(identifiers, str):
                raise SchemaConfigurationError(
                    f"Identifiers for category '{category.value}' must be a collection "
                    f"of strings, not the string '{identifiers}'"
                )
            for identifier in identifiers or ():
                categories = seen.setdefault(identifier, [])
                if category not in categories:
                    categories.append(category)

        conflicts = {ident: cats for ident, cats in seen.items() if len(cats) > 1}
        if conflicts:
            details = "; ".join(
                f"'{ident}' in {', '.join(c.value for c in cats)}"
                for ident, cats in sorted(conflicts.items())
            )
            raise SchemaConfigurationError(
                f"Field identifiers registered under more than one category: {details}",
                conflicts=conflicts,
            )

        self._categories: Mapping[FieldIdentifier, FieldCategory] = MappingProxyType(
            {ident: cats[0] for ident, cats in seen.items()}
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldSchema":
        """Build a schema from a registration document.

        Args:
            data: Mapping with optional "text", "numeric", "file" and "date"
                lists of identifiers

        Raises:
            SchemaConfigurationError: If the document has the wrong shape or
                registers an identifier twice

        Examples:
            >>> schema = FieldSchema.from_dict({"date": ["startDate"]})
            >>> schema.classify("startDate")
            <FieldCategory.DATE: 'date'>
        """
        error = best_match(_registration_validator.iter_errors(data))
        if error is not None:
            location = ".".join(str(p) for p in error.path) or "<root>"
            raise SchemaConfigurationError(
                f"Invalid field registration at '{location}': {error.message}"
            )
        return cls(
            text=data.get("text"),
            numeric=data.get("numeric"),
            file=data.get("file"),
            date=data.get("date"),
        )

    def classify(self, identifier: FieldIdentifier) -> FieldCategory:
        """Return the category of ``identifier`` (UNCLASSIFIED if unregistered)."""
        return self._categories.get(identifier, FieldCategory.UNCLASSIFIED)

    @property
    def identifiers(self) -> FrozenSet[FieldIdentifier]:
        """All registered identifiers."""
        return frozenset(self._categories)

    def identifiers_in(self, category: FieldCategory) -> FrozenSet[FieldIdentifier]:
        return frozenset(i for i, c in self._categories.items() if c == category)

    def to_dict(self) -> Dict[str, List[str]]:
        """Convert back to a registration document."""
        result: Dict[str, List[str]] = {}
        for category in (FieldCategory.TEXT, FieldCategory.NUMERIC, FieldCategory.FILE, FieldCategory.DATE):
            identifiers = self.identifiers_in(category)
            if identifiers:
                result[category.value] = sorted(identifiers)
        return result

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._categories

    def __len__(self) -> int:
        return len(self._categories)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldSchema):
            return NotImplemented
        return dict(self._categories) == dict(other._categories)

    def __hash__(self) -> int:
        return hash(frozenset(self._categories.items()))

    def __repr__(self) -> str:
        return f"FieldSchema({self.to_dict()!r})"


__all__ = [
    "FieldSchema",
    "REGISTRATION_SCHEMA",
]
