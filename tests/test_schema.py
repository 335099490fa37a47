"""Unit tests for FieldSchema.

Tests cover:
- Classification of registered and unregistered identifiers
- Rejection of identifiers registered under more than one category
- Building from registration documents (jsonschema-checked)
- Round trip through to_dict
"""

import pytest

from formgate.errors import SchemaConfigurationError
from formgate.schema import FieldSchema
from formgate.types import FieldCategory


class TestClassify:
    """Test identifier classification."""

    def test_each_category(self):
        """Should resolve every registered identifier to its category."""
        schema = FieldSchema(
            text=["firstName", "lastName"],
            numeric=["salary"],
            file=["resume"],
            date=["startDate"],
        )
        assert schema.classify("firstName") == FieldCategory.TEXT
        assert schema.classify("lastName") == FieldCategory.TEXT
        assert schema.classify("salary") == FieldCategory.NUMERIC
        assert schema.classify("resume") == FieldCategory.FILE
        assert schema.classify("startDate") == FieldCategory.DATE

    def test_unknown_identifier_is_unclassified(self):
        """Should default to UNCLASSIFIED instead of failing."""
        schema = FieldSchema(text=["firstName"])
        assert schema.classify("nickname") == FieldCategory.UNCLASSIFIED
        assert schema.classify("") == FieldCategory.UNCLASSIFIED

    def test_empty_schema(self):
        """Should classify everything as UNCLASSIFIED when nothing is registered."""
        schema = FieldSchema()
        assert len(schema) == 0
        assert schema.classify("anything") == FieldCategory.UNCLASSIFIED

    def test_classify_is_deterministic(self):
        """Should return the same category on repeated calls."""
        schema = FieldSchema(numeric=["salary"])
        assert {schema.classify("salary") for _ in range(5)} == {FieldCategory.NUMERIC}

    def test_accepts_any_iterable(self):
        """Should accept sets, tuples and generators."""
        schema = FieldSchema(text={"a"}, numeric=("b",), date=(x for x in ["c"]))
        assert schema.identifiers == frozenset({"a", "b", "c"})

    def test_repeated_identifier_in_same_set(self):
        """Should tolerate duplicates within a single category."""
        schema = FieldSchema(text=["firstName", "firstName"])
        assert len(schema) == 1


class TestConflicts:
    """Test fail-fast handling of misconfigured registrations."""

    def test_identifier_in_two_categories(self):
        """Should raise SchemaConfigurationError naming the identifier."""
        with pytest.raises(SchemaConfigurationError) as exc_info:
            FieldSchema(text=["salary"], numeric=["salary"])

        assert "salary" in str(exc_info.value)
        assert exc_info.value.conflicts == {
            "salary": [FieldCategory.TEXT, FieldCategory.NUMERIC]
        }

    def test_all_conflicts_reported(self):
        """Should report every conflicting identifier at once."""
        with pytest.raises(SchemaConfigurationError) as exc_info:
            FieldSchema(text=["a", "b"], file=["a"], date=["b"], numeric=["c"])

        assert set(exc_info.value.conflicts) == {"a", "b"}

    @pytest.mark.parametrize("category", ["text", "numeric", "file", "date"])
    def test_bare_string_rejected(self, category):
        """Should refuse a single string instead of splitting it into characters."""
        with pytest.raises(SchemaConfigurationError) as exc_info:
            FieldSchema(**{category: "firstName"})

        assert category in str(exc_info.value)
        assert "firstName" in str(exc_info.value)

    def test_is_value_error(self):
        """Should be catchable as ValueError."""
        with pytest.raises(ValueError):
            FieldSchema(file=["x"], date=["x"])


class TestFromDict:
    """Test building schemas from registration documents."""

    def test_valid_document(self):
        """Should build a schema from a complete document."""
        schema = FieldSchema.from_dict({
            "text": ["firstName"],
            "numeric": ["salary"],
            "file": ["resume"],
            "date": ["startDate"],
        })
        assert schema.classify("resume") == FieldCategory.FILE
        assert len(schema) == 4

    def test_partial_document(self):
        """Should treat missing keys as empty categories."""
        schema = FieldSchema.from_dict({"date": ["startDate"]})
        assert schema.identifiers == frozenset({"startDate"})

    def test_unknown_category_key(self):
        """Should reject categories that do not exist."""
        with pytest.raises(SchemaConfigurationError):
            FieldSchema.from_dict({"email": ["contact"]})

    def test_non_string_identifier(self):
        """Should reject identifiers that are not strings."""
        with pytest.raises(SchemaConfigurationError) as exc_info:
            FieldSchema.from_dict({"text": [1]})
        assert "text.0" in str(exc_info.value)

    def test_empty_identifier(self):
        """Should reject empty identifiers."""
        with pytest.raises(SchemaConfigurationError):
            FieldSchema.from_dict({"numeric": [""]})

    def test_not_an_object(self):
        """Should reject a document that is not a mapping."""
        with pytest.raises(SchemaConfigurationError):
            FieldSchema.from_dict(["firstName"])

    def test_conflict_in_document(self):
        """Should apply the same conflict check as the constructor."""
        with pytest.raises(SchemaConfigurationError) as exc_info:
            FieldSchema.from_dict({"text": ["x"], "date": ["x"]})
        assert "x" in exc_info.value.conflicts


class TestSchemaHelpers:
    """Test read-only helpers."""

    def test_to_dict_round_trip(self):
        """Should produce a document that rebuilds an equal schema."""
        schema = FieldSchema(text=["b", "a"], date=["startDate"])
        document = schema.to_dict()

        assert document == {"text": ["a", "b"], "date": ["startDate"]}
        assert FieldSchema.from_dict(document) == schema

    def test_identifiers_in(self):
        """Should list identifiers per category."""
        schema = FieldSchema(text=["a", "b"], numeric=["c"])
        assert schema.identifiers_in(FieldCategory.TEXT) == frozenset({"a", "b"})
        assert schema.identifiers_in(FieldCategory.FILE) == frozenset()

    def test_contains(self):
        """Should support membership tests for registered identifiers."""
        schema = FieldSchema(file=["resume"])
        assert "resume" in schema
        assert "cover" not in schema

    def test_schema_is_hashable(self):
        """Should be usable as a dict key."""
        schema = FieldSchema(text=["a"])
        assert {schema: 1}[FieldSchema(text=["a"])] == 1
