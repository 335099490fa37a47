"""Test suite for formgate.

This package contains tests for:
- Field registration (FieldSchema)
- Per-field rules and presentation tokens (ValidationEngine)
- Full-form passes and submission gating (SubmissionGate)
- Host form state transforms (FormState)
- Event system (emission, serialization)
- Integration scenarios
"""
