"""
Schema Validator - JSON Schema validation of analysis engine responses.

Responsibility:
- Validate decoded engine output against the requested response schema
- Reject malformed responses with clear, actionable messages
- Does NOT transform data
"""

from typing import Any

from jsonschema import Draft7Validator


class ValidationError(Exception):
    """Schema validation error."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Schema validation failed: {', '.join(errors)}")


class SchemaValidator:
    """
    JSON Schema validator.

    Uses jsonschema Draft 7 for strict validation.
    """

    @staticmethod
    def validate(data: Any, schema: dict) -> None:
        """
        Validate data against a schema.

        Args:
            data: Decoded JSON value
            schema: JSON Schema

        Raises:
            ValidationError: If validation fails
        """
        validator = Draft7Validator(schema)
        errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])

        if errors:
            error_messages = [
                f"{'.'.join(str(p) for p in error.path) or '<root>'}: {error.message}"
                for error in errors
            ]
            raise ValidationError(error_messages)


__all__ = ["SchemaValidator", "ValidationError"]
