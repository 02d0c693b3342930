"""
Error types raised by the Hamachi model engine.

Every error carries a stable ``code`` for programmatic handling alongside the
human-readable message, so that callers (for example the CLI in ``--json``
mode) can report failures without parsing message text.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class HamachiError(Exception):
    """
    Base class for all engine errors.

    Attributes:
        code: Stable error code for programmatic handling
        message: Human-readable error description
    """

    code = "hamachi_error"

    def __init__(self, message: str, code: Optional[str] = None):
        if code is not None:
            self.code = code
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "error": type(self).__name__,
            "code": self.code,
            "message": self.message,
        }


class DeclarationError(HamachiError, TypeError):
    """Raised when a field cannot be declared on a model class."""

    code = "declaration_error"


class TypeMismatch(HamachiError, TypeError):
    """
    Raised when a value does not match the type of its field.

    The message names the field, the field type's signature and the
    offending value, in that order.
    """

    code = "type_mismatch"

    def __init__(self, field_name: str, expected: str, value: Any):
        self.field_name = field_name
        self.expected = expected
        self.value = value
        super().__init__(format_mismatch(field_name, expected, value))

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["field"] = self.field_name
        data["expected"] = self.expected
        return data


class FrozenInstanceError(HamachiError, AttributeError):
    """Raised on any mutation of a frozen model instance."""

    code = "frozen_instance"


class MalformedSnapshotError(HamachiError, ValueError):
    """Raised when snapshot text is not valid JSON."""

    code = "malformed_snapshot"


def format_mismatch(field_name: str, expected: str, value: Any) -> str:
    return f"expected {field_name} to be {expected}, got {value!r}"
