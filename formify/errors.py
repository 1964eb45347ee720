"""
Validation errors and configuration exceptions.

Two families live here:

- ValidationError variants are plain values. A Field accumulates them in its
  ``errors`` tuple; they are never raised. Equality is structural, so tests and
  callers can write ``MinLength(3) in field.errors``.
- FormifyError subclasses are real exceptions raised while a field is being
  configured (bad pattern, bad operator argument, malformed definition file).
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional


@dataclass(frozen=True)
class ValidationError:
    """Base for the structured validation errors a Field reports."""

    code: ClassVar[str] = "validation_error"

    def to_dict(self) -> Dict[str, Any]:
        """Return a serializable form for callers that render messages."""
        return {"code": type(self).code}


@dataclass(frozen=True)
class Required(ValidationError):
    """A required field is empty."""

    code: ClassVar[str] = "required"


@dataclass(frozen=True)
class Pattern(ValidationError):
    """The value does not match the configured pattern as a whole."""

    code: ClassVar[str] = "pattern"


@dataclass(frozen=True)
class MinLength(ValidationError):
    """The value is shorter than the configured minimum.

    ``actual_length`` is the length of the value that failed, not the bound.
    """

    actual_length: int
    code: ClassVar[str] = "min_length"

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "actual_length": self.actual_length}


@dataclass(frozen=True)
class MaxLength(ValidationError):
    """The value is longer than the configured maximum.

    ``actual_length`` is the length of the value that failed, not the bound.
    """

    actual_length: int
    code: ClassVar[str] = "max_length"

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "actual_length": self.actual_length}


@dataclass(frozen=True)
class Custom(ValidationError):
    """The custom predicate rejected the value."""

    code: ClassVar[str] = "custom"


class FormifyError(Exception):
    """Base for errors raised while configuring fields."""


class InvalidPatternError(FormifyError, ValueError):
    """A pattern source failed to compile."""

    def __init__(self, operator: Any, source: str, reason: Optional[str] = None):
        self.operator = operator
        self.source = source
        message = f"Invalid pattern in {operator!r}: {source!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidOperatorError(FormifyError, ValueError):
    """An operator was given an argument it cannot work with."""


class DefinitionError(FormifyError):
    """A field definition document is malformed or cannot be loaded."""
