"""
formify: declarative validation for single form fields

This library provides:
- Fields that re-validate whenever their value changes
- Required, length, pattern and custom predicate rules
- Built-in email, phone number and URL patterns
- Automatic whitespace trimming and touched tracking
- Structured error codes, rendered by the caller
- YAML field definitions

Example:
    from formify import Field, fields_valid
    from formify import operators as op

    email = Field("", [op.Required(), op.Email()])
    email.value = "foo@bar.com"
    assert email.is_valid
"""

from . import errors, operators
from .collection import fields_valid
from .definition_loader import build_fields, load_definitions, parse_definitions
from .errors import (
    DefinitionError,
    FormifyError,
    InvalidOperatorError,
    InvalidPatternError,
    ValidationError,
)
from .field import Field
from .patterns import DefaultPattern
from .rule_set import RuleSet, resolve_operators

__version__ = "0.1.0"
__all__ = [
    "Field",
    "fields_valid",
    "errors",
    "operators",
    "DefaultPattern",
    "RuleSet",
    "resolve_operators",
    "ValidationError",
    "FormifyError",
    "InvalidPatternError",
    "InvalidOperatorError",
    "DefinitionError",
    "build_fields",
    "load_definitions",
    "parse_definitions",
]
