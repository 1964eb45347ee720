"""
Operators: the declarative directives a Field is configured with.

An ordered list of operators is handed to a Field once, at construction, and
resolved into a RuleSet (see rule_set.py). Operators are frozen values; the
ones without arguments compare equal to each other, so ``Required()`` can be
reused or created inline.

Example:
    from formify import Field
    from formify import operators as op

    field = Field("", [op.Required(), op.MinLength(3), op.Email()])
"""

from dataclasses import dataclass
from typing import Callable

from .patterns import DefaultPattern

CustomValidationHandler = Callable[[str], bool]


@dataclass(frozen=True)
class Operator:
    """Base for every field configuration directive."""


@dataclass(frozen=True)
class Required(Operator):
    """The field must not be empty."""


@dataclass(frozen=True)
class Pattern(Operator):
    """The whole value must match ``source``."""

    source: str


@dataclass(frozen=True)
class MinLength(Operator):
    """The value must have at least ``n`` characters."""

    n: int


@dataclass(frozen=True)
class MaxLength(Operator):
    """The value must have at most ``n`` characters."""

    n: int


@dataclass(frozen=True)
class Email(Operator):
    """Shortcut for ``Pattern(DefaultPattern.EMAIL)``."""

    source = DefaultPattern.EMAIL.value


@dataclass(frozen=True)
class PhoneNumber(Operator):
    """Shortcut for ``Pattern(DefaultPattern.PHONE)``."""

    source = DefaultPattern.PHONE.value


@dataclass(frozen=True)
class UrlNoScheme(Operator):
    """Shortcut for ``Pattern(DefaultPattern.URL_NO_SCHEME)``, e.g. www.example.com."""

    source = DefaultPattern.URL_NO_SCHEME.value


@dataclass(frozen=True)
class UrlWithScheme(Operator):
    """Shortcut for ``Pattern(DefaultPattern.URL_WITH_SCHEME)``, e.g. https://example.com."""

    source = DefaultPattern.URL_WITH_SCHEME.value


@dataclass(frozen=True)
class DisableTrimming(Operator):
    """Keep leading and trailing whitespace in the stored value."""


@dataclass(frozen=True)
class Custom(Operator):
    """Validate with a caller supplied predicate.

    The predicate is called synchronously with the current value and should
    return True when the value is acceptable. It must not block.
    """

    predicate: CustomValidationHandler


PATTERN_OPERATORS = (Pattern, Email, PhoneNumber, UrlNoScheme, UrlWithScheme)
