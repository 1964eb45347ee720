"""
Field: a single form input value with declarative validation.

Example:
    from formify import Field
    from formify import operators as op

    field = Field("", [op.Required(), op.MinLength(3)])
    field.value = "Test"
    if field.is_valid:
        ...
"""

import logging
from typing import Optional, Sequence, Tuple

import regex

from .errors import Custom, MaxLength, MinLength, Pattern, Required, ValidationError
from .operators import CustomValidationHandler, Operator
from .rule_set import RuleSet, resolve_operators

logger = logging.getLogger(__name__)

_GRAPHEME = regex.compile(r"\X")


def character_count(value: str) -> int:
    """Count user-perceived characters (extended grapheme clusters) in value."""
    return len(_GRAPHEME.findall(value))


class Field:
    """
    The value, validation state and configuration of one form field.

    The operator list is resolved once into a RuleSet and never changes
    afterwards. Every assignment to ``value`` re-validates, so ``errors``
    always describes the current value. Unless DisableTrimming was given,
    leading and trailing whitespace is stripped from every value stored.

    ``is_touched`` becomes True the first time the field sees a non-empty
    value and then stays True.
    """

    def __init__(self, initial_value: str = "", operators: Sequence[Operator] = ()):
        """
        Initialize the field and validate the initial value.

        Args:
            initial_value: Starting value (defaults to empty)
            operators: Operators configuring validation, in declaration order

        Raises:
            InvalidPatternError: If a pattern operator carries an invalid regex
            InvalidOperatorError: If an operator argument is unusable
        """
        self._rules = resolve_operators(operators)
        self._errors: Tuple[ValidationError, ...] = ()
        self._is_touched = bool(initial_value)
        self._value = self._normalize(initial_value)
        self.validate()

    def __repr__(self) -> str:
        return f"Field(value={self._value!r}, errors={list(self._errors)!r})"

    @property
    def value(self) -> str:
        """Current value. Assigning re-validates the field."""
        return self._value

    @value.setter
    def value(self, new_value: str) -> None:
        if new_value == self._value:
            return

        if new_value:
            self._is_touched = True

        self._value = self._normalize(new_value)
        self.validate()

    @property
    def rules(self) -> RuleSet:
        """Resolved configuration, including the compiled pattern."""
        return self._rules

    @property
    def errors(self) -> Tuple[ValidationError, ...]:
        """Validation errors for the current value, in evaluation order."""
        return self._errors

    @property
    def is_required(self) -> bool:
        return self._rules.is_required

    @property
    def is_touched(self) -> bool:
        return self._is_touched

    @property
    def min_length(self) -> Optional[int]:
        return self._rules.min_length

    @property
    def max_length(self) -> Optional[int]:
        return self._rules.max_length

    @property
    def pattern(self) -> Optional[str]:
        """Source of the active pattern, if any."""
        return self._rules.pattern_source

    @property
    def custom_handler(self) -> Optional[CustomValidationHandler]:
        return self._rules.custom_handler

    @property
    def disable_trimming(self) -> bool:
        return self._rules.disable_trimming

    @property
    def is_valid(self) -> bool:
        """True when the current value passes every configured rule."""
        if self.is_required and not self._value:
            return False
        return not self._errors

    def validate(self) -> Tuple[ValidationError, ...]:
        """
        Re-validate the current value, replacing ``errors``.

        An optional empty field is always valid. A required empty field
        reports exactly one Required error and nothing else. Otherwise the
        length bounds, the custom predicate and the pattern are each checked,
        in that order, and every failure is recorded.

        Returns:
            The new errors tuple
        """
        value = self._value
        rules = self._rules

        if not value:
            self._errors = (Required(),) if rules.is_required else ()
            return self._errors

        found = []
        length = character_count(value)

        if rules.min_length is not None and length < rules.min_length:
            found.append(MinLength(length))

        if rules.max_length is not None and length > rules.max_length:
            found.append(MaxLength(length))

        if rules.custom_handler is not None and not self._run_custom_handler(value):
            found.append(Custom())

        if not rules.matches_pattern(value):
            found.append(Pattern())

        self._errors = tuple(found)
        return self._errors

    def _normalize(self, value: str) -> str:
        if self._rules.disable_trimming:
            return value
        return value.strip()

    def _run_custom_handler(self, value: str) -> bool:
        # A raising predicate counts as a rejection
        try:
            return bool(self._rules.custom_handler(value))
        except Exception:
            logger.warning(
                f"Custom validation handler raised for value {value!r}, treating as failed",
                exc_info=True,
            )
            return False
