"""
Rule set resolution.

A Field's operator list is resolved exactly once into an immutable RuleSet.
Validation then reads flat slots instead of walking the operator list on every
value change.

Resolution is a single left-to-right pass:
- min_length, max_length, pattern and custom_handler: the last occurrence wins.
- Email, PhoneNumber, UrlNoScheme and UrlWithScheme all write the pattern slot,
  so only the last pattern-setting operator is active.
- Required and DisableTrimming are flags; once set they stay set.

Conflicting or redundant operators are not an error. A pattern that does not
compile is.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional

from . import operators as op
from .errors import InvalidOperatorError, InvalidPatternError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleSet:
    """Immutable validation configuration of a single field."""

    is_required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern_source: Optional[str] = None
    pattern: Optional[re.Pattern] = None
    custom_handler: Optional[op.CustomValidationHandler] = None
    disable_trimming: bool = False

    def matches_pattern(self, value: str) -> bool:
        """Return True if there is no pattern or it matches the whole value."""
        if self.pattern is None:
            return True
        return self.pattern.fullmatch(value) is not None


def compile_pattern(operator: op.Operator, source: str) -> re.Pattern:
    """
    Compile a pattern source for whole-string matching.

    Args:
        operator: The operator the source came from (used in the error message)
        source: Regular expression source

    Returns:
        Compiled pattern; callers match it with fullmatch()

    Raises:
        InvalidOperatorError: If the source is not a string
        InvalidPatternError: If the source is not a valid regular expression
    """
    if not isinstance(source, str):
        raise InvalidOperatorError(
            f"{type(operator).__name__} expects a pattern string, got {source!r}"
        )
    try:
        return re.compile(source)
    except re.error as e:
        raise InvalidPatternError(operator, source, str(e)) from e


def _check_length(operator: op.Operator, n) -> int:
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise InvalidOperatorError(
            f"{type(operator).__name__} expects a non-negative integer, got {n!r}"
        )
    return n


def resolve_operators(operators: Iterable[op.Operator]) -> RuleSet:
    """
    Resolve an ordered operator sequence into a RuleSet.

    Args:
        operators: Operators in declaration order

    Returns:
        The resolved, immutable RuleSet

    Raises:
        InvalidPatternError: If any pattern operator carries an invalid regex
        InvalidOperatorError: If a length bound is negative or not an integer,
            a pattern source is not a string, a Custom predicate is not
            callable, or an item is not an Operator
    """
    is_required = False
    min_length = None
    max_length = None
    pattern_source = None
    pattern = None
    custom_handler = None
    disable_trimming = False

    for operator in operators:
        if isinstance(operator, op.Required):
            is_required = True
        elif isinstance(operator, op.MinLength):
            min_length = _check_length(operator, operator.n)
        elif isinstance(operator, op.MaxLength):
            max_length = _check_length(operator, operator.n)
        elif isinstance(operator, op.PATTERN_OPERATORS):
            pattern = compile_pattern(operator, operator.source)
            pattern_source = operator.source
        elif isinstance(operator, op.DisableTrimming):
            disable_trimming = True
        elif isinstance(operator, op.Custom):
            if not callable(operator.predicate):
                raise InvalidOperatorError(
                    f"Custom expects a callable predicate, got {operator.predicate!r}"
                )
            custom_handler = operator.predicate
        else:
            raise InvalidOperatorError(f"Unknown operator: {operator!r}")

    rule_set = RuleSet(
        is_required=is_required,
        min_length=min_length,
        max_length=max_length,
        pattern_source=pattern_source,
        pattern=pattern,
        custom_handler=custom_handler,
        disable_trimming=disable_trimming,
    )
    logger.debug(f"Resolved rule set: {rule_set}")
    return rule_set
