"""Validity of a group of fields."""

from typing import Iterable

from .field import Field


def fields_valid(fields: Iterable[Field]) -> bool:
    """
    Report whether every field in the collection is free of errors.

    Only ``errors`` is consulted. An optional empty field has no errors and
    counts as valid; a required empty field always carries a Required error.
    An empty collection is valid.

    Args:
        fields: Fields to check, in any order

    Returns:
        True if no field has a non-empty errors tuple
    """
    return not any(field.errors for field in fields)
