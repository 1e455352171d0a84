"""Validity predicates over stored sequences.

This module checks whether every value of a sequence is populated,
numeric, or a proportion. Each check stops at the first failing value.
"""

from __future__ import annotations

import math
import numbers
import re
from decimal import Decimal
from typing import Any, Iterable

_NUMBER_PATTERN = re.compile(
    r"""
    ^\s*
    [+-]?
    (?:\d+(?:\.\d*)?|\.\d+)
    (?:[eE][+-]?\d+)?
    \s*$
    """,
    re.VERBOSE,
)


def has_content(value: Any) -> bool:
    """Return whether a value carries content.

    None and strings that are empty or whitespace only have no content.
    """
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def as_number(value: Any) -> float | None:
    """Interpret a value as a number.

    Args:
        value: Stored value.

    Returns:
        The float value, or None when the value is not numeric.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal) and value.is_snan():
        return None
    if isinstance(value, (numbers.Real, Decimal)):
        return float(value)
    if isinstance(value, str) and _NUMBER_PATTERN.match(value):
        return float(value)
    return None


def all_full(values: Iterable[Any]) -> bool:
    """Return False if any value is empty; an empty sequence is full."""
    for value in values:
        if not has_content(value):
            return False
    return True


def all_numeric(values: Iterable[Any]) -> bool:
    """Return whether every value is numeric.

    An empty sequence is not numeric.

    Args:
        values: Values to check.

    Returns:
        True only when at least one value was checked and all passed.
    """
    checked = False
    for value in values:
        if not has_content(value) or as_number(value) is None:
            return False
        checked = True
    return checked


def all_proportions(values: Iterable[Any]) -> bool:
    """Return whether every value is a number within [0, 1].

    An empty sequence holds no proportions.

    Args:
        values: Values to check.

    Returns:
        True only when at least one value was checked and all passed.
    """
    checked = False
    for value in values:
        number = as_number(value) if has_content(value) else None
        if number is None or math.isnan(number) or not 0.0 <= number <= 1.0:
            return False
        checked = True
    return checked
