"""Validation utilities and parameter checks."""

import math
import operator
import re
from collections.abc import Callable

_WHITESPACE = re.compile(r"\s+")


def normalize_ticker(value: str | None) -> str | None:
    """
    Normalize a ticker: strip, uppercase, drop inner whitespace.

    Args:
        value: Raw ticker text (may be None)

    Returns:
        Normalized ticker, or None if nothing remains
    """
    if value is None:
        return None
    ticker = _WHITESPACE.sub("", str(value)).upper()
    return ticker or None


def validate_rate(name: str, value: float, low: float = -1.0, high: float = 1.0) -> float:
    """
    Validate a decimal rate parameter (cost of capital, growth, tax).

    Args:
        name: Parameter name used in the error message
        value: Rate as decimal (0.08 = 8%)
        low: Inclusive lower bound
        high: Inclusive upper bound

    Returns:
        The rate as float

    Raises:
        ValueError: If the rate is not a finite number within bounds
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid {name} {value!r}. Must be a number.")
    try:
        rate = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {name} {value!r}. Must be a number.") from None
    if not math.isfinite(rate):
        raise ValueError(f"Invalid {name} {value!r}. Must be finite.")
    if rate < low or rate > high:
        raise ValueError(f"Invalid {name} {rate}. Must be between {low} and {high}.")
    return rate


def check_rule(
    value: float | None,
    threshold: float,
    comparator: Callable[[float, float], bool] = operator.gt,
) -> bool | None:
    """
    Check a rule with nullable boolean semantics.

    If value is None, returns None (not False).

    Args:
        value: The value to check (may be None)
        threshold: The threshold to compare against
        comparator: Comparison function (default: operator.gt)

    Returns:
        True/False if value is not None, None otherwise
    """
    if value is None:
        return None
    return comparator(value, threshold)


def check_rule_expr(
    value1: float | None,
    value2: float | None,
    comparator: Callable[[float, float], bool] = operator.gt,
) -> bool | None:
    """
    Check a rule comparing two values with nullable boolean semantics.

    If either value is None, returns None (not False).
    """
    if value1 is None or value2 is None:
        return None
    return comparator(value1, value2)
