"""Null-aware arithmetic helpers.

Every engine computation treats ``None`` as "missing". These helpers keep the
check-then-compute pattern in one place so call sites never divide by zero or
leak NaN/inf to a caller.
"""

import math
from collections.abc import Sequence
from typing import Any


def safe_float(value: Any) -> float | None:
    """
    Convert an upstream value to float or return None.

    Accepts plain numbers, numeric strings and the ``{"raw": value}`` wrapper
    used by quote-summary payloads.

    Args:
        value: Raw upstream value (may be None)

    Returns:
        Finite float, or None if missing or not numeric
    """
    if isinstance(value, dict):
        value = value.get("raw")
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (ValueError, TypeError):
        return None
    return finite_or_none(result)


def finite_or_none(value: float | None) -> float | None:
    """Return value unchanged if finite, else None."""
    if value is None:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def safe_div(numerator: float | None, denominator: float | None) -> float | None:
    """Divide, returning None if either side is missing or denominator is zero."""
    if numerator is None or denominator is None:
        return None
    if denominator == 0:
        return None
    return finite_or_none(numerator / denominator)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return min(max(value, low), high)


def safe_clamp(value: float | None, low: float, high: float) -> float | None:
    """Clamp value into [low, high], passing None through."""
    if value is None:
        return None
    return clamp(value, low, high)


def safe_cagr(series: Sequence[float], max_years: int = 3) -> float | None:
    """
    Compound annual growth rate of a newest-first series.

    Missing when fewer than two points exist or either endpoint is not
    strictly positive. Years are capped at ``max_years``.

    Args:
        series: Values ordered most recent first
        max_years: Cap on the number of compounding periods (default: 3)

    Returns:
        CAGR as decimal (0.12 = 12%), or None
    """
    if len(series) < 2:
        return None

    newest = series[0]
    oldest = series[-1]
    if newest is None or oldest is None or newest <= 0 or oldest <= 0:
        return None

    years = min(len(series) - 1, max_years)
    return finite_or_none((newest / oldest) ** (1 / years) - 1)


def round_half_up(value: float) -> int:
    """Round to nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))
