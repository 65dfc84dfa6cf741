"""Momentum engine: trailing returns and momentum tag from closing prices."""

import operator
from collections.abc import Iterable, Mapping
from typing import Any

import pandas as pd

from scoresheet.models import MOST_MOMENTUM, MomentumSnapshot, PricePoint
from scoresheet.utils.safe_math import finite_or_none, safe_div, safe_float
from scoresheet.utils.validators import check_rule, check_rule_expr

DAYS_IN_MONTH = 30
HORIZON_DAYS = {
    "return_1m": DAYS_IN_MONTH,
    "return_3m": DAYS_IN_MONTH * 3,
    "return_6m": DAYS_IN_MONTH * 6,
}


def _point_fields(point: Any) -> tuple[Any, Any]:
    if isinstance(point, PricePoint):
        return point.date, point.close
    if isinstance(point, Mapping):
        return point.get("date"), point.get("close")
    date, close = point
    return date, close


def history_to_series(history: Iterable[Any]) -> pd.Series:
    """
    Build an ascending close-price series indexed by UTC timestamp.

    Accepts PricePoint objects, ``{"date", "close"}`` mappings or
    ``(date, close)`` pairs. Malformed points and points with an
    unparseable date or close are skipped.

    Args:
        history: Price observations in any order

    Returns:
        Float series sorted by timestamp (stable for equal timestamps)
    """
    dates: list[Any] = []
    closes: list[float] = []
    for point in history:
        try:
            date, close = _point_fields(point)
        except (TypeError, ValueError):
            continue
        close_val = safe_float(close)
        if date is None or close_val is None:
            continue
        dates.append(date)
        closes.append(close_val)

    if not dates:
        return pd.Series(dtype=float)

    index = pd.to_datetime(pd.Series(dates), utc=True, format="mixed", errors="coerce")
    series = pd.Series(closes, index=pd.DatetimeIndex(index), dtype=float)
    series = series[series.index.notna()]
    return series.sort_index(kind="mergesort")


def price_at_or_before(series: pd.Series, cutoff: pd.Timestamp) -> float | None:
    """Close of the latest observation at or before cutoff."""
    window = series.loc[:cutoff]
    if window.empty:
        return None
    return float(window.iloc[-1])


def trailing_return(latest: float, past: float | None) -> float | None:
    """latest / past - 1, or None if past is missing or zero."""
    ratio = safe_div(latest, past)
    if ratio is None:
        return None
    return ratio - 1


def classify_momentum(
    return_1m: float | None,
    return_3m: float | None,
    return_6m: float | None,
) -> str | None:
    """
    Tag positive, accelerating momentum.

    All three returns must be present and positive, with
    1M > 3M > 6M.
    """
    all_positive = all(check_rule(r, 0, operator.gt) for r in (return_1m, return_3m, return_6m))
    accelerating = check_rule_expr(return_3m, return_6m) and check_rule_expr(return_1m, return_3m)
    if all_positive and accelerating:
        return MOST_MOMENTUM
    return None


def compute_momentum(history: Iterable[Any]) -> MomentumSnapshot:
    """
    Trailing 1/3/6-month returns, momentum tag and high/low distance.

    Args:
        history: Unordered (date, close) observations

    Returns:
        MomentumSnapshot; all fields None for an empty history
    """
    series = history_to_series(history)
    if series.empty:
        return MomentumSnapshot()

    latest_ts = series.index[-1]
    latest = float(series.iloc[-1])

    returns = {
        name: trailing_return(latest, price_at_or_before(series, latest_ts - pd.Timedelta(days=days)))
        for name, days in HORIZON_DAYS.items()
    }

    high_ratio = safe_div(latest, float(series.max()))
    low_ratio = safe_div(latest, float(series.min()))

    return MomentumSnapshot(
        return_1m=finite_or_none(returns["return_1m"]),
        return_3m=finite_or_none(returns["return_3m"]),
        return_6m=finite_or_none(returns["return_6m"]),
        tag=classify_momentum(returns["return_1m"], returns["return_3m"], returns["return_6m"]),
        distance_from_high=high_ratio - 1 if high_ratio is not None else None,
        distance_from_low=low_ratio - 1 if low_ratio is not None else None,
    )
