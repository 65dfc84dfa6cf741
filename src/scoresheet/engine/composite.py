"""Composite scorer: cross-sectional normalization and weighted aggregation.

The only batch-scoped component. Every security's score depends on the
distribution of each metric across the whole batch, so callers must collect
all ScoreInputs before calling ``compute_composite_scores`` once.
"""

import math
from collections.abc import Callable, Sequence

import numpy as np

from scoresheet.models import CATEGORY_NAMES, CompositeResult, ScoreInputs
from scoresheet.utils.safe_math import clamp, round_half_up

NEUTRAL_SCORE = 0.5

# Bell curve for earnings quality: peaks where FCF equals net income
BELL_CENTER = 1.0
BELL_WIDTH = 0.5

MAX_BETTER = "max"
MIN_BETTER = "min"
BELL = "bell"

# category -> [(metric, normalization mode, weight)]
SCORING_CATEGORIES: dict[str, list[tuple[str, str, float]]] = {
    "valuation": [
        ("pe", MIN_BETTER, 1.0),
        ("ev_ebitda", MIN_BETTER, 1.0),
        ("dcf_vs_price", MAX_BETTER, 1.0),
    ],
    "profitability": [
        ("roic", MAX_BETTER, 0.5),
        ("ebit_margin", MAX_BETTER, 0.25),
        ("roe", MAX_BETTER, 0.25),
    ],
    "growth": [
        ("revenue_cagr", MAX_BETTER, 0.4),
        ("eps_cagr", MAX_BETTER, 0.4),
        ("fcf_cagr", MAX_BETTER, 0.2),
    ],
    "health": [
        ("debt_to_equity", MIN_BETTER, 0.5),
        ("interest_coverage", MAX_BETTER, 0.5),
    ],
    "sentiment": [
        ("insider_net_buys", MAX_BETTER, 0.4),
        ("institutional_pct", MAX_BETTER, 0.3),
        ("short_interest_pct", MIN_BETTER, 0.2),
        ("beta", MAX_BETTER, 0.1),
    ],
    "earningsQuality": [
        ("fcf_to_ni", BELL, 1.0),
    ],
}

CATEGORY_WEIGHTS: dict[str, float] = {
    "valuation": 0.25,
    "profitability": 0.20,
    "growth": 0.20,
    "health": 0.15,
    "sentiment": 0.10,
    "earningsQuality": 0.10,
}

# Applied to the raw value before normalization; beta scores by closeness to 1
METRIC_TRANSFORMS: dict[str, Callable[[float], float]] = {
    "beta": lambda beta: 1 - abs(beta - 1),
}


def normalize_max_better(value: float, series: np.ndarray) -> float:
    """(value - min) / (max - min); 0.5 when the series has no spread."""
    low, high = float(series.min()), float(series.max())
    if high == low:
        return NEUTRAL_SCORE
    return clamp((value - low) / (high - low), 0.0, 1.0)


def normalize_min_better(value: float, series: np.ndarray) -> float:
    """(max - value) / (max - min); 0.5 when the series has no spread."""
    low, high = float(series.min()), float(series.max())
    if high == low:
        return NEUTRAL_SCORE
    return clamp((high - value) / (high - low), 0.0, 1.0)


def bell_score(value: float, center: float = BELL_CENTER, width: float = BELL_WIDTH) -> float:
    """Gaussian score peaking at 1.0 when value equals center."""
    return math.exp(-((value - center) ** 2) / (2 * width**2))


def _metric_value(row: ScoreInputs, metric: str) -> float | None:
    value = getattr(row, metric)
    if value is None:
        return None
    transform = METRIC_TRANSFORMS.get(metric)
    return transform(value) if transform else value


def _cross_section(rows: Sequence[ScoreInputs], metric: str) -> np.ndarray:
    values = [_metric_value(row, metric) for row in rows]
    return np.array([v for v in values if v is not None], dtype=float)


def score_metric(value: float | None, series: np.ndarray, mode: str) -> float:
    """
    Normalize one metric value to [0, 1] against its cross-section.

    Missing values and empty cross-sections score neutral (0.5).
    """
    if value is None:
        return NEUTRAL_SCORE
    if mode == BELL:
        return bell_score(value)
    if series.size == 0:
        return NEUTRAL_SCORE
    if mode == MIN_BETTER:
        return normalize_min_better(value, series)
    return normalize_max_better(value, series)


def _weighted(scores: list[tuple[float, float]]) -> float:
    total_weight = sum(weight for _, weight in scores)
    return sum(score * weight for score, weight in scores) / total_weight


def _to_percent(score: float) -> int:
    return int(clamp(round_half_up(score * 100), 0, 100))


def compute_composite_scores(rows: Sequence[ScoreInputs]) -> list[CompositeResult]:
    """
    Score a batch of securities cross-sectionally.

    Args:
        rows: ScoreInputs for every security in the batch

    Returns:
        One CompositeResult per input, same order
    """
    if not rows:
        return []

    metrics = {metric for members in SCORING_CATEGORIES.values() for metric, _, _ in members}
    cross_sections = {metric: _cross_section(rows, metric) for metric in metrics}

    results: list[CompositeResult] = []
    for row in rows:
        category_scores: dict[str, float] = {}
        for category, members in SCORING_CATEGORIES.items():
            scored = [
                (score_metric(_metric_value(row, metric), cross_sections[metric], mode), weight)
                for metric, mode, weight in members
            ]
            category_scores[category] = _weighted(scored)

        composite = sum(
            category_scores[category] * weight for category, weight in CATEGORY_WEIGHTS.items()
        )
        results.append(
            CompositeResult(
                composite=_to_percent(composite),
                subscores={name: _to_percent(category_scores[name]) for name in CATEGORY_NAMES},
            )
        )

    return results
