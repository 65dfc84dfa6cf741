"""Quantitative computation engine."""

from scoresheet.engine.composite import SCORING_CATEGORIES, compute_composite_scores
from scoresheet.engine.dcf import compute_dcf, dcf_vs_price, discounted_cash_flow, estimate_wacc
from scoresheet.engine.forward import compute_forward_view
from scoresheet.engine.metrics import compute_altman_z, compute_series_cagr, derive_metrics
from scoresheet.engine.momentum import compute_momentum
from scoresheet.engine.pipeline import collect_security, score_collected, score_records
from scoresheet.engine.snapshot import build_financial_snapshot

__all__ = [
    # Composite
    "SCORING_CATEGORIES",
    "compute_composite_scores",
    # DCF
    "compute_dcf",
    "dcf_vs_price",
    "discounted_cash_flow",
    "estimate_wacc",
    # Forward view
    "compute_forward_view",
    # Metrics
    "compute_altman_z",
    "compute_series_cagr",
    "derive_metrics",
    # Momentum
    "compute_momentum",
    # Pipeline
    "collect_security",
    "score_collected",
    "score_records",
    # Snapshot
    "build_financial_snapshot",
]
