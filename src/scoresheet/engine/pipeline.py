"""Two-phase scoring workflow.

Phase 1 collects per-security metrics and forward views independently. Phase 2
runs the composite scorer once over every collected ScoreInputs.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from scoresheet.config import EngineSettings
from scoresheet.engine.composite import compute_composite_scores
from scoresheet.engine.dcf import compute_dcf, dcf_vs_price, estimate_wacc
from scoresheet.engine.forward import compute_forward_view
from scoresheet.engine.metrics import derive_metrics
from scoresheet.engine.momentum import compute_momentum
from scoresheet.engine.snapshot import build_financial_snapshot
from scoresheet.models import (
    DerivedMetrics,
    FinancialSnapshot,
    ScoreInputs,
    ScoreSheetRow,
    SecurityMetrics,
)
from scoresheet.utils.safe_math import safe_float
from scoresheet.utils.validators import normalize_ticker

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_ERROR = "error"

DATA_SECTIONS: tuple[str, ...] = (
    "price",
    "financialData",
    "defaultKeyStatistics",
    "incomeStatementHistory",
    "cashflowStatementHistory",
    "balanceSheetHistory",
)


def record_ticker(record: Mapping[str, Any]) -> str | None:
    """Resolve the ticker from ``ticker`` or ``symbol``."""
    return normalize_ticker(record.get("ticker") or record.get("symbol"))


def build_score_inputs(
    snapshot: FinancialSnapshot,
    metrics: DerivedMetrics,
    dcf_premium: float | None,
) -> ScoreInputs:
    """Select the sixteen scorer inputs from metrics and sentiment fields."""
    return ScoreInputs(
        pe=metrics.pe,
        ev_ebitda=metrics.ev_ebitda,
        dcf_vs_price=dcf_premium,
        roic=metrics.roic,
        ebit_margin=metrics.ebit_margin,
        roe=metrics.roe,
        revenue_cagr=metrics.revenue_cagr,
        eps_cagr=metrics.eps_cagr,
        fcf_cagr=metrics.fcf_cagr,
        debt_to_equity=metrics.debt_to_equity,
        interest_coverage=metrics.interest_coverage,
        insider_net_buys=snapshot.insider_net_buys,
        institutional_pct=snapshot.institutional_pct,
        short_interest_pct=snapshot.short_interest_pct,
        beta=snapshot.beta,
        fcf_to_ni=metrics.fcf_to_ni,
    )


def collect_security(
    record: Mapping[str, Any],
    settings: EngineSettings | None = None,
) -> SecurityMetrics | ScoreSheetRow:
    """
    Phase 1: compute everything that depends on a single security.

    Args:
        record: Raw record with ``ticker``, quote-summary sections and an
            optional ``history`` of (date, close) points and ``peer_pe``
            anchor for the forward view (default: own P/E)
        settings: Engine settings (default: EngineSettings())

    Returns:
        SecurityMetrics, or an error ScoreSheetRow when the record has no
        ticker or no financial data
    """
    settings = settings or EngineSettings()

    ticker = record_ticker(record)
    if ticker is None:
        label = str(record.get("input") or "")
        logger.warning("Rejected record %r: ticker could not be resolved", label)
        return ScoreSheetRow(
            ticker=label,
            status=STATUS_ERROR,
            status_message="Ticker could not be resolved",
        )
    if not any(isinstance(record.get(section), Mapping) for section in DATA_SECTIONS):
        logger.warning("Rejected %s: no financial data in record", ticker)
        return ScoreSheetRow(
            ticker=ticker,
            status=STATUS_ERROR,
            status_message="Missing financial data",
        )

    snapshot = build_financial_snapshot(record)
    metrics = derive_metrics(snapshot, tax_rate=settings.tax_rate)
    wacc = estimate_wacc(snapshot.beta, settings)
    dcf_value = compute_dcf(snapshot, wacc, settings.terminal_growth)
    dcf_premium = dcf_vs_price(dcf_value, snapshot.price)
    momentum = compute_momentum(record.get("history") or [])
    forward = compute_forward_view(
        price=metrics.price,
        pe=metrics.pe,
        eps_cagr=metrics.eps_cagr,
        peer_pe=safe_float(record.get("peer_pe")),
        beta=snapshot.beta,
        wacc=wacc,
    )

    financial = record.get("financialData")
    summary = record.get("summaryDetail")
    extras = {
        "analyst_rating": safe_float(financial.get("recommendationMean"))
        if isinstance(financial, Mapping)
        else None,
        "dividend_yield": safe_float(summary.get("dividendYield"))
        if isinstance(summary, Mapping)
        else None,
    }

    logger.info("Computed metrics for %s", ticker)
    return SecurityMetrics(
        ticker=ticker,
        snapshot=snapshot,
        metrics=metrics,
        wacc=wacc,
        dcf_value=dcf_value,
        dcf_vs_price=dcf_premium,
        momentum=momentum,
        forward=forward,
        score_inputs=build_score_inputs(snapshot, metrics, dcf_premium),
        extras=extras,
    )


def _row_metrics(item: SecurityMetrics) -> dict[str, Any]:
    metrics = item.metrics.to_dict()
    metrics.update(
        {
            "wacc": item.wacc,
            "dcf_value_per_share": item.dcf_value,
            "dcf_vs_price": item.dcf_vs_price,
            "beta": item.snapshot.beta,
            "insider_net_buys": item.snapshot.insider_net_buys,
            "institutional_pct": item.snapshot.institutional_pct,
            "short_interest_pct": item.snapshot.short_interest_pct,
            "return_1m": item.momentum.return_1m,
            "return_3m": item.momentum.return_3m,
            "return_6m": item.momentum.return_6m,
            "distance_from_high": item.momentum.distance_from_high,
            "distance_from_low": item.momentum.distance_from_low,
        }
    )
    metrics.update(item.extras)
    return metrics


def score_collected(collected: Sequence[SecurityMetrics]) -> list[ScoreSheetRow]:
    """
    Phase 2: composite scores over the whole batch.

    Args:
        collected: Every security gathered in phase 1

    Returns:
        One ok row per security, same order
    """
    if not collected:
        return []

    composites = compute_composite_scores([item.score_inputs for item in collected])
    logger.info("Scored batch of %d securities", len(collected))

    rows: list[ScoreSheetRow] = []
    for item, composite in zip(collected, composites):
        rows.append(
            ScoreSheetRow(
                ticker=item.ticker,
                status=STATUS_OK,
                composite_score=composite.composite,
                subscores=dict(composite.subscores),
                momentum_tag=item.momentum.tag,
                expected_return_6m=item.forward,
                metrics=_row_metrics(item),
            )
        )
    return rows


def score_records(
    records: Sequence[Mapping[str, Any]],
    settings: EngineSettings | None = None,
) -> list[ScoreSheetRow]:
    """
    Build the scoring sheet for a batch of raw records.

    Args:
        records: Raw per-security records, in output order
        settings: Engine settings (default: EngineSettings())

    Returns:
        One row per record in input order; rejected records carry
        status "error" and do not take part in cross-sectional scoring
    """
    settings = settings or EngineSettings()

    outcomes = [collect_security(record, settings) for record in records]
    collected = [item for item in outcomes if isinstance(item, SecurityMetrics)]
    scored = iter(score_collected(collected))

    return [
        next(scored) if isinstance(outcome, SecurityMetrics) else outcome
        for outcome in outcomes
    ]
