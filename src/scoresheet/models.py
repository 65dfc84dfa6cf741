"""Immutable data model for one scoring run.

``None`` means "missing" everywhere; zero is always a real, present value.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

CATEGORY_NAMES: tuple[str, ...] = (
    "valuation",
    "profitability",
    "growth",
    "health",
    "sentiment",
    "earningsQuality",
)

MOST_MOMENTUM = "Most Momentum"


@dataclass(frozen=True)
class FinancialSnapshot:
    """Normalized per-security figures. Series are ordered newest first."""

    price: float | None = None
    market_cap: float | None = None
    shares_outstanding: float | None = None
    eps_ttm: float | None = None
    revenue_series: tuple[float, ...] = ()
    eps_series: tuple[float, ...] = ()
    fcf_series: tuple[float, ...] = ()
    ebit: float | None = None
    ebitda: float | None = None
    net_income: float | None = None
    total_equity: float | None = None
    total_assets: float | None = None
    current_assets: float | None = None
    current_liabilities: float | None = None
    total_debt: float | None = None
    cash: float | None = None
    interest_expense: float | None = None
    revenue: float | None = None
    cogs: float | None = None
    retained_earnings: float | None = None
    total_liabilities: float | None = None
    beta: float | None = None
    short_interest_pct: float | None = None
    insider_net_buys: float | None = None
    institutional_pct: float | None = None


@dataclass(frozen=True)
class DerivedMetrics:
    """Single-period ratios and 3-year growth rates."""

    price: float | None = None
    pe: float | None = None
    ev: float | None = None
    ev_ebitda: float | None = None
    roic: float | None = None
    gross_margin: float | None = None
    ebit_margin: float | None = None
    net_margin: float | None = None
    roe: float | None = None
    revenue_cagr: float | None = None
    eps_cagr: float | None = None
    fcf_cagr: float | None = None
    debt_to_equity: float | None = None
    interest_coverage: float | None = None
    fcf_to_ni: float | None = None
    altman_z: float | None = None

    def to_dict(self) -> dict[str, float | None]:
        return asdict(self)


@dataclass(frozen=True)
class ScoreInputs:
    """The sixteen raw metrics consumed by the composite scorer."""

    pe: float | None = None
    ev_ebitda: float | None = None
    dcf_vs_price: float | None = None
    roic: float | None = None
    ebit_margin: float | None = None
    roe: float | None = None
    revenue_cagr: float | None = None
    eps_cagr: float | None = None
    fcf_cagr: float | None = None
    debt_to_equity: float | None = None
    interest_coverage: float | None = None
    insider_net_buys: float | None = None
    institutional_pct: float | None = None
    short_interest_pct: float | None = None
    beta: float | None = None
    fcf_to_ni: float | None = None


@dataclass(frozen=True)
class CompositeResult:
    """Composite score and category subscores, integers in [0, 100]."""

    composite: int
    subscores: dict[str, int]


@dataclass(frozen=True)
class PricePoint:
    """One closing price observation."""

    date: datetime
    close: float


@dataclass(frozen=True)
class MomentumSnapshot:
    """Trailing returns, momentum tag and distance from range extremes."""

    return_1m: float | None = None
    return_3m: float | None = None
    return_6m: float | None = None
    tag: str | None = None
    distance_from_high: float | None = None
    distance_from_low: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ForwardView:
    """Six-month base/bull/bear return projections in percent."""

    base: float | None = None
    bull: float | None = None
    bear: float | None = None
    confidence: float | None = None

    def to_dict(self) -> dict[str, float | None]:
        return asdict(self)


@dataclass(frozen=True)
class SecurityMetrics:
    """Everything computed for one security before the batch phase."""

    ticker: str
    snapshot: FinancialSnapshot
    metrics: DerivedMetrics
    wacc: float
    dcf_value: float | None
    dcf_vs_price: float | None
    momentum: MomentumSnapshot
    forward: ForwardView
    score_inputs: ScoreInputs
    extras: dict[str, Any] = field(default_factory=dict)


@dataclass
class ScoreSheetRow:
    """One output row of the scoring sheet, in input order."""

    ticker: str
    status: str
    status_message: str | None = None
    composite_score: int | None = None
    subscores: dict[str, int] | None = None
    momentum_tag: str | None = None
    expected_return_6m: ForwardView | None = None
    metrics: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "ticker": self.ticker,
            "status": self.status,
            "status_message": self.status_message,
            "composite_score": self.composite_score,
            "subscores": self.subscores,
            "momentum_tag": self.momentum_tag,
            "expected_return_6m": (
                self.expected_return_6m.to_dict() if self.expected_return_6m else None
            ),
            "metrics": self.metrics,
        }
