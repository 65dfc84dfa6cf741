"""Metric deriver: single-period ratios and growth rates from a snapshot."""

from scoresheet.config import DEFAULT_TAX_RATE
from scoresheet.models import DerivedMetrics, FinancialSnapshot
from scoresheet.utils.safe_math import safe_cagr, safe_clamp, safe_div

INTEREST_COVERAGE_BOUNDS = (-100.0, 100.0)

# Altman Z-score coefficients (original manufacturing model)
ALTMAN_WEIGHTS = {
    "working_capital": 1.2,
    "retained_earnings": 1.4,
    "ebit": 3.3,
    "market_value_equity": 0.6,
    "sales": 1.0,
}


def compute_series_cagr(series: tuple[float, ...] | list[float]) -> float | None:
    """
    Growth rate of a newest-first series over at most three years.

    Args:
        series: Values ordered most recent first

    Returns:
        CAGR as decimal, or None with fewer than two points or a
        non-positive endpoint
    """
    return safe_cagr(series, max_years=3)


def _price_to_earnings(price: float | None, eps: float | None) -> float | None:
    if price is None or eps is None or eps <= 0:
        return None
    return safe_div(price, eps)


def _enterprise_value(snapshot: FinancialSnapshot) -> float | None:
    # Zero debt or zero cash are real values; only absence blocks EV
    if snapshot.market_cap is None or snapshot.total_debt is None or snapshot.cash is None:
        return None
    return snapshot.market_cap + snapshot.total_debt - snapshot.cash


def _invested_capital(snapshot: FinancialSnapshot) -> float | None:
    s = snapshot
    if s.total_assets is not None and s.current_liabilities is not None and s.cash is not None:
        return s.total_assets - s.current_liabilities - s.cash
    if s.total_debt is not None and s.total_equity is not None and s.cash is not None:
        return s.total_debt + s.total_equity - s.cash
    return None


def _gross_margin(revenue: float | None, cogs: float | None) -> float | None:
    if revenue is None or cogs is None:
        return None
    return safe_div(revenue - cogs, revenue)


def compute_altman_z(snapshot: FinancialSnapshot) -> float | None:
    """
    Altman Z-score, or None unless every input is present.

    Z = 1.2*WC/TA + 1.4*RE/TA + 3.3*EBIT/TA + 0.6*MVE/TL + 1.0*Sales/TA
    """
    s = snapshot
    inputs = (
        s.current_assets,
        s.current_liabilities,
        s.retained_earnings,
        s.ebit,
        s.market_cap,
        s.total_liabilities,
        s.revenue,
        s.total_assets,
    )
    if any(value is None for value in inputs):
        return None

    ratios = {
        "working_capital": safe_div(s.current_assets - s.current_liabilities, s.total_assets),
        "retained_earnings": safe_div(s.retained_earnings, s.total_assets),
        "ebit": safe_div(s.ebit, s.total_assets),
        "market_value_equity": safe_div(s.market_cap, s.total_liabilities),
        "sales": safe_div(s.revenue, s.total_assets),
    }
    if any(value is None for value in ratios.values()):
        return None

    return sum(ALTMAN_WEIGHTS[name] * value for name, value in ratios.items())


def derive_metrics(snapshot: FinancialSnapshot, tax_rate: float = DEFAULT_TAX_RATE) -> DerivedMetrics:
    """
    Compute valuation, profitability, growth and health ratios.

    Each metric is None when any input it needs is missing or its
    denominator is zero.

    Args:
        snapshot: Normalized financial snapshot
        tax_rate: Flat tax rate applied to EBIT for NOPAT (default: 0.25)

    Returns:
        DerivedMetrics
    """
    s = snapshot

    ev = _enterprise_value(s)
    ev_ebitda = None
    if ev is not None and s.ebitda is not None and s.ebitda > 0:
        ev_ebitda = safe_div(ev, s.ebitda)

    nopat = s.ebit * (1 - tax_rate) if s.ebit is not None else None
    fcf_latest = s.fcf_series[0] if s.fcf_series else None

    return DerivedMetrics(
        price=s.price,
        pe=_price_to_earnings(s.price, s.eps_ttm),
        ev=ev,
        ev_ebitda=ev_ebitda,
        roic=safe_div(nopat, _invested_capital(s)),
        gross_margin=_gross_margin(s.revenue, s.cogs),
        ebit_margin=safe_div(s.ebit, s.revenue),
        net_margin=safe_div(s.net_income, s.revenue),
        roe=safe_div(s.net_income, s.total_equity),
        revenue_cagr=compute_series_cagr(s.revenue_series),
        eps_cagr=compute_series_cagr(s.eps_series),
        fcf_cagr=compute_series_cagr(s.fcf_series),
        debt_to_equity=safe_div(s.total_debt, s.total_equity),
        interest_coverage=safe_clamp(
            safe_div(s.ebit, s.interest_expense), *INTEREST_COVERAGE_BOUNDS
        ),
        fcf_to_ni=safe_div(fcf_latest, s.net_income),
        altman_z=compute_altman_z(s),
    )
