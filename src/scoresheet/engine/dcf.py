"""Discounted cash flow valuation."""

import logging
from collections.abc import Sequence

from scoresheet.config import DEFAULT_TERMINAL_GROWTH, EngineSettings
from scoresheet.models import FinancialSnapshot
from scoresheet.utils.safe_math import clamp, finite_or_none, safe_cagr, safe_div

logger = logging.getLogger(__name__)

FORECAST_YEARS = 5
FCF_GROWTH_BOUNDS = (-0.20, 0.25)


def project_cash_flows(base: float, growth: float, years: int = FORECAST_YEARS) -> list[float]:
    """Compound base forward for the given number of years."""
    forecast: list[float] = []
    current = base
    for _ in range(years):
        current *= 1 + growth
        forecast.append(current)
    return forecast


def discounted_cash_flow(
    fcf_series: Sequence[float],
    shares_outstanding: float | None,
    wacc: float,
    terminal_growth: float = DEFAULT_TERMINAL_GROWTH,
) -> float | None:
    """
    Intrinsic value per share from a free cash flow history.

    The most recent FCF is grown five years at its historical CAGR (0 when
    unavailable, clamped to [-20%, +25%]), discounted at ``wacc``, plus a
    Gordon-growth terminal value discounted back five years.

    Args:
        fcf_series: Free cash flow, most recent first
        shares_outstanding: Share count
        wacc: Cost of capital as decimal
        terminal_growth: Perpetual growth after year five (default: 0.02)

    Returns:
        Value per share, or None if FCF/shares are missing or
        wacc <= terminal_growth
    """
    if not fcf_series or not shares_outstanding:
        return None
    if wacc <= terminal_growth or wacc <= -1:
        logger.debug(
            "DCF skipped: cost of capital %.4f does not exceed terminal growth %.4f",
            wacc,
            terminal_growth,
        )
        return None

    growth = clamp(safe_cagr(fcf_series) or 0.0, *FCF_GROWTH_BOUNDS)
    forecast = project_cash_flows(fcf_series[0], growth)

    discounted = sum(value / (1 + wacc) ** year for year, value in enumerate(forecast, start=1))
    terminal = forecast[-1] * (1 + terminal_growth) / (wacc - terminal_growth)
    discounted_terminal = terminal / (1 + wacc) ** len(forecast)

    return safe_div(finite_or_none(discounted + discounted_terminal), shares_outstanding)


def compute_dcf(
    snapshot: FinancialSnapshot,
    wacc: float,
    terminal_growth: float = DEFAULT_TERMINAL_GROWTH,
) -> float | None:
    """DCF value per share for a snapshot."""
    return discounted_cash_flow(snapshot.fcf_series, snapshot.shares_outstanding, wacc, terminal_growth)


def estimate_wacc(beta: float | None, settings: EngineSettings | None = None) -> float:
    """
    Beta-adjusted cost of capital.

    base + (beta - 1) * step, clamped to [floor, ceiling]; base when beta
    is missing.
    """
    settings = settings or EngineSettings()
    if beta is None:
        return settings.wacc_base
    estimated = settings.wacc_base + (beta - 1) * settings.wacc_beta_step
    return clamp(estimated, settings.wacc_floor, settings.wacc_ceiling)


def dcf_vs_price(dcf_value: float | None, price: float | None) -> float | None:
    """Percentage premium of DCF value over price (20.0 = 20% upside)."""
    ratio = safe_div(dcf_value, price)
    if ratio is None:
        return None
    return (ratio - 1) * 100
