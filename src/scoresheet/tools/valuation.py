"""Single-security valuation tools: DCF, momentum and forward view."""

from time import perf_counter
from typing import Any

from scoresheet.config import DEFAULT_TERMINAL_GROWTH
from scoresheet.engine.dcf import FCF_GROWTH_BOUNDS, discounted_cash_flow
from scoresheet.engine.forward import compute_forward_view
from scoresheet.engine.metrics import compute_series_cagr
from scoresheet.engine.momentum import compute_momentum
from scoresheet.utils.provenance import build_error_response, build_meta, sanitize_nan_inf
from scoresheet.utils.safe_math import clamp, safe_float
from scoresheet.utils.validators import validate_rate


async def dcf_valuation(
    fcf_series: list[float],
    shares_outstanding: float,
    wacc: float,
    terminal_growth: float = DEFAULT_TERMINAL_GROWTH,
) -> dict[str, Any]:
    """
    Value per share from a free cash flow history.

    Args:
        fcf_series: Free cash flow, most recent first
        shares_outstanding: Share count
        wacc: Cost of capital as decimal
        terminal_growth: Perpetual growth rate (default: 0.02)

    Returns:
        Dict with value_per_share (None when undefined) and the growth used
    """
    start_time = perf_counter()

    try:
        wacc = validate_rate("wacc", wacc)
        terminal_growth = validate_rate("terminal_growth", terminal_growth)
    except ValueError as e:
        return build_error_response("invalid_parameter", str(e), tool="dcf_valuation")

    series = [v for v in (safe_float(x) for x in fcf_series or []) if v is not None]
    shares = safe_float(shares_outstanding)
    value = discounted_cash_flow(series, shares, wacc, terminal_growth)

    historical_growth = compute_series_cagr(series)
    applied_growth = clamp(historical_growth or 0.0, *FCF_GROWTH_BOUNDS)

    warnings: list[str] = []
    if wacc <= terminal_growth:
        warnings.append("wacc_not_above_terminal_growth")
    if not series:
        warnings.append("empty_fcf_series")
    if not shares:
        warnings.append("missing_shares_outstanding")

    duration_ms = (perf_counter() - start_time) * 1000

    return sanitize_nan_inf(
        {
            "meta": build_meta("dcf_valuation", duration_ms),
            "value_per_share": value,
            "inputs": {
                "fcf_series": series,
                "shares_outstanding": shares,
                "wacc": wacc,
                "terminal_growth": terminal_growth,
            },
            "historical_fcf_cagr": historical_growth,
            "applied_growth": applied_growth,
            "warnings": warnings,
        }
    )


async def momentum_snapshot(history: list[Any]) -> dict[str, Any]:
    """
    Trailing returns and momentum tag from closing prices.

    Args:
        history: (date, close) pairs or {"date", "close"} objects, any order

    Returns:
        Dict with 1/3/6-month returns, tag and high/low distances
    """
    start_time = perf_counter()

    try:
        momentum = compute_momentum(history or [])
    except (TypeError, ValueError) as e:
        return build_error_response(
            "invalid_parameter",
            f"Invalid price history: {e}",
            tool="momentum_snapshot",
        )

    duration_ms = (perf_counter() - start_time) * 1000

    return sanitize_nan_inf(
        {
            "meta": build_meta("momentum_snapshot", duration_ms),
            "points": len(history or []),
            "momentum": momentum.to_dict(),
        }
    )


async def forward_view(
    price: float | None,
    pe: float | None,
    wacc: float,
    eps_cagr: float | None = None,
    peer_pe: float | None = None,
    beta: float | None = None,
) -> dict[str, Any]:
    """
    Six-month base/bull/bear return projection.

    Args:
        price: Current share price
        pe: Current P/E
        wacc: Cost of capital as decimal
        eps_cagr: Trailing EPS CAGR
        peer_pe: Peer or median P/E anchor
        beta: Beta

    Returns:
        Dict with base/bull/bear returns in percent and confidence
    """
    start_time = perf_counter()

    try:
        wacc = validate_rate("wacc", wacc)
    except ValueError as e:
        return build_error_response("invalid_parameter", str(e), tool="forward_view")

    view = compute_forward_view(
        price=safe_float(price),
        pe=safe_float(pe),
        eps_cagr=safe_float(eps_cagr),
        peer_pe=safe_float(peer_pe),
        beta=safe_float(beta),
        wacc=wacc,
    )

    duration_ms = (perf_counter() - start_time) * 1000

    return sanitize_nan_inf(
        {
            "meta": build_meta("forward_view", duration_ms),
            "expected_return_6m": view.to_dict(),
        }
    )
