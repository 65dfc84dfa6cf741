"""Forward view: scenario-based six-month return projection."""

from scoresheet.models import ForwardView
from scoresheet.utils.safe_math import clamp, finite_or_none

DRIFT_BOUNDS = (-0.20, 0.25)
MEAN_REVERSION_SPEED = 0.3
EXIT_PE_BAND = (0.7, 1.3)
HIGH_BETA = 1.3
LOW_BETA = 0.7
SCENARIO_MULTIPLIERS = {"base": 1.0, "bull": 1.15, "bear": 0.85}
CONFIDENCE_WACC_REFERENCE = 0.10


def compute_forward_view(
    price: float | None,
    pe: float | None,
    eps_cagr: float | None,
    peer_pe: float | None,
    beta: float | None,
    wacc: float,
) -> ForwardView:
    """
    Project base/bull/bear six-month returns.

    The exit multiple reverts 30% of the way toward the peer P/E, shifts one
    turn down for high beta (> 1.3) or up for low beta (< 0.7), and is held
    within 70-130% of the current P/E. Forward EPS grows half a year at the
    clamped EPS CAGR.

    Args:
        price: Current share price
        pe: Current P/E
        eps_cagr: Trailing EPS CAGR (None -> 0 drift)
        peer_pe: Peer or median P/E anchor (None -> own P/E)
        beta: Beta (None -> 1)
        wacc: Cost of capital as decimal

    Returns:
        ForwardView with returns in percent; all None when price or P/E
        is missing or not positive
    """
    if price is None or pe is None or price <= 0 or pe <= 0:
        return ForwardView()

    drift = clamp(eps_cagr if eps_cagr is not None else 0.0, *DRIFT_BOUNDS)
    beta = beta if beta is not None else 1.0
    anchor = peer_pe if peer_pe is not None else pe

    mean_reversion = (anchor - pe) * MEAN_REVERSION_SPEED
    if beta > HIGH_BETA:
        macro_shock = -1.0
    elif beta < LOW_BETA:
        macro_shock = 1.0
    else:
        macro_shock = 0.0

    exit_pe = clamp(pe + mean_reversion + macro_shock, pe * EXIT_PE_BAND[0], pe * EXIT_PE_BAND[1])
    forward_eps = price / pe * (1 + drift / 2)
    base_price = forward_eps * exit_pe

    scenarios = {
        name: finite_or_none((base_price * multiplier / price - 1) * 100)
        for name, multiplier in SCENARIO_MULTIPLIERS.items()
    }
    confidence = 1 - min(
        1.0,
        abs(drift) + abs(beta - 1) + max(0.0, CONFIDENCE_WACC_REFERENCE - wacc),
    )

    return ForwardView(
        base=scenarios["base"],
        bull=scenarios["bull"],
        bear=scenarios["bear"],
        confidence=confidence,
    )
