"""Utility modules."""

from scoresheet.utils.provenance import build_error_response, build_meta, sanitize_nan_inf
from scoresheet.utils.safe_math import (
    clamp,
    finite_or_none,
    round_half_up,
    safe_cagr,
    safe_clamp,
    safe_div,
    safe_float,
)
from scoresheet.utils.validators import check_rule, check_rule_expr, normalize_ticker, validate_rate

__all__ = [
    "build_error_response",
    "build_meta",
    "sanitize_nan_inf",
    "clamp",
    "finite_or_none",
    "round_half_up",
    "safe_cagr",
    "safe_clamp",
    "safe_div",
    "safe_float",
    "check_rule",
    "check_rule_expr",
    "normalize_ticker",
    "validate_rate",
]
