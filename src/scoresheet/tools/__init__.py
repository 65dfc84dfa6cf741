"""Scoring tools."""

from scoresheet.tools.scoresheet import scoresheet
from scoresheet.tools.valuation import dcf_valuation, forward_view, momentum_snapshot

__all__ = [
    "dcf_valuation",
    "forward_view",
    "momentum_snapshot",
    "scoresheet",
]
