"""Equity Scoring Sheet MCP Server using FastMCP."""

import json
import logging
import os
from typing import Any

from fastmcp import FastMCP

from scoresheet import SCHEMA_VERSION, SERVER_VERSION
from scoresheet.tools import dcf_valuation, forward_view, momentum_snapshot, scoresheet

# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, log_level, logging.INFO))
logger = logging.getLogger(__name__)

# Create FastMCP server instance
mcp = FastMCP(
    name="equity-scoresheet",
)


# ============================================================================
# TOOLS
# ============================================================================


@mcp.tool
async def score_securities(
    records: list[dict[str, Any]],
    terminal_growth: float | None = None,
    wacc_floor: float | None = None,
    wacc_ceiling: float | None = None,
) -> str:
    """
    Build a cross-sectional scoring sheet for a batch of securities.

    Each record carries a ticker, quote-summary sections (price, financialData,
    defaultKeyStatistics, income/cash-flow/balance-sheet histories) and an
    optional price history. Scores are relative to the batch.

    Args:
        records: Per-security financial records
        terminal_growth: DCF terminal growth override (e.g., 0.02)
        wacc_floor: Cost-of-capital floor override
        wacc_ceiling: Cost-of-capital ceiling override

    Returns:
        JSON with composite score, subscores, momentum tag, 6-month
        expected returns and metrics per security
    """
    result = await scoresheet(
        records=records,
        terminal_growth=terminal_growth,
        wacc_floor=wacc_floor,
        wacc_ceiling=wacc_ceiling,
    )
    return json.dumps(result, indent=2, default=str)


@mcp.tool
async def get_dcf_value(
    fcf_series: list[float],
    shares_outstanding: float,
    wacc: float,
    terminal_growth: float = 0.02,
) -> str:
    """
    Discounted cash flow value per share.

    Args:
        fcf_series: Free cash flow history, most recent first
        shares_outstanding: Share count
        wacc: Cost of capital as decimal (e.g., 0.08)
        terminal_growth: Perpetual growth after year five (default: 0.02)

    Returns:
        JSON with value per share and the growth rate applied
    """
    result = await dcf_valuation(
        fcf_series=fcf_series,
        shares_outstanding=shares_outstanding,
        wacc=wacc,
        terminal_growth=terminal_growth,
    )
    return json.dumps(result, indent=2, default=str)


@mcp.tool
async def get_momentum(history: list[dict[str, Any]]) -> str:
    """
    Trailing 1/3/6-month returns and momentum tag.

    Args:
        history: Price points as {"date": "2024-01-31", "close": 101.5}

    Returns:
        JSON with trailing returns, tag and distance from high/low
    """
    result = await momentum_snapshot(history=history)
    return json.dumps(result, indent=2, default=str)


@mcp.tool
async def get_forward_view(
    price: float,
    pe: float,
    wacc: float,
    eps_cagr: float | None = None,
    peer_pe: float | None = None,
    beta: float | None = None,
) -> str:
    """
    Six-month base/bull/bear return projection.

    Args:
        price: Current share price
        pe: Current P/E
        wacc: Cost of capital as decimal
        eps_cagr: Trailing EPS CAGR (optional)
        peer_pe: Peer P/E anchor (optional, defaults to own P/E)
        beta: Beta (optional, defaults to 1)

    Returns:
        JSON with base/bull/bear returns in percent and confidence
    """
    result = await forward_view(
        price=price,
        pe=pe,
        wacc=wacc,
        eps_cagr=eps_cagr,
        peer_pe=peer_pe,
        beta=beta,
    )
    return json.dumps(result, indent=2, default=str)


# ============================================================================
# ENTRY POINT
# ============================================================================


def main() -> None:
    """Run the MCP server."""
    logger.info(f"Starting Equity Scoring Sheet MCP Server v{SERVER_VERSION} (schema v{SCHEMA_VERSION})")
    mcp.run()


if __name__ == "__main__":
    main()
