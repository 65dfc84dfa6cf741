"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta
from typing import Any

import pytest

from scoresheet.models import ScoreInputs


def _v_shaped_closes() -> list[float]:
    """200 daily closes: slow slide from 100 to 80, then a sharp rebound to 110."""
    closes = []
    for i in range(200):
        if i <= 170:
            closes.append(100.0 - i * (20.0 / 170.0))
        else:
            closes.append(80.0 + (i - 170) * (30.0 / 29.0))
    return closes


@pytest.fixture
def sample_record() -> dict[str, Any]:
    """Quote-summary style record with three years of statements."""
    return {
        "ticker": " acme ",
        "price": {
            "regularMarketPrice": {"raw": 50.0},
            "marketCap": {"raw": 5000.0},
            "beta": {"raw": 1.2},
        },
        "financialData": {
            "totalDebt": {"raw": 1200.0},
            "totalCash": {"raw": 300.0},
            "ebitda": {"raw": 900.0},
            "recommendationMean": {"raw": 2.1},
        },
        "defaultKeyStatistics": {
            "sharesOutstanding": {"raw": 100.0},
            "trailingEps": {"raw": 4.0},
            "shortPercentOfFloat": {"raw": 0.03},
            "heldPercentInsiders": {"raw": 0.05},
            "heldPercentInstitutions": {"raw": 0.7},
        },
        "summaryDetail": {"dividendYield": {"raw": 0.015}},
        "incomeStatementHistory": {
            "incomeStatementHistory": [
                {
                    "totalRevenue": {"raw": 3000.0},
                    "costOfRevenue": {"raw": 1800.0},
                    "ebit": {"raw": 600.0},
                    "netIncome": {"raw": 400.0},
                    "interestExpense": {"raw": 50.0},
                },
                {"totalRevenue": {"raw": 2700.0}, "netIncome": {"raw": 350.0}},
                {"totalRevenue": {"raw": 2400.0}, "netIncome": {"raw": 300.0}},
            ]
        },
        "cashflowStatementHistory": {
            "cashflowStatements": [
                {"freeCashFlow": {"raw": 420.0}},
                {
                    "totalCashFromOperatingActivities": {"raw": 500.0},
                    "capitalExpenditures": {"raw": -120.0},
                },
                # No capex: period cannot be resolved
                {"totalCashFromOperatingActivities": {"raw": 450.0}},
            ]
        },
        "balanceSheetHistory": {
            "balanceSheetStatements": [
                {
                    "totalAssets": {"raw": 8000.0},
                    "totalCurrentAssets": {"raw": 2500.0},
                    "totalCurrentLiabilities": {"raw": 1500.0},
                    "totalShareholderEquity": {"raw": 4000.0},
                    "totalLiab": {"raw": 4000.0},
                    "retainedEarnings": {"raw": 2000.0},
                    "totalDebt": {"raw": 1000.0},
                    "cash": {"raw": 500.0},
                }
            ]
        },
    }


@pytest.fixture
def v_shaped_history() -> list[dict[str, Any]]:
    """Daily history whose trailing returns accelerate: 1M > 3M > 6M > 0."""
    start = datetime(2024, 1, 1)
    return [
        {"date": start + timedelta(days=i), "close": close}
        for i, close in enumerate(_v_shaped_closes())
    ]


@pytest.fixture
def rising_history() -> list[tuple[datetime, float]]:
    """Steadily rising daily history over 200 days."""
    start = datetime(2024, 1, 1)
    return [(start + timedelta(days=i), 80.0 + i * 0.4) for i in range(200)]


@pytest.fixture
def strong_inputs() -> ScoreInputs:
    """Score inputs that beat weak_inputs on every metric."""
    return ScoreInputs(
        pe=10.0,
        ev_ebitda=6.0,
        dcf_vs_price=30.0,
        roic=0.20,
        ebit_margin=0.25,
        roe=0.22,
        revenue_cagr=0.15,
        eps_cagr=0.18,
        fcf_cagr=0.12,
        debt_to_equity=0.2,
        interest_coverage=20.0,
        insider_net_buys=0.08,
        institutional_pct=0.8,
        short_interest_pct=0.01,
        beta=1.0,
        fcf_to_ni=1.0,
    )


@pytest.fixture
def weak_inputs() -> ScoreInputs:
    """Score inputs that lose to strong_inputs on every metric."""
    return ScoreInputs(
        pe=20.0,
        ev_ebitda=14.0,
        dcf_vs_price=-10.0,
        roic=0.05,
        ebit_margin=0.05,
        roe=0.04,
        revenue_cagr=0.01,
        eps_cagr=-0.05,
        fcf_cagr=-0.02,
        debt_to_equity=1.5,
        interest_coverage=2.0,
        insider_net_buys=0.01,
        institutional_pct=0.3,
        short_interest_pct=0.05,
        beta=1.5,
        fcf_to_ni=1.0,
    )
