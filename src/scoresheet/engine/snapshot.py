"""Snapshot builder: raw quote-summary record -> FinancialSnapshot."""

from collections.abc import Mapping
from typing import Any

from scoresheet.models import FinancialSnapshot
from scoresheet.utils.safe_math import safe_div, safe_float

# Statement histories carry at most this many annual periods
MAX_PERIODS = 3


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = data.get(name)
    return section if isinstance(section, Mapping) else {}


def _statements(data: Mapping[str, Any], outer: str, inner: str) -> list[Mapping[str, Any]]:
    """Return up to MAX_PERIODS statements, most recent first."""
    container = data.get(outer)
    if isinstance(container, Mapping):
        container = container.get(inner)
    if not isinstance(container, (list, tuple)):
        return []
    return [s for s in container[:MAX_PERIODS] if isinstance(s, Mapping)]


def _field(section: Mapping[str, Any], key: str) -> float | None:
    return safe_float(section.get(key))


def _first(statements: list[Mapping[str, Any]], key: str) -> float | None:
    if not statements:
        return None
    return _field(statements[0], key)


def _coalesce(*values: float | None) -> float | None:
    for value in values:
        if value is not None:
            return value
    return None


def _period_fcf(statement: Mapping[str, Any]) -> float | None:
    # Capital expenditures are reported negative, so OCF + capex is the net figure
    reported = _field(statement, "freeCashFlow")
    if reported is not None:
        return reported
    operating = _field(statement, "totalCashFromOperatingActivities")
    capex = _field(statement, "capitalExpenditures")
    if operating is None or capex is None:
        return None
    return operating + capex


def _resolved(values: list[float | None]) -> tuple[float, ...]:
    return tuple(v for v in values if v is not None)


def build_financial_snapshot(data: Mapping[str, Any] | None) -> FinancialSnapshot:
    """
    Map a raw financial record into a normalized snapshot.

    Absent sections and fields become None. Periods whose value cannot be
    resolved are dropped from the series, preserving the order of the rest.

    Args:
        data: Quote-summary style record (price, financialData,
            defaultKeyStatistics, statement histories)

    Returns:
        FinancialSnapshot
    """
    if not isinstance(data, Mapping):
        data = {}

    price = _section(data, "price")
    financial = _section(data, "financialData")
    key_stats = _section(data, "defaultKeyStatistics")

    income = _statements(data, "incomeStatementHistory", "incomeStatementHistory")
    cashflow = _statements(data, "cashflowStatementHistory", "cashflowStatements")
    balance = _statements(data, "balanceSheetHistory", "balanceSheetStatements")

    shares = _field(key_stats, "sharesOutstanding")

    revenue_series = _resolved([_field(s, "totalRevenue") for s in income])
    eps_series = _resolved([safe_div(_field(s, "netIncome"), shares) for s in income])
    fcf_series = _resolved([_period_fcf(s) for s in cashflow])

    return FinancialSnapshot(
        price=_field(price, "regularMarketPrice"),
        market_cap=_field(price, "marketCap"),
        shares_outstanding=shares,
        eps_ttm=_field(key_stats, "trailingEps"),
        revenue_series=revenue_series,
        eps_series=eps_series,
        fcf_series=fcf_series,
        ebit=_first(income, "ebit"),
        ebitda=_field(financial, "ebitda"),
        net_income=_first(income, "netIncome"),
        total_equity=_first(balance, "totalShareholderEquity"),
        total_assets=_first(balance, "totalAssets"),
        current_assets=_first(balance, "totalCurrentAssets"),
        current_liabilities=_first(balance, "totalCurrentLiabilities"),
        total_debt=_coalesce(_first(balance, "totalDebt"), _field(financial, "totalDebt")),
        cash=_coalesce(_first(balance, "cash"), _field(financial, "totalCash")),
        interest_expense=_first(income, "interestExpense"),
        revenue=_first(income, "totalRevenue"),
        cogs=_first(income, "costOfRevenue"),
        retained_earnings=_first(balance, "retainedEarnings"),
        total_liabilities=_first(balance, "totalLiab"),
        beta=_field(price, "beta"),
        short_interest_pct=_field(key_stats, "shortPercentOfFloat"),
        insider_net_buys=_field(key_stats, "heldPercentInsiders"),
        institutional_pct=_field(key_stats, "heldPercentInstitutions"),
    )
