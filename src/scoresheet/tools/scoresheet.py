"""Scoring sheet tool."""

from collections.abc import Mapping
from time import perf_counter
from typing import Any

from scoresheet.config import EngineSettings
from scoresheet.engine.pipeline import STATUS_OK, score_records
from scoresheet.utils.provenance import build_error_response, build_meta, sanitize_nan_inf


async def scoresheet(
    records: list[dict[str, Any]],
    terminal_growth: float | None = None,
    wacc_floor: float | None = None,
    wacc_ceiling: float | None = None,
) -> dict[str, Any]:
    """
    Score a batch of securities cross-sectionally.

    Args:
        records: Raw per-security records (ticker, quote-summary sections,
            optional price history)
        terminal_growth: Override for DCF terminal growth
        wacc_floor: Override for the cost-of-capital floor
        wacc_ceiling: Override for the cost-of-capital ceiling

    Returns:
        Dict with one row per record plus batch summary
    """
    start_time = perf_counter()

    if not isinstance(records, list) or not all(isinstance(r, Mapping) for r in records):
        return build_error_response(
            error_type="invalid_parameter",
            message="records must be a list of objects",
            tool="scoresheet",
        )

    try:
        settings = _settings_with_overrides(terminal_growth, wacc_floor, wacc_ceiling)
    except ValueError as e:
        return build_error_response(
            error_type="invalid_parameter",
            message=str(e),
            tool="scoresheet",
        )

    rows = score_records(records, settings)
    ok_rows = [row for row in rows if row.status == STATUS_OK]

    duration_ms = (perf_counter() - start_time) * 1000

    return sanitize_nan_inf(
        {
            "meta": build_meta("scoresheet", duration_ms),
            "settings": {
                "wacc_base": settings.wacc_base,
                "wacc_floor": settings.wacc_floor,
                "wacc_ceiling": settings.wacc_ceiling,
                "terminal_growth": settings.terminal_growth,
                "tax_rate": settings.tax_rate,
            },
            "summary": {
                "records": len(rows),
                "scored": len(ok_rows),
                "errors": len(rows) - len(ok_rows),
            },
            "rows": [row.to_dict() for row in rows],
        }
    )


def _settings_with_overrides(
    terminal_growth: float | None,
    wacc_floor: float | None,
    wacc_ceiling: float | None,
) -> EngineSettings:
    base = EngineSettings.from_env()
    return EngineSettings(
        wacc_base=base.wacc_base,
        wacc_floor=wacc_floor if wacc_floor is not None else base.wacc_floor,
        wacc_ceiling=wacc_ceiling if wacc_ceiling is not None else base.wacc_ceiling,
        wacc_beta_step=base.wacc_beta_step,
        terminal_growth=terminal_growth if terminal_growth is not None else base.terminal_growth,
        tax_rate=base.tax_rate,
    )
