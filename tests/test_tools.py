"""Tests for tool response shapes."""

import asyncio
import copy
import json
from typing import Any

import pytest

from scoresheet import SCHEMA_VERSION
from scoresheet.tools import dcf_valuation, forward_view, momentum_snapshot, scoresheet


class TestScoresheetTool:
    """Tests for the scoresheet tool."""

    def test_response_shape(self, sample_record: dict[str, Any]) -> None:
        """Test meta, settings, summary and rows are present."""
        other = copy.deepcopy(sample_record)
        other["ticker"] = "OTHER"
        result = asyncio.run(scoresheet([sample_record, other, {"ticker": "nodata"}]))

        assert result["meta"]["tool"] == "scoresheet"
        assert result["meta"]["schema_version"] == SCHEMA_VERSION
        assert "duration_ms" in result["meta"]
        assert result["summary"] == {"records": 3, "scored": 2, "errors": 1}
        assert [row["ticker"] for row in result["rows"]] == ["ACME", "OTHER", "NODATA"]
        assert result["rows"][2]["status"] == "error"

    def test_json_safe(self, sample_record: dict[str, Any]) -> None:
        """Test the response serializes as strict JSON."""
        result = asyncio.run(scoresheet([sample_record]))
        json.dumps(result, allow_nan=False, default=str)

    def test_settings_override(self, sample_record: dict[str, Any]) -> None:
        """Test terminal growth override is applied."""
        result = asyncio.run(scoresheet([sample_record], terminal_growth=0.03))
        assert result["settings"]["terminal_growth"] == 0.03

    def test_invalid_records(self) -> None:
        """Test non-list records give an error response."""
        result = asyncio.run(scoresheet("AAPL"))  # type: ignore[arg-type]
        assert result["error"] is True
        assert result["error_type"] == "invalid_parameter"

    def test_invalid_override(self, sample_record: dict[str, Any]) -> None:
        """Test inverted WACC bounds give an error response."""
        result = asyncio.run(scoresheet([sample_record], wacc_floor=0.2, wacc_ceiling=0.1))
        assert result["error"] is True
        assert "WACC bounds" in result["message"]

    def test_malformed_history_keeps_batch(self, sample_record: dict[str, Any]) -> None:
        """Test a bad price point in one record does not fail the batch."""
        other = copy.deepcopy(sample_record)
        other["ticker"] = "OTHER"
        other["history"] = [("2024-01-01", 1.0, "extra"), 7]
        result = asyncio.run(scoresheet([sample_record, other]))
        assert result["summary"] == {"records": 2, "scored": 2, "errors": 0}
        assert result["rows"][1]["momentum_tag"] is None


class TestValuationTools:
    """Tests for single-security tools."""

    def test_dcf_valuation(self) -> None:
        """Test DCF tool returns value and applied growth."""
        result = asyncio.run(dcf_valuation([120e6, 100e6, 80e6], 50e6, 0.08))

        assert result["meta"]["tool"] == "dcf_valuation"
        assert result["value_per_share"] > 2.4
        assert result["applied_growth"] == pytest.approx(1.5 ** 0.5 - 1)
        assert result["warnings"] == []

    def test_dcf_guard_warning(self) -> None:
        """Test wacc <= terminal growth gives a null value and a warning."""
        result = asyncio.run(dcf_valuation([100.0], 10.0, 0.02, 0.02))
        assert result["value_per_share"] is None
        assert "wacc_not_above_terminal_growth" in result["warnings"]

    def test_dcf_invalid_wacc(self) -> None:
        """Test non-finite wacc gives an error response."""
        result = asyncio.run(dcf_valuation([100.0], 10.0, float("nan")))
        assert result["error"] is True

    def test_momentum_snapshot(self, v_shaped_history: list[dict[str, Any]]) -> None:
        """Test momentum tool wraps the snapshot."""
        result = asyncio.run(momentum_snapshot(v_shaped_history))
        assert result["points"] == 200
        assert result["momentum"]["tag"] == "Most Momentum"

    def test_momentum_bad_points_skipped(self, v_shaped_history: list[dict[str, Any]]) -> None:
        """Test malformed points are skipped, not fatal."""
        result = asyncio.run(momentum_snapshot([42, ("2024-01-01", 1.0, "extra"), *v_shaped_history]))
        assert "error" not in result
        assert result["momentum"]["tag"] == "Most Momentum"

    def test_momentum_not_a_history(self) -> None:
        """Test a non-iterable history gives an error response."""
        result = asyncio.run(momentum_snapshot(42))  # type: ignore[arg-type]
        assert result["error"] is True

    def test_forward_view(self) -> None:
        """Test forward view tool returns the projection."""
        result = asyncio.run(forward_view(price=100, pe=15, wacc=0.08, eps_cagr=0.1, peer_pe=14, beta=1.1))
        view = result["expected_return_6m"]
        assert view["bull"] > view["base"] > view["bear"]

    def test_forward_view_missing_price(self) -> None:
        """Test missing price gives nulls, not an error."""
        result = asyncio.run(forward_view(price=None, pe=15, wacc=0.08))
        assert result["expected_return_6m"] == {"base": None, "bull": None, "bear": None, "confidence": None}
