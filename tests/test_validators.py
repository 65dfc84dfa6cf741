"""Tests for validators."""

import operator

import pytest

from scoresheet.utils.validators import (
    check_rule,
    check_rule_expr,
    normalize_ticker,
    validate_rate,
)


class TestNormalizeTicker:
    """Tests for ticker normalization."""

    def test_uppercase_and_strip(self) -> None:
        """Test ticker is uppercased and stripped."""
        assert normalize_ticker("  aapl ") == "AAPL"

    def test_inner_whitespace_removed(self) -> None:
        """Test inner whitespace is removed."""
        assert normalize_ticker("brk b") == "BRKB"

    def test_empty_is_none(self) -> None:
        """Test blank or missing ticker is None."""
        assert normalize_ticker("   ") is None
        assert normalize_ticker(None) is None


class TestValidateRate:
    """Tests for validate_rate."""

    def test_valid_rate(self) -> None:
        """Test a valid rate is returned as float."""
        assert validate_rate("wacc", 0.08) == 0.08
        assert validate_rate("wacc", 0) == 0.0

    def test_out_of_bounds(self) -> None:
        """Test out-of-bounds rate raises ValueError."""
        with pytest.raises(ValueError, match="Invalid wacc"):
            validate_rate("wacc", 5.0)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "abc", None, True])
    def test_non_numeric(self, value: object) -> None:
        """Test non-numeric or non-finite rates raise ValueError."""
        with pytest.raises(ValueError, match="Invalid terminal_growth"):
            validate_rate("terminal_growth", value)  # type: ignore[arg-type]


class TestCheckRule:
    """Tests for nullable rule checks."""

    def test_check_rule_none(self) -> None:
        """Test None value gives None, not False."""
        assert check_rule(None, 0) is None

    def test_check_rule_values(self) -> None:
        """Test comparator is applied."""
        assert check_rule(0.1, 0) is True
        assert check_rule(-0.1, 0) is False
        assert check_rule(5, 10, operator.lt) is True

    def test_check_rule_expr(self) -> None:
        """Test two-value comparison with nullable semantics."""
        assert check_rule_expr(0.3, 0.2) is True
        assert check_rule_expr(0.1, 0.2) is False
        assert check_rule_expr(None, 0.2) is None
        assert check_rule_expr(0.2, None) is None
