"""Tests for engine configuration."""

import pytest

from scoresheet.config import EngineSettings


class TestEngineSettings:
    """Tests for EngineSettings."""

    def test_defaults(self) -> None:
        """Test default parameters."""
        settings = EngineSettings()
        assert settings.wacc_base == 0.08
        assert settings.terminal_growth == 0.02
        assert settings.tax_rate == 0.25

    def test_immutable(self) -> None:
        """Test settings cannot be mutated."""
        settings = EngineSettings()
        with pytest.raises(AttributeError):
            settings.wacc_base = 0.1  # type: ignore[misc]

    def test_floor_above_ceiling(self) -> None:
        """Test inverted WACC bounds raise ValueError."""
        with pytest.raises(ValueError, match="Invalid WACC bounds"):
            EngineSettings(wacc_floor=0.2, wacc_ceiling=0.1)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "0.1", None])
    def test_non_numeric(self, value: object) -> None:
        """Test non-finite or non-numeric values raise ValueError."""
        with pytest.raises(ValueError, match="Invalid terminal_growth"):
            EngineSettings(terminal_growth=value)  # type: ignore[arg-type]

    def test_tax_rate_bounds(self) -> None:
        """Test tax rate must be in [0, 1)."""
        with pytest.raises(ValueError, match="Invalid tax_rate"):
            EngineSettings(tax_rate=1.0)

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test environment overrides."""
        monkeypatch.setenv("SCORESHEET_WACC_BASE", "0.09")
        monkeypatch.setenv("SCORESHEET_TERMINAL_GROWTH", "0.025")
        monkeypatch.delenv("SCORESHEET_WACC_FLOOR", raising=False)
        settings = EngineSettings.from_env()
        assert settings.wacc_base == 0.09
        assert settings.terminal_growth == 0.025
        assert settings.wacc_floor == 0.06

    def test_from_env_invalid(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test unparseable environment values raise ValueError."""
        monkeypatch.setenv("SCORESHEET_WACC_CEILING", "high")
        with pytest.raises(ValueError, match="SCORESHEET_WACC_CEILING"):
            EngineSettings.from_env()
