"""Engine configuration."""

import math
import os
from dataclasses import dataclass

DEFAULT_WACC_BASE = 0.08
DEFAULT_WACC_FLOOR = 0.06
DEFAULT_WACC_CEILING = 0.14
DEFAULT_WACC_BETA_STEP = 0.01
DEFAULT_TERMINAL_GROWTH = 0.02
DEFAULT_TAX_RATE = 0.25


@dataclass(frozen=True)
class EngineSettings:
    """Immutable engine parameters shared by one scoring run."""

    wacc_base: float = DEFAULT_WACC_BASE
    wacc_floor: float = DEFAULT_WACC_FLOOR
    wacc_ceiling: float = DEFAULT_WACC_CEILING
    wacc_beta_step: float = DEFAULT_WACC_BETA_STEP
    terminal_growth: float = DEFAULT_TERMINAL_GROWTH
    tax_rate: float = DEFAULT_TAX_RATE

    def __post_init__(self) -> None:
        for name in (
            "wacc_base",
            "wacc_floor",
            "wacc_ceiling",
            "wacc_beta_step",
            "terminal_growth",
            "tax_rate",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Invalid {name} {value!r}. Must be a number.")
            if not math.isfinite(value):
                raise ValueError(f"Invalid {name} {value!r}. Must be finite.")
            object.__setattr__(self, name, float(value))

        if self.wacc_floor > self.wacc_ceiling:
            raise ValueError(
                f"Invalid WACC bounds: floor {self.wacc_floor} exceeds ceiling {self.wacc_ceiling}"
            )
        if not 0 <= self.tax_rate < 1:
            raise ValueError(f"Invalid tax_rate {self.tax_rate}. Must be in [0, 1).")

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Build settings from SCORESHEET_* environment variables."""
        return cls(
            wacc_base=_env_float("SCORESHEET_WACC_BASE", DEFAULT_WACC_BASE),
            wacc_floor=_env_float("SCORESHEET_WACC_FLOOR", DEFAULT_WACC_FLOOR),
            wacc_ceiling=_env_float("SCORESHEET_WACC_CEILING", DEFAULT_WACC_CEILING),
            terminal_growth=_env_float("SCORESHEET_TERMINAL_GROWTH", DEFAULT_TERMINAL_GROWTH),
        )


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"Invalid {name}={raw!r}. Must be a number.") from None
