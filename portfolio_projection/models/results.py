"""Result data models for projection runs."""

from __future__ import annotations

import bisect
import math
from typing import Any, Dict, Optional, Tuple

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import PERCENTILE_LEVELS


def floor_index(fraction: float, count: int) -> int:
    """Index of the ``fraction`` percentile in a sorted sample of ``count`` values."""
    return min(int(math.floor(fraction * count)), count - 1)


class PercentileSnapshot(BaseModel):
    """Percentile bands of portfolio value across all simulations for one year."""

    model_config = ConfigDict(frozen=True)

    period_index: int = Field(..., ge=0, description="Years elapsed since the start of the run")
    year: int = Field(..., ge=0, description="Calendar offset: start_year + period_index")
    p10: float
    p25: float
    p50: float
    p75: float
    p90: float

    def as_dict(self) -> Dict[str, float]:
        return {label: getattr(self, label) for label in PERCENTILE_LEVELS}


class SimulationResult(BaseModel):
    """Immutable output of ``ProjectionEngine.simulate``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    percentile_series: Tuple[PercentileSnapshot, ...] = Field(
        ..., description="One snapshot per year, 0..horizon_years, chronological"
    )
    final_value_distribution: Tuple[float, ...] = Field(
        ..., description="Final-year portfolio values of every simulation, sorted ascending"
    )
    total_contributions: float = Field(
        ..., description="initial_amount + monthly_contribution * 12 * horizon_years"
    )
    sharpe_ratio: float = Field(..., description="(expected return - risk-free rate) / volatility")
    adjusted_annual_return: float = Field(
        ..., description="Annual drift (decimal) after the Sharpe-ratio adjustment"
    )
    parameters: Dict[str, Any] = Field(default_factory=dict)
    seed: Optional[int] = Field(default=None, description="Root seed when the run was seeded")
    trajectories: Optional[np.ndarray] = Field(
        default=None,
        description="Raw yearly values, shape (simulation_count, horizon_years + 1)",
    )

    @field_validator("trajectories")
    @classmethod
    def _freeze_trajectories(cls, value: Optional[np.ndarray]) -> Optional[np.ndarray]:
        """Raw values are exposed read-only."""
        if value is None:
            return None
        frozen = np.array(value, dtype=float)
        frozen.setflags(write=False)
        return frozen

    # ------------------------------------------------------------------ stats
    @property
    def simulation_count(self) -> int:
        return len(self.final_value_distribution)

    @property
    def horizon_years(self) -> int:
        return len(self.percentile_series) - 1

    @property
    def final_percentiles(self) -> Dict[str, float]:
        """Five standard percentiles of the final-year distribution."""
        return {label: self.percentile(level) for label, level in PERCENTILE_LEVELS.items()}

    @property
    def median_final_value(self) -> float:
        return self.percentile(0.50)

    def percentile(self, fraction: float) -> float:
        """Final-year value at ``fraction`` using floor indexing into the sorted sample."""
        if not 0.0 <= fraction < 1.0:
            raise ValueError("fraction must be in [0, 1)")
        values = self.final_value_distribution
        return float(values[floor_index(fraction, len(values))])

    def probability_at_least(self, threshold: float) -> float:
        """Share of simulations whose final value is at or above ``threshold``."""
        values = self.final_value_distribution
        below = bisect.bisect_left(values, threshold)
        return (len(values) - below) / len(values)

    # ----------------------------------------------------------------- frames
    def to_frame(self) -> pd.DataFrame:
        """Percentile series as a dataframe, one row per year."""
        rows = [
            {"period_index": s.period_index, "year": s.year, **s.as_dict()}
            for s in self.percentile_series
        ]
        frame = pd.DataFrame(rows)
        frame["total_contributions"] = self.total_contributions
        return frame

    def distribution_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "rank": np.arange(1, self.simulation_count + 1),
                "final_value": self.final_value_distribution,
            }
        )

    def summary(self) -> Dict[str, object]:
        values = np.asarray(self.final_value_distribution, dtype=float)
        return {
            "simulation_count": self.simulation_count,
            "horizon_years": self.horizon_years,
            "total_contributions": self.total_contributions,
            "sharpe_ratio": self.sharpe_ratio,
            "adjusted_annual_return": self.adjusted_annual_return,
            "mean_final_value": float(values.mean()),
            "final_percentiles": self.final_percentiles,
            "probability_above_contributions": self.probability_at_least(
                self.total_contributions
            ),
            "seed": self.seed,
            "parameters": dict(self.parameters),
        }


__all__ = ["PercentileSnapshot", "SimulationResult", "floor_index"]
