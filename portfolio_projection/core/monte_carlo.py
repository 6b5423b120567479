"""Risk adjustment and stochastic path generation for portfolio projections."""

from __future__ import annotations

from dataclasses import dataclass
from math import sqrt
from typing import Iterable, List, Sequence

import numpy as np
import pandas as pd

from ..config import MONTHS_PER_YEAR, PERCENTILE_LEVELS
from ..models.results import PercentileSnapshot, floor_index
from ..models.simulation import SimulationParameters
from ..utils.numbers import percent_to_decimal
from .random_source import RandomSource, box_muller


@dataclass(frozen=True)
class RiskAdjustment:
    """Drift and volatility terms derived from the Sharpe-ratio transform."""

    excess_return: float
    sharpe_ratio: float
    adjusted_annual_return: float  # decimal
    annual_volatility: float       # decimal

    @property
    def monthly_drift(self) -> float:
        return self.adjusted_annual_return / MONTHS_PER_YEAR

    @property
    def monthly_volatility(self) -> float:
        return self.annual_volatility / sqrt(MONTHS_PER_YEAR)


def risk_adjust_return(params: SimulationParameters) -> RiskAdjustment:
    """
    Apply the Sharpe-ratio return adjustment.

    ``rf + ((r - rf) / sigma) * sigma`` reduces to ``r``; the adjusted return
    always equals the expected return up to floating-point rounding. The
    formula is kept as written so results stay comparable with earlier runs.
    """
    volatility = percent_to_decimal(params.annual_volatility)
    excess_return = percent_to_decimal(params.expected_annual_return) - params.risk_free_rate
    sharpe_ratio = excess_return / volatility
    adjusted = params.risk_free_rate + sharpe_ratio * volatility
    return RiskAdjustment(
        excess_return=excess_return,
        sharpe_ratio=sharpe_ratio,
        adjusted_annual_return=adjusted,
        annual_volatility=volatility,
    )


def generate_value_paths(
    params: SimulationParameters,
    sources: Sequence[RandomSource],
    adjustment: RiskAdjustment,
) -> np.ndarray:
    """
    Simulate one trajectory per source and return yearly portfolio values.

    Returns an array of shape ``(len(sources), horizon_years + 1)`` where
    column 0 holds the initial amount and column ``k`` the value after ``k``
    years. Each source supplies its own ``(months, 2)`` block of uniforms,
    read month by month as ``(u1, u2)``.
    """
    months = params.months
    count = len(sources)
    uniforms = np.stack([source.uniform((months, 2)) for source in sources])
    shocks = box_muller(uniforms[:, :, 0], uniforms[:, :, 1])
    monthly_returns = adjustment.monthly_drift + adjustment.monthly_volatility * shocks

    yearly = np.empty((count, params.horizon_years + 1), dtype=float)
    yearly[:, 0] = params.initial_amount
    value = np.full(count, float(params.initial_amount), dtype=float)
    contribution = float(params.monthly_contribution)
    for month in range(1, months + 1):
        value = value * (1.0 + monthly_returns[:, month - 1]) + contribution
        if month % MONTHS_PER_YEAR == 0:
            yearly[:, month // MONTHS_PER_YEAR] = value
    return yearly


def percentile_bands(yearly_values: np.ndarray, *, start_year: int = 0) -> List[PercentileSnapshot]:
    """Sort each year's values across simulations and pick the standard percentiles."""
    count = yearly_values.shape[0]
    indices = {label: floor_index(level, count) for label, level in PERCENTILE_LEVELS.items()}
    snapshots: List[PercentileSnapshot] = []
    for period in range(yearly_values.shape[1]):
        ordered = np.sort(yearly_values[:, period])
        snapshots.append(
            PercentileSnapshot(
                period_index=period,
                year=start_year + period,
                **{label: float(ordered[idx]) for label, idx in indices.items()},
            )
        )
    return snapshots


def build_percentile_table(
    values: Sequence[float],
    *,
    percentiles: Iterable[int] = range(5, 100, 5),
) -> pd.DataFrame:
    """Return a percentile ladder of final values as a dataframe."""
    ordered = np.sort(np.asarray(values, dtype=float))
    if ordered.size == 0:
        return pd.DataFrame(columns=["percentile", "final_value"])
    ladder = [
        {"percentile": p, "final_value": float(ordered[floor_index(p / 100.0, ordered.size)])}
        for p in percentiles
    ]
    return pd.DataFrame(ladder)


__all__ = [
    "RiskAdjustment",
    "risk_adjust_return",
    "generate_value_paths",
    "percentile_bands",
    "build_percentile_table",
]
