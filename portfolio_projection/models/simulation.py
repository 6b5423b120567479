"""Input parameters for a Monte Carlo portfolio projection."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from numbers import Integral
from typing import Any, Dict, Mapping

from ..config import DEFAULT_RISK_FREE_RATE, DEFAULT_SIMULATIONS, MONTHS_PER_YEAR


def _whole_number(value: object) -> object:
    """Return ``value`` as an int when it holds a whole number, otherwise unchanged.

    Fractional or non-finite counts are passed through so that validation
    rejects them instead of truncating.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        return int(value)
    return value


@dataclass(frozen=True)
class SimulationParameters:
    """
    Financial inputs for one projection run.

    Percentages are kept exactly as entered (``8.0`` meaning 8%) and only
    divided by 100 where they are used. ``risk_free_rate`` is the exception:
    it is a model constant stored in decimal form.
    """

    initial_amount: float
    monthly_contribution: float
    expected_annual_return: float  # percent
    annual_volatility: float       # percent
    horizon_years: int
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE  # decimal
    simulation_count: int = DEFAULT_SIMULATIONS
    start_year: int = 0

    @property
    def months(self) -> int:
        return int(self.horizon_years) * MONTHS_PER_YEAR

    @property
    def total_contributions(self) -> float:
        """Starting capital plus every scheduled monthly contribution."""
        return float(
            self.initial_amount
            + self.monthly_contribution * MONTHS_PER_YEAR * self.horizon_years
        )

    def with_overrides(self, **changes: Any) -> "SimulationParameters":
        """Return a copy with the supplied fields replaced."""
        return replace(self, **changes)

    def to_metadata(self) -> Dict[str, object]:
        """Serialise into a plain dictionary."""
        return asdict(self)

    @classmethod
    def from_metadata(cls, metadata: Mapping[str, object]) -> "SimulationParameters":
        """Rehydrate parameters from a plain mapping (e.g. a JSON or YAML file)."""
        missing = [
            name
            for name in (
                "initial_amount",
                "monthly_contribution",
                "expected_annual_return",
                "annual_volatility",
                "horizon_years",
            )
            if name not in metadata
        ]
        if missing:
            raise KeyError(f"Missing simulation parameter(s): {', '.join(missing)}")
        return cls(
            initial_amount=float(metadata["initial_amount"]),
            monthly_contribution=float(metadata["monthly_contribution"]),
            expected_annual_return=float(metadata["expected_annual_return"]),
            annual_volatility=float(metadata["annual_volatility"]),
            horizon_years=_whole_number(metadata["horizon_years"]),
            risk_free_rate=float(metadata.get("risk_free_rate", DEFAULT_RISK_FREE_RATE)),
            simulation_count=_whole_number(metadata.get("simulation_count", DEFAULT_SIMULATIONS)),
            start_year=_whole_number(metadata.get("start_year", 0)),
        )


__all__ = ["SimulationParameters"]
