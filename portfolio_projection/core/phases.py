"""Phased projections: year 1, years 2-5 and years 6-10 run as separate simulations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from ..engine import ProjectionEngine
from ..models.results import SimulationResult
from ..models.simulation import SimulationParameters
from .validator import InvalidParameter


@dataclass(frozen=True)
class PhaseConfig:
    """Horizon and calendar offset for one investment phase."""

    phase: str
    years: int
    start_year: int
    title: str


PHASES: Dict[str, PhaseConfig] = {
    "1": PhaseConfig(phase="1", years=1, start_year=0, title="Phase 1: Year 1"),
    "2": PhaseConfig(phase="2", years=4, start_year=1, title="Phase 2: Years 2-5"),
    "3": PhaseConfig(phase="3", years=5, start_year=5, title="Phase 3: Years 6-10"),
}


@dataclass(frozen=True)
class PhaseResult:
    phase: str
    title: str
    result: SimulationResult


def phase_parameters(base: SimulationParameters, phase: str) -> SimulationParameters:
    """Return ``base`` with the horizon and start year of ``phase``."""
    config = PHASES.get(str(phase))
    if config is None:
        raise InvalidParameter(
            f"Unknown phase {phase!r}; expected one of {', '.join(sorted(PHASES))}"
        )
    return base.with_overrides(horizon_years=config.years, start_year=config.start_year)


def simulate_phase(
    base: SimulationParameters,
    phase: str,
    engine: Optional[ProjectionEngine] = None,
) -> PhaseResult:
    """Run a single phase. Every phase starts from ``base.initial_amount``."""
    params = phase_parameters(base, phase)
    engine = engine or ProjectionEngine()
    config = PHASES[str(phase)]
    return PhaseResult(phase=config.phase, title=config.title, result=engine.simulate(params))


def simulate_all_phases(
    base: SimulationParameters,
    engine: Optional[ProjectionEngine] = None,
) -> List[PhaseResult]:
    engine = engine or ProjectionEngine()
    return [simulate_phase(base, phase, engine) for phase in PHASES]


__all__ = [
    "PHASES",
    "PhaseConfig",
    "PhaseResult",
    "phase_parameters",
    "simulate_phase",
    "simulate_all_phases",
]
