"""Monte Carlo portfolio projection engine."""

from .core.random_source import NumpyRandomSource, RandomSource
from .core.validator import InvalidParameter
from .engine import ProjectionEngine, simulate
from .models.results import PercentileSnapshot, SimulationResult
from .models.simulation import SimulationParameters

__version__ = "0.1.0"

__all__ = [
    "InvalidParameter",
    "NumpyRandomSource",
    "PercentileSnapshot",
    "ProjectionEngine",
    "RandomSource",
    "SimulationParameters",
    "SimulationResult",
    "simulate",
]
