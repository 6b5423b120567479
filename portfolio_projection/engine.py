"""High-level orchestration for the Monte Carlo projection engine."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterator, List, Optional, Sequence

import numpy as np

from .config import DEFAULT_BATCH_SIZE
from .core.monte_carlo import (
    RiskAdjustment,
    generate_value_paths,
    percentile_bands,
    risk_adjust_return,
)
from .core.monte_carlo_validation import validate_value_paths
from .core.random_source import NumpyRandomSource, RandomSource
from .core.validator import InvalidParameter, validate_parameters, validate_positive_int
from .models.results import SimulationResult
from .models.simulation import SimulationParameters

LOGGER = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


class ProjectionEngine:
    """
    Run independent stochastic trajectories of portfolio value and summarise them.

    Parameters
    ----------
    random_source:
        Randomness provider. Each call to ``simulate`` spawns one child stream
        per trajectory from it.
    seed:
        Root seed used to build a fresh ``NumpyRandomSource`` on every call, so
        repeated calls with the same parameters return identical results.
        Mutually exclusive with ``random_source``.
    workers:
        Number of threads used to simulate batches concurrently.
    batch_size:
        Trajectories simulated together in one vectorised pass.
    """

    def __init__(
        self,
        random_source: Optional[RandomSource] = None,
        *,
        seed: Optional[int] = None,
        workers: int = 1,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        if random_source is not None and seed is not None:
            raise InvalidParameter("Provide random_source or seed, not both.")
        self.workers = validate_positive_int("workers", workers)
        self.batch_size = validate_positive_int("batch_size", batch_size)
        self.seed = seed
        self._random_source = random_source

    # --------------------------------------------------------------- Execution
    def simulate(
        self,
        params: SimulationParameters,
        *,
        keep_trajectories: bool = False,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> SimulationResult:
        """Execute ``params.simulation_count`` trajectories and aggregate percentile bands."""
        validate_parameters(params)

        source, seed = self._resolve_source()
        adjustment = risk_adjust_return(params)
        LOGGER.info(
            "Running %d simulations over %d years (seed=%s, workers=%d)",
            params.simulation_count,
            params.horizon_years,
            seed,
            self.workers,
        )

        children = list(source.spawn(params.simulation_count))
        batches = [
            children[start : start + self.batch_size]
            for start in range(0, len(children), self.batch_size)
        ]
        yearly = np.vstack(
            list(self._run_batches(params, batches, adjustment, progress_callback))
        )

        path_validation = validate_value_paths(yearly)
        if path_validation.status != "PASS" or path_validation.warnings:
            LOGGER.warning("Trajectory checks: %s", path_validation.to_dict())

        final_values = np.sort(yearly[:, -1])
        result = SimulationResult(
            percentile_series=tuple(percentile_bands(yearly, start_year=params.start_year)),
            final_value_distribution=tuple(final_values.tolist()),
            total_contributions=params.total_contributions,
            sharpe_ratio=adjustment.sharpe_ratio,
            adjusted_annual_return=adjustment.adjusted_annual_return,
            parameters=params.to_metadata(),
            seed=seed,
            trajectories=yearly if keep_trajectories else None,
        )
        LOGGER.info(
            "Simulation complete: median final value %.2f (total contributions %.2f)",
            result.median_final_value,
            result.total_contributions,
        )
        return result

    # ----------------------------------------------------------------- Helpers
    def _resolve_source(self) -> tuple[RandomSource, Optional[int]]:
        if self._random_source is not None:
            return self._random_source, None
        source = NumpyRandomSource(self.seed)
        seed = self.seed if self.seed is not None else int(source.entropy)
        return source, seed

    def _run_batches(
        self,
        params: SimulationParameters,
        batches: List[Sequence[RandomSource]],
        adjustment: RiskAdjustment,
        progress_callback: Optional[ProgressCallback],
    ) -> Iterator[np.ndarray]:
        total = len(batches)

        def run(batch: Sequence[RandomSource]) -> np.ndarray:
            return generate_value_paths(params, batch, adjustment)

        if self.workers > 1 and total > 1:
            with ThreadPoolExecutor(
                max_workers=min(self.workers, total), thread_name_prefix="projection"
            ) as executor:
                for index, values in enumerate(executor.map(run, batches), start=1):
                    self._emit_progress(progress_callback, index, total)
                    yield values
        else:
            for index, batch in enumerate(batches, start=1):
                values = run(batch)
                self._emit_progress(progress_callback, index, total)
                yield values

    @staticmethod
    def _emit_progress(callback: Optional[ProgressCallback], step: int, total: int) -> None:
        message = f"batch {step}/{total}"
        LOGGER.debug("Completed %s", message)
        if callback is None:
            return
        try:
            callback(step, total, message)
        except Exception:
            LOGGER.exception("Progress callback failed at %s", message)


def simulate(
    params: SimulationParameters,
    *,
    seed: Optional[int] = None,
    random_source: Optional[RandomSource] = None,
    workers: int = 1,
    keep_trajectories: bool = False,
) -> SimulationResult:
    """Convenience wrapper building a one-off ``ProjectionEngine``."""
    engine = ProjectionEngine(random_source, seed=seed, workers=workers)
    return engine.simulate(params, keep_trajectories=keep_trajectories)


__all__ = ["ProjectionEngine", "ProgressCallback", "simulate"]
