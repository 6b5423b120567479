"""Shared fixtures for the test suite."""

from __future__ import annotations

from typing import List

import numpy as np

from portfolio_projection.models.simulation import SimulationParameters


class ConstantSource:
    """Random source returning fixed (u1, u2) pairs; u1 = 1.0 yields zero shocks."""

    def __init__(self, u1: float = 1.0, u2: float = 0.5) -> None:
        self.u1 = u1
        self.u2 = u2
        self.spawned = 0

    def uniform(self, shape):
        samples = np.empty(shape, dtype=float)
        samples[..., 0] = self.u1
        samples[..., 1] = self.u2
        return samples

    def spawn(self, count: int) -> List["ConstantSource"]:
        self.spawned += count
        return [ConstantSource(self.u1, self.u2) for _ in range(count)]


def make_params(**overrides) -> SimulationParameters:
    values = dict(
        initial_amount=1000.0,
        monthly_contribution=100.0,
        expected_annual_return=7.0,
        annual_volatility=15.0,
        horizon_years=10,
        simulation_count=1000,
    )
    values.update(overrides)
    return SimulationParameters(**values)
