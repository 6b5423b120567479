"""Random-number sources for the projection engine.

The engine never touches a global generator. It receives a ``RandomSource``
and spawns one independent child stream per trajectory, so that a seeded run
produces identical results however the trajectories are batched or
parallelised.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

import numpy as np

Shape = Union[int, Tuple[int, ...]]


@runtime_checkable
class RandomSource(Protocol):
    """Capability required by the engine from any randomness provider."""

    def uniform(self, shape: Shape) -> np.ndarray:
        """Return samples drawn uniformly from the open interval (0, 1)."""
        ...

    def spawn(self, count: int) -> Sequence["RandomSource"]:
        """Return ``count`` statistically independent child sources."""
        ...


class NumpyRandomSource:
    """``RandomSource`` backed by a numpy ``Generator`` and its ``SeedSequence``."""

    def __init__(self, seed: Optional[Union[int, np.random.SeedSequence]] = None) -> None:
        if isinstance(seed, np.random.SeedSequence):
            self._seed_sequence = seed
        else:
            self._seed_sequence = np.random.SeedSequence(seed)
        self._generator = np.random.default_rng(self._seed_sequence)

    @property
    def entropy(self) -> object:
        """Root entropy of the underlying seed sequence."""
        return self._seed_sequence.entropy

    def uniform(self, shape: Shape) -> np.ndarray:
        samples = self._generator.random(shape)
        # Generator.random is [0, 1); zero would send log(u1) to -inf.
        zeros = samples == 0.0
        while zeros.any():
            samples[zeros] = self._generator.random(int(zeros.sum()))
            zeros = samples == 0.0
        return samples

    def spawn(self, count: int) -> List["NumpyRandomSource"]:
        return [NumpyRandomSource(child) for child in self._seed_sequence.spawn(count)]


def box_muller(u1: np.ndarray, u2: np.ndarray) -> np.ndarray:
    """Convert paired uniforms in (0, 1) into standard-normal samples."""
    return np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)


__all__ = ["RandomSource", "NumpyRandomSource", "box_muller"]
