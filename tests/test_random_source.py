import math
import unittest

import numpy as np

from portfolio_projection.core.random_source import NumpyRandomSource, RandomSource, box_muller


class _QueuedGenerator:
    """Stand-in generator returning pre-arranged draws."""

    def __init__(self, draws):
        self._draws = list(draws)

    def random(self, shape):
        return np.array(self._draws.pop(0), dtype=float).reshape(shape)


class NumpyRandomSourceTests(unittest.TestCase):
    def test_satisfies_protocol(self) -> None:
        self.assertIsInstance(NumpyRandomSource(1), RandomSource)

    def test_uniform_shape_and_open_interval(self) -> None:
        samples = NumpyRandomSource(3).uniform((120, 2))
        self.assertEqual(samples.shape, (120, 2))
        self.assertTrue(np.all(samples > 0.0))
        self.assertTrue(np.all(samples < 1.0))

    def test_zero_draws_are_replaced(self) -> None:
        source = NumpyRandomSource(0)
        source._generator = _QueuedGenerator([[0.0, 0.3, 0.0], [0.7, 0.0], [0.2]])
        samples = source.uniform(3)
        np.testing.assert_array_equal(samples, [0.7, 0.3, 0.2])

    def test_same_seed_same_children(self) -> None:
        first = [child.uniform(5) for child in NumpyRandomSource(99).spawn(3)]
        second = [child.uniform(5) for child in NumpyRandomSource(99).spawn(3)]
        for a, b in zip(first, second):
            np.testing.assert_array_equal(a, b)

    def test_children_are_distinct(self) -> None:
        children = NumpyRandomSource(99).spawn(2)
        self.assertFalse(np.array_equal(children[0].uniform(10), children[1].uniform(10)))

    def test_successive_spawns_do_not_repeat(self) -> None:
        source = NumpyRandomSource(4)
        (first,) = source.spawn(1)
        (second,) = source.spawn(1)
        self.assertFalse(np.array_equal(first.uniform(10), second.uniform(10)))


class BoxMullerTests(unittest.TestCase):
    def test_known_values(self) -> None:
        z = box_muller(np.array([math.exp(-0.5), 1.0]), np.array([0.5, 0.3]))
        self.assertAlmostEqual(z[0], -1.0)
        self.assertEqual(z[1], 0.0)

    def test_standard_normal_moments(self) -> None:
        source = NumpyRandomSource(12)
        u = source.uniform((200_000, 2))
        z = box_muller(u[:, 0], u[:, 1])
        self.assertAlmostEqual(float(z.mean()), 0.0, delta=0.01)
        self.assertAlmostEqual(float(z.std()), 1.0, delta=0.01)


if __name__ == "__main__":
    unittest.main()
