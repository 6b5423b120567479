import math
import unittest

import numpy as np

from portfolio_projection.core.monte_carlo import (
    build_percentile_table,
    generate_value_paths,
    percentile_bands,
    risk_adjust_return,
)
from portfolio_projection.core.random_source import NumpyRandomSource
from tests.helpers import ConstantSource, make_params


class RiskAdjustmentTests(unittest.TestCase):
    def test_sharpe_ratio_uses_excess_return_over_volatility(self) -> None:
        adjustment = risk_adjust_return(make_params(expected_annual_return=7.0, annual_volatility=15.0))
        self.assertAlmostEqual(adjustment.excess_return, 0.03)
        self.assertAlmostEqual(adjustment.sharpe_ratio, 0.2)

    def test_adjusted_return_equals_expected_return(self) -> None:
        for expected, volatility in [(7.0, 15.0), (-3.0, 22.0), (4.0, 0.5), (12.5, 40.0)]:
            adjustment = risk_adjust_return(
                make_params(expected_annual_return=expected, annual_volatility=volatility)
            )
            self.assertAlmostEqual(adjustment.adjusted_annual_return, expected / 100.0, places=12)

    def test_monthly_terms(self) -> None:
        adjustment = risk_adjust_return(make_params(expected_annual_return=12.0, annual_volatility=24.0))
        self.assertAlmostEqual(adjustment.monthly_drift, 0.01)
        self.assertAlmostEqual(adjustment.monthly_volatility, 0.24 / math.sqrt(12))


class ValuePathTests(unittest.TestCase):
    def test_zero_shock_paths_compound_at_monthly_drift(self) -> None:
        params = make_params(
            initial_amount=1200.0,
            monthly_contribution=50.0,
            expected_annual_return=12.0,
            horizon_years=2,
            simulation_count=3,
        )
        adjustment = risk_adjust_return(params)
        sources = ConstantSource().spawn(3)
        yearly = generate_value_paths(params, sources, adjustment)

        expected = [1200.0]
        value = 1200.0
        for month in range(1, 25):
            value = value * 1.01 + 50.0
            if month % 12 == 0:
                expected.append(value)
        self.assertEqual(yearly.shape, (3, 3))
        for row in yearly:
            np.testing.assert_allclose(row, expected, rtol=1e-12)

    def test_first_column_is_initial_amount(self) -> None:
        params = make_params(initial_amount=2500.0, horizon_years=3, simulation_count=5)
        sources = NumpyRandomSource(11).spawn(5)
        yearly = generate_value_paths(params, sources, risk_adjust_return(params))
        self.assertEqual(yearly.shape, (5, 4))
        self.assertTrue(np.all(yearly[:, 0] == 2500.0))

    def test_each_trajectory_reads_its_own_stream(self) -> None:
        params = make_params(horizon_years=2, simulation_count=4)
        adjustment = risk_adjust_return(params)
        together = generate_value_paths(params, NumpyRandomSource(5).spawn(4), adjustment)
        children = NumpyRandomSource(5).spawn(4)
        separate = np.vstack(
            [generate_value_paths(params, [child], adjustment) for child in children]
        )
        np.testing.assert_allclose(together, separate, rtol=1e-12)


class PercentileBandTests(unittest.TestCase):
    def test_floor_index_convention(self) -> None:
        values = np.array([7.0, 3.0, 9.0, 0.0, 5.0, 1.0, 8.0, 2.0, 6.0, 4.0]).reshape(10, 1)
        (snapshot,) = percentile_bands(values)
        # floor(f * 10): 1, 2, 5, 7, 9
        self.assertEqual(snapshot.p10, 1.0)
        self.assertEqual(snapshot.p25, 2.0)
        self.assertEqual(snapshot.p50, 5.0)
        self.assertEqual(snapshot.p75, 7.0)
        self.assertEqual(snapshot.p90, 9.0)

    def test_single_simulation_uses_only_value(self) -> None:
        (first, second) = percentile_bands(np.array([[100.0, 150.0]]))
        self.assertEqual(second.as_dict(), {"p10": 150.0, "p25": 150.0, "p50": 150.0, "p75": 150.0, "p90": 150.0})
        self.assertEqual(first.period_index, 0)

    def test_start_year_offsets_year_not_period_index(self) -> None:
        snapshots = percentile_bands(np.ones((4, 3)), start_year=5)
        self.assertEqual([s.period_index for s in snapshots], [0, 1, 2])
        self.assertEqual([s.year for s in snapshots], [5, 6, 7])

    def test_percentile_table_uses_floor_convention(self) -> None:
        table = build_percentile_table(list(range(100)), percentiles=[10, 50, 90])
        self.assertEqual(table["final_value"].tolist(), [10.0, 50.0, 90.0])

    def test_percentile_table_empty(self) -> None:
        self.assertTrue(build_percentile_table([]).empty)


if __name__ == "__main__":
    unittest.main()
