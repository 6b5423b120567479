import unittest

import numpy as np

from portfolio_projection.core.monte_carlo_validation import (
    validate_distribution,
    validate_value_paths,
)


class ValuePathValidationTests(unittest.TestCase):
    def test_clean_paths_pass(self) -> None:
        result = validate_value_paths(np.array([[100.0, 110.0], [100.0, 95.0]]))
        self.assertEqual(result.status, "PASS")
        self.assertEqual(list(result.warnings), [])

    def test_non_finite_values_fail(self) -> None:
        result = validate_value_paths(np.array([[100.0, np.nan]]))
        self.assertEqual(result.to_dict()["failed_checks"], ["nan_or_inf_values"])

    def test_negative_values_warn(self) -> None:
        result = validate_value_paths(np.array([[100.0, -5.0]]))
        self.assertEqual(result.status, "PASS")
        self.assertIn("negative_portfolio_values", result.warnings)

    def test_missing_paths_pass(self) -> None:
        self.assertEqual(validate_value_paths(None).status, "PASS")


class DistributionValidationTests(unittest.TestCase):
    def test_empty_distribution_fails(self) -> None:
        result = validate_distribution([])
        self.assertEqual(result.status, "FAIL")
        self.assertEqual(list(result.failed_checks), ["no_final_values"])

    def test_constant_distribution_warns(self) -> None:
        result = validate_distribution([5.0] * 10)
        self.assertIn("non_positive_std", result.warnings)

    def test_contribution_probability_extreme(self) -> None:
        result = validate_distribution(list(np.linspace(100.0, 200.0, 50)), total_contributions=10.0)
        self.assertEqual(result.status, "PASS")
        self.assertIn("probability_below_contributions_extreme", result.warnings)

    def test_high_dispersion(self) -> None:
        result = validate_distribution([1.0, 1.0, 1.0, 1.0, 100.0])
        self.assertIn("high_dispersion", result.warnings)


if __name__ == "__main__":
    unittest.main()
