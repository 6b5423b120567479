"""Validation helpers for Monte Carlo projection output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence

import numpy as np
import pandas as pd


@dataclass
class ValidationResult:
    """Basic container for validation outcomes."""

    status: str
    failed_checks: Sequence[str]
    warnings: Sequence[str]

    def to_dict(self) -> Dict[str, object]:
        return {
            "status": self.status,
            "failed_checks": list(self.failed_checks),
            "warnings": list(self.warnings),
        }


def validate_value_paths(trajectories: Optional[np.ndarray]) -> ValidationResult:
    """Run basic sanity checks on simulated yearly portfolio values."""
    failed: list[str] = []
    warnings: list[str] = []
    if trajectories is None or np.size(trajectories) == 0:
        return ValidationResult(status="PASS", failed_checks=failed, warnings=warnings)

    values = np.asarray(trajectories, dtype=float)
    if np.any(np.isnan(values)) or np.any(np.isinf(values)):
        failed.append("nan_or_inf_values")
    elif float(values.min()) < 0.0:
        # A monthly return below -100% flips the sign of the portfolio.
        warnings.append("negative_portfolio_values")

    status = "PASS" if not failed else "FAIL"
    return ValidationResult(status=status, failed_checks=failed, warnings=warnings)


def validate_distribution(
    final_values: Sequence[float],
    *,
    total_contributions: Optional[float] = None,
) -> ValidationResult:
    """Validate ordering and dispersion of the final-value distribution."""
    failed: list[str] = []
    warnings: list[str] = []
    if len(final_values) == 0:
        failed.append("no_final_values")
        return ValidationResult(status="FAIL", failed_checks=failed, warnings=warnings)

    series = pd.Series(final_values, dtype=float)
    percentiles = series.quantile([0.10, 0.25, 0.50, 0.75, 0.90])
    if not percentiles.is_monotonic_increasing:
        failed.append("percentile_ordering")

    std = float(series.std(ddof=1)) if len(series) > 1 else 0.0
    mean = float(series.mean())
    if std <= 0:
        warnings.append("non_positive_std")
    elif mean != 0 and std / abs(mean) > 1.0:
        warnings.append("high_dispersion")

    if total_contributions is not None:
        prob_below = float((series < total_contributions).mean())
        if prob_below < 0.05 or prob_below > 0.95:
            warnings.append("probability_below_contributions_extreme")

    status = "PASS" if not failed else "FAIL"
    return ValidationResult(status=status, failed_checks=failed, warnings=warnings)


__all__ = ["ValidationResult", "validate_value_paths", "validate_distribution"]
