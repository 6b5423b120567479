"""Input validation utilities."""

from __future__ import annotations

import logging
import math
from numbers import Integral, Real
from typing import List

from ..models.simulation import SimulationParameters

LOGGER = logging.getLogger(__name__)


class InvalidParameter(ValueError):
    """Raised when simulation inputs cannot produce a meaningful projection."""


def _is_finite(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _is_integer(value: object) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def validate_parameters(params: SimulationParameters) -> None:
    """Check every precondition of a projection run, reporting all problems at once."""
    problems: List[str] = []

    for name in (
        "initial_amount",
        "monthly_contribution",
        "expected_annual_return",
        "annual_volatility",
        "risk_free_rate",
    ):
        if not _is_finite(getattr(params, name)):
            problems.append(f"{name} must be a finite number (got {getattr(params, name)!r})")

    if _is_finite(params.initial_amount) and params.initial_amount < 0:
        problems.append("initial_amount must be non-negative")
    if _is_finite(params.monthly_contribution) and params.monthly_contribution < 0:
        problems.append("monthly_contribution must be non-negative")
    if _is_finite(params.annual_volatility) and params.annual_volatility <= 0:
        # Volatility divides the excess return in the Sharpe ratio.
        problems.append("annual_volatility must be greater than zero")

    if not _is_integer(params.horizon_years) or params.horizon_years < 1:
        problems.append(f"horizon_years must be an integer >= 1 (got {params.horizon_years!r})")
    if not _is_integer(params.simulation_count) or params.simulation_count < 1:
        problems.append(
            f"simulation_count must be an integer >= 1 (got {params.simulation_count!r})"
        )
    if not _is_integer(params.start_year) or params.start_year < 0:
        problems.append(f"start_year must be an integer >= 0 (got {params.start_year!r})")

    if problems:
        message = "; ".join(problems)
        LOGGER.warning("Rejected simulation parameters: %s", message)
        raise InvalidParameter(message)


def validate_positive_int(name: str, value: object) -> int:
    """Validate an execution setting such as a worker count or batch size."""
    if not _is_integer(value) or value < 1:
        raise InvalidParameter(f"{name} must be a positive integer (got {value!r})")
    return int(value)


__all__ = ["InvalidParameter", "validate_parameters", "validate_positive_int"]
