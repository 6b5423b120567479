"""Default settings shared by the projection engine and its callers."""

from __future__ import annotations

from typing import Dict

# UK 10-year gilt yield, approximately 4% annually (decimal form).
DEFAULT_RISK_FREE_RATE = 0.04
DEFAULT_SIMULATIONS = 1000
DEFAULT_BATCH_SIZE = 250
MONTHS_PER_YEAR = 12

PERCENTILE_LEVELS: Dict[str, float] = {
    "p10": 0.10,
    "p25": 0.25,
    "p50": 0.50,
    "p75": 0.75,
    "p90": 0.90,
}

SEED_ENV_VAR = "PORTFOLIO_PROJECTION_SEED"
WORKERS_ENV_VAR = "PORTFOLIO_PROJECTION_WORKERS"
