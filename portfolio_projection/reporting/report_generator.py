"""Report generation utilities."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

import numpy as np
import pandas as pd

from ..core.monte_carlo import build_percentile_table
from ..core.monte_carlo_validation import validate_distribution
from ..models.results import SimulationResult

LOGGER = logging.getLogger(__name__)


def _json_default(obj: object) -> object:
    """JSON serializer that handles numpy/path objects gracefully."""
    if isinstance(obj, (np.integer,)):
        return int(obj)
    if isinstance(obj, (np.floating,)):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Path):
        return str(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class ReportGenerator:
    """Persist projection outputs to disk as CSV tables and a JSON summary."""

    def __init__(
        self,
        output_dir: str | Path = "output",
        *,
        timestamped: bool = False,
        run_label: Optional[str] = None,
    ) -> None:
        base_dir = Path(output_dir)
        if timestamped:
            run_label = run_label or datetime.now(timezone.utc).strftime("run_%Y%m%d_%H%M%S")
            self.output_dir = base_dir / run_label
        else:
            self.output_dir = base_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.base_dir = base_dir
        self.run_label = self.output_dir.name

    # ------------------------------------------------------------------ helpers
    def _write_json(self, payload: Dict[str, object], filename: str) -> Path:
        path = self.output_dir / filename
        with path.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2, default=_json_default)
        return path

    def _write_table(self, table: pd.DataFrame, filename: str) -> Path:
        if table.empty:
            raise ValueError(f"Refusing to write empty table {filename!r}")
        path = self.output_dir / filename
        table.to_csv(path, index=False)
        LOGGER.debug("Wrote %d rows to %s", len(table), path)
        return path

    # ------------------------------------------------------------------ exports
    def export_percentiles(
        self, result: SimulationResult, filename: str = "percentile_series.csv"
    ) -> Path:
        return self._write_table(result.to_frame(), filename)

    def export_distribution(
        self, result: SimulationResult, filename: str = "final_value_distribution.csv"
    ) -> Path:
        return self._write_table(result.distribution_frame(), filename)

    def export_percentile_ladder(
        self, result: SimulationResult, filename: str = "percentile_ladder.csv"
    ) -> Path:
        return self._write_table(build_percentile_table(result.final_value_distribution), filename)

    def export_summary(self, result: SimulationResult, filename: str = "summary.json") -> Path:
        payload = result.summary()
        payload["validation"] = validate_distribution(
            result.final_value_distribution,
            total_contributions=result.total_contributions,
        ).to_dict()
        payload["generated_at"] = datetime.now(timezone.utc)
        return self._write_json(payload, filename)

    def export_result(self, result: SimulationResult) -> Dict[str, Path]:
        """Export every table for ``result`` and return their paths keyed by name."""
        exported = {
            "percentiles": self.export_percentiles(result),
            "distribution": self.export_distribution(result),
            "percentile_ladder": self.export_percentile_ladder(result),
            "summary": self.export_summary(result),
        }
        LOGGER.info("Exported %d projection artefacts to %s", len(exported), self.output_dir)
        return exported


__all__ = ["ReportGenerator"]
