"""Typer-based command line interface for running projections."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from ..config import DEFAULT_SIMULATIONS, SEED_ENV_VAR, WORKERS_ENV_VAR
from ..core.monte_carlo_validation import validate_distribution
from ..core.phases import simulate_all_phases
from ..core.validator import InvalidParameter
from ..engine import ProjectionEngine
from ..models.results import SimulationResult
from ..models.simulation import SimulationParameters
from ..reporting import ReportGenerator

app = typer.Typer(help="Monte Carlo investment projection engine")
console = Console()


def _format_currency(value: Optional[float]) -> str:
    """Format numbers as currency for console output."""
    return f"£{value:,.0f}" if value is not None else "N/A"


def _load_params_file(path: Path) -> Dict[str, object]:
    """Read a JSON or YAML mapping of simulation parameters."""
    if not path.exists():
        raise typer.BadParameter(f"File not found: {path}")
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        payload = json.loads(text)
    else:
        payload = yaml.safe_load(text)
    if not isinstance(payload, dict):
        raise typer.BadParameter(f"{path} must contain a mapping of parameter names to values.")
    return payload


def _build_parameters(params_file: Optional[Path], overrides: Dict[str, object]) -> SimulationParameters:
    """Merge a parameter file with explicit command line values (command line wins)."""
    metadata: Dict[str, object] = _load_params_file(params_file) if params_file else {}
    metadata.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return SimulationParameters.from_metadata(metadata)
    except KeyError as exc:
        raise typer.BadParameter(
            f"{exc.args[0]}. Pass them as options or in --params."
        ) from exc
    except (TypeError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc


def _build_percentile_table(result: SimulationResult, title: str) -> Table:
    """Create a Rich table of percentile bands per year."""
    table = Table(title=title, show_lines=False)
    table.add_column("Year", justify="right")
    for label in ("10th", "25th", "Median", "75th", "90th"):
        table.add_column(label, justify="right")
    for snapshot in result.percentile_series:
        table.add_row(
            str(snapshot.year),
            *[_format_currency(value) for value in snapshot.as_dict().values()],
        )
    return table


def _print_result(result: SimulationResult, title: str) -> None:
    console.print(_build_percentile_table(result, title))
    final = result.final_percentiles
    validation = validate_distribution(
        result.final_value_distribution, total_contributions=result.total_contributions
    )
    console.print(
        f"Total Contributions: {_format_currency(result.total_contributions)}\n"
        f"Sharpe Ratio: {result.sharpe_ratio:.2f}\n"
        f"50% chance of reaching {_format_currency(final['p50'])} or more\n"
        f"25% chance of reaching {_format_currency(final['p75'])} or more\n"
        f"10% chance portfolio could be below {_format_currency(final['p10'])}"
    )
    status_colour = "green" if validation.status == "PASS" else "red"
    console.print(f"Diagnostics: [{status_colour}]{validation.status}[/{status_colour}]")
    for warning in validation.warnings:
        console.print(f"[yellow]  - {warning}[/yellow]")


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


@app.command()
def simulate(
    initial: Optional[float] = typer.Option(None, help="Starting portfolio value"),
    monthly: Optional[float] = typer.Option(None, help="Contribution added at the end of every month"),
    expected_return: Optional[float] = typer.Option(
        None, "--return", help="Expected annual return in percent (8 means 8%)"
    ),
    volatility: Optional[float] = typer.Option(None, help="Annual volatility in percent"),
    years: Optional[int] = typer.Option(None, help="Time horizon in years"),
    simulations: Optional[int] = typer.Option(
        None, help=f"Number of trajectories (default {DEFAULT_SIMULATIONS})"
    ),
    seed: Optional[int] = typer.Option(None, envvar=SEED_ENV_VAR, help="Random seed"),
    workers: int = typer.Option(1, envvar=WORKERS_ENV_VAR, help="Worker threads"),
    params_file: Optional[Path] = typer.Option(
        None, "--params", help="JSON or YAML file with simulation parameters"
    ),
    output_dir: Optional[Path] = typer.Option(None, help="Directory for report exports"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Run a single projection and print percentile bands per year."""
    _configure_logging(verbose)
    params = _build_parameters(
        params_file,
        {
            "initial_amount": initial,
            "monthly_contribution": monthly,
            "expected_annual_return": expected_return,
            "annual_volatility": volatility,
            "horizon_years": years,
            "simulation_count": simulations,
        },
    )
    try:
        engine = ProjectionEngine(seed=seed, workers=workers)
        result = engine.simulate(params)
    except InvalidParameter as exc:
        raise typer.BadParameter(str(exc)) from exc

    _print_result(result, f"Monte Carlo Simulation ({result.simulation_count:,} runs)")
    if output_dir is not None:
        exported = ReportGenerator(output_dir).export_result(result)
        console.print("Exported:")
        for name, path in exported.items():
            console.print(f"  - {name}: {path}")


@app.command()
def phases(
    initial: Optional[float] = typer.Option(None, help="Starting portfolio value"),
    monthly: Optional[float] = typer.Option(None, help="Contribution added at the end of every month"),
    expected_return: Optional[float] = typer.Option(
        None, "--return", help="Expected annual return in percent"
    ),
    volatility: Optional[float] = typer.Option(None, help="Annual volatility in percent"),
    simulations: Optional[int] = typer.Option(None, help="Number of trajectories per phase"),
    seed: Optional[int] = typer.Option(None, envvar=SEED_ENV_VAR, help="Random seed"),
    params_file: Optional[Path] = typer.Option(
        None, "--params", help="JSON or YAML file with simulation parameters"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Run the three investment phases (year 1, years 2-5, years 6-10)."""
    _configure_logging(verbose)
    # Each phase sets its own horizon; 1 is a placeholder for the base parameters.
    base = _build_parameters(
        params_file,
        {
            "initial_amount": initial,
            "monthly_contribution": monthly,
            "expected_annual_return": expected_return,
            "annual_volatility": volatility,
            "horizon_years": 1,
            "simulation_count": simulations,
        },
    )
    try:
        results = simulate_all_phases(base, ProjectionEngine(seed=seed))
    except InvalidParameter as exc:
        raise typer.BadParameter(str(exc)) from exc

    for phase_result in results:
        _print_result(phase_result.result, phase_result.title)
        console.print()


def main() -> None:
    """Entry point for CLI execution."""
    app()


if __name__ == "__main__":
    main()
