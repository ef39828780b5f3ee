"""
Command-line interface for renovation-mip.

Provides commands for:
  - Solving a renovation allocation input
  - Generating demo input data
  - Listing solver providers
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import numpy as np
import typer
from loguru import logger

app = typer.Typer(
    name="renovation-mip",
    help="Budget-constrained renovation allocation as a MIP",
    add_completion=False,
)


# ---------------------------------------------------------------------------
# solve
# ---------------------------------------------------------------------------

@app.command()
def solve(
    input_path: Optional[Path] = typer.Option(
        None, "--input", "-i", help="Path to input JSON (stdin if omitted)",
    ),
    output_path: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Path to output JSON (stdout if omitted)",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config.yaml",
    ),
    duration: Optional[float] = typer.Option(
        None, "--duration", "-d", help="Maximum solve duration in seconds",
    ),
    solver: Optional[str] = typer.Option(
        None, "--solver", "-s", help="Solver provider (see `solvers`)",
    ),
    max_per_property: Optional[int] = typer.Option(
        None, "--max-per-property", help="Renovations allowed per property",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", help="Show the solver log",
    ),
    save: bool = typer.Option(
        False, "--save", help="Also save JSON and CSV results under the configured outputs path",
    ),
):
    """
    Solve a renovation allocation problem.

    Reads properties, renovations and budget, and writes the selected
    assignments together with run statistics.
    """
    from config import load_config
    from connectors.local import JSONConnector, load_input, parse_input
    from core.exceptions import RenovationMIPError
    from optimization.runner import solve_renovations

    try:
        cfg = load_config(config_path)
        options = cfg.to_run_options()
        if duration is not None:
            options.limits.duration = duration
        if solver is not None:
            options.solver = solver
        if max_per_property is not None:
            options.max_renovations_per_property = max_per_property
        if verbose:
            options.verbose = True

        data = load_input(input_path) if input_path else parse_input(sys.stdin.read())
        result = solve_renovations(data, options)

        if save:
            cfg.ensure_directories()
            stem = input_path.stem if input_path else "stdin"
            result.save(cfg.storage.outputs_path / f"{stem}_result.json")
    except RenovationMIPError as exc:
        logger.error(f"[{exc.code}] {exc}")
        raise typer.Exit(1)

    envelope = result.to_dict()
    if output_path is None:
        typer.echo(json.dumps(envelope, indent=2, default=str))
    else:
        JSONConnector().save(envelope, output_path)


# ---------------------------------------------------------------------------
# demo
# ---------------------------------------------------------------------------

_RENOVATION_KINDS = [
    "roof", "kitchen", "bathroom", "windows", "insulation",
    "heating", "solar", "flooring", "facade", "garden",
]


@app.command()
def demo(
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Where to write the demo input (default: <inputs_path>/demo.json)",
    ),
    n_properties: int = typer.Option(10, "--properties", "-n"),
    seed: int = typer.Option(42, "--seed"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config.yaml",
    ),
):
    """Generate a random renovation allocation input."""
    from config import load_config
    from connectors.local import JSONConnector
    from core.exceptions import RenovationMIPError

    if output is None:
        try:
            cfg = load_config(config_path)
        except RenovationMIPError as exc:
            logger.error(f"[{exc.code}] {exc}")
            raise typer.Exit(1)
        cfg.ensure_directories()
        output = cfg.storage.inputs_path / "demo.json"

    rng = np.random.default_rng(seed)
    logger.info(f"Generating demo input with {n_properties} properties...")

    properties = []
    total_cost = 0.0
    for p in range(n_properties):
        n_options = int(rng.integers(2, 7))
        kinds = rng.choice(_RENOVATION_KINDS, size=n_options, replace=False)
        renovations = []
        for kind in kinds:
            cost = float(rng.integers(5, 60)) * 100
            effect = round(cost * float(rng.uniform(0.5, 2.5)), 2)
            total_cost += cost
            renovations.append({"id": str(kind), "effect": effect, "cost": cost})
        properties.append({"id": f"property-{p + 1:03d}", "renovations": renovations})

    # Roughly a third of what everything would cost.
    budget = int(total_cost / 3)
    JSONConnector().save({"properties": properties, "budget": budget}, output)

    logger.info(f"Demo input written to {output}")
    logger.info(f"  properties : {n_properties}")
    logger.info(f"  budget     : {budget:,}")


# ---------------------------------------------------------------------------
# solvers
# ---------------------------------------------------------------------------

@app.command()
def solvers():
    """List available solver providers."""
    from optimization.registry import list_solvers

    available = list_solvers()
    logger.info(f"Available solvers: {', '.join(available) if available else '(none)'}")
    for name in available:
        typer.echo(name)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
