"""
End-to-end renovation allocation run.

    input -> build_model -> solver.solve -> format_solution -> envelope

The solver is either injected by the caller or looked up by name in the
registry.  Only configuration errors and exceptions from the solver
itself propagate; a solve without a usable solution produces an
envelope with an empty plan.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd
from loguru import logger

from connectors.local import CSVConnector, JSONConnector
from core.contracts import RenovationInput, RenovationPlan, RunOptions
from optimization.builder import build_model
from optimization.formatter import format_solution, is_usable
from optimization.registry import new_solver
from optimization.solvers import Solution, SolveOptions, Solver, Verbosity
from optimization.statistics import run_statistics


@dataclass
class RunResult:
    """
    Results from a renovation allocation run.
    """

    plan: RenovationPlan
    solution: Solution
    options: RunOptions = field(default_factory=RunOptions)
    statistics: dict[str, Any] = field(default_factory=dict)

    @property
    def assignments_frame(self) -> pd.DataFrame:
        """Assignments as a table, one row per selected renovation."""
        columns = ["property", "renovation_id", "cost", "effect"]
        return pd.DataFrame(
            [a.model_dump() for a in self.plan.assignments],
            columns=columns,
        )

    def to_dict(self) -> dict:
        return {
            "options": self.options.model_dump(),
            "solutions": [self.plan.to_dict()],
            "statistics": self.statistics,
        }

    def save(self, path: Path | str) -> Path:
        """Save the envelope to JSON and the assignments to CSV next to it."""
        path = JSONConnector().save(self.to_dict(), path)

        if self.plan.assignments:
            CSVConnector().save(self.assignments_frame, path.with_suffix(".csv"))

        return path


def make_solve_options(options: RunOptions) -> SolveOptions:
    """
    Translate run options into solver options.

    The relative gap is pinned to 0 so the solver targets proven
    optimality instead of its looser default.
    """
    solve_options = SolveOptions()
    solve_options.set_maximum_duration(options.limits.duration)
    solve_options.set_mip_gap_relative(0.0)
    solve_options.set_verbosity(Verbosity.HIGH if options.verbose else Verbosity.OFF)
    return solve_options


def solve_renovations(
    data: RenovationInput,
    options: RunOptions | None = None,
    solver: Solver | None = None,
) -> RunResult:
    """
    Choose renovations that maximize total effect within the budget.

    Args:
        data:    Properties, renovations and budget.
        options: Run options (duration limit, provider, cap).
        solver:  Solver to use instead of ``options.solver``.

    Returns:
        RunResult with the plan, the raw solution and run statistics.
    """
    options = options or RunOptions()
    started = time.perf_counter()

    solve_options = make_solve_options(options)
    if solver is None:
        solver = new_solver(options.solver)

    model, index = build_model(data, options.max_renovations_per_property)

    logger.info(
        f"Solving renovation allocation: {len(data.properties)} properties, "
        f"{model.n_vars} options, budget={data.budget}"
    )

    solution = solver.solve(model, solve_options)
    plan = format_solution(data, solution, index)

    if is_usable(solution):
        logger.info(
            f"Solve complete ({solution.status.value}). "
            f"Selected {len(plan.assignments)} renovations, "
            f"cost={plan.total_cost:.2f}, effect={plan.total_effect:.2f}"
        )
    else:
        logger.warning(
            f"No usable solution (status={solution.status.value}): {solution.message}"
        )

    statistics = run_statistics(
        model, solution, run_duration=time.perf_counter() - started
    )

    return RunResult(
        plan=plan,
        solution=solution,
        options=options,
        statistics=statistics,
    )
