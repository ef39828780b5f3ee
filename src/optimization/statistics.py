"""
Run statistics for the output envelope.

Nothing here influences the plan; these numbers only describe the
solve (time, objective, bound, gap, model size).
"""

from __future__ import annotations

import math
from typing import Any

from optimization.model import Model
from optimization.solvers import Solution

STATISTICS_SCHEMA = "v1"


def _finite(value: float | None) -> float | None:
    """Drop inf/nan so the statistics stay valid JSON."""
    if value is None or not math.isfinite(value):
        return None
    return value


def custom_result_statistics(model: Model, solution: Solution) -> dict[str, Any]:
    """Provider, status and model size of a solve."""
    return {
        "provider": solution.provider,
        "status": solution.status.value,
        "variables": model.n_vars,
        "constraints": model.n_constraints,
        "best_bound": _finite(solution.best_bound),
        "mip_gap": _finite(solution.mip_gap),
    }


def run_statistics(
    model: Model,
    solution: Solution,
    run_duration: float | None = None,
) -> dict[str, Any]:
    """
    Build the ``statistics`` block of the output envelope.

    ``result.value`` is the objective value and is only present when the
    solver produced one.
    """
    result: dict[str, Any] = {"duration": solution.run_time}
    if solution.has_values():
        result["value"] = _finite(solution.objective_value)
    result["custom"] = custom_result_statistics(model, solution)

    return {
        "schema": STATISTICS_SCHEMA,
        "run": {"duration": solution.run_time if run_duration is None else run_duration},
        "result": result,
    }
