"""
Solution formatter -- maps solver output back to renovation decisions.
"""

from __future__ import annotations

import math

from core.contracts import Assignment, RenovationInput, RenovationPlan
from optimization.builder import VariableIndex
from optimization.solvers import Solution


def _round(value: float) -> int:
    """Nearest integer, halves rounding away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def is_usable(solution: Solution) -> bool:
    """Only optimal and suboptimal (feasible) solutions carry a plan."""
    return solution.is_optimal() or solution.is_suboptimal()


def format_solution(
    data: RenovationInput,
    solution: Solution,
    index: VariableIndex,
) -> RenovationPlan:
    """
    Collect the renovations the solver selected.

    Any status other than optimal/suboptimal yields an empty plan.
    Variable values are rounded before comparing because solvers return
    values such as 0.9999999 for a selected binary.  Cost and effect are
    copied from the input, not recomputed from solver output.

    Args:
        data:     The input the model was built from.
        solution: Solver output.
        index:    Variable index returned by ``build_model``.

    Returns:
        RenovationPlan with assignments in input order.
    """
    if not is_usable(solution):
        return RenovationPlan()

    assigned: list[Assignment] = []
    for i, prop in enumerate(data.properties):
        variables = index.at(i)
        for j, renovation in enumerate(prop.renovations):
            # Skip renovations that were not selected.
            if _round(solution.value(variables[j])) < 1:
                continue

            assigned.append(
                Assignment(
                    property=prop.id,
                    renovation_id=renovation.id,
                    cost=renovation.cost,
                    effect=renovation.effect,
                )
            )

    return RenovationPlan(assignments=assigned)
