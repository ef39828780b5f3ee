"""
Renovation allocation layer.

Builds the renovation MIP, solves it through a pluggable solver
provider (HiGHS by default), and maps the solution back to
(property, renovation) assignments.
"""

from optimization.builder import (
    MAX_RENOVATIONS_PER_PROPERTY,
    VariableIndex,
    build_model,
)
from optimization.formatter import format_solution, is_usable
from optimization.model import Comparison, Constraint, Model, Objective, Sense, Var
from optimization.registry import list_solvers, new_solver, register_solver
from optimization.runner import RunResult, make_solve_options, solve_renovations
from optimization.solvers import (
    HighsSolver,
    Solution,
    SolutionStatus,
    SolveOptions,
    Solver,
    Verbosity,
)
from optimization.statistics import custom_result_statistics, run_statistics

__all__ = [
    "MAX_RENOVATIONS_PER_PROPERTY",
    "VariableIndex",
    "build_model",
    "format_solution",
    "is_usable",
    "Comparison",
    "Constraint",
    "Model",
    "Objective",
    "Sense",
    "Var",
    "list_solvers",
    "new_solver",
    "register_solver",
    "RunResult",
    "make_solve_options",
    "solve_renovations",
    "HighsSolver",
    "Solution",
    "SolutionStatus",
    "SolveOptions",
    "Solver",
    "Verbosity",
    "custom_result_statistics",
    "run_statistics",
]
