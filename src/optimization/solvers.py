"""
Solver interface and the HiGHS provider.

A solver is anything with ``solve(model, options) -> Solution``.  The
runner never depends on a concrete class: providers are looked up by
name in ``optimization.registry`` or injected directly.

The HiGHS provider compiles a ``Model`` to the matrix form expected by
``scipy.optimize.milp`` (which runs HiGHS under the hood) and maps the
scipy status codes back to a ``SolutionStatus``.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, runtime_checkable

import numpy as np
from loguru import logger
from scipy.optimize import Bounds, LinearConstraint, milp

from core.exceptions import SolverConfigurationError
from optimization.model import Comparison, Model, Var


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

class Verbosity(str, Enum):
    OFF = "off"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SolveOptions:
    """
    Configuration bundle handed to a solver.

    Setters validate their argument and raise ``SolverConfigurationError``
    on bad values, so a misconfigured run fails before any solving starts.
    """

    def __init__(self) -> None:
        self.maximum_duration: float = 30.0
        self.mip_gap_relative: float = 1e-4
        self.verbosity: Verbosity = Verbosity.OFF

    def set_maximum_duration(self, seconds: float) -> None:
        if seconds is None or not math.isfinite(seconds) or seconds <= 0:
            raise SolverConfigurationError(
                f"Maximum duration must be a positive number of seconds, got {seconds}",
                option="maximum_duration",
            )
        self.maximum_duration = float(seconds)

    def set_mip_gap_relative(self, gap: float) -> None:
        if gap is None or not math.isfinite(gap) or gap < 0:
            raise SolverConfigurationError(
                f"Relative MIP gap must be non-negative, got {gap}",
                option="mip_gap_relative",
            )
        self.mip_gap_relative = float(gap)

    def set_verbosity(self, verbosity: Verbosity | str) -> None:
        try:
            self.verbosity = Verbosity(verbosity)
        except ValueError:
            allowed = ", ".join(v.value for v in Verbosity)
            raise SolverConfigurationError(
                f"Unknown verbosity '{verbosity}'. Allowed: {allowed}",
                option="verbosity",
            ) from None

    def to_dict(self) -> dict:
        return {
            "maximum_duration": self.maximum_duration,
            "mip_gap_relative": self.mip_gap_relative,
            "verbosity": self.verbosity.value,
        }


# ---------------------------------------------------------------------------
# Solution
# ---------------------------------------------------------------------------

class SolutionStatus(str, Enum):
    OPTIMAL = "optimal"
    SUBOPTIMAL = "suboptimal"
    INFEASIBLE = "infeasible"
    UNBOUNDED = "unbounded"
    ERROR = "error"
    UNKNOWN = "unknown"


@dataclass
class Solution:
    """Solver output: status plus the value of every variable."""

    status: SolutionStatus
    values: list[float] = field(default_factory=list)
    objective_value: float | None = None
    best_bound: float | None = None
    mip_gap: float | None = None
    run_time: float = 0.0
    provider: str = ""
    message: str = ""

    def is_optimal(self) -> bool:
        return self.status is SolutionStatus.OPTIMAL

    def is_suboptimal(self) -> bool:
        return self.status is SolutionStatus.SUBOPTIMAL

    def has_values(self) -> bool:
        return self.objective_value is not None

    def value(self, var: Var) -> float:
        """
        Value assigned to *var*.

        Raises:
            IndexError: If the solution carries no value for *var*.
        """
        if not 0 <= var.index < len(self.values):
            raise IndexError(
                f"Solution has no value for variable {var.index} "
                f"({len(self.values)} values, status={self.status.value})"
            )
        return self.values[var.index]


@runtime_checkable
class Solver(Protocol):
    """Capability every solver provider exposes."""

    def solve(self, model: Model, options: SolveOptions) -> Solution:
        ...


# ---------------------------------------------------------------------------
# HiGHS provider
# ---------------------------------------------------------------------------

# scipy.optimize.milp status codes
_MILP_OPTIMAL = 0
_MILP_LIMIT_REACHED = 1
_MILP_INFEASIBLE = 2
_MILP_UNBOUNDED = 3


class HighsSolver:
    """
    Solve a ``Model`` with HiGHS through ``scipy.optimize.milp``.

    ``milp`` always minimizes, so a maximization objective is negated on
    the way in and the objective value and bound are negated on the way
    out.
    """

    provider = "highs"

    def solve(self, model: Model, options: SolveOptions) -> Solution:
        started = time.perf_counter()

        if model.n_vars == 0:
            return self._solve_empty(model, started)

        c, integrality, bounds, constraints = self._compile(model)
        milp_options = {
            "time_limit": options.maximum_duration,
            "mip_rel_gap": options.mip_gap_relative,
            "disp": options.verbosity is not Verbosity.OFF,
        }

        logger.debug(
            f"HiGHS solve: {model.n_vars} variables, {model.n_constraints} constraints, "
            f"options={milp_options}"
        )

        result = milp(
            c=c,
            integrality=integrality,
            bounds=bounds,
            constraints=constraints or None,
            options=milp_options,
        )

        sign = -1.0 if model.objective.is_maximize else 1.0
        status = self._map_status(result.status, result.x)
        values = [] if result.x is None else [float(v) for v in result.x]

        objective_value = None
        if values:
            objective_value = sign * float(result.fun)

        best_bound = getattr(result, "mip_dual_bound", None)
        if best_bound is not None:
            best_bound = sign * float(best_bound)
        mip_gap = getattr(result, "mip_gap", None)
        if mip_gap is not None:
            mip_gap = float(mip_gap)

        return Solution(
            status=status,
            values=values,
            objective_value=objective_value,
            best_bound=best_bound,
            mip_gap=mip_gap,
            run_time=time.perf_counter() - started,
            provider=self.provider,
            message=str(result.message),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _compile(self, model: Model):
        """Build the ``milp`` arrays from the model."""
        n = model.n_vars
        sign = -1.0 if model.objective.is_maximize else 1.0

        c = np.zeros(n)
        for term in model.objective.terms:
            c[term.var.index] += sign * term.coefficient

        integrality = np.array([1 if v.is_integer else 0 for v in model.vars])
        bounds = Bounds(
            np.array([v.lower_bound for v in model.vars]),
            np.array([v.upper_bound for v in model.vars]),
        )

        constraints = []
        if model.constraints:
            A = np.zeros((model.n_constraints, n))
            lb = np.full(model.n_constraints, -np.inf)
            ub = np.full(model.n_constraints, np.inf)
            for row, constraint in enumerate(model.constraints):
                for term in constraint.terms:
                    A[row, term.var.index] += term.coefficient
                if constraint.comparison is Comparison.LESS_THAN_OR_EQUAL:
                    ub[row] = constraint.rhs
                elif constraint.comparison is Comparison.GREATER_THAN_OR_EQUAL:
                    lb[row] = constraint.rhs
                else:
                    lb[row] = ub[row] = constraint.rhs
            constraints.append(LinearConstraint(A, lb, ub))

        return c, integrality, bounds, constraints

    @staticmethod
    def _map_status(code: int, x) -> SolutionStatus:
        if code == _MILP_OPTIMAL:
            return SolutionStatus.OPTIMAL
        if code == _MILP_LIMIT_REACHED:
            # Limit reached: usable only if an incumbent was found.
            return SolutionStatus.SUBOPTIMAL if x is not None else SolutionStatus.UNKNOWN
        if code == _MILP_INFEASIBLE:
            return SolutionStatus.INFEASIBLE
        if code == _MILP_UNBOUNDED:
            return SolutionStatus.UNBOUNDED
        return SolutionStatus.ERROR

    def _solve_empty(self, model: Model, started: float) -> Solution:
        """A model without variables is decided by its constraints at zero."""
        feasible = all(c.is_satisfied_at_zero() for c in model.constraints)
        return Solution(
            status=SolutionStatus.OPTIMAL if feasible else SolutionStatus.INFEASIBLE,
            objective_value=0.0 if feasible else None,
            best_bound=0.0 if feasible else None,
            mip_gap=0.0 if feasible else None,
            run_time=time.perf_counter() - started,
            provider=self.provider,
            message="Model has no variables",
        )
