"""
Solver-agnostic linear model.

A ``Model`` is an ordered collection of decision variables, linear
constraints and a single linear objective.  Terms are added
incrementally, so a builder can create a constraint first and attach
variables to it as they come into existence.

Variables are identified by their column position in the model, which
is what solver adapters use when compiling the model to matrix form.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Sense(str, Enum):
    MAXIMIZE = "maximize"
    MINIMIZE = "minimize"


class Comparison(str, Enum):
    LESS_THAN_OR_EQUAL = "<="
    GREATER_THAN_OR_EQUAL = ">="
    EQUAL = "=="


class VarType(str, Enum):
    BINARY = "binary"
    INTEGER = "integer"
    CONTINUOUS = "continuous"


@dataclass(frozen=True)
class Var:
    """A decision variable (column) of a model."""

    index: int
    var_type: VarType = VarType.BINARY
    lower_bound: float = 0.0
    upper_bound: float = 1.0

    @property
    def is_integer(self) -> bool:
        return self.var_type in (VarType.BINARY, VarType.INTEGER)


@dataclass(frozen=True)
class Term:
    """``coefficient * var``."""

    coefficient: float
    var: Var


@dataclass
class Constraint:
    """Linear constraint ``sum(terms) <comparison> rhs``."""

    comparison: Comparison
    rhs: float
    terms: list[Term] = field(default_factory=list)

    def new_term(self, coefficient: float, var: Var) -> Term:
        term = Term(float(coefficient), var)
        self.terms.append(term)
        return term

    def is_satisfied_at_zero(self) -> bool:
        """Whether the constraint holds when every variable is 0."""
        if self.comparison is Comparison.LESS_THAN_OR_EQUAL:
            return 0.0 <= self.rhs
        if self.comparison is Comparison.GREATER_THAN_OR_EQUAL:
            return 0.0 >= self.rhs
        return self.rhs == 0.0


@dataclass
class Objective:
    """Linear objective with an optimization sense."""

    sense: Sense = Sense.MINIMIZE
    terms: list[Term] = field(default_factory=list)

    def set_maximize(self) -> None:
        self.sense = Sense.MAXIMIZE

    @property
    def is_maximize(self) -> bool:
        return self.sense is Sense.MAXIMIZE

    def new_term(self, coefficient: float, var: Var) -> Term:
        term = Term(float(coefficient), var)
        self.terms.append(term)
        return term


class Model:
    """
    Mixed integer linear model.

    Example:
        >>> m = Model()
        >>> m.objective.set_maximize()
        >>> x = m.new_bool()
        >>> m.objective.new_term(2.0, x)
        >>> m.new_constraint(Comparison.LESS_THAN_OR_EQUAL, 1.0).new_term(1.0, x)
    """

    def __init__(self) -> None:
        self.vars: list[Var] = []
        self.constraints: list[Constraint] = []
        self.objective = Objective()

    def new_bool(self) -> Var:
        """Create a binary (0/1) variable."""
        return self._add_var(VarType.BINARY, 0.0, 1.0)

    def new_constraint(self, comparison: Comparison, rhs: float) -> Constraint:
        """Create a constraint with no terms yet."""
        constraint = Constraint(comparison=comparison, rhs=float(rhs))
        self.constraints.append(constraint)
        return constraint

    @property
    def n_vars(self) -> int:
        return len(self.vars)

    @property
    def n_constraints(self) -> int:
        return len(self.constraints)

    def _add_var(self, var_type: VarType, lower_bound: float, upper_bound: float) -> Var:
        var = Var(
            index=len(self.vars),
            var_type=var_type,
            lower_bound=float(lower_bound),
            upper_bound=float(upper_bound),
        )
        self.vars.append(var)
        return var

    def __repr__(self) -> str:
        return (
            f"Model(vars={self.n_vars}, constraints={self.n_constraints}, "
            f"sense={self.objective.sense.value})"
        )
