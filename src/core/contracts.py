"""
Canonical data contracts for renovation-mip.

These Pydantic models define every data boundary of the framework: the
input document (properties, their candidate renovations and the budget),
the run options, and the plan that comes back out.

The contracts only coerce types.  They intentionally do not check
ranges or uniqueness: a negative budget or a duplicated id goes
straight to the solver, which reports infeasibility or a degenerate
plan on its own.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Input contracts  (what users feed into the framework)
# ---------------------------------------------------------------------------

class Renovation(BaseModel):
    """A candidate renovation for one property."""

    id: str
    effect: float = 0.0  # value gained when applied
    cost: float = 0.0    # amount drawn from the budget

    class Config:
        frozen = True


class Property(BaseModel):
    """A property and its ordered menu of candidate renovations."""

    id: str
    renovations: list[Renovation] = Field(default_factory=list)

    class Config:
        frozen = True


class RenovationInput(BaseModel):
    """Complete problem instance."""

    properties: list[Property] = Field(default_factory=list)
    budget: int = 0

    class Config:
        frozen = True

    @property
    def n_pairs(self) -> int:
        """Total number of (property, renovation) pairs."""
        return sum(len(p.renovations) for p in self.properties)


# ---------------------------------------------------------------------------
# Run options
# ---------------------------------------------------------------------------

class Limits(BaseModel):
    """Run limits handed to the solver."""

    duration: float = Field(default=30.0, description="Maximum solve duration in seconds")


class RunOptions(BaseModel):
    """Options of a single run, echoed back in the output envelope."""

    limits: Limits = Field(default_factory=Limits)
    solver: str = Field(default="highs", description="Solver provider name")
    max_renovations_per_property: int = Field(default=3)
    verbose: bool = False


# ---------------------------------------------------------------------------
# Output contracts  (what the framework produces)
# ---------------------------------------------------------------------------

class Assignment(BaseModel):
    """A renovation selected for a property."""

    property: str
    renovation_id: str
    cost: float
    effect: float


class RenovationPlan(BaseModel):
    """Decisions made by the solver, in input order."""

    assignments: list[Assignment] = Field(default_factory=list)

    @property
    def total_cost(self) -> float:
        return sum(a.cost for a in self.assignments)

    @property
    def total_effect(self) -> float:
        return sum(a.effect for a in self.assignments)

    def to_dict(self) -> dict[str, Any]:
        """Serialise, omitting ``assignments`` when nothing was selected."""
        if not self.assignments:
            return {}
        return {"assignments": [a.model_dump() for a in self.assignments]}
