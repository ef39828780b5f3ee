"""
Renovation allocation model builder.

Translates a ``RenovationInput`` into a MIP:

    maximize    sum_p sum_r effect[p, r] * x[p, r]
    subject to  sum_p sum_r cost[p, r] * x[p, r] <= budget
                sum_r x[p, r] <= 3                       for every property p
                x[p, r] in {0, 1}

The builder performs no validation.  Whatever the input says goes into
the model, and the solver reports infeasibility if it has to.
"""

from __future__ import annotations

from typing import Iterator

from loguru import logger

from core.contracts import RenovationInput
from optimization.model import Comparison, Model, Var

MAX_RENOVATIONS_PER_PROPERTY = 3


class VariableIndex:
    """
    Property id -> ordered list of decision variables.

    Entries keep input order (properties, then renovations), so the
    formatter can walk the index side by side with the input.  Entries
    are stored positionally; a repeated property id gets its own entry.
    """

    def __init__(self) -> None:
        self._entries: list[tuple[str, list[Var]]] = []

    def add_property(self, property_id: str) -> list[Var]:
        variables: list[Var] = []
        self._entries.append((property_id, variables))
        return variables

    def __getitem__(self, property_id: str) -> list[Var]:
        for pid, variables in self._entries:
            if pid == property_id:
                return variables
        raise KeyError(property_id)

    def __iter__(self) -> Iterator[tuple[str, list[Var]]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def at(self, position: int) -> list[Var]:
        """Variables of the property at *position* in the input."""
        return self._entries[position][1]

    @property
    def n_vars(self) -> int:
        return sum(len(v) for _, v in self._entries)


def build_model(
    data: RenovationInput,
    max_per_property: int = MAX_RENOVATIONS_PER_PROPERTY,
) -> tuple[Model, VariableIndex]:
    """
    Build the renovation allocation model.

    Args:
        data:             Properties, their renovations and the budget.
        max_per_property: Cap on renovations selected per property.

    Returns:
        The model and the variable index needed to read the solution back.
    """
    m = Model()

    # We want to maximize the total effect.
    m.objective.set_maximize()

    # The budget must not be exceeded.
    budget_constraint = m.new_constraint(
        Comparison.LESS_THAN_OR_EQUAL,
        float(data.budget),
    )

    index = VariableIndex()
    for prop in data.properties:
        variables = index.add_property(prop.id)

        # At most ``max_per_property`` renovations per property.
        count_constraint = m.new_constraint(
            Comparison.LESS_THAN_OR_EQUAL,
            float(max_per_property),
        )

        for renovation in prop.renovations:
            x = m.new_bool()
            variables.append(x)

            m.objective.new_term(renovation.effect, x)
            budget_constraint.new_term(renovation.cost, x)
            count_constraint.new_term(1.0, x)

    logger.debug(
        f"Built renovation model: {len(index)} properties, "
        f"{m.n_vars} variables, {m.n_constraints} constraints"
    )

    return m, index
