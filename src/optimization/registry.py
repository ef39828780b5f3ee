"""
Solver registry -- looks up solver providers by name.

Providers register a factory under a name (e.g. ``"highs"``).  The
runner asks for a provider by string and gets back an object that
satisfies the ``Solver`` protocol.  Tests and embedding applications can
skip the registry and inject their own solver instead.
"""

from __future__ import annotations

from typing import Callable

from loguru import logger

from core.exceptions import SolverRegistryError
from optimization.solvers import HighsSolver, Solver


# ---------------------------------------------------------------------------
# Registry storage
# ---------------------------------------------------------------------------

_REGISTRY: dict[str, Callable[[], Solver]] = {}


def register_solver(name: str, factory: Callable[[], Solver]) -> None:
    """
    Register a solver factory under *name*.

    Registering an existing name replaces the previous factory.
    """
    _REGISTRY[name.lower()] = factory
    logger.debug(f"Registered solver provider: {name}")


def list_solvers() -> list[str]:
    """Return the names of all registered solver providers."""
    return sorted(_REGISTRY.keys())


def new_solver(name: str = "highs") -> Solver:
    """
    Instantiate a solver provider by name.

    Raises:
        SolverRegistryError: If no provider is registered under *name*.
    """
    key = name.lower()

    if key not in _REGISTRY:
        available = ", ".join(list_solvers()) or "(none)"
        raise SolverRegistryError(
            f"Unknown solver provider '{name}'. Available: {available}",
            provider=name,
        )

    solver = _REGISTRY[key]()
    logger.debug(f"Created solver provider: {type(solver).__name__}")
    return solver


register_solver("highs", HighsSolver)
