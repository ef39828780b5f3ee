"""
Core framework module for renovation-mip.

Provides the canonical data contracts and exception types shared by
the connectors, the model builder and the solver layer.
"""

from core.contracts import (
    Renovation,
    Property,
    RenovationInput,
    Limits,
    RunOptions,
    Assignment,
    RenovationPlan,
)
from core.exceptions import (
    RenovationMIPError,
    DataValidationError,
    ConnectorError,
    SolverConfigurationError,
    SolverRegistryError,
)

__all__ = [
    "Renovation",
    "Property",
    "RenovationInput",
    "Limits",
    "RunOptions",
    "Assignment",
    "RenovationPlan",
    "RenovationMIPError",
    "DataValidationError",
    "ConnectorError",
    "SolverConfigurationError",
    "SolverRegistryError",
]
