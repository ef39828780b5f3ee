"""
Custom exception types for renovation-mip.

Every exception carries a machine-readable code so callers can
handle specific failure modes programmatically.

Only configuration and input problems are raised.  A solve that ends
without a usable plan (infeasible, unbounded, solver error status) is a
normal outcome and is reported as an empty plan, never as an exception.
"""


class RenovationMIPError(Exception):
    """Base exception for all renovation-mip errors."""

    def __init__(self, message: str, code: str = "RENOVATION_MIP_ERROR"):
        self.code = code
        super().__init__(message)


class DataValidationError(RenovationMIPError):
    """Raised when an input document cannot be read into the input contract."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message, code="DATA_VALIDATION_ERROR")


class ConnectorError(RenovationMIPError):
    """Raised when a connector fails to load or write."""

    def __init__(self, message: str, source: str = ""):
        self.source = source
        super().__init__(message, code="CONNECTOR_ERROR")


class SolverConfigurationError(RenovationMIPError):
    """Raised when a solve option is set to an invalid value."""

    def __init__(self, message: str, option: str = ""):
        self.option = option
        super().__init__(message, code="SOLVER_CONFIGURATION_ERROR")


class SolverRegistryError(RenovationMIPError):
    """Raised when a solver provider is not available or misconfigured."""

    def __init__(self, message: str, provider: str = ""):
        self.provider = provider
        super().__init__(message, code="SOLVER_REGISTRY_ERROR")
