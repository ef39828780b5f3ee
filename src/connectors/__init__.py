"""
Data connectors for renovation-mip.

Supports JSON input/output documents and CSV assignment tables.
"""

from .local import (
    BaseConnector,
    JSONConnector,
    CSVConnector,
    load_input,
    parse_input,
)

__all__ = [
    "BaseConnector",
    "JSONConnector",
    "CSVConnector",
    "load_input",
    "parse_input",
]
