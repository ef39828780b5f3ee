"""
Local file connectors for JSON and CSV.

All connectors follow the same contract:
  - ``load(source, **kw)``
  - ``save(obj, dest, **kw) -> Path``

JSON carries the input and output documents; CSV is used for the flat
assignment table.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import pandas as pd
from loguru import logger
from pydantic import ValidationError

from core.contracts import RenovationInput
from core.exceptions import ConnectorError, DataValidationError


# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------

class BaseConnector(ABC):
    """Interface that every local connector implements."""

    @abstractmethod
    def load(self, source: str | Path, **kwargs: Any) -> Any:
        """Read data from *source*."""
        ...

    @abstractmethod
    def save(self, obj: Any, dest: str | Path, **kwargs: Any) -> Path:
        """Write *obj* to *dest* and return the resolved path."""
        ...

    @staticmethod
    def _ensure_path(source: str | Path) -> Path:
        p = Path(source)
        if not p.exists():
            raise ConnectorError(f"Source not found: {source}", source=str(source))
        return p

    @staticmethod
    def _ensure_parent(dest: str | Path) -> Path:
        p = Path(dest)
        p.parent.mkdir(parents=True, exist_ok=True)
        return p


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

class JSONConnector(BaseConnector):
    """Read / write JSON documents."""

    def __init__(self, indent: int = 2, encoding: str = "utf-8"):
        self.indent = indent
        self.encoding = encoding

    def load(self, source: str | Path, **kwargs: Any) -> Any:
        path = self._ensure_path(source)
        logger.info(f"Loading JSON from {path}")

        with open(path, encoding=self.encoding) as f:
            try:
                return json.load(f, **kwargs)
            except json.JSONDecodeError as exc:
                raise DataValidationError(f"Invalid JSON in {path}: {exc}") from exc

    def save(self, obj: Any, dest: str | Path, **kwargs: Any) -> Path:
        path = self._ensure_parent(dest)
        with open(path, "w", encoding=self.encoding) as f:
            json.dump(obj, f, indent=self.indent, default=str, **kwargs)
        logger.info(f"Saved JSON to {path}")
        return path


# ---------------------------------------------------------------------------
# CSV
# ---------------------------------------------------------------------------

class CSVConnector(BaseConnector):
    """Read / write CSV tables."""

    def __init__(self, delimiter: str = ",", encoding: str = "utf-8"):
        self.delimiter = delimiter
        self.encoding = encoding

    def load(self, source: str | Path, **kwargs: Any) -> pd.DataFrame:
        path = self._ensure_path(source)
        logger.info(f"Loading CSV from {path}")
        return pd.read_csv(path, delimiter=self.delimiter, encoding=self.encoding, **kwargs)

    def save(self, df: pd.DataFrame, dest: str | Path, **kwargs: Any) -> Path:
        path = self._ensure_parent(dest)
        df.to_csv(path, index=False, sep=self.delimiter, encoding=self.encoding, **kwargs)
        logger.info(f"Saved {len(df)} rows to {path}")
        return path


# ---------------------------------------------------------------------------
# Input documents
# ---------------------------------------------------------------------------

def parse_input(payload: str | bytes | dict) -> RenovationInput:
    """
    Read a JSON string or an already-decoded dict into the input contract.

    Raises:
        DataValidationError: If the payload is not valid JSON or does not
            have the expected shape.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise DataValidationError(f"Invalid JSON input: {exc}") from exc

    try:
        return RenovationInput.model_validate(payload)
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(p) for p in first.get("loc", ()))
        raise DataValidationError(
            f"Input does not match the expected schema: {exc}",
            field=field or None,
        ) from exc


def load_input(source: str | Path) -> RenovationInput:
    """Load an input document from a JSON file."""
    data = JSONConnector().load(source)
    problem = parse_input(data)
    logger.info(
        f"Loaded {len(problem.properties)} properties, "
        f"{problem.n_pairs} renovation options, budget={problem.budget}"
    )
    return problem
