"""
Configuration management for renovation-mip.

Configuration with YAML loading and sensible defaults.  The config
drives the solver provider and its limits, the per-property cap of the
model, and where run outputs are written.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from core.contracts import Limits, RunOptions
from core.exceptions import ConnectorError, DataValidationError


# ---------------------------------------------------------------------------
# Section configs
# ---------------------------------------------------------------------------

class StorageConfig(BaseModel):
    """Filesystem paths for inputs and outputs."""

    inputs_path: Path = Field(default=Path("data/inputs"))
    outputs_path: Path = Field(default=Path("data/outputs"))


class SolverConfig(BaseModel):
    """Solver provider and limits."""

    provider: str = Field(default="highs", description="Solver provider name")
    duration: float = Field(default=30.0, description="Maximum solve duration in seconds")
    verbose: bool = Field(default=False, description="Show the solver log")


class ModelConfig(BaseModel):
    """Renovation model settings."""

    max_renovations_per_property: int = Field(default=3)


# ---------------------------------------------------------------------------
# Root config
# ---------------------------------------------------------------------------

class RenovationConfig(BaseModel):
    """Root configuration for renovation-mip."""

    project_name: str = Field(default="renovation-mip")

    storage: StorageConfig = Field(default_factory=StorageConfig)
    solver: SolverConfig = Field(default_factory=SolverConfig)
    model: ModelConfig = Field(default_factory=ModelConfig)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "RenovationConfig":
        """
        Load config from a YAML file.

        Raises:
            ConnectorError: If the file does not exist.
            DataValidationError: If the file is not valid YAML or does not
                match the config schema.
        """
        path = Path(path)
        if not path.exists():
            raise ConnectorError(f"Config not found: {path}", source=str(path))

        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise DataValidationError(f"Invalid YAML in {path}: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            first = exc.errors()[0] if exc.errors() else {}
            field = ".".join(str(p) for p in first.get("loc", ()))
            raise DataValidationError(
                f"Config {path} does not match the expected schema: {exc}",
                field=field or None,
            ) from exc

    def to_yaml(self, path: Path | str) -> None:
        """Write config to a YAML file."""
        with open(Path(path), "w") as f:
            yaml.dump(
                self.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False
            )

    def to_run_options(self) -> RunOptions:
        """Default run options derived from this config."""
        return RunOptions(
            limits=Limits(duration=self.solver.duration),
            solver=self.solver.provider,
            max_renovations_per_property=self.model.max_renovations_per_property,
            verbose=self.solver.verbose,
        )

    def ensure_directories(self) -> None:
        """Create all required directories."""
        for p in [self.storage.inputs_path, self.storage.outputs_path]:
            p.mkdir(parents=True, exist_ok=True)


def load_config(path: Path | str | None = None) -> RenovationConfig:
    """
    Load config from file, falling back to standard locations, then defaults.
    """
    if path is not None:
        return RenovationConfig.from_yaml(path)

    for candidate in [Path("config.yaml"), Path("config/config.yaml")]:
        if candidate.exists():
            return RenovationConfig.from_yaml(candidate)

    return RenovationConfig()
