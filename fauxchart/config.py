"""YAML configuration for a generation run."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fauxchart.errors import ConfigError

DEFAULT_CONFIG_FILE = "fauxchart.yaml"


class GeneratorConfig(BaseModel):
    """Settings for one run; command-line options override these."""

    model_config = ConfigDict(extra="forbid")

    number_of_patients: int = Field(default=500, gt=0)
    number_of_rows: int = Field(default=2000, ge=0)
    seed: int | None = Field(default=None, ge=0)
    output_directory: Path = Path("output")
    datasets: list[str] = Field(
        default_factory=list,
        description="Dataset names to generate; empty means all.",
    )
    lookups: bool = False
    reference_table: Path | None = None
    reference_date: datetime | None = Field(
        default=None,
        description="Cohort 'today'; defaults to the current time.",
    )
    on_degenerate: Literal["raise", "skip"] = "raise"

    def merged(self, overrides: dict[str, Any]) -> GeneratorConfig:
        """Copy with every non-None entry of ``overrides`` applied and re-validated."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return GeneratorConfig(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid options: {e}") from e


def load_config(path: str | Path) -> GeneratorConfig:
    """Read and validate a YAML configuration file.

    An empty file yields the defaults.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the YAML cannot be parsed or fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing '{path}': {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config '{path}' must be a mapping, got {type(raw).__name__}")

    try:
        return GeneratorConfig(**raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config '{path}': {e}") from e
