"""
Configuration models and YAML I/O for cot-ingest.

This module defines the Pydantic models that map 1:1 to cotconfig.yaml,
plus helper functions for loading, saving, and auto-generating the config.

Key models:
- IngestConfig: Top-level config (source + aliases + output + focus_symbols).
- SourceConfig: Paths of the positions and history CSV exports.
- AliasConfig: Header alias substrings per snapshot column role.
- OutputConfig: Output directory and format.

Key functions:
- load_config(path) -> IngestConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.
- generate_default_config(...) -> IngestConfig: Build a config for given sources.

Why Pydantic + YAML:
- Pydantic gives us strict validation, type coercion, and clear error messages.
- YAML is human-editable (users add aliases for their broker's headers
  and edit the focus list by hand).
- Round-trip fidelity: load -> modify -> save preserves structure.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from cot_ingest.exceptions import ConfigValidationError
from cot_ingest.parsers.columns import DEFAULT_ALIASES, ColumnRole

logger = logging.getLogger(__name__)


def _default(role: ColumnRole) -> list[str]:
    return list(DEFAULT_ALIASES[role])


class SourceConfig(BaseModel):
    """Where the raw CSV text comes from."""

    positions_path: str | None = Field(
        None, description="Path to the current-positions (snapshot) CSV export"
    )
    history_path: str | None = Field(
        None, description="Path to the historical (weekly series) CSV export"
    )


class AliasConfig(BaseModel):
    """Header aliases per snapshot column role.

    Aliases are compared against normalised headers (lower-case, no
    quotes, whitespace, ``.``, ``_`` or ``-``), so write them that way:
    ``netposition``, not ``Net Position``.
    """

    commodity: list[str] = Field(default_factory=lambda: _default(ColumnRole.COMMODITY))
    net_position: list[str] = Field(default_factory=lambda: _default(ColumnRole.NET_POSITION))
    net_change: list[str] = Field(default_factory=lambda: _default(ColumnRole.NET_CHANGE))
    long_position: list[str] = Field(default_factory=lambda: _default(ColumnRole.LONG_POSITION))
    long_change: list[str] = Field(default_factory=lambda: _default(ColumnRole.LONG_CHANGE))
    short_position: list[str] = Field(default_factory=lambda: _default(ColumnRole.SHORT_POSITION))
    short_change: list[str] = Field(default_factory=lambda: _default(ColumnRole.SHORT_CHANGE))

    @field_validator("*")
    @classmethod
    def _check_not_empty(cls, value: list[str]) -> list[str]:
        """Every role needs at least one alias."""
        if not value:
            raise ValueError("Alias list must contain at least one entry.")
        return value

    def as_mapping(self) -> dict[ColumnRole, tuple[str, ...]]:
        """Role -> aliases, in ``ColumnRole`` order."""
        fields = self.model_dump()
        return {role: tuple(fields[role.value]) for role in ColumnRole}


class OutputConfig(BaseModel):
    """Output settings."""

    output_dir: str = Field("outputs/", description="Directory for output files")
    output_format: Literal["csv", "parquet"] = Field(
        "parquet", description="Output format"
    )


class IngestConfig(BaseModel):
    """Top-level configuration for cot-ingest.

    Maps 1:1 to cotconfig.yaml.
    """

    source: SourceConfig = Field(default_factory=SourceConfig)
    aliases: AliasConfig = Field(default_factory=AliasConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    focus_symbols: list[str] = Field(
        default_factory=list,
        description="Assets to keep after parsing. Empty list keeps everything.",
    )


def load_config(path: str | Path) -> IngestConfig:
    """Load and validate cotconfig.yaml into an IngestConfig model.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty or names no source.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    config = IngestConfig.model_validate(raw)
    if config.source.positions_path is None and config.source.history_path is None:
        raise ConfigValidationError(
            f"Config {path} has no source: set source.positions_path "
            "and/or source.history_path."
        )
    logger.info("Loaded config from %s", path)
    return config


def save_config(config: IngestConfig, path: str | Path) -> None:
    """Serialize an IngestConfig to YAML.

    Writes a human-readable YAML file with a header comment.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# cot-ingest configuration\n")
        f.write("# Edit this file to add header aliases, focus symbols, output format, etc.\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)


def generate_default_config(
    positions_path: str | None = None,
    history_path: str | None = None,
    output_dir: str = "outputs/",
) -> IngestConfig:
    """Build an IngestConfig with default aliases and no focus filter."""
    return IngestConfig(
        source=SourceConfig(positions_path=positions_path, history_path=history_path),
        output=OutputConfig(output_dir=output_dir),
    )
