"""World configuration for Travelers.

WorldConfig holds the constants generation depends on: interior side
length, tile size, render distance, world seed and schematic location.
WorldContext bundles a config with the loaded schematic and the coordinate
mapper; it is the explicit context handed to the lifecycle manager in
place of global resources.

Environment variables (loaded from .env by main):
    TRAVELERS_SEED, TRAVELERS_RENDER_DISTANCE, TRAVELERS_CHUNK_LENGTH,
    TRAVELERS_TILE_SIZE, TRAVELERS_SCHEMATIC
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .core.schematic import Schematic, default_schematic_path, load_schematic_file
from .generation.coords import ChunkCoordinateMapper

# Stock world: 8x8 interiors, 32-unit tiles
DEFAULT_CHUNK_LENGTH = 8
DEFAULT_TILE_SIZE = 32
DEFAULT_RENDER_DISTANCE = 3
DEFAULT_SEED = 42

ENV_PREFIX = "TRAVELERS_"
_ENV_FIELDS: dict[str, str] = {
    "SEED": "seed",
    "RENDER_DISTANCE": "render_distance",
    "CHUNK_LENGTH": "interior_length",
    "TILE_SIZE": "tile_size",
    "SCHEMATIC": "schematic_path",
}


class ConfigError(Exception):
    """Invalid world configuration."""

    pass


class WorldConfig(BaseModel):
    """Generation constants, fixed for the lifetime of a world."""

    model_config = ConfigDict(frozen=True)

    interior_length: int = Field(default=DEFAULT_CHUNK_LENGTH, ge=1, le=64)
    tile_size: int = Field(default=DEFAULT_TILE_SIZE, ge=1)
    render_distance: int = Field(default=DEFAULT_RENDER_DISTANCE, ge=0, le=32)
    seed: int = Field(default=DEFAULT_SEED, ge=0)
    schematic_path: Path | None = None  # None = bundled schematic

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> WorldConfig:
        """Build a config from TRAVELERS_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            **overrides: Explicit values (e.g. from CLI flags); None is ignored

        Raises:
            ConfigError: If a value fails validation
        """
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for suffix, field_name in _ENV_FIELDS.items():
            raw = environ.get(f"{ENV_PREFIX}{suffix}")
            if raw:
                values[field_name] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigError(f"Invalid world configuration: {e}") from e

    def resolved_schematic_path(self) -> Path:
        """Schematic file to load."""
        return self.schematic_path or default_schematic_path()

    def make_mapper(self) -> ChunkCoordinateMapper:
        """Coordinate mapper for this chunk layout."""
        return ChunkCoordinateMapper(self.interior_length, self.tile_size)


@dataclass(frozen=True)
class WorldContext:
    """Everything generation needs, passed explicitly into each tick."""

    config: WorldConfig
    schematic: Schematic
    mapper: ChunkCoordinateMapper

    @classmethod
    def create(cls, config: WorldConfig, schematic: Schematic | None = None) -> WorldContext:
        """Build a context, loading the configured schematic if none is given.

        Raises:
            SchematicError: If the schematic cannot be loaded
        """
        if schematic is None:
            schematic = load_schematic_file(config.resolved_schematic_path())
        return cls(config=config, schematic=schematic, mapper=config.make_mapper())
