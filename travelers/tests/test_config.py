"""Tests for world configuration."""

from pathlib import Path

import pytest

from travelers.config import (
    DEFAULT_CHUNK_LENGTH,
    DEFAULT_RENDER_DISTANCE,
    DEFAULT_SEED,
    DEFAULT_TILE_SIZE,
    ConfigError,
    WorldConfig,
    WorldContext,
)
from travelers.core.schematic import SchematicError, default_schematic_path


class TestWorldConfig:
    """Tests for WorldConfig."""

    def test_defaults(self):
        """Defaults match the stock world."""
        config = WorldConfig()
        assert config.interior_length == DEFAULT_CHUNK_LENGTH == 8
        assert config.tile_size == DEFAULT_TILE_SIZE == 32
        assert config.render_distance == DEFAULT_RENDER_DISTANCE == 3
        assert config.seed == DEFAULT_SEED
        assert config.resolved_schematic_path() == default_schematic_path()

    def test_from_env(self):
        """TRAVELERS_* variables override defaults."""
        config = WorldConfig.from_env({
            "TRAVELERS_SEED": "9",
            "TRAVELERS_RENDER_DISTANCE": "2",
            "TRAVELERS_CHUNK_LENGTH": "4",
            "TRAVELERS_TILE_SIZE": "16",
            "TRAVELERS_SCHEMATIC": "/tmp/custom.json",
        })
        assert config.seed == 9
        assert config.render_distance == 2
        assert config.interior_length == 4
        assert config.tile_size == 16
        assert config.schematic_path == Path("/tmp/custom.json")

    def test_overrides_beat_env(self):
        """Explicit values win; None overrides are ignored."""
        config = WorldConfig.from_env({"TRAVELERS_SEED": "9"}, seed=1, render_distance=None)
        assert config.seed == 1
        assert config.render_distance == DEFAULT_RENDER_DISTANCE

    def test_empty_env_values_ignored(self):
        """Blank variables fall back to defaults."""
        assert WorldConfig.from_env({"TRAVELERS_SEED": ""}).seed == DEFAULT_SEED

    @pytest.mark.parametrize("env", [
        {"TRAVELERS_SEED": "-1"},
        {"TRAVELERS_CHUNK_LENGTH": "0"},
        {"TRAVELERS_RENDER_DISTANCE": "lots"},
    ])
    def test_invalid_values(self, env):
        """Bad values raise ConfigError."""
        with pytest.raises(ConfigError):
            WorldConfig.from_env(env)

    def test_make_mapper(self):
        """The mapper uses the configured layout."""
        mapper = WorldConfig(interior_length=4, tile_size=10).make_mapper()
        assert mapper.extent == 60


class TestWorldContext:
    """Tests for WorldContext."""

    def test_create_loads_bundled_schematic(self):
        """Without a schematic the bundled one is loaded."""
        world = WorldContext.create(WorldConfig())
        assert world.schematic.fallback_id() == 0
        assert world.mapper.interior_length == 8

    def test_create_with_missing_schematic(self, temp_data_dir):
        """A missing schematic file raises SchematicError."""
        config = WorldConfig(schematic_path=temp_data_dir / "nope.json")
        with pytest.raises(SchematicError):
            WorldContext.create(config)
