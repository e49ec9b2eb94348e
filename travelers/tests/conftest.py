"""Shared test fixtures for Travelers."""

import json
import tempfile
from pathlib import Path

import pytest

from travelers.config import WorldConfig, WorldContext
from travelers.core.schematic import Schematic, load_schematic, load_schematic_file, default_schematic_path


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (skipped by default, run with --run-slow)")


def pytest_addoption(parser):
    """Add --run-slow option to pytest."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run slow tests (skipped by default)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is passed."""
    if config.getoption("--run-slow"):
        return

    skip_slow = pytest.mark.skip(reason="Slow test (use --run-slow to run)")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def make_tile(name: str, allowed: list[int], **extra) -> dict:
    """Tile record allowing the same ids in all four directions."""
    return {"name": name, "weight": 1, "0": allowed, "1": allowed, "2": allowed, "3": allowed, **extra}


def make_schematic(tiles: dict[int, dict], not_found: int = 0) -> Schematic:
    """Build a validated schematic from tile records."""
    data = {"not_found": not_found, **{str(tile_id): record for tile_id, record in tiles.items()}}
    return load_schematic(json.dumps(data))


@pytest.fixture
def temp_data_dir() -> Path:
    """Create a temporary data directory for tests."""
    with tempfile.TemporaryDirectory(prefix="travelers_test_") as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def default_schematic() -> Schematic:
    """The schematic bundled with the package."""
    return load_schematic_file(default_schematic_path())


@pytest.fixture
def monochrome_schematic() -> Schematic:
    """Two tile types that only tolerate themselves."""
    return make_schematic({
        0: make_tile("grass", [0]),
        1: make_tile("stone", [1]),
    })


@pytest.fixture
def bridge_schematic() -> Schematic:
    """Grass and water never touch; sand sits next to anything.

    Every allow-list contains sand, so no cell can ever run out of options.
    """
    return make_schematic({
        0: make_tile("grass", [0, 2]),
        1: make_tile("water", [1, 2]),
        2: make_tile("sand", [0, 1, 2]),
    })


@pytest.fixture
def barren_schematic() -> Schematic:
    """A single tile that allows nothing next to it; every neighbor contradicts."""
    return make_schematic({0: make_tile("void", [])})


@pytest.fixture
def small_config() -> WorldConfig:
    """Tiny chunks (3x3 interior, 5x5 footprint) with one-unit tiles."""
    return WorldConfig(interior_length=3, tile_size=1, render_distance=1, seed=7)


@pytest.fixture
def bridge_world(small_config, bridge_schematic) -> WorldContext:
    """Small world generated from the bridge schematic."""
    return WorldContext.create(small_config, bridge_schematic)


@pytest.fixture
def tile_record():
    """Factory for symmetric tile records."""
    return make_tile


@pytest.fixture
def build_schematic():
    """Factory for validated schematics."""
    return make_schematic
