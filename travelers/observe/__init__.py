"""Observer layer for Travelers: query API and TUI."""

from .api import ObserverAPI, SeamViolation, WorldStats
from .render import TILE_RENDER, get_tile_render, render_rows

__all__ = [
    "ObserverAPI",
    "SeamViolation",
    "WorldStats",
    "TILE_RENDER",
    "get_tile_render",
    "render_rows",
]
