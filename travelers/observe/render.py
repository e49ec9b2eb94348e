"""Symbol rendering shared by the TUI and the CLI dump."""

from __future__ import annotations

from typing import Callable

from rich.text import Text

from ..core.types import Rect, TilePosition, TileTypeId

# Symbol and color mappings, keyed by schematic tile name
# Symbols are distinct so tiles can be told apart without color
TILE_RENDER: dict[str, tuple[str, str]] = {
    "grass": (".", "green"),
    "water": ("≈", "blue"),
    "coast": ("~", "bright_blue"),
    "stone": ("▲", "bright_black"),
    "sand": (":", "yellow"),
    "forest": ("♣", "bright_green"),
    "hill": ("^", "rgb(160,64,0)"),
}

UNLOADED_RENDER = (" ", "black")
FOCUS_RENDER = ("@", "bold white")


def get_tile_render(name: str) -> tuple[str, str]:
    """Get (symbol, color) for a tile name."""
    return TILE_RENDER.get(name, (name[:1] or "?", "white"))


def render_rows(
    tiles: dict[TilePosition, TileTypeId | None],
    names: dict[TileTypeId, str],
    rect: Rect,
    focus: TilePosition | None = None,
    highlight: Callable[[TilePosition], bool] | None = None,
) -> list[Text]:
    """Render a region as lines of styled symbols, north at the top.

    Positions for which `highlight` returns True get a dark background.
    """
    lines: list[Text] = []
    for y in range(rect.max_y, rect.min_y - 1, -1):
        line = Text()
        for x in range(rect.min_x, rect.max_x + 1):
            pos = TilePosition(x, y)
            tile_id = tiles.get(pos)
            if pos == focus:
                symbol, color = FOCUS_RENDER
            elif tile_id is None:
                symbol, color = UNLOADED_RENDER
            else:
                symbol, color = get_tile_render(names.get(tile_id, "?"))
            if highlight is not None and highlight(pos):
                color = f"{color} on grey19"
            line.append(symbol, style=color)
            line.append(" ")
        lines.append(line)
    return lines
