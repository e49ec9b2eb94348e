"""Grid view widget for Travelers TUI.

Renders the tiles around the focus, across chunk boundaries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.widget import Widget
from textual.reactive import reactive

from ....core.types import Rect, TilePosition, TileTypeId
from ...render import render_rows

if TYPE_CHECKING:
    from ...api import ObserverAPI


class GridView(Widget):
    """Widget that renders the tiles around the focus.

    Features:
    - Dynamic viewport based on widget size
    - Always centered on the focus tile
    - Optional perimeter ring highlighting
    """

    center_x: reactive[int] = reactive(0)
    center_y: reactive[int] = reactive(0)
    show_seams: reactive[bool] = reactive(False)

    _tiles: dict[TilePosition, TileTypeId | None]

    def __init__(
        self,
        api: "ObserverAPI",
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ):
        """Initialize GridView.

        Args:
            api: ObserverAPI for querying world state
            name: Widget name
            id: Widget ID
            classes: CSS classes
        """
        super().__init__(name=name, id=id, classes=classes)
        self._api = api
        self._tiles = {}
        self._names: dict[TileTypeId, str] = {}

    def get_visible_rect(self) -> Rect:
        """Calculate the rectangle of visible tiles based on content region."""
        # Each tile takes 2 characters (symbol + space)
        actual_width = max(1, self.content_region.width // 2)
        actual_height = max(1, self.content_region.height)
        return Rect.around(
            TilePosition(self.center_x, self.center_y),
            actual_width // 2,
            actual_height // 2,
        )

    def refresh_data(self) -> None:
        """Refresh cached tiles from the API."""
        focus_tile = self._api.get_focus_tile()
        self.center_x = focus_tile.x
        self.center_y = focus_tile.y
        self._tiles = self._api.render_region(self.get_visible_rect())
        self._names = {
            tile_id: tile.name for tile_id, tile in self._api.get_schematic().tiles.items()
        }
        self.refresh()

    def render(self) -> Text:
        """Render the grid view."""
        highlight = self._api.is_ring_tile if self.show_seams else None
        lines = render_rows(
            self._tiles,
            self._names,
            self.get_visible_rect(),
            focus=TilePosition(self.center_x, self.center_y),
            highlight=highlight,
        )
        return Text("\n").join(lines)
