"""Main TUI application for the Travelers world viewer.

The viewer is also the host's player: arrow keys move the focus one tile
and run a lifecycle tick, so chunks stream in and out as you walk.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer

from ..api import ObserverAPI
from .widgets import DebugPanel, GridView, WorldHeader

if TYPE_CHECKING:
    from ...engine.host import InMemoryChunkStore
    from ...engine.lifecycle import ChunkLifecycleManager


class TravelersTUI(App):
    """Travelers world viewer TUI application.

    Shows the tiles around the focus and walks the focus with the arrow
    keys, ticking the chunk lifecycle after every step.
    """

    CSS_PATH = "theme.tcss"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("space", "tick_once", "Tick", show=True),
        Binding("f3", "toggle_debug", "Debug", show=True),
        Binding("s", "toggle_seams", "Seams", show=True),
        Binding("up", "move_north", "North", show=False),
        Binding("down", "move_south", "South", show=False),
        Binding("left", "move_west", "West", show=False),
        Binding("right", "move_east", "East", show=False),
    ]

    def __init__(
        self,
        manager: "ChunkLifecycleManager",
        store: "InMemoryChunkStore",
        api: ObserverAPI | None = None,
    ):
        """Initialize TravelersTUI.

        Args:
            manager: Lifecycle manager driving the world
            store: Chunk host the manager writes to (owns the focus)
            api: Observer API (default: built from manager and store)
        """
        super().__init__()
        self._manager = manager
        self._store = store
        self._api = api or ObserverAPI(manager.world, store, manager)
        self._debug_visible = False
        self._last_tick_ms: float | None = None

    def compose(self) -> ComposeResult:
        """Compose the app layout."""
        yield WorldHeader(id="header")
        with Horizontal(id="main"):
            yield GridView(self._api, id="grid")
            yield DebugPanel(id="debug", classes="hidden")
        yield Footer()

    def on_mount(self) -> None:
        """Handle app mount - generate the starting area."""
        self._tick()

    def _tick(self) -> None:
        header = self.query_one("#header", WorldHeader)
        header.update_state(status="RUNNING")
        started = time.perf_counter()
        self._manager.tick()
        self._last_tick_ms = (time.perf_counter() - started) * 1000
        self._refresh_all()

    def _refresh_all(self) -> None:
        """Refresh all widgets from the API."""
        grid = self.query_one("#grid", GridView)
        grid.refresh_data()

        stats = self._api.get_stats()
        header = self.query_one("#header", WorldHeader)
        header.update_state(
            tick=stats.tick,
            seed=self._manager.world.config.seed,
            focus=(stats.focus_tile.x, stats.focus_tile.y),
            chunks=stats.chunk_count,
            status="IDLE",
        )

        if self._debug_visible:
            self.query_one("#debug", DebugPanel).update_stats(stats, self._last_tick_ms)

    def _move(self, dx: int, dy: int) -> None:
        tile_size = self._manager.world.config.tile_size
        self._store.move_focus(dx * tile_size, dy * tile_size)
        self._tick()

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def action_tick_once(self) -> None:
        """Run a single tick without moving."""
        self._tick()

    def action_toggle_debug(self) -> None:
        """Show or hide the debug overlay."""
        self._debug_visible = not self._debug_visible
        panel = self.query_one("#debug", DebugPanel)
        if self._debug_visible:
            panel.remove_class("hidden")
        else:
            panel.add_class("hidden")
        self._refresh_all()

    def action_toggle_seams(self) -> None:
        """Highlight perimeter ring tiles."""
        grid = self.query_one("#grid", GridView)
        grid.show_seams = not grid.show_seams
        grid.refresh()

    def action_move_north(self) -> None:
        """Move the focus north (higher y values)."""
        self._move(0, 1)

    def action_move_south(self) -> None:
        """Move the focus south (lower y values)."""
        self._move(0, -1)

    def action_move_east(self) -> None:
        """Move the focus east."""
        self._move(1, 0)

    def action_move_west(self) -> None:
        """Move the focus west."""
        self._move(-1, 0)


def run_tui(manager: "ChunkLifecycleManager", store: "InMemoryChunkStore") -> None:
    """Run the TUI application.

    Args:
        manager: Lifecycle manager driving the world
        store: Chunk host the manager writes to
    """
    app = TravelersTUI(manager, store)
    app.run()
