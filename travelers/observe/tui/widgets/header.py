"""Header widget for Travelers TUI.

Shows world state: tick, seed, focus and live chunk count.
"""

from __future__ import annotations

from textual.widgets import Static
from textual.reactive import reactive


class WorldHeader(Static):
    """Header widget showing world state."""

    tick: reactive[int] = reactive(0)
    seed: reactive[int] = reactive(0)
    focus: reactive[str] = reactive("0, 0")
    chunks: reactive[int] = reactive(0)
    status: reactive[str] = reactive("IDLE")

    def render(self) -> str:
        """Render the header."""
        parts = [
            "Travelers",
            f"Tick: {self.tick}",
            f"Seed: {self.seed}",
            f"Focus: ({self.focus})",
            f"Chunks: {self.chunks}",
            f"[{self.status}]",
        ]
        return " | ".join(parts)

    def update_state(
        self,
        tick: int | None = None,
        seed: int | None = None,
        focus: tuple[int, int] | None = None,
        chunks: int | None = None,
        status: str | None = None,
    ) -> None:
        """Update header state.

        Args:
            tick: Current tick
            seed: World seed
            focus: (x, y) focus tile
            chunks: Number of live chunks
            status: Status string
        """
        if tick is not None:
            self.tick = tick
        if seed is not None:
            self.seed = seed
        if focus is not None:
            self.focus = f"{focus[0]}, {focus[1]}"
        if chunks is not None:
            self.chunks = chunks
        if status is not None:
            self.status = status
