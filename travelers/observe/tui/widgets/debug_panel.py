"""Debug overlay for Travelers TUI (toggled with F3)."""

from __future__ import annotations

from textual.widgets import Static

from ...api import WorldStats


class DebugPanel(Static):
    """Shows WorldStats as a small key/value table."""

    def update_stats(self, stats: WorldStats, tick_ms: float | None = None) -> None:
        """Render a fresh set of stats."""
        lines = [
            f"tick          {stats.tick}",
            f"focus         ({stats.focus.x:.1f}, {stats.focus.y:.1f})",
            f"focus tile    ({stats.focus_tile.x}, {stats.focus_tile.y})",
            f"focus chunk   ({stats.focus_chunk.x}, {stats.focus_chunk.y})",
            f"chunks        {stats.chunk_count} / {stats.visible_count} visible",
            f"dirty         {stats.dirty_count}",
            f"tiles         {stats.tile_count}",
            f"unresolved    {stats.unresolved_interior}",
            f"contradictions {stats.contradictions}",
        ]
        if tick_ms is not None:
            lines.append(f"last tick     {tick_ms:.1f}ms")
        self.update("\n".join(lines))
