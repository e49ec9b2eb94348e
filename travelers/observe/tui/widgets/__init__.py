"""TUI widgets for Travelers observer."""

from .grid_view import GridView
from .header import WorldHeader
from .debug_panel import DebugPanel

__all__ = ["GridView", "WorldHeader", "DebugPanel"]
