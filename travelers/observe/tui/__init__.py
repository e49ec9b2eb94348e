"""Textual viewer for Travelers."""

from .app import TravelersTUI, run_tui

__all__ = ["TravelersTUI", "run_tui"]
