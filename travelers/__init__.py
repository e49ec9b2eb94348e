"""Travelers - an infinite, chunked tile world stitched together with Wave Function Collapse."""

__version__ = "0.1.0"
