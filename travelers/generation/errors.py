"""Generation errors.

Contradictions are not errors: they are resolved locally with the
schematic's fallback tile. These exceptions cover failures that make a
whole chunk unusable for this tick; the engine isolates them per chunk.
"""

from __future__ import annotations

from ..core.types import ChunkCoord


class GenerationError(Exception):
    """Base exception for world generation failures."""

    def __init__(self, message: str, coord: ChunkCoord | None = None):
        super().__init__(message)
        self.coord = coord


class ChunkGenerationError(GenerationError):
    """Interior generation failed for a chunk."""

    pass


class StitchError(GenerationError):
    """Perimeter stitching failed for a chunk."""

    pass
