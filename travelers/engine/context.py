"""Tick context for the Travelers engine.

TickContext is the immutable state carrier passed through tick phases.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Mapping

from ..core.chunk import Chunk
from ..core.types import ChunkCoord, WorldPosition


@dataclass(frozen=True)
class TickContext:
    """Immutable context passed through tick phases.

    Each phase receives the context, processes it, and returns a new
    context with updated fields. The frozen dataclass ensures immutability.

    Fields are grouped into:
    - Core state: tick, focus, visible
    - Chunk view: snapshot of the host's chunks at the start of the tick,
      updated as phases spawn, stitch and despawn. Later phases (and later
      chunks within a phase) see earlier changes from the same tick.
    - Accumulated output: created, stitched, completed, despawned, failed,
      contradictions
    """

    # Core state
    tick: int
    focus: WorldPosition
    visible: frozenset[ChunkCoord]

    # Chunk view
    chunks: Mapping[ChunkCoord, Chunk] = field(default_factory=dict)

    # Accumulated output (populated by phases)
    created: tuple[ChunkCoord, ...] = ()
    stitched: tuple[ChunkCoord, ...] = ()
    completed: tuple[ChunkCoord, ...] = ()
    despawned: tuple[ChunkCoord, ...] = ()
    failed: tuple[ChunkCoord, ...] = ()
    contradictions: int = 0

    @property
    def dirty(self) -> tuple[ChunkCoord, ...]:
        """Coordinates of chunks in the view that still need stitching."""
        return tuple(sorted(coord for coord, chunk in self.chunks.items() if chunk.dirty))

    @property
    def missing(self) -> tuple[ChunkCoord, ...]:
        """Visible coordinates with no chunk yet, in deterministic order."""
        return tuple(sorted(self.visible - self.chunks.keys()))

    @property
    def stale(self) -> tuple[ChunkCoord, ...]:
        """Chunks in the view that are no longer visible."""
        return tuple(sorted(self.chunks.keys() - self.visible))

    def with_chunk(self, chunk: Chunk) -> TickContext:
        """Return new context with a chunk added or replaced in the view."""
        return replace(self, chunks={**self.chunks, chunk.coord: chunk})

    def without_chunk(self, coord: ChunkCoord) -> TickContext:
        """Return new context with a chunk dropped from the view."""
        chunks = dict(self.chunks)
        chunks.pop(coord, None)
        return replace(self, chunks=chunks)

    def with_created(self, coord: ChunkCoord, contradictions: int = 0) -> TickContext:
        """Return new context recording a spawned chunk."""
        return replace(
            self,
            created=self.created + (coord,),
            contradictions=self.contradictions + contradictions,
        )

    def with_stitched(self, coord: ChunkCoord, completed: bool, contradictions: int = 0) -> TickContext:
        """Return new context recording a stitching pass."""
        return replace(
            self,
            stitched=self.stitched + (coord,),
            completed=self.completed + ((coord,) if completed else ()),
            contradictions=self.contradictions + contradictions,
        )

    def with_despawned(self, coord: ChunkCoord) -> TickContext:
        """Return new context recording a despawned chunk."""
        return replace(self, despawned=self.despawned + (coord,))

    def with_failed(self, coord: ChunkCoord) -> TickContext:
        """Return new context recording a chunk that failed this tick."""
        return replace(self, failed=self.failed + (coord,))
