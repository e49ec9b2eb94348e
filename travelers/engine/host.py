"""Chunk host interface and the in-memory reference host.

The engine never assumes a particular scene graph or entity runtime; it
only needs the synchronous operations in ChunkHost. A renderer implements
them by materializing chunk tiles however it likes. InMemoryChunkStore is
the plain-data host used by the CLI, the TUI and the tests.

Presence-check-then-spawn is the only admission control, so a host must be
driven by a single writer (one lifecycle manager, one tick at a time).
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Protocol

from ..core.chunk import Chunk
from ..core.types import ChunkCoord, InteriorGrid, RingTiles, WorldPosition

logger = logging.getLogger(__name__)


class ChunkHost(Protocol):
    """Operations the lifecycle manager needs from the host.

    All calls are synchronous and must not fail for valid input.
    """

    def focus_position(self) -> WorldPosition:
        """Current focus (player / camera) position in world units."""
        ...

    def enumerate_chunks(self) -> Iterable[Chunk]:
        """Every live chunk with its interior and current ring."""
        ...

    def spawn_chunk(self, coord: ChunkCoord, interior: InteriorGrid) -> Chunk:
        """Create and materialize a chunk; returns the stored (dirty) record."""
        ...

    def attach_stitched_tiles(self, chunk: Chunk, ring: RingTiles) -> Chunk:
        """Store and materialize a chunk's ring; returns the updated record."""
        ...

    def despawn_chunk(self, coord: ChunkCoord) -> None:
        """Destroy a chunk."""
        ...


class ChunkStoreError(Exception):
    """The store was asked to do something a single writer never would."""

    def __init__(self, message: str, coord: ChunkCoord | None = None):
        super().__init__(message)
        self.coord = coord


class InMemoryChunkStore:
    """Dict-backed ChunkHost.

    Keeps chunk records and the focus position; counts spawns and
    despawns for debug statistics.
    """

    def __init__(self, focus: WorldPosition | None = None):
        """Initialize the store.

        Args:
            focus: Initial focus position (default: world origin)
        """
        self._focus = focus or WorldPosition(0.0, 0.0)
        self._chunks: dict[ChunkCoord, Chunk] = {}
        self.spawn_count = 0
        self.despawn_count = 0

    # -------------------------------------------------------------------------
    # Focus
    # -------------------------------------------------------------------------

    def focus_position(self) -> WorldPosition:
        return self._focus

    def set_focus(self, pos: WorldPosition) -> None:
        """Move the focus to an absolute position."""
        self._focus = WorldPosition(float(pos.x), float(pos.y))

    def move_focus(self, dx: float, dy: float) -> WorldPosition:
        """Move the focus by an offset and return the new position."""
        self._focus = self._focus.moved(dx, dy)
        return self._focus

    # -------------------------------------------------------------------------
    # ChunkHost
    # -------------------------------------------------------------------------

    def enumerate_chunks(self) -> list[Chunk]:
        return list(self._chunks.values())

    def spawn_chunk(self, coord: ChunkCoord, interior: InteriorGrid) -> Chunk:
        if coord in self._chunks:
            raise ChunkStoreError(f"Chunk {tuple(coord)} already exists", coord)
        chunk = Chunk.create(coord, interior)
        self._chunks[coord] = chunk
        self.spawn_count += 1
        return chunk

    def attach_stitched_tiles(self, chunk: Chunk, ring: RingTiles) -> Chunk:
        if chunk.coord not in self._chunks:
            raise ChunkStoreError(f"Cannot attach ring to missing chunk {tuple(chunk.coord)}", chunk.coord)
        updated = self._chunks[chunk.coord].with_ring(ring)
        self._chunks[chunk.coord] = updated
        return updated

    def despawn_chunk(self, coord: ChunkCoord) -> None:
        if self._chunks.pop(coord, None) is None:
            logger.debug(f"Despawn of unknown chunk {tuple(coord)} ignored")
            return
        self.despawn_count += 1

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def chunks(self) -> Mapping[ChunkCoord, Chunk]:
        """Read-only view of live chunks."""
        return dict(self._chunks)

    def get(self, coord: ChunkCoord) -> Chunk | None:
        """Chunk at a coordinate, if live."""
        return self._chunks.get(coord)

    def __contains__(self, coord: object) -> bool:
        return coord in self._chunks

    def __len__(self) -> int:
        return len(self._chunks)
