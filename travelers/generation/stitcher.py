"""
Edge stitching: resolving a chunk's perimeter ring against its neighbors.

Interiors are generated independently, so two adjacent chunks know nothing
about each other. The ring of 4L+4 cells around each interior is the seam:
it is collapsed later, once neighbors exist, with the same propagate /
select / collapse loop as the interior solver but restricted to ring cells.

Constraint sources for a ring cell, re-applied before every collapse:
- Neighbor border: the neighbor chunk's tile directly across the seam,
  through that tile's allow-list facing back at us. Corners touch two
  neighbor chunks and take both.
- Own interior: the interior cell the ring cell borders (non-corners),
  through the interior tile's allow-list on the outward side.
- Ring neighbors: the previous and next ring cells, once they are fixed.

A side whose neighbor chunk does not exist yet keeps empty domains and is
skipped; the chunk stays dirty and the side is picked up on a later tick.
The chunk stitched second adapts to the one stitched first, so every seam
ends up checked from one side or the other.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
import logging

from ..core.chunk import (
    Chunk,
    interior_neighbor,
    ring_positions,
    ring_side_rank,
    ring_size,
)
from ..core.schematic import Schematic
from ..core.types import ChunkCoord, Direction, RingTiles, TileTypeId
from ..logging_config import log_contradiction
from .coords import ChunkCoordinateMapper
from .errors import StitchError
from .wfc.seeding import chunk_hash, seeded_choice

logger = logging.getLogger(__name__)

_OFFSET_TO_DIRECTION: dict[tuple[int, int], Direction] = {d.offset: d for d in Direction}


@dataclass(frozen=True)
class StitchResult:
    """Outcome of one stitching pass over a chunk's ring."""

    ring: RingTiles
    collapsed: int  # Cells fixed by this pass
    contradictions: int  # Cells resolved with the fallback in this pass

    @property
    def complete(self) -> bool:
        """True when every ring cell is resolved."""
        return all(tile is not None for tile in self.ring)


def find_neighbors(
    mapper: ChunkCoordinateMapper,
    coord: ChunkCoord,
    chunks: Mapping[ChunkCoord, Chunk],
) -> dict[Direction, Chunk]:
    """Existing chunks on each side of `coord`."""
    neighbors: dict[Direction, Chunk] = {}
    for direction in Direction:
        neighbor = chunks.get(mapper.neighbor(coord, direction))
        if neighbor is not None:
            neighbors[direction] = neighbor
    return neighbors


class RingSolver:
    """One stitching pass over a single chunk's ring."""

    def __init__(
        self,
        schematic: Schematic,
        chunk: Chunk,
        neighbors: Mapping[Direction, Chunk],
        seed_hash: int,
    ):
        """
        Initialize the ring solver.

        Args:
            schematic: Validated ruleset
            chunk: Chunk whose ring is being resolved (interior collapsed)
            neighbors: Existing neighbor chunks keyed by side
            seed_hash: Hash every draw reseeds from
        """
        self.schematic = schematic
        self.chunk = chunk
        self.neighbors = dict(neighbors)
        self.seed_hash = seed_hash
        self.length = chunk.length
        self.size = ring_size(self.length)
        self.positions = ring_positions(self.length)

        self.tiles: list[TileTypeId | None] = list(chunk.ring)
        self.domains: list[set[TileTypeId]] = [
            set(schematic.tile_ids) if tile is None and self.is_eligible(index) else set()
            for index, tile in enumerate(self.tiles)
        ]
        self.attempted: list[int] = [index for index, domain in enumerate(self.domains) if domain]
        self.collapsed = 0

    def is_eligible(self, index: int) -> bool:
        """A ring cell can be stitched once the neighbor on its side exists."""
        side, _ = ring_side_rank(index, self.length)
        return side in self.neighbors

    # -------------------------------------------------------------------------
    # Constraints
    # -------------------------------------------------------------------------

    def _across(self, index: int) -> Iterator[tuple[Direction, Chunk]]:
        """Neighbor chunks touching a ring cell, with the direction toward them."""
        side, rank = ring_side_rank(index, self.length)
        directions = (side, side.previous) if rank == 0 else (side,)
        for direction in directions:
            neighbor = self.neighbors.get(direction)
            if neighbor is not None:
                yield direction, neighbor

    def _constraints(self, index: int) -> Iterator[frozenset[TileTypeId]]:
        """Allow-lists that restrict a ring cell right now."""
        side, rank = ring_side_rank(index, self.length)
        x, y = self.positions[index]
        footprint = self.length + 2

        # Tile directly across the seam in the neighbor chunk (always a ring cell there)
        for direction, neighbor in self._across(index):
            across = neighbor.tile_at_local(
                x + direction.dx - direction.dx * footprint,
                y + direction.dy - direction.dy * footprint,
            )
            if across is not None:
                yield self.schematic.allowed(across, direction.opposite)

        # Own interior; unresolved interior cells materialize as the fallback
        inner = interior_neighbor(side, rank, self.length)
        if inner is not None:
            tile = self.chunk.interior_tile(*inner)
            if tile is None:
                tile = self.schematic.fallback_id()
            yield self.schematic.allowed(tile, side)

        # Previous and next ring cells, wrapping across the corners
        for other in ((index - 1) % self.size, (index + 1) % self.size):
            tile = self.tiles[other]
            if tile is None:
                continue
            ox, oy = self.positions[other]
            toward_other = _OFFSET_TO_DIRECTION[(ox - x, oy - y)]
            yield self.schematic.allowed(tile, toward_other.opposite)

    def propagate(self) -> None:
        """Apply every current constraint to every open ring domain."""
        for index, domain in enumerate(self.domains):
            if self.tiles[index] is not None:
                domain.clear()
                continue
            if not domain:
                continue
            for allowed in self._constraints(index):
                domain &= allowed
                if not domain:
                    logger.debug(f"Ring contradiction at index {index} in chunk {self.chunk.coord}")
                    break

    # -------------------------------------------------------------------------
    # Selection / collapse
    # -------------------------------------------------------------------------

    def lowest_entropy(self) -> int | None:
        """Ring index with the smallest nonzero domain (first in ring order on ties)."""
        best: int | None = None
        for index, domain in enumerate(self.domains):
            if domain and (best is None or len(domain) < len(self.domains[best])):
                best = index
        return best

    def solve(self) -> StitchResult:
        """Collapse ring cells until no open cell has a nonzero domain."""
        while True:
            self.propagate()
            index = self.lowest_entropy()
            if index is None:
                break
            self.tiles[index] = seeded_choice(self.seed_hash, self.domains[index])
            self.domains[index].clear()
            self.collapsed += 1

        # Cells attempted this pass but left empty get the fallback, so each
        # ring cell is attempted exactly once
        contradictions = [index for index in self.attempted if self.tiles[index] is None]
        if contradictions:
            fallback = self.schematic.fallback_id()
            for index in contradictions:
                self.tiles[index] = fallback
            log_contradiction(
                logger,
                "ring",
                self.chunk.coord,
                len(contradictions),
                fallback,
                details=f"indices={contradictions[:8]}",
            )

        return StitchResult(
            ring=tuple(self.tiles),
            collapsed=self.collapsed,
            contradictions=len(contradictions),
        )


class EdgeStitcher:
    """Resolves perimeter rings for one world (seed, schematic, layout)."""

    def __init__(self, schematic: Schematic, world_seed: int, mapper: ChunkCoordinateMapper):
        self.schematic = schematic
        self.world_seed = world_seed
        self.mapper = mapper

    def stitch(self, chunk: Chunk, neighbors: Mapping[Direction, Chunk]) -> StitchResult:
        """
        Resolve whatever ring cells the existing neighbors make eligible.

        Cells resolved on earlier ticks are kept as they are.

        Raises:
            StitchError: If the pass fails unexpectedly. Contradictions
                never raise.
        """
        if not chunk.dirty:
            return StitchResult(ring=chunk.ring, collapsed=0, contradictions=0)
        try:
            solver = RingSolver(
                self.schematic,
                chunk,
                neighbors,
                chunk_hash(self.world_seed, chunk.coord),
            )
            return solver.solve()
        except Exception as e:
            raise StitchError(f"Failed to stitch chunk {tuple(chunk.coord)}: {e}", chunk.coord) from e

    def stitch_in(self, chunk: Chunk, chunks: Mapping[ChunkCoord, Chunk]) -> StitchResult:
        """Stitch a chunk against whichever of its neighbors are in `chunks`."""
        return self.stitch(chunk, find_neighbors(self.mapper, chunk.coord, chunks))
