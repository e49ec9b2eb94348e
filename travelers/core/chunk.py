"""Chunk records and perimeter ring layout.

A chunk's footprint is (L+2) x (L+2) tiles: an L x L interior plus a
perimeter ring of 4L+4 cells. Local coordinates run from -1 to L on both
axes; the interior is [0, L) x [0, L) with (0, 0) at the bottom-left.

Ring cells are addressed by (side, rank) with side in N, E, S, W and rank
in [0, L]. Rank 0 is the corner that opens the side, walking clockwise:

    N: rank 0 = NW corner (-1, L),  rank r = (r-1, L)
    E: rank 0 = NE corner (L, L),   rank r = (L, L-r)
    S: rank 0 = SE corner (L, -1),  rank r = (L-r, -1)
    W: rank 0 = SW corner (-1, -1), rank r = (-1, r-1)

Consecutive ring indices (wrapping W rank L -> N rank 0) are 4-adjacent.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from .types import ChunkCoord, Direction, InteriorGrid, RingTiles, TileTypeId


# -----------------------------------------------------------------------------
# Ring layout
# -----------------------------------------------------------------------------


def ring_size(length: int) -> int:
    """Number of perimeter cells around an L x L interior."""
    return 4 * length + 4


def ring_index(side: Direction, rank: int, length: int) -> int:
    """Flatten (side, rank) into a ring index."""
    if not 0 <= rank <= length:
        raise ValueError(f"Rank {rank} outside 0..{length}")
    return side.value * (length + 1) + rank


def ring_side_rank(index: int, length: int) -> tuple[Direction, int]:
    """Split a ring index into (side, rank)."""
    side, rank = divmod(index, length + 1)
    return Direction(side), rank


def ring_local_position(side: Direction, rank: int, length: int) -> tuple[int, int]:
    """Local (x, y) of a ring cell."""
    if side is Direction.NORTH:
        return (-1, length) if rank == 0 else (rank - 1, length)
    if side is Direction.EAST:
        return (length, length) if rank == 0 else (length, length - rank)
    if side is Direction.SOUTH:
        return (length, -1) if rank == 0 else (length - rank, -1)
    return (-1, -1) if rank == 0 else (-1, rank - 1)


@lru_cache(maxsize=16)
def ring_positions(length: int) -> tuple[tuple[int, int], ...]:
    """Local positions of every ring cell, in ring index order."""
    return tuple(
        ring_local_position(*ring_side_rank(index, length), length)
        for index in range(ring_size(length))
    )


@lru_cache(maxsize=16)
def ring_lookup(length: int) -> dict[tuple[int, int], int]:
    """Map local (x, y) -> ring index."""
    return {pos: index for index, pos in enumerate(ring_positions(length))}


def interior_neighbor(side: Direction, rank: int, length: int) -> tuple[int, int] | None:
    """Local position of the interior cell a ring cell borders.

    Corners (rank 0) border no interior cell.
    """
    if rank == 0:
        return None
    x, y = ring_local_position(side, rank, length)
    dx, dy = side.opposite.offset
    return (x + dx, y + dy)


# -----------------------------------------------------------------------------
# Chunk
# -----------------------------------------------------------------------------


def empty_ring(length: int) -> RingTiles:
    """A ring with no resolved cells."""
    return (None,) * ring_size(length)


class Chunk(BaseModel):
    """A generated chunk: collapsed interior plus its perimeter ring.

    The interior is produced once, at creation. The ring is filled by the
    stitcher, possibly over several ticks as neighbors appear. A chunk is
    dirty while any ring cell is unresolved.
    """

    model_config = ConfigDict(frozen=True)

    coord: ChunkCoord
    interior: InteriorGrid
    ring: RingTiles

    @classmethod
    def create(cls, coord: ChunkCoord, interior: InteriorGrid) -> Chunk:
        """Create a fresh (dirty) chunk with an unresolved ring."""
        return cls(coord=coord, interior=interior, ring=empty_ring(len(interior)))

    @property
    def length(self) -> int:
        """Interior side length L."""
        return len(self.interior)

    @property
    def dirty(self) -> bool:
        """True until every ring cell is resolved."""
        return any(tile is None for tile in self.ring)

    def with_ring(self, ring: RingTiles) -> Chunk:
        """Return a new chunk with the given ring."""
        if len(ring) != ring_size(self.length):
            raise ValueError(f"Ring has {len(ring)} cells, expected {ring_size(self.length)}")
        return self.model_copy(update={"ring": tuple(ring)})

    def interior_tile(self, x: int, y: int) -> TileTypeId | None:
        """Interior tile at local (x, y), or None if unresolved."""
        return self.interior[y][x]

    def ring_tile(self, side: Direction, rank: int) -> TileTypeId | None:
        """Ring tile at (side, rank), or None if unresolved."""
        return self.ring[ring_index(side, rank, self.length)]

    def tile_at_local(self, x: int, y: int) -> TileTypeId | None:
        """Tile anywhere in the footprint (-1..L on both axes).

        Raises:
            IndexError: If (x, y) is outside the footprint
        """
        length = self.length
        if 0 <= x < length and 0 <= y < length:
            return self.interior[y][x]
        index = ring_lookup(length).get((x, y))
        if index is None:
            raise IndexError(f"Local position ({x}, {y}) outside chunk footprint")
        return self.ring[index]

    def resolved_interior(self, fallback: TileTypeId) -> tuple[tuple[TileTypeId, ...], ...]:
        """Interior with contradicted cells replaced by the fallback id."""
        return tuple(
            tuple(fallback if tile is None else tile for tile in row)
            for row in self.interior
        )

    def resolved_ring(self, fallback: TileTypeId) -> tuple[TileTypeId, ...]:
        """Ring with unresolved cells replaced by the fallback id."""
        return tuple(fallback if tile is None else tile for tile in self.ring)

    def resolved(self, fallback: TileTypeId) -> Chunk:
        """Copy of this chunk with every unresolved cell set to the fallback id."""
        return self.model_copy(
            update={"interior": self.resolved_interior(fallback), "ring": self.resolved_ring(fallback)}
        )

    def unresolved_interior_count(self) -> int:
        """Number of interior cells left by contradictions."""
        return sum(1 for row in self.interior for tile in row if tile is None)
