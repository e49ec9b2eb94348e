"""Chunk coordinate mapping.

Converts world positions to chunk coordinates, enumerates the chunks that
must exist around the focus point, and maps between world tiles and
(chunk, local tile) pairs.

A chunk's footprint is (L+2) tiles on a side: the L x L interior plus one
ring cell on each side. The chunk extent in world units is therefore
(L+2) * tile_size.
"""

from __future__ import annotations

import math

from ..core.types import ChunkCoord, Direction, TilePosition, WorldPosition


class ChunkCoordinateMapper:
    """World <-> chunk coordinate conversions for a fixed chunk layout."""

    def __init__(self, interior_length: int, tile_size: int):
        """Initialize the mapper.

        Args:
            interior_length: Interior side length L in tiles
            tile_size: Tile edge length in world units
        """
        if interior_length < 1:
            raise ValueError(f"interior_length must be positive, got {interior_length}")
        if tile_size < 1:
            raise ValueError(f"tile_size must be positive, got {tile_size}")
        self.interior_length = interior_length
        self.tile_size = tile_size

    @property
    def footprint(self) -> int:
        """Chunk side length in tiles (interior plus ring)."""
        return self.interior_length + 2

    @property
    def extent(self) -> int:
        """Chunk side length in world units."""
        return self.footprint * self.tile_size

    # -------------------------------------------------------------------------
    # Visibility
    # -------------------------------------------------------------------------

    def chunk_coordinate_of(self, pos: WorldPosition) -> ChunkCoord:
        """Canonical chunk origin containing a world position.

        Floor division, so negative positions land in the chunk below/left
        of the origin rather than being truncated toward zero.
        """
        extent = self.extent
        return ChunkCoord(
            math.floor(pos.x / extent) * extent,
            math.floor(pos.y / extent) * extent,
        )

    def visible_coordinates(self, focus: WorldPosition, render_distance: int) -> frozenset[ChunkCoord]:
        """All chunk coordinates within render distance of the focus chunk.

        Returns exactly (2R+1)^2 distinct coordinates forming a square
        centered on chunk_coordinate_of(focus).
        """
        if render_distance < 0:
            raise ValueError(f"render_distance must be >= 0, got {render_distance}")
        center = self.chunk_coordinate_of(focus)
        extent = self.extent
        return frozenset(
            ChunkCoord(center.x + dx * extent, center.y + dy * extent)
            for dx in range(-render_distance, render_distance + 1)
            for dy in range(-render_distance, render_distance + 1)
        )

    def neighbor(self, coord: ChunkCoord, direction: Direction) -> ChunkCoord:
        """Coordinate of the chunk adjacent in a direction."""
        return ChunkCoord(
            coord.x + direction.dx * self.extent,
            coord.y + direction.dy * self.extent,
        )

    # -------------------------------------------------------------------------
    # Tile mapping
    # -------------------------------------------------------------------------

    def chunk_origin_tile(self, coord: ChunkCoord) -> TilePosition:
        """World tile of the chunk's local (-1, -1) corner."""
        return TilePosition(coord.x // self.tile_size, coord.y // self.tile_size)

    def world_tile(self, coord: ChunkCoord, local_x: int, local_y: int) -> TilePosition:
        """World tile of a local cell (local coordinates run -1..L)."""
        origin = self.chunk_origin_tile(coord)
        return TilePosition(origin.x + local_x + 1, origin.y + local_y + 1)

    def locate_tile(self, tile: TilePosition) -> tuple[ChunkCoord, int, int]:
        """Owning chunk and local (x, y) of a world tile."""
        footprint = self.footprint
        chunk_x, offset_x = divmod(tile.x, footprint)
        chunk_y, offset_y = divmod(tile.y, footprint)
        coord = ChunkCoord(chunk_x * self.extent, chunk_y * self.extent)
        return coord, offset_x - 1, offset_y - 1

    def tile_of(self, pos: WorldPosition) -> TilePosition:
        """World tile containing a world position."""
        return TilePosition(
            math.floor(pos.x / self.tile_size),
            math.floor(pos.y / self.tile_size),
        )

    def tile_center(self, tile: TilePosition) -> WorldPosition:
        """World position at the center of a tile."""
        half = self.tile_size / 2
        return WorldPosition(tile.x * self.tile_size + half, tile.y * self.tile_size + half)
