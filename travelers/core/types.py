"""Foundational types for Travelers.

This module defines the core types used throughout the system:
- TileTypeId: Schematic tile identifier
- Direction: Cardinal directions, indexed 0=N, 1=E, 2=S, 3=W
- WorldPosition: Continuous world-space position (the focus point)
- TilePosition: Integer world tile coordinates
- ChunkCoord: Chunk origin in world units
- Rect: Rectangular tile regions for queries
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, TypeAlias

# Schematic identifiers are small unsigned integers (0-255)
TileTypeId: TypeAlias = int

# Interior grid indexed grid[y][x]; ring indexed by ring position
InteriorGrid: TypeAlias = tuple[tuple[TileTypeId | None, ...], ...]
RingTiles: TypeAlias = tuple[TileTypeId | None, ...]


class Direction(Enum):
    """Cardinal directions for adjacency rules and chunk sides.

    Values are the direction indices used by schematic files and by the
    perimeter ring layout: 0=N, 1=E, 2=S, 3=W.
    """

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def offset(self) -> tuple[int, int]:
        """Get the (dx, dy) offset for this direction.

        Coordinate system: x increases east, y increases north.
        """
        return _DIRECTION_OFFSETS[self]

    @property
    def dx(self) -> int:
        return _DIRECTION_OFFSETS[self][0]

    @property
    def dy(self) -> int:
        return _DIRECTION_OFFSETS[self][1]

    @property
    def opposite(self) -> Direction:
        """Get the opposite direction."""
        return _DIRECTION_OPPOSITES[self]

    @property
    def previous(self) -> Direction:
        """Get the direction one step counter-clockwise (N -> W)."""
        return Direction((self.value - 1) % 4)

    @property
    def next(self) -> Direction:
        """Get the direction one step clockwise (N -> E)."""
        return Direction((self.value + 1) % 4)


# Lookup tables for Direction properties
_DIRECTION_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, -1),
    Direction.WEST: (-1, 0),
}

_DIRECTION_OPPOSITES: dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}


class WorldPosition(NamedTuple):
    """A continuous position in world units (camera / player focus)."""

    x: float
    y: float

    def moved(self, dx: float, dy: float) -> WorldPosition:
        """Return a new position offset by (dx, dy)."""
        return WorldPosition(self.x + dx, self.y + dy)


class TilePosition(NamedTuple):
    """An integer tile position in the infinite world grid.

    Coordinates use standard Cartesian orientation:
    - x increases to the east (right)
    - y increases to the north (up)
    """

    x: int
    y: int

    def __add__(self, other: object) -> TilePosition:
        """Add a direction offset or tuple to this position."""
        if isinstance(other, Direction):
            dx, dy = other.offset
            return TilePosition(self.x + dx, self.y + dy)
        if isinstance(other, tuple) and len(other) == 2:
            return TilePosition(self.x + other[0], self.y + other[1])
        return NotImplemented

    def neighbors(self) -> dict[Direction, TilePosition]:
        """Get all adjacent positions keyed by direction."""
        return {d: self + d for d in Direction}


class ChunkCoord(NamedTuple):
    """Origin of a chunk in world units.

    Always a multiple of the chunk extent on both axes; two world
    positions share a chunk iff they map to the same ChunkCoord.
    """

    x: int
    y: int


class Rect(NamedTuple):
    """A rectangular tile region.

    Coordinates are inclusive on all sides.
    """

    min_x: int
    min_y: int
    max_x: int
    max_y: int

    def contains(self, pos: TilePosition) -> bool:
        """Check if a position is within this rectangle."""
        return self.min_x <= pos.x <= self.max_x and self.min_y <= pos.y <= self.max_y

    @classmethod
    def around(cls, center: TilePosition, half_width: int, half_height: int | None = None) -> Rect:
        """Create a rectangle centered on a position."""
        if half_height is None:
            half_height = half_width
        return cls(
            center.x - half_width,
            center.y - half_height,
            center.x + half_width,
            center.y + half_height,
        )

    def positions(self) -> list[TilePosition]:
        """Get all positions within this rectangle, row by row from the south."""
        return [
            TilePosition(x, y)
            for y in range(self.min_y, self.max_y + 1)
            for x in range(self.min_x, self.max_x + 1)
        ]

    @property
    def width(self) -> int:
        """Width of the rectangle."""
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        """Height of the rectangle."""
        return self.max_y - self.min_y + 1
