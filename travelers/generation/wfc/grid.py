"""
Grid representation for Wave Function Collapse.

The Grid is the "wave function" for one chunk interior: an L x L array of
cells where each uncollapsed cell holds its domain (the tile ids it could
still become) until it is fixed to a single tile.

This is where we track the state of the generation process.
"""

from dataclasses import dataclass, field
from typing import Iterator

from ...core.types import Direction, InteriorGrid, TileTypeId


@dataclass
class Cell:
    """
    A single cell in the WFC grid.

    Before collapse: `possibilities` is the domain, `tile_id` is None
    After collapse: `tile_id` is fixed and the domain is cleared

    A cell whose domain empties before it is fixed is a contradiction; it
    stays unresolved and is skipped by selection.
    """
    x: int
    y: int
    possibilities: set[TileTypeId] = field(default_factory=set)
    tile_id: TileTypeId | None = None

    def __hash__(self):
        """Hash by position - cells are unique by their grid location."""
        return hash((self.x, self.y))

    def __eq__(self, other):
        """Two cells are equal if they have the same position."""
        if not isinstance(other, Cell):
            return False
        return self.x == other.x and self.y == other.y

    @property
    def collapsed(self) -> bool:
        """A cell is collapsed once its tile is fixed."""
        return self.tile_id is not None

    @property
    def contradiction(self) -> bool:
        """Uncollapsed with nothing left to choose from."""
        return self.tile_id is None and not self.possibilities

    @property
    def entropy(self) -> int:
        """
        How uncertain this cell is.

        Simple count of possibilities; lower = more constrained.
        """
        return len(self.possibilities)

    def collapse_to(self, tile_id: TileTypeId):
        """Fix this cell to a specific tile and clear its domain."""
        self.tile_id = tile_id
        self.possibilities = set()

    def constrain_to(self, allowed: frozenset[TileTypeId] | set[TileTypeId]) -> bool:
        """
        Constrain this cell to only the given possibilities.

        Returns True if the cell changed (lost possibilities).
        """
        old_count = len(self.possibilities)
        self.possibilities &= allowed
        return len(self.possibilities) < old_count


class Grid:
    """
    The 2D grid of cells for one chunk interior.

    Initially all cells can be any tile (maximum superposition).
    Cells are stored as cells[y][x] with (0, 0) at the bottom-left.
    """

    def __init__(self, length: int, tile_ids: frozenset[TileTypeId]):
        """
        Create a grid with all cells in maximum superposition.

        Args:
            length: Side length L in cells
            tile_ids: Set of all possible tile ids (initial domain)
        """
        self.length = length
        self.tile_ids = tile_ids

        self.cells: list[list[Cell]] = [
            [
                Cell(x=x, y=y, possibilities=set(tile_ids))
                for x in range(length)
            ]
            for y in range(length)
        ]

    def get_cell(self, x: int, y: int) -> Cell | None:
        """Get cell at position, or None if out of bounds."""
        if 0 <= x < self.length and 0 <= y < self.length:
            return self.cells[y][x]
        return None

    def neighbors(self, cell: Cell) -> Iterator[tuple[Cell, Direction]]:
        """
        Yield all valid neighbors of a cell with their directions.

        Direction is FROM the input cell TO the neighbor.
        e.g., (neighbor_cell, Direction.NORTH) means neighbor is north of cell.
        """
        for direction in Direction:
            neighbor = self.get_cell(cell.x + direction.dx, cell.y + direction.dy)
            if neighbor is not None:
                yield neighbor, direction

    def min_entropy_cell(self) -> Cell | None:
        """
        Find the uncollapsed cell with the smallest nonzero domain.

        Scans in raster order (row by row from the south, west to east
        within a row); ties go to the first cell encountered. Returns None
        when no uncollapsed cell has anything left to choose from.
        """
        best: Cell | None = None
        for row in self.cells:
            for cell in row:
                if cell.collapsed or cell.entropy == 0:
                    continue
                if best is None or cell.entropy < best.entropy:
                    best = cell
        return best

    def is_complete(self) -> bool:
        """Check if all cells have collapsed."""
        return all(cell.collapsed for cell in self.all_cells())

    def contradictions(self) -> list[Cell]:
        """Cells whose domain emptied before they were fixed."""
        return [cell for cell in self.all_cells() if cell.contradiction]

    def domain_sizes(self) -> list[list[int]]:
        """Current domain size of every cell, as sizes[y][x]."""
        return [[cell.entropy for cell in row] for row in self.cells]

    def reset(self):
        """Reset all cells to maximum superposition."""
        for cell in self.all_cells():
            cell.tile_id = None
            cell.possibilities = set(self.tile_ids)

    def all_cells(self) -> Iterator[Cell]:
        """Iterate over all cells in raster order."""
        for row in self.cells:
            yield from row

    def to_tiles(self) -> InteriorGrid:
        """Snapshot of the fixed tiles as tiles[y][x] (None = unresolved)."""
        return tuple(tuple(cell.tile_id for cell in row) for row in self.cells)
