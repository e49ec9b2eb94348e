"""
Wave Function Collapse solver for chunk interiors.

The algorithm, for world seed S and chunk coordinate C:
1. Hash (S, C) into the chunk hash H
2. Start every cell with the full tile set as its domain
3. Force-collapse the origin cell (0, 0) with a draw seeded by H
4. Repeat: propagate neighbor constraints, pick the smallest nonzero
   domain (raster order breaks ties), collapse it with a draw seeded by H
5. Stop when no uncollapsed cell has anything left; cells whose domain
   emptied (contradictions) stay None and render as the fallback tile

No backtracking: a contradiction only costs the cell it happens in.
"""

from __future__ import annotations

from enum import Enum, auto
import logging

from ...core.schematic import Schematic
from ...core.types import ChunkCoord, InteriorGrid
from ...logging_config import log_contradiction
from ..errors import ChunkGenerationError
from .grid import Grid, Cell
from .seeding import chunk_hash, seeded_choice

logger = logging.getLogger(__name__)


class SolverState(Enum):
    """The current state of the WFC solver."""
    UNINITIALIZED = auto()  # Grid built, nothing fixed yet
    SEEDED = auto()         # Origin cell force-collapsed
    PROPAGATING = auto()    # Collapsing cells one step at a time
    COLLAPSED = auto()      # No cell has a nonzero domain left


class WFCSolver:
    """
    The WFC algorithm for one chunk interior.

    Usage:
        solver = WFCSolver(schematic, length=8, seed_hash=chunk_hash(42, coord))
        while solver.step() != SolverState.COLLAPSED:
            pass
        tiles = solver.grid.to_tiles()

    Or for bulk solving:
        tiles = solver.solve()
    """

    def __init__(
        self,
        schematic: Schematic,
        length: int,
        seed_hash: int,
        coord: ChunkCoord | None = None,
    ):
        """
        Initialize the solver.

        Args:
            schematic: Validated ruleset (every allow-list id is a key)
            length: Interior side length L
            seed_hash: Chunk hash; every draw reseeds from it
            coord: Chunk coordinate, used for logging only
        """
        self.schematic = schematic
        self.seed_hash = seed_hash
        self.coord = coord
        self.grid = Grid(length, schematic.tile_ids)
        self.state = SolverState.UNINITIALIZED
        self.step_count = 0

        # Track the last collapsed cell and the cells narrowed by the last
        # propagation pass (for debugging)
        self.last_collapsed: Cell | None = None
        self.last_propagated: set[Cell] = set()

    def seed(self) -> None:
        """Force-collapse the origin (bottom-left) cell from the full tile set."""
        origin = self.grid.cells[0][0]
        origin.collapse_to(seeded_choice(self.seed_hash, self.grid.tile_ids))
        self.last_collapsed = origin
        self.state = SolverState.SEEDED

    def propagate(self) -> set[Cell]:
        """
        One full constraint pass over the grid.

        Every uncollapsed cell is intersected with the allow-list each
        collapsed 4-neighbor implies for it: a neighbor to the west
        constrains through its east list, and so on. Domains only shrink.

        Returns the set of cells whose domain changed.
        """
        changed: set[Cell] = set()

        for cell in self.grid.all_cells():
            if cell.collapsed:
                cell.possibilities.clear()
                continue
            if not cell.possibilities:
                continue

            for neighbor, direction in self.grid.neighbors(cell):
                if not neighbor.collapsed:
                    continue
                allowed = self.schematic.allowed(neighbor.tile_id, direction.opposite)
                if cell.constrain_to(allowed):
                    changed.add(cell)

            if not cell.possibilities:
                logger.debug(f"Contradiction at ({cell.x}, {cell.y}) in chunk {self.coord}")

        self.last_propagated = changed
        return changed

    def step(self) -> SolverState:
        """
        Advance the solver by one transition.

        UNINITIALIZED seeds the origin. Afterwards each step propagates,
        selects the minimum-entropy cell and collapses it, or finishes
        when no candidate is left.

        Returns the solver state after this step.
        """
        if self.state == SolverState.UNINITIALIZED:
            self.seed()
            return self.state

        if self.state == SolverState.COLLAPSED:
            return self.state

        self.propagate()
        self.state = SolverState.PROPAGATING

        cell = self.grid.min_entropy_cell()
        if cell is None:
            self.state = SolverState.COLLAPSED
            self._report_contradictions()
            return self.state

        cell.collapse_to(seeded_choice(self.seed_hash, cell.possibilities))
        self.last_collapsed = cell
        self.step_count += 1
        return self.state

    def _report_contradictions(self) -> None:
        """Log cells left unresolved once the solver finishes."""
        contradictions = self.grid.contradictions()
        if contradictions:
            log_contradiction(
                logger,
                "interior",
                self.coord,
                len(contradictions),
                self.schematic.fallback_id(),
                details=", ".join(f"({c.x},{c.y})" for c in contradictions[:8]),
            )

    def solve(self) -> InteriorGrid:
        """
        Run the solver to completion.

        Returns the interior as tiles[y][x]; contradictions are None.
        """
        while self.step() != SolverState.COLLAPSED:
            pass
        return self.grid.to_tiles()

    def reset(self):
        """Reset the solver and grid for a new generation."""
        self.grid.reset()
        self.state = SolverState.UNINITIALIZED
        self.step_count = 0
        self.last_collapsed = None
        self.last_propagated = set()


def generate_interior(
    world_seed: int,
    coord: ChunkCoord,
    schematic: Schematic,
    length: int,
) -> InteriorGrid:
    """
    Generate one chunk interior.

    Pure function of (world_seed, coord, schematic, length): repeated calls
    return identical grids.
    """
    solver = WFCSolver(schematic, length, chunk_hash(world_seed, coord), coord=coord)
    return solver.solve()


class ChunkGenerator:
    """Generates chunk interiors for one world (seed, schematic, chunk size)."""

    def __init__(self, schematic: Schematic, world_seed: int, interior_length: int):
        self.schematic = schematic
        self.world_seed = world_seed
        self.interior_length = interior_length

    def generate(self, coord: ChunkCoord) -> InteriorGrid:
        """
        Generate the interior grid for a chunk.

        Raises:
            ChunkGenerationError: If the solver fails unexpectedly. Ordinary
                contradictions never raise.
        """
        try:
            return generate_interior(self.world_seed, coord, self.schematic, self.interior_length)
        except Exception as e:
            raise ChunkGenerationError(f"Failed to generate chunk {tuple(coord)}: {e}", coord) from e
