"""Wave Function Collapse algorithm for chunk interiors."""

from .grid import Grid, Cell
from .seeding import chunk_hash, seeded_choice
from .solver import WFCSolver, SolverState, ChunkGenerator, generate_interior

__all__ = [
    "Grid",
    "Cell",
    "chunk_hash",
    "seeded_choice",
    "WFCSolver",
    "SolverState",
    "ChunkGenerator",
    "generate_interior",
]
