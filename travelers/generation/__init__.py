"""World generation for Travelers."""

from .coords import ChunkCoordinateMapper
from .errors import GenerationError, ChunkGenerationError, StitchError
from .stitcher import EdgeStitcher, RingSolver, StitchResult, find_neighbors
from .wfc import ChunkGenerator, generate_interior, chunk_hash

__all__ = [
    "ChunkCoordinateMapper",
    "GenerationError",
    "ChunkGenerationError",
    "StitchError",
    "EdgeStitcher",
    "RingSolver",
    "StitchResult",
    "find_neighbors",
    "ChunkGenerator",
    "generate_interior",
    "chunk_hash",
]
