"""Core domain models for Travelers.

This module contains pure domain models with no I/O beyond reading a
schematic file. Chunk records are immutable (frozen Pydantic models) and
use transformation methods for updates.

Usage:
    from travelers.core import ChunkCoord, Direction, Chunk, Schematic
"""

# Types
from .types import (
    TileTypeId,
    InteriorGrid,
    RingTiles,
    Direction,
    WorldPosition,
    TilePosition,
    ChunkCoord,
    Rect,
)

# Schematic
from .schematic import (
    SchematicError,
    SchematicFormatError,
    UnknownTileError,
    TileType,
    Schematic,
    load_schematic,
    load_schematic_file,
    default_schematic_path,
)

# Chunks
from .chunk import (
    Chunk,
    ring_size,
    ring_index,
    ring_side_rank,
    ring_local_position,
    ring_positions,
    interior_neighbor,
    empty_ring,
)

__all__ = [
    # Types
    "TileTypeId",
    "InteriorGrid",
    "RingTiles",
    "Direction",
    "WorldPosition",
    "TilePosition",
    "ChunkCoord",
    "Rect",
    # Schematic
    "SchematicError",
    "SchematicFormatError",
    "UnknownTileError",
    "TileType",
    "Schematic",
    "load_schematic",
    "load_schematic_file",
    "default_schematic_path",
    # Chunks
    "Chunk",
    "ring_size",
    "ring_index",
    "ring_side_rank",
    "ring_local_position",
    "ring_positions",
    "interior_neighbor",
    "empty_ring",
]
