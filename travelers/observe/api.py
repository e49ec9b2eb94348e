"""Observer API for Travelers.

Query-only interface for viewing world state. Wraps the chunk host and the
lifecycle manager to provide a clean API for the TUI, the CLI dump and the
tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from pydantic import BaseModel, ConfigDict

from ..core.chunk import Chunk
from ..core.schematic import Schematic, TileType
from ..core.types import ChunkCoord, Direction, Rect, TilePosition, TileTypeId, WorldPosition

if TYPE_CHECKING:
    from ..config import WorldContext
    from ..engine.host import ChunkHost
    from ..engine.lifecycle import ChunkLifecycleManager


class WorldStats(BaseModel):
    """Debug overlay numbers for the current world."""

    model_config = ConfigDict(frozen=True)

    tick: int
    focus: WorldPosition
    focus_tile: TilePosition
    focus_chunk: ChunkCoord
    chunk_count: int
    visible_count: int
    dirty_count: int
    tile_count: int
    unresolved_interior: int
    contradictions: int


class SeamViolation(BaseModel):
    """Two adjacent resolved tiles the schematic does not allow together."""

    model_config = ConfigDict(frozen=True)

    position: TilePosition
    direction: Direction
    tile: TileTypeId
    other: TileTypeId


class ObserverAPI:
    """Query-only interface for observing the Travelers world.

    This API provides read-only access to world state for the TUI
    and other observer tools. No mutation methods - just queries.
    """

    def __init__(
        self,
        world: "WorldContext",
        host: "ChunkHost",
        manager: "ChunkLifecycleManager | None" = None,
    ):
        """Initialize ObserverAPI.

        Args:
            world: Config, schematic and mapper for this world
            host: Chunk host holding the live chunks
            manager: Lifecycle manager, for tick and contradiction counts
        """
        self._world = world
        self._host = host
        self._manager = manager

    def _chunk_map(self) -> dict[ChunkCoord, Chunk]:
        return {chunk.coord: chunk for chunk in self._host.enumerate_chunks()}

    # -------------------------------------------------------------------------
    # World State Queries
    # -------------------------------------------------------------------------

    def get_focus(self) -> WorldPosition:
        """Get the current focus position in world units."""
        return self._host.focus_position()

    def get_focus_tile(self) -> TilePosition:
        """Get the world tile under the focus."""
        return self._world.mapper.tile_of(self._host.focus_position())

    def get_schematic(self) -> Schematic:
        """Get the ruleset this world is generated from."""
        return self._world.schematic

    def get_chunks(self) -> list[Chunk]:
        """Get all live chunks in coordinate order."""
        return sorted(self._host.enumerate_chunks(), key=lambda chunk: chunk.coord)

    def get_chunk(self, coord: ChunkCoord) -> Chunk | None:
        """Get the live chunk at a coordinate, if any."""
        return self._chunk_map().get(coord)

    def get_stats(self) -> WorldStats:
        """Get debug statistics for the current world."""
        mapper = self._world.mapper
        focus = self._host.focus_position()
        chunks = list(self._host.enumerate_chunks())
        visible = mapper.visible_coordinates(focus, self._world.config.render_distance)
        return WorldStats(
            tick=self._manager.tick_count if self._manager else 0,
            focus=focus,
            focus_tile=mapper.tile_of(focus),
            focus_chunk=mapper.chunk_coordinate_of(focus),
            chunk_count=len(chunks),
            visible_count=len(visible),
            dirty_count=sum(1 for chunk in chunks if chunk.dirty),
            tile_count=len(chunks) * mapper.footprint * mapper.footprint,
            unresolved_interior=sum(chunk.unresolved_interior_count() for chunk in chunks),
            contradictions=self._manager.total_contradictions if self._manager else 0,
        )

    # -------------------------------------------------------------------------
    # Tile Queries
    # -------------------------------------------------------------------------

    def tile_at(self, tile: TilePosition) -> TileTypeId | None:
        """Get the raw tile id at a world tile.

        Returns None if the owning chunk is not live or the cell is
        unresolved.
        """
        return self._tile_in(self._chunk_map(), tile)

    def is_ring_tile(self, tile: TilePosition) -> bool:
        """Check if a world tile lies on its chunk's perimeter ring."""
        _, local_x, local_y = self._world.mapper.locate_tile(tile)
        edge = (-1, self._world.config.interior_length)
        return local_x in edge or local_y in edge

    def _tile_in(self, chunks: Mapping[ChunkCoord, Chunk], tile: TilePosition) -> TileTypeId | None:
        coord, local_x, local_y = self._world.mapper.locate_tile(tile)
        chunk = chunks.get(coord)
        if chunk is None:
            return None
        return chunk.tile_at_local(local_x, local_y)

    def get_tile_type(self, tile: TilePosition) -> TileType | None:
        """Get the tile type to display at a world tile.

        Unresolved cells in live chunks display as the fallback tile.
        """
        chunks = self._chunk_map()
        coord, _, _ = self._world.mapper.locate_tile(tile)
        if coord not in chunks:
            return None
        tile_id = self._tile_in(chunks, tile)
        schematic = self._world.schematic
        return schematic.lookup(schematic.fallback_id() if tile_id is None else tile_id)

    def render_region(self, rect: Rect) -> dict[TilePosition, TileTypeId | None]:
        """Get display tile ids for every position in a rectangle.

        Positions in live chunks always have an id (the fallback for
        unresolved cells); positions outside live chunks map to None.
        """
        fallback = self._world.schematic.fallback_id()
        chunks = {coord: chunk.resolved(fallback) for coord, chunk in self._chunk_map().items()}
        return {pos: self._tile_in(chunks, pos) for pos in rect.positions()}

    # -------------------------------------------------------------------------
    # Seam Audit
    # -------------------------------------------------------------------------

    def seam_violations(self) -> list[SeamViolation]:
        """Adjacent resolved tile pairs that break the adjacency rules.

        Every tile of every live chunk is checked against its east and
        north neighbors, including neighbors in other chunks. Unresolved
        cells and tiles outside live chunks are skipped.
        """
        mapper = self._world.mapper
        schematic = self._world.schematic
        chunks = self._chunk_map()
        violations: list[SeamViolation] = []

        for coord in sorted(chunks):
            chunk = chunks[coord]
            for local_y in range(-1, chunk.length + 1):
                for local_x in range(-1, chunk.length + 1):
                    tile = chunk.tile_at_local(local_x, local_y)
                    if tile is None:
                        continue
                    pos = mapper.world_tile(coord, local_x, local_y)
                    for direction in (Direction.EAST, Direction.NORTH):
                        other = self._tile_in(chunks, pos + direction)
                        if other is None:
                            continue
                        if not schematic.compatible(tile, direction, other):
                            violations.append(
                                SeamViolation(position=pos, direction=direction, tile=tile, other=other)
                            )

        return violations
