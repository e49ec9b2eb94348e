"""Stitch phase: resolve perimeter rings of dirty chunks."""

from __future__ import annotations

import logging

from ...generation.errors import StitchError
from ...generation.stitcher import EdgeStitcher, find_neighbors
from ...logging_config import log_stitch
from ..context import TickContext
from ..host import ChunkHost

logger = logging.getLogger(__name__)


class StitchPhase:
    """Stitch every dirty chunk that has at least one neighbor.

    Chunks are processed in sorted coordinate order against the tick's
    chunk view, which already contains this tick's spawns. A ring stitched
    earlier in the pass is visible to later chunks in the same pass; a
    chunk stitched later adapts to its already-stitched neighbors.
    """

    def __init__(self, stitcher: EdgeStitcher, host: ChunkHost):
        """Initialize StitchPhase.

        Args:
            stitcher: Edge stitcher for this world
            host: Chunk host receiving resolved rings
        """
        self._stitcher = stitcher
        self._host = host

    def execute(self, ctx: TickContext) -> TickContext:
        """Execute stitch phase.

        Args:
            ctx: Current tick context

        Returns:
            Updated context with stitched rings in the view
        """
        mapper = self._stitcher.mapper

        for coord in ctx.dirty:
            chunk = ctx.chunks[coord]
            neighbors = find_neighbors(mapper, coord, ctx.chunks)
            if not neighbors:
                continue

            try:
                result = self._stitcher.stitch(chunk, neighbors)
            except StitchError as e:
                logger.exception(f"Chunk {tuple(coord)} stitching failed: {e}")
                ctx = ctx.with_failed(coord)
                continue

            if result.ring == chunk.ring:
                continue

            updated = self._host.attach_stitched_tiles(chunk, result.ring)
            resolved = sum(1 for tile in result.ring if tile is not None)
            log_stitch(
                logger,
                ctx.tick,
                coord,
                resolved,
                len(result.ring),
                details=f"sides={sorted(d.name for d in neighbors)}",
            )
            ctx = ctx.with_chunk(updated).with_stitched(coord, result.complete, result.contradictions)

        return ctx
