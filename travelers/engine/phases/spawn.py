"""Spawn phase: generate interiors for visible coordinates with no chunk."""

from __future__ import annotations

import logging

from ...generation.errors import ChunkGenerationError
from ...generation.wfc.solver import ChunkGenerator
from ...logging_config import log_chunk
from ..context import TickContext
from ..host import ChunkHost

logger = logging.getLogger(__name__)


class SpawnPhase:
    """Create every visible chunk that does not exist yet.

    For each missing coordinate (sorted, so runs are reproducible):
    1. Generate the interior with the WFC solver
    2. Hand it to the host, which stores and materializes it (dirty)
    3. Add it to the tick's chunk view so later stitching can see it

    A coordinate already in the view is never regenerated. A chunk whose
    generation fails is skipped and retried on the next tick.
    """

    def __init__(self, generator: ChunkGenerator, host: ChunkHost):
        """Initialize SpawnPhase.

        Args:
            generator: Interior generator for this world
            host: Chunk host receiving new chunks
        """
        self._generator = generator
        self._host = host

    def execute(self, ctx: TickContext) -> TickContext:
        """Execute spawn phase.

        Args:
            ctx: Current tick context

        Returns:
            Updated context with new chunks in the view
        """
        for coord in ctx.missing:
            try:
                interior = self._generator.generate(coord)
            except ChunkGenerationError as e:
                logger.exception(f"Chunk {tuple(coord)} generation failed: {e}")
                log_chunk(logger, ctx.tick, "SPAWN", coord, success=False)
                ctx = ctx.with_failed(coord)
                continue

            chunk = self._host.spawn_chunk(coord, interior)
            contradictions = chunk.unresolved_interior_count()
            log_chunk(
                logger,
                ctx.tick,
                "SPAWN",
                coord,
                details=f"contradictions={contradictions}" if contradictions else None,
            )
            ctx = ctx.with_chunk(chunk).with_created(coord, contradictions)

        return ctx
