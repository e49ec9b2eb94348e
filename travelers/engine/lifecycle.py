"""
ChunkLifecycleManager - runs one tick of the chunk lifecycle.

Each tick:
1. Reads the focus position and the host's chunk records
2. Spawns interiors for visible coordinates that have no chunk
3. Stitches dirty chunks that have at least one neighbor
4. Despawns chunks that are no longer visible

The manager owns no chunk state. Everything it learns about the world
comes from the host at the start of the tick, and everything it changes
goes back through the host.
"""

from __future__ import annotations

import logging

from ..config import WorldContext
from ..generation.stitcher import EdgeStitcher
from ..generation.wfc.solver import ChunkGenerator
from ..logging_config import log_tick
from .context import TickContext
from .host import ChunkHost
from .phases import DespawnPhase, Phase, SpawnPhase, StitchPhase, TickPipeline

logger = logging.getLogger(__name__)


class ChunkLifecycleManager:
    """Drives chunk spawning, stitching and despawning around the focus."""

    def __init__(
        self,
        world: WorldContext,
        host: ChunkHost,
        generator: ChunkGenerator | None = None,
        stitcher: EdgeStitcher | None = None,
    ):
        """
        Initialize the lifecycle manager.

        Args:
            world: Config, schematic and mapper for this world
            host: Host that stores and materializes chunks
            generator: Interior generator (default: built from world)
            stitcher: Edge stitcher (default: built from world)
        """
        self.world = world
        self.host = host
        self.generator = generator or ChunkGenerator(
            world.schematic,
            world.config.seed,
            world.config.interior_length,
        )
        self.stitcher = stitcher or EdgeStitcher(world.schematic, world.config.seed, world.mapper)
        self.pipeline = TickPipeline(self._build_phases())

        self.tick_count = 0
        self.total_contradictions = 0
        self.last_context: TickContext | None = None

    def _build_phases(self) -> list[Phase]:
        return [
            SpawnPhase(self.generator, self.host),
            StitchPhase(self.stitcher, self.host),
            DespawnPhase(self.host),
        ]

    def build_context(self) -> TickContext:
        """Snapshot the host into a context for the next tick."""
        focus = self.host.focus_position()
        visible = self.world.mapper.visible_coordinates(focus, self.world.config.render_distance)
        chunks = {chunk.coord: chunk for chunk in self.host.enumerate_chunks()}
        return TickContext(
            tick=self.tick_count + 1,
            focus=focus,
            visible=visible,
            chunks=chunks,
        )

    def tick(self) -> TickContext:
        """
        Run one lifecycle tick.

        Failures of individual chunks are logged and recorded in the
        returned context; they never abort the tick.

        Returns:
            Final context with everything this tick created, stitched,
            despawned or failed
        """
        ctx = self.build_context()
        log_tick(
            logger,
            ctx.tick,
            "START",
            f"focus=({ctx.focus.x:.1f},{ctx.focus.y:.1f}) visible={len(ctx.visible)} live={len(ctx.chunks)}",
        )

        ctx = self.pipeline.execute(ctx)

        self.tick_count = ctx.tick
        self.total_contradictions += ctx.contradictions
        self.last_context = ctx
        log_tick(
            logger,
            ctx.tick,
            "END",
            f"created={len(ctx.created)} stitched={len(ctx.stitched)} "
            f"despawned={len(ctx.despawned)} failed={len(ctx.failed)} "
            f"contradictions={ctx.contradictions}",
        )
        return ctx
