"""Despawn phase: destroy chunks that left the visible set."""

from __future__ import annotations

import logging

from ...logging_config import log_chunk
from ..context import TickContext
from ..host import ChunkHost

logger = logging.getLogger(__name__)


class DespawnPhase:
    """Ask the host to destroy every chunk outside the visible set."""

    def __init__(self, host: ChunkHost):
        self._host = host

    def execute(self, ctx: TickContext) -> TickContext:
        """Execute despawn phase."""
        for coord in ctx.stale:
            self._host.despawn_chunk(coord)
            log_chunk(logger, ctx.tick, "DESPAWN", coord)
            ctx = ctx.without_chunk(coord).with_despawned(coord)
        return ctx
