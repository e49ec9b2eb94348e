"""Chunk lifecycle engine for Travelers."""

from .context import TickContext
from .host import ChunkHost, ChunkStoreError, InMemoryChunkStore
from .lifecycle import ChunkLifecycleManager
from .phases import DespawnPhase, Phase, SpawnPhase, StitchPhase, TickPipeline

__all__ = [
    "TickContext",
    "ChunkHost",
    "ChunkStoreError",
    "InMemoryChunkStore",
    "ChunkLifecycleManager",
    "Phase",
    "TickPipeline",
    "SpawnPhase",
    "StitchPhase",
    "DespawnPhase",
]
