"""Tick phases for the Travelers engine."""

from .base import Phase, TickPipeline
from .spawn import SpawnPhase
from .stitch import StitchPhase
from .despawn import DespawnPhase

__all__ = [
    "Phase",
    "TickPipeline",
    "SpawnPhase",
    "StitchPhase",
    "DespawnPhase",
]
