"""Base classes and protocols for tick phases.

This module defines the Phase protocol and TickPipeline for executing
phases in sequence during a tick. Phases are synchronous: a tick runs to
completion before the next one starts.
"""

from __future__ import annotations

import logging
import time
from typing import Protocol

from ...logging_config import log_phase
from ..context import TickContext

logger = logging.getLogger(__name__)


class Phase(Protocol):
    """Protocol for tick phases.

    Each phase receives the current TickContext, processes it, and returns
    an updated context. Phases hold collaborators but no per-tick state -
    all state flows through the context.
    """

    def execute(self, ctx: TickContext) -> TickContext:
        """Execute this phase.

        Args:
            ctx: Current tick context

        Returns:
            Updated tick context
        """
        ...


class TickPipeline:
    """Executes phases in sequence.

    The pipeline takes a list of phases and executes them one by one,
    passing the updated context from each phase to the next.
    """

    def __init__(self, phases: list[Phase]):
        """Initialize pipeline with phases.

        Args:
            phases: List of phases to execute in order
        """
        self._phases = phases

    @property
    def phases(self) -> list[Phase]:
        return list(self._phases)

    def execute(self, ctx: TickContext) -> TickContext:
        """Execute all phases in sequence.

        Args:
            ctx: Initial tick context

        Returns:
            Final tick context after all phases
        """
        for phase in self._phases:
            started = time.perf_counter()
            ctx = phase.execute(ctx)
            duration_ms = int((time.perf_counter() - started) * 1000)
            log_phase(logger, ctx.tick, type(phase).__name__, "done", duration_ms)
        return ctx
