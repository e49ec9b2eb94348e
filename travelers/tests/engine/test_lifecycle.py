"""Tests for ChunkLifecycleManager and the tick pipeline."""

import pytest

from travelers.config import WorldConfig, WorldContext
from travelers.core.types import ChunkCoord, WorldPosition
from travelers.engine import (
    ChunkLifecycleManager,
    InMemoryChunkStore,
    TickContext,
    TickPipeline,
)
from travelers.generation.errors import ChunkGenerationError, StitchError
from travelers.generation.stitcher import EdgeStitcher
from travelers.generation.wfc import ChunkGenerator
from travelers.observe import ObserverAPI


class FailingGenerator(ChunkGenerator):
    """Generator that fails for chosen coordinates."""

    def __init__(self, *args, fail_at: set[ChunkCoord], **kwargs):
        super().__init__(*args, **kwargs)
        self.fail_at = fail_at
        self.attempts: list[ChunkCoord] = []

    def generate(self, coord):
        self.attempts.append(coord)
        if coord in self.fail_at:
            raise ChunkGenerationError("boom", coord)
        return super().generate(coord)


class FailingStitcher(EdgeStitcher):
    """Stitcher that fails for chosen coordinates."""

    def __init__(self, *args, fail_at: set[ChunkCoord], **kwargs):
        super().__init__(*args, **kwargs)
        self.fail_at = fail_at

    def stitch(self, chunk, neighbors):
        if chunk.coord in self.fail_at:
            raise StitchError("boom", chunk.coord)
        return super().stitch(chunk, neighbors)


@pytest.fixture
def store() -> InMemoryChunkStore:
    return InMemoryChunkStore()


@pytest.fixture
def manager(bridge_world, store) -> ChunkLifecycleManager:
    return ChunkLifecycleManager(bridge_world, store)


class RecordingPhase:
    """Phase that records when it ran."""

    def __init__(self, name: str, log: list[str]):
        self.name = name
        self.log = log

    def execute(self, ctx: TickContext) -> TickContext:
        self.log.append(self.name)
        return ctx


class TestTickPipeline:
    """Tests for TickPipeline."""

    def test_runs_phases_in_order(self):
        """Phases run one after another with the updated context."""
        log: list[str] = []
        pipeline = TickPipeline([RecordingPhase("a", log), RecordingPhase("b", log)])
        ctx = TickContext(tick=1, focus=WorldPosition(0, 0), visible=frozenset())
        assert pipeline.execute(ctx) == ctx
        assert log == ["a", "b"]


class TestSpawning:
    """Tests for spawning visible chunks."""

    def test_first_tick_spawns_visible_set(self, manager, store, bridge_world):
        """After one tick every visible coordinate has a chunk."""
        ctx = manager.tick()
        visible = bridge_world.mapper.visible_coordinates(WorldPosition(0, 0), 1)
        assert set(ctx.created) == visible
        assert {chunk.coord for chunk in store.enumerate_chunks()} == visible
        assert ctx.tick == 1

    def test_spawn_order_is_sorted(self, manager):
        """Chunks are created in coordinate order."""
        ctx = manager.tick()
        assert list(ctx.created) == sorted(ctx.created)

    def test_spawning_is_idempotent(self, manager, store):
        """A second tick without movement changes nothing."""
        manager.tick()
        before = store.chunks
        ctx = manager.tick()
        assert ctx.created == ()
        assert ctx.despawned == ()
        assert ctx.stitched == ()
        assert store.chunks == before
        assert store.spawn_count == 9

    def test_same_world_is_reproducible(self, bridge_world):
        """Two hosts driven the same way end up with identical chunks."""
        results = []
        for _ in range(2):
            store = InMemoryChunkStore()
            manager = ChunkLifecycleManager(bridge_world, store)
            manager.tick()
            store.move_focus(bridge_world.mapper.extent, 0)
            manager.tick()
            results.append(store.chunks)
        assert results[0] == results[1]


class TestStitching:
    """Tests for stitching during ticks."""

    def test_center_is_complete_after_first_tick(self, manager, store):
        """The focus chunk has all four neighbors, so its ring resolves."""
        ctx = manager.tick()
        center = store.get(ChunkCoord(0, 0))
        assert not center.dirty
        assert ChunkCoord(0, 0) in ctx.completed

    def test_edge_chunks_stay_dirty(self, manager, store):
        """Chunks at the edge of view are missing outer neighbors."""
        manager.tick()
        corner = store.get(ChunkCoord(-5, -5))
        assert corner.dirty
        assert any(tile is not None for tile in corner.ring)

    def test_no_seam_violations(self, manager, store, bridge_world):
        """Every resolved pair of tiles in the world is allowed."""
        manager.tick()
        store.move_focus(3, 4)
        manager.tick()
        api = ObserverAPI(bridge_world, store, manager)
        assert api.seam_violations() == []

    def test_bundled_rules_only_break_at_fallbacks(self, default_schematic, store):
        """With the bundled rules every broken pair has a fallback tile on one side."""
        world = WorldContext.create(WorldConfig(render_distance=2), default_schematic)
        manager = ChunkLifecycleManager(world, store)
        for _ in range(3):
            manager.tick()
            store.move_focus(world.mapper.extent, 0)

        fallback = default_schematic.fallback_id()
        violations = ObserverAPI(world, store, manager).seam_violations()
        assert all(fallback in (v.tile, v.other) for v in violations)

    def test_dirty_chunk_finishes_when_neighbors_arrive(self, manager, store, bridge_world):
        """Moving the view completes rings that were waiting on neighbors."""
        manager.tick()
        east = ChunkCoord(5, 0)
        assert store.get(east).dirty
        store.move_focus(bridge_world.mapper.extent, 0)
        ctx = manager.tick()
        assert not store.get(east).dirty
        assert east in ctx.completed


class TestDespawning:
    """Tests for despawning chunks that left the view."""

    def test_moving_despawns_trailing_column(self, manager, store, bridge_world):
        """Moving one chunk east drops the west column and adds an east column."""
        manager.tick()
        store.move_focus(bridge_world.mapper.extent, 0)
        ctx = manager.tick()
        assert set(ctx.despawned) == {ChunkCoord(-5, y) for y in (-5, 0, 5)}
        assert set(ctx.created) == {ChunkCoord(10, y) for y in (-5, 0, 5)}
        assert len(store) == 9
        assert store.despawn_count == 3

    def test_respawned_chunk_regenerates_identically(self, manager, store, bridge_world):
        """Leaving and returning regenerates the same interior."""
        manager.tick()
        before = store.get(ChunkCoord(-5, 0)).interior
        store.move_focus(bridge_world.mapper.extent, 0)
        manager.tick()
        store.move_focus(-bridge_world.mapper.extent, 0)
        manager.tick()
        assert store.get(ChunkCoord(-5, 0)).interior == before


class TestFailureIsolation:
    """Tests that one bad chunk never aborts a tick."""

    def test_generation_failure_is_skipped_and_retried(self, bridge_world, store):
        """A failing chunk is reported and retried next tick; others spawn."""
        generator = FailingGenerator(
            bridge_world.schematic,
            bridge_world.config.seed,
            bridge_world.config.interior_length,
            fail_at={ChunkCoord(0, 0)},
        )
        manager = ChunkLifecycleManager(bridge_world, store, generator=generator)

        ctx = manager.tick()
        assert ctx.failed == (ChunkCoord(0, 0),)
        assert ChunkCoord(0, 0) not in store
        assert len(store) == 8

        manager.tick()
        assert generator.attempts.count(ChunkCoord(0, 0)) == 2

    def test_stitch_failure_is_isolated(self, bridge_world, store):
        """A failing stitch leaves that chunk dirty and stitches the rest."""
        stitcher = FailingStitcher(
            bridge_world.schematic,
            bridge_world.config.seed,
            bridge_world.mapper,
            fail_at={ChunkCoord(0, 0)},
        )
        manager = ChunkLifecycleManager(bridge_world, store, stitcher=stitcher)

        ctx = manager.tick()
        assert ChunkCoord(0, 0) in ctx.failed
        assert store.get(ChunkCoord(0, 0)).dirty
        assert len(ctx.stitched) == 8
