"""Tests for the in-memory chunk host."""

import pytest

from travelers.core.chunk import ring_size
from travelers.core.types import ChunkCoord, WorldPosition
from travelers.engine.host import ChunkStoreError, InMemoryChunkStore

INTERIOR = ((1, 1), (1, 1))


class TestInMemoryChunkStore:
    """Tests for InMemoryChunkStore."""

    def test_focus(self):
        """Focus starts at the origin and moves by offsets."""
        store = InMemoryChunkStore()
        assert store.focus_position() == WorldPosition(0.0, 0.0)
        assert store.move_focus(3, -2) == WorldPosition(3.0, -2.0)
        store.set_focus(WorldPosition(10, 10))
        assert store.focus_position() == WorldPosition(10.0, 10.0)

    def test_spawn_stores_dirty_chunk(self):
        """spawn_chunk returns the stored record with an empty ring."""
        store = InMemoryChunkStore()
        chunk = store.spawn_chunk(ChunkCoord(0, 0), INTERIOR)
        assert chunk.dirty
        assert store.get(ChunkCoord(0, 0)) == chunk
        assert ChunkCoord(0, 0) in store
        assert len(store) == 1
        assert store.spawn_count == 1

    def test_double_spawn_rejected(self):
        """A coordinate can only hold one chunk."""
        store = InMemoryChunkStore()
        store.spawn_chunk(ChunkCoord(0, 0), INTERIOR)
        with pytest.raises(ChunkStoreError) as exc_info:
            store.spawn_chunk(ChunkCoord(0, 0), INTERIOR)
        assert exc_info.value.coord == ChunkCoord(0, 0)

    def test_attach_stitched_tiles(self):
        """Attaching a ring replaces the stored record."""
        store = InMemoryChunkStore()
        chunk = store.spawn_chunk(ChunkCoord(0, 0), INTERIOR)
        updated = store.attach_stitched_tiles(chunk, (1,) * ring_size(2))
        assert not updated.dirty
        assert store.get(ChunkCoord(0, 0)) == updated

    def test_attach_to_missing_chunk(self):
        """Rings can only be attached to live chunks."""
        store = InMemoryChunkStore()
        chunk = store.spawn_chunk(ChunkCoord(0, 0), INTERIOR)
        store.despawn_chunk(ChunkCoord(0, 0))
        with pytest.raises(ChunkStoreError):
            store.attach_stitched_tiles(chunk, (1,) * ring_size(2))

    def test_despawn(self):
        """despawn removes the chunk; unknown coordinates are ignored."""
        store = InMemoryChunkStore()
        store.spawn_chunk(ChunkCoord(0, 0), INTERIOR)
        store.despawn_chunk(ChunkCoord(0, 0))
        store.despawn_chunk(ChunkCoord(9, 9))
        assert len(store) == 0
        assert store.despawn_count == 1
        assert store.enumerate_chunks() == []

    def test_chunks_is_a_copy(self):
        """Mutating the returned mapping does not touch the store."""
        store = InMemoryChunkStore()
        store.spawn_chunk(ChunkCoord(0, 0), INTERIOR)
        chunks = store.chunks
        chunks.clear()
        assert len(store) == 1
