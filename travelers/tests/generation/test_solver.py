"""Tests for the interior WFC solver and chunk seeding."""

import pytest

from travelers.core.types import ChunkCoord, Direction
from travelers.generation.errors import ChunkGenerationError
from travelers.generation.wfc import (
    ChunkGenerator,
    Grid,
    SolverState,
    WFCSolver,
    chunk_hash,
    generate_interior,
    seeded_choice,
)


def _adjacent_pairs(tiles):
    """Yield (tile, direction, other) for every east/north interior pair."""
    length = len(tiles)
    for y in range(length):
        for x in range(length):
            if x + 1 < length:
                yield tiles[y][x], Direction.EAST, tiles[y][x + 1]
            if y + 1 < length:
                yield tiles[y][x], Direction.NORTH, tiles[y + 1][x]


class TestSeeding:
    """Tests for deterministic seeding."""

    def test_chunk_hash_is_stable(self):
        """Same seed and coordinate always hash the same."""
        assert chunk_hash(42, ChunkCoord(320, -640)) == chunk_hash(42, ChunkCoord(320, -640))

    def test_chunk_hash_depends_on_seed(self):
        """Different world seeds give different hashes."""
        assert chunk_hash(1, ChunkCoord(0, 0)) != chunk_hash(2, ChunkCoord(0, 0))

    def test_chunk_hash_uses_coordinate_sum(self):
        """Chunks on the same anti-diagonal share a hash."""
        assert chunk_hash(7, ChunkCoord(320, 0)) == chunk_hash(7, ChunkCoord(0, 320))
        assert chunk_hash(7, ChunkCoord(320, 0)) != chunk_hash(7, ChunkCoord(320, 320))

    def test_seeded_choice_ignores_option_order(self):
        """The pick depends on the set of options, not their order."""
        assert seeded_choice(99, [3, 1, 2]) == seeded_choice(99, {2, 3, 1})

    def test_seeded_choice_is_a_member(self):
        """The pick is always one of the options."""
        for seed in range(20):
            assert seeded_choice(seed, {4, 8, 15}) in {4, 8, 15}

    def test_seeded_choice_empty(self):
        """An empty domain cannot be chosen from."""
        with pytest.raises(ValueError):
            seeded_choice(1, [])


class TestGrid:
    """Tests for the WFC grid."""

    def test_initial_superposition(self):
        """Every cell starts with the full tile set."""
        grid = Grid(3, frozenset({0, 1, 2}))
        assert grid.domain_sizes() == [[3, 3, 3]] * 3
        assert not grid.is_complete()

    def test_min_entropy_prefers_raster_order(self):
        """Ties go to the first cell from the south-west."""
        grid = Grid(3, frozenset({0, 1, 2}))
        grid.cells[2][0].constrain_to({0, 1})
        grid.cells[1][2].constrain_to({0, 1})
        cell = grid.min_entropy_cell()
        assert (cell.x, cell.y) == (2, 1)

    def test_min_entropy_skips_contradictions(self):
        """Empty domains are never selected."""
        grid = Grid(2, frozenset({0, 1}))
        grid.cells[0][0].constrain_to(set())
        cell = grid.min_entropy_cell()
        assert (cell.x, cell.y) == (1, 0)
        assert grid.contradictions() == [grid.cells[0][0]]

    def test_neighbors_at_corner(self):
        """The origin cell only has north and east neighbors."""
        grid = Grid(3, frozenset({0}))
        directions = {direction for _, direction in grid.neighbors(grid.cells[0][0])}
        assert directions == {Direction.NORTH, Direction.EAST}


class TestWFCSolver:
    """Tests for the interior solver."""

    def test_state_machine(self, bridge_schematic):
        """Seed first, then propagate/collapse until done."""
        solver = WFCSolver(bridge_schematic, 3, seed_hash=123)
        assert solver.state == SolverState.UNINITIALIZED
        assert solver.step() == SolverState.SEEDED
        assert solver.grid.cells[0][0].collapsed
        assert solver.step() == SolverState.PROPAGATING
        while solver.step() != SolverState.COLLAPSED:
            pass
        assert solver.step() == SolverState.COLLAPSED

    def test_origin_seeded_from_hash(self, bridge_schematic):
        """The origin tile is the seeded pick from the full tile set."""
        solver = WFCSolver(bridge_schematic, 4, seed_hash=55)
        solver.seed()
        assert solver.grid.cells[0][0].tile_id == seeded_choice(55, bridge_schematic.tile_ids)

    def test_domains_only_shrink(self, default_schematic):
        """No domain ever grows and no fixed tile ever changes."""
        solver = WFCSolver(default_schematic, 6, seed_hash=2024)
        solver.step()
        previous_sizes = solver.grid.domain_sizes()
        previous_tiles = solver.grid.to_tiles()
        while solver.step() != SolverState.COLLAPSED:
            sizes = solver.grid.domain_sizes()
            tiles = solver.grid.to_tiles()
            for y in range(6):
                for x in range(6):
                    assert sizes[y][x] <= previous_sizes[y][x]
                    if previous_tiles[y][x] is not None:
                        assert tiles[y][x] == previous_tiles[y][x]
            previous_sizes, previous_tiles = sizes, tiles

    def test_bridge_interior_is_complete_and_valid(self, bridge_schematic):
        """Without contradictions every cell resolves and every pair is allowed."""
        tiles = generate_interior(7, ChunkCoord(0, 0), bridge_schematic, 8)
        assert all(tile is not None for row in tiles for tile in row)
        for tile, direction, other in _adjacent_pairs(tiles):
            assert bridge_schematic.compatible(tile, direction, other)

    def test_default_interior_pairs_are_valid(self, default_schematic):
        """Resolved neighbors always satisfy the rules, even with contradictions."""
        for coord in (ChunkCoord(0, 0), ChunkCoord(-320, 640), ChunkCoord(960, 0)):
            tiles = generate_interior(42, coord, default_schematic, 8)
            for tile, direction, other in _adjacent_pairs(tiles):
                if tile is None or other is None:
                    continue
                assert default_schematic.compatible(tile, direction, other)

    def test_monochrome_fills_with_one_tile(self, monochrome_schematic):
        """Self-only rules collapse the whole interior to the origin's tile."""
        tiles = generate_interior(3, ChunkCoord(0, 0), monochrome_schematic, 5)
        origin = tiles[0][0]
        assert all(tile == origin for row in tiles for tile in row)

    def test_contradictions_stay_unresolved(self, barren_schematic):
        """Cells with empty domains are left as None, not retried."""
        tiles = generate_interior(1, ChunkCoord(0, 0), barren_schematic, 3)
        # A tile that tolerates nothing leaves a checkerboard of contradictions
        for y in range(3):
            for x in range(3):
                expected = None if (x + y) % 2 else 0
                assert tiles[y][x] == expected, f"unexpected tile at ({x}, {y})"

    def test_deterministic(self, default_schematic):
        """Same inputs always give the same interior."""
        a = generate_interior(42, ChunkCoord(320, 0), default_schematic, 8)
        b = generate_interior(42, ChunkCoord(320, 0), default_schematic, 8)
        assert a == b

    def test_reset(self, bridge_schematic):
        """reset returns the solver to its initial state."""
        solver = WFCSolver(bridge_schematic, 3, seed_hash=9)
        first = solver.solve()
        solver.reset()
        assert solver.state == SolverState.UNINITIALIZED
        assert solver.solve() == first


class TestChunkGenerator:
    """Tests for the per-world generator wrapper."""

    def test_generate(self, bridge_schematic):
        """The generator matches generate_interior for its world."""
        generator = ChunkGenerator(bridge_schematic, world_seed=5, interior_length=4)
        assert generator.generate(ChunkCoord(0, 0)) == generate_interior(5, ChunkCoord(0, 0), bridge_schematic, 4)

    def test_unexpected_failure_is_wrapped(self, bridge_schematic):
        """Solver crashes surface as ChunkGenerationError with the coordinate."""
        generator = ChunkGenerator(bridge_schematic, world_seed=5, interior_length=0)
        with pytest.raises(ChunkGenerationError) as exc_info:
            generator.generate(ChunkCoord(5, 5))
        assert exc_info.value.coord == ChunkCoord(5, 5)
