"""Tests for the Universe class."""

import numpy as np
import pytest

from lifegrid.core.errors import IndexOutOfBounds, InvalidDimensions
from lifegrid.core.seeding import ExplicitSeed, RandomSeed
from lifegrid.core.universe import Universe


def reference_tick(universe):
    """Apply the rule cell by cell against a snapshot of the current state."""
    expected = np.zeros(universe.shape, dtype=np.uint8)
    for row in range(universe.height):
        for col in range(universe.width):
            neighbors = universe.live_neighbor_count(row, col)
            if universe.get_cell(row, col):
                expected[row, col] = 1 if neighbors in (2, 3) else 0
            else:
                expected[row, col] = 1 if neighbors == 3 else 0
    return expected


class TestConstruction:
    """Test cases for creating universes."""

    def test_initialization(self):
        """Test default construction gives an all-dead grid."""
        universe = Universe(10, 20)
        assert universe.width == 10
        assert universe.height == 20
        assert universe.shape == (20, 10)
        assert universe.generation == 0
        assert universe.population == 0
        assert len(universe.cells) == 200

    @pytest.mark.parametrize("width, height", [(0, 5), (5, 0), (0, 0), (-1, 5), (5, -3)])
    def test_invalid_dimensions(self, width, height):
        """Test zero and negative sizes are rejected."""
        with pytest.raises(InvalidDimensions):
            Universe(width, height)

    def test_non_integer_dimensions(self):
        """Test floats and bools are not accepted as sizes."""
        with pytest.raises(InvalidDimensions):
            Universe(2.5, 4)
        with pytest.raises(InvalidDimensions):
            Universe(True, 4)

    def test_invalid_dimensions_is_value_error(self):
        """Test InvalidDimensions can be caught as ValueError."""
        with pytest.raises(ValueError):
            Universe(0, 3)

    def test_numpy_integer_dimensions(self):
        """Test numpy integers are valid sizes."""
        universe = Universe(np.int64(4), np.uint32(3))
        assert universe.shape == (3, 4)

    def test_explicit_seed(self):
        """Test explicit live cells are placed at (row, col)."""
        universe = Universe(5, 4, ExplicitSeed([(0, 0), (3, 4), (1, 2)]))
        assert universe.population == 3
        assert universe.get_cell(0, 0)
        assert universe.get_cell(3, 4)
        assert universe.get_cell(1, 2)
        assert universe.cells[1 * 5 + 2] == 1

    def test_explicit_seed_out_of_bounds(self):
        """Test explicit seeds outside the grid fail construction."""
        with pytest.raises(IndexOutOfBounds):
            Universe(5, 5, ExplicitSeed([(0, 0), (5, 0)]))

    def test_random_seed_is_reproducible(self):
        """Test the same random seed gives the same starting grid."""
        first = Universe(16, 16, RandomSeed(seed=42))
        second = Universe(16, 16, RandomSeed(seed=42))
        assert first == second
        assert 0 < first.population < 256


class TestCellAccess:
    """Test cases for single-cell accessors."""

    def test_set_and_get(self):
        """Test get_cell returns exactly what set_cell wrote."""
        universe = Universe(5, 5)
        universe.set_cell(1, 3, True)
        assert universe.get_cell(1, 3) is True
        assert universe.get_cell(3, 1) is False

        universe.set_cell(1, 3, False)
        assert universe.get_cell(1, 3) is False

    def test_toggle_cell(self):
        """Test toggling returns the new state and is its own inverse."""
        universe = Universe(5, 5)

        assert universe.toggle_cell(2, 2) is True
        assert universe.get_cell(2, 2) is True

        assert universe.toggle_cell(2, 2) is False
        assert universe.get_cell(2, 2) is False

    def test_toggle_twice_everywhere(self):
        """Test double toggle restores every cell of a random grid."""
        universe = Universe(6, 4, RandomSeed(seed=3))
        before = universe.cells.copy()
        for row in range(universe.height):
            for col in range(universe.width):
                universe.toggle_cell(row, col)
                universe.toggle_cell(row, col)
        assert np.array_equal(universe.cells, before)

    def test_mutators_do_not_advance_generation(self):
        """Test edits leave the generation counter alone."""
        universe = Universe(5, 5)
        universe.set_cell(0, 0, True)
        universe.toggle_cell(1, 1)
        universe.set_cells([(2, 2)])
        universe.clear()
        assert universe.generation == 0

    @pytest.mark.parametrize("row, col", [(5, 0), (0, 7), (5, 7), (-1, 0), (0, -1), (100, 100)])
    def test_bounds_enforced(self, row, col):
        """Test out-of-range coordinates fail without touching state."""
        universe = Universe(7, 5, RandomSeed(seed=11))
        before = universe.cells.copy()

        with pytest.raises(IndexOutOfBounds):
            universe.get_cell(row, col)
        with pytest.raises(IndexOutOfBounds):
            universe.set_cell(row, col, True)
        with pytest.raises(IndexOutOfBounds):
            universe.toggle_cell(row, col)

        assert np.array_equal(universe.cells, before)

    @pytest.mark.parametrize("row, col", [(1.5, 0), (0, 2.0), ("1", 0), (True, 0)])
    def test_non_integer_coordinates_rejected(self, row, col):
        """Test non-integer coordinates fail with IndexOutOfBounds."""
        universe = Universe(5, 5)
        with pytest.raises(IndexOutOfBounds):
            universe.get_cell(row, col)
        with pytest.raises(IndexOutOfBounds):
            universe.set_cell(row, col, True)
        with pytest.raises(IndexOutOfBounds):
            universe.toggle_cell(row, col)
        assert universe.population == 0

    def test_numpy_integer_coordinates(self):
        """Test numpy integers are valid coordinates."""
        universe = Universe(5, 5)
        universe.set_cell(np.int64(2), np.uint8(3), True)
        assert universe.get_cell(2, 3)

    def test_index_out_of_bounds_details(self):
        """Test the error carries the offending coordinates."""
        universe = Universe(3, 2)
        with pytest.raises(IndexError) as excinfo:
            universe.get_cell(2, 1)
        assert excinfo.value.row == 2
        assert excinfo.value.col == 1
        assert excinfo.value.height == 2

    def test_set_cells_validates_first(self):
        """Test set_cells writes nothing when any coordinate is bad."""
        universe = Universe(4, 4)
        with pytest.raises(IndexOutOfBounds):
            universe.set_cells([(0, 0), (1, 1), (4, 0)])
        assert universe.population == 0

    def test_set_cells_empty(self):
        """Test set_cells accepts an empty iterable."""
        universe = Universe(4, 4)
        universe.set_cells([])
        assert universe.population == 0

    def test_live_cells_row_major(self):
        """Test live cells are reported in row-major order."""
        universe = Universe(4, 3, ExplicitSeed([(2, 1), (0, 3), (0, 0)]))
        assert universe.live_cells() == [(0, 0), (0, 3), (2, 1)]

    def test_clear(self):
        """Test clearing kills every cell."""
        universe = Universe(8, 8, RandomSeed(probability=1.0))
        assert universe.population == 64
        universe.clear()
        assert universe.population == 0


class TestCellBuffer:
    """Test cases for the zero-copy cell view."""

    def test_row_major_layout(self):
        """Test index = row * width + col."""
        universe = Universe(4, 3)
        universe.set_cell(2, 1, True)
        cells = universe.cells
        assert cells.dtype == np.uint8
        assert cells.shape == (12,)
        assert np.flatnonzero(cells).tolist() == [2 * 4 + 1]

    def test_view_is_read_only(self):
        """Test the host cannot write through the view."""
        universe = Universe(3, 3)
        cells = universe.cells
        assert not cells.flags.writeable
        with pytest.raises(ValueError):
            cells[0] = 1

    def test_view_is_not_a_copy(self):
        """Test edits between ticks are visible through an existing view."""
        universe = Universe(3, 3)
        cells = universe.cells
        universe.set_cell(1, 1, True)
        assert cells[4] == 1

    def test_view_must_be_refetched_after_tick(self):
        """Test a fresh view after tick shows the new generation."""
        universe = Universe(5, 5, ExplicitSeed([(2, 1), (2, 2), (2, 3)]))
        universe.tick()
        assert np.flatnonzero(universe.cells).tolist() == [7, 12, 17]


class TestNeighbors:
    """Test cases for neighbour counting."""

    def test_live_neighbor_count(self):
        """Test scalar counts around a small cluster."""
        universe = Universe(5, 5, ExplicitSeed([(1, 1), (1, 2), (2, 1)]))
        assert universe.live_neighbor_count(2, 2) == 3
        assert universe.live_neighbor_count(1, 1) == 2
        assert universe.live_neighbor_count(0, 0) == 1
        assert universe.live_neighbor_count(4, 4) == 0

    def test_neighbors_wrap(self):
        """Test opposite corners are neighbours on the torus."""
        universe = Universe(4, 4, ExplicitSeed([(0, 0)]))
        assert universe.live_neighbor_count(3, 3) == 1
        assert universe.live_neighbor_count(0, 3) == 1
        assert universe.live_neighbor_count(3, 0) == 1
        assert universe.live_neighbor_count(2, 2) == 0

    def test_live_neighbor_count_bounds(self):
        """Test scalar count uses strict coordinates."""
        universe = Universe(4, 4)
        with pytest.raises(IndexOutOfBounds):
            universe.live_neighbor_count(4, 0)

    def test_count_all_neighbors_matches_scalar(self):
        """Test vectorised counts agree with the scalar count everywhere."""
        universe = Universe(9, 7, RandomSeed(seed=5))
        counts = universe.count_all_neighbors()
        assert counts.shape == (7, 9)
        for row in range(universe.height):
            for col in range(universe.width):
                assert counts[row, col] == universe.live_neighbor_count(row, col)


class TestTick:
    """Test cases for generation advancement."""

    def test_tick_advances_generation(self):
        """Test each tick bumps the generation by one."""
        universe = Universe(5, 5)
        universe.tick()
        universe.tick()
        assert universe.generation == 2

    def test_dead_grid_is_fixed_point(self):
        """Test an all-dead grid stays dead."""
        universe = Universe(6, 3)
        for _ in range(10):
            universe.tick()
        assert universe.population == 0

    def test_isolated_cell_dies(self):
        """Test a lonely cell dies after one tick."""
        universe = Universe(5, 5, ExplicitSeed([(2, 2)]))
        universe.tick()
        assert universe.population == 0

    def test_birth(self):
        """Test a dead cell with three live neighbours comes alive."""
        universe = Universe(5, 5, ExplicitSeed([(1, 1), (1, 2), (2, 1)]))
        assert universe.live_neighbor_count(2, 2) == 3
        universe.tick()
        assert universe.get_cell(2, 2)

    def test_blinker(self):
        """Test the blinker flips between horizontal and vertical."""
        universe = Universe(5, 5, ExplicitSeed([(2, 1), (2, 2), (2, 3)]))

        universe.tick()
        assert universe.live_cells() == [(1, 2), (2, 2), (3, 2)]

        universe.tick()
        assert universe.live_cells() == [(2, 1), (2, 2), (2, 3)]

    def test_glider_translates(self):
        """Test a glider moves one cell down and right every four ticks."""
        start = [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)]
        universe = Universe(8, 8, ExplicitSeed(start))

        for _ in range(4):
            universe.tick()

        assert universe.live_cells() == sorted(((row + 1) % 8, (col + 1) % 8) for row, col in start)

    def test_glider_wraps_around_torus(self):
        """Test a glider crossing every edge returns to its start."""
        start = [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)]
        universe = Universe(8, 8, ExplicitSeed(start))

        for _ in range(32):
            universe.tick()

        assert universe.live_cells() == sorted(start)

    def test_block_still_life(self):
        """Test a block is unchanged by ticks."""
        universe = Universe(6, 6, ExplicitSeed([(2, 2), (2, 3), (3, 2), (3, 3)]))
        for _ in range(5):
            universe.tick()
        assert universe.live_cells() == [(2, 2), (2, 3), (3, 2), (3, 3)]

    def test_matches_snapshot_rule(self):
        """Test tick equals the rule applied to the pre-tick snapshot."""
        universe = Universe(13, 11, RandomSeed(seed=2024))
        for _ in range(5):
            expected = reference_tick(universe)
            universe.tick()
            assert np.array_equal(universe.cells.reshape(universe.shape), expected)

    @pytest.mark.parametrize("width, height", [(1, 1), (1, 4), (3, 1), (2, 2)])
    def test_tiny_grids_match_snapshot_rule(self, width, height):
        """Test degenerate tori still follow the eight-offset rule."""
        universe = Universe(width, height, RandomSeed(probability=0.6, seed=9))
        expected = reference_tick(universe)
        universe.tick()
        assert np.array_equal(universe.cells.reshape(universe.shape), expected)

    def test_determinism(self):
        """Test identical starting states evolve identically."""
        first = Universe(20, 15, RandomSeed(seed=7))
        second = Universe(20, 15, ExplicitSeed(first.live_cells()))

        for _ in range(25):
            first.tick()
            second.tick()
            assert first == second

    def test_tick_swaps_buffers(self):
        """Test a view fetched before tick no longer shows the current generation."""
        universe = Universe(5, 5, ExplicitSeed([(2, 1), (2, 2), (2, 3)]))
        old_view = universe.cells
        universe.tick()
        assert not np.shares_memory(old_view, universe.cells)
        assert np.flatnonzero(old_view).tolist() == [11, 12, 13]


class TestRepresentation:
    """Test cases for rendering and comparison."""

    def test_render(self):
        """Test text rendering uses one line per row."""
        universe = Universe(3, 2, ExplicitSeed([(0, 0), (1, 2)]))
        assert universe.render() == "◼◻◻\n◻◻◼\n"
        assert str(universe) == universe.render()

    def test_equality(self):
        """Test equality compares dimensions and cells only."""
        first = Universe(3, 3)
        second = Universe(3, 3)
        assert first == second

        first.set_cell(1, 1, True)
        assert first != second

        second.set_cell(1, 1, True)
        assert first == second

        assert Universe(3, 3) != Universe(3, 4)
        assert first != "not a universe"

    def test_repr(self):
        """Test repr summarises size and state."""
        universe = Universe(4, 2, ExplicitSeed([(0, 0)]))
        assert repr(universe) == "Universe(width=4, height=2, generation=0, population=1)"
