"""Toroidal grid engine for Conway's Game of Life."""

import logging
from typing import Iterable, List, Optional, Tuple

import numpy as np
import torch
import torch.nn.functional as F

from .errors import IndexOutOfBounds, InvalidDimensions
from .seeding import ExplicitSeed, SeedPolicy

logger = logging.getLogger(__name__)

DEAD = 0
ALIVE = 1


def _is_dimension(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        return False
    return value > 0


def _is_coordinate(value: object) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


class Universe:
    """A fixed-size toroidal grid of live and dead cells.

    Cells are stored one byte per cell in a flat, row-major numpy buffer:
    the cell at ``(row, col)`` lives at index ``row * width + col`` and holds
    0 (dead) or 1 (alive). ``tick`` computes the next generation into a back
    buffer and swaps it in, so a host never observes a half-updated grid.

    Any view returned by :attr:`cells` refers to the buffer current at the
    time of the call and must be fetched again after every ``tick``.
    """

    def __init__(self, width: int, height: int, seed_policy: Optional[SeedPolicy] = None) -> None:
        """Create a universe.

        Args:
            width: Number of columns, must be positive
            height: Number of rows, must be positive
            seed_policy: How to populate the first generation; ``None`` gives
                an all-dead grid

        Raises:
            InvalidDimensions: If width or height is not a positive integer
            IndexOutOfBounds: If an explicit seed names a cell outside the grid
        """
        if not (_is_dimension(width) and _is_dimension(height)):
            raise InvalidDimensions(width, height)

        self._width = int(width)
        self._height = int(height)
        self._generation = 0

        size = self._width * self._height
        self._front = np.zeros(size, dtype=np.uint8)
        self._back = np.zeros(size, dtype=np.uint8)

        policy = seed_policy if seed_policy is not None else ExplicitSeed()
        policy.populate(self._front, self._width, self._height)

        # Moore neighbourhood kernel, reused for every tick
        self._kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

        logger.debug(
            "Created %dx%d universe with %r (population %d)", self._width, self._height, policy, self.population
        )

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions as (height, width)."""
        return (self._height, self._width)

    @property
    def generation(self) -> int:
        """Number of ticks since construction."""
        return self._generation

    @property
    def cells(self) -> np.ndarray:
        """Read-only, zero-copy view of the current generation.

        A flat uint8 array of ``width * height`` entries in row-major order.
        The view is invalidated by the next ``tick``.
        """
        view = self._front.view()
        view.flags.writeable = False
        return view

    @property
    def population(self) -> int:
        """Number of living cells."""
        return int(np.count_nonzero(self._front))

    def get_index(self, row: int, col: int) -> int:
        """Linear buffer index of a cell, after bounds checking."""
        self._check_bounds(row, col)
        return row * self._width + col

    def get_cell(self, row: int, col: int) -> bool:
        """Return True if the cell at (row, col) is alive.

        Raises:
            IndexOutOfBounds: If the coordinates are outside the grid
        """
        return bool(self._front[self.get_index(row, col)])

    def set_cell(self, row: int, col: int, alive: bool) -> None:
        """Set the state of a single cell.

        Raises:
            IndexOutOfBounds: If the coordinates are outside the grid
        """
        self._front[self.get_index(row, col)] = ALIVE if alive else DEAD

    def toggle_cell(self, row: int, col: int) -> bool:
        """Flip a cell between alive and dead.

        Returns:
            New state of the cell

        Raises:
            IndexOutOfBounds: If the coordinates are outside the grid
        """
        index = self.get_index(row, col)
        new_state = not self._front[index]
        self._front[index] = ALIVE if new_state else DEAD
        return new_state

    def set_cells(self, cells: Iterable[Tuple[int, int]]) -> None:
        """Mark every (row, col) in ``cells`` alive.

        All coordinates are checked before any cell is written.
        """
        indices = np.array([self.get_index(row, col) for row, col in cells], dtype=np.intp)
        self._front[indices] = ALIVE

    def clear(self) -> None:
        """Kill every cell. The generation counter is left unchanged."""
        self._front.fill(DEAD)

    def live_cells(self) -> List[Tuple[int, int]]:
        """Coordinates of all living cells in row-major order."""
        return [divmod(int(index), self._width) for index in np.flatnonzero(self._front)]

    def live_neighbor_count(self, row: int, col: int) -> int:
        """Count the live neighbours of one cell, wrapping at every edge.

        Each of the eight offsets is counted separately, so on very small
        grids the same cell (or the cell itself) may be counted more than once.
        """
        self._check_bounds(row, col)
        count = 0
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue

                neighbor_row = (row + delta_row) % self._height
                neighbor_col = (col + delta_col) % self._width
                count += int(self._front[neighbor_row * self._width + neighbor_col])

        return count

    def count_all_neighbors(self) -> np.ndarray:
        """Neighbour counts for every cell of the current generation.

        Returns:
            (height, width) int8 array
        """
        grid = torch.from_numpy(self._front.reshape(self._height, self._width).astype(np.float32))
        padded = F.pad(grid.unsqueeze(0).unsqueeze(0), (1, 1, 1, 1), mode="circular")
        neighbors = F.conv2d(padded, self._kernel)
        return neighbors[0, 0].numpy().astype(np.int8)

    def tick(self) -> None:
        """Advance the universe by exactly one generation.

        Every cell is evaluated against the pre-tick snapshot:
        live cells with 2 or 3 live neighbours survive, dead cells with
        exactly 3 become alive, everything else is dead.
        """
        neighbor_counts = self.count_all_neighbors()
        current = self._front.reshape(self._height, self._width)
        alive = current == ALIVE

        survive = alive & ((neighbor_counts == 2) | (neighbor_counts == 3))
        birth = ~alive & (neighbor_counts == 3)

        self._back.reshape(self._height, self._width)[...] = survive | birth

        self._front, self._back = self._back, self._front
        self._generation += 1

    def render(self) -> str:
        """Text rendering: one line per row, ◼ for alive and ◻ for dead."""
        lines = []
        for row in self._front.reshape(self._height, self._width):
            lines.append("".join("◼" if cell else "◻" for cell in row) + "\n")
        return "".join(lines)

    def _check_bounds(self, row: int, col: int) -> None:
        if not (_is_coordinate(row) and _is_coordinate(col)):
            raise IndexOutOfBounds(row, col, self._width, self._height)
        if not (0 <= row < self._height and 0 <= col < self._width):
            raise IndexOutOfBounds(row, col, self._width, self._height)

    def __eq__(self, other: object) -> bool:
        """Universes are equal when their dimensions and cells match."""
        if not isinstance(other, Universe):
            return False
        return self.shape == other.shape and np.array_equal(self._front, other._front)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (
            f"Universe(width={self._width}, height={self._height}, "
            f"generation={self._generation}, population={self.population})"
        )
