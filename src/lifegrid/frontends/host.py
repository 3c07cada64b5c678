"""Host-facing boundary for embedding a universe in a render loop.

These functions are thin pass-throughs over :class:`Universe`. The host owns
the universe value and passes it to every call; nothing here keeps a default
or global instance.

The cell buffer returned by :func:`cells_ptr` is the engine's own storage,
one byte per cell in row-major order (``index = row * width + col``), with
0 for dead and 1 for alive. It is read-only and must be fetched again after
every :func:`tick`.
"""

from typing import Optional

from ..core.seeding import SeedPolicy
from ..core.universe import Universe


def construct(width: int, height: int, seed_policy: Optional[SeedPolicy] = None) -> Universe:
    """Create a universe; raises InvalidDimensions for a zero-sized grid."""
    return Universe(width, height, seed_policy)


def tick(universe: Universe) -> None:
    universe.tick()


def width(universe: Universe) -> int:
    return universe.width


def height(universe: Universe) -> int:
    return universe.height


def cells_ptr(universe: Universe) -> memoryview:
    """Zero-copy, read-only view over the current generation."""
    return memoryview(universe.cells)


def toggle_cell(universe: Universe, row: int, col: int) -> None:
    universe.toggle_cell(row, col)


def set_cell(universe: Universe, row: int, col: int, alive: bool) -> None:
    universe.set_cell(row, col, alive)
