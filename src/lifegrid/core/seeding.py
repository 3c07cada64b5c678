"""Seed policies used to populate a universe at construction time."""

import logging
from typing import Callable, Iterable, List, Optional, Tuple

import numpy as np

from .errors import IndexOutOfBounds

logger = logging.getLogger(__name__)

EntropySource = Callable[[], bool]


class SeedPolicy:
    """Fills the initial generation of a universe."""

    def populate(self, buffer: np.ndarray, width: int, height: int) -> None:
        """Write the initial cell states into ``buffer``.

        Args:
            buffer: Flat uint8 buffer of length ``width * height``, row-major
            width: Number of columns
            height: Number of rows
        """
        raise NotImplementedError


class RandomSeed(SeedPolicy):
    """Each cell is independently alive with a fixed probability.

    The entropy source is injected: ``source`` is a zero-argument callable
    returning a boolean draw and is called once per cell in row-major order.
    When no source is given, draws come from a numpy generator built from
    ``seed``, so the same seed always produces the same initial grid.
    """

    def __init__(
        self,
        probability: float = 0.5,
        source: Optional[EntropySource] = None,
        seed: Optional[int] = None,
    ) -> None:
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"Probability must be between 0.0 and 1.0, got {probability}")
        self.probability = probability
        self.source = source
        self.seed = seed

    def populate(self, buffer: np.ndarray, width: int, height: int) -> None:
        size = width * height
        if self.source is not None:
            for index in range(size):
                buffer[index] = 1 if self.source() else 0
        else:
            rng = np.random.default_rng(self.seed)
            buffer[:] = rng.random(size) < self.probability

        logger.debug(
            "Random seed populated %d of %d cells (probability %.2f)",
            int(np.count_nonzero(buffer)),
            size,
            self.probability,
        )

    def __repr__(self) -> str:
        return f"RandomSeed(probability={self.probability!r}, seed={self.seed!r})"


class ExplicitSeed(SeedPolicy):
    """The caller supplies every live cell as a ``(row, col)`` pair."""

    def __init__(self, live_cells: Iterable[Tuple[int, int]] = ()) -> None:
        self.live_cells: List[Tuple[int, int]] = [(int(row), int(col)) for row, col in live_cells]

    def populate(self, buffer: np.ndarray, width: int, height: int) -> None:
        # Validate everything first so a bad coordinate leaves no partial state
        for row, col in self.live_cells:
            if not (0 <= row < height and 0 <= col < width):
                raise IndexOutOfBounds(row, col, width, height)

        buffer.fill(0)
        for row, col in self.live_cells:
            buffer[row * width + col] = 1

    def __repr__(self) -> str:
        return f"ExplicitSeed({self.live_cells!r})"
