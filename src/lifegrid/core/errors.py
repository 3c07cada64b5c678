"""Exceptions raised by the grid engine."""


class LifeGridError(Exception):
    """Base class for all lifegrid errors."""


class InvalidDimensions(LifeGridError, ValueError):
    """Raised when a universe is constructed with a zero or negative size."""

    def __init__(self, width: object, height: object) -> None:
        self.width = width
        self.height = height
        super().__init__(f"Invalid universe dimensions {width}x{height}: both must be positive integers")


class IndexOutOfBounds(LifeGridError, IndexError):
    """Raised when a cell accessor is called outside the grid.

    Host-facing coordinates are never wrapped or clamped; only the internal
    neighbour lookup of ``tick`` is toroidal.
    """

    def __init__(self, row: int, col: int, width: int, height: int) -> None:
        self.row = row
        self.col = col
        self.width = width
        self.height = height
        super().__init__(f"Cell ({row}, {col}) out of bounds for {height} rows x {width} columns")
