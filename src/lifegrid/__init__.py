"""Deterministic toroidal Conway's Game of Life engine."""

__version__ = "0.1.0"

from .core.errors import LifeGridError, InvalidDimensions, IndexOutOfBounds
from .core.seeding import SeedPolicy, RandomSeed, ExplicitSeed
from .core.universe import Universe
from .core.patterns import Pattern, PatternLibrary
from .core.simulation import Simulation

__all__ = [
    "LifeGridError",
    "InvalidDimensions",
    "IndexOutOfBounds",
    "SeedPolicy",
    "RandomSeed",
    "ExplicitSeed",
    "Universe",
    "Pattern",
    "PatternLibrary",
    "Simulation",
]
