"""Core cellular automaton logic."""

from .errors import LifeGridError, InvalidDimensions, IndexOutOfBounds
from .seeding import SeedPolicy, RandomSeed, ExplicitSeed
from .universe import Universe
from .patterns import Pattern, PatternLibrary
from .simulation import Simulation

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
