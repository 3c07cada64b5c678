"""Host-facing interfaces for the grid engine."""

from . import host
from .cli import CLILifeGrid

__all__ = ["host", "CLILifeGrid"]
