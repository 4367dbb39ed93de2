"""Sparse Game of Life simulation on the 64-bit integer plane."""

__version__ = "0.1.0"

from .core.world import World
from .core.rules import RuleSet
from .core.liveset import LiveSet
from .core.simulation import Simulation
from .core.patterns import Pattern, PatternLibrary

__all__ = ["World", "RuleSet", "LiveSet", "Simulation", "Pattern", "PatternLibrary"]
