"""Core simulation logic."""

from .errors import LifeError, ConfigurationError, InputOutputError
from .world import World, Coordinate, resolve_axis
from .rules import RuleSet
from .liveset import LiveSet
from .engine import TickEngine, DenseTickEngine, create_engine
from .simulation import Simulation
from .serializer import write_life106, format_life106, TickWriter
from .seed import read_seed, read_seed_file
from .patterns import Pattern, PatternLibrary

__all__ = [
    "LifeError",
    "ConfigurationError",
    "InputOutputError",
    "World",
    "Coordinate",
    "resolve_axis",
    "RuleSet",
    "LiveSet",
    "TickEngine",
    "DenseTickEngine",
    "create_engine",
    "Simulation",
    "write_life106",
    "format_life106",
    "TickWriter",
    "read_seed",
    "read_seed_file",
    "Pattern",
    "PatternLibrary",
]
