"""Frontend interfaces for the simulation."""

from .cli import CLIGameOfLife

__all__ = ["CLIGameOfLife"]
