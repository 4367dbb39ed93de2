"""Exceptions raised by the simulation package."""


class LifeError(Exception):
    """Base class for all sparselife errors."""


class ConfigurationError(LifeError, ValueError):
    """Invalid world bounds, rule sets, tick counts or configuration files."""


class InputOutputError(LifeError, OSError):
    """Malformed seed input or an input/output resource that cannot be used."""
