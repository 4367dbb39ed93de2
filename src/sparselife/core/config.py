"""Run configuration assembled from defaults, a configuration file and CLI flags."""

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from .engine import BACKENDS
from .errors import ConfigurationError
from .rules import RuleSet, validate_counts, parse_counts
from .world import World, parse_integer

DEFAULT_TICKS = 10

CONFIG_FILE_KEYS = {
    "input_file",
    "output_file",
    "output_directory",
    "ticks",
    "disable_wraparound",
    "world_dimensions",
    "new_life_spawn",
    "existing_life_remain",
}


@dataclass(frozen=True)
class SimulationConfig:
    """Everything needed to run a simulation, validated once."""

    input_file: Optional[str] = None
    output_file: Optional[str] = None
    output_directory: Optional[str] = None
    ticks: int = DEFAULT_TICKS
    world: World = field(default_factory=World)
    rules: RuleSet = field(default_factory=RuleSet)
    backend: str = "sparse"
    workers: int = 1
    device: str = "cpu"

    def __post_init__(self) -> None:
        if isinstance(self.ticks, bool) or not isinstance(self.ticks, int) or self.ticks < 1:
            raise ConfigurationError(f"Number of ticks must be greater than 0: {self.ticks}")

        if self.backend not in BACKENDS:
            raise ConfigurationError(f"Unknown backend '{self.backend}'. Available: {', '.join(BACKENDS)}")

        if self.workers < 1:
            raise ConfigurationError(f"Number of workers must be positive: {self.workers}")


def parse_dimensions(text: str) -> Tuple[int, int, int, int]:
    """Parse world dimensions in "min-x:max-x;min-y:max-y" format.

    Returns:
        Tuple of (min_x, max_x, min_y, max_y)

    Raises:
        ConfigurationError: If the string is malformed
    """
    parts = text.split(";")
    if len(parts) != 2:
        raise ConfigurationError(f"Incorrect number of dimensions in world: {len(parts)}")

    bounds = []
    for axis, part in zip("XY", parts):
        directions = part.split(":")
        if len(directions) != 2:
            raise ConfigurationError(f"Incorrect number of directions in {axis} dimension: {len(directions)}")

        for label, value in zip(("minimum", "maximum"), directions):
            try:
                bounds.append(parse_integer(value))
            except ValueError:
                raise ConfigurationError(f"Unable to parse world {axis} dimension {label} '{value}'") from None

    min_x, max_x, min_y, max_y = bounds
    return (min_x, max_x, min_y, max_y)


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a JSON configuration file.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid JSON or
            contains unknown keys
    """
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Error reading configuration file {path}: {e}") from e
    except ValueError as e:
        raise ConfigurationError(f"Error decoding configuration file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a JSON object")

    unknown = set(data) - CONFIG_FILE_KEYS
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys in {path}: {', '.join(sorted(unknown))}")

    return data


def _dimensions_from_file(dimensions: Any) -> Tuple[int, int, int, int]:
    try:
        bounds = (
            dimensions["x"]["minimum"],
            dimensions["x"]["maximum"],
            dimensions["y"]["minimum"],
            dimensions["y"]["maximum"],
        )
    except (KeyError, TypeError):
        raise ConfigurationError(
            "world_dimensions must define x and y, each with a minimum and a maximum"
        ) from None

    for value in bounds:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"World dimension {value!r} is not an integer")

    return bounds


def _apply_file(settings: Dict[str, Any], data: Dict[str, Any]) -> None:
    for key in ("input_file", "output_file", "output_directory"):
        if data.get(key):
            settings[key] = str(data[key])

    ticks = data.get("ticks")
    # A zero tick count in the file leaves the default in place
    if ticks is not None and (isinstance(ticks, bool) or ticks != 0):
        settings["ticks"] = ticks

    disable_wraparound = data.get("disable_wraparound")
    if disable_wraparound is not None:
        if not isinstance(disable_wraparound, bool):
            raise ConfigurationError(f"disable_wraparound must be true or false, got {disable_wraparound!r}")
        if disable_wraparound:
            settings["wraparound"] = False

    if data.get("world_dimensions") is not None:
        settings["bounds"] = _dimensions_from_file(data["world_dimensions"])

    if data.get("new_life_spawn"):
        settings["birth"] = _counts_from_file(data["new_life_spawn"], "new_life_spawn")

    if data.get("existing_life_remain"):
        settings["survive"] = _counts_from_file(data["existing_life_remain"], "existing_life_remain")


def _counts_from_file(value: Any, label: str):
    if not isinstance(value, list):
        raise ConfigurationError(f"{label} must be a list of integers")
    for count in value:
        if isinstance(count, bool) or not isinstance(count, int):
            raise ConfigurationError(f"{label} neighbor count {count!r} is not an integer")
    return validate_counts(value, label)


def _apply_args(settings: Dict[str, Any], args: Any) -> None:
    for key, attr in (("input_file", "input"), ("output_file", "output"), ("output_directory", "outdir")):
        value = getattr(args, attr, None)
        if value:
            settings[key] = value

    if getattr(args, "ticks", None) is not None:
        settings["ticks"] = args.ticks

    if getattr(args, "nowrap", False):
        settings["wraparound"] = False

    if getattr(args, "world", None):
        settings["bounds"] = parse_dimensions(args.world)

    if getattr(args, "newlife", None):
        settings["birth"] = parse_counts(args.newlife, "newlife")

    if getattr(args, "exlife", None):
        settings["survive"] = parse_counts(args.exlife, "exlife")

    for key in ("backend", "workers", "device"):
        value = getattr(args, key, None)
        if value is not None:
            settings[key] = value


def build_config(args: Any) -> SimulationConfig:
    """Build the run configuration from parsed command-line arguments.

    Values come from the defaults, then the configuration file named by
    ``args.configuration`` (if any), then the command-line flags; later
    sources win.

    Args:
        args: argparse namespace (missing attributes are treated as unset)

    Returns:
        Validated SimulationConfig

    Raises:
        ConfigurationError: If any value is invalid
    """
    defaults = World()
    settings: Dict[str, Any] = {
        "bounds": (defaults.min_x, defaults.max_x, defaults.min_y, defaults.max_y),
        "wraparound": True,
    }

    config_path = getattr(args, "configuration", None)
    if config_path:
        _apply_file(settings, load_config_file(config_path))

    _apply_args(settings, args)

    min_x, max_x, min_y, max_y = settings.pop("bounds")
    world = World(min_x, max_x, min_y, max_y, wraparound=settings.pop("wraparound"))

    rules = RuleSet()
    if "birth" in settings:
        rules = replace(rules, birth=settings.pop("birth"))
    if "survive" in settings:
        rules = replace(rules, survive=settings.pop("survive"))

    return SimulationConfig(world=world, rules=rules, **settings)
