"""World extent and neighbor resolution on the 64-bit integer plane."""

import re
from dataclasses import dataclass
from typing import List, NamedTuple, Tuple

from .errors import ConfigurationError

Coordinate = Tuple[int, int]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+\Z")


def parse_integer(text: str) -> int:
    """Parse a base-10 integer with an optional sign and surrounding whitespace.

    Unlike int(), underscores and non-ASCII digits are rejected.

    Raises:
        ValueError: If the text is not a plain decimal integer
    """
    stripped = text.strip()
    if not _INTEGER.match(stripped):
        raise ValueError(f"invalid integer: '{text}'")
    return int(stripped)


class AxisNeighbors(NamedTuple):
    """Neighbors of a single coordinate along one axis."""

    lower: int
    upper: int
    lower_exists: bool
    upper_exists: bool


def resolve_axis(coord: int, lower_bound: int, upper_bound: int, wraparound: bool) -> AxisNeighbors:
    """Resolve the lower and upper neighbor of a coordinate on one axis.

    Args:
        coord: Coordinate on the axis
        lower_bound: Smallest coordinate of the world on this axis
        upper_bound: Largest coordinate of the world on this axis
        wraparound: Whether the axis wraps around at its edges

    Returns:
        AxisNeighbors; a neighbor that falls off a hard edge is flagged as
        not existing and its value is meaningless
    """
    lower, lower_exists = coord - 1, True
    upper, upper_exists = coord + 1, True

    if coord == lower_bound:
        if wraparound:
            lower = upper_bound
        else:
            lower, lower_exists = coord, False

    if coord == upper_bound:
        if wraparound:
            upper = lower_bound
        else:
            upper, upper_exists = coord, False

    return AxisNeighbors(lower, upper, lower_exists, upper_exists)


def _axis_offsets(coord: int, resolved: AxisNeighbors) -> List[int]:
    values = [coord]
    if resolved.lower_exists:
        values.append(resolved.lower)
    if resolved.upper_exists:
        values.append(resolved.upper)
    return values


@dataclass(frozen=True)
class World:
    """Addressable extent of the simulation.

    Bounds are inclusive. Both axes must span at least two coordinates;
    this is checked once here and relied upon everywhere else.
    """

    min_x: int = INT64_MIN
    max_x: int = INT64_MAX
    min_y: int = INT64_MIN
    max_y: int = INT64_MAX
    wraparound: bool = True

    def __post_init__(self) -> None:
        for name in ("min_x", "max_x", "min_y", "max_y"):
            value = getattr(self, name)
            if not INT64_MIN <= value <= INT64_MAX:
                raise ConfigurationError(f"World bound {name}={value} is outside the signed 64-bit range")

        if self.min_x >= self.max_x:
            raise ConfigurationError(
                f"World X dimension minimum {self.min_x} must be less than world X dimension maximum {self.max_x}"
            )

        if self.min_y >= self.max_y:
            raise ConfigurationError(
                f"World Y dimension minimum {self.min_y} must be less than world Y dimension maximum {self.max_y}"
            )

    @property
    def width(self) -> int:
        """Number of columns in the world."""
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        """Number of rows in the world."""
        return self.max_y - self.min_y + 1

    def contains(self, coord: Coordinate) -> bool:
        """Check whether a coordinate lies within the world's inclusive bounds."""
        x, y = coord
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def neighbors(self, coord: Coordinate) -> Tuple[Coordinate, ...]:
        """Get the existing neighbors of a coordinate.

        Each axis is resolved independently and the results are combined.
        Neighbors beyond a hard edge are left out entirely. On a two-wide
        wrapping axis the lower and upper neighbor are the same cell, which
        is returned only once.

        Args:
            coord: Coordinate inside the world

        Returns:
            Tuple of up to 8 distinct neighbor coordinates
        """
        x, y = coord
        xs = _axis_offsets(x, resolve_axis(x, self.min_x, self.max_x, self.wraparound))
        ys = _axis_offsets(y, resolve_axis(y, self.min_y, self.max_y, self.wraparound))

        result = []
        seen = {coord}
        for nx in xs:
            for ny in ys:
                neighbor = (nx, ny)
                if neighbor not in seen:
                    seen.add(neighbor)
                    result.append(neighbor)

        return tuple(result)

    def describe(self) -> str:
        """Human readable summary of the world."""
        wrap = "on" if self.wraparound else "off"
        return f"x[{self.min_x}:{self.max_x}] y[{self.min_y}:{self.max_y}] wraparound={wrap}"
