"""Birth and survival rules."""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable

from .errors import ConfigurationError
from .world import parse_integer


def validate_counts(counts: Iterable[int], label: str) -> FrozenSet[int]:
    result = frozenset(counts)
    for count in result:
        if isinstance(count, bool) or not isinstance(count, int):
            raise ConfigurationError(f"{label} neighbor count {count!r} is not an integer")
        if count < 1:
            raise ConfigurationError(f"{label} neighbor count {count} must be greater than 0")
    return result


def parse_counts(text: str, label: str) -> FrozenSet[int]:
    """Parse a comma separated list of neighbor counts.

    Args:
        text: String such as "2, 3"
        label: Name used in error messages

    Returns:
        Frozen set of positive integers

    Raises:
        ConfigurationError: If an entry is not a positive integer
    """
    counts = []
    for part in text.split(","):
        try:
            counts.append(parse_integer(part))
        except ValueError:
            raise ConfigurationError(f"Unable to parse integer from {label} string '{part}'") from None
    return validate_counts(counts, label)


@dataclass(frozen=True)
class RuleSet:
    """Neighbor counts that create and keep life.

    The defaults are Conway's B3/S23.
    """

    birth: FrozenSet[int] = field(default_factory=lambda: frozenset({3}))
    survive: FrozenSet[int] = field(default_factory=lambda: frozenset({2, 3}))

    def __post_init__(self) -> None:
        # Frozen dataclass: assign the normalized sets through object.__setattr__
        object.__setattr__(self, "birth", validate_counts(self.birth, "Birth"))
        object.__setattr__(self, "survive", validate_counts(self.survive, "Survival"))

    def next_state(self, alive: bool, count: int) -> bool:
        """Decide whether a cell is alive in the next generation."""
        if alive:
            return count in self.survive
        return count in self.birth

    @property
    def notation(self) -> str:
        """Rule in B/S notation, e.g. "B3/S23"."""
        birth = "".join(str(n) for n in sorted(self.birth))
        survive = "".join(str(n) for n in sorted(self.survive))
        return f"B{birth}/S{survive}"
