"""Built-in seed patterns for the --pattern option."""

from typing import Any, Dict, List, Optional, Tuple

from .world import Coordinate

# Category name -> (pattern name, cells, description)
BUILTIN_PATTERNS: Dict[str, List[Tuple[str, List[Coordinate], str]]] = {
    "Still Life": [
        ("Block", [(0, 0), (0, 1), (1, 0), (1, 1)], "2x2 still life block"),
        ("Beehive", [(1, 0), (2, 0), (0, 1), (3, 1), (1, 2), (2, 2)], "Beehive still life"),
        ("Loaf", [(1, 0), (2, 0), (0, 1), (3, 1), (1, 2), (3, 2), (2, 3)], "Loaf still life"),
    ],
    "Oscillators": [
        ("Blinker", [(0, 1), (1, 1), (2, 1)], "Period-2 oscillator"),
        ("Toad", [(1, 0), (2, 0), (3, 0), (0, 1), (1, 1), (2, 1)], "Period-2 oscillator"),
        ("Beacon", [(0, 0), (1, 0), (0, 1), (3, 2), (2, 3), (3, 3)], "Period-2 oscillator"),
    ],
    "Spaceships": [
        ("Glider", [(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)], "Smallest spaceship, moves (+1, +1) every 4 ticks"),
    ],
    "Methuselahs": [
        ("R-pentomino", [(1, 0), (2, 0), (0, 1), (1, 1), (1, 2)], "Stabilizes after 1103 generations"),
    ],
}

CUSTOM_CATEGORY = "Custom"


class Pattern:
    """A named set of live cells placed relative to (0, 0)."""

    def __init__(self, name: str, cells: List[Coordinate], description: str = "") -> None:
        self.name = name
        self.cells = cells
        self.description = description

    def translated(self, offset_x: int = 0, offset_y: int = 0) -> List[Coordinate]:
        """Get the pattern's cells shifted by an offset.

        Args:
            offset_x: Horizontal offset
            offset_y: Vertical offset

        Returns:
            List of shifted coordinates, in the pattern's own order
        """
        return [(x + offset_x, y + offset_y) for x, y in self.cells]

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get (min_x, min_y, max_x, max_y) of the cells; all zero when empty."""
        if not self.cells:
            return (0, 0, 0, 0)

        xs = [x for x, _ in self.cells]
        ys = [y for _, y in self.cells]
        return (min(xs), min(ys), max(xs), max(ys))

    def get_size(self) -> Tuple[int, int]:
        """Get (width, height) of the bounding box."""
        min_x, min_y, max_x, max_y = self.get_bounding_box()
        return (max_x - min_x + 1, max_y - min_y + 1)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "cells": [list(cell) for cell in self.cells], "description": self.description}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pattern":
        """Create a pattern from a dict such as the one returned by to_dict."""
        cells = [(int(x), int(y)) for x, y in data["cells"]]
        return cls(data["name"], cells, data.get("description", ""))


class PatternLibrary:
    """Named patterns that can seed a simulation."""

    def __init__(self) -> None:
        self._patterns: Dict[str, Pattern] = {}
        self._categories: Dict[str, List[str]] = {}

        for category, entries in BUILTIN_PATTERNS.items():
            for name, cells, description in entries:
                self.add_pattern(Pattern(name, cells, description), category)

    def add_pattern(self, pattern: Pattern, category: str = CUSTOM_CATEGORY) -> None:
        """Add a pattern, replacing any pattern with the same name."""
        if pattern.name in self._patterns:
            for names in self._categories.values():
                if pattern.name in names:
                    names.remove(pattern.name)

        self._patterns[pattern.name] = pattern
        self._categories.setdefault(category, []).append(pattern.name)

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Look up a pattern by name, ignoring case.

        Returns:
            Pattern instance or None if not found
        """
        pattern = self._patterns.get(name)
        if pattern is not None:
            return pattern

        wanted = name.lower()
        return next((p for key, p in self._patterns.items() if key.lower() == wanted), None)

    def list_patterns(self) -> List[str]:
        """Get all pattern names in insertion order."""
        return list(self._patterns)

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Get pattern names grouped by category; empty categories are left out."""
        return {category: list(names) for category, names in self._categories.items() if names}
