"""Sparse storage of live cells and their dead halo."""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .world import Coordinate, World


class LiveSet:
    """Sparse set of live cells for one generation.

    Every coordinate has one of three states: alive, tracked-dead or
    absent. Tracked-dead entries are the dead neighbors of live cells; they
    are kept so that the next tick only needs to look at coordinates that
    have an entry. Each alive coordinate's existing neighbors always have an
    entry.
    """

    def __init__(self, world: World) -> None:
        """Initialize an empty live set.

        Args:
            world: World the coordinates belong to
        """
        self.world = world
        self._cells: Dict[Coordinate, bool] = {}
        self._population = 0
        self._frozen = False

    @classmethod
    def from_cells(cls, world: World, cells: Iterable[Coordinate]) -> "LiveSet":
        """Create a frozen live set from a collection of live coordinates."""
        live_set = cls(world)
        for coord in cells:
            live_set.insert_live(coord)
        live_set.freeze()
        return live_set

    @property
    def frozen(self) -> bool:
        """Whether the live set has been published and can no longer change."""
        return self._frozen

    def freeze(self) -> None:
        """Make the live set read-only."""
        self._frozen = True

    def insert_live(self, coord: Coordinate) -> None:
        """Mark a coordinate alive and stub its missing neighbors as dead.

        Args:
            coord: Coordinate inside the world

        Raises:
            RuntimeError: If the live set is frozen
            IndexError: If the coordinate lies outside the world
        """
        if self._frozen:
            raise RuntimeError("Cannot modify a frozen live set")

        if not self.world.contains(coord):
            raise IndexError(f"Coordinates {coord} out of bounds for world {self.world.describe()}")

        if self._cells.get(coord):
            return

        for neighbor in self.world.neighbors(coord):
            self._cells.setdefault(neighbor, False)

        self._cells[coord] = True
        self._population += 1

    def is_alive(self, coord: Coordinate) -> bool:
        """Get the state of a coordinate without creating an entry."""
        return self._cells.get(coord, False)

    def candidates(self) -> List[Coordinate]:
        """Get every coordinate with an entry, alive or tracked-dead.

        These are the only coordinates whose state can change in the next
        tick.
        """
        return list(self._cells)

    def alive_coordinates(self) -> List[Coordinate]:
        """Get the live coordinates sorted by x, then y."""
        return sorted(coord for coord, alive in self._cells.items() if alive)

    @property
    def population(self) -> int:
        """Number of live cells."""
        return self._population

    @property
    def tracked_dead(self) -> int:
        """Number of tracked-dead entries."""
        return len(self._cells) - self._population

    def bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if nothing is alive
        """
        alive = [coord for coord, state in self._cells.items() if state]
        if not alive:
            return None

        xs = [x for x, _ in alive]
        ys = [y for _, y in alive]
        return (min(xs), min(ys), max(xs), max(ys))

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, coord: object) -> bool:
        return bool(self._cells.get(coord))

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self.alive_coordinates())

    def __eq__(self, other: object) -> bool:
        """Two live sets are equal when they hold the same live cells in the same world."""
        if not isinstance(other, LiveSet):
            return NotImplemented
        return self.world == other.world and self.alive_coordinates() == other.alive_coordinates()

    __hash__ = None

    def __repr__(self) -> str:
        return f"LiveSet(population={self._population}, entries={len(self._cells)})"
