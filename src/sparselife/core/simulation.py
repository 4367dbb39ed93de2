"""Sequential driver for a run of generations."""

from typing import Callable, Iterable, List, Optional

from .engine import TickEngine
from .errors import ConfigurationError
from .liveset import LiveSet
from .rules import RuleSet
from .world import Coordinate, World

GenerationCallback = Callable[[int, LiveSet], None]


class Simulation:
    """Game of Life simulation over a sparse live set.

    Generation 0 is the seed. Each step replaces the current live set with
    a new one; no history is kept beyond the population counts.
    """

    def __init__(
        self,
        world: World,
        rules: RuleSet,
        seed_cells: Iterable[Coordinate] = (),
        engine=None,
    ) -> None:
        """Initialize the simulation.

        Args:
            world: World the simulation runs in
            rules: Birth and survival rules
            seed_cells: Live coordinates of generation 0
            engine: Tick engine to use (defaults to a sequential TickEngine)

        Raises:
            IndexError: If a seed cell lies outside the world
        """
        self.world = world
        self.rules = rules
        self.engine = engine or TickEngine(world, rules)
        self._cells = LiveSet.from_cells(world, seed_cells)
        self._generation = 0
        self._population_history: List[int] = [self._cells.population]

    @property
    def generation(self) -> int:
        """Current tick index."""
        return self._generation

    @property
    def cells(self) -> LiveSet:
        """Live set of the current generation."""
        return self._cells

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self._cells.population

    @property
    def population_history(self) -> List[int]:
        """Population of every generation so far, starting with the seed."""
        return list(self._population_history)

    def step(self) -> LiveSet:
        """Advance the simulation by one generation."""
        self._cells = self.engine.step(self._cells)
        self._generation += 1
        self._population_history.append(self._cells.population)
        return self._cells

    def run(self, ticks: int, on_generation: Optional[GenerationCallback] = None) -> LiveSet:
        """Run a number of ticks.

        Args:
            ticks: Number of ticks to run; 0 leaves the seed unchanged
            on_generation: Called with (tick, cells) for the current
                generation and after every tick, before the next one starts

        Returns:
            Live set of the final generation
        """
        if ticks < 0:
            raise ConfigurationError(f"Number of ticks must not be negative: {ticks}")

        if on_generation:
            on_generation(self._generation, self._cells)

        for _ in range(ticks):
            self.step()
            if on_generation:
                on_generation(self._generation, self._cells)

        return self._cells
