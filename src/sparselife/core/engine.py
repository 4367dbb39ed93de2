"""Generation transition engines."""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence

import numpy as np
import torch
import torch.nn.functional as F

from .errors import ConfigurationError
from .liveset import LiveSet
from .rules import RuleSet
from .world import Coordinate, World

# Largest world the dense backend will rasterise
DENSE_MAX_CELLS = 1 << 24

BACKENDS = ("sparse", "dense")


class TickEngine:
    """Sparse tick engine.

    Only coordinates with an entry in the current live set are evaluated,
    so the work per tick is proportional to the live cells and their halo
    rather than to the size of the world.
    """

    def __init__(self, world: World, rules: RuleSet, workers: int = 1, parallel_threshold: int = 4096) -> None:
        """Initialize the engine.

        Args:
            world: World the generations live in
            rules: Birth and survival rules
            workers: Number of threads for the decide step (1 = sequential)
            parallel_threshold: Minimum candidate count before threads are used
        """
        if workers < 1:
            raise ConfigurationError(f"Number of workers must be positive: {workers}")

        self.world = world
        self.rules = rules
        self.workers = workers
        self.parallel_threshold = parallel_threshold

    def step(self, live_set: LiveSet) -> LiveSet:
        """Compute the next generation.

        The given live set is only read; the result is a new, frozen live set.

        Args:
            live_set: Current generation

        Returns:
            Next generation
        """
        if live_set.world != self.world:
            raise ValueError(f"Live set world {live_set.world} does not match engine world {self.world}")

        candidates = live_set.candidates()

        if self.workers > 1 and len(candidates) >= self.parallel_threshold:
            survivors = self._decide_parallel(live_set, candidates)
        else:
            survivors = self._decide(live_set, candidates)

        next_set = LiveSet(self.world)
        for coord in survivors:
            next_set.insert_live(coord)
        next_set.freeze()

        return next_set

    def count_neighbors(self, live_set: LiveSet, coord: Coordinate) -> int:
        """Count the live neighbors of a coordinate."""
        is_alive = live_set.is_alive
        return sum(1 for neighbor in self.world.neighbors(coord) if is_alive(neighbor))

    def _decide(self, live_set: LiveSet, coords: Sequence[Coordinate]) -> List[Coordinate]:
        """Return the coordinates from coords that are alive next generation."""
        is_alive = live_set.is_alive
        neighbors = self.world.neighbors
        next_state = self.rules.next_state

        result = []
        for coord in coords:
            count = 0
            for neighbor in neighbors(coord):
                if is_alive(neighbor):
                    count += 1
            if next_state(is_alive(coord), count):
                result.append(coord)

        return result

    def _decide_parallel(self, live_set: LiveSet, coords: Sequence[Coordinate]) -> List[Coordinate]:
        chunk_size = -(-len(coords) // self.workers)
        chunks = [coords[i : i + chunk_size] for i in range(0, len(coords), chunk_size)]

        result: List[Coordinate] = []
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            # map() preserves chunk order, so the merge is deterministic
            for decided in executor.map(lambda chunk: self._decide(live_set, chunk), chunks):
                result.extend(decided)

        return result


class DenseTickEngine:
    """Tensor-based tick engine for small, finite worlds.

    The live set is rasterised onto a tensor and neighbors are counted for
    every cell at once with a convolution, using circular padding for
    wraparound worlds and zero padding for hard edges.
    """

    def __init__(self, world: World, rules: RuleSet, device: str = "cpu") -> None:
        """Initialize the engine.

        Args:
            world: World the generations live in
            rules: Birth and survival rules
            device: Device to run tensor computations on ('cpu' or 'cuda')

        Raises:
            ConfigurationError: If the world is too large or too narrow to rasterise
        """
        if world.width < 3 or world.height < 3:
            raise ConfigurationError("Dense backend requires both world axes to span at least 3 cells")

        if world.width * world.height > DENSE_MAX_CELLS:
            raise ConfigurationError(
                f"World of {world.width}x{world.height} cells is too large for the dense backend "
                f"(limit {DENSE_MAX_CELLS} cells)"
            )

        if device == "cuda" and not torch.cuda.is_available():
            device = "cpu"

        self.world = world
        self.rules = rules
        self.device = torch.device(device)

        self._kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32, device=self.device)
            .unsqueeze(0)
            .unsqueeze(0)
        )
        self._birth = torch.tensor(sorted(rules.birth), dtype=torch.int64, device=self.device)
        self._survive = torch.tensor(sorted(rules.survive), dtype=torch.int64, device=self.device)

    def step(self, live_set: LiveSet) -> LiveSet:
        """Compute the next generation; see TickEngine.step."""
        if live_set.world != self.world:
            raise ValueError(f"Live set world {live_set.world} does not match engine world {self.world}")

        cells = self._rasterise(live_set)

        if self.world.wraparound:
            padded = F.pad(cells, (1, 1, 1, 1), mode="circular")
            counts = F.conv2d(padded, self._kernel)
        else:
            counts = F.conv2d(cells, self._kernel, padding=1)

        counts = counts[0, 0].round().to(torch.int64)
        alive = cells[0, 0] > 0

        next_alive = (alive & self._matches(counts, self._survive)) | (~alive & self._matches(counts, self._birth))

        ys, xs = torch.nonzero(next_alive, as_tuple=True)
        xs_np = xs.cpu().numpy()
        ys_np = ys.cpu().numpy()

        next_set = LiveSet(self.world)
        for x, y in zip(xs_np.tolist(), ys_np.tolist()):
            next_set.insert_live((x + self.world.min_x, y + self.world.min_y))
        next_set.freeze()

        return next_set

    def _rasterise(self, live_set: LiveSet) -> torch.Tensor:
        """Convert a live set to a (1, 1, height, width) float tensor."""
        cells = torch.zeros(1, 1, self.world.height, self.world.width, dtype=torch.float32, device=self.device)

        alive = live_set.alive_coordinates()
        if alive:
            xs = np.fromiter((x - self.world.min_x for x, _ in alive), dtype=np.int64, count=len(alive))
            ys = np.fromiter((y - self.world.min_y for _, y in alive), dtype=np.int64, count=len(alive))
            cells[0, 0, torch.from_numpy(ys).to(self.device), torch.from_numpy(xs).to(self.device)] = 1.0

        return cells

    @staticmethod
    def _matches(counts: torch.Tensor, allowed: torch.Tensor) -> torch.Tensor:
        if allowed.numel() == 0:
            return torch.zeros_like(counts, dtype=torch.bool)
        return torch.isin(counts, allowed)


def create_engine(
    world: World,
    rules: RuleSet,
    backend: str = "sparse",
    workers: int = 1,
    device: str = "cpu",
):
    """Create a tick engine for the given backend name.

    Args:
        world: World the generations live in
        rules: Birth and survival rules
        backend: 'sparse' or 'dense'
        workers: Thread count for the sparse backend
        device: Tensor device for the dense backend

    Returns:
        TickEngine or DenseTickEngine
    """
    if backend == "sparse":
        return TickEngine(world, rules, workers=workers)
    if backend == "dense":
        return DenseTickEngine(world, rules, device=device)
    raise ConfigurationError(f"Unknown backend '{backend}'. Available: {', '.join(BACKENDS)}")
