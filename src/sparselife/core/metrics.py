"""Metrics collection for simulation runs."""

import json
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np

from .errors import InputOutputError
from .liveset import LiveSet


@dataclass
class RunMetrics:
    """Metrics for a single simulation run."""

    # Run configuration
    world: str
    rules: str
    ticks: int = 0
    start_time: float = 0.0
    end_time: float = 0.0
    duration: float = 0.0

    # Population dynamics
    initial_population: int = 0
    final_population: int = 0
    population_history: List[int] = field(default_factory=list)
    min_population: int = 0
    max_population: int = 0
    avg_population: float = 0.0
    population_std_dev: float = 0.0

    # Spatial metrics
    bounding_box: Optional[Tuple[int, int, int, int]] = None
    max_tracked_cells: int = 0

    # Performance metrics
    ticks_per_second: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary."""
        return asdict(self)

    def calculate_derived_metrics(self) -> None:
        """Calculate derived metrics from collected data."""
        if self.population_history:
            history = np.array(self.population_history, dtype=np.int64)
            self.min_population = int(history.min())
            self.max_population = int(history.max())
            self.avg_population = float(np.mean(history))
            self.population_std_dev = float(np.std(history))


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types."""

    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        elif isinstance(obj, np.bool_):
            return bool(obj)
        return super().default(obj)


class MetricsCollector:
    """Collects metrics while a simulation runs.

    Pass ``update`` as the simulation's per-generation callback (or call it
    from one).
    """

    def __init__(self) -> None:
        self.current_metrics: Optional[RunMetrics] = None

    def start(self, simulation) -> RunMetrics:
        """Start collecting metrics for a simulation."""
        self.current_metrics = RunMetrics(
            world=simulation.world.describe(),
            rules=simulation.rules.notation,
            start_time=time.time(),
            initial_population=simulation.population,
        )
        return self.current_metrics

    def update(self, tick: int, cells: LiveSet) -> None:
        """Record one generation."""
        if not self.current_metrics:
            return

        self.current_metrics.ticks = tick
        self.current_metrics.population_history.append(cells.population)
        self.current_metrics.bounding_box = cells.bounding_box()
        self.current_metrics.max_tracked_cells = max(self.current_metrics.max_tracked_cells, len(cells))

    def finish(self) -> Optional[RunMetrics]:
        """Finalize metrics for the current run."""
        metrics = self.current_metrics
        if not metrics:
            return None

        metrics.end_time = time.time()
        metrics.duration = metrics.end_time - metrics.start_time
        if metrics.population_history:
            metrics.final_population = metrics.population_history[-1]
        if metrics.duration > 0:
            metrics.ticks_per_second = metrics.ticks / metrics.duration

        metrics.calculate_derived_metrics()
        return metrics

    @staticmethod
    def to_json(metrics: RunMetrics, filepath: Union[str, Path]) -> None:
        """Export metrics to a JSON file."""
        data = {
            "run": metrics.to_dict(),
            "metadata": {
                "export_time": datetime.now().isoformat(),
            },
        }

        try:
            with open(filepath, "w") as f:
                json.dump(data, f, indent=2, cls=NumpyEncoder)
        except OSError as e:
            raise InputOutputError(f"Error writing metrics file {filepath}: {e}") from e
