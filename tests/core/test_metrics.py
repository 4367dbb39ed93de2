"""Tests for metrics collection."""

import json

import numpy as np
import pytest

from sparselife.core.errors import InputOutputError
from sparselife.core.metrics import MetricsCollector, NumpyEncoder, RunMetrics
from sparselife.core.rules import RuleSet
from sparselife.core.simulation import Simulation
from sparselife.core.world import World

BLINKER = [(0, 0), (1, 0), (2, 0)]


def collect(cells, ticks, world=None):
    sim = Simulation(world or World(), RuleSet(), cells)
    collector = MetricsCollector()
    collector.start(sim)
    sim.run(ticks, collector.update)
    return collector.finish()


class TestMetricsCollector:
    """Test cases for the MetricsCollector class."""

    def test_collects_every_generation(self):
        """The population history includes the seed and every tick."""
        metrics = collect(BLINKER, 4)

        assert metrics.ticks == 4
        assert metrics.population_history == [3, 3, 3, 3, 3]
        assert metrics.initial_population == 3
        assert metrics.final_population == 3
        assert metrics.rules == "B3/S23"

    def test_derived_metrics(self):
        """Test min, max, mean and standard deviation."""
        # Single cell dies after one tick
        metrics = collect([(0, 0)], 3)

        assert metrics.population_history == [1, 0, 0, 0]
        assert metrics.min_population == 0
        assert metrics.max_population == 1
        assert metrics.avg_population == pytest.approx(0.25)
        assert metrics.population_std_dev == pytest.approx(np.std([1, 0, 0, 0]))
        assert metrics.bounding_box is None

    def test_bounding_box_and_tracked_cells(self):
        """Test spatial metrics follow the final generation."""
        metrics = collect(BLINKER, 1)

        assert metrics.bounding_box == (1, -1, 1, 1)
        assert metrics.max_tracked_cells == 15

    def test_finish_without_start(self):
        """Test finishing an unstarted collector."""
        assert MetricsCollector().finish() is None

    def test_to_json(self, tmp_path):
        """Test metrics export."""
        metrics = collect(BLINKER, 2)
        path = tmp_path / "metrics.json"

        MetricsCollector.to_json(metrics, path)

        data = json.loads(path.read_text())
        assert data["run"]["ticks"] == 2
        assert data["run"]["population_history"] == [3, 3, 3]
        assert "export_time" in data["metadata"]

    def test_to_json_unwritable(self, tmp_path):
        """Test an unwritable metrics path is an input/output error."""
        metrics = RunMetrics(world="w", rules="B3/S23")
        with pytest.raises(InputOutputError):
            MetricsCollector.to_json(metrics, tmp_path / "missing" / "metrics.json")


class TestNumpyEncoder:
    """Test cases for the NumpyEncoder class."""

    def test_numpy_types(self):
        """Test numpy scalars and arrays are encoded."""
        data = {"a": np.int64(3), "b": np.float32(0.5), "c": np.array([1, 2]), "d": np.bool_(True)}
        assert json.loads(json.dumps(data, cls=NumpyEncoder)) == {"a": 3, "b": 0.5, "c": [1, 2], "d": True}
