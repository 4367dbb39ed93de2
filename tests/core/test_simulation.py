"""Tests for the Simulation class."""

import pytest

from sparselife.core.engine import DenseTickEngine
from sparselife.core.errors import ConfigurationError
from sparselife.core.rules import RuleSet
from sparselife.core.serializer import format_life106
from sparselife.core.simulation import Simulation
from sparselife.core.world import World

GLIDER = [(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)]


class TestSimulation:
    """Test cases for the Simulation class."""

    def test_initialization(self):
        """Test simulation seeding."""
        sim = Simulation(World(), RuleSet(), [(0, 0), (1, 0), (0, 0)])

        assert sim.generation == 0
        assert sim.population == 2
        assert sim.population_history == [2]
        assert sim.cells.frozen

    def test_step(self):
        """Each step advances the generation and replaces the live set."""
        sim = Simulation(World(), RuleSet(), [(0, 0)])
        seed = sim.cells

        sim.step()

        assert sim.generation == 1
        assert sim.population == 0
        assert sim.cells is not seed
        assert seed.population == 1

    def test_run_callback_order(self):
        """The callback sees the seed and then every tick in order."""
        sim = Simulation(World(-20, 20, -20, 20), RuleSet(), GLIDER)
        seen = []

        sim.run(4, lambda tick, cells: seen.append((tick, cells.population)))

        assert seen == [(0, 5), (1, 5), (2, 5), (3, 5), (4, 5)]
        assert sim.generation == 4
        assert sim.population_history == [5, 5, 5, 5, 5]

    def test_run_zero_ticks(self):
        """Running zero ticks returns the seed generation."""
        sim = Simulation(World(), RuleSet(), GLIDER)
        seed = sim.cells

        assert sim.run(0) is seed
        assert sim.generation == 0

    def test_negative_ticks(self):
        """Test negative tick counts are rejected."""
        sim = Simulation(World(), RuleSet(), GLIDER)
        with pytest.raises(ConfigurationError):
            sim.run(-1)

    def test_block_stable_over_many_ticks(self):
        """Test a block survives a long run unchanged."""
        block = [(0, 0), (1, 0), (0, 1), (1, 1)]
        sim = Simulation(World(), RuleSet(), block)
        final = sim.run(50)

        assert final.alive_coordinates() == sorted(block)

    def test_custom_engine(self):
        """A dense engine can drive the simulation."""
        world = World(0, 15, 0, 15)
        sparse = Simulation(world, RuleSet(), GLIDER)
        dense = Simulation(world, RuleSet(), GLIDER, engine=DenseTickEngine(world, RuleSet()))

        assert format_life106(sparse.run(20)) == format_life106(dense.run(20))

    def test_seed_outside_world(self):
        """A seed cell beyond the world's edge is rejected."""
        with pytest.raises(IndexError):
            Simulation(World(0, 9, 0, 9, wraparound=False), RuleSet(), [(9, 5), (10, 5), (11, 5)])
