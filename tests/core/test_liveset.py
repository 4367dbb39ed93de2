"""Tests for the LiveSet class."""

import pytest

from sparselife.core.liveset import LiveSet
from sparselife.core.world import World


class TestLiveSet:
    """Test cases for the LiveSet class."""

    def test_empty(self):
        """Test an empty live set."""
        live_set = LiveSet(World())
        assert live_set.population == 0
        assert len(live_set) == 0
        assert live_set.candidates() == []
        assert live_set.bounding_box() is None

    def test_insert_live_stubs_halo(self):
        """Inserting a live cell adds its neighbors as tracked-dead."""
        live_set = LiveSet(World())
        live_set.insert_live((0, 0))

        assert live_set.population == 1
        assert live_set.tracked_dead == 8
        assert len(live_set) == 9
        assert live_set.is_alive((0, 0))
        assert not live_set.is_alive((1, 1))
        assert (1, 1) in live_set.candidates()

    def test_insert_on_hard_corner(self):
        """A corner cell of a hard-edged world only stubs three neighbors."""
        live_set = LiveSet(World(0, 9, 0, 9, wraparound=False))
        live_set.insert_live((0, 0))
        assert len(live_set) == 4

    def test_insert_twice(self):
        """Inserting the same cell twice counts it once."""
        live_set = LiveSet(World())
        live_set.insert_live((3, 3))
        live_set.insert_live((3, 3))
        assert live_set.population == 1

    def test_tracked_dead_becomes_alive(self):
        """A tracked-dead neighbor can be inserted as alive."""
        live_set = LiveSet(World())
        live_set.insert_live((0, 0))
        live_set.insert_live((1, 0))

        assert live_set.is_alive((0, 0))
        assert live_set.is_alive((1, 0))
        assert live_set.population == 2
        # Stubbing never downgrades a live cell
        assert live_set.is_alive((0, 0))

    def test_is_alive_does_not_insert(self):
        """Looking up an absent coordinate does not create an entry."""
        live_set = LiveSet(World())
        live_set.insert_live((0, 0))
        before = len(live_set)

        assert not live_set.is_alive((100, 100))
        assert len(live_set) == before
        assert (100, 100) not in live_set.candidates()

    def test_live_neighbors_always_tracked(self):
        """Every neighbor of every live cell has an entry."""
        world = World(0, 9, 0, 9)
        live_set = LiveSet.from_cells(world, [(0, 0), (5, 5), (9, 3), (4, 4)])
        candidates = set(live_set.candidates())

        for coord in live_set.alive_coordinates():
            for neighbor in world.neighbors(coord):
                assert neighbor in candidates

    def test_alive_coordinates_sorted(self):
        """Live coordinates are returned sorted by x, then y."""
        live_set = LiveSet.from_cells(World(), [(3, 1), (-2, 7), (3, -4), (0, 0)])
        assert live_set.alive_coordinates() == [(-2, 7), (0, 0), (3, -4), (3, 1)]
        assert list(live_set) == [(-2, 7), (0, 0), (3, -4), (3, 1)]

    def test_contains(self):
        """Membership only reports live cells."""
        live_set = LiveSet.from_cells(World(), [(0, 0)])
        assert (0, 0) in live_set
        assert (1, 0) not in live_set

    def test_frozen(self):
        """A frozen live set cannot be modified."""
        live_set = LiveSet.from_cells(World(), [(0, 0)])
        assert live_set.frozen

        with pytest.raises(RuntimeError):
            live_set.insert_live((5, 5))

    def test_equality(self):
        """Live sets with the same live cells are equal regardless of insertion order."""
        world = World()
        first = LiveSet.from_cells(world, [(0, 0), (1, 0), (2, 0)])
        second = LiveSet.from_cells(world, [(2, 0), (0, 0), (1, 0)])
        other_world = LiveSet.from_cells(World(0, 9, 0, 9), [(0, 0), (1, 0), (2, 0)])

        assert first == second
        assert first != other_world
        assert first != LiveSet.from_cells(world, [(0, 0)])

    def test_bounding_box(self):
        """Test bounding box of live cells."""
        live_set = LiveSet.from_cells(World(), [(1, 5), (-3, 2), (4, -1)])
        assert live_set.bounding_box() == (-3, -1, 4, 5)

    @pytest.mark.parametrize("coord", [(10, 5), (-1, 5), (5, 10), (5, -1)])
    def test_insert_outside_world(self, coord):
        """Cells outside the world's bounds are rejected and nothing is stored."""
        live_set = LiveSet(World(0, 9, 0, 9, wraparound=False))

        with pytest.raises(IndexError, match="out of bounds"):
            live_set.insert_live(coord)

        assert len(live_set) == 0
        assert live_set.population == 0

    def test_from_cells_outside_world(self):
        """A seed running past a hard edge is rejected instead of evolving outside the world."""
        with pytest.raises(IndexError):
            LiveSet.from_cells(World(0, 9, 0, 9, wraparound=False), [(9, 5), (10, 5), (11, 5)])
