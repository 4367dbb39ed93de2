"""Tests for Life 1.06 output."""

from io import StringIO

import pytest

from sparselife.core.errors import InputOutputError
from sparselife.core.liveset import LiveSet
from sparselife.core.serializer import LIFE_106_HEADER, TickWriter, format_life106, write_life106
from sparselife.core.world import World


class TestWriteLife106:
    """Test cases for Life 1.06 serialization."""

    def test_empty(self):
        """An empty generation is just the header."""
        assert format_life106(LiveSet(World())) == "#Life 1.06\n"

    def test_block(self):
        """Test a block is written sorted by x, then y."""
        live_set = LiveSet.from_cells(World(), [(1, 1), (0, 0), (1, 0), (0, 1)])
        assert format_life106(live_set) == "#Life 1.06\n0 0\n0 1\n1 0\n1 1\n"

    def test_negative_coordinates_sorted_numerically(self):
        """Test ordering is numeric, not lexical."""
        live_set = LiveSet.from_cells(World(), [(10, 0), (-2, 3), (2, -10), (2, 5), (-10, 0)])
        lines = format_life106(live_set).splitlines()

        assert lines[0] == LIFE_106_HEADER
        assert lines[1:] == ["-10 0", "-2 3", "2 -10", "2 5", "10 0"]

    def test_insertion_order_does_not_matter(self):
        """Differently ordered insertions give byte-identical output."""
        cells = [(3, 1), (-5, 2), (0, 0), (3, -1), (7, 7), (-5, -5)]
        first = format_life106(LiveSet.from_cells(World(), cells))
        second = format_life106(LiveSet.from_cells(World(), list(reversed(cells))))
        assert first == second

    def test_tracked_dead_not_written(self):
        """Only live cells are written."""
        live_set = LiveSet.from_cells(World(), [(0, 0)])
        assert len(live_set) == 9
        assert format_life106(live_set) == "#Life 1.06\n0 0\n"

    def test_appends_to_sink(self):
        """Writing appends and leaves the sink open."""
        sink = StringIO()
        sink.write("existing\n")
        write_life106(LiveSet.from_cells(World(), [(4, 2)]), sink)

        assert not sink.closed
        assert sink.getvalue() == "existing\n#Life 1.06\n4 2\n"


class TestTickWriter:
    """Test cases for per-tick output files."""

    def test_creates_directory(self, tmp_path):
        """Test the output directory is created when missing."""
        directory = tmp_path / "ticks"
        TickWriter(directory, 5)
        assert directory.is_dir()

    def test_padding(self, tmp_path):
        """File names are padded to the digit count of the total ticks."""
        assert TickWriter(tmp_path / "a", 9).path_for(3).name == "3.txt"
        assert TickWriter(tmp_path / "b", 10).path_for(3).name == "03.txt"
        assert TickWriter(tmp_path / "c", 10).path_for(10).name == "10.txt"
        assert TickWriter(tmp_path / "d", 250).path_for(0).name == "000.txt"

    def test_write(self, tmp_path):
        """Test a tick file holds the Life 1.06 generation."""
        writer = TickWriter(tmp_path, 10)
        path = writer.write(0, LiveSet.from_cells(World(), [(1, 2)]))

        assert path == tmp_path / "00.txt"
        assert path.read_text() == "#Life 1.06\n1 2\n"

    def test_write_truncates(self, tmp_path):
        """Existing tick files are replaced, not appended to."""
        (tmp_path / "01.txt").write_text("stale content that is longer than the new output\n" * 5)
        writer = TickWriter(tmp_path, 10)
        writer.write(1, LiveSet(World()))

        assert (tmp_path / "01.txt").read_text() == "#Life 1.06\n"

    def test_directory_is_a_file(self, tmp_path):
        """Test an existing file in place of the directory is an error."""
        path = tmp_path / "ticks"
        path.write_text("not a directory")

        with pytest.raises(InputOutputError):
            TickWriter(path, 5)

    def test_directory_cannot_be_created(self, tmp_path):
        """Test a missing parent directory is an error."""
        with pytest.raises(InputOutputError):
            TickWriter(tmp_path / "missing" / "ticks", 5)
