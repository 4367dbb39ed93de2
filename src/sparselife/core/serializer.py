"""Life 1.06 output."""

from io import StringIO
from pathlib import Path
from typing import TextIO, Union

from .errors import InputOutputError
from .liveset import LiveSet

LIFE_106_HEADER = "#Life 1.06"


def write_life106(live_set: LiveSet, sink: TextIO) -> None:
    """Write the live cells of a generation in Life 1.06 format.

    Cells are written sorted by x, then y. Tracked-dead entries are never
    written. The sink is neither opened nor closed here.

    Args:
        live_set: Generation to write
        sink: Text stream to append to
    """
    sink.write(LIFE_106_HEADER + "\n")
    for x, y in live_set.alive_coordinates():
        sink.write(f"{x} {y}\n")


def format_life106(live_set: LiveSet) -> str:
    """Render a generation as a Life 1.06 string."""
    buffer = StringIO()
    write_life106(live_set, buffer)
    return buffer.getvalue()


class TickWriter:
    """Writes one Life 1.06 file per tick into a directory.

    Files are named by the tick index, zero-padded to the number of digits
    in the total tick count.
    """

    def __init__(self, directory: Union[str, Path], total_ticks: int) -> None:
        """Prepare the output directory.

        Args:
            directory: Directory to write tick files into; created if missing
            total_ticks: Number of ticks in the run, used for the padding width

        Raises:
            InputOutputError: If the directory cannot be used
        """
        self.directory = Path(directory)
        self.total_ticks = total_ticks
        self.padding = len(str(total_ticks))

        if self.directory.exists():
            if not self.directory.is_dir():
                raise InputOutputError(f"Output directory {self.directory} exists but is already a file")
        else:
            try:
                self.directory.mkdir()
            except OSError as e:
                raise InputOutputError(f"Unable to create output directory {self.directory}: {e}") from e

    def path_for(self, tick: int) -> Path:
        """Get the file path for a tick."""
        return self.directory / f"{tick:0{self.padding}d}.txt"

    def write(self, tick: int, live_set: LiveSet) -> Path:
        """Write a generation to its tick file.

        Returns:
            Path of the written file
        """
        path = self.path_for(tick)
        try:
            with open(path, "w") as f:
                write_life106(live_set, f)
        except OSError as e:
            raise InputOutputError(f"Error opening output file {path}: {e}") from e
        return path
