"""Reading the initial generation."""

from pathlib import Path
from typing import Iterable, List, TextIO, Union

from .errors import InputOutputError
from .serializer import LIFE_106_HEADER
from .world import INT64_MAX, INT64_MIN, Coordinate, World, parse_integer


def _parse_int(text: str, axis: str, line_number: int) -> int:
    try:
        value = parse_integer(text)
    except ValueError:
        raise InputOutputError(
            f"Line {line_number}: unable to parse {axis}-coordinate integer from input string '{text}'"
        ) from None

    if not INT64_MIN <= value <= INT64_MAX:
        raise InputOutputError(f"Line {line_number}: {axis}-coordinate {value} is outside the signed 64-bit range")

    return value


def _check_bounds(coord: Coordinate, world: World, line_number: int) -> Coordinate:
    x, y = coord
    if x < world.min_x:
        raise InputOutputError(f"Line {line_number}: X-coordinate {x} outside the world minimum bounds {world.min_x}")
    if x > world.max_x:
        raise InputOutputError(f"Line {line_number}: X-coordinate {x} outside the world maximum bounds {world.max_x}")
    if y < world.min_y:
        raise InputOutputError(f"Line {line_number}: Y-coordinate {y} outside the world minimum bounds {world.min_y}")
    if y > world.max_y:
        raise InputOutputError(f"Line {line_number}: Y-coordinate {y} outside the world maximum bounds {world.max_y}")
    return coord


def parse_seed_line(line: str, world: World, line_number: int = 1) -> Coordinate:
    """Parse a single "(x,y)" seed record.

    Args:
        line: Record text; whitespace around the record and the integers is allowed
        world: World the coordinate must lie in
        line_number: Line number used in error messages

    Returns:
        Parsed coordinate

    Raises:
        InputOutputError: If the record is malformed or out of bounds
    """
    record = line.strip()

    if not record.startswith("("):
        raise InputOutputError(f"Line {line_number}: error reading left parenthesis in '{record}'")

    if not record.endswith(")"):
        raise InputOutputError(f"Line {line_number}: error reading right parenthesis in '{record}'")

    parts = record[1:-1].split(",")
    if len(parts) != 2:
        raise InputOutputError(f"Line {line_number}: expected 2 comma separated coordinates, got {len(parts)}")

    coord = (_parse_int(parts[0], "X", line_number), _parse_int(parts[1], "Y", line_number))
    return _check_bounds(coord, world, line_number)


def parse_life106_line(line: str, world: World, line_number: int = 1) -> Coordinate:
    """Parse a single "x y" Life 1.06 record."""
    parts = line.split()
    if len(parts) != 2:
        raise InputOutputError(f"Line {line_number}: expected 'x y' Life 1.06 record, got '{line.strip()}'")

    coord = (_parse_int(parts[0], "X", line_number), _parse_int(parts[1], "Y", line_number))
    return _check_bounds(coord, world, line_number)


def read_seed_lines(lines: Iterable[str], world: World) -> List[Coordinate]:
    """Parse seed records from lines of text.

    Records are "(x,y)", one per line. If the first non-blank line is a
    Life 1.06 header the input is read as Life 1.06 instead, so that any
    generation written by this package can be used as a seed. Blank lines
    are skipped.

    Args:
        lines: Lines of seed text
        world: World every coordinate must lie in

    Returns:
        Seed coordinates in input order
    """
    cells: List[Coordinate] = []
    life106 = None

    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue

        if life106 is None:
            life106 = line.strip().startswith(LIFE_106_HEADER)
            if life106:
                continue

        if life106:
            if line.lstrip().startswith("#"):
                continue
            cells.append(parse_life106_line(line, world, line_number))
        else:
            cells.append(parse_seed_line(line, world, line_number))

    return cells


def read_seed(stream: TextIO, world: World) -> List[Coordinate]:
    """Read seed coordinates from an open text stream."""
    try:
        return read_seed_lines(stream, world)
    except UnicodeDecodeError as e:
        raise InputOutputError(f"Error reading seed input: {e}") from e


def read_seed_file(path: Union[str, Path], world: World) -> List[Coordinate]:
    """Read seed coordinates from a file.

    Raises:
        InputOutputError: If the file cannot be opened or holds a malformed record
    """
    try:
        f = open(path, "r")
    except OSError as e:
        raise InputOutputError(f"Error opening input file {path}: {e}") from e

    with f:
        return read_seed(f, world)
