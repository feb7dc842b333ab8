"""
Parsing Module - Map and obstacle-list input formats.

Map format: one line per row, '#' wall, '.' open, 'S' source, 'E' target.
Obstacle format: one "x,y" pair per line.

All validation happens here, before any solve begins.
"""

import logging
from dataclasses import dataclass
from pathlib import Path as FilePath
from typing import List, Optional, Tuple, Union

from gridpath.engine import Coord, Grid, InputFormatError

logger = logging.getLogger(__name__)

WALL = "#"
OPEN = "."
SOURCE = "S"
TARGET = "E"
MAP_CHARS = {WALL, OPEN, SOURCE, TARGET}


@dataclass
class ParsedMap:
    """
    Result of parsing a map.

    Attributes:
        grid: Grid with walls applied
        source: Coordinate of 'S'
        target: Coordinate of 'E'
    """
    grid: Grid
    source: Coord
    target: Coord


def _strip_blank_edges(lines: List[str]) -> Tuple[List[str], int]:
    """Drop blank leading and trailing lines; also return the 0-based offset of the first kept line."""
    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    end = len(lines)
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end], start


def parse_map(text: str) -> ParsedMap:
    """
    Parse map text into a grid plus source and target.

    Args:
        text: Map rows separated by newlines

    Returns:
        ParsedMap

    Raises:
        InputFormatError: Empty input, jagged rows, unknown characters,
                          or not exactly one 'S' and one 'E'
    """
    rows, offset = _strip_blank_edges([line.rstrip("\r") for line in text.split("\n")])
    if not rows:
        raise InputFormatError("Map is empty")

    width = len(rows[0])
    source: Optional[Coord] = None
    target: Optional[Coord] = None

    for y, row in enumerate(rows):
        line_no = y + offset + 1
        if len(row) != width:
            raise InputFormatError(
                f"Row has length {len(row)}, expected {width} (rows must be equal length)",
                line=line_no,
            )
        for x, char in enumerate(row):
            if char not in MAP_CHARS:
                raise InputFormatError(f"Unknown map character {char!r} at column {x + 1}", line=line_no)
            if char == SOURCE:
                if source is not None:
                    raise InputFormatError(f"Duplicate source 'S' (first at {source})", line=line_no)
                source = (x, y)
            elif char == TARGET:
                if target is not None:
                    raise InputFormatError(f"Duplicate target 'E' (first at {target})", line=line_no)
                target = (x, y)

    if source is None:
        raise InputFormatError("Map has no source 'S'")
    if target is None:
        raise InputFormatError("Map has no target 'E'")

    grid = Grid(width, len(rows))
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            if char == WALL:
                grid.set_blocked(x, y, True)

    logger.debug(f"Parsed {width}x{len(rows)} map, source={source}, target={target}")
    return ParsedMap(grid=grid, source=source, target=target)


def parse_obstacles(text: str) -> List[Coord]:
    """
    Parse an ordered obstacle list.

    Args:
        text: One "x,y" pair per line; blank lines are ignored

    Returns:
        Coordinates in input order

    Raises:
        InputFormatError: Malformed line or negative coordinate
    """
    obstacles: List[Coord] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        parts = line.split(",")
        if len(parts) != 2:
            raise InputFormatError(f"Expected 'x,y', got {line!r}", line=line_no)
        try:
            x, y = int(parts[0].strip()), int(parts[1].strip())
        except ValueError:
            raise InputFormatError(f"Non-integer coordinate in {line!r}", line=line_no) from None
        if x < 0 or y < 0:
            raise InputFormatError(f"Negative coordinate in {line!r}", line=line_no)
        obstacles.append((x, y))
    return obstacles


def open_grid(width: int, height: int) -> Grid:
    """Empty arena for the falling-obstacle scenario."""
    return Grid(width, height)


def corner_endpoints(grid: Grid) -> Tuple[Coord, Coord]:
    """Top-left source and bottom-right target."""
    return (0, 0), (grid.width - 1, grid.height - 1)


def _read_text(path: Union[str, FilePath]) -> str:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except IOError as e:
        logger.warning(f"Failed to read {path}: {e}")
        raise InputFormatError(f"Cannot read {path}: {e}") from e


def load_map(path: Union[str, FilePath]) -> ParsedMap:
    """Read and parse a map file."""
    return parse_map(_read_text(path))


def load_obstacles(path: Union[str, FilePath]) -> List[Coord]:
    """Read and parse an obstacle list file."""
    return parse_obstacles(_read_text(path))
