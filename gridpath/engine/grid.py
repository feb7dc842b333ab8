"""
Grid Module - Mutable 2D obstacle grid carrying per-cell pathfinding state.
"""

import math
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .errors import OutOfRange

# (x, y) - x is the column, y is the row
Coord = Tuple[int, int]
Path = Tuple[Coord, ...]

INFINITY = math.inf

# Fixed neighbour order keeps solver output reproducible: up, right, down, left
NEIGHBOUR_OFFSETS: Tuple[Coord, ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))


class Cell:
    """
    One grid position.

    Attributes:
        coords: (x, y) position, fixed at construction
        blocked: True if the cell is impassable
        best_distance: Best known hop count from the source, or INFINITY
        predecessor: Coordinate of the cell the best path arrives from,
                     None for the source and for unreached cells
    """
    __slots__ = ("_coords", "blocked", "best_distance", "predecessor")

    def __init__(self, x: int, y: int, blocked: bool = False):
        self._coords: Coord = (x, y)
        self.blocked = blocked
        self.best_distance = INFINITY
        self.predecessor: Optional[Coord] = None

    @property
    def coords(self) -> Coord:
        return self._coords

    @property
    def x(self) -> int:
        return self._coords[0]

    @property
    def y(self) -> int:
        return self._coords[1]

    @property
    def is_reached(self) -> bool:
        """True if the last solve assigned a finite distance."""
        return self.best_distance != INFINITY

    def reset_distance(self) -> None:
        self.best_distance = INFINITY
        self.predecessor = None

    def __repr__(self) -> str:
        state = "#" if self.blocked else "."
        return f"Cell({self.x}, {self.y}, {state}, d={self.best_distance})"


class Grid:
    """
    Fixed-size grid of cells addressed by (x, y).

    Width and height never change after construction. Cells are stored
    row-major, so index = y * width + x.

    Attributes:
        width: Number of columns
        height: Number of rows
    """

    def __init__(self, width: int, height: int):
        """
        Create an open grid (no blocked cells).

        Args:
            width: Number of columns (> 0)
            height: Number of rows (> 0)

        Raises:
            ValueError: If either dimension is not positive
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._cells: List[Cell] = [
            Cell(x, y) for y in range(height) for x in range(width)
        ]

    @classmethod
    def from_blocked(cls, rows: Sequence[Sequence[bool]]) -> 'Grid':
        """
        Create a grid from a 2D boolean layout.

        Args:
            rows: rows[y][x] is True where the cell is blocked

        Returns:
            Grid with the blocked cells applied

        Raises:
            ValueError: If the layout is empty or not rectangular
        """
        if not rows or not rows[0]:
            raise ValueError("Blocked layout must have at least one row and column")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("Blocked layout rows must all have the same length")

        grid = cls(width, len(rows))
        for y, row in enumerate(rows):
            for x, blocked in enumerate(row):
                if blocked:
                    grid.set_blocked(x, y, True)
        return grid

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width), matching numpy array order."""
        return (self._height, self._width)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def get(self, x: int, y: int) -> Cell:
        """
        Get the cell at (x, y).

        Raises:
            OutOfRange: If (x, y) is outside the grid
        """
        if not self.in_bounds(x, y):
            raise OutOfRange((x, y), self._width, self._height)
        return self._cells[y * self._width + x]

    def set_blocked(self, x: int, y: int, value: bool = True) -> None:
        """
        Mark a cell passable or impassable.

        Distances are left untouched; callers must re-solve afterwards.
        """
        self.get(x, y).blocked = value

    def is_blocked(self, x: int, y: int) -> bool:
        return self.get(x, y).blocked

    def neighbors(self, x: int, y: int) -> List[Coord]:
        """
        Get the in-bounds orthogonal neighbours of (x, y).

        Order is always up, right, down, left (skipping out-of-bounds ones).
        Blocked neighbours are included; filtering is the solver's job.

        Raises:
            OutOfRange: If (x, y) itself is outside the grid
        """
        if not self.in_bounds(x, y):
            raise OutOfRange((x, y), self._width, self._height)
        result = []
        for dx, dy in NEIGHBOUR_OFFSETS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                result.append((nx, ny))
        return result

    def reset_distances(self) -> None:
        """Clear solver state on every cell. Required before each independent solve."""
        for cell in self._cells:
            cell.reset_distance()

    def reset(self) -> None:
        """Clear blocked flags and solver state in one pass, for reuse across scenarios."""
        for cell in self._cells:
            cell.blocked = False
            cell.reset_distance()

    def cells(self) -> Iterator[Cell]:
        """Iterate cells in row-major order."""
        return iter(self._cells)

    def blocked_coords(self) -> List[Coord]:
        return [cell.coords for cell in self._cells if cell.blocked]

    def distance_field(self) -> np.ndarray:
        """
        Export the current distances as an array.

        Returns:
            int64 array of shape (height, width); -1 marks unreached cells
        """
        field = np.full(self.shape, -1, dtype=np.int64)
        for cell in self._cells:
            if cell.is_reached:
                field[cell.y, cell.x] = int(cell.best_distance)
        return field

    def blocked_mask(self) -> np.ndarray:
        """Boolean array of shape (height, width), True where blocked."""
        mask = np.zeros(self.shape, dtype=bool)
        for cell in self._cells:
            if cell.blocked:
                mask[cell.y, cell.x] = True
        return mask

    def copy(self) -> 'Grid':
        """Independent grid with the same blocked set and fresh distances."""
        clone = Grid(self._width, self._height)
        for cell in self._cells:
            if cell.blocked:
                clone.set_blocked(cell.x, cell.y, True)
        return clone

    def to_text(self, source: Optional[Coord] = None,
                target: Optional[Coord] = None) -> str:
        """Render the blocked layout in map format ('#', '.', 'S', 'E')."""
        lines = []
        for y in range(self._height):
            chars = []
            for x in range(self._width):
                if (x, y) == source:
                    chars.append("S")
                elif (x, y) == target:
                    chars.append("E")
                elif self.get(x, y).blocked:
                    chars.append("#")
                else:
                    chars.append(".")
            lines.append("".join(chars))
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, coord: object) -> bool:
        if not isinstance(coord, tuple) or len(coord) != 2:
            return False
        return self.in_bounds(coord[0], coord[1])

    def __repr__(self) -> str:
        return f"Grid({self._width}x{self._height}, blocked={len(self.blocked_coords())})"
