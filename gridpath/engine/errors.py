"""
Errors Module - Exception taxonomy for the grid pathing engine.

Structural problems (bad coordinates, malformed input) abort the calling
operation immediately. A missing path is NOT an exception: solvers return a
NoPathFound result value that callers branch on explicitly.
"""

from typing import Optional, Tuple


class GridPathError(Exception):
    """Base class for all engine errors."""


class OutOfRange(GridPathError, IndexError):
    """
    Coordinate access outside the grid bounds.

    Attributes:
        coord: The offending (x, y) coordinate
        width: Grid width at the time of the access
        height: Grid height at the time of the access
    """

    def __init__(self, coord: Tuple[int, int], width: int, height: int):
        self.coord = coord
        self.width = width
        self.height = height
        super().__init__(
            f"Coordinate {coord} outside grid bounds {width}x{height}"
        )


class InputFormatError(GridPathError, ValueError):
    """
    Malformed map or obstacle input, detected before any solve begins.

    Attributes:
        line: 1-based input line number, or None when not line specific
    """

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class Unreachable(GridPathError):
    """Path reconstruction requested for a target the last solve never reached."""


class CancellationRequested(GridPathError):
    """Cooperative abort of a long-running scan (cancel flag or timeout)."""
