"""
Solver Module - Function-style entry points over the registered strategies.
"""

from typing import Optional, Union

import numpy as np

from .context import RunContext
from .factory import create_solver
from .grid import Coord, Grid
from .result import NoPathFound, PathResult


def solve(grid: Grid, source: Coord, target: Coord,
          context: Optional[RunContext] = None,
          strategy: Optional[str] = None) -> Union[PathResult, NoPathFound]:
    """
    Shortest path from source to target using unit edge weights.

    Args:
        grid: Grid to solve; cell distances and predecessors are overwritten
        source: Start coordinate
        target: End coordinate
        context: Optional run context (cancellation, observer)
        strategy: Registered solver name, defaults to "linear"

    Returns:
        PathResult with distance, path and distance field, or NoPathFound
    """
    solver = create_solver(strategy)
    return solver.solve(grid, source, target, context)


def flood(grid: Grid, source: Coord,
          context: Optional[RunContext] = None,
          strategy: Optional[str] = None) -> np.ndarray:
    """
    Distances from the source to every reachable cell (-1 where unreached).
    """
    solver = create_solver(strategy)
    return solver.flood(grid, source, context)
