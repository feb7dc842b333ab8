"""
Base Solver Module - Abstract base class for shortest-path strategies.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Optional, Tuple, Union

import numpy as np

from .context import RunContext
from .errors import OutOfRange, Unreachable
from .grid import Coord, Grid, Path
from .result import NoPathFound, PathResult, RunMetrics

logger = logging.getLogger(__name__)


def reconstruct_path(grid: Grid, source: Coord, target: Coord) -> Path:
    """
    Walk predecessor links back from the target and reverse them.

    Args:
        grid: Grid holding the state of the last solve
        source: Start coordinate of that solve
        target: Coordinate to build the path to

    Returns:
        Coordinates from source to target inclusive

    Raises:
        Unreachable: If the target was not reached, or its predecessor
                     chain does not lead back to the source
    """
    cell = grid.get(*target)
    if not cell.is_reached:
        raise Unreachable(f"Target {target} was not reached from {source}")

    path = [cell.coords]
    # A valid chain can never be longer than the grid
    for _ in range(len(grid)):
        if cell.predecessor is None:
            break
        cell = grid.get(*cell.predecessor)
        path.append(cell.coords)
    else:
        raise Unreachable(f"Predecessor chain from {target} does not terminate")

    if cell.coords != source:
        raise Unreachable(
            f"Predecessor chain from {target} ends at {cell.coords}, not {source}"
        )

    path.reverse()
    return tuple(path)


class PathSolver(ABC):
    """
    Abstract base class for single-source, unit-weight shortest-path solvers.

    Subclasses implement search(), which writes distances and predecessors
    into the grid's cells. solve() and flood() wrap it with validation,
    timing and result building.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description
    """
    name: str = "base"
    description: str = "Base solver"

    @abstractmethod
    def search(self, grid: Grid, source: Coord, target: Optional[Coord],
               context: RunContext) -> Tuple[bool, int]:
        """
        Expand cells outward from the source.

        Must reset distances first, skip blocked cells, finalize cells in
        order of (distance, y, x), notify context.observer.cell_finalized()
        for each finalized cell and call context.check_cancelled() once per
        iteration.

        Args:
            grid: Grid to search (source already known to be unblocked)
            source: Start coordinate
            target: Stop once this cell is finalized; None floods the
                    whole reachable region
            context: Run context

        Returns:
            (target_reached, cells_finalized)
        """
        pass

    def solve(self, grid: Grid, source: Coord, target: Coord,
              context: Optional[RunContext] = None) -> Union[PathResult, NoPathFound]:
        """
        Find the shortest path from source to target.

        Args:
            grid: Grid to solve; its cell distances are overwritten
            source: Start coordinate
            target: End coordinate
            context: Optional run context (cancellation, observer)

        Returns:
            PathResult, or NoPathFound if the target cannot be reached

        Raises:
            OutOfRange: If source or target is outside the grid
            CancellationRequested: If the context asks to stop
        """
        context = context or RunContext()
        self._check_endpoint(grid, source)
        self._check_endpoint(grid, target)
        start_time = time.perf_counter()

        if grid.get(*source).blocked or grid.get(*target).blocked:
            grid.reset_distances()
            logger.debug(f"Endpoint blocked: source={source} target={target}")
            return NoPathFound(source, target, self._metrics(start_time, 0))

        found, finalized = self.search(grid, source, target, context)
        metrics = self._metrics(start_time, finalized)

        if not found:
            logger.debug(f"No path {source} -> {target} after {finalized} cells")
            return NoPathFound(source, target, metrics)

        path = reconstruct_path(grid, source, target)
        distance = int(grid.get(*target).best_distance)
        logger.debug(
            f"Solved {source} -> {target}: distance={distance}, "
            f"{finalized} cells in {metrics.computation_time_ms:.1f}ms"
        )
        return PathResult(
            source=source,
            target=target,
            distance=distance,
            path=path,
            distance_field=grid.distance_field(),
            metrics=metrics,
        )

    def flood(self, grid: Grid, source: Coord,
              context: Optional[RunContext] = None) -> np.ndarray:
        """
        Compute distances from the source to every reachable cell.

        Returns:
            Distance field of shape (height, width), -1 where unreached
        """
        context = context or RunContext()
        self._check_endpoint(grid, source)
        if grid.get(*source).blocked:
            grid.reset_distances()
        else:
            self.search(grid, source, None, context)
        return grid.distance_field()

    def _check_endpoint(self, grid: Grid, coord: Coord) -> None:
        if not grid.in_bounds(*coord):
            raise OutOfRange(coord, grid.width, grid.height)

    def _metrics(self, start_time: float, finalized: int) -> RunMetrics:
        return RunMetrics(
            computation_time_ms=(time.perf_counter() - start_time) * 1000,
            cells_finalized=finalized,
            solves=1,
            solver_name=self.name,
        )

    @staticmethod
    def _order_key(cell) -> Tuple[float, int, int]:
        """Selection order among tentative cells: distance, then row-major position."""
        return (cell.best_distance, cell.y, cell.x)
