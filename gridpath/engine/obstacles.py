"""
Obstacle Controller Module - Finds the obstacle that severs source from target.

Obstacles are applied one at a time with a full re-solve after each. There is
no incremental distance reuse; for very long obstacle sequences a caller can
batch-apply prefixes and binary-search instead.
"""

import logging
import time
from typing import Iterable, List, Optional, Sequence

from .context import RunContext
from .errors import CancellationRequested, OutOfRange
from .factory import create_solver
from .grid import Coord, Grid, Path
from .observer import GridObserver, HighlightTag, NullObserver
from .result import Disconnection, RunMetrics

logger = logging.getLogger(__name__)


class DynamicObstacleController:
    """
    Applies obstacles incrementally to a grid and watches for disconnection.

    Attributes:
        grid: Grid being modified (only blocked flags are touched directly)
        source: Fixed start coordinate
        target: Fixed end coordinate
        strategy: Solver name used for every re-solve, None for the default
        record_paths: Keep the path found after each surviving prefix
        paths: Recorded paths from the most recent run()
        applied: Every obstacle applied so far, initial ones included
    """

    def __init__(self, grid: Grid, source: Coord, target: Coord,
                 strategy: Optional[str] = None, record_paths: bool = True):
        self.grid = grid
        self.source = source
        self.target = target
        self.strategy = strategy
        self.record_paths = record_paths
        self.paths: List[Path] = []
        self.applied: List[Coord] = []

    def apply_initial(self, obstacles: Iterable[Coord],
                      observer: Optional[GridObserver] = None) -> int:
        """
        Block a batch of obstacles without solving in between.

        Args:
            obstacles: Coordinates to block
            observer: Optional observer for obstacle events

        Returns:
            Number of obstacles applied

        Raises:
            OutOfRange: If any coordinate is outside the grid (nothing applied)
        """
        observer = observer or NullObserver()
        obstacles = self._validated(obstacles)
        for coord in obstacles:
            self._block(coord, observer)
        logger.debug(f"Applied {len(obstacles)} initial obstacles")
        return len(obstacles)

    def run(self, obstacles: Iterable[Coord],
            context: Optional[RunContext] = None) -> Optional[Disconnection]:
        """
        Apply obstacles in order until the target becomes unreachable.

        Args:
            obstacles: Ordered obstacle coordinates
            context: Optional run context (cancellation, observer, progress)

        Returns:
            Disconnection for the first obstacle that cut the last route,
            or None if the source can still reach the target at the end

        Raises:
            OutOfRange: If any coordinate is outside the grid (nothing applied)
            CancellationRequested: If cancelled; the interrupted obstacle is
                                   rolled back and distances are reset
        """
        context = context or RunContext()
        obstacles = self._validated(obstacles)
        solver = create_solver(self.strategy)
        metrics = RunMetrics(solver_name=solver.name)
        start_time = time.perf_counter()
        self.paths = []

        for index, (x, y) in enumerate(obstacles, start=1):
            context.check_cancelled()

            was_blocked = self.grid.is_blocked(x, y)
            self._block((x, y), context.observer)
            context.observer.obstacle_applied((x, y), index)

            try:
                result = solver.solve(self.grid, self.source, self.target, context)
            except CancellationRequested:
                self._rollback((x, y), was_blocked, context.observer)
                raise

            metrics.solves += 1
            metrics.cells_finalized += result.metrics.cells_finalized

            if not result:
                metrics.computation_time_ms = (time.perf_counter() - start_time) * 1000
                logger.info(f"Disconnected by obstacle {x},{y} ({index} applied)")
                return Disconnection(
                    coord=(x, y),
                    applied_count=index,
                    paths=list(self.paths),
                    metrics=metrics,
                )

            if self.record_paths:
                self.paths.append(result.path)
            context.report_progress(
                index / len(obstacles),
                f"{index} obstacles applied, distance {result.distance}"
            )

        logger.info(f"Still connected after {len(obstacles)} obstacles")
        return None

    def _validated(self, obstacles: Iterable[Coord]) -> List[Coord]:
        obstacles = [tuple(coord) for coord in obstacles]
        for x, y in obstacles:
            if not self.grid.in_bounds(x, y):
                raise OutOfRange((x, y), self.grid.width, self.grid.height)
        return obstacles

    def _block(self, coord: Coord, observer: GridObserver) -> None:
        self.grid.set_blocked(coord[0], coord[1], True)
        self.applied.append(coord)
        observer.obstacle_changed(coord, True)
        observer.highlight(coord, HighlightTag.OBSTACLE)

    def _rollback(self, coord: Coord, was_blocked: bool, observer: GridObserver) -> None:
        self.applied.pop()
        if not was_blocked:
            self.grid.set_blocked(coord[0], coord[1], False)
            observer.obstacle_changed(coord, False)
        self.grid.reset_distances()
        logger.debug(f"Rolled back obstacle {coord[0]},{coord[1]} after cancellation")


def apply_obstacles_until_disconnected(
    grid: Grid,
    source: Coord,
    target: Coord,
    obstacles: Sequence[Coord],
    context: Optional[RunContext] = None,
    strategy: Optional[str] = None,
) -> Optional[Disconnection]:
    """
    Find the shortest prefix of obstacles that disconnects source and target.

    Returns:
        Disconnection(coord, applied_count, ...) or None if never disconnected
    """
    controller = DynamicObstacleController(grid, source, target, strategy=strategy)
    return controller.run(obstacles, context)
