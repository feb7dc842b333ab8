"""
Detour Analyzer Module - Scores bounded-length shortcuts over a solved path.

A detour jumps directly between two path positions at most `budget` Manhattan
steps apart, ignoring walls. Its score is the path distance it skips minus
the length of the jump. Budget 2 models tunnelling through a single wall.
"""

import logging
import time
from typing import Dict, List, Optional, Sequence, Tuple

from .context import RunContext
from .errors import Unreachable
from .grid import Coord, Grid
from .observer import HighlightTag
from .result import DetourReport, RunMetrics

logger = logging.getLogger(__name__)

TUNNEL_BUDGET = 2


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _path_positions(grid: Grid, path: Sequence[Coord]) -> List[Tuple[int, int, int]]:
    """(x, y, distance) for each path coordinate, read from the baseline solve."""
    positions = []
    for x, y in path:
        cell = grid.get(x, y)
        if not cell.is_reached:
            raise Unreachable(f"Path cell {x},{y} has no distance; solve the grid first")
        positions.append((x, y, int(cell.best_distance)))
    return positions


def score_detours(grid: Grid, path: Sequence[Coord], budget: int, threshold: int,
                  context: Optional[RunContext] = None) -> DetourReport:
    """
    Count every shortcut along the path that saves time.

    For each pair (i, j) with i before j on the path and Manhattan distance
    m <= budget, score = (dist(j) - dist(i)) - m. The observer sees every
    such pair; only positive scores go into the histogram. Ties for the best
    detour keep the earliest pair along the path.

    Args:
        grid: Grid solved from the path's source (distances are read only)
        path: Baseline path, source first
        budget: Maximum shortcut length (>= 2)
        threshold: Minimum score counted in count_at_or_above
        context: Optional run context (cancellation, observer, progress)

    Returns:
        DetourReport with the histogram and threshold count

    Raises:
        ValueError: If budget < 2
        OutOfRange: If a path coordinate is outside the grid
        Unreachable: If a path cell has no distance
        CancellationRequested: If cancelled; no partial report is returned
    """
    if budget < TUNNEL_BUDGET:
        raise ValueError(f"Detour budget must be at least {TUNNEL_BUDGET}, got {budget}")

    context = context or RunContext()
    start_time = time.perf_counter()
    positions = _path_positions(grid, path)
    count = len(positions)

    histogram: Dict[int, int] = {}
    best: Optional[Tuple[Coord, Coord, int]] = None
    pairs_scored = 0

    for i in range(count):
        context.check_cancelled()
        xi, yi, di = positions[i]

        for j in range(i + 1, count):
            xj, yj, dj = positions[j]
            length = manhattan((xi, yi), (xj, yj))
            if length > budget:
                continue

            pairs_scored += 1
            score = (dj - di) - length
            context.observer.detour_scored((xi, yi), (xj, yj), score)
            if score > 0:
                histogram[score] = histogram.get(score, 0) + 1
                if best is None or score > best[2]:
                    best = ((xi, yi), (xj, yj), score)

        if i % 64 == 0:
            context.report_progress(i / count, f"{i}/{count} path positions scanned")

    count_at_or_above = sum(n for score, n in histogram.items() if score >= threshold)
    metrics = RunMetrics(
        computation_time_ms=(time.perf_counter() - start_time) * 1000,
        pairs_scored=pairs_scored,
    )
    logger.info(
        f"Detours (budget {budget}): {sum(histogram.values())} found, "
        f"{count_at_or_above} save at least {threshold}"
    )
    return DetourReport(
        budget=budget,
        threshold=threshold,
        histogram=histogram,
        count_at_or_above=count_at_or_above,
        best_detour=best,
        metrics=metrics,
    )


class DetourAnalyzer:
    """
    Configured detour scan.

    Attributes:
        budget: Maximum shortcut length
        threshold: Minimum saving counted as significant
    """

    def __init__(self, budget: int = TUNNEL_BUDGET, threshold: int = 100):
        if budget < TUNNEL_BUDGET:
            raise ValueError(f"Detour budget must be at least {TUNNEL_BUDGET}, got {budget}")
        self.budget = budget
        self.threshold = threshold

    @classmethod
    def for_tunnel(cls, threshold: int = 100) -> 'DetourAnalyzer':
        """Single-wall tunnel configuration (budget 2)."""
        return cls(budget=TUNNEL_BUDGET, threshold=threshold)

    def analyze(self, grid: Grid, path: Sequence[Coord],
                context: Optional[RunContext] = None) -> DetourReport:
        return score_detours(grid, path, self.budget, self.threshold, context)

    @staticmethod
    def highlight_best(report: DetourReport,
                       context: Optional[RunContext] = None) -> Optional[Tuple[Coord, Coord, int]]:
        """
        Send DETOUR highlights for both ends of the report's best detour.

        Returns:
            (start, end, score), or None if no detour saves anything
        """
        context = context or RunContext()
        best = report.best_detour
        if best is not None:
            context.observer.highlight(best[0], HighlightTag.DETOUR)
            context.observer.highlight(best[1], HighlightTag.DETOUR)
        return best
