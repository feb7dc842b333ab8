"""
Result Module - Outcomes of solves, obstacle runs and detour scans.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from .grid import Coord, Path


@dataclass
class RunMetrics:
    """
    Performance metrics for one operation.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        cells_finalized: Cells finalized by the solver (summed over re-solves)
        solves: Number of full solves performed
        pairs_scored: Path position pairs within the detour budget
        solver_name: Name of the solver strategy used
    """
    computation_time_ms: float = 0.0
    cells_finalized: int = 0
    solves: int = 0
    pairs_scored: int = 0
    solver_name: str = ""


@dataclass
class PathResult:
    """
    Successful solve.

    Attributes:
        source: Start coordinate
        target: End coordinate
        distance: Hop count from source to target
        path: Coordinates from source to target inclusive
        distance_field: Distances at the end of the solve, -1 where unreached
        metrics: Performance statistics
    """
    source: Coord
    target: Coord
    distance: int
    path: Path
    distance_field: np.ndarray = field(repr=False, compare=False)
    metrics: RunMetrics = field(default_factory=RunMetrics, compare=False)

    found = True

    def __bool__(self) -> bool:
        return True

    @property
    def edge_count(self) -> int:
        """Number of moves along the path."""
        return len(self.path) - 1


@dataclass
class NoPathFound:
    """
    Source and target are disconnected under the current obstacles.

    A normal result, not an error. Evaluates as False so callers can write
    ``if not result:``.
    """
    source: Coord
    target: Coord
    metrics: RunMetrics = field(default_factory=RunMetrics, compare=False)

    found = False

    def __bool__(self) -> bool:
        return False


@dataclass
class Disconnection:
    """
    First obstacle after which source and target are disconnected.

    Attributes:
        coord: The obstacle that cut the last route
        applied_count: Obstacles applied so far, including this one (1-based)
        paths: Path found after each surviving prefix, in order
        metrics: Performance statistics across all re-solves
    """
    coord: Coord
    applied_count: int
    paths: List[Path] = field(default_factory=list, repr=False)
    metrics: RunMetrics = field(default_factory=RunMetrics, compare=False)

    @property
    def last_path(self) -> Optional[Path]:
        """Path that survived the previous obstacle, if any was recorded."""
        return self.paths[-1] if self.paths else None


@dataclass
class DetourReport:
    """
    Histogram of shortcut savings over a baseline path.

    Attributes:
        budget: Maximum Manhattan length of a shortcut
        threshold: Minimum saving counted in count_at_or_above
        histogram: Saving -> number of shortcuts with that saving
        count_at_or_above: Shortcuts saving at least threshold
        best_detour: First (start, end, score) with the largest saving, or None
        metrics: Performance statistics
    """
    budget: int
    threshold: int
    histogram: Dict[int, int] = field(default_factory=dict)
    count_at_or_above: int = 0
    best_detour: Optional[Tuple[Coord, Coord, int]] = None
    metrics: RunMetrics = field(default_factory=RunMetrics, compare=False)

    @property
    def total(self) -> int:
        """Total number of positive-saving shortcuts."""
        return sum(self.histogram.values())

    @property
    def best_score(self) -> int:
        """Largest saving found, 0 if none."""
        return max(self.histogram) if self.histogram else 0

    def sorted_items(self) -> List[Tuple[int, int]]:
        """(saving, count) pairs in ascending saving order."""
        return sorted(self.histogram.items())
