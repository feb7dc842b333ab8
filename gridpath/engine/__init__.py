"""
Engine Package - Grid shortest-path engine and its two analyses.

Public API:
    - Grid, Cell: Mutable obstacle grid with per-cell solver state
    - solve(): Shortest path from source to target
    - flood(): Full distance field from a source
    - apply_obstacles_until_disconnected(): First severing obstacle
    - score_detours(): Histogram of bounded shortcuts over a path
    - RunContext: Cancellation, timeout, observer, progress
    - GridObserver: No-op-safe hooks for renderers
    - create_solver(): Factory for registered solver strategies

Usage:
    from gridpath.engine import Grid, solve, score_detours

    grid = Grid(7, 7)
    grid.set_blocked(3, 3)

    result = solve(grid, (0, 0), (6, 6))
    if result:
        print(result.distance, result.path)
        report = score_detours(grid, result.path, budget=2, threshold=1)
        print(report.histogram)
"""

# Core data structures
from .grid import Cell, Coord, Grid, INFINITY, Path
from .errors import (
    CancellationRequested,
    GridPathError,
    InputFormatError,
    OutOfRange,
    Unreachable,
)
from .context import RunContext
from .observer import (
    GridObserver,
    HighlightTag,
    NullObserver,
    RecordingObserver,
    highlight_path,
)
from .result import (
    DetourReport,
    Disconnection,
    NoPathFound,
    PathResult,
    RunMetrics,
)

# Solver framework
from .base import PathSolver, reconstruct_path
from .factory import (
    create_solver,
    get_default_solver_name,
    get_solver_info,
    get_solver_names,
    register_solver,
)

# Import strategies to register them
from . import strategies

from .solver import flood, solve
from .obstacles import DynamicObstacleController, apply_obstacles_until_disconnected
from .detours import DetourAnalyzer, TUNNEL_BUDGET, manhattan, score_detours

__all__ = [
    # Data structures
    "Cell",
    "Coord",
    "Grid",
    "INFINITY",
    "Path",
    # Errors
    "CancellationRequested",
    "GridPathError",
    "InputFormatError",
    "OutOfRange",
    "Unreachable",
    # Context and observers
    "RunContext",
    "GridObserver",
    "HighlightTag",
    "NullObserver",
    "RecordingObserver",
    "highlight_path",
    # Results
    "DetourReport",
    "Disconnection",
    "NoPathFound",
    "PathResult",
    "RunMetrics",
    # Solver framework
    "PathSolver",
    "reconstruct_path",
    "create_solver",
    "get_default_solver_name",
    "get_solver_info",
    "get_solver_names",
    "register_solver",
    # Operations
    "solve",
    "flood",
    "DynamicObstacleController",
    "apply_obstacles_until_disconnected",
    "DetourAnalyzer",
    "TUNNEL_BUDGET",
    "manhattan",
    "score_detours",
]
