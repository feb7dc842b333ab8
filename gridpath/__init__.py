"""
gridpath - Grid shortest-path engine with obstacle and detour analyses.

Usage:
    from gridpath import parse_map, solve, score_detours

    parsed = parse_map(open("race.txt").read())
    result = solve(parsed.grid, parsed.source, parsed.target)
    report = score_detours(parsed.grid, result.path, budget=2, threshold=100)
"""

from .engine import (
    CancellationRequested,
    DetourAnalyzer,
    DetourReport,
    Disconnection,
    DynamicObstacleController,
    Grid,
    GridObserver,
    GridPathError,
    HighlightTag,
    InputFormatError,
    NoPathFound,
    OutOfRange,
    PathResult,
    RunContext,
    Unreachable,
    apply_obstacles_until_disconnected,
    flood,
    score_detours,
    solve,
)
from .parsing import (
    ParsedMap,
    corner_endpoints,
    load_map,
    load_obstacles,
    open_grid,
    parse_map,
    parse_obstacles,
)

__version__ = "0.1.0"

__all__ = [
    "CancellationRequested",
    "DetourAnalyzer",
    "DetourReport",
    "Disconnection",
    "DynamicObstacleController",
    "Grid",
    "GridObserver",
    "GridPathError",
    "HighlightTag",
    "InputFormatError",
    "NoPathFound",
    "OutOfRange",
    "PathResult",
    "RunContext",
    "Unreachable",
    "apply_obstacles_until_disconnected",
    "flood",
    "score_detours",
    "solve",
    "ParsedMap",
    "corner_endpoints",
    "load_map",
    "load_obstacles",
    "open_grid",
    "parse_map",
    "parse_obstacles",
]
