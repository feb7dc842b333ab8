"""
Observer Module - Optional progress hooks for renderers and other collaborators.

The engine calls these hooks at fixed checkpoints (cell finalized, obstacle
applied, detour pair scored). Results never depend on what an observer does.
"""

from enum import Enum
from typing import List, Tuple

from .grid import Coord, Path


class HighlightTag(Enum):
    """Semantic colour tags understood by renderers."""
    WALL = "wall"
    SOURCE = "source"
    TARGET = "target"
    VISITED = "visited"
    PATH = "path"
    OBSTACLE = "obstacle"
    DETOUR = "detour"


class GridObserver:
    """
    Base observer. Every hook is a no-op; override the ones you need.
    """

    def highlight(self, coord: Coord, tag: HighlightTag) -> None:
        """Renderer highlight event."""

    def obstacle_changed(self, coord: Coord, blocked: bool) -> None:
        """A cell's blocked state changed."""

    def cell_finalized(self, coord: Coord, distance: int) -> None:
        """The solver finalized a cell's distance."""

    def obstacle_applied(self, coord: Coord, applied_count: int) -> None:
        """The obstacle controller applied its Nth obstacle."""

    def detour_scored(self, start: Coord, end: Coord, score: int) -> None:
        """The detour analyzer scored a pair within its budget (score may be <= 0)."""


class NullObserver(GridObserver):
    """Observer that ignores everything. Used when none is registered."""


class RecordingObserver(GridObserver):
    """
    Observer that keeps every event in memory, in arrival order.

    Attributes:
        events: List of (event_name, payload) tuples
    """

    def __init__(self):
        self.events: List[Tuple[str, tuple]] = []

    def highlight(self, coord: Coord, tag: HighlightTag) -> None:
        self.events.append(("highlight", (coord, tag)))

    def obstacle_changed(self, coord: Coord, blocked: bool) -> None:
        self.events.append(("obstacle_changed", (coord, blocked)))

    def cell_finalized(self, coord: Coord, distance: int) -> None:
        self.events.append(("cell_finalized", (coord, distance)))

    def obstacle_applied(self, coord: Coord, applied_count: int) -> None:
        self.events.append(("obstacle_applied", (coord, applied_count)))

    def detour_scored(self, start: Coord, end: Coord, score: int) -> None:
        self.events.append(("detour_scored", (start, end, score)))

    def of_kind(self, name: str) -> List[tuple]:
        """Payloads of all events with the given name."""
        return [payload for event, payload in self.events if event == name]

    def clear(self) -> None:
        self.events.clear()


def highlight_path(observer: GridObserver, path: Path) -> None:
    """Emit PATH highlights for every coordinate on a path."""
    for coord in path:
        observer.highlight(coord, HighlightTag.PATH)
