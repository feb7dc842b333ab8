"""
Linear Scan Solver - Label-correcting Dijkstra with unit weights.

Picks the next cell by scanning the whole tentative list each iteration,
which makes a solve O(V^2). Fine for grids up to a few hundred cells per side.
"""

from typing import List, Optional, Set, Tuple

from ..base import PathSolver
from ..context import RunContext
from ..factory import register_solver
from ..grid import Cell, Coord, Grid


@register_solver
class LinearScanSolver(PathSolver):
    """
    Reference solver.

    Algorithm:
        1. Reset distances, source distance = 0
        2. Relax every unblocked, unvisited neighbour of the current cell;
           improved neighbours join the tentative list
        3. Finalize the current cell (drop it from unvisited and tentative)
        4. Stop when the target is finalized, or when nothing is tentative
        5. Next current cell = lowest (distance, y, x) in the tentative list
    """
    name = "linear"
    description = "Linear scan (reference) - O(V^2) minimum selection"

    def search(self, grid: Grid, source: Coord, target: Optional[Coord],
               context: RunContext) -> Tuple[bool, int]:
        grid.reset_distances()

        current = grid.get(*source)
        current.best_distance = 0

        unvisited: Set[Coord] = {cell.coords for cell in grid.cells()}
        tentative: List[Cell] = []
        finalized = 0

        while True:
            context.check_cancelled()

            for nx, ny in grid.neighbors(*current.coords):
                neighbour = grid.get(nx, ny)
                if neighbour.blocked or neighbour.coords not in unvisited:
                    continue
                distance = current.best_distance + 1
                if distance < neighbour.best_distance:
                    neighbour.best_distance = distance
                    neighbour.predecessor = current.coords
                    if neighbour not in tentative:
                        tentative.append(neighbour)

            unvisited.discard(current.coords)
            if current in tentative:
                tentative.remove(current)
            finalized += 1
            context.observer.cell_finalized(current.coords, int(current.best_distance))

            if current.coords == target:
                return True, finalized

            if not tentative:
                return False, finalized

            current = min(tentative, key=self._order_key)
