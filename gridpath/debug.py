"""
Debug Rendering Utilities

Observer that collects highlight events and saves annotated PNG snapshots
of a grid: walls, visited cells shaded by distance, path, obstacles and
detour endpoints.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from gridpath.engine import Coord, Grid, GridObserver, HighlightTag

logger = logging.getLogger(__name__)


# Debug settings
DEBUG_DIR = Path("./debug")
MAX_DEBUG_IMAGES = 10
CELL_SIZE = 12

BACKGROUND = (255, 255, 255)
GRID_LINE = (220, 220, 220)

TAG_COLORS: Dict[HighlightTag, tuple] = {
    HighlightTag.WALL: (0, 0, 0),
    HighlightTag.SOURCE: (0, 153, 255),
    HighlightTag.TARGET: (0, 200, 0),
    HighlightTag.VISITED: (0, 255, 255),
    HighlightTag.PATH: (255, 220, 0),
    HighlightTag.OBSTACLE: (90, 90, 90),
    HighlightTag.DETOUR: (255, 0, 255),
}

# Later tags win when a cell receives several highlights
TAG_PRIORITY = {
    HighlightTag.VISITED: 0,
    HighlightTag.WALL: 1,
    HighlightTag.OBSTACLE: 2,
    HighlightTag.PATH: 3,
    HighlightTag.DETOUR: 4,
    HighlightTag.SOURCE: 5,
    HighlightTag.TARGET: 5,
}


class DebugRenderer(GridObserver):
    """
    Renderer collaborator: remembers the strongest highlight per cell.

    Attributes:
        highlights: Coordinate -> highest-priority tag seen so far
        visited: Coordinate -> distance at finalization
    """

    def __init__(self, cell_size: int = CELL_SIZE):
        self.cell_size = cell_size
        self.highlights: Dict[Coord, HighlightTag] = {}
        self.visited: Dict[Coord, int] = {}

    def highlight(self, coord: Coord, tag: HighlightTag) -> None:
        current = self.highlights.get(coord)
        if current is None or TAG_PRIORITY[tag] >= TAG_PRIORITY[current]:
            self.highlights[coord] = tag

    def obstacle_changed(self, coord: Coord, blocked: bool) -> None:
        if blocked:
            self.highlight(coord, HighlightTag.OBSTACLE)
        elif self.highlights.get(coord) == HighlightTag.OBSTACLE:
            del self.highlights[coord]

    def cell_finalized(self, coord: Coord, distance: int) -> None:
        self.visited[coord] = distance
        self.highlight(coord, HighlightTag.VISITED)

    def clear(self) -> None:
        self.highlights.clear()
        self.visited.clear()

    def render(self, grid: Grid, title: str = "") -> Image.Image:
        """
        Draw the grid with the collected highlights.

        Visited cells are shaded from light to dark cyan by distance.

        Args:
            grid: Grid to draw (walls come from its blocked flags)
            title: Optional caption drawn in the top-left corner

        Returns:
            RGB PIL Image
        """
        size = self.cell_size
        pixels = np.full((grid.height * size, grid.width * size, 3), BACKGROUND, dtype=np.uint8)

        shade = self._distance_shade(grid)
        blocked = grid.blocked_mask()

        for cell in grid.cells():
            x, y = cell.coords
            tag = self.highlights.get((x, y))
            if tag is None and blocked[y, x]:
                tag = HighlightTag.WALL
            if tag is None:
                continue
            color = np.array(TAG_COLORS[tag], dtype=np.float32)
            if tag == HighlightTag.VISITED:
                color = color * shade[y, x]
            pixels[y * size:(y + 1) * size, x * size:(x + 1) * size] = color.astype(np.uint8)

        image = Image.fromarray(pixels, "RGB")
        draw = ImageDraw.Draw(image)
        for x in range(1, grid.width):
            draw.line([(x * size, 0), (x * size, grid.height * size)], fill=GRID_LINE)
        for y in range(1, grid.height):
            draw.line([(0, y * size), (grid.width * size, y * size)], fill=GRID_LINE)

        if title:
            draw.text((2, 2), title, fill="red", font=ImageFont.load_default())
        return image

    def _distance_shade(self, grid: Grid) -> np.ndarray:
        """Per-cell brightness in [0.4, 1.0]; nearer cells are brighter."""
        shade = np.ones(grid.shape, dtype=np.float32)
        if not self.visited:
            return shade
        furthest = max(max(self.visited.values()), 1)
        for (x, y), distance in self.visited.items():
            if grid.in_bounds(x, y):
                shade[y, x] = 1.0 - 0.6 * (distance / furthest)
        return shade

    def save(self, grid: Grid, path: Optional[str] = None, title: str = "") -> Path:
        """Render and save; the default file name is timestamped inside DEBUG_DIR."""
        if path is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
            path = str(DEBUG_DIR / f"debug_{timestamp}.png")
        save_debug_image(self.render(grid, title), path)
        return Path(path)


def save_debug_image(image: Image.Image, path: str) -> None:
    """
    Save a rendered debug image and prune old ones.

    Args:
        image: Rendered PIL Image
        path: Output file path
    """
    # Ensure debug directory exists
    DEBUG_DIR.mkdir(parents=True, exist_ok=True)
    Path(path).parent.mkdir(parents=True, exist_ok=True)

    image.save(path, "PNG")
    logger.debug(f"Debug image saved: {path}")

    # Cleanup old debug images
    _cleanup_debug_images()


def _cleanup_debug_images() -> None:
    """Remove old debug images, keeping only the most recent MAX_DEBUG_IMAGES."""
    if not DEBUG_DIR.exists():
        return

    # Get all debug images sorted by modification time
    debug_files = sorted(
        DEBUG_DIR.glob("debug_*.png"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    # Remove old files
    for old_file in debug_files[MAX_DEBUG_IMAGES:]:
        try:
            old_file.unlink()
        except OSError as e:
            logger.debug(f"Could not remove {old_file}: {e}")
