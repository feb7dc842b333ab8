"""
Grid Pathing Tools - Entry Point

Runs one of the three grid scenarios from the command line.

Example:
    python main.py solve maps/race.txt
    python main.py detours maps/race.txt --budget 20 --threshold 100
    python main.py obstacles bytes.txt --size 71 71 --initial 1024
    python main.py --debug solve maps/race.txt   # Also write a debug PNG
"""

import sys
import logging
import argparse
from typing import List, Optional

from gridpath.engine import (
    CancellationRequested,
    DetourAnalyzer,
    DynamicObstacleController,
    Grid,
    GridPathError,
    HighlightTag,
    RunContext,
    get_solver_info,
    get_solver_names,
    highlight_path,
    solve,
)
from gridpath.debug import DebugRenderer
from gridpath.parsing import corner_endpoints, load_map, load_obstacles, open_grid
from gridpath.settings import load_settings, save_settings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CANCELLED = 1
EXIT_INPUT_ERROR = 2


def configure_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """Configure logging - console output, plus a file when requested."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
    )


class Application:
    """
    Command-line controller.

    Merges saved settings with CLI flags and runs the selected scenario.
    """

    def __init__(self, args: argparse.Namespace):
        """
        Initialize the application.

        Args:
            args: Parsed command-line arguments
        """
        self.args = args
        self.settings = load_settings()

        # CLI flags override saved settings
        if args.strategy:
            self.settings["solver_name"] = args.strategy
        if args.timeout is not None:
            self.settings["timeout_sec"] = args.timeout
        if args.debug:
            self.settings["debug_enabled"] = True

        self.debug_mode = bool(self.settings.get("debug_enabled", False))
        self.renderer = None
        if self.debug_mode:
            self.renderer = DebugRenderer()

    def _context(self) -> RunContext:
        context = RunContext(timeout_sec=self.settings.get("timeout_sec"))
        if self.renderer is not None:
            context.observer = self.renderer
        return context

    def _save_debug(self, grid: Grid, title: str) -> None:
        if self.renderer is not None:
            path = self.renderer.save(grid, title=title)
            logger.info(f"Debug image saved: {path}")

    def run_solve(self) -> int:
        parsed = load_map(self.args.map)
        context = self._context()
        self._mark_endpoints(context, parsed.source, parsed.target)

        result = solve(parsed.grid, parsed.source, parsed.target, context,
                       strategy=self.settings["solver_name"])
        if not result:
            print("No path from source to target")
        else:
            highlight_path(context.observer, result.path)
            print(f"Shortest path: {result.distance} steps ({len(result.path)} cells)")
        self._save_debug(parsed.grid, "solve")
        return EXIT_OK

    def run_detours(self) -> int:
        parsed = load_map(self.args.map)
        budget = (self.args.budget if self.args.budget is not None
                  else self.settings["detour_budget"])
        threshold = (self.args.threshold if self.args.threshold is not None
                     else self.settings["detour_threshold"])
        context = self._context()
        self._mark_endpoints(context, parsed.source, parsed.target)

        baseline = solve(parsed.grid, parsed.source, parsed.target, context,
                         strategy=self.settings["solver_name"])
        if not baseline:
            print("No path from source to target")
            return EXIT_OK
        print(f"Full race length without detours: {baseline.distance}")

        analyzer = DetourAnalyzer(budget=budget, threshold=threshold)
        report = analyzer.analyze(parsed.grid, baseline.path, context)
        for score, count in report.sorted_items():
            print(f"- {count} detours that save {score}")
        print(f"Total detours that save at least {threshold}: {report.count_at_or_above}")

        if self.renderer is not None:
            highlight_path(context.observer, baseline.path)
            analyzer.highlight_best(report, context)
        self._save_debug(parsed.grid, f"detours budget={budget}")
        return EXIT_OK

    def run_obstacles(self) -> int:
        obstacles = load_obstacles(self.args.obstacles)
        width, height = self.args.size or self.settings["arena_size"]
        initial = (self.args.initial if self.args.initial is not None
                   else self.settings["initial_obstacle_count"])
        if initial < 0:
            raise ValueError(f"Initial obstacle count must not be negative, got {initial}")
        initial = min(initial, len(obstacles))

        grid = open_grid(width, height)
        source, target = corner_endpoints(grid)
        context = self._context()
        self._mark_endpoints(context, source, target)

        controller = DynamicObstacleController(
            grid, source, target,
            strategy=self.settings["solver_name"],
            record_paths=self.debug_mode,
        )
        controller.apply_initial(obstacles[:initial], context.observer)

        baseline = solve(grid, source, target, context, strategy=controller.strategy)
        if baseline:
            print(f"Shortest path after {initial} obstacles: {baseline.distance}")
        else:
            print(f"No path after {initial} obstacles")
            self._save_debug(grid, "obstacles")
            return EXIT_OK

        disconnection = controller.run(obstacles[initial:], context)
        if disconnection is None:
            print("Path never disconnected")
        else:
            x, y = disconnection.coord
            index = initial + disconnection.applied_count
            print(f"First blocking obstacle: {x},{y} (obstacle #{index})")
            if disconnection.last_path:
                highlight_path(context.observer, disconnection.last_path)
        self._save_debug(grid, "obstacles")
        return EXIT_OK

    def _mark_endpoints(self, context: RunContext, source, target) -> None:
        context.observer.highlight(source, HighlightTag.SOURCE)
        context.observer.highlight(target, HighlightTag.TARGET)

    def run(self) -> int:
        """
        Run the selected command.

        Returns:
            Exit code
        """
        handlers = {
            "solve": self.run_solve,
            "detours": self.run_detours,
            "obstacles": self.run_obstacles,
        }
        try:
            code = handlers[self.args.command]()
        except CancellationRequested as e:
            logger.warning(f"Run stopped: {e}")
            return EXIT_CANCELLED
        except GridPathError as e:
            logger.error(f"Input error: {e}")
            return EXIT_INPUT_ERROR
        except ValueError as e:
            logger.error(f"Invalid argument: {e}")
            return EXIT_INPUT_ERROR

        if self.args.save:
            save_settings(self.settings)
        return code


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Grid pathing tools - shortest paths, obstacle severance and detour scoring"
    )
    parser.add_argument(
        "--strategy", "-s",
        choices=get_solver_names(),
        help="Solver strategy (default: saved setting). "
             + "; ".join(f"{name}: {description}" for name, description in get_solver_info())
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        help="Abort after this many seconds"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Save a debug image of the final grid"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log at DEBUG level"
    )
    parser.add_argument(
        "--log-file",
        help="Also write the log to this file"
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Persist the effective settings to config.json"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    solve_cmd = commands.add_parser("solve", help="Shortest path through a map")
    solve_cmd.add_argument("map", help="Map file ('#', '.', 'S', 'E')")

    detour_cmd = commands.add_parser("detours", help="Score shortcuts over the shortest path")
    detour_cmd.add_argument("map", help="Map file ('#', '.', 'S', 'E')")
    detour_cmd.add_argument("--budget", "-b", type=int, help="Maximum shortcut length (>= 2)")
    detour_cmd.add_argument("--threshold", type=int, help="Minimum saving to count")

    obstacle_cmd = commands.add_parser("obstacles", help="Find the obstacle that cuts the path")
    obstacle_cmd.add_argument("obstacles", help="Obstacle file, one 'x,y' per line")
    obstacle_cmd.add_argument("--size", type=int, nargs=2, metavar=("W", "H"),
                              help="Arena size (default: saved setting)")
    obstacle_cmd.add_argument("--initial", type=int,
                              help="Obstacles applied before the search starts")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the selected scenario."""
    args = parse_args(argv)
    configure_logging(args.verbose, args.log_file)

    application = Application(args)
    return application.run()


if __name__ == "__main__":
    sys.exit(main())
