"""
Test script for detour scoring on the race track

Usage:
    python tests/test_detours.py
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from gridpath.engine import (
    CancellationRequested,
    DetourAnalyzer,
    GridObserver,
    HighlightTag,
    RecordingObserver,
    RunContext,
    TUNNEL_BUDGET,
    Unreachable,
    manhattan,
    score_detours,
    solve,
)
from gridpath.parsing import parse_map

from grid_fixtures import RACE_MAP, RACE_TUNNEL_HISTOGRAM


def _solved_race():
    parsed = parse_map(RACE_MAP)
    result = solve(parsed.grid, parsed.source, parsed.target)
    return parsed.grid, result.path


def test_tunnel_histogram():
    """Budget 2 over the race track."""
    print("\n" + "="*60)
    print("TEST: Tunnel histogram")
    print("="*60)

    grid, path = _solved_race()
    report = score_detours(grid, path, budget=TUNNEL_BUDGET, threshold=4)

    for score, count in report.sorted_items():
        print(f"  {count} detours save {score}")

    assert report.histogram == RACE_TUNNEL_HISTOGRAM
    assert report.sorted_items() == [(2, 2), (4, 2), (6, 2), (8, 1)]
    assert report.total == 7
    assert report.best_score == 8
    assert report.count_at_or_above == 5
    assert report.metrics.pairs_scored > report.total

    assert score_detours(grid, path, 2, 8).count_at_or_above == 1
    assert score_detours(grid, path, 2, 9).count_at_or_above == 0

    print("  [PASS] Tunnel histogram")


def test_larger_budget_dominates():
    """Every score seen at budget 2 is seen at least as often at budget 3."""
    grid, path = _solved_race()
    small = score_detours(grid, path, 2, 0).histogram
    large = score_detours(grid, path, 3, 0).histogram

    for score, count in small.items():
        assert large.get(score, 0) >= count, f"score {score}: {large.get(score)} < {count}"
    assert sum(large.values()) >= sum(small.values())

    print("  [PASS] Budget dominance tests")


def test_invalid_inputs():
    """Budget below 2 and unsolved paths are rejected."""
    grid, path = _solved_race()

    for call in (lambda: score_detours(grid, path, 1, 0),
                 lambda: DetourAnalyzer(budget=0)):
        try:
            call()
        except ValueError:
            pass
        else:
            raise AssertionError("Budget below 2 should raise ValueError")

    grid.reset_distances()
    try:
        score_detours(grid, path, 2, 0)
    except Unreachable:
        pass
    else:
        raise AssertionError("Unsolved path should raise Unreachable")

    print("  [PASS] Invalid input tests")


def test_empty_and_straight_paths():
    """A single-cell or straight path has nothing to shortcut."""
    parsed = parse_map("S...E")
    result = solve(parsed.grid, parsed.source, parsed.target)
    report = score_detours(parsed.grid, result.path, 4, 1)
    assert report.histogram == {}
    assert report.total == 0
    assert report.best_score == 0

    assert manhattan((0, 0), (3, 4)) == 7

    print("  [PASS] Straight path tests")


def test_observer_and_cancellation():
    """detour_scored fires for every pair within the budget; cancel stops the scan."""
    grid, path = _solved_race()
    observer = RecordingObserver()
    report = score_detours(grid, path, 2, 0, RunContext(observer=observer))
    scored = observer.of_kind("detour_scored")
    assert len(scored) == report.metrics.pairs_scored
    assert len([s for _, _, s in scored if s > 0]) == report.total
    assert any(s <= 0 for _, _, s in scored)
    assert ((1, 1), (3, 1), 8) in scored

    class CancelOnFirst(GridObserver):
        def __init__(self, context):
            self.context = context

        def detour_scored(self, start, end, score):
            self.context.cancel()

    context = RunContext()
    context.observer = CancelOnFirst(context)
    try:
        score_detours(grid, path, 2, 0, context)
    except CancellationRequested:
        pass
    else:
        raise AssertionError("Cancelled scan should raise")

    print("  [PASS] Observer/cancellation tests")


def test_analyzer():
    """DetourAnalyzer wraps the scan and highlights the best pair."""
    grid, path = _solved_race()
    analyzer = DetourAnalyzer.for_tunnel(threshold=6)
    assert analyzer.budget == TUNNEL_BUDGET

    report = analyzer.analyze(grid, path)
    assert report.count_at_or_above == 3
    assert report.best_detour == ((1, 1), (3, 1), 8)

    # Highlighting reads the report; the path is not scanned again
    observer = RecordingObserver()
    best = analyzer.highlight_best(report, RunContext(observer=observer))
    assert best == report.best_detour
    assert observer.of_kind("highlight") == [((1, 1), HighlightTag.DETOUR),
                                             ((3, 1), HighlightTag.DETOUR)]
    assert observer.of_kind("detour_scored") == []

    assert analyzer.highlight_best(report) == best

    parsed = parse_map("S...E")
    straight = analyzer.analyze(parsed.grid, solve(parsed.grid, parsed.source, parsed.target).path)
    assert straight.best_detour is None
    assert analyzer.highlight_best(straight) is None

    print("  [PASS] Analyzer tests")


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# DETOUR TESTS")
    print("#"*60)

    tests = [
        ("Tunnel Histogram", test_tunnel_histogram),
        ("Budget Dominance", test_larger_budget_dominates),
        ("Invalid Inputs", test_invalid_inputs),
        ("Straight Path", test_empty_and_straight_paths),
        ("Observer/Cancellation", test_observer_and_cancellation),
        ("Analyzer", test_analyzer),
    ]

    failed = 0
    for name, test in tests:
        try:
            test()
            print(f"  {name}: [PASS]")
        except AssertionError as e:
            failed += 1
            print(f"  {name}: [FAIL] {e}")

    print()
    print("All tests PASSED!" if not failed else f"{failed} tests FAILED!")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
