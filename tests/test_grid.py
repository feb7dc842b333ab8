"""
Test script for the Grid/Cell model

Covers:
1. Construction and addressing
2. Bounds checking (OutOfRange, never clamped)
3. Neighbour order
4. Distance reset and full reset
5. Distance field export

Usage:
    python tests/test_grid.py
"""

import sys
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from gridpath.engine import INFINITY, Grid, OutOfRange

from grid_fixtures import grid_from_rows


def test_construction():
    """Every coordinate maps to exactly one cell."""
    print("\n" + "="*60)
    print("TEST: Grid construction")
    print("="*60)

    grid = Grid(5, 3)
    print(f"  Created grid: {grid}")

    assert grid.width == 5
    assert grid.height == 3
    assert grid.shape == (3, 5)
    assert len(grid) == 15

    seen = set()
    for cell in grid.cells():
        assert grid.get(*cell.coords) is cell
        seen.add(cell.coords)
    assert len(seen) == 15

    cell = grid.get(4, 2)
    assert cell.coords == (4, 2)
    assert not cell.blocked
    assert cell.best_distance == INFINITY
    assert cell.predecessor is None
    assert not cell.is_reached

    print("  [PASS] Grid construction tests")


def test_invalid_dimensions():
    """Non-positive sizes are rejected."""
    for width, height in [(0, 3), (3, 0), (-1, 2)]:
        try:
            Grid(width, height)
        except ValueError:
            continue
        raise AssertionError(f"Grid({width}, {height}) should fail")

    print("  [PASS] Invalid dimension tests")


def test_out_of_range():
    """Access outside the grid raises instead of clamping."""
    print("\n" + "="*60)
    print("TEST: OutOfRange")
    print("="*60)

    grid = Grid(7, 7)
    for coord in [(7, 0), (0, 7), (-1, 3), (3, -1)]:
        try:
            grid.get(*coord)
        except OutOfRange as e:
            print(f"  {coord}: {e}")
            assert e.coord == coord
            assert (e.width, e.height) == (7, 7)
            assert isinstance(e, IndexError)
        else:
            raise AssertionError(f"get{coord} should raise OutOfRange")

    for call in (lambda: grid.set_blocked(7, 7, True), lambda: grid.neighbors(-1, 0)):
        try:
            call()
        except OutOfRange:
            pass
        else:
            raise AssertionError("Expected OutOfRange")

    assert (6, 6) in grid
    assert (7, 6) not in grid
    assert "6,6" not in grid

    print("  [PASS] OutOfRange tests")


def test_neighbor_order():
    """Neighbours come back up, right, down, left, skipping the border."""
    grid = Grid(3, 3)
    grid.set_blocked(1, 0, True)

    assert grid.neighbors(1, 1) == [(1, 0), (2, 1), (1, 2), (0, 1)]
    assert grid.neighbors(0, 0) == [(1, 0), (0, 1)]
    assert grid.neighbors(2, 2) == [(2, 1), (1, 2)]

    print("  [PASS] Neighbour order tests")


def test_blocking_and_reset():
    """set_blocked leaves distances alone; reset() clears everything."""
    grid = grid_from_rows([
        "#..",
        ".#.",
        "..#",
    ])
    assert grid.blocked_coords() == [(0, 0), (1, 1), (2, 2)]

    cell = grid.get(0, 1)
    cell.best_distance = 3
    cell.predecessor = (0, 2)

    grid.set_blocked(0, 1, True)
    assert cell.best_distance == 3

    grid.reset_distances()
    assert cell.blocked
    assert cell.best_distance == INFINITY
    assert cell.predecessor is None

    grid.reset()
    assert grid.blocked_coords() == []

    print("  [PASS] Blocking/reset tests")


def test_distance_field_and_copy():
    """Distance field marks unreached cells with -1; copies share no state."""
    grid = Grid(3, 2)
    grid.get(0, 0).best_distance = 0
    grid.get(1, 0).best_distance = 1
    grid.set_blocked(2, 1, True)

    field = grid.distance_field()
    expected = np.array([[0, 1, -1], [-1, -1, -1]])
    assert field.shape == (2, 3)
    assert np.array_equal(field, expected)
    assert np.array_equal(grid.blocked_mask(), np.array([[False, False, False], [False, False, True]]))

    clone = grid.copy()
    assert clone.blocked_coords() == [(2, 1)]
    assert not clone.get(0, 0).is_reached
    clone.set_blocked(0, 0, True)
    assert not grid.is_blocked(0, 0)

    assert grid.to_text(source=(0, 0), target=(1, 1)) == "S..\n.E#"

    print("  [PASS] Distance field tests")


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# GRID MODEL TESTS")
    print("#"*60)

    tests = [
        ("Construction", test_construction),
        ("Invalid Dimensions", test_invalid_dimensions),
        ("OutOfRange", test_out_of_range),
        ("Neighbour Order", test_neighbor_order),
        ("Blocking/Reset", test_blocking_and_reset),
        ("Distance Field", test_distance_field_and_copy),
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
