"""
Strategies Package - Concrete solver implementations.

Import this module to register all built-in solvers.
"""

from .linear_scan import LinearScanSolver
from .binary_heap import BinaryHeapSolver

__all__ = [
    "LinearScanSolver",
    "BinaryHeapSolver",
]
