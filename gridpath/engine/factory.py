"""
Solver Factory Module - Name-based lookup of the registered path solvers.

Strategy modules register themselves with @register_solver on import
(see strategies/__init__.py). Callers pass a name or None for the default.
"""

from typing import Dict, List, Optional, Tuple, Type

from .base import PathSolver

DEFAULT_SOLVER = "linear"

_SOLVERS: Dict[str, Type[PathSolver]] = {}


def register_solver(cls: Type[PathSolver]) -> Type[PathSolver]:
    """Class decorator: make a PathSolver subclass available under cls.name."""
    _SOLVERS[cls.name] = cls
    return cls


def get_default_solver_name() -> str:
    """DEFAULT_SOLVER when registered, otherwise the first registered name."""
    if DEFAULT_SOLVER in _SOLVERS or not _SOLVERS:
        return DEFAULT_SOLVER
    return next(iter(_SOLVERS))


def create_solver(name: Optional[str] = None) -> PathSolver:
    """
    Instantiate a solver.

    Args:
        name: Registered solver name; None selects the default

    Returns:
        Fresh solver instance (solvers keep no state between solves)

    Raises:
        ValueError: If no solver is registered under that name
    """
    name = name or get_default_solver_name()
    try:
        return _SOLVERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown solver: {name}. Available: {', '.join(_SOLVERS)}"
        ) from None


def get_solver_names() -> List[str]:
    return list(_SOLVERS)


def get_solver_info() -> List[Tuple[str, str]]:
    """(name, description) for each registered solver, in registration order."""
    return [(cls.name, cls.description) for cls in _SOLVERS.values()]
