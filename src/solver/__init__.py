"""
Minesweeper deduction solver module.

Provides the constraint model and the engine that plays a board
without guessing:
- Grid: bounds-checked row-major storage
- Constraint / MineState: per-cell knowledge
- SolverSession: propagation, border extraction and backtracking
"""
from .grid import Grid, neighbors
from .constraint import Constraint, ConstraintViolationError, MineState
from .engine import (
    CellObserver,
    RevealBoard,
    SolveResult,
    SolverConfig,
    SolverSession,
    SolverStats,
)

__all__ = [
    "Grid",
    "neighbors",
    "Constraint",
    "ConstraintViolationError",
    "MineState",
    "CellObserver",
    "RevealBoard",
    "SolveResult",
    "SolverConfig",
    "SolverSession",
    "SolverStats",
]
