"""
Minesweeper game module.

Provides the ground-truth board the solver plays against and a
terminal display for watching it.
"""
from .cell import Cell
from .board import (
    MineField,
    BoardConfig,
    GuessMismatchError,
    Prng,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
)
from .display import TerminalDisplay, render_text

__all__ = [
    "Cell",
    "MineField",
    "BoardConfig",
    "GuessMismatchError",
    "Prng",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "TerminalDisplay",
    "render_text",
]
