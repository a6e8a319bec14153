"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports, and the project root for main.py
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.append(str(Path(__file__).parent.parent))

from game import BoardConfig, MineField
from solver import SolverSession


def layout_board(rows) -> MineField:
    """Build a board from nested lists of mine flags (rows = y)."""
    return MineField.from_layout(np.array(rows, dtype=bool))


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def row_of_three() -> MineField:
    """1x3 board without mines."""
    return layout_board([[False, False, False]])


@pytest.fixture
def row_ending_in_mine() -> MineField:
    """1x3 board with a mine in the last cell."""
    return layout_board([[False, False, True]])


@pytest.fixture
def center_mine() -> MineField:
    """3x3 board with a single mine in the centre."""
    return layout_board([
        [False, False, False],
        [False, True, False],
        [False, False, False],
    ])


@pytest.fixture
def walled_row() -> MineField:
    """1x5 board where mines cut off the right-hand cells."""
    return layout_board([[False, True, False, True, False]])


@pytest.fixture
def ambiguous_square() -> MineField:
    """2x2 board whose single mine cannot be located from the corner."""
    return layout_board([
        [False, False],
        [False, True],
    ])


@pytest.fixture
def make_board():
    """Factory building a board from nested lists of mine flags."""
    return layout_board


@pytest.fixture
def small_config() -> BoardConfig:
    """Small generated board configuration."""
    return BoardConfig(width=10, height=10, seed=42)


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def center_session(center_mine: MineField) -> SolverSession:
    """Centre-mine session with the top row already revealed."""
    session = SolverSession(center_mine)
    session.make_guess(0, 0, False)
    session.make_guess(2, 0, False)
    session.make_guess(1, 0, False)
    return session
