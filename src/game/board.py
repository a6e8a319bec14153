"""
Board module for Minesweeper.

Implements seeded mine placement, adjacent counts and the reveal
oracle the solver plays against.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .cell import Cell


_MASK_64 = (1 << 64) - 1


# ============================================================================
# Errors
# ============================================================================

class GuessMismatchError(AssertionError):
    """A cell was revealed under the wrong assumption about its contents."""

    def __init__(self, x: int, y: int, actual: bool, expected: bool) -> None:
        super().__init__(
            f"wrong guess at {x}, {y}, real: {actual}, guess: {expected}"
        )
        self.x = x
        self.y = y
        self.actual = actual
        self.expected = expected


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class BoardConfig:
    """
    Configuration for a generated Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        seed: Non-zero seed for the xorshift generator.
        mine_weight: Mine density in 32nds (each cell is a mine with
            probability mine_weight / 32).
    """

    width: int = 30
    height: int = 16
    seed: int = 23841421
    mine_weight: int = 7

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.seed == 0 or self.seed & _MASK_64 != self.seed:
            raise ValueError("Seed must be a non-zero 64-bit value")
        if not 0 <= self.mine_weight <= 32:
            raise ValueError("mine_weight must be between 0 and 32")


# Preset board sizes
BEGINNER = BoardConfig(9, 9)
INTERMEDIATE = BoardConfig(16, 16)
EXPERT = BoardConfig(30, 16)


# ============================================================================
# Random Source
# ============================================================================

@dataclass
class Prng:
    """64-bit xorshift generator; reproducible across platforms."""

    state: int

    def next(self) -> int:
        """Advance the generator and return the new state."""
        s = self.state
        s ^= (s << 13) & _MASK_64
        s ^= s >> 7
        s ^= (s << 17) & _MASK_64
        self.state = s
        return s


# ============================================================================
# Mine Field
# ============================================================================

@dataclass
class MineField:
    """
    Ground-truth Minesweeper board.

    Holds the mine layout and adjacent counts, and answers reveal queries.
    Coordinates are (x, y) with x the column.
    """

    width: int
    height: int
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    remaining: int = 0

    # ========================================================================
    # Construction
    # ========================================================================

    @classmethod
    def from_layout(cls, layout: np.ndarray) -> "MineField":
        """
        Build a board from a boolean mine layout.

        Args:
            layout: 2D array indexed [y, x], True where a mine is.

        Raises:
            ValueError: If layout is not a non-empty 2D array.
        """
        mines = np.asarray(layout, dtype=bool)
        if mines.ndim != 2 or mines.size == 0:
            raise ValueError("Layout must be a non-empty 2D array")

        height, width = mines.shape
        counts = _adjacent_counts(mines)
        grid = [
            [
                Cell(is_mine=bool(mines[y, x]), adjacent_mines=int(counts[y, x]))
                for x in range(width)
            ]
            for y in range(height)
        ]
        return cls(width=width, height=height, _grid=grid, remaining=width * height)

    @classmethod
    def generate(cls, config: BoardConfig) -> "MineField":
        """Place mines row by row from the seeded generator."""
        rng = Prng(config.seed)
        layout = np.zeros((config.height, config.width), dtype=bool)
        for y in range(config.height):
            for x in range(config.width):
                layout[y, x] = (rng.next() & 0b11111) < config.mine_weight
        return cls.from_layout(layout)

    # ========================================================================
    # Queries
    # ========================================================================

    def _is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(x, y):
            return None
        return self._grid[y][x]

    def query(self, x: int, y: int) -> Optional[int]:
        """
        Reveal a cell without any assumption about its contents.

        Returns:
            None if the cell is a mine, else its adjacent mine count.

        Raises:
            ValueError: If coordinates are out of bounds.
        """
        cell = self.get_cell(x, y)
        if cell is None:
            raise ValueError(f"Cell ({x}, {y}) is outside the board")
        if cell.reveal():
            self.remaining -= 1
        return cell.outcome

    def reveal(self, x: int, y: int, expected_mine: bool) -> Optional[int]:
        """
        Reveal a cell the caller claims to know the contents of.

        Args:
            x: Column of the cell.
            y: Row of the cell.
            expected_mine: Whether the caller believes the cell is a mine.

        Returns:
            None if the cell is a mine, else its adjacent mine count.

        Raises:
            GuessMismatchError: If expected_mine is wrong. Nothing is
                revealed in that case.
            ValueError: If coordinates are out of bounds.
        """
        cell = self.get_cell(x, y)
        if cell is None:
            raise ValueError(f"Cell ({x}, {y}) is outside the board")
        if cell.is_mine != expected_mine:
            raise GuessMismatchError(x, y, cell.is_mine, expected_mine)
        return self.query(x, y)

    def start_cell(self) -> Tuple[int, int]:
        """
        Find the first safe zero-count cell in row-major order.

        Raises:
            ValueError: If the board has no such cell.
        """
        for y in range(self.height):
            for x in range(self.width):
                cell = self._grid[y][x]
                if not cell.is_mine and cell.adjacent_mines == 0:
                    return x, y
        raise ValueError("board has no zero counts")

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array indexed [y, x].

        Returns:
            2D int8 array where -1 = hidden, 0-8 = revealed count,
            9 = revealed mine.
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for y in range(self.height):
            for x in range(self.width):
                obs[y, x] = self._grid[y][x].to_observation()
        return obs

    @property
    def mine_count(self) -> int:
        """Total number of mines on the board."""
        return sum(cell.is_mine for row in self._grid for cell in row)


def _adjacent_counts(mines: np.ndarray) -> np.ndarray:
    """Count mines in the 8-neighbourhood of every cell."""
    height, width = mines.shape
    padded = np.pad(mines.astype(np.int8), 1)
    counts = np.zeros((height, width), dtype=np.int8)
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            counts += padded[1 + dy:1 + dy + height, 1 + dx:1 + dx + width]
    return counts
