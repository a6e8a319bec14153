"""
Cell module for Minesweeper boards.

Represents the ground truth of a single board position and whether
it has been revealed.
"""
from dataclasses import dataclass
from typing import Optional


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        revealed: Whether the cell has been revealed.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    revealed: bool = False

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if the cell was hidden, False if already revealed.
        """
        if self.revealed:
            return False
        self.revealed = True
        return True

    @property
    def outcome(self) -> Optional[int]:
        """None for a mine, else the adjacent mine count."""
        if self.is_mine:
            return None
        return self.adjacent_mines

    def to_observation(self) -> int:
        """
        Convert cell to an observation value.

        Returns:
            -1: Hidden cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if not self.revealed:
            return -1
        if self.is_mine:
            return 9
        return self.adjacent_mines
