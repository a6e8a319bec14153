"""
Constraint module for the deduction solver.

Holds the per-cell knowledge state and the adjacent-mine-count
obligation attached to every revealed safe cell.
"""
from dataclasses import dataclass
from enum import Enum, auto


# ============================================================================
# Constants
# ============================================================================

class MineState(Enum):
    """What the solver knows about a cell."""

    UNKNOWN = auto()
    KNOWN_MINE = auto()
    KNOWN_SAFE = auto()

    @classmethod
    def from_mine(cls, is_mine: bool) -> "MineState":
        """Known state for a cell of the given polarity."""
        return cls.KNOWN_MINE if is_mine else cls.KNOWN_SAFE


class ConstraintViolationError(RuntimeError):
    """A committed constraint left its valid range (solver logic defect)."""

    def __init__(self, x: int, y: int, constraint: "Constraint") -> None:
        super().__init__(
            f"Constraint at ({x}, {y}) violated: count={constraint.count} "
            f"mines={constraint.mines} unknown={constraint.unknown}"
        )
        self.x = x
        self.y = y
        self.constraint = constraint


# ============================================================================
# Constraint Data Class
# ============================================================================

@dataclass
class Constraint:
    """
    Mine-count obligation of a revealed cell.

    Attributes:
        count: Declared number of adjacent mines (0-8).
        mines: Adjacent cells currently known to be mines.
        unknown: Adjacent cells whose state is still unknown.

    The constraint is satisfiable while mines <= count <= mines + unknown.
    """

    count: int
    mines: int = 0
    unknown: int = 0

    def valid(self) -> bool:
        """Check that the count can still be met."""
        return self.mines <= self.count <= self.mines + self.unknown

    @property
    def remaining_safe(self) -> bool:
        """All unknown neighbours must be safe."""
        return self.count == self.mines

    @property
    def remaining_mines(self) -> bool:
        """All unknown neighbours must be mines."""
        return self.count == self.mines + self.unknown

    def add_mine(self, delta: int) -> None:
        """Move delta unknown neighbours to known mines (negative undoes)."""
        self.mines += delta
        self.unknown -= delta

    def add_safe(self, delta: int) -> None:
        """Move delta unknown neighbours to known safe (negative undoes)."""
        self.unknown -= delta

    def apply(self, is_mine: bool, delta: int) -> None:
        """Apply add_mine or add_safe depending on polarity."""
        if is_mine:
            self.add_mine(delta)
        else:
            self.add_safe(delta)
