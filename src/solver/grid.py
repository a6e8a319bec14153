"""
Grid addressing for the solver.

Row-major storage with bounds-checked access and 8-neighbourhood helpers.
"""
from typing import Callable, Generic, Iterator, List, Optional, Tuple, TypeVar

import numpy as np


T = TypeVar("T")

Coord = Tuple[int, int]


# ============================================================================
# Neighbourhood
# ============================================================================

_OFFSETS: Tuple[Coord, ...] = (
    (1, 1), (0, 1), (-1, 1),
    (1, 0), (-1, 0),
    (1, -1), (0, -1), (-1, -1),
)


def neighbors(x: int, y: int) -> List[Coord]:
    """
    Return the 8 candidate neighbours of (x, y).

    Candidates are not clipped: at the board edge some of them are negative
    or past the far side, and consumers filter them through Grid.get.
    """
    return [(x + dx, y + dy) for dx, dy in _OFFSETS]


# ============================================================================
# Grid
# ============================================================================

class Grid(Generic[T]):
    """
    Fixed-size 2D grid stored row-major in a flat list.

    get() returns a default for out-of-range coordinates; indexing with
    grid[x, y] raises IndexError instead and is used once bounds are known.
    """

    def __init__(self, width: int, height: int, fill: T) -> None:
        if width < 1 or height < 1:
            raise ValueError("Grid dimensions must be positive")
        self.width = width
        self.height = height
        self._cells: List[T] = [fill] * (width * height)

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if (x, y) addresses a cell of this grid."""
        # Negative values must be rejected here, list indexing would wrap.
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int, default: Optional[T] = None) -> Optional[T]:
        """Get the value at (x, y), or default when out of range."""
        if not self.in_bounds(x, y):
            return default
        return self._cells[y * self.width + x]

    def __getitem__(self, key: Coord) -> T:
        x, y = key
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} grid")
        return self._cells[y * self.width + x]

    def __setitem__(self, key: Coord, value: T) -> None:
        x, y = key
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} grid")
        self._cells[y * self.width + x] = value

    def surrounding(self, x: int, y: int) -> Iterator[Coord]:
        """Yield the in-bounds neighbours of (x, y)."""
        for nx, ny in neighbors(x, y):
            if self.in_bounds(nx, ny):
                yield nx, ny

    def coordinates(self) -> Iterator[Coord]:
        """Yield every coordinate in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def to_array(self, convert: Callable[[T], int]) -> np.ndarray:
        """Export the grid as an int8 array indexed [y, x]."""
        values = np.empty((self.height, self.width), dtype=np.int8)
        for x, y in self.coordinates():
            values[y, x] = convert(self[x, y])
        return values
