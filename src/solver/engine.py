"""
Deduction engine for Minesweeper.

Plays a board to completion without guessing:
    1. Propagation: saturated constraints resolve their unknown neighbours
    2. Border extraction: the constrained frontier is split into
       independent components
    3. Backtracking: a cell is forced when the opposite polarity admits
       no consistent assignment of its border

Cells that no deduction can reach are left unknown.
"""
import logging
import sys
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterable, List, Optional, Protocol, Set, Tuple

import numpy as np

from .constraint import Constraint, ConstraintViolationError, MineState
from .grid import Coord, Grid


logger = logging.getLogger(__name__)

# Frames reserved for callers above the checker
_RECURSION_MARGIN = 200


# ============================================================================
# Collaborator Interfaces
# ============================================================================

class RevealBoard(Protocol):
    """Ground-truth board the engine queries."""

    width: int
    height: int

    def reveal(self, x: int, y: int, expected_mine: bool) -> Optional[int]:
        """Reveal a cell; None for a mine, else its adjacent mine count."""
        ...


class CellObserver(Protocol):
    """Side-effect-only listener for committed cells."""

    def on_cell_resolved(self, x: int, y: int, count: Optional[int]) -> None:
        ...


# ============================================================================
# Configuration and Results
# ============================================================================

@dataclass
class SolverConfig:
    """
    Configuration for a solver session.

    Attributes:
        step_delay: Seconds to sleep between outer iterations, for watching
            the solver play. Has no effect on results.
    """

    step_delay: float = 0.0

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.step_delay < 0:
            raise ValueError("step_delay cannot be negative")


@dataclass
class SolverStats:
    """Counters collected over a session."""

    iterations: int = 0
    sweeps: int = 0
    propagated: int = 0
    checker_calls: int = 0
    backtracked: int = 0


@dataclass
class SolveResult:
    """Terminal state of a session."""

    unknown_remaining: int
    stats: SolverStats = field(default_factory=SolverStats)

    @property
    def solved(self) -> bool:
        """Check if every cell was resolved."""
        return self.unknown_remaining == 0


# ============================================================================
# Solver Session
# ============================================================================

class SolverSession:
    """
    Owns the knowledge state for one board and drives the deduction loop.

    States and constraints are only changed through make_guess (permanent)
    and is_consistent (tentative, always undone before it returns).
    """

    def __init__(
        self,
        board: RevealBoard,
        observer: Optional[CellObserver] = None,
        config: Optional[SolverConfig] = None,
    ) -> None:
        """
        Initialize a session.

        Args:
            board: Ground-truth board to reveal cells on.
            observer: Optional listener notified of every committed cell.
            config: Session configuration.
        """
        self.board = board
        self.observer = observer
        self.config = config or SolverConfig()
        self.width = board.width
        self.height = board.height

        self.states: Grid[MineState] = Grid(
            self.width, self.height, MineState.UNKNOWN
        )
        self.constraints: Grid[Optional[Constraint]] = Grid(
            self.width, self.height, None
        )
        self.stats = SolverStats()

    # ========================================================================
    # Commit
    # ========================================================================

    def make_guess(self, x: int, y: int, expected_mine: bool) -> Optional[int]:
        """
        Reveal a cell whose polarity is proven and record the result.

        Args:
            x: Column of the cell.
            y: Row of the cell.
            expected_mine: Proven polarity; the board raises if it is wrong.

        Returns:
            None for a mine, else the cell's adjacent mine count.

        Raises:
            ValueError: If the cell is already resolved.
            ConstraintViolationError: If a constraint becomes unsatisfiable.
        """
        if self.states[x, y] is not MineState.UNKNOWN:
            raise ValueError(f"Cell ({x}, {y}) is already resolved")

        count = self.board.reveal(x, y, expected_mine)
        is_mine = count is None

        if is_mine:
            self.states[x, y] = MineState.KNOWN_MINE
        else:
            mines = 0
            unknown = 0
            for nx, ny in self.states.surrounding(x, y):
                state = self.states[nx, ny]
                if state is MineState.KNOWN_MINE:
                    mines += 1
                elif state is MineState.UNKNOWN:
                    unknown += 1
            self.states[x, y] = MineState.KNOWN_SAFE
            created = Constraint(count, mines, unknown)
            self.constraints[x, y] = created
            if not created.valid():
                raise ConstraintViolationError(x, y, created)

        for nx, ny in self.states.surrounding(x, y):
            constraint = self.constraints[nx, ny]
            if constraint is None:
                continue
            constraint.apply(is_mine, 1)
            if not constraint.valid():
                raise ConstraintViolationError(nx, ny, constraint)

        logger.debug("(%d, %d) -> %s", x, y, "mine" if is_mine else count)
        if self.observer is not None:
            self.observer.on_cell_resolved(x, y, count)
        return count

    # ========================================================================
    # Propagation
    # ========================================================================

    def propagate(self, order: Optional[Iterable[Coord]] = None) -> int:
        """
        Run one sweep of the saturated-safe / saturated-mined rules.

        Args:
            order: Cells to visit; row-major over the whole board by default.

        Returns:
            Number of cells committed during the sweep.
        """
        if order is None:
            order = self.states.coordinates()

        resolved = 0
        for x, y in order:
            if self.states[x, y] is not MineState.UNKNOWN:
                continue
            for nx, ny in self.states.surrounding(x, y):
                constraint = self.constraints[nx, ny]
                if constraint is None:
                    continue
                if constraint.remaining_safe:
                    self.make_guess(x, y, False)
                    resolved += 1
                    break
                if constraint.remaining_mines:
                    self.make_guess(x, y, True)
                    resolved += 1
                    break

        self.stats.sweeps += 1
        self.stats.propagated += resolved
        return resolved

    def propagate_to_fixed_point(
        self, order: Optional[Iterable[Coord]] = None
    ) -> int:
        """Repeat sweeps until one commits nothing; return the total."""
        cells = list(order) if order is not None else None
        total = 0
        while True:
            resolved = self.propagate(cells)
            if resolved == 0:
                return total
            total += resolved

    # ========================================================================
    # Borders
    # ========================================================================

    def _has_constrained_neighbor(self, x: int, y: int) -> bool:
        return any(
            self.constraints[nx, ny] is not None
            for nx, ny in self.states.surrounding(x, y)
        )

    def extract_borders(self) -> List[List[Coord]]:
        """
        Split the constrained unknown frontier into independent borders.

        Two unknown cells share a border when a chain of constraints links
        them. Unknown cells without a constrained neighbour are left out.

        Each border is grown breadth-first from its seed, so cells that
        share a constraint sit close together in the list and the
        consistency checker completes constraints early.

        Returns:
            Borders as ordered cell lists, smallest first.
        """
        visited: Set[Coord] = set()
        borders: List[List[Coord]] = []

        for seed in self.states.coordinates():
            if seed in visited:
                continue
            if self.states[seed] is not MineState.UNKNOWN:
                continue
            if not self._has_constrained_neighbor(*seed):
                continue

            border: List[Coord] = []
            queue: Deque[Coord] = deque([seed])
            visited.add(seed)
            while queue:
                x, y = queue.popleft()
                border.append((x, y))
                for cx, cy in self.states.surrounding(x, y):
                    if self.constraints[cx, cy] is None:
                        continue
                    for cell in self.states.surrounding(cx, cy):
                        if cell in visited:
                            continue
                        if self.states[cell] is not MineState.UNKNOWN:
                            continue
                        visited.add(cell)
                        queue.append(cell)
            borders.append(border)

        borders.sort(key=len)
        return borders

    # ========================================================================
    # Backtracking
    # ========================================================================

    def is_consistent(
        self, border: List[Coord], position: int, set_mine: bool
    ) -> bool:
        """
        Check if border[position] = set_mine extends to a valid assignment.

        Cells before position keep whatever state they already have; cells
        after it are searched exhaustively, pruning as soon as a
        neighbouring constraint becomes unsatisfiable. Every tentative
        change is undone before returning.
        """
        if position >= len(border):
            return True

        x, y = border[position]
        state = self.states[x, y]
        if state is not MineState.UNKNOWN:
            return state is MineState.from_mine(set_mine)

        self.states[x, y] = MineState.from_mine(set_mine)
        touched: List[Constraint] = []
        valid = True
        for nx, ny in self.states.surrounding(x, y):
            constraint = self.constraints[nx, ny]
            if constraint is None:
                continue
            constraint.apply(set_mine, 1)
            touched.append(constraint)
            valid = constraint.valid() and valid

        valid = valid and (
            self.is_consistent(border, position + 1, False)
            or self.is_consistent(border, position + 1, True)
        )

        self.states[x, y] = MineState.UNKNOWN
        for constraint in touched:
            constraint.apply(set_mine, -1)
        return valid

    def _check(self, border: List[Coord], set_mine: bool) -> bool:
        self.stats.checker_calls += 1
        return self.is_consistent(border, 0, set_mine)

    def _ensure_recursion_headroom(self, depth: int) -> None:
        needed = depth + _RECURSION_MARGIN
        if sys.getrecursionlimit() < needed:
            sys.setrecursionlimit(needed)

    def resolve_border(self, border: List[Coord]) -> bool:
        """
        Try each cell of a border in rotation until one is proven.

        Returns:
            True if a cell was committed.
        """
        self._ensure_recursion_headroom(len(border))
        rotation: Deque[Coord] = deque(border)

        for _ in range(len(rotation)):
            x, y = rotation[0]
            if self.states[x, y] is MineState.UNKNOWN:
                cells = list(rotation)
                if not self._check(cells, True):
                    self.make_guess(x, y, False)
                    self.stats.backtracked += 1
                    return True
                if not self._check(cells, False):
                    self.make_guess(x, y, True)
                    self.stats.backtracked += 1
                    return True
            rotation.rotate(-1)
        return False

    # ========================================================================
    # Driver
    # ========================================================================

    def solve(self, start: Coord) -> SolveResult:
        """
        Reveal a known-safe start cell and deduce as far as possible.

        Args:
            start: Cell known to be safe, usually one with a zero count.

        Returns:
            The terminal state of the session.
        """
        self.make_guess(start[0], start[1], False)
        return self.run()

    def run(self) -> SolveResult:
        """Run the outer loop from the current state to its fixed point."""
        progress = True
        while progress:
            self.stats.iterations += 1
            progress = self.propagate() > 0
            if not progress:
                progress = self._resolve_any_border()
            if progress and self.config.step_delay:
                time.sleep(self.config.step_delay)

        remaining = self.unknown_count()
        logger.info("%d squares remaining with unknown state", remaining)
        return SolveResult(unknown_remaining=remaining, stats=self.stats)

    def _resolve_any_border(self) -> bool:
        borders = self.extract_borders()
        for index, border in enumerate(borders, start=1):
            logger.debug(
                "border %d / %d (%d cells)", index, len(borders), len(border)
            )
            if self.resolve_border(border):
                return True
        return False

    # ========================================================================
    # State Accessors
    # ========================================================================

    def unknown_count(self) -> int:
        """Number of cells still in the unknown state."""
        return sum(
            1 for cell in self.states.coordinates()
            if self.states[cell] is MineState.UNKNOWN
        )

    def check_invariants(self) -> None:
        """Raise ConstraintViolationError if any constraint is invalid."""
        for x, y in self.constraints.coordinates():
            constraint = self.constraints[x, y]
            if constraint is not None and not constraint.valid():
                raise ConstraintViolationError(x, y, constraint)

    def snapshot(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Copy the knowledge state into arrays.

        Returns:
            Tuple of (states, constraints): states is [y, x] holding the
            MineState value, constraints is [y, x, 3] holding
            (count, mines, unknown) or -1 where no constraint exists.
        """
        states = self.states.to_array(lambda state: state.value)
        fields = [
            self.constraints.to_array(
                lambda c, name=name: -1 if c is None else getattr(c, name)
            )
            for name in ("count", "mines", "unknown")
        ]
        return states, np.stack(fields, axis=-1)
