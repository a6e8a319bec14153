"""
Unit tests for the Constraint class and MineState.
"""
import pytest
from solver import Constraint, ConstraintViolationError, MineState


# ============================================================================
# Validity Tests
# ============================================================================

class TestConstraintValidity:
    """Test the mines <= count <= mines + unknown bound."""

    def test_fresh_constraint_is_valid(self) -> None:
        assert Constraint(count=2, mines=0, unknown=3).valid() is True

    def test_too_many_mines_is_invalid(self) -> None:
        assert Constraint(count=1, mines=2, unknown=0).valid() is False

    def test_too_few_unknowns_is_invalid(self) -> None:
        assert Constraint(count=3, mines=1, unknown=1).valid() is False

    def test_exact_bounds_are_valid(self) -> None:
        """Both ends of the range are allowed."""
        assert Constraint(count=2, mines=2, unknown=4).valid() is True
        assert Constraint(count=3, mines=1, unknown=2).valid() is True


# ============================================================================
# Saturation Tests
# ============================================================================

class TestConstraintSaturation:
    """Test remaining_safe and remaining_mines."""

    def test_remaining_safe(self) -> None:
        """All mines found means every unknown neighbour is safe."""
        constraint = Constraint(count=1, mines=1, unknown=2)
        assert constraint.remaining_safe is True
        assert constraint.remaining_mines is False

    def test_remaining_mines(self) -> None:
        """Unknowns exactly covering the deficit must all be mines."""
        constraint = Constraint(count=3, mines=1, unknown=2)
        assert constraint.remaining_mines is True
        assert constraint.remaining_safe is False

    def test_zero_count_is_remaining_safe(self) -> None:
        assert Constraint(count=0, mines=0, unknown=5).remaining_safe is True

    def test_unsaturated(self) -> None:
        constraint = Constraint(count=1, mines=0, unknown=3)
        assert constraint.remaining_safe is False
        assert constraint.remaining_mines is False


# ============================================================================
# Delta Tests
# ============================================================================

class TestConstraintDeltas:
    """Test apply/undo bookkeeping."""

    def test_add_mine(self) -> None:
        """A mine moves one neighbour from unknown to mines."""
        constraint = Constraint(count=2, mines=0, unknown=3)
        constraint.add_mine(1)
        assert (constraint.mines, constraint.unknown) == (1, 2)

    def test_add_safe(self) -> None:
        """A safe cell only reduces unknown."""
        constraint = Constraint(count=2, mines=0, unknown=3)
        constraint.add_safe(1)
        assert (constraint.mines, constraint.unknown) == (0, 2)

    @pytest.mark.parametrize("is_mine", [True, False])
    def test_negative_delta_undoes(self, is_mine: bool) -> None:
        """Applying -1 exactly reverses +1."""
        constraint = Constraint(count=2, mines=1, unknown=3)
        constraint.apply(is_mine, 1)
        constraint.apply(is_mine, -1)
        assert constraint == Constraint(count=2, mines=1, unknown=3)


# ============================================================================
# MineState and Error Tests
# ============================================================================

class TestMineState:
    """Test polarity helpers."""

    def test_from_mine(self) -> None:
        assert MineState.from_mine(True) is MineState.KNOWN_MINE
        assert MineState.from_mine(False) is MineState.KNOWN_SAFE


class TestConstraintViolationError:
    """Test error context."""

    def test_message_includes_position_and_values(self) -> None:
        """The error names the cell and the broken constraint."""
        error = ConstraintViolationError(4, 2, Constraint(1, 2, 0))
        assert "(4, 2)" in str(error)
        assert "count=1" in str(error)
        assert error.constraint.mines == 2
