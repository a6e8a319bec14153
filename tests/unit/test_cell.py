"""
Unit tests for the Cell class.

Tests reveal behaviour, outcomes and observation conversion.
"""
from game import Cell


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_not_mine(self) -> None:
        """New cell should not be a mine by default."""
        assert Cell().is_mine is False

    def test_default_cell_is_hidden(self) -> None:
        """New cell should be hidden by default."""
        assert Cell().revealed is False


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_hidden_cell_returns_true(self) -> None:
        cell = Cell()
        assert cell.reveal() is True
        assert cell.revealed is True

    def test_reveal_twice_returns_false(self) -> None:
        """Second reveal is a no-op."""
        cell = Cell()
        cell.reveal()
        assert cell.reveal() is False
        assert cell.revealed is True


# ============================================================================
# Outcome and Observation Tests
# ============================================================================

class TestCellOutcome:
    """Test what a reveal reports."""

    def test_mine_outcome_is_none(self) -> None:
        assert Cell(is_mine=True).outcome is None

    def test_safe_outcome_is_count(self) -> None:
        assert Cell(adjacent_mines=3).outcome == 3

    def test_hidden_observation(self) -> None:
        assert Cell(adjacent_mines=3).to_observation() == -1

    def test_revealed_observations(self) -> None:
        """Revealed cells show their count, or 9 for a mine."""
        safe = Cell(adjacent_mines=3, revealed=True)
        mine = Cell(is_mine=True, revealed=True)
        assert safe.to_observation() == 3
        assert mine.to_observation() == 9
