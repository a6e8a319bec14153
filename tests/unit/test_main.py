"""
Unit tests for the command-line entry point.

Tests argument parsing, presets and reporting of invalid board options.
"""
import pytest

import main


# ============================================================================
# Parsing Tests
# ============================================================================

class TestParsing:
    """Test subcommand options."""

    def test_verbose_after_solve(self) -> None:
        """--verbose is accepted after the subcommand."""
        args = main.build_parser().parse_args(["solve", "--verbose"])
        assert args.command == "solve"
        assert args.verbose is True

    def test_verbose_after_evaluate(self) -> None:
        args = main.build_parser().parse_args(
            ["evaluate", "--games", "3", "--verbose"]
        )
        assert args.verbose is True
        assert args.games == 3

    def test_verbose_defaults_off(self) -> None:
        args = main.build_parser().parse_args(["solve"])
        assert args.verbose is False

    def test_unknown_preset_rejected(self) -> None:
        with pytest.raises(SystemExit):
            main.build_parser().parse_args(["solve", "--preset", "huge"])


# ============================================================================
# Board Configuration Tests
# ============================================================================

class TestBoardConfig:
    """Test turning arguments into a board configuration."""

    def _config(self, argv):
        parser = main.build_parser()
        return main.board_config(parser.parse_args(argv), parser)

    def test_defaults(self) -> None:
        config = self._config(["evaluate"])
        assert (config.width, config.height, config.seed) == (16, 16, 1)

    @pytest.mark.parametrize(
        "preset, size",
        [("beginner", (9, 9)), ("intermediate", (16, 16)), ("expert", (30, 16))],
    )
    def test_preset_sets_dimensions(self, preset: str, size) -> None:
        """A preset overrides the width and height options."""
        config = self._config(["solve", "--preset", preset, "--width", "4"])
        assert (config.width, config.height) == size

    def test_zero_seed_is_a_usage_error(self, capsys) -> None:
        """Invalid options exit with a usage message, not a traceback."""
        with pytest.raises(SystemExit) as excinfo:
            self._config(["solve", "--seed", "0"])
        assert excinfo.value.code == 2
        assert "non-zero" in capsys.readouterr().err

    def test_non_positive_width_is_a_usage_error(self, capsys) -> None:
        with pytest.raises(SystemExit) as excinfo:
            self._config(["evaluate", "--width", "0"])
        assert excinfo.value.code == 2
        assert "dimensions must be positive" in capsys.readouterr().err


# ============================================================================
# Evaluation Tests
# ============================================================================

class TestEvaluateBoards:
    """Test the batch evaluation loop."""

    def test_every_board_is_played_or_skipped(self) -> None:
        results = main.evaluate_boards(main.BoardConfig(6, 6, seed=1), 3)
        assert results["played"] + results["skipped"] == 3
        assert 0.0 <= results["solve_rate"] <= 1.0
