#!/usr/bin/env python3
"""
Minesweeper deduction solver - Main entry point.

Usage:
    python main.py solve [--width W] [--height H] [--preset P] [--seed S]
                         [--display] [--delay D] [--verbose]
    python main.py evaluate [--games N] [--width W] [--height H]
                            [--preset P] [--seed S] [--verbose]
"""
import argparse
import logging
from typing import Dict, Optional

from src.game import (
    BEGINNER,
    EXPERT,
    INTERMEDIATE,
    BoardConfig,
    MineField,
    TerminalDisplay,
)
from src.solver import SolverConfig, SolverSession


PRESETS: Dict[str, BoardConfig] = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}

SLOW_BORDER_NOTE = (
    "Backtracking is exponential in border size: boards of 30x16 and up "
    "can produce borders of 40+ cells that take minutes to settle."
)


def board_config(
    args: argparse.Namespace, parser: argparse.ArgumentParser
) -> BoardConfig:
    """
    Build the board configuration from parsed arguments.

    A preset overrides --width and --height. Invalid values are reported
    through the parser instead of a traceback.
    """
    width, height = args.width, args.height
    if args.preset is not None:
        preset = PRESETS[args.preset]
        width, height = preset.width, preset.height
    try:
        return BoardConfig(width=width, height=height, seed=args.seed)
    except ValueError as error:
        parser.error(str(error))


def solve(args: argparse.Namespace, config: BoardConfig) -> None:
    """Generate one board and solve it."""
    board = MineField.generate(config)
    start = board.start_cell()

    display = None
    if args.display:
        display = TerminalDisplay(board.width, board.height)
        display.start()

    session = SolverSession(
        board,
        observer=display,
        config=SolverConfig(step_delay=args.delay),
    )
    result = session.solve(start)

    stats = result.stats
    print(f"{result.unknown_remaining} squares remaining with unknown state")
    print(f"  Iterations: {stats.iterations}")
    print(f"  Propagated: {stats.propagated} cells in {stats.sweeps} sweeps")
    print(
        f"  Backtracked: {stats.backtracked} cells "
        f"({stats.checker_calls} consistency checks)"
    )


def evaluate_boards(
    config: BoardConfig, num_games: int
) -> Dict[str, float]:
    """
    Solve boards with consecutive seeds.

    Args:
        config: Size and first seed of the boards.
        num_games: Number of boards to solve.

    Returns:
        Dictionary with evaluation metrics.
    """
    played = 0
    skipped = 0
    solved = 0
    total_remaining = 0

    for offset in range(num_games):
        board = MineField.generate(
            BoardConfig(
                width=config.width,
                height=config.height,
                seed=config.seed + offset,
                mine_weight=config.mine_weight,
            )
        )
        try:
            start = board.start_cell()
        except ValueError:
            skipped += 1
            continue

        result = SolverSession(board).solve(start)
        played += 1
        total_remaining += result.unknown_remaining
        if result.solved:
            solved += 1

    return {
        "played": played,
        "skipped": skipped,
        "solve_rate": solved / played if played else 0.0,
        "avg_remaining": total_remaining / played if played else 0.0,
    }


def evaluate(args: argparse.Namespace, config: BoardConfig) -> None:
    """Evaluate the solver over several boards."""
    print(f"\nSolving {args.games} boards of {config.width}x{config.height}...")
    results = evaluate_boards(config, args.games)

    print("Results:")
    print(f"  Boards played: {results['played']:.0f}")
    print(f"  Skipped (no start cell): {results['skipped']:.0f}")
    print(f"  Fully solved: {results['solve_rate']:.1%}")
    print(f"  Avg unknown remaining: {results['avg_remaining']:.1f} cells")


def _add_board_arguments(
    parser: argparse.ArgumentParser, width: int, height: int, seed: int
) -> None:
    parser.add_argument("--width", type=int, default=width, help="Board width")
    parser.add_argument("--height", type=int, default=height, help="Board height")
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default=None,
        help="Preset board size (overrides --width/--height)",
    )
    parser.add_argument("--seed", type=int, default=seed, help="Board generator seed")


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Minesweeper deduction solver"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Options shared by every command
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--verbose", action="store_true", help="Log solver progress"
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        "solve",
        parents=[common],
        help="Solve a single board",
        epilog=SLOW_BORDER_NOTE,
    )
    _add_board_arguments(solve_parser, width=30, height=16, seed=23841421)
    solve_parser.add_argument(
        "--display", action="store_true", help="Draw the board while solving"
    )
    solve_parser.add_argument(
        "--delay", type=float, default=0.0, help="Delay between iterations"
    )

    # Evaluate command
    eval_parser = subparsers.add_parser(
        "evaluate",
        parents=[common],
        help="Solve many boards and report results",
        epilog=SLOW_BORDER_NOTE,
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of boards to solve"
    )
    _add_board_arguments(eval_parser, width=16, height=16, seed=1)

    return parser


def main(argv: Optional[list] = None) -> None:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
    )

    if args.command == "solve":
        solve(args, board_config(args, parser))
    elif args.command == "evaluate":
        evaluate(args, board_config(args, parser))
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
