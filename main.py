"""
Tile Match Helper - Entry Point

Lists eliminations and effective moves for a board, or plays it to
completion with the automated solver.

Example:
    python main.py                           # Solve the built-in sample board
    python main.py board.json --list         # Show what can be done right now
    python main.py board.json -s deep_retry  # Solve with another strategy
"""

import sys
import json
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from tilematch.board_manager import BoardManager
from tilematch.settings import load_settings
from tilematch.solver import (
    InvalidGridError,
    BoardState,
    Severity,
    SolveStatus,
    get_strategy_info,
)


logger = logging.getLogger(__name__)

# 14x10 board as recognized from a screenshot
SAMPLE_BOARD: List[List[int]] = [
    [31, 22, 0, 0, 10, 27, 0, 0, 0, 16],
    [26, 13, 0, 0, 0, 0, 0, 0, 0, 18],
    [33, 12, 17, 11, 0, 6, 0, 0, 11, 38],
    [7, 14, 0, 21, 0, 0, 0, 0, 23, 34],
    [8, 0, 0, 0, 0, 0, 0, 0, 0, 0],
    [9, 29, 34, 0, 28, 31, 0, 0, 0, 0],
    [21, 10, 0, 0, 19, 0, 0, 0, 0, 29],
    [40, 0, 0, 35, 0, 0, 0, 0, 0, 30],
    [0, 0, 37, 0, 0, 0, 0, 26, 0, 0],
    [6, 13, 0, 0, 0, 0, 0, 32, 0, 12],
    [0, 0, 0, 0, 0, 18, 0, 0, 0, 30],
    [37, 29, 0, 7, 40, 33, 0, 28, 22, 32],
    [14, 8, 16, 0, 0, 0, 0, 38, 23, 0],
    [9, 35, 19, 29, 17, 0, 27, 0, 0, 0],
]


def configure_logging(debug: bool) -> None:
    """Log to both console and file."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler("solver.log", mode='w', encoding='utf-8')  # File output
        ]
    )


def load_board(path: Optional[str], rows: int, cols: int) -> BoardState:
    """
    Load a board from a JSON file holding a 2D list of integers.

    Args:
        path: JSON file, "-" for stdin, or None for the sample board
        rows: Expected row count from settings
        cols: Expected column count from settings

    Returns:
        BoardState
    """
    if path is None:
        matrix = SAMPLE_BOARD
    elif path == "-":
        matrix = json.load(sys.stdin)
    else:
        with open(Path(path), 'r', encoding='utf-8') as f:
            matrix = json.load(f)

    if not BoardState.is_valid_matrix(matrix):
        raise InvalidGridError("Board must be a rectangular 2D list of non-negative integers")

    board = BoardState.from_2d_list(matrix)
    if (board.rows, board.cols) != (rows, cols):
        logger.warning(
            f"Board is {board.rows}x{board.cols}, settings expect {rows}x{cols}"
        )
    return board


def print_board(board: BoardState) -> None:
    """Print board rows, holes as '.'."""
    for row in board.format_rows():
        print(f"  {row}")


def list_actions(manager: BoardManager) -> None:
    """Print current eliminations and effective moves."""
    eliminates = manager.eliminates
    print(f"\nEliminations ({len(eliminates)}):")
    for block in eliminates:
        print(f"  {block.describe()}")

    moves = manager.moves
    print(f"\nEffective moves ({len(moves)}):")
    for i, move in enumerate(moves):
        print(f"  {i + 1}. {move.describe()}")


def on_notify(severity: Severity, message: str) -> None:
    """Route solver notifications to the log."""
    level = {
        Severity.SUCCESS: logging.INFO,
        Severity.INFO: logging.INFO,
        Severity.WARNING: logging.WARNING,
        Severity.ERROR: logging.ERROR,
    }[severity]
    logger.log(level, f"[{severity.value}] {message}")


def parse_args(argv=None):
    """Parse command line arguments."""
    strategy_names = [info["name"] for info in get_strategy_info()]
    parser = argparse.ArgumentParser(
        description="Tile Match Helper - Find eliminations and auto-solve tile matching boards"
    )
    parser.add_argument(
        "board",
        nargs="?",
        help="JSON file with the board as a 2D list (0 = empty cell), '-' for stdin; "
             "default: built-in sample board"
    )
    parser.add_argument(
        "--strategy", "-s",
        choices=strategy_names,
        default=None,
        help="Solving strategy (default: from config.json)"
    )
    parser.add_argument(
        "--retries", "-r",
        type=int,
        default=None,
        help="Replays allowed after a stuck pass (default: from config.json)"
    )
    parser.add_argument(
        "--list", "-l",
        action="store_true",
        help="Only list current eliminations and effective moves"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging (every step and board row)"
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """
    Run the command line tool.

    Returns:
        Exit code: 0 when listing or when the board was solved, 1 otherwise
    """
    args = parse_args(argv)
    settings = load_settings()
    configure_logging(args.debug or settings.get("debug_enabled", False))

    try:
        board = load_board(args.board, settings["rows"], settings["cols"])
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load board: {e}")
        return 1

    try:
        manager = BoardManager(
            board=board,
            strategy_name=args.strategy or settings["strategy_name"],
            retry_budget=args.retries if args.retries is not None else settings["retry_budget"],
            notify_callback=on_notify,
            move_highlight_ms=settings["move_highlight_ms"],
            moved_highlight_ms=settings["moved_highlight_ms"],
            eliminate_highlight_ms=settings["eliminate_highlight_ms"],
        )
    except ValueError as e:
        logger.error(f"Invalid settings: {e}")
        return 1

    print(f"Board {board.rows}x{board.cols}, {board.count_cells()} tiles:")
    print_board(board)

    if args.list:
        list_actions(manager)
        return 0

    solution = manager.auto_solve()

    print(f"\nResult: {solution.status.name} after {solution.move_count} moves, "
          f"{solution.total_cleared} tiles cleared, {solution.attempts} attempt(s)")
    if solution.status is not SolveStatus.SOLVED:
        print_board(solution.final_board)

    return 0 if solution.status is SolveStatus.SOLVED else 1


if __name__ == "__main__":
    sys.exit(main())
