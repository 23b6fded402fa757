"""
Board Manager Module - Owner of the current board for interactive and automated play.

The manager keeps a single "current" board, answers what can be
eliminated or moved on it, applies player-chosen steps, and runs the
automated solver. Before an automated run it takes a backup snapshot
so the board can be restored.

For the core solving logic, see the tilematch.solver package.
"""

import logging
import threading
from typing import List, Optional

from tilematch.solver import (
    BoardState, EffectiveMove, EliminateBlock, Severity, Solution,
    SolutionContext, SolverStrategy, SolveStatus, create_strategy,
    execute_eliminate, find_all_effective_moves, find_all_eliminate_blocks,
    get_default_strategy_name, is_eliminable, slide,
)
from tilematch.solver.context import HighlightCallback, NotifyCallback, ProgressCallback

logger = logging.getLogger(__name__)


__all__ = [
    "BoardManager",
]


class BoardManager:
    """
    Current board state plus the automated full-clear run.

    Status Flow:
        None (idle) -> RUNNING -> SOLVED | STUCK | STOPPED
                ^                          |
                |______ set_board / restore_backup / auto_solve

    Hooks:
        highlight_callback(point1, point2, duration_ms): called before each
            committed step and expected to return once shown
        notify_callback(severity, message): called when a run ends
        progress_callback(fraction, message): called after each move of a pass
    """

    def __init__(self, board: Optional[BoardState] = None,
                 strategy_name: Optional[str] = None,
                 retry_budget: int = 20,
                 highlight_callback: Optional[HighlightCallback] = None,
                 notify_callback: Optional[NotifyCallback] = None,
                 progress_callback: Optional[ProgressCallback] = None,
                 move_highlight_ms: int = 500,
                 moved_highlight_ms: int = 200,
                 eliminate_highlight_ms: int = 200):
        """
        Initialize board manager.

        Args:
            board: Starting board (may be set later with set_board)
            strategy_name: Name of solving strategy (default "retry")
            retry_budget: Replays allowed after a stuck pass (default 20)
            highlight_callback: Visualization hook
            notify_callback: Notification hook
            progress_callback: Progress hook for automated runs
            move_highlight_ms: Highlight duration before a slide
            moved_highlight_ms: Highlight duration on the run after it slid
            eliminate_highlight_ms: Highlight duration before an elimination
        """
        self.retry_budget = retry_budget
        self.highlight_callback = highlight_callback
        self.notify_callback = notify_callback
        self.progress_callback = progress_callback
        self.move_highlight_ms = move_highlight_ms
        self.moved_highlight_ms = moved_highlight_ms
        self.eliminate_highlight_ms = eliminate_highlight_ms

        self._strategy: SolverStrategy = create_strategy(strategy_name or get_default_strategy_name())

        self._board: Optional[BoardState] = board
        self._backup: Optional[BoardState] = None
        self._status: Optional[SolveStatus] = None
        self._last_solution: Optional[Solution] = None
        self._cancel_flag = threading.Event()

    # ---------- properties ----------

    @property
    def strategy(self) -> SolverStrategy:
        """Get current solving strategy."""
        return self._strategy

    @property
    def strategy_name(self) -> str:
        """Get current strategy name."""
        return self._strategy.name

    def set_strategy(self, strategy_name: str) -> None:
        """
        Change the solving strategy.

        Args:
            strategy_name: Name of strategy to use
        """
        self._strategy = create_strategy(strategy_name)
        logger.info(f"Strategy changed to: {strategy_name}")

    @property
    def board(self) -> Optional[BoardState]:
        """Get current board state."""
        return self._board

    @property
    def backup(self) -> Optional[BoardState]:
        """Board snapshot taken before the last automated run."""
        return self._backup

    @property
    def status(self) -> Optional[SolveStatus]:
        """Status of the current or last automated run, None if none ran."""
        return self._status

    @property
    def is_running(self) -> bool:
        return self._status is SolveStatus.RUNNING

    @property
    def last_solution(self) -> Optional[Solution]:
        return self._last_solution

    @property
    def eliminates(self) -> List[EliminateBlock]:
        """Pairs eliminable on the current board."""
        return find_all_eliminate_blocks(self._require_board())

    @property
    def moves(self) -> List[EffectiveMove]:
        """Effective moves on the current board."""
        return find_all_effective_moves(self._require_board())

    @property
    def is_solved(self) -> bool:
        """True if every tile on the current board has been eliminated."""
        return self._require_board().is_solved()

    # ---------- board changes ----------

    def set_board(self, board) -> None:
        """
        Replace the current board.

        Args:
            board: BoardState, or a 2D list that is copied into one
        """
        if not isinstance(board, BoardState):
            board = BoardState.from_2d_list(board)
        self._board = board
        self._backup = None
        self._status = None
        self._last_solution = None
        logger.info(f"Board set: {board.rows}x{board.cols}, {board.count_cells()} tiles")

    def execute_move(self, move: EffectiveMove) -> None:
        """
        Slide a run on the current board.

        Raises:
            NotAHoleError: If the move no longer fits the current board
            OutOfBoundsError: If the move leaves the current board
        """
        board = self._require_board()
        vector = move.tile_vector
        self._highlight(vector.start, vector.end, self.move_highlight_ms)

        self._board, moved = slide(board, vector, move.direction, move.distance)
        logger.info(f"Executed move: {move.describe()}")

        self._highlight(moved.start, moved.end, self.moved_highlight_ms)

    def execute_eliminate(self, block: EliminateBlock) -> bool:
        """
        Eliminate a pair on the current board.

        The pair may come from an older snapshot; if it is no longer
        eliminable nothing changes and False is returned. Callers should
        re-query eliminates and moves in that case.

        Returns:
            True if the pair was removed
        """
        board = self._require_board()
        if not is_eliminable(board, block.point1, block.point2):
            logger.warning(f"Pair {block.describe()} is no longer eliminable, skipping")
            return False

        self._highlight(block.point1, block.point2, self.eliminate_highlight_ms)
        self._board = execute_eliminate(board, block.point1, block.point2)
        logger.info(f"Executed eliminate: {block.describe()}")
        return True

    def execute_eliminate_all(self) -> int:
        """
        Eliminate pairs until none remain, re-querying after each one.

        Returns:
            Number of pairs eliminated
        """
        count = 0
        while True:
            blocks = self.eliminates
            if not blocks:
                break
            if not self.execute_eliminate(blocks[0]):
                break
            count += 1

        logger.info(f"Eliminated {count} pairs")
        return count

    # ---------- automated run ----------

    def auto_solve(self) -> Solution:
        """
        Play the current board to completion with the selected strategy.

        The board before the run is kept as backup. Afterwards the
        current board is the final board of the returned solution and the
        notification hook reports the outcome.

        Returns:
            Solution with status SOLVED, STUCK or STOPPED
        """
        board = self._require_board()
        self._backup = board
        self._cancel_flag.clear()
        self._status = SolveStatus.RUNNING

        logger.info(
            f"Auto-solve started with '{self.strategy_name}' on {board.count_cells()} tiles"
        )
        for row_idx, row in enumerate(board.format_rows()):
            logger.debug(f"  Row {row_idx:2d}: [{row}]")

        context = SolutionContext(
            board=board,
            cancel_flag=self._cancel_flag,
            retry_budget=self.retry_budget,
            highlight_callback=self.highlight_callback,
            progress_callback=self.progress_callback,
            move_highlight_ms=self.move_highlight_ms,
            moved_highlight_ms=self.moved_highlight_ms,
            eliminate_highlight_ms=self.eliminate_highlight_ms,
        )

        try:
            solution = self._strategy.solve(context)
        except Exception:
            self._status = None
            raise

        self._board = solution.final_board
        self._status = solution.status
        self._last_solution = solution

        logger.info(
            f"Auto-solve ended {solution.status.name}: {solution.total_cleared} tiles cleared, "
            f"{solution.final_board.count_cells()} left, {solution.attempts} attempt(s), "
            f"{solution.metrics.computation_time_ms:.1f}ms"
        )
        self._notify_outcome(solution)
        return solution

    def stop(self) -> None:
        """
        Request the running auto-solve to stop.

        Safe to call from another thread; the run observes it at its next
        loop iteration.
        """
        if self.is_running:
            logger.info("Stop requested")
        self._cancel_flag.set()

    def restore_backup(self) -> bool:
        """
        Put back the board saved before the last automated run.

        Returns:
            True if a backup existed
        """
        if self._backup is None:
            logger.warning("No backup board to restore")
            return False

        self._board = self._backup
        self._status = None
        logger.info("Board restored from backup")
        return True

    def reset(self) -> None:
        """Reset board manager to initial state."""
        self._board = None
        self._backup = None
        self._status = None
        self._last_solution = None
        self._cancel_flag.clear()
        logger.info("BoardManager reset")

    def get_state_string(self) -> str:
        """Get human-readable state string for UI display."""
        state_strings = {
            None: "Idle",
            SolveStatus.RUNNING: "Running",
            SolveStatus.STOPPED: "Stopped",
            SolveStatus.SOLVED: "Solved",
            SolveStatus.STUCK: "Stuck",
        }
        base = state_strings.get(self._status, "Unknown")

        if self._board is not None:
            return f"{base} ({self._board.count_cells()} tiles)"
        return base

    # ---------- helpers ----------

    def _require_board(self) -> BoardState:
        if self._board is None:
            raise RuntimeError("No board set")
        return self._board

    def _highlight(self, point1, point2, duration_ms: int) -> None:
        if self.highlight_callback:
            self.highlight_callback(point1, point2, duration_ms)

    def _notify_outcome(self, solution: Solution) -> None:
        """Fire-and-forget notification of how the run ended."""
        if solution.status is SolveStatus.SOLVED:
            severity, message = Severity.SUCCESS, "All tiles eliminated"
        elif solution.status is SolveStatus.STUCK:
            severity = Severity.ERROR
            message = f"Dead end: {solution.final_board.count_cells()} tiles left"
        else:
            severity, message = Severity.WARNING, "Stopped by user"

        if self.notify_callback:
            self.notify_callback(severity, message)
