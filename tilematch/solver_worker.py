"""
Solver Worker Module for Tile Match Helper

Provides a background QThread worker that runs the automated full-clear.
Communicates with the UI via Qt signals for thread-safe status updates.
"""

import logging
from typing import Optional

from PyQt5.QtCore import QThread, pyqtSignal

from tilematch.board_manager import BoardManager
from tilematch.solver import BoardState, Coordinate, Severity


# Configure module logger
logger = logging.getLogger(__name__)


class SolverWorker(QThread):
    """
    Background worker thread for the automated full-clear.

    Runs BoardManager.auto_solve() off the UI thread. Before each committed
    step the worker emits highlight_requested and sleeps for the requested
    duration, which paces the run to the UI's animation.

    Signals:
        highlight_requested(object, object, int): (point1, point2, duration_ms)
        notification(str, str): (severity, message) when a run ends
        progress_updated(float, str): (fraction cleared, message) after each move
        board_changed(object): Emits the BoardState after the run
        status_changed(str): Emitted when worker status changes
        error_occurred(str): Emitted when an error occurs

    Example:
        worker = SolverWorker(board, strategy_name="retry")
        worker.highlight_requested.connect(view.highlight)
        worker.notification.connect(view.show_toast)
        worker.start()
        # ...
        worker.request_stop()
        worker.wait()
    """

    # Signals for UI updates (thread-safe)
    highlight_requested = pyqtSignal(object, object, int)
    notification = pyqtSignal(str, str)
    progress_updated = pyqtSignal(float, str)
    board_changed = pyqtSignal(object)
    status_changed = pyqtSignal(str)
    error_occurred = pyqtSignal(str)

    def __init__(self, board: BoardState, strategy_name: Optional[str] = None,
                 retry_budget: int = 20, move_highlight_ms: int = 500,
                 moved_highlight_ms: int = 200,
                 eliminate_highlight_ms: int = 200):
        """
        Initialize the solver worker.

        Args:
            board: Board to solve
            strategy_name: Solving strategy (default "retry")
            retry_budget: Replays allowed after a stuck pass
            move_highlight_ms: Pause before each slide
            moved_highlight_ms: Pause on the run after each slide
            eliminate_highlight_ms: Pause before each elimination
        """
        super().__init__()
        self._manager = BoardManager(
            board=board,
            strategy_name=strategy_name,
            retry_budget=retry_budget,
            highlight_callback=self._on_highlight,
            notify_callback=self._on_notify,
            progress_callback=self.progress_updated.emit,
            move_highlight_ms=move_highlight_ms,
            moved_highlight_ms=moved_highlight_ms,
            eliminate_highlight_ms=eliminate_highlight_ms,
        )

    @property
    def manager(self) -> BoardManager:
        return self._manager

    def run(self):
        """
        Main worker body. Called when thread starts.

        Plays the board until solved, stuck or stopped and emits the
        resulting board.
        """
        logger.info("Solver worker started")
        self.status_changed.emit("Running")

        try:
            solution = self._manager.auto_solve()
        except Exception as e:
            logger.exception("Error in solver worker")
            self.error_occurred.emit(str(e))
            self.status_changed.emit("Error")
            return

        self.board_changed.emit(solution.final_board)
        self.status_changed.emit(self._manager.get_state_string())
        logger.info("Solver worker stopped")

    def request_stop(self):
        """
        Request the worker to stop gracefully.

        The worker finishes its current step before stopping.
        Use wait() after calling this to block until stopped.
        """
        logger.info("Stop requested")
        self._manager.stop()

    def _on_highlight(self, point1: Coordinate, point2: Coordinate, duration_ms: int) -> None:
        """Emit the highlight and wait for it to play."""
        self.highlight_requested.emit(point1, point2, duration_ms)
        if duration_ms > 0:
            self.msleep(duration_ms)

    def _on_notify(self, severity: Severity, message: str) -> None:
        self.notification.emit(severity.value, message)
