"""
Solution Context Module - Shared context for strategy execution.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from .board import BoardState
from .geometry import Coordinate, as_coordinate

# (point1, point2, duration_ms); returns once the highlight has been shown.
HighlightCallback = Callable[[Coordinate, Coordinate, int], None]


class Severity(Enum):
    """Severity of a user-facing notification."""
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


NotifyCallback = Callable[[Severity, str], None]

# (fraction cleared 0.0-1.0, message)
ProgressCallback = Callable[[float, str], None]


@dataclass
class SolutionContext:
    """
    Shared context passed to strategies containing board state,
    cancellation, the visualization hook and progress reporting.

    Attributes:
        board: Board to solve (also the restart point for retries)
        cancel_flag: Threading event for cancellation
        retry_budget: Maximum replays after the first pass gets stuck
        highlight_callback: Optional hook called before each committed step
        progress_callback: Optional callback for progress updates
        move_highlight_ms: Highlight duration for a run about to slide
        moved_highlight_ms: Highlight duration for a run after it slid
        eliminate_highlight_ms: Highlight duration for a pair about to be removed
    """
    board: BoardState
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    retry_budget: int = 20
    highlight_callback: Optional[HighlightCallback] = None
    progress_callback: Optional[ProgressCallback] = None
    move_highlight_ms: int = 500
    moved_highlight_ms: int = 200
    eliminate_highlight_ms: int = 200

    def is_cancelled(self) -> bool:
        """
        Check if cancellation requested.

        Returns:
            True if strategy should stop execution
        """
        return self.cancel_flag.is_set()

    def cancel(self) -> None:
        """Request cancellation; observed at the next loop iteration."""
        self.cancel_flag.set()

    def highlight(self, point1, point2, duration_ms: int) -> None:
        """
        Show the cells about to change.

        Blocks until the hook returns, so each committed step waits for
        its visualization.
        """
        if self.highlight_callback:
            self.highlight_callback(as_coordinate(point1), as_coordinate(point2), duration_ms)

    def report_progress(self, percent: float, message: str = "") -> None:
        """
        Report progress to UI.

        Args:
            percent: Progress from 0.0 to 1.0
            message: Optional status message
        """
        if self.progress_callback:
            self.progress_callback(percent, message)
