"""
Solution Module - Result of an automated run and its decision bookkeeping.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from .board import BoardState
from .move import EffectiveMove, EliminateBlock


class SolveStatus(Enum):
    """
    Outcome of an automated run.

    States:
        RUNNING: Run in progress
        STOPPED: Cancelled by the user
        SOLVED: Board empty, nothing left to eliminate or move
        STUCK: Nothing left to eliminate or move, tiles remain
    """
    RUNNING = auto()
    STOPPED = auto()
    SOLVED = auto()
    STUCK = auto()


class StepKind(Enum):
    ELIMINATE = auto()
    MOVE = auto()


@dataclass(frozen=True)
class Trip:
    """
    One decision point of a run.

    Attributes:
        index: Ordinal of the decision within the run (0-based)
        count: Number of effective moves available at that point
        choose: Index of the move actually taken
    """
    index: int
    count: int
    choose: int


@dataclass(frozen=True)
class Step:
    """
    A committed board transition.

    Attributes:
        kind: ELIMINATE or MOVE
        board: Board after the transition
        eliminate: Pair removed (ELIMINATE steps)
        move: Slide performed (MOVE steps)
    """
    kind: StepKind
    board: BoardState
    eliminate: Optional[EliminateBlock] = None
    move: Optional[EffectiveMove] = None

    def describe(self) -> str:
        if self.kind is StepKind.MOVE:
            return f"Move: {self.move.describe()}"
        return f"Eliminate: {self.eliminate.describe()}"


@dataclass
class SolutionMetrics:
    """
    Performance metrics for an automated run.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_explored: Number of boards searched for effective moves
        retries: Replays performed after the first pass got stuck
        strategy_name: Name of strategy that computed this solution
    """
    computation_time_ms: float = 0.0
    states_explored: int = 0
    retries: int = 0
    strategy_name: str = ""


@dataclass
class Solution:
    """
    Result of a strategy run.

    Attributes:
        steps: Ordered transitions performed
        board_states: Board after each step (first is the initial board)
        trips: Decision points of this run, in order
        status: Terminal status of the run
        attempts: Passes played to produce this result (1 + retries)
        metrics: Performance statistics
    """
    steps: List[Step] = field(default_factory=list)
    board_states: List[BoardState] = field(default_factory=list)
    trips: List[Trip] = field(default_factory=list)
    status: SolveStatus = SolveStatus.RUNNING
    attempts: int = 0
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    @property
    def initial_board(self) -> BoardState:
        return self.board_states[0]

    @property
    def final_board(self) -> BoardState:
        """Board after the last step."""
        return self.board_states[-1]

    @property
    def is_solved(self) -> bool:
        return self.status is SolveStatus.SOLVED

    @property
    def was_cancelled(self) -> bool:
        return self.status is SolveStatus.STOPPED

    @property
    def moves(self) -> List[EffectiveMove]:
        """Slides performed, in order."""
        return [step.move for step in self.steps if step.kind is StepKind.MOVE]

    @property
    def eliminates(self) -> List[EliminateBlock]:
        """Pairs removed, in order."""
        return [step.eliminate for step in self.steps if step.kind is StepKind.ELIMINATE]

    @property
    def move_count(self) -> int:
        """Number of slides in solution."""
        return len(self.moves)

    @property
    def total_cleared(self) -> int:
        """Tiles removed between the initial and final board."""
        return self.initial_board.count_cells() - self.final_board.count_cells()

    @property
    def has_steps(self) -> bool:
        return len(self.steps) > 0

    def get_board_after_step(self, index: int) -> BoardState:
        """
        Get board state after executing step at index.

        Raises:
            IndexError: If index out of range
        """
        return self.board_states[index + 1]
