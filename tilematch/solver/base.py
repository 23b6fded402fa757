"""
Base Strategy Module - Abstract base class for solving strategies.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from .board import BoardState
from .context import SolutionContext
from .evaluator import find_all_effective_moves
from .finder import find_all_eliminate_blocks
from .move import EffectiveMove, EliminateBlock
from .slide import execute_eliminate, slide
from .solution import Solution, SolutionMetrics, SolveStatus, Step, StepKind, Trip

logger = logging.getLogger(__name__)


class SolverStrategy(ABC):
    """
    Abstract base class for all solving strategies.

    Subclasses must implement the solve() method and define
    name and description class attributes. The shared forward pass
    eliminates everything it can, then takes one effective move, and
    repeats until the board is empty or nothing is left to do.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description for UI
    """
    name: str = "base"
    description: str = "Base strategy"

    @abstractmethod
    def solve(self, context: SolutionContext) -> Solution:
        """
        Play the context's board until solved, stuck or cancelled.

        Must periodically check context.is_cancelled() and return
        the partial solution with status STOPPED if True.

        Args:
            context: Solution context with board, cancellation, hooks

        Returns:
            Solution with steps, status and metrics
        """
        pass

    def find_eliminates(self, board: BoardState) -> List[EliminateBlock]:
        """Pairs currently eliminable on board."""
        return find_all_eliminate_blocks(board)

    def find_moves(self, board: BoardState) -> List[EffectiveMove]:
        """Slides on board that create an elimination."""
        return find_all_effective_moves(board)

    def _forward_pass(self, board: BoardState, context: SolutionContext,
                      choices: Optional[Dict[int, int]] = None) -> Solution:
        """
        Play one pass from board.

        At each decision point the first effective move is taken, unless
        `choices` maps that decision's index to another move index.

        Args:
            board: Board to start from
            context: Solution context (cancellation, highlight hook)
            choices: Optional {decision index: move index} overrides

        Returns:
            Solution for this pass; metrics hold only states_explored
        """
        choices = choices or {}
        steps: List[Step] = []
        board_states: List[BoardState] = [board]
        trips: List[Trip] = []
        states_explored = 0
        initial_cells = board.count_cells()

        while True:
            if self._check_cancelled(context):
                status = SolveStatus.STOPPED
                break

            board, stopped = self._eliminate_all(board, context, steps, board_states)
            if stopped:
                status = SolveStatus.STOPPED
                break

            moves = self.find_moves(board)
            states_explored += 1

            if not moves:
                status = SolveStatus.SOLVED if board.is_solved() else SolveStatus.STUCK
                break

            index = len(trips)
            choose = choices.get(index, 0)
            if choose >= len(moves):
                logger.warning(
                    f"Decision {index}: requested move {choose} but only {len(moves)} available, "
                    f"taking the first"
                )
                choose = 0

            board = self._execute_move(board, moves[choose], context, steps, board_states)
            trips.append(Trip(index=index, count=len(moves), choose=choose))

            if initial_cells > 0:
                cleared = initial_cells - board.count_cells()
                context.report_progress(
                    min(0.99, cleared / initial_cells),
                    f"{len(trips)} moves, {cleared} tiles cleared"
                )

        logger.debug(
            f"Pass ended {status.name}: {len(trips)} moves, "
            f"{board.count_cells()} tiles left"
        )
        return Solution(
            steps=steps,
            board_states=board_states,
            trips=trips,
            status=status,
            attempts=1,
            metrics=SolutionMetrics(states_explored=states_explored),
        )

    def _eliminate_all(self, board: BoardState, context: SolutionContext,
                       steps: List[Step],
                       board_states: List[BoardState]) -> Tuple[BoardState, bool]:
        """
        Eliminate pairs until none remain.

        The board is re-queried after every elimination since clearing one
        pair can expose another.

        Returns:
            (board after eliminations, True if cancelled midway)
        """
        while True:
            if self._check_cancelled(context):
                return board, True

            blocks = self.find_eliminates(board)
            if not blocks:
                return board, False

            block = blocks[0]
            context.highlight(block.point1, block.point2, context.eliminate_highlight_ms)

            new_board = execute_eliminate(board, block.point1, block.point2)
            if new_board is None:
                raise RuntimeError(f"Freshly found pair {block.describe()} could not be eliminated")

            logger.debug(f"Eliminate {block.describe()}")
            board = new_board
            steps.append(Step(kind=StepKind.ELIMINATE, board=board, eliminate=block))
            board_states.append(board)

    def _execute_move(self, board: BoardState, move: EffectiveMove,
                      context: SolutionContext, steps: List[Step],
                      board_states: List[BoardState]) -> BoardState:
        """Highlight, slide and record one move."""
        vector = move.tile_vector
        context.highlight(vector.start, vector.end, context.move_highlight_ms)

        board, moved = slide(board, vector, move.direction, move.distance)
        logger.debug(f"Move {move.describe()}")
        steps.append(Step(kind=StepKind.MOVE, board=board, move=move))
        board_states.append(board)

        context.highlight(moved.start, moved.end, context.moved_highlight_ms)
        return board

    def _build_solution(self, result: Solution, attempts: int, retries: int,
                        states_explored: int, start_time: float) -> Solution:
        """Stamp final metrics on the returned pass."""
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        result.attempts = attempts
        result.metrics = SolutionMetrics(
            computation_time_ms=elapsed_ms,
            states_explored=states_explored,
            retries=retries,
            strategy_name=self.name,
        )
        return result

    def _check_cancelled(self, context: SolutionContext) -> bool:
        """
        Convenience method to check cancellation.

        Args:
            context: Solution context

        Returns:
            True if strategy should stop
        """
        return context.is_cancelled()
