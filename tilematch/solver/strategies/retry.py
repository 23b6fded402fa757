"""
Retry Strategy - Forward pass with bounded single-decision backtracking.

When the first pass gets stuck the board is restored and replayed,
each replay changing exactly one decision point of the first pass.
Decision points are tried most recent first.
"""

import logging
import time
from typing import List, Optional, Tuple

from ..base import SolverStrategy
from ..context import SolutionContext
from ..solution import Solution, SolveStatus, Trip
from ..factory import register_strategy

logger = logging.getLogger(__name__)


def next_candidate(trips: List[Trip], index: int,
                   choose: int) -> Optional[Tuple[int, int]]:
    """
    Next (decision index, move index) to try after (index, choose).

    Tries the next alternative at the same decision point; when those run
    out, moves to the previous decision point starting over from its first
    alternative.

    Args:
        trips: Decision points of the first pass
        index: Decision index last tried
        choose: Move index last tried there

    Returns:
        (index, choose) to replay with, or None if the search is exhausted
    """
    while index >= 0:
        if choose + 1 < trips[index].count:
            return index, choose + 1
        index -= 1
        choose = 0
    return None


def fewest_tiles(first: Solution, second: Solution) -> Solution:
    """Of two passes, the one leaving fewer tiles (first on ties)."""
    if second.final_board.count_cells() < first.final_board.count_cells():
        return second
    return first


@register_strategy
class RetryStrategy(SolverStrategy):
    """
    First-move play with bounded backtracking over single decisions.

    Replays always start from the context's board. A replay takes the
    first move everywhere except at one targeted decision point, so
    alternatives at different decision points are never combined; the
    decision list searched is the first pass's.

    Parameters:
        retry_budget: Maximum replays (default: the context's budget, 20)
    """
    name = "retry"
    description = "Retry (default) - Backtracks one decision at a time"

    def __init__(self, retry_budget: Optional[int] = None):
        self.retry_budget = retry_budget

    def solve(self, context: SolutionContext) -> Solution:
        start_time = time.perf_counter()
        budget = self.retry_budget if self.retry_budget is not None else context.retry_budget

        first_pass = self._forward_pass(context.board, context)
        states_explored = first_pass.metrics.states_explored
        if first_pass.status is not SolveStatus.STUCK:
            return self._build_solution(first_pass, 1, 0, states_explored, start_time)

        trips = first_pass.trips
        logger.info(
            f"First pass stuck with {first_pass.final_board.count_cells()} tiles left "
            f"after {len(trips)} decisions, retrying (budget {budget})"
        )

        best = first_pass
        retries = 0
        candidate = next_candidate(trips, len(trips) - 1, trips[-1].choose) if trips else None

        while candidate is not None and retries < budget:
            index, choose = candidate
            retries += 1
            logger.info(
                f"Retry {retries}/{budget}: decision {index} takes move "
                f"{choose + 1}/{trips[index].count}"
            )

            attempt = self._forward_pass(context.board, context, {index: choose})
            states_explored += attempt.metrics.states_explored

            if attempt.status in (SolveStatus.SOLVED, SolveStatus.STOPPED):
                best = attempt
                break

            best = fewest_tiles(best, attempt)
            candidate = next_candidate(trips, index, choose)

        if best.status is SolveStatus.STUCK:
            logger.info(f"Retries exhausted after {retries} attempts")

        return self._build_solution(best, 1 + retries, retries, states_explored, start_time)
