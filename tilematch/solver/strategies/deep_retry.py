"""
Deep Retry Strategy - Depth-first backtracking over combined decisions.

Unlike the retry strategy, each replay keeps every earlier decision of
the previous replay and changes the deepest one that still has an untried
alternative, so alternatives compose across decision points.
"""

import logging
import time
from typing import Dict, List, Optional

from ..base import SolverStrategy
from ..context import SolutionContext
from ..solution import Solution, SolveStatus, Trip
from ..factory import register_strategy
from .retry import fewest_tiles

logger = logging.getLogger(__name__)


def next_prefix(trips: List[Trip]) -> Optional[Dict[int, int]]:
    """
    Decisions for the next replay in depth-first order.

    Args:
        trips: Decision points of the last replay

    Returns:
        {decision index: move index} for every decision up to and including
        the changed one, or None if every alternative was tried
    """
    for i in range(len(trips) - 1, -1, -1):
        if trips[i].choose + 1 < trips[i].count:
            prefix = {trip.index: trip.choose for trip in trips[:i]}
            prefix[i] = trips[i].choose + 1
            return prefix
    return None


@register_strategy
class DeepRetryStrategy(SolverStrategy):
    """
    Bounded depth-first search over the whole decision tree.

    Parameters:
        retry_budget: Maximum replays (default: the context's budget, 20)
    """
    name = "deep_retry"
    description = "Deep retry - Depth-first backtracking across decisions"

    def __init__(self, retry_budget: Optional[int] = None):
        self.retry_budget = retry_budget

    def solve(self, context: SolutionContext) -> Solution:
        start_time = time.perf_counter()
        budget = self.retry_budget if self.retry_budget is not None else context.retry_budget

        last = self._forward_pass(context.board, context)
        states_explored = last.metrics.states_explored
        best = last
        retries = 0

        while last.status is SolveStatus.STUCK and retries < budget:
            prefix = next_prefix(last.trips)
            if prefix is None:
                logger.info("Decision tree exhausted")
                break

            retries += 1
            logger.info(f"Deep retry {retries}/{budget}: forcing {len(prefix)} decisions")
            last = self._forward_pass(context.board, context, prefix)
            states_explored += last.metrics.states_explored

            if last.status is SolveStatus.STUCK:
                best = fewest_tiles(best, last)
            else:
                best = last

        return self._build_solution(best, 1 + retries, retries, states_explored, start_time)
