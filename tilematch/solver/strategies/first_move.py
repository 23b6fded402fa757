"""
First Move Strategy - A single forward pass, always taking the first move.
"""

import time

from ..base import SolverStrategy
from ..context import SolutionContext
from ..solution import Solution
from ..factory import register_strategy


@register_strategy
class FirstMoveStrategy(SolverStrategy):
    """
    Eliminates everything, takes the first effective move, repeats.

    Never backtracks; a dead end is reported as STUCK.
    """
    name = "first_move"
    description = "First move (instant) - Single pass, no backtracking"

    def solve(self, context: SolutionContext) -> Solution:
        start_time = time.perf_counter()
        result = self._forward_pass(context.board, context)
        return self._build_solution(
            result, attempts=1, retries=0,
            states_explored=result.metrics.states_explored,
            start_time=start_time
        )
