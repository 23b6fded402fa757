"""
Solver Package - Board geometry and search engine for the tile matching game.

The board is a matrix of small integers: 0 is an empty ("hole") cell,
1..N identify tile kinds. Two equal tiles on a row or column with only
holes between them can be eliminated. A run of tiles next to a hole can
slide into it, which may line up new pairs.

Public API:
    - BoardState: Immutable board representation
    - Coordinate, Direction: Cell positions and slide directions
    - TileVector, MaximumMove, EliminateBlock, EffectiveMove: Move records
    - find_all_eliminate_blocks(), find_all_effective_moves(): Queries
    - execute_move(), execute_eliminate(), is_solved(): Board transforms
    - Solution, SolveStatus, Trip: Result of an automated run
    - SolutionContext: Shared context for strategies
    - SolverStrategy: Abstract base for strategies
    - create_strategy(): Factory function

Usage:
    from tilematch.solver import (
        BoardState, SolutionContext, create_strategy, find_all_effective_moves
    )

    board = BoardState.from_2d_list([[6, 0, 6], [2, 5, 2]])

    for move in find_all_effective_moves(board):
        print(move.describe())

    strategy = create_strategy("retry")
    solution = strategy.solve(SolutionContext(board=board))
    print(solution.status, solution.final_board.count_cells())
"""

# Core data structures
from .errors import (
    BoardError,
    OutOfBoundsError,
    NotAHoleError,
    NotCollinearError,
    InvalidDirectionError,
    InvalidGridError,
)
from .geometry import Coordinate, Direction, are_collinear, distance, reverse_direction
from .board import BoardState, HOLE
from .move import TileVector, MaximumMove, EliminateBlock, EffectiveMove
from .solution import Solution, SolutionMetrics, SolveStatus, Step, StepKind, Trip
from .context import SolutionContext, Severity

# Queries and transforms
from .finder import (
    find_all_eliminate_blocks,
    find_hole_cells,
    find_tile_vector,
    find_maximum_moves_for_hole,
    find_all_maximum_moves,
)
from .slide import slide, execute_move, execute_eliminate, is_eliminable, is_solved
from .evaluator import evaluate, find_all_effective_moves

# Strategy framework
from .base import SolverStrategy
from .factory import (
    create_strategy,
    get_strategy_info,
    get_default_strategy_name,
    register_strategy,
)

# Import strategies to register them
from .strategies import FirstMoveStrategy, RetryStrategy, DeepRetryStrategy

__all__ = [
    # Errors
    "BoardError",
    "OutOfBoundsError",
    "NotAHoleError",
    "NotCollinearError",
    "InvalidDirectionError",
    "InvalidGridError",
    # Data structures
    "Coordinate",
    "Direction",
    "are_collinear",
    "distance",
    "reverse_direction",
    "BoardState",
    "HOLE",
    "TileVector",
    "MaximumMove",
    "EliminateBlock",
    "EffectiveMove",
    "Solution",
    "SolutionMetrics",
    "SolveStatus",
    "Step",
    "StepKind",
    "Trip",
    "SolutionContext",
    "Severity",
    # Queries and transforms
    "find_all_eliminate_blocks",
    "find_hole_cells",
    "find_tile_vector",
    "find_maximum_moves_for_hole",
    "find_all_maximum_moves",
    "slide",
    "execute_move",
    "execute_eliminate",
    "is_eliminable",
    "is_solved",
    "evaluate",
    "find_all_effective_moves",
    # Strategy framework
    "SolverStrategy",
    "create_strategy",
    "get_strategy_info",
    "get_default_strategy_name",
    "register_strategy",
    "FirstMoveStrategy",
    "RetryStrategy",
    "DeepRetryStrategy",
]
