"""
Slide Module - Simulation of sliding runs and executing moves/eliminations.

Every function returns a new BoardState; the input board is never changed.
"""

import logging
from typing import List, Optional, Tuple

from .board import HOLE, BoardState
from .errors import NotAHoleError, NotCollinearError, OutOfBoundsError
from .geometry import Coordinate, Direction, are_collinear, as_coordinate
from .move import TileVector

logger = logging.getLogger(__name__)


def slide(board: BoardState, tile_vector: TileVector, direction: Direction,
          distance: int) -> Tuple[BoardState, TileVector]:
    """
    Slide a run of tiles into the holes ahead of it.

    Each cell of the run is copied `distance` cells along `direction`,
    then the `distance` cells the run leaves behind are cleared.

    Args:
        board: Board before the slide
        tile_vector: Run to move
        direction: Slide direction, along the run's row or column
        distance: Number of cells to slide (>= 1)

    Returns:
        (new board, run position after the slide). The returned run keeps
        the original run's internal direction.

    Raises:
        ValueError: If distance < 1
        NotCollinearError: If a multi-cell run is slid across its own axis
        OutOfBoundsError: If the run would leave the board
        NotAHoleError: If a cell the run slides into holds a tile
    """
    if distance < 1:
        raise ValueError(f"Slide distance must be at least 1, got {distance}")

    cells = tile_vector.cells()
    if len(cells) > 1 and tile_vector.is_horizontal != direction.is_horizontal:
        raise NotCollinearError(
            f"Cannot slide {tile_vector.describe().lower()} {direction.name}"
        )

    # Cells ordered by how far they sit along the slide direction.
    ordered = sorted(cells, key=lambda p: p.r * direction.dr + p.c * direction.dc)
    trailing, leading = ordered[0], ordered[-1]

    for i in range(1, distance + 1):
        target = leading.offset(direction, i)
        if not board.in_board(target):
            raise OutOfBoundsError(
                f"Sliding {leading} {direction.name} by {distance} leaves the board at {target}"
            )
        if not board.is_hole(target):
            raise NotAHoleError(
                f"Sliding {leading} {direction.name} by {distance} runs into tile at {target}"
            )

    vacated = [(trailing.offset(direction, i), HOLE) for i in range(distance)]
    moved = [(cell.offset(direction, distance), board.value_at(cell)) for cell in cells]

    new_board = board.with_values(vacated + moved)
    return new_board, tile_vector.shifted(direction, distance)


def execute_move(board: BoardState, move) -> BoardState:
    """
    Perform a move's slide by its recorded distance.

    Args:
        board: Board to move on
        move: EffectiveMove or MaximumMove

    Returns:
        New board after the slide
    """
    new_board, _ = slide(board, move.tile_vector, move.direction, move.distance)
    return new_board


def is_eliminable(board: BoardState, point1, point2) -> bool:
    """
    Check whether two cells can be eliminated together right now.

    Both cells must hold the same tile, share a row or column and have
    only holes between them.

    Raises:
        OutOfBoundsError: If either point is off the board
    """
    p1 = as_coordinate(point1)
    p2 = as_coordinate(point2)

    if board.is_hole(p1) or board.is_hole(p2):
        return False
    if p1 == p2 or not are_collinear(p1, p2):
        return False
    if not board.values_equal(p1, p2):
        return False

    return all(board.is_hole(p) for p in _between(p1, p2))


def execute_eliminate(board: BoardState, point1, point2) -> Optional[BoardState]:
    """
    Eliminate a pair of tiles.

    A pair found on an earlier snapshot may no longer be eliminable; that
    is expected in interactive flows and is reported by returning None
    rather than raising.

    Args:
        board: Board to eliminate on
        point1: First tile
        point2: Second tile

    Returns:
        New board with both cells cleared, or None if the pair is not
        eliminable on this board

    Raises:
        OutOfBoundsError: If either point is off the board
    """
    if not is_eliminable(board, point1, point2):
        logger.warning(
            f"Pair {as_coordinate(point1)}-{as_coordinate(point2)} is not eliminable "
            f"on the current board, skipping"
        )
        return None

    return board.with_values([(point1, HOLE), (point2, HOLE)])


def is_solved(board: BoardState) -> bool:
    """True if every cell of the board is a hole."""
    return board.is_solved()


def _between(p1: Coordinate, p2: Coordinate) -> List[Coordinate]:
    """Cells strictly between two collinear coordinates."""
    if p1.r == p2.r:
        low, high = sorted((p1.c, p2.c))
        return [Coordinate(p1.r, c) for c in range(low + 1, high)]
    low, high = sorted((p1.r, p2.r))
    return [Coordinate(r, p1.c) for r in range(low + 1, high)]
