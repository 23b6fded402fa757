"""
Finder Module - Discovery of eliminable pairs and candidate slides.

All functions are pure queries on a BoardState snapshot.
"""

from typing import List, Optional

from .board import BoardState
from .errors import NotAHoleError
from .geometry import Coordinate, Direction, as_coordinate, distance
from .move import EliminateBlock, MaximumMove, TileVector

# DOWN and RIGHT are enough: scanning UP/LEFT would find each pair again from its other end.
_ELIMINATE_SCAN = (Direction.DOWN, Direction.RIGHT)

# Scan order for candidate runs around a hole.
_MOVE_SCAN = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


def find_all_eliminate_blocks(board: BoardState) -> List[EliminateBlock]:
    """
    Find every pair of equal tiles joined by a straight all-hole path.

    Order is row-major by first tile, DOWN before RIGHT for each tile.

    Args:
        board: Board to scan

    Returns:
        List of EliminateBlock, each unordered pair exactly once
    """
    blocks: List[EliminateBlock] = []

    for point, value in board.iter_cells():
        if value == 0:
            continue

        for direction in _ELIMINATE_SCAN:
            other = board.neighbor(point, direction, skip_holes=True)
            if other is not None and board.values_equal(point, other):
                blocks.append(EliminateBlock(point1=point, point2=other, value=value))

    return blocks


def find_hole_cells(board: BoardState) -> List[Coordinate]:
    """All empty cells, row-major."""
    return [point for point, value in board.iter_cells() if value == 0]


def find_tile_vector(board: BoardState, hole, direction: Direction) -> Optional[TileVector]:
    """
    Find the run of tiles that could slide into a hole from one side.

    Walks from the hole along direction, skipping holes, to the first
    tile; that tile is the run start. The run then extends while the next
    cell is a tile.

    Args:
        board: Board to scan
        hole: Empty cell to search from
        direction: Direction to search away from the hole

    Returns:
        Maximal TileVector walking along direction, or None if the edge is
        reached before any tile

    Raises:
        NotAHoleError: If hole holds a tile
        OutOfBoundsError: If hole is off the board
    """
    hole = as_coordinate(hole)
    if not board.is_hole(hole):
        raise NotAHoleError(f"Cell {hole} is not a hole")

    start = board.neighbor(hole, direction, skip_holes=True)
    if start is None:
        return None

    end = start
    while True:
        target = board.step(end, direction)
        if target is None or board.is_hole(target):
            break
        end = target

    return TileVector(start=start, end=end, direction=direction)


def find_maximum_moves_for_hole(board: BoardState, hole) -> List[MaximumMove]:
    """
    Find the largest slide into a hole from each of the four sides.

    Args:
        board: Board to scan
        hole: Empty cell

    Returns:
        Up to four MaximumMoves; each slides toward the hole, i.e. in the
        reverse of the direction used to find its run

    Raises:
        NotAHoleError: If hole holds a tile
    """
    moves: List[MaximumMove] = []
    for direction in _MOVE_SCAN:
        vector = find_tile_vector(board, hole, direction)
        if vector is None:
            continue

        moves.append(MaximumMove(
            direction=direction.reverse(),
            distance=distance(vector.start, hole),
            tile_vector=vector,
        ))

    return moves


def find_all_maximum_moves(board: BoardState) -> List[MaximumMove]:
    """Maximum moves for every hole, in hole order."""
    moves: List[MaximumMove] = []
    for hole in find_hole_cells(board):
        moves.extend(find_maximum_moves_for_hole(board, hole))
    return moves
