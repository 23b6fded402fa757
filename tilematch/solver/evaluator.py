"""
Evaluator Module - Turns candidate slides into moves that create eliminations.
"""

import logging
from typing import Dict, Iterable, List

from .board import BoardState
from .finder import find_all_eliminate_blocks, find_all_maximum_moves
from .move import EffectiveMove, MaximumMove
from .slide import slide

logger = logging.getLogger(__name__)


def evaluate(board: BoardState, move: MaximumMove) -> List[EffectiveMove]:
    """
    Find every slide distance of a move that exposes an elimination.

    For each step from 1 to the move's maximum distance the slide is
    simulated and the resulting board scanned; an elimination counts when
    at least one of its tiles belongs to the moved run. All qualifying
    steps are kept, smallest distance first.

    Args:
        board: Board before the move
        move: Candidate maximum move

    Returns:
        EffectiveMoves, one per (distance, elimination), without duplicates
    """
    effective: List[EffectiveMove] = []

    for step in range(1, move.distance + 1):
        moved_board, moved_vector = slide(board, move.tile_vector, move.direction, step)
        for block in find_all_eliminate_blocks(moved_board):
            if moved_vector.contains(block.point1) or moved_vector.contains(block.point2):
                effective.append(EffectiveMove.from_maximum(move, step, block))

    return _deduplicate(effective, key=lambda m: m.elimination_key)


def find_all_effective_moves(board: BoardState) -> List[EffectiveMove]:
    """
    Find every move on the board that creates at least one elimination.

    Moves leaving the board in the same state (same run, direction and
    distance, reached from different holes) are reported once, keeping
    the first one found.

    Args:
        board: Board to search

    Returns:
        EffectiveMoves in discovery order (hole row-major, then UP, DOWN,
        LEFT, RIGHT scan, then increasing distance)
    """
    effective: List[EffectiveMove] = []
    for move in find_all_maximum_moves(board):
        effective.extend(evaluate(board, move))

    unique = _deduplicate(effective, key=lambda m: m.dedup_key)
    logger.debug(f"Found {len(unique)} effective moves ({len(effective)} before dedup)")
    return unique


def _deduplicate(moves: Iterable[EffectiveMove], key) -> List[EffectiveMove]:
    """Drop moves whose key was already seen, preserving order."""
    seen: Dict[tuple, EffectiveMove] = {}
    for move in moves:
        seen.setdefault(key(move), move)
    return list(seen.values())
