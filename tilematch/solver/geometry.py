"""
Geometry Module - Coordinates, directions and straight-line distance.

Board-independent helpers. Checks that need a board (bounds, holes,
neighbor walks) live on BoardState.
"""

from enum import Enum
from typing import NamedTuple, Union

from .errors import InvalidDirectionError, NotCollinearError


class Coordinate(NamedTuple):
    """
    A (row, col) cell position, 0-indexed.

    Plain (r, c) tuples compare equal to Coordinates and are accepted
    anywhere a Coordinate is expected.
    """
    r: int
    c: int

    def offset(self, direction: 'Direction', steps: int = 1) -> 'Coordinate':
        """
        Coordinate reached by walking `steps` cells along `direction`.

        No bounds check is performed.
        """
        return Coordinate(self.r + direction.dr * steps, self.c + direction.dc * steps)

    def __str__(self) -> str:
        return f"({self.r}, {self.c})"


class Direction(Enum):
    """The four slide/scan directions, valued by their (dr, dc) unit delta."""
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def dr(self) -> int:
        """Row delta."""
        return self.value[0]

    @property
    def dc(self) -> int:
        """Column delta."""
        return self.value[1]

    @property
    def is_horizontal(self) -> bool:
        return self.dr == 0

    def reverse(self) -> 'Direction':
        return reverse_direction(self)


_REVERSED = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def as_coordinate(point) -> Coordinate:
    """Normalize an (r, c) pair to a Coordinate."""
    if isinstance(point, Coordinate):
        return point
    r, c = point
    return Coordinate(r, c)


def reverse_direction(direction: Union[Direction, str]) -> Direction:
    """
    Get the opposite direction (UP<->DOWN, LEFT<->RIGHT).

    Args:
        direction: Direction member or its name ("UP", "left", ...)

    Returns:
        The reversed Direction

    Raises:
        InvalidDirectionError: If direction is not recognized
    """
    if isinstance(direction, str):
        try:
            direction = Direction[direction.upper()]
        except KeyError:
            raise InvalidDirectionError(f"Invalid direction name: <{direction}>") from None

    if not isinstance(direction, Direction):
        raise InvalidDirectionError(f"Invalid direction: <{direction!r}>")

    return _REVERSED[direction]


def distance(p1, p2) -> int:
    """
    Straight-line distance between two cells on the same row or column.

    Computed as the Chebyshev distance max(|dr|, |dc|), which equals the
    cell count between them since one delta is zero.

    Args:
        p1: First coordinate
        p2: Second coordinate

    Returns:
        Number of steps from p1 to p2

    Raises:
        NotCollinearError: If p1 and p2 share neither row nor column
    """
    p1 = as_coordinate(p1)
    p2 = as_coordinate(p2)
    if p1.r != p2.r and p1.c != p2.c:
        raise NotCollinearError(
            f"p1{p1} and p2{p2} are not on the same row/column, cannot compute distance"
        )
    return max(abs(p2.r - p1.r), abs(p2.c - p1.c))


def are_collinear(p1, p2) -> bool:
    """True if the two cells share a row or a column."""
    return p1[0] == p2[0] or p1[1] == p2[1]
