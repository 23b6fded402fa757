"""
Board State Module - Immutable board representation for the tile matching game.
"""

import numbers
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import InvalidGridError, OutOfBoundsError
from .geometry import Coordinate, Direction, as_coordinate

HOLE = 0


@dataclass(frozen=True)
class BoardState:
    """
    Immutable board state representation.

    Uses tuple-of-tuples for hashability and immutability, so no two
    boards ever share mutable storage. Cells hold 0 for an empty ("hole")
    cell and 1..N for a tile kind.

    Attributes:
        grid: Tuple of tuples representing the board state
    """
    grid: Tuple[Tuple[int, ...], ...]

    def __post_init__(self):
        problem = _matrix_problem(self.grid)
        if problem:
            raise InvalidGridError(problem)

    @classmethod
    def from_2d_list(cls, grid: Sequence[Sequence[int]]) -> 'BoardState':
        """
        Create BoardState from a 2D list (or any nested sequence).

        The caller's matrix is copied; later changes to it are not seen
        by the board.

        Args:
            grid: Rectangular matrix of non-negative integers

        Returns:
            BoardState instance with immutable grid

        Raises:
            InvalidGridError: If the matrix is empty, ragged or holds negative values
        """
        return cls(grid=tuple(tuple(row) for row in grid))

    @classmethod
    def empty(cls, rows: int, cols: int) -> 'BoardState':
        """Create an all-hole board."""
        return cls(grid=tuple((HOLE,) * cols for _ in range(rows)))

    @staticmethod
    def is_valid_matrix(grid: Optional[Sequence[Sequence[int]]]) -> bool:
        """
        Check whether a recognized matrix can be played.

        Unlike construction this never raises. A recognizer marks tiles it
        could not classify with -1, which makes the matrix invalid.

        Args:
            grid: Candidate matrix, or None

        Returns:
            True if BoardState.from_2d_list(grid) would succeed
        """
        if grid is None:
            return False
        try:
            rows = tuple(tuple(row) for row in grid)
        except TypeError:
            return False
        return _matrix_problem(rows) is None

    @property
    def rows(self) -> int:
        """Get number of rows in board."""
        return len(self.grid)

    @property
    def cols(self) -> int:
        """Get number of columns in board."""
        return len(self.grid[0])

    # ---------- cell access ----------

    def in_board(self, point) -> bool:
        """Bounds check for a (row, col) coordinate."""
        r, c = point
        return 0 <= r < self.rows and 0 <= c < self.cols

    def _require_in_board(self, point) -> Coordinate:
        point = as_coordinate(point)
        if not self.in_board(point):
            raise OutOfBoundsError(
                f"Coordinate {point} is not on the {self.rows}x{self.cols} board"
            )
        return point

    def value_at(self, point) -> int:
        """
        Get value at a cell.

        Raises:
            OutOfBoundsError: If point is off the board
        """
        point = self._require_in_board(point)
        return self.grid[point.r][point.c]

    def is_hole(self, point) -> bool:
        """
        Check whether a cell is empty.

        Raises:
            OutOfBoundsError: If point is off the board
        """
        return self.value_at(point) == HOLE

    def values_equal(self, p1, p2) -> bool:
        """
        Check whether two cells hold the same value.

        Fails fast on off-board coordinates instead of answering False.

        Raises:
            OutOfBoundsError: If either point is off the board
        """
        return self.value_at(p1) == self.value_at(p2)

    # ---------- walks ----------

    def step(self, point, direction: Direction) -> Optional[Coordinate]:
        """
        Move one cell along direction.

        Returns:
            The adjacent Coordinate, or None if it falls off the board
        """
        target = as_coordinate(point).offset(direction)
        if not self.in_board(target):
            return None
        return target

    def neighbor(self, point, direction: Direction,
                 skip_holes: bool = False) -> Optional[Coordinate]:
        """
        Find the neighbor of a cell along direction.

        Args:
            point: Starting cell (must be on the board)
            direction: Direction to walk
            skip_holes: If True, keep walking over holes until a tile is found

        Returns:
            The adjacent cell (or nearest tile when skipping holes), or None
            if the edge of the board is reached first

        Raises:
            OutOfBoundsError: If point is off the board
        """
        current = self._require_in_board(point)
        while True:
            current = self.step(current, direction)
            if current is None:
                return None
            if not skip_holes or not self.is_hole(current):
                return current

    def iter_cells(self) -> Iterator[Tuple[Coordinate, int]]:
        """Yield (coordinate, value) for every cell, row-major."""
        for r, row in enumerate(self.grid):
            for c, value in enumerate(row):
                yield Coordinate(r, c), value

    # ---------- derived boards ----------

    def with_values(self, updates) -> 'BoardState':
        """
        Create a new board with some cells replaced.

        Args:
            updates: Iterable of ((row, col), value) pairs, applied in order

        Returns:
            New BoardState; this board is unchanged
        """
        new_grid = [list(row) for row in self.grid]
        for point, value in updates:
            r, c = self._require_in_board(point)
            new_grid[r][c] = value
        return BoardState.from_2d_list(new_grid)

    def diff(self, other: 'BoardState') -> List[Coordinate]:
        """
        Find cells that differ between this board and another.

        Args:
            other: Another BoardState of the same size

        Returns:
            List of coordinates where cells differ
        """
        if not isinstance(other, BoardState):
            raise TypeError("Can only diff against another BoardState")
        if (self.rows, self.cols) != (other.rows, other.cols):
            raise ValueError(
                f"Cannot diff {self.rows}x{self.cols} board against "
                f"{other.rows}x{other.cols} board"
            )

        return [
            point for point, value in self.iter_cells()
            if value != other.grid[point.r][point.c]
        ]

    # ---------- summaries ----------

    def count_cells(self) -> int:
        """
        Count non-empty cells on the board.

        Returns:
            Number of tiles
        """
        return sum(1 for row in self.grid for cell in row if cell != HOLE)

    def is_solved(self) -> bool:
        """True if every tile has been eliminated."""
        return all(cell == HOLE for row in self.grid for cell in row)

    def format_rows(self) -> List[str]:
        """
        Render rows for logging, holes shown as '.'.

        Returns:
            One string per row
        """
        width = max(len(str(cell)) for row in self.grid for cell in row)
        return [
            " ".join(str(cell).rjust(width) if cell != HOLE else ".".rjust(width) for cell in row)
            for row in self.grid
        ]

    def to_list(self) -> List[List[int]]:
        """
        Convert to mutable 2D list representation.

        Returns:
            Fresh 2D list; changing it does not affect the board
        """
        return [list(row) for row in self.grid]

    def __hash__(self):
        """Enable using BoardState as dict key or in sets."""
        return hash(self.grid)

    def __eq__(self, other):
        """Enable board equality comparison."""
        if not isinstance(other, BoardState):
            return False
        return self.grid == other.grid


def _matrix_problem(grid) -> Optional[str]:
    """Describe why a tuple matrix is not a valid board, or None if it is."""
    if not isinstance(grid, tuple) or not all(isinstance(row, tuple) for row in grid):
        return "Board grid must be a tuple of tuples (use BoardState.from_2d_list)"
    if len(grid) == 0:
        return "Board must have at least one row"

    cols = len(grid[0])
    if cols == 0:
        return "Board must have at least one column"

    for r, row in enumerate(grid):
        if len(row) != cols:
            return f"Row {r} has {len(row)} cells, expected {cols}"
        for c, cell in enumerate(row):
            if not isinstance(cell, numbers.Integral) or isinstance(cell, bool):
                return f"Cell ({r}, {c}) is not an integer: {cell!r}"
            if cell < 0:
                return f"Cell ({r}, {c}) has unrecognized value {cell}"

    return None
