"""
Move Module - Tile runs, candidate slides and eliminable pairs.
"""

from dataclasses import dataclass
from typing import Tuple

from .geometry import Coordinate, Direction, as_coordinate


@dataclass(frozen=True)
class TileVector:
    """
    A directed, contiguous, hole-free run of tiles on one row or column.

    Attributes:
        start: First cell of the run (nearest the hole it was found from)
        end: Last cell of the run
        direction: Direction walked from start to end
    """
    start: Coordinate
    end: Coordinate
    direction: Direction

    @classmethod
    def create(cls, start, end, direction: Direction) -> 'TileVector':
        """Create a TileVector, normalizing (r, c) tuples to Coordinates."""
        return cls(start=as_coordinate(start), end=as_coordinate(end), direction=direction)

    @property
    def is_horizontal(self) -> bool:
        """True if the run lies on a single row."""
        return self.start.r == self.end.r

    @property
    def length(self) -> int:
        """Number of cells in the run."""
        return max(abs(self.end.r - self.start.r), abs(self.end.c - self.start.c)) + 1

    def cells(self) -> Tuple[Coordinate, ...]:
        """
        Enumerate every cell of the run from start to end, inclusive.

        The walk order comes from the relative position of start and end,
        not from `direction`.

        Returns:
            Tuple of coordinates in run order
        """
        dr = (self.end.r > self.start.r) - (self.end.r < self.start.r)
        dc = (self.end.c > self.start.c) - (self.end.c < self.start.c)
        return tuple(
            Coordinate(self.start.r + dr * i, self.start.c + dc * i)
            for i in range(self.length)
        )

    def contains(self, point) -> bool:
        """
        Straight-line containment test along the run's row or column.

        Args:
            point: (row, col) coordinate

        Returns:
            True if point lies between start and end inclusive
        """
        r, c = point
        if self.is_horizontal:
            low, high = sorted((self.start.c, self.end.c))
            return r == self.start.r and low <= c <= high
        low, high = sorted((self.start.r, self.end.r))
        return c == self.start.c and low <= r <= high

    def shifted(self, direction: Direction, distance: int) -> 'TileVector':
        """Same run moved `distance` cells along `direction`, keeping its own direction."""
        return TileVector(
            start=self.start.offset(direction, distance),
            end=self.end.offset(direction, distance),
            direction=self.direction,
        )

    def describe(self) -> str:
        """Human-readable 1-based location of the run."""
        start, end = self.start, self.end
        if start == end:
            return f"Row {start.r + 1}, column {start.c + 1}"
        if self.is_horizontal:
            return f"Row {start.r + 1}, columns {start.c + 1}-{end.c + 1}"
        return f"Column {start.c + 1}, rows {start.r + 1}-{end.r + 1}"


@dataclass(frozen=True)
class EliminateBlock:
    """
    A pair of equal tiles joined by an all-hole straight path.

    Attributes:
        point1: First tile (row-major earlier of the two when found by a scan)
        point2: Second tile
        value: Shared tile value
    """
    point1: Coordinate
    point2: Coordinate
    value: int

    @classmethod
    def create(cls, point1, point2, value: int) -> 'EliminateBlock':
        return cls(point1=as_coordinate(point1), point2=as_coordinate(point2), value=value)

    @property
    def pair(self) -> frozenset:
        """Unordered coordinate pair, for duplicate checks."""
        return frozenset((self.point1, self.point2))

    def describe(self) -> str:
        return f"{self.point1}-{self.point2} (value {self.value})"


@dataclass(frozen=True)
class MaximumMove:
    """
    Largest possible slide of a run into a hole.

    Attributes:
        direction: Direction the tiles slide (toward the hole)
        distance: Maximum slide distance (cells from run start to the hole)
        tile_vector: The run before sliding
    """
    direction: Direction
    distance: int
    tile_vector: TileVector


@dataclass(frozen=True)
class EffectiveMove:
    """
    A slide truncated to a distance that produces an elimination.

    Attributes:
        direction: Direction the tiles slide
        distance: Slide distance (<= the maximum move's distance)
        tile_vector: The run before sliding
        eliminate: Elimination available once the slide is done
    """
    direction: Direction
    distance: int
    tile_vector: TileVector
    eliminate: EliminateBlock

    @classmethod
    def from_maximum(cls, move: MaximumMove, distance: int,
                     eliminate: EliminateBlock) -> 'EffectiveMove':
        return cls(
            direction=move.direction,
            distance=distance,
            tile_vector=move.tile_vector,
            eliminate=eliminate,
        )

    @property
    def moved_vector(self) -> TileVector:
        """Position of the run after the slide."""
        return self.tile_vector.shifted(self.direction, self.distance)

    @property
    def dedup_key(self) -> Tuple:
        """
        Key identifying the physical outcome of the slide.

        Two moves with the same key leave the board in the same state.
        """
        moved = self.moved_vector
        return (moved.start, moved.end, self.direction, self.distance)

    @property
    def elimination_key(self) -> Tuple:
        """Key identifying the slide distance together with the pair it exposes."""
        e = self.eliminate
        return (self.direction, self.distance, e.value,
                e.point1.r, e.point1.c, e.point2.r, e.point2.c)

    def describe(self) -> str:
        """
        Human-readable instruction for a player.

        Example:
            "Row 1, column 3: slide left 1 cell(s), then eliminate (0, 0)-(0, 1) (value 6)"
        """
        return (
            f"{self.tile_vector.describe()}: slide {self.direction.name.lower()} "
            f"{self.distance} cell(s), then eliminate {self.eliminate.describe()}"
        )
