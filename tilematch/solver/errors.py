"""
Errors Module - Contract violations raised by the board engine.

These indicate a broken caller invariant (e.g. asking for the moves of a
tile instead of a hole) and are raised immediately, never retried.
"""


class BoardError(Exception):
    """Base class for all board engine errors."""


class OutOfBoundsError(BoardError, IndexError):
    """A coordinate lies outside the board."""


class NotAHoleError(BoardError, ValueError):
    """An operation required a hole cell but found a tile."""


class NotCollinearError(BoardError, ValueError):
    """Two coordinates share neither a row nor a column."""


class InvalidDirectionError(BoardError, ValueError):
    """An unrecognized direction was passed."""


class InvalidGridError(BoardError, ValueError):
    """A matrix cannot be turned into a board (empty, ragged or negative cells)."""
