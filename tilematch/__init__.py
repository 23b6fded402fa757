"""
Tile Match Helper - Elimination finder and auto-solver for sliding tile-matching boards.
"""

__version__ = "0.1.0"
