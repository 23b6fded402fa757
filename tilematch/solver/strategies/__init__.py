"""
Strategies Package - Concrete strategy implementations.

Import this module to register all built-in strategies.
"""

from .first_move import FirstMoveStrategy
from .retry import RetryStrategy
from .deep_retry import DeepRetryStrategy

__all__ = [
    "FirstMoveStrategy",
    "RetryStrategy",
    "DeepRetryStrategy",
]
