"""
Strategy Factory Module - Named registry of solving strategies.
"""

from typing import Any, Dict, List, Type

from .base import SolverStrategy

DEFAULT_STRATEGY = "retry"

_STRATEGIES: Dict[str, Type[SolverStrategy]] = {}


def register_strategy(cls: Type[SolverStrategy]) -> Type[SolverStrategy]:
    """
    Class decorator adding a strategy to the registry under its `name`.

    Usage:
        @register_strategy
        class MyStrategy(SolverStrategy):
            name = "my_strategy"
    """
    _STRATEGIES[cls.name] = cls
    return cls


def create_strategy(name: str, **kwargs: Any) -> SolverStrategy:
    """
    Instantiate a registered strategy.

    Args:
        name: Strategy name ("first_move", "retry", "deep_retry")
        **kwargs: Passed to the strategy constructor (e.g. retry_budget)

    Raises:
        ValueError: If no strategy is registered under name
    """
    try:
        strategy_cls = _STRATEGIES[name]
    except KeyError:
        available = ", ".join(_STRATEGIES)
        raise ValueError(f"Unknown strategy: {name}. Available: {available}") from None
    return strategy_cls(**kwargs)


def get_strategy_info() -> List[Dict[str, str]]:
    """Name and description of every registered strategy, in registration order."""
    return [
        {"name": cls.name, "description": cls.description}
        for cls in _STRATEGIES.values()
    ]


def get_default_strategy_name() -> str:
    """The strategy used when none is configured."""
    return DEFAULT_STRATEGY
