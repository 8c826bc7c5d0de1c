"""
Strategy Chains.

Every resolver is an ordered list of independent strategies. A strategy is
a pure function taking the label lines and returning a value, or None
when it does not apply. The first strategy with a non-empty result wins.

Author: ML Engineering Team
"""

from typing import Callable, List, Optional, Sequence, TypeVar

from label_extraction.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)

T = TypeVar('T')

Strategy = Callable[[List[str]], Optional[T]]


def _strategy_name(strategy: Callable) -> str:
    # functools.partial has no __name__
    func = getattr(strategy, 'func', strategy)
    return getattr(func, '__name__', repr(func))


def first_match(
    strategies: Sequence[Strategy],
    lines: List[str],
    field_name: str = "value"
) -> Optional[T]:
    """
    Run strategies in order and return the first non-empty result.

    Args:
        strategies: Ordered strategy functions.
        lines: Label lines passed to each strategy.
        field_name: Name used in debug logging.

    Returns:
        First truthy result, or None when every strategy misses.
    """
    for strategy in strategies:
        result = strategy(lines)
        if result:
            logger.debug(f"{field_name} resolved by {_strategy_name(strategy)}: {result!r}")
            return result

    logger.debug(f"{field_name} not resolved by any of {len(strategies)} strategies")
    return None
