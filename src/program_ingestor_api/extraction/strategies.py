"""
Strategy chains

Every ordered fallback in the pipeline (extraction tiers, segmentation
strategies, line grammars) is a list of Strategy objects evaluated by
first_success(): the first strategy whose result passes the acceptance
check wins.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

from .models import StrategyTraceEntry

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class Strategy(ABC, Generic[InputT, OutputT]):
    """Abstract base class for one step of an ordered strategy chain"""

    name: str = "strategy"

    @abstractmethod
    def attempt(self, value: InputT) -> Optional[OutputT]:
        """
        Try this strategy on the input.

        Returns:
            The strategy output, or None when the strategy does not apply.
            Implementations must not raise for bad input.
        """
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class FunctionStrategy(Strategy[InputT, OutputT]):
    """Strategy backed by a plain callable"""

    def __init__(self, name: str, func: Callable[[InputT], Optional[OutputT]]):
        self.name = name
        self._func = func

    def attempt(self, value: InputT) -> Optional[OutputT]:
        return self._func(value)


def first_success(
    strategies: Sequence[Strategy[InputT, OutputT]],
    value: InputT,
    accept: Optional[Callable[[OutputT], bool]] = None,
    trace: Optional[List[StrategyTraceEntry]] = None,
    stage: str = "",
) -> Optional[Tuple[Strategy[InputT, OutputT], OutputT]]:
    """
    Evaluate strategies in order and return the first accepted result.

    Args:
        strategies: Ordered strategies, highest priority first
        value: Input handed to every strategy
        accept: Optional acceptance check applied to non-None results
        trace: Optional list that receives one entry per evaluated strategy
        stage: Stage name recorded in the trace

    Returns:
        (strategy, output) for the winner, or None if every strategy failed
    """
    for strategy in strategies:
        output = strategy.attempt(value)

        if output is None:
            _record(trace, stage, strategy.name, "rejected", "no result")
            continue

        if accept is not None and not accept(output):
            _record(trace, stage, strategy.name, "rejected", "failed acceptance check")
            continue

        _record(trace, stage, strategy.name, "accepted")
        logger.debug(f"{stage or 'chain'}: accepted strategy {strategy.name}")
        return strategy, output

    return None


def _record(
    trace: Optional[List[StrategyTraceEntry]],
    stage: str,
    strategy: str,
    outcome: str,
    detail: Optional[str] = None,
) -> None:
    if trace is not None:
        trace.append(StrategyTraceEntry(stage=stage, strategy=strategy, outcome=outcome, detail=detail))
