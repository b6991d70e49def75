"""
Weakness Detector.

Scans recent question results against the strategy catalog and reports the
single weakest strategy the player has not been taught yet.

Algorithm:
1. For every strategy, count correct/total over results it matches
   (one result may count toward several strategies)
2. Drop strategies already taught or below their minimum sample size
3. Keep those whose accuracy is at or under their threshold
4. Return the lowest accuracy; ties go to the earlier catalog entry

"No weakness" (None) is a normal outcome, not an error: too few results,
no strategy with enough attempts, or nothing under threshold.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from loguru import logger

from mathsprint.adaptive.strategies import STRATEGY_CATALOG, Strategy
from mathsprint.core.models import Operation, QuestionResult

MIN_RESULTS_FOR_DETECTION = 5


@dataclass(frozen=True)
class WeaknessPattern:
    """Detector verdict consumed by the remedial-lesson screen."""

    strategy_id: str
    operation: Operation
    description: str
    accuracy: float
    total_attempts: int
    incorrect_count: int

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "strategy_id": self.strategy_id,
            "operation": self.operation.value,
            "description": self.description,
            "accuracy": self.accuracy,
            "total_attempts": self.total_attempts,
            "incorrect_count": self.incorrect_count,
        }


@dataclass
class StrategyTally:
    """Correct/total counts for one strategy."""

    strategy: Strategy
    correct: int = 0
    total: int = 0

    @property
    def accuracy(self) -> float:
        return self.correct / self.total if self.total else 1.0

    @property
    def has_enough_data(self) -> bool:
        return self.total >= self.strategy.min_attempts

    @property
    def is_weak(self) -> bool:
        return self.has_enough_data and self.accuracy <= self.strategy.max_accuracy_threshold


def tally_strategies(
    results: Iterable[QuestionResult],
    catalog: Sequence[Strategy] = STRATEGY_CATALOG,
) -> list[StrategyTally]:
    """
    Count matching attempts per strategy.

    Args:
        results: Question results to scan
        catalog: Strategies in priority order

    Returns:
        One StrategyTally per strategy, in catalog order
    """
    tallies = [StrategyTally(strategy=s) for s in catalog]
    for result in results:
        for tally in tallies:
            if tally.strategy.matches(result):
                tally.total += 1
                if result.is_correct:
                    tally.correct += 1
    return tallies


def detect_weakness(
    results: Sequence[QuestionResult],
    taught: Iterable[str] = (),
    catalog: Sequence[Strategy] = STRATEGY_CATALOG,
) -> WeaknessPattern | None:
    """
    Find the weakest untaught strategy in a window of results.

    Args:
        results: Recent question results (from valid sessions only)
        taught: Strategy ids already shown to the player
        catalog: Strategies in priority order

    Returns:
        WeaknessPattern, or None when no weakness can be established
    """
    results = list(results)
    if len(results) < MIN_RESULTS_FOR_DETECTION:
        logger.debug(f"Weakness detection skipped: {len(results)} results")
        return None

    taught = set(taught)
    weakest: StrategyTally | None = None

    for tally in tally_strategies(results, catalog):
        if tally.strategy.id in taught or not tally.is_weak:
            continue
        if weakest is None or tally.accuracy < weakest.accuracy:
            weakest = tally

    if weakest is None:
        logger.debug(f"No weakness found in {len(results)} results")
        return None

    strategy = weakest.strategy
    logger.debug(
        f"Weakness: {strategy.id} at {weakest.accuracy:.0%} "
        f"({weakest.correct}/{weakest.total})"
    )
    return WeaknessPattern(
        strategy_id=strategy.id,
        operation=strategy.operation,
        description=strategy.name,
        accuracy=weakest.accuracy,
        total_attempts=weakest.total,
        incorrect_count=weakest.total - weakest.correct,
    )
