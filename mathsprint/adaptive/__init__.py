"""
Adaptive Remediation.

Detects which arithmetic strategies a player is weak in and serves the
matching remedial lesson.

Components:
- strategies: Fixed, ordered Strategy catalog with operand-shape predicates
- weakness_detector: detect_weakness over a window of results
- strategy_content: Static lesson text keyed by strategy id
"""
from mathsprint.adaptive.strategies import (
    STRATEGY_CATALOG,
    Strategy,
    get_all_strategies,
    get_strategy_by_id,
)
from mathsprint.adaptive.strategy_content import (
    STRATEGY_CONTENT,
    StrategyContent,
    StrategyExample,
    StrategyStep,
    get_strategy_content,
)
from mathsprint.adaptive.weakness_detector import (
    MIN_RESULTS_FOR_DETECTION,
    StrategyTally,
    WeaknessPattern,
    detect_weakness,
    tally_strategies,
)

__all__ = [
    "MIN_RESULTS_FOR_DETECTION",
    "STRATEGY_CATALOG",
    "STRATEGY_CONTENT",
    "Strategy",
    "StrategyContent",
    "StrategyExample",
    "StrategyStep",
    "StrategyTally",
    "WeaknessPattern",
    "detect_weakness",
    "get_all_strategies",
    "get_strategy_by_id",
    "get_strategy_content",
    "tally_strategies",
]
