"""
Strategy catalog.

A strategy is a named mental-arithmetic technique tied to an operation and
an operand shape. The catalog is a fixed, ordered table: order matters,
because the weakness detector breaks accuracy ties by catalog position.

Operand-shape predicates are heuristics. sub_compensation, for instance,
treats a subtrahend whose last digit is >= 7 or <= 3 as "close to a round
number". Changing these thresholds changes which remedial lesson surfaces.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from mathsprint.core.models import Operation, QuestionResult

Predicate = Callable[[QuestionResult], bool]


@dataclass(frozen=True)
class Strategy:
    """A reasoning pattern plus the sample size and accuracy that flag it weak."""

    id: str
    name: str
    operation: Operation
    applies: Predicate
    min_attempts: int = 5
    max_accuracy_threshold: float = 0.7

    def matches(self, result: QuestionResult) -> bool:
        """Operation matches and the operand shape fits."""
        return result.operation == self.operation and self.applies(result)


# ============================================================================
# Operand-shape predicates
# ============================================================================


def either_operand_at_least(n: float) -> Predicate:
    def check(r: QuestionResult) -> bool:
        return r.operand_a >= n or r.operand_b >= n
    return check


def both_operands_at_most(n: float) -> Predicate:
    def check(r: QuestionResult) -> bool:
        return r.operand_a <= n and r.operand_b <= n
    return check


def difference_at_most(n: float) -> Predicate:
    def check(r: QuestionResult) -> bool:
        return r.operand_a - r.operand_b <= n
    return check


def subtrahend_near_round(r: QuestionResult) -> bool:
    last_digit = r.operand_b % 10
    return last_digit >= 7 or last_digit <= 3


def either_operand_is(n: float) -> Predicate:
    def check(r: QuestionResult) -> bool:
        return r.operand_a == n or r.operand_b == n
    return check


STRATEGY_CATALOG: tuple[Strategy, ...] = (
    Strategy("add_place_value", "Place Value Split", Operation.ADD, either_operand_at_least(10)),
    Strategy("add_make_tens", "Make Tens", Operation.ADD, both_operands_at_most(20)),
    Strategy("sub_count_up", "Count Up Method", Operation.SUB, difference_at_most(15)),
    Strategy("sub_compensation", "Compensation", Operation.SUB, subtrahend_near_round),
    Strategy(
        "mul_distributive", "Distributive Split", Operation.MUL, either_operand_at_least(6),
        min_attempts=4, max_accuracy_threshold=0.65,
    ),
    Strategy("mul_nines", "Nines Trick", Operation.MUL, either_operand_is(9), min_attempts=3),
)

_BY_ID = {s.id: s for s in STRATEGY_CATALOG}


def get_strategy_by_id(strategy_id: str) -> Strategy | None:
    """Look up a strategy by id."""
    return _BY_ID.get(strategy_id)


def get_all_strategies() -> list[Strategy]:
    """All strategies, in catalog order."""
    return list(STRATEGY_CATALOG)
