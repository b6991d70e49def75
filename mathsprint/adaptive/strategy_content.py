"""
Remedial lesson content, keyed by strategy id.

Static, human-authored text shown when the weakness detector flags a
strategy: a worked example, the steps through it, and a closing tip.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class StrategyStep:
    text: str
    equation: str | None = None
    highlight: str | None = None
    result: str | None = None


@dataclass(frozen=True)
class StrategyExample:
    problem: str
    operand_a: float
    operand_b: float
    answer: float


@dataclass(frozen=True)
class StrategyContent:
    id: str
    title: str
    tagline: str
    example: StrategyExample
    steps: tuple[StrategyStep, ...] = field(default_factory=tuple)
    tip: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "tagline": self.tagline,
            "example": {
                "problem": self.example.problem,
                "operand_a": self.example.operand_a,
                "operand_b": self.example.operand_b,
                "answer": self.example.answer,
            },
            "steps": [
                {k: v for k, v in vars(step).items() if v is not None}
                for step in self.steps
            ],
            "tip": self.tip,
        }


_CONTENT = (
    StrategyContent(
        id="add_place_value",
        title="Place Value Split",
        tagline="Break numbers into tens and ones, then add separately",
        example=StrategyExample("47 + 35", 47, 35, 82),
        steps=(
            StrategyStep("Split both numbers into tens and ones", equation="47 = 40 + 7", highlight="47"),
            StrategyStep("Split the second number too", equation="35 = 30 + 5", highlight="35"),
            StrategyStep("Add the tens together", equation="40 + 30 = 70", result="70"),
            StrategyStep("Add the ones together", equation="7 + 5 = 12", result="12"),
            StrategyStep("Combine both results", equation="70 + 12 = 82", result="82"),
        ),
        tip="This works great for any two-digit addition!",
    ),
    StrategyContent(
        id="add_make_tens",
        title="Make Tens",
        tagline="Round one number to 10, then adjust",
        example=StrategyExample("8 + 7", 8, 7, 15),
        steps=(
            StrategyStep("Look at the larger number", equation="8", highlight="8"),
            StrategyStep("How many more to reach 10?", equation="8 + 2 = 10", result="need 2"),
            StrategyStep("Borrow 2 from the other number", equation="7 - 2 = 5", highlight="7"),
            StrategyStep("Now add 10 + 5", equation="10 + 5 = 15", result="15"),
        ),
        tip="Making 10 first makes the final addition easy!",
    ),
    StrategyContent(
        id="sub_count_up",
        title="Count Up Method",
        tagline="Count up from the smaller number to find the difference",
        example=StrategyExample("52 - 38", 52, 38, 14),
        steps=(
            StrategyStep("Start from the smaller number", equation="Start at 38", highlight="38"),
            StrategyStep("Count up to the nearest ten", equation="38 + 2 = 40", result="+2"),
            StrategyStep("Count up to the target", equation="40 + 12 = 52", result="+12"),
            StrategyStep("Add your jumps together", equation="2 + 12 = 14", result="14"),
        ),
        tip="Think of it like counting change!",
    ),
    StrategyContent(
        id="sub_compensation",
        title="Compensation",
        tagline="Round to an easy number, then adjust",
        example=StrategyExample("82 - 39", 82, 39, 43),
        steps=(
            StrategyStep("39 is close to 40 - round up!", equation="39 → 40", highlight="39"),
            StrategyStep("Subtract the round number", equation="82 - 40 = 42", result="42"),
            StrategyStep("We subtracted 1 too many", equation="Adjust: +1", highlight="adjust"),
            StrategyStep("Add back the extra 1", equation="42 + 1 = 43", result="43"),
        ),
        tip="Round to make the subtraction easy, then fix it!",
    ),
    StrategyContent(
        id="mul_distributive",
        title="Distributive Split",
        tagline="Break one number into friendly parts",
        example=StrategyExample("7 × 8", 7, 8, 56),
        steps=(
            StrategyStep("Split one number into parts you know", equation="7 = 5 + 2", highlight="7"),
            StrategyStep("Multiply each part by 8", equation="5 × 8 = 40", result="40"),
            StrategyStep("Multiply the other part", equation="2 × 8 = 16", result="16"),
            StrategyStep("Add both results", equation="40 + 16 = 56", result="56"),
        ),
        tip="Use facts you already know to build harder ones!",
    ),
    StrategyContent(
        id="mul_nines",
        title="Nines Trick",
        tagline="Multiply by 10, then subtract once",
        example=StrategyExample("9 × 7", 9, 7, 63),
        steps=(
            StrategyStep("9 is almost 10 - use that!", equation="9 = 10 - 1", highlight="9"),
            StrategyStep("Multiply by 10 instead", equation="10 × 7 = 70", result="70"),
            StrategyStep("Subtract one group of 7", equation="70 - 7 = 63", result="63"),
        ),
        tip="9 times anything = 10 times minus itself!",
    ),
)

STRATEGY_CONTENT = MappingProxyType({c.id: c for c in _CONTENT})


def get_strategy_content(strategy_id: str) -> StrategyContent | None:
    """Lesson content for a strategy id, or None if there is none."""
    return STRATEGY_CONTENT.get(strategy_id)
