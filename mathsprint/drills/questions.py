"""
Drill question payloads.

The answer travels with the question so the caller can check a response,
but to_payload() leaves it out unless asked: the presentation layer must
not show it before submission.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

ANSWER_TOLERANCE = 1e-9


def format_number(value: float) -> str:
    """Plain decimal rendering: 48 -> "48", 24.125 -> "24.125"."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return format(value, "f").rstrip("0").rstrip(".")


def _matches(expected: float, submitted: Any) -> bool:
    try:
        value = float(submitted)
    except (TypeError, ValueError):
        return False
    return math.isfinite(value) and abs(value - expected) <= ANSWER_TOLERANCE


@dataclass(frozen=True)
class RoundingQuestion:
    """Round `display` to `round_to`."""

    id: str
    number: float
    display: str
    round_to: str
    answer: float
    tier: int = 0

    @property
    def text(self) -> str:
        if "decimal" in self.round_to:
            return f"Round {self.display} to {self.round_to}"
        return f"Round {self.display} to the nearest {self.round_to}"

    def check(self, submitted: Any) -> bool:
        """Whether a submitted answer is correct."""
        return _matches(self.answer, submitted)

    def to_payload(self, include_answer: bool = False) -> dict[str, Any]:
        payload = {
            "id": self.id,
            "family": "rounding",
            "number": self.number,
            "display": self.display,
            "round_to": self.round_to,
            "text": self.text,
            "tier": self.tier,
        }
        if include_answer:
            payload["answer"] = self.answer
        return payload


@dataclass(frozen=True)
class DoublingQuestion:
    """Double `number`."""

    id: str
    number: float
    answer: float
    tier: int = 0

    @property
    def text(self) -> str:
        return f"Double {format_number(self.number)}"

    def check(self, submitted: Any) -> bool:
        return _matches(self.answer, submitted)

    def to_payload(self, include_answer: bool = False) -> dict[str, Any]:
        payload = {
            "id": self.id,
            "family": "doubling",
            "number": self.number,
            "text": self.text,
            "tier": self.tier,
        }
        if include_answer:
            payload["answer"] = self.answer
        return payload


@dataclass(frozen=True)
class HalvingQuestion:
    """Halve `number`."""

    id: str
    number: float
    answer: float
    tier: int = 0

    @property
    def text(self) -> str:
        return f"Halve {format_number(self.number)}"

    @property
    def is_clean(self) -> bool:
        """True when the half is a whole number."""
        return float(self.answer).is_integer()

    def check(self, submitted: Any) -> bool:
        return _matches(self.answer, submitted)

    def to_payload(self, include_answer: bool = False) -> dict[str, Any]:
        payload = {
            "id": self.id,
            "family": "halving",
            "number": self.number,
            "text": self.text,
            "tier": self.tier,
        }
        if include_answer:
            payload["answer"] = self.answer
        return payload


DrillQuestion = RoundingQuestion | DoublingQuestion | HalvingQuestion
