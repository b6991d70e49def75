"""
Core data model for practice sessions.

Design:
- Operation: Enum for the four arithmetic operations
- QuestionResult: One answered question (immutable once recorded)
- SessionStats: One completed session, as handed over by the session recorder

Records arriving from the recorder use camelCase keys; from_dict() accepts
both that and snake_case so history files can be read either way.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from enum import Enum
from typing import Any

from mathsprint.core.stats import clamp


class Operation(str, Enum):
    """Arithmetic operation of a question."""

    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"

    @property
    def symbol(self) -> str:
        """Operator symbol for display."""
        return {
            Operation.ADD: "+",
            Operation.SUB: "-",
            Operation.MUL: "×",
            Operation.DIV: "÷",
        }[self]


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return default


def _parse_date(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if isinstance(value, str) and value:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    return datetime.now(UTC)


@dataclass(frozen=True)
class QuestionResult:
    """One answered question."""

    operation: Operation
    operand_a: float
    operand_b: float
    is_correct: bool
    response_time_ms: int = 0

    def __post_init__(self):
        # Normalize recorder quirks: string ops, negative or float timings
        object.__setattr__(self, "operation", Operation(self.operation))
        object.__setattr__(self, "response_time_ms", max(0, int(self.response_time_ms or 0)))
        object.__setattr__(self, "is_correct", bool(self.is_correct))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QuestionResult:
        """
        Build a result from a recorder payload.

        Args:
            data: Mapping with operation, operand and timing keys
                (camelCase or snake_case)

        Returns:
            QuestionResult
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"Question result must be a mapping, got {type(data).__name__}")
        return cls(
            operation=Operation(data["operation"]),
            operand_a=_pick(data, "operand_a", "operandA", default=0),
            operand_b=_pick(data, "operand_b", "operandB", default=0),
            is_correct=_pick(data, "is_correct", "isCorrect", default=False),
            response_time_ms=_pick(data, "response_time_ms", "responseTimeMs", default=0),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "operation": self.operation.value,
            "operand_a": self.operand_a,
            "operand_b": self.operand_b,
            "is_correct": self.is_correct,
            "response_time_ms": self.response_time_ms,
        }


@dataclass(frozen=True)
class SessionStats:
    """
    One completed practice session.

    Created once at session end and never mutated. Sessions with
    valid=False (too short, too few questions) stay in history but are
    skipped by every aggregate.
    """

    date: datetime
    session_type: str = "daily"
    accuracy: float = 0.0
    avg_response_time_ms: float = 0.0
    xp_earned: int = 0
    level_before: int = 1
    results: tuple[QuestionResult, ...] = field(default_factory=tuple)
    valid: bool = False
    duration_seconds: float = 0.0
    fluency_score: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "date", _parse_date(self.date))
        object.__setattr__(self, "accuracy", clamp(self.accuracy))
        object.__setattr__(self, "results", tuple(self.results))
        if self.avg_response_time_ms is None or math.isnan(self.avg_response_time_ms):
            object.__setattr__(self, "avg_response_time_ms", 0.0)

    @property
    def total_questions(self) -> int:
        return len(self.results)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (ISO date, snake_case keys)."""
        return {
            "date": self.date.isoformat(),
            "session_type": self.session_type,
            "accuracy": self.accuracy,
            "avg_response_time_ms": self.avg_response_time_ms,
            "xp_earned": self.xp_earned,
            "level_before": self.level_before,
            "results": [r.to_dict() for r in self.results],
            "valid": self.valid,
            "duration_seconds": self.duration_seconds,
            "fluency_score": self.fluency_score,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SessionStats:
        """Build a session record from a recorder or store payload."""
        if not isinstance(data, Mapping):
            raise TypeError(f"Session record must be a mapping, got {type(data).__name__}")
        raw_results = _pick(data, "results", "questionResults", default=()) or ()
        return cls(
            date=_pick(data, "date"),
            session_type=_pick(data, "session_type", "sessionType", default="daily"),
            accuracy=float(_pick(data, "accuracy", default=0.0)),
            avg_response_time_ms=float(_pick(data, "avg_response_time_ms", "avgResponseTimeMs", default=0.0)),
            xp_earned=int(_pick(data, "xp_earned", "xpEarned", default=0)),
            level_before=int(_pick(data, "level_before", "levelBefore", default=1)),
            results=tuple(QuestionResult.from_dict(r) for r in raw_results),
            valid=bool(_pick(data, "valid", default=False)),
            duration_seconds=float(_pick(data, "duration_seconds", "durationSeconds", default=0.0)),
            fluency_score=float(_pick(data, "fluency_score", "fluencyScore", default=0.0)),
        )
