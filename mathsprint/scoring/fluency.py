"""
Fluency Scoring.

Turns one session's raw question results into four normalized
dimensions and a weighted composite:

    fluency = wA·accuracy + wS·speed + wT·throughput + wC·consistency

Where:
    speed       = min(1, target_time_ms / median_ms)
    throughput  = min(1, questions_per_second / target_qps)
    consistency = 1 - MAD(response_times) / reference_variability_ms

Every dimension saturates in [0, 1], so the composite does too. If
accuracy is below the accuracy floor the composite is capped; fast guessing
must not read as fluent.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from statistics import median

from loguru import logger

from mathsprint.config import ProgressionSettings, get_settings
from mathsprint.core.models import QuestionResult
from mathsprint.core.stats import clamp, median_absolute_deviation


@dataclass(frozen=True)
class SessionMetrics:
    """Aggregate metrics of one session, the scorer's input."""

    accuracy: float = 0.0
    median_response_ms: float = 0.0
    questions_per_second: float = 0.0
    consistency: float = 0.0
    total_questions: int = 0
    duration_seconds: float = 0.0

    def sanitized(self) -> SessionMetrics:
        """
        Return a copy with every field forced into its legal range.

        Out-of-range values are a caller bug; they get clamped and logged
        instead of raised so a live session never crashes on scoring.
        """
        accuracy = clamp(_finite(self.accuracy))
        if accuracy != self.accuracy:
            logger.warning(f"Accuracy {self.accuracy!r} outside [0, 1]; clamped to {accuracy}")
        count = _finite(self.total_questions)
        total = max(0, int(count)) if math.isfinite(count) else 0
        if total != self.total_questions:
            logger.warning(f"Question count {self.total_questions!r} invalid; using {total}")
        return SessionMetrics(
            accuracy=accuracy,
            median_response_ms=max(0.0, _finite(self.median_response_ms)),
            questions_per_second=max(0.0, _finite(self.questions_per_second)),
            consistency=clamp(_finite(self.consistency)),
            total_questions=total,
            duration_seconds=max(0.0, _finite(self.duration_seconds)),
        )


@dataclass(frozen=True)
class FluencyBreakdown:
    """Normalized dimensions and the composite score (all 0-1)."""

    accuracy: float
    speed_score: float
    throughput_score: float
    consistency_score: float
    fluency: float
    capped: bool = False

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary."""
        return {
            "accuracy": self.accuracy,
            "speed_score": self.speed_score,
            "throughput_score": self.throughput_score,
            "consistency_score": self.consistency_score,
            "fluency": self.fluency,
        }


def _finite(value) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(value):
        return 0.0
    return value


def metrics_from_results(
    results: Sequence[QuestionResult],
    duration_seconds: float,
    settings: ProgressionSettings | None = None,
) -> SessionMetrics:
    """
    Aggregate raw question results into session metrics.

    Args:
        results: Answered questions in the order they were asked
        duration_seconds: Wall-clock length of the session
        settings: Progression settings (defaults to cached settings)

    Returns:
        SessionMetrics; all zeros when no question was answered
    """
    settings = settings or get_settings()
    duration_seconds = max(0.0, _finite(duration_seconds))
    if not results:
        return SessionMetrics(duration_seconds=duration_seconds)

    total = len(results)
    correct = sum(1 for r in results if r.is_correct)
    times = [r.response_time_ms for r in results]

    variability = median_absolute_deviation(times)
    consistency = clamp(1 - variability / settings.reference_variability_ms)

    return SessionMetrics(
        accuracy=correct / total,
        median_response_ms=float(median(times)),
        questions_per_second=total / max(duration_seconds, 1.0),
        consistency=consistency,
        total_questions=total,
        duration_seconds=duration_seconds,
    )


def speed_score(median_ms: float, settings: ProgressionSettings) -> float:
    """Speed dimension. At or under target time scores 1.0; zero time saturates."""
    if median_ms <= 0:
        return 1.0
    return clamp(settings.target_time_ms / median_ms)


def throughput_score(qps: float, settings: ProgressionSettings) -> float:
    """Throughput dimension. At or above target q/s scores 1.0."""
    return clamp(qps / settings.target_qps)


def compute_fluency(
    metrics: SessionMetrics,
    settings: ProgressionSettings | None = None,
) -> FluencyBreakdown:
    """
    Compute the weighted fluency composite for a session.

    Args:
        metrics: Session metrics (sanitized internally)
        settings: Progression settings (defaults to cached settings)

    Returns:
        FluencyBreakdown with the composite in [0, 1]
    """
    settings = settings or get_settings()
    metrics = metrics.sanitized()

    if metrics.total_questions == 0:
        return FluencyBreakdown(
            accuracy=0.0,
            speed_score=0.0,
            throughput_score=0.0,
            consistency_score=0.0,
            fluency=0.0,
        )

    speed = speed_score(metrics.median_response_ms, settings)
    throughput = throughput_score(metrics.questions_per_second, settings)
    w = settings.weights

    fluency = clamp(
        w.accuracy * metrics.accuracy
        + w.speed * speed
        + w.throughput * throughput
        + w.consistency * metrics.consistency
    )

    capped = False
    if metrics.accuracy < settings.accuracy_floor and fluency > settings.fluency_cap_below_accuracy_floor:
        fluency = settings.fluency_cap_below_accuracy_floor
        capped = True

    return FluencyBreakdown(
        accuracy=metrics.accuracy,
        speed_score=speed,
        throughput_score=throughput,
        consistency_score=metrics.consistency,
        fluency=fluency,
        capped=capped,
    )


def fluency_label(score: float) -> str:
    """Human-readable band for a 0-1 fluency score."""
    if score <= 0.25:
        return "Building"
    elif score <= 0.50:
        return "Improving"
    elif score <= 0.75:
        return "Strong"
    elif score <= 0.90:
        return "Fluent"
    else:
        return "Elite"
