"""
Session XP Award.

Formula (valid session):
    xp = base_xp
         + round(max_performance_xp × fluency)
         + round(max_effort_xp × min(total / effort_target_questions, 1))

If accuracy, speed score, consistency and throughput all clear the bonus
thresholds, xp is multiplied by bonus_multiplier, or by
elite_bonus_multiplier when accuracy is also >= elite_accuracy. The two
never stack.

A session is valid when it has at least min_questions_for_valid answers
and lasted min_duration_seconds. Invalid sessions are still scored so the
UI has something to show, but only earn invalid_session_xp_fraction of the
performance and effort parts and never a bonus. The history layer drops
them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from mathsprint.config import ProgressionSettings, get_settings
from mathsprint.core.models import QuestionResult
from mathsprint.core.stats import clamp
from mathsprint.scoring.fluency import (
    FluencyBreakdown,
    SessionMetrics,
    compute_fluency,
    metrics_from_results,
)


@dataclass(frozen=True)
class SessionScore:
    """Scorer output handed to persistence and the results screen."""

    fluency: float
    xp: int
    is_valid: bool
    bonus_applied: bool = False
    elite: bool = False
    multiplier: float = 1.0
    breakdown: FluencyBreakdown | None = None
    metrics: SessionMetrics | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "fluency": self.fluency,
            "xp": self.xp,
            "is_valid": self.is_valid,
            "bonus_applied": self.bonus_applied,
            "elite": self.elite,
            "multiplier": self.multiplier,
            "breakdown": self.breakdown.to_dict() if self.breakdown else None,
        }


def is_valid_session(
    total_questions: int,
    duration_seconds: float,
    settings: ProgressionSettings | None = None,
) -> bool:
    """Check the minimum question count and duration."""
    settings = settings or get_settings()
    return (
        total_questions >= settings.min_questions_for_valid
        and duration_seconds >= settings.min_duration_seconds
    )


def meets_bonus(
    breakdown: FluencyBreakdown,
    settings: ProgressionSettings,
) -> bool:
    """Check whether all four excellence thresholds are cleared."""
    thresholds = settings.bonus_thresholds
    return (
        breakdown.accuracy >= thresholds.accuracy
        and breakdown.speed_score >= thresholds.speed_score
        and breakdown.consistency_score >= thresholds.consistency
        and breakdown.throughput_score >= thresholds.throughput
    )


def score_metrics(
    metrics: SessionMetrics,
    settings: ProgressionSettings | None = None,
) -> SessionScore:
    """
    Score a session from its aggregate metrics.

    Args:
        metrics: Accuracy, median time, throughput, consistency and counts
        settings: Progression settings (defaults to cached settings)

    Returns:
        SessionScore with fluency (0-1), xp (int >= 0) and validity
    """
    settings = settings or get_settings()
    metrics = metrics.sanitized()

    if metrics.total_questions == 0:
        logger.debug("Scoring empty session: zero fluency, zero XP")
        return SessionScore(fluency=0.0, xp=0, is_valid=False, metrics=metrics)

    breakdown = compute_fluency(metrics, settings)
    valid = is_valid_session(metrics.total_questions, metrics.duration_seconds, settings)

    effort = clamp(metrics.total_questions / settings.effort_target_questions)
    performance_xp = round(settings.max_performance_xp * breakdown.fluency)
    effort_xp = round(settings.max_effort_xp * effort)
    if not valid:
        fraction = settings.invalid_session_xp_fraction
        performance_xp = round(fraction * performance_xp)
        effort_xp = round(fraction * effort_xp)
    xp = settings.base_xp + performance_xp + effort_xp

    multiplier = 1.0
    bonus = valid and meets_bonus(breakdown, settings)
    elite = bonus and breakdown.accuracy >= settings.elite_accuracy
    if bonus:
        if elite:
            multiplier = settings.elite_bonus_multiplier
        else:
            multiplier = settings.bonus_multiplier
        xp = round(xp * multiplier)

    logger.debug(
        f"Scored session: fluency={breakdown.fluency:.3f} xp={xp} "
        f"(perf {performance_xp}, effort {effort_xp}, x{multiplier}) valid={valid}"
    )

    return SessionScore(
        fluency=breakdown.fluency,
        xp=xp,
        is_valid=valid,
        bonus_applied=bonus,
        elite=elite,
        multiplier=multiplier,
        breakdown=breakdown,
        metrics=metrics,
    )


def score_session(
    results: Sequence[QuestionResult],
    duration_seconds: float,
    settings: ProgressionSettings | None = None,
) -> SessionScore:
    """
    Score a finished session from its raw question results.

    Args:
        results: Answered questions
        duration_seconds: Session length in seconds
        settings: Progression settings (defaults to cached settings)

    Returns:
        SessionScore
    """
    settings = settings or get_settings()
    metrics = metrics_from_results(results, duration_seconds, settings)
    return score_metrics(metrics, settings)


def apply_mode_multiplier(
    xp: int,
    session_type: str,
    settings: ProgressionSettings | None = None,
) -> int:
    """
    Scale an award by the session-type multiplier.

    Unknown session types count as 1.0. Assessments award nothing.
    """
    settings = settings or get_settings()
    multiplier = settings.mode_multipliers.get(session_type, 1.0)
    return max(0, round(max(0, xp) * multiplier))
