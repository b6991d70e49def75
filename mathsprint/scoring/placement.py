"""
Assessment Placement.

Maps a placement assessment onto a competence group (1-10) and the level
a new player starts at.

Algorithm:
1. CPM = correct answers per minute of assessment time
2. Base group from the nine ascending CPM bands
3. Cap the group by accuracy (<55%, <65%, <75%, otherwise uncapped)
4. Speed nudge: +1 for a fast, accurate median; -1 for a slow median
5. Clamp to 1-10 and look up the starting level

Assessments with fewer than placement.min_answers answers are not enough to
place anyone; they land in group 1 at level 1.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from statistics import median

from loguru import logger

from mathsprint.config import PlacementSettings, ProgressionSettings, get_settings
from mathsprint.core.models import QuestionResult

# Median reported when no timings were recorded; counts as slow
NO_TIMING_MEDIAN_MS = 99_999


@dataclass(frozen=True)
class AssessmentMetrics:
    """Raw counts from one placement assessment."""

    total_answers: int
    correct_answers: int
    response_times_ms: tuple[int, ...] = field(default_factory=tuple)
    duration_seconds: float = 0.0

    def __post_init__(self):
        total = max(0, int(self.total_answers))
        correct = min(max(0, int(self.correct_answers)), total)
        if correct != self.correct_answers:
            logger.warning(
                f"Correct count {self.correct_answers!r} outside 0..{total}; using {correct}"
            )
        object.__setattr__(self, "total_answers", total)
        object.__setattr__(self, "correct_answers", correct)
        object.__setattr__(self, "response_times_ms", tuple(self.response_times_ms))
        object.__setattr__(self, "duration_seconds", max(0.0, float(self.duration_seconds)))

    @classmethod
    def from_results(
        cls,
        results: Sequence[QuestionResult],
        duration_seconds: float,
    ) -> AssessmentMetrics:
        """Collect assessment counts from answered questions."""
        return cls(
            total_answers=len(results),
            correct_answers=sum(1 for r in results if r.is_correct),
            response_times_ms=tuple(r.response_time_ms for r in results),
            duration_seconds=duration_seconds,
        )


@dataclass(frozen=True)
class PlacementResult:
    """
    Placement verdict with the intermediate groups kept for inspection.

    base_group comes from CPM alone, capped_group after the accuracy cap,
    nudged_group after the speed nudge.
    """

    competence_group: int
    starting_level: int
    is_valid: bool
    accuracy: float
    cpm: float
    median_ms: float
    base_group: int = 1
    accuracy_cap: int = 1
    capped_group: int = 1
    nudged_group: int = 1

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "competence_group": self.competence_group,
            "starting_level": self.starting_level,
            "is_valid": self.is_valid,
            "accuracy": self.accuracy,
            "cpm": self.cpm,
            "median_ms": self.median_ms,
            "base_group": self.base_group,
            "accuracy_cap": self.accuracy_cap,
            "capped_group": self.capped_group,
            "nudged_group": self.nudged_group,
        }


def _median_ms(times: Sequence[int]) -> float:
    if not times:
        return NO_TIMING_MEDIAN_MS
    # Even-length medians round half up to whole milliseconds
    return math.floor(median(times) + 0.5)


def group_from_cpm(cpm: float, config: PlacementSettings) -> int:
    """Base competence group: 1 below the first band, 10 at or above the last."""
    for group, bound in enumerate(config.cpm_bands, start=1):
        if cpm < bound:
            return group
    return len(config.cpm_bands) + 1


def accuracy_cap(accuracy: float, config: PlacementSettings) -> int:
    """Highest group reachable at this accuracy."""
    caps = config.accuracy_caps
    if accuracy < 0.55:
        return caps.below_55
    if accuracy < 0.65:
        return caps.below_65
    if accuracy < 0.75:
        return caps.below_75
    return caps.default


def compute_placement(
    metrics: AssessmentMetrics,
    settings: ProgressionSettings | None = None,
) -> PlacementResult:
    """
    Place a player from their assessment.

    Args:
        metrics: Assessment counts, timings and duration
        settings: Progression settings (defaults to cached settings)

    Returns:
        PlacementResult; group 1 / level 1 when the assessment is too short
    """
    settings = settings or get_settings()
    config = settings.placement

    total = metrics.total_answers
    correct = metrics.correct_answers
    accuracy = correct / total if total else 0.0
    minutes = metrics.duration_seconds / 60
    cpm = correct / minutes if minutes > 0 else 0.0
    median_ms = _median_ms(metrics.response_times_ms)

    if total < config.min_answers:
        logger.debug(f"Placement skipped: {total} answers (need {config.min_answers})")
        return PlacementResult(
            competence_group=1,
            starting_level=1,
            is_valid=False,
            accuracy=accuracy,
            cpm=cpm,
            median_ms=median_ms,
        )

    base = group_from_cpm(cpm, config)
    cap = accuracy_cap(accuracy, config)
    capped = min(base, cap)

    nudged = capped
    if median_ms <= config.fast_threshold_ms and accuracy >= config.fast_accuracy_min:
        nudged = min(10, nudged + 1)
    if median_ms >= config.slow_threshold_ms:
        nudged = max(1, nudged - 1)

    group = min(max(nudged, 1), 10)
    level = min(max(config.group_to_level.get(group, 1), 1), config.max_start_level)

    logger.debug(
        f"Placement: cpm={cpm:.1f} acc={accuracy:.0%} median={median_ms}ms "
        f"-> G{base} cap {cap} -> G{group}, level {level}"
    )

    return PlacementResult(
        competence_group=group,
        starting_level=level,
        is_valid=True,
        accuracy=accuracy,
        cpm=cpm,
        median_ms=median_ms,
        base_group=base,
        accuracy_cap=cap,
        capped_group=capped,
        nudged_group=nudged,
    )


def placement_message(group: int) -> str:
    """Encouragement shown with the placement result."""
    if group <= 2:
        return "We've found a good starting point. Steady practice will build speed and confidence."
    elif group <= 4:
        return "Your foundations are solid. Focused practice will make them fluent."
    elif group <= 6:
        return "Capable arithmetic. We'll work on speed and consistency."
    elif group <= 8:
        return "Strong performance. You're ready for problems that push your limits."
    else:
        return "Excellent results. You'll start at an advanced level."
