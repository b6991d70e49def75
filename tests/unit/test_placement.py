"""
Unit tests for assessment placement.

Tests:
- CPM band boundaries
- Accuracy caps and speed nudges
- Group to starting-level mapping
- Short assessments and degenerate input
"""

import pytest

from mathsprint.config import ProgressionSettings
from mathsprint.scoring.placement import (
    AssessmentMetrics,
    compute_placement,
    group_from_cpm,
    placement_message,
)


def _assessment(total, correct, ms=1500, seconds=180):
    return AssessmentMetrics(
        total_answers=total,
        correct_answers=correct,
        response_times_ms=(ms,) * total,
        duration_seconds=seconds,
    )


class TestCPMBands:
    @pytest.mark.parametrize(
        "correct,group",
        [(9, 1), (12, 2), (18, 3), (60, 10)],
    )
    def test_band_boundaries_are_lower_inclusive(self, settings, correct, group):
        # 180 s assessment: CPM = correct / 3
        result = compute_placement(_assessment(max(correct, 12), correct, ms=2000), settings)
        assert result.base_group == group

    def test_every_band(self, settings):
        groups = [group_from_cpm(cpm, settings.placement) for cpm in (3.9, 4, 6, 8, 10, 12, 14, 16, 18, 20, 45)]
        assert groups == [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 10]

    def test_uses_actual_duration(self, settings):
        slow = compute_placement(_assessment(30, 30, seconds=180), settings)
        fast = compute_placement(_assessment(30, 30, seconds=90), settings)

        assert fast.cpm == slow.cpm * 2
        assert fast.base_group >= slow.base_group


class TestCapsAndNudges:
    def test_fast_but_inaccurate_is_capped(self, settings):
        result = compute_placement(_assessment(90, 54, ms=1100), settings)

        assert result.accuracy == pytest.approx(0.6)
        assert result.base_group == 9
        assert result.accuracy_cap == 5
        assert result.capped_group == 5
        # Fast, but below the accuracy needed for a nudge
        assert result.competence_group == 5
        assert result.starting_level == 8

    def test_slow_but_accurate_loses_one_group(self, settings):
        result = compute_placement(_assessment(26, 24, ms=2700), settings)

        assert result.cpm == pytest.approx(8)
        assert result.base_group == 4
        assert result.accuracy_cap == 10
        assert result.nudged_group == 3
        assert result.starting_level == 4

    def test_fast_and_accurate_gains_one_group(self, settings):
        result = compute_placement(_assessment(36, 33, ms=1200), settings)

        assert result.cpm == 11
        assert result.base_group == 5
        assert result.nudged_group == 6
        assert result.competence_group == 6
        assert result.starting_level == 10

    def test_elite_reaches_top_group(self, settings):
        result = compute_placement(_assessment(68, 63, ms=1200), settings)

        assert result.base_group == 10
        assert result.competence_group == 10
        assert result.starting_level == 30

    @pytest.mark.parametrize(
        "correct,cap",
        [(30, 3), (36, 5), (42, 7), (48, 10)],
    )
    def test_accuracy_caps(self, settings, correct, cap):
        result = compute_placement(_assessment(60, correct), settings)
        assert result.accuracy_cap == cap


class TestLevels:
    def test_group_to_level_table(self, settings):
        expected = {1: 1, 2: 2, 3: 4, 4: 6, 5: 8, 6: 10, 7: 12, 8: 16, 9: 22, 10: 30}
        assert dict(settings.placement.group_to_level) == expected

    def test_start_level_respects_maximum(self):
        settings = ProgressionSettings(_env_file=None, placement={"max_start_level": 20})
        result = compute_placement(_assessment(68, 63, ms=1200), settings)
        assert result.competence_group == 10
        assert result.starting_level == 20


class TestShortAssessments:
    def test_too_few_answers_forces_group_one(self, settings):
        result = compute_placement(_assessment(6, 6, ms=1000), settings)

        assert result.is_valid is False
        assert result.competence_group == 1
        assert result.starting_level == 1

    def test_zero_answers(self, settings):
        result = compute_placement(_assessment(0, 0), settings)

        assert result.is_valid is False
        assert result.accuracy == 0
        assert result.cpm == 0

    def test_correct_count_clamped_to_total(self):
        metrics = AssessmentMetrics(total_answers=10, correct_answers=25, duration_seconds=60)
        assert metrics.correct_answers == 10

    def test_from_results(self, settings, result_factory):
        results = [result_factory(correct=i % 4 != 0, ms=1250) for i in range(40)]
        metrics = AssessmentMetrics.from_results(results, 180)

        assert metrics.total_answers == 40
        assert metrics.correct_answers == 30
        result = compute_placement(metrics, settings)
        assert result.median_ms == 1250
        assert result.cpm == 10

    def test_same_input_same_output(self, settings):
        metrics = _assessment(45, 40, ms=1800)
        assert compute_placement(metrics, settings) == compute_placement(metrics, settings)


def test_messages_cover_every_group():
    messages = {placement_message(g) for g in range(1, 11)}
    assert len(messages) == 5
