"""
Unit tests for the tiered question generator.

Tests:
- Tier derivation and clamping
- Rounding target unlocks and the display/answer round trip
- Doubling / halving answers and band behaviour
- Endless scaling and determinism under a seeded random source
"""

import math
import random
from decimal import Decimal

import pytest

from mathsprint.drills import (
    ROUNDING_TARGETS,
    DrillFamily,
    DrillProgress,
    doubling_band,
    generate_doubling_question,
    generate_halving_question,
    generate_question,
    generate_rounding_question,
    get_tier,
    halving_band,
    normalize_tier,
    round_half_up,
    unlocked_rounding_targets,
)

TARGETS_BY_LABEL = {t.label: t for t in ROUNDING_TARGETS}


class TestTiers:
    def test_three_correct_per_tier(self):
        for k in range(50):
            assert get_tier(3 * k) == k

    def test_non_decreasing(self):
        tiers = [get_tier(n) for n in range(100)]
        assert tiers == sorted(tiers)

    def test_negative_count_is_tier_zero(self):
        assert get_tier(-7) == 0

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), "x", None])
    def test_malformed_count_is_tier_zero(self, bad):
        assert get_tier(bad) == 0

    @pytest.mark.parametrize("bad", [-1, -100, float("nan"), float("inf"), "hard", None])
    def test_malformed_tier_clamps_to_zero(self, bad):
        assert normalize_tier(bad) == 0

    def test_progress_never_drops_on_wrong_answers(self):
        progress = DrillProgress()
        seen = []
        for correct in [True, True, True, False, False, True, True, False, True]:
            seen.append(progress.record(correct))
        assert seen == sorted(seen)
        assert progress.tier == 2
        assert progress.attempted == 9


class TestRoundingQuestions:
    def test_tier_zero_always_targets_ten(self):
        rng = random.Random(0)
        for _ in range(200):
            assert generate_rounding_question(0, rng).round_to == "10"

    def test_tier_ten_unlocks_all_six_targets(self):
        assert len(unlocked_rounding_targets(10)) == 6

        rng = random.Random(5)
        seen = {generate_rounding_question(10, rng).round_to for _ in range(600)}
        assert seen == set(TARGETS_BY_LABEL)

    @pytest.mark.parametrize(
        "tier,labels",
        [
            (1, ["10"]),
            (2, ["10", "100"]),
            (4, ["10", "100", "1 decimal place"]),
            (9, ["10", "100", "1 decimal place", "1000", "2 decimal places"]),
        ],
    )
    def test_unlock_order(self, tier, labels):
        assert [t.label for t in unlocked_rounding_targets(tier)] == labels

    def test_display_round_trips_to_answer(self):
        rng = random.Random(42)
        for tier in range(0, 25):
            for _ in range(40):
                q = generate_rounding_question(tier, rng)
                target = TARGETS_BY_LABEL[q.round_to]
                rounded = round_half_up(Decimal(q.display), target)

                assert float(rounded) == q.answer
                assert q.number == float(q.display)
                assert q.display in q.text

    def test_decimal_display_has_more_places_than_target(self):
        rng = random.Random(3)
        checked = 0
        for _ in range(3000):
            q = generate_rounding_question(9, rng)
            target = TARGETS_BY_LABEL[q.round_to]
            if target.is_decimal:
                checked += 1
                assert len(q.display.split(".")[1]) > target.places
        assert checked > 0

    def test_round_half_up(self):
        ten = TARGETS_BY_LABEL["10"]
        one_place = TARGETS_BY_LABEL["1 decimal place"]
        two_places = TARGETS_BY_LABEL["2 decimal places"]

        assert round_half_up(Decimal("45"), ten) == 50
        assert round_half_up(Decimal("44.99"), ten) == 40
        assert round_half_up(Decimal("2.25"), one_place) == Decimal("2.3")
        assert round_half_up(Decimal("0.125"), two_places) == Decimal("0.13")

    def test_decimals_appear_from_tier_four(self):
        rng = random.Random(9)
        low = [generate_rounding_question(1, rng) for _ in range(200)]
        high = [generate_rounding_question(8, rng) for _ in range(400)]

        assert all("." not in q.display for q in low)
        assert any("." in q.display for q in high)


class TestDoublingQuestions:
    def test_answer_is_exact_double(self, rng):
        for tier in range(0, 30):
            for _ in range(30):
                q = generate_doubling_question(tier, rng)
                assert math.isfinite(q.answer)
                assert abs(q.answer - q.number * 2) <= 1e-9

    def test_tier_zero_range(self, rng):
        for _ in range(300):
            q = generate_doubling_question(0, rng)
            assert 2 <= q.number <= 49
            assert float(q.number).is_integer()

    def test_unfriendly_band_avoids_multiples_of_ten(self, rng):
        for _ in range(300):
            q = generate_doubling_question(6, rng)
            assert q.number % 10 != 0

    def test_bands_widen_without_ceiling(self):
        highs = [doubling_band(t).high for t in range(0, 60)]
        assert highs == sorted(highs)
        assert doubling_band(100).high > doubling_band(50).high


class TestHalvingQuestions:
    def test_answer_is_exact_half(self, rng):
        for tier in range(0, 30):
            for _ in range(30):
                q = generate_halving_question(tier, rng)
                assert math.isfinite(q.answer)
                assert abs(q.answer - q.number / 2) <= 1e-9

    def test_early_tiers_give_clean_halves(self, rng):
        for tier in (0, 1):
            for _ in range(200):
                q = generate_halving_question(tier, rng)
                assert q.is_clean
                assert 10 <= q.number <= 98

    def test_hard_case_probability_rises_with_tier(self):
        chances = [halving_band(t).hard_chance for t in range(0, 40)]
        assert chances == sorted(chances)

    def test_hard_cases_observed_more_often_at_high_tiers(self):
        rng = random.Random(77)
        low = sum(not generate_halving_question(2, rng).is_clean for _ in range(2000))
        high = sum(not generate_halving_question(12, rng).is_clean for _ in range(2000))
        assert high > low

    def test_bands_widen_without_ceiling(self):
        assert halving_band(200).high > halving_band(100).high > halving_band(9).high


class TestGenerateQuestion:
    @pytest.mark.parametrize("family", list(DrillFamily))
    def test_dispatch_by_family(self, family, rng):
        q = generate_question(family, 3, rng)
        assert q.to_payload()["family"] == family.value

    def test_family_by_string(self, rng):
        assert generate_question("halving", 0, rng).to_payload()["family"] == "halving"

    def test_unknown_family_raises(self, rng):
        with pytest.raises(ValueError):
            generate_question("squaring", 0, rng)

    def test_seeded_output_is_reproducible(self):
        first = [generate_question(f, 7, random.Random(11)) for f in DrillFamily]
        second = [generate_question(f, 7, random.Random(11)) for f in DrillFamily]
        assert first == second

    def test_negative_tier_is_clamped(self, rng):
        q = generate_rounding_question(-4, rng)
        assert q.tier == 0
        assert q.round_to == "10"

    def test_payload_hides_answer_until_asked(self, rng):
        q = generate_doubling_question(2, rng)
        assert "answer" not in q.to_payload()
        assert q.to_payload(include_answer=True)["answer"] == q.answer

    def test_check_accepts_correct_answer(self, rng):
        q = generate_halving_question(9, rng)
        assert q.check(q.answer)
        assert q.check(str(q.answer))
        assert not q.check(q.answer + 1)
        assert not q.check("nope")

    def test_very_high_tier_stays_finite(self, rng):
        for family in DrillFamily:
            q = generate_question(family, 500, rng)
            assert math.isfinite(q.answer)
            assert q.number >= 0
