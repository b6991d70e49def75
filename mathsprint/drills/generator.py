"""
Tiered Question Generator.

Produces rounding, doubling and halving questions whose ranges follow the
band tables in mathsprint.drills.tiers. Generators are stateless: each call
depends only on the tier and the random source. Pass a seeded
random.Random to get reproducible questions (ids included); without one a
fresh, OS-seeded source is used. Repeats are possible; deduplication is up
to the caller.

Rounding works on decimal.Decimal values built from the displayed string,
so the number the player sees is exactly the number that was rounded.
"""

from __future__ import annotations

import random
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from loguru import logger

from mathsprint.drills.questions import (
    DoublingQuestion,
    DrillQuestion,
    HalvingQuestion,
    RoundingQuestion,
)
from mathsprint.drills.tiers import (
    RoundingTarget,
    doubling_band,
    halving_band,
    normalize_tier,
    rounding_magnitude,
    unlocked_rounding_targets,
)


class DrillFamily(str, Enum):
    """Skill drill families served by the generator."""

    ROUNDING = "rounding"
    DOUBLING = "doubling"
    HALVING = "halving"


def _rng(rng: random.Random | None) -> random.Random:
    return rng if rng is not None else random.Random()


def _question_id(rng: random.Random) -> str:
    return f"{rng.getrandbits(40):010x}"


def _display(value: Decimal) -> str:
    """Render a Decimal in plain notation, keeping every generated digit."""
    return format(value, "f")


def round_half_up(value: Decimal, target: RoundingTarget) -> Decimal:
    """Round `value` to the target's precision, halves away from zero."""
    if target.is_decimal:
        return value.quantize(target.step, rounding=ROUND_HALF_UP)
    units = (value / target.step).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return units * target.step


# ============================================================================
# Rounding
# ============================================================================


def _whole_number_value(target: RoundingTarget, tier: int, rng: random.Random) -> Decimal:
    low = int(target.step)
    high = int(target.step * 20 * Decimal(str(rounding_magnitude(tier))))
    value = Decimal(rng.randrange(low, high))

    # Cents on top of whole numbers from tier 4
    if tier >= 4 and rng.random() < 0.4:
        value += Decimal(rng.randint(0, 99)).scaleb(-2)
    return value


def _decimal_value(target: RoundingTarget, tier: int, rng: random.Random) -> Decimal:
    # Always carry more digits than the target keeps; trailing zeros stay
    extra = target.places + 1 + rng.randrange(2)
    whole = rng.randrange(50 + tier * 30)
    fraction = rng.randint(0, 10**extra)
    return Decimal(whole) + Decimal(fraction).scaleb(-extra)


def generate_rounding_question(tier: int, rng: random.Random | None = None) -> RoundingQuestion:
    """
    Generate a rounding question.

    Args:
        tier: Difficulty tier (clamped to >= 0)
        rng: Random source

    Returns:
        RoundingQuestion whose answer is `display` rounded half-up to `round_to`
    """
    tier = normalize_tier(tier)
    rng = _rng(rng)

    target = rng.choice(unlocked_rounding_targets(tier))
    if target.is_decimal:
        value = _decimal_value(target, tier, rng)
    else:
        value = _whole_number_value(target, tier, rng)

    display = _display(value)
    rounded = round_half_up(Decimal(display), target)
    answer = float(rounded) if target.is_decimal else int(rounded)

    logger.debug(f"Rounding tier {tier}: {display} -> {target.label} = {answer}")

    return RoundingQuestion(
        id=_question_id(rng),
        number=float(display),
        display=display,
        round_to=target.label,
        answer=answer,
        tier=tier,
    )


# ============================================================================
# Doubling / halving
# ============================================================================


def generate_doubling_question(tier: int, rng: random.Random | None = None) -> DoublingQuestion:
    """
    Generate a doubling question.

    Args:
        tier: Difficulty tier (clamped to >= 0)
        rng: Random source

    Returns:
        DoublingQuestion with answer = number * 2
    """
    tier = normalize_tier(tier)
    rng = _rng(rng)
    band = doubling_band(tier)

    base = rng.randint(band.low, band.high)
    if band.fractions and rng.random() < band.fraction_chance:
        number = base + rng.choice(band.fractions)
    elif band.avoid_round and base % 10 == 0:
        # Multiples of ten are too friendly at this band
        number = base + 3
    else:
        number = base

    return DoublingQuestion(
        id=_question_id(rng),
        number=number,
        answer=number * 2,
        tier=tier,
    )


def generate_halving_question(tier: int, rng: random.Random | None = None) -> HalvingQuestion:
    """
    Generate a halving question.

    Even numbers give clean halves; odd and fractional numbers give halves
    ending in .5, .25 or .75. The share of hard cases rises with tier.

    Args:
        tier: Difficulty tier (clamped to >= 0)
        rng: Random source

    Returns:
        HalvingQuestion with answer = number / 2
    """
    tier = normalize_tier(tier)
    rng = _rng(rng)
    band = halving_band(tier)

    roll = rng.random()
    if roll < band.fraction_chance and band.fractions:
        number = rng.randint(band.low, band.high) + rng.choice(band.fractions)
    elif roll < band.fraction_chance + band.odd_chance:
        number = rng.randint(band.low, band.high)
        if number % 2 == 0:
            number += 1
    else:
        number = rng.randint((band.low + 1) // 2, band.high // 2) * 2

    return HalvingQuestion(
        id=_question_id(rng),
        number=number,
        answer=number / 2,
        tier=tier,
    )


_GENERATORS = {
    DrillFamily.ROUNDING: generate_rounding_question,
    DrillFamily.DOUBLING: generate_doubling_question,
    DrillFamily.HALVING: generate_halving_question,
}


def generate_question(
    family: DrillFamily | str,
    tier: int,
    rng: random.Random | None = None,
) -> DrillQuestion:
    """
    Generate a question for a drill family.

    Args:
        family: DrillFamily or its value ("rounding", "doubling", "halving")
        tier: Difficulty tier
        rng: Random source

    Returns:
        Question for that family

    Raises:
        ValueError: Unknown family
    """
    try:
        family = DrillFamily(family)
    except ValueError:
        valid = ", ".join(f.value for f in DrillFamily)
        raise ValueError(f"Unknown drill family {family!r} (expected one of: {valid})") from None
    return _GENERATORS[family](tier, rng)
