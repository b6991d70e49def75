"""
Drill tiers and tier-band tables.

A tier is floor(correct answers in this drill / 3). Wrong answers do not
reset the count, so the tier never drops while a drill runs. Each drill
family maps tiers onto number ranges through a static band table; past the
last band the ranges grow linearly with tier, without a ceiling.

Tier 0-1:  round to 10,   doubling 2-49,    halving even 10-98
Tier 2-3:  + round to 100, doubling .5,     halving odd numbers
Tier 4-5:  + 1 decimal place, doubling .25, larger halves
Tier 6-7:  + round to 1000, unfriendly doubles, halving .5 inputs
Tier 8-9:  + 2 decimal places, scaled ranges
Tier 10+:  + round to 10000
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal

from loguru import logger

CORRECT_PER_TIER = 3


def _non_negative_int(value, what: str) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Malformed {what} {value!r}; using 0")
        return 0
    if math.isnan(number) or math.isinf(number) or number < 0:
        logger.warning(f"{what.capitalize()} {value!r} out of range; using 0")
        return 0
    return int(number)


def get_tier(correct_count: int) -> int:
    """
    Tier for a running count of correct answers.

    Args:
        correct_count: Correct answers so far in the drill; negative,
            NaN or non-numeric counts are treated as 0

    Returns:
        floor(correct_count / 3), never negative
    """
    return _non_negative_int(correct_count, "correct count") // CORRECT_PER_TIER


def normalize_tier(tier) -> int:
    """
    Coerce a caller-supplied tier into a non-negative int.

    Negative, NaN, infinite or non-numeric tiers become 0 with a warning.
    """
    return _non_negative_int(tier, "tier")


@dataclass
class DrillProgress:
    """Running correct count for one active drill."""

    correct_count: int = 0
    attempted: int = 0

    def record(self, is_correct: bool) -> int:
        """Record an answer and return the (possibly advanced) tier."""
        self.attempted += 1
        if is_correct:
            self.correct_count += 1
        return self.tier

    @property
    def tier(self) -> int:
        return get_tier(self.correct_count)


# ============================================================================
# Rounding targets
# ============================================================================


@dataclass(frozen=True)
class RoundingTarget:
    """A rounding precision and the tier that unlocks it."""

    label: str
    step: Decimal
    min_tier: int

    @property
    def is_decimal(self) -> bool:
        return self.step < 1

    @property
    def places(self) -> int:
        """Decimal places kept by this target (0 for 10, 100, ...)."""
        return max(0, -self.step.as_tuple().exponent) if self.is_decimal else 0


ROUNDING_TARGETS: tuple[RoundingTarget, ...] = (
    RoundingTarget("10", Decimal("10"), 0),
    RoundingTarget("100", Decimal("100"), 2),
    RoundingTarget("1 decimal place", Decimal("0.1"), 4),
    RoundingTarget("1000", Decimal("1000"), 6),
    RoundingTarget("2 decimal places", Decimal("0.01"), 8),
    RoundingTarget("10000", Decimal("10000"), 10),
)


def unlocked_rounding_targets(tier: int) -> list[RoundingTarget]:
    """Rounding targets available at `tier`, in unlock order."""
    tier = normalize_tier(tier)
    return [t for t in ROUNDING_TARGETS if t.min_tier <= tier]


def rounding_magnitude(tier: int) -> float:
    """Linear magnitude factor for whole-number rounding ranges."""
    return 1 + normalize_tier(tier) * 0.5


# ============================================================================
# Doubling / halving bands
# ============================================================================


@dataclass(frozen=True)
class DoublingBand:
    """Number range and fraction mix for doubling at a tier band."""

    max_tier: int | None
    low: int
    high: int
    fraction_chance: float = 0.0
    fractions: tuple[float, ...] = ()
    avoid_round: bool = False


DOUBLING_BANDS: tuple[DoublingBand, ...] = (
    DoublingBand(1, 2, 49),
    DoublingBand(3, 20, 149, 0.3, (0.5,)),
    DoublingBand(5, 50, 299, 0.4, (0.5, 0.25)),
    DoublingBand(7, 100, 499, 0.4, (0.5, 0.75), avoid_round=True),
)

DOUBLING_SCALED_FRACTIONS = (0.25, 0.5, 0.75, 0.125, 0.375)


def doubling_band(tier: int) -> DoublingBand:
    """Band for `tier`; above the table the range widens by 30% of 500 per tier."""
    tier = normalize_tier(tier)
    for band in DOUBLING_BANDS:
        if tier <= band.max_tier:
            return band
    scale = 1 + (tier - 8) * 0.3
    return DoublingBand(
        max_tier=None,
        low=200,
        high=200 + math.floor(500 * scale) - 1,
        fraction_chance=0.5,
        fractions=DOUBLING_SCALED_FRACTIONS,
    )


@dataclass(frozen=True)
class HalvingBand:
    """
    Number range and case mix for halving at a tier band.

    Cases: a fractional input (base + fraction), an odd number (halves to
    .5) or an even number (clean half). The first two are the hard cases.
    """

    max_tier: int | None
    low: int
    high: int
    odd_chance: float = 0.0
    fraction_chance: float = 0.0
    fractions: tuple[float, ...] = field(default=())

    @property
    def hard_chance(self) -> float:
        return self.odd_chance + self.fraction_chance


HALVING_BANDS: tuple[HalvingBand, ...] = (
    HalvingBand(1, 10, 98),
    HalvingBand(3, 11, 170, odd_chance=0.4),
    HalvingBand(5, 5, 350, odd_chance=0.5),
    HalvingBand(7, 50, 500, odd_chance=0.35, fraction_chance=0.3, fractions=(0.5,)),
)

HALVING_SCALED_FRACTIONS = (0.5, 1.5, 2.5, 0.25, 0.75)


def halving_band(tier: int) -> HalvingBand:
    """Band for `tier`; above the table the range widens by 25% of 500 per tier."""
    tier = normalize_tier(tier)
    for band in HALVING_BANDS:
        if tier <= band.max_tier:
            return band
    scale = 1 + (tier - 8) * 0.25
    return HalvingBand(
        max_tier=None,
        low=100,
        high=100 + math.floor(500 * scale),
        odd_chance=0.45,
        fraction_chance=0.3,
        fractions=HALVING_SCALED_FRACTIONS,
    )
