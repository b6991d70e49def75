"""
Level curve.

Levels are unbounded. The XP needed to leave a level is piecewise:
    levels 1-4: 500
    level 5:    1000
    level 6+:   previous requirement + an increment starting at 120,
                growing by 15 per level up to 14 and by 25 from 15 on

Surplus XP carries over, so one large award can cross several levels.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

LEVEL_REQ_L1_TO_L4 = 500
LEVEL_REQ_L5 = 1000
INC_START_L6 = 120
INC_GROWTH_STAGE1 = 15  # levels 6..14
INC_GROWTH_STAGE2 = 25  # levels >= 15


@dataclass(frozen=True)
class LevelUpResult:
    """Level and in-level XP before and after an award."""

    level_before: int
    level_after: int
    xp_into_level_before: int
    xp_into_level_after: int
    level_up_count: int

    @property
    def leveled_up(self) -> bool:
        return self.level_up_count > 0


@lru_cache(maxsize=512)
def xp_required_to_advance(level: int) -> int:
    """
    XP needed to go from `level` to `level + 1`.

    Args:
        level: Current level (values below 1 are treated as 1)

    Returns:
        Required XP
    """
    if level <= 4:
        return LEVEL_REQ_L1_TO_L4
    if level == 5:
        return LEVEL_REQ_L5

    required = LEVEL_REQ_L5
    increment = INC_START_L6
    for lvl in range(6, level + 1):
        required += increment
        increment += INC_GROWTH_STAGE1 if lvl < 15 else INC_GROWTH_STAGE2
    return required


def apply_xp_and_level_up(level: int, xp_into_level: int, xp: int) -> LevelUpResult:
    """
    Add an XP award to a player's level state.

    Args:
        level: Current level (>= 1)
        xp_into_level: XP already earned inside the current level
        xp: Award to add

    Returns:
        LevelUpResult with carry-over applied
    """
    level = max(1, int(level))
    xp_into_level = max(0, int(xp_into_level))
    xp = max(0, int(xp))

    current = level
    remaining = xp_into_level + xp
    count = 0
    while remaining >= xp_required_to_advance(current):
        remaining -= xp_required_to_advance(current)
        current += 1
        count += 1

    return LevelUpResult(
        level_before=level,
        level_after=current,
        xp_into_level_before=xp_into_level,
        xp_into_level_after=remaining,
        level_up_count=count,
    )
