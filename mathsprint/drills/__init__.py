"""
Skill Drills - Tiered question generation.

Components:
- tiers: get_tier, band tables, DrillProgress
- questions: RoundingQuestion, DoublingQuestion, HalvingQuestion
- generator: generate_*_question, generate_question, DrillFamily
"""

from mathsprint.drills.generator import (
    DrillFamily,
    generate_doubling_question,
    generate_halving_question,
    generate_question,
    generate_rounding_question,
    round_half_up,
)
from mathsprint.drills.questions import (
    DoublingQuestion,
    DrillQuestion,
    HalvingQuestion,
    RoundingQuestion,
    format_number,
)
from mathsprint.drills.tiers import (
    DOUBLING_BANDS,
    HALVING_BANDS,
    ROUNDING_TARGETS,
    DrillProgress,
    RoundingTarget,
    doubling_band,
    get_tier,
    halving_band,
    normalize_tier,
    unlocked_rounding_targets,
)

__all__ = [
    "DOUBLING_BANDS",
    "HALVING_BANDS",
    "ROUNDING_TARGETS",
    "DoublingQuestion",
    "DrillFamily",
    "DrillProgress",
    "DrillQuestion",
    "HalvingQuestion",
    "RoundingQuestion",
    "RoundingTarget",
    "doubling_band",
    "format_number",
    "generate_doubling_question",
    "generate_halving_question",
    "generate_question",
    "generate_rounding_question",
    "get_tier",
    "halving_band",
    "normalize_tier",
    "round_half_up",
    "unlocked_rounding_targets",
]
