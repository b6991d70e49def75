"""
Fluency & XP Scoring.

Components:
- fluency: Session metrics and the weighted fluency composite
- xp: Session XP award, excellence bonuses, validity, mode multipliers
- levels: Unbounded level curve with XP carry-over
- history: Append-only session history, personal records, recent results
- placement: Assessment -> competence group and starting level
"""

from mathsprint.scoring.fluency import (
    FluencyBreakdown,
    SessionMetrics,
    compute_fluency,
    fluency_label,
    metrics_from_results,
)
from mathsprint.scoring.history import (
    PersonalRecords,
    SessionHistory,
    check_personal_records,
    personal_records,
    recent_results,
)
from mathsprint.scoring.levels import (
    LevelUpResult,
    apply_xp_and_level_up,
    xp_required_to_advance,
)
from mathsprint.scoring.placement import (
    AssessmentMetrics,
    PlacementResult,
    compute_placement,
    placement_message,
)
from mathsprint.scoring.xp import (
    SessionScore,
    apply_mode_multiplier,
    is_valid_session,
    score_metrics,
    score_session,
)

__all__ = [
    "AssessmentMetrics",
    "FluencyBreakdown",
    "LevelUpResult",
    "PersonalRecords",
    "PlacementResult",
    "SessionHistory",
    "SessionMetrics",
    "SessionScore",
    "apply_mode_multiplier",
    "apply_xp_and_level_up",
    "check_personal_records",
    "compute_fluency",
    "compute_placement",
    "fluency_label",
    "is_valid_session",
    "metrics_from_results",
    "personal_records",
    "placement_message",
    "recent_results",
    "score_metrics",
    "score_session",
    "xp_required_to_advance",
]
