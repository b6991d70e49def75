"""
mathsprint - adaptive-practice engine for a mental-arithmetic trainer.

Three independent, pure components:
- scoring: session metrics -> fluency score, XP award, validity
- drills: tier -> rounding / doubling / halving question
- adaptive: recent results -> weakest untaught strategy + lesson content

Nothing here performs I/O; persistence and rendering belong to the caller.
"""

__version__ = "1.0.0"

from mathsprint.adaptive import detect_weakness, get_strategy_content
from mathsprint.config import ProgressionSettings, get_settings, load_settings
from mathsprint.core import Operation, QuestionResult, SessionStats
from mathsprint.drills import generate_question, get_tier
from mathsprint.scoring import score_metrics, score_session

__all__ = [
    "Operation",
    "ProgressionSettings",
    "QuestionResult",
    "SessionStats",
    "detect_weakness",
    "generate_question",
    "get_settings",
    "get_strategy_content",
    "get_tier",
    "load_settings",
    "score_metrics",
    "score_session",
]
