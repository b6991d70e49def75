"""
Core Module - Shared data model and helpers.

Components:
- models: QuestionResult, SessionStats, Operation
- stats: clamp, median_absolute_deviation
- errors: MathSprintError, ConfigurationError

The scoring, drills and adaptive packages import from here rather than
defining their own copies of these records.
"""

from mathsprint.core.errors import ConfigurationError, MathSprintError
from mathsprint.core.models import Operation, QuestionResult, SessionStats
from mathsprint.core.stats import clamp, median_absolute_deviation

__all__ = [
    "ConfigurationError",
    "MathSprintError",
    "Operation",
    "QuestionResult",
    "SessionStats",
    "clamp",
    "median_absolute_deviation",
]
