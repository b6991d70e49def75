"""
Small numeric helpers shared by the scorer.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from statistics import median


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp value into [low, high]. NaN collapses to low."""
    if value is None or math.isnan(value):
        return low
    return max(low, min(high, value))


def median_absolute_deviation(values: Iterable[float]) -> float:
    """
    Median absolute deviation (MAD) around the median.

    Used as a robust variability measure for response times: one slow
    outlier barely moves it, unlike the standard deviation.
    Returns 0.0 for an empty sequence.
    """
    values = list(values)
    if not values:
        return 0.0
    center = median(values)
    return float(median(abs(v - center) for v in values))
