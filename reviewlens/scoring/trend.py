"""
Trend Calculator
================

Generic (current, previous) -> (direction, magnitude, significance)
classification. Every metric that reports a trend goes through here, so
trend semantics are the same across the whole dashboard.
"""

from typing import Optional

from ..analysis.summary_models import TrendCalculation
from .scoring_config import TrendConfig


def calculate_trend(
    current: float,
    previous: float,
    config: Optional[TrendConfig] = None,
) -> TrendCalculation:
    """
    Classify the change from previous to current.

    change% = change / previous * 100, or 100 (current > 0) / 0 when
    previous is 0.
    |change%| < 2  -> stable, negligible
    |change%| > 10 -> significant, otherwise minor; direction follows the sign.
    """
    config = config or TrendConfig()

    change = current - previous
    if previous == 0:
        change_percentage = config.from_zero_pct if current > 0 else 0.0
    else:
        change_percentage = change / previous * 100

    magnitude = abs(change_percentage)
    if magnitude < config.stable_below_pct:
        direction = "stable"
        significance = "negligible"
    else:
        direction = "up" if change_percentage > 0 else "down"
        significance = "significant" if magnitude > config.significant_above_pct else "minor"

    return TrendCalculation(
        current=current,
        previous=previous,
        change=change,
        change_percentage=change_percentage,
        direction=direction,
        significance=significance,
    )
