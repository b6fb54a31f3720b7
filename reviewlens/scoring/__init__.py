"""
ReviewLens Scoring Module
=========================

Deterministic scoring primitives shared by the analysis calculators.

Components:
    - calculate_trend: (current, previous) -> direction / significance
    - calculate_business_health_score: weighted 0-100 composite
    - AnalysisThresholds: every threshold and weight, in one place

Usage:
    from reviewlens.scoring import calculate_trend

    trend = calculate_trend(4.2, 4.0)
    print(trend.direction, trend.significance)
"""

from .scoring_config import (
    AnalysisThresholds,
    DEFAULT_CONFIG,
)
from .trend import calculate_trend
from .health_score import calculate_business_health_score

__all__ = [
    "AnalysisThresholds",
    "DEFAULT_CONFIG",
    "calculate_trend",
    "calculate_business_health_score",
]
