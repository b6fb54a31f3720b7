"""
ReviewLens
==========

Analysis summary engine for customer reviews: health score, rating,
sentiment and volume trends, themes, staff insights and action items.

Usage:
    from reviewlens import AnalysisSummaryEngine, AnalysisConfig

    engine = AnalysisSummaryEngine()
    summary = engine.generate(reviews, AnalysisConfig(time_period="last90days"))
"""

from .analysis import (
    AnalysisConfig,
    AnalysisSummaryData,
    ComparisonPeriod,
    DateRange,
    InvalidAnalysisConfigError,
    NoReviewDataError,
    ReviewLensError,
    TimePeriod,
)
from .analysis.summary_engine import AnalysisSummaryEngine, generate_analysis_summary
from .reviews import Review

__version__ = "0.1.0"

__all__ = [
    "AnalysisConfig",
    "AnalysisSummaryData",
    "AnalysisSummaryEngine",
    "ComparisonPeriod",
    "DateRange",
    "InvalidAnalysisConfigError",
    "NoReviewDataError",
    "Review",
    "ReviewLensError",
    "TimePeriod",
    "generate_analysis_summary",
]
