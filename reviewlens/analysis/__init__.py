"""
ReviewLens Analysis Module
==========================

Calculators that turn a review collection into the dashboard summary.

Modules:
    analysis_config: AnalysisConfig (period, comparison, optional sections)
    periods: Current / previous windows and date filtering
    rating_analysis: Star distribution, trend and benchmarks
    response_analytics: Owner response rates
    sentiment_analysis: Sentiment distribution and quarterly series
    performance_metrics: Review volume over time
    thematic_analysis: Theme categories, attention areas, trending topics
    staff_insights: Staff mention aggregates
    operational_insights: Languages, review timing, loyalty
    action_items: Rule-based recommendations
    period_comparison: Current vs previous period side by side
    alerts: Threshold alerts on the current period
    summary_engine: Memoizing orchestrator

The engine itself is exported from the top-level ``reviewlens`` package.
"""

from .analysis_config import (
    AnalysisConfig,
    ComparisonPeriod,
    DateRange,
    DEFAULT_ANALYSIS_CONFIG,
    TimePeriod,
)
from .errors import InvalidAnalysisConfigError, NoReviewDataError, ReviewLensError
from .summary_models import AnalysisSummaryData

__all__ = [
    "AnalysisConfig",
    "ComparisonPeriod",
    "DateRange",
    "DEFAULT_ANALYSIS_CONFIG",
    "TimePeriod",
    "InvalidAnalysisConfigError",
    "NoReviewDataError",
    "ReviewLensError",
    "AnalysisSummaryData",
]
