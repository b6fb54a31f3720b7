"""
Performance Metrics
===================

Review volume over time: monthly rate, growth of the current window over the
comparison window, busiest months and recent activity.

HEURISTIC: ``seasonal_pattern`` is a coarse label. 'growing' / 'declining'
come straight from the growth rate; 'seasonal' means the busiest and
quietest months differ by more than twice the mean monthly rate.
"""

import logging
from collections import Counter
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Tuple

from ..reviews.review_models import ReviewInput, as_reviews
from ..scoring.scoring_config import DEFAULT_CONFIG, PerformanceConfig
from .periods import filter_reviews_by_date_range
from .stats import dated, round2, safe_divide
from .summary_models import PerformanceMetrics, PerformanceTrends, RecentActivity, TimePeriodConfig

logger = logging.getLogger(__name__)


def month_span(start: datetime, end: datetime) -> int:
    """Inclusive number of calendar months between two dates."""
    return (end.year - start.year) * 12 + (end.month - start.month) + 1


def monthly_counts(reviews) -> List[Tuple[str, int]]:
    """("YYYY-MM", count) pairs, busiest first (ties: oldest month first)."""
    counts = Counter(r.published_at.strftime("%Y-%m") for r in dated(reviews))
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def growth_rate(current_count: int, previous_count: int) -> float:
    """% change in review count; 0 when there is nothing to compare with."""
    if previous_count <= 0:
        return 0.0
    return (current_count - previous_count) / previous_count * 100


def classify_seasonal_pattern(
    growth: float,
    monthly: List[Tuple[str, int]],
    reviews_per_month: float,
    config: PerformanceConfig,
) -> str:
    if growth > config.growing_above_pct:
        return "growing"
    if growth < config.declining_below_pct:
        return "declining"
    if len(monthly) > config.seasonal_min_months:
        values = [count for _, count in monthly]
        spread = max(values) - min(values)
        if spread > reviews_per_month * config.seasonal_spread_factor:
            return "seasonal"
    return "stable"


def calculate_performance_metrics(
    reviews: Iterable[ReviewInput],
    time_period: TimePeriodConfig,
    now: datetime,
    config: Optional[PerformanceConfig] = None,
) -> PerformanceMetrics:
    """
    Volume metrics over the full collection.

    Args:
        reviews: Full review collection (not only the current window)
        time_period: Resolved windows; growth compares current vs previous
        now: Reference instant for the recent-activity counters
        config: Thresholds
    """
    config = config or DEFAULT_CONFIG.performance
    reviews = as_reviews(reviews)
    total = len(reviews)

    with_dates = dated(reviews)
    if with_dates:
        first = min(r.published_at for r in with_dates)
        last = max(r.published_at for r in with_dates)
        months = month_span(first, last)
    else:
        months = 1
    reviews_per_month = safe_divide(total, max(1, months))

    current_count = len(filter_reviews_by_date_range(
        reviews, time_period.current.start, time_period.current.end
    ))
    previous_count = 0
    if time_period.previous is not None:
        previous_count = len(filter_reviews_by_date_range(
            reviews, time_period.previous.start, time_period.previous.end
        ))
    growth = growth_rate(current_count, previous_count)

    monthly = monthly_counts(reviews)
    peak_key = monthly[0][0] if monthly else ""
    peak_year, _, peak_month = peak_key.partition("-")

    recent = {
        name: len(filter_reviews_by_date_range(reviews, now - timedelta(days=days), now))
        for name, days in config.recent_windows_days
    }

    rank = config.period_rank_size
    trends = PerformanceTrends(
        is_growing=growth > config.is_growing_above_pct,
        seasonal_pattern=classify_seasonal_pattern(growth, monthly, reviews_per_month, config),
        best_periods=[key for key, _ in monthly[:rank]],
        worst_periods=[key for key, _ in monthly[-rank:]],
    )

    logger.debug(
        f"Performance: {total} reviews, {current_count} current vs "
        f"{previous_count} previous, growth={growth:.2f}%"
    )

    return PerformanceMetrics(
        total_reviews=total,
        reviews_per_month=round2(reviews_per_month),
        growth_rate=round2(growth),
        peak_month=peak_month,
        peak_year=peak_year,
        recent_activity=RecentActivity(**recent),
        trends=trends,
    )
