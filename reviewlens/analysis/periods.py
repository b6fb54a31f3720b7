"""
Period Filter
=============

Slices the review collection into half-open [start, end) windows and
resolves an AnalysisConfig into the current / previous windows to compare.

Reviews with a missing or unparsable date never fall inside a window.
A zero-length or inverted window yields an empty subset.
"""

import calendar
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from ..reviews.review_models import Review
from .analysis_config import AnalysisConfig, ComparisonPeriod, TimePeriod
from .stats import average_rating
from .summary_models import DateWindow, PeriodData, PeriodMetrics, TimePeriodConfig


PRESET_LABELS = {
    TimePeriod.LAST_30_DAYS: "Last 30 Days",
    TimePeriod.LAST_90_DAYS: "Last 90 Days",
    TimePeriod.LAST_6_MONTHS: "Last 6 Months",
    TimePeriod.LAST_12_MONTHS: "Last 12 Months",
    TimePeriod.ALL: "All Time",
    TimePeriod.CUSTOM: "Custom Period",
}

PRESET_DAYS = {
    TimePeriod.LAST_30_DAYS: 30,
    TimePeriod.LAST_90_DAYS: 90,
}

PRESET_MONTHS = {
    TimePeriod.LAST_6_MONTHS: 6,
    TimePeriod.LAST_12_MONTHS: 12,
}


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def shift_months(moment: datetime, months: int) -> datetime:
    """Move a datetime by whole calendar months, clamping the day."""
    month_index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def filter_reviews_by_date_range(
    reviews: Iterable[Review],
    start: datetime,
    end: datetime,
) -> List[Review]:
    """Reviews published in [start, end). Undated reviews are excluded."""
    window = DateWindow(start=_as_utc(start), end=_as_utc(end))
    return [r for r in reviews if window.contains(r.published_at)]


def _previous_window(current: DateWindow, comparison: ComparisonPeriod, label: str) -> Optional[DateWindow]:
    if comparison == ComparisonPeriod.NONE:
        return None
    if comparison == ComparisonPeriod.YEAR_OVER_YEAR:
        return DateWindow(
            start=shift_months(current.start, -12),
            end=shift_months(current.end, -12),
            label=f"{label} (Previous Year)",
        )
    duration = current.end - current.start
    return DateWindow(
        start=current.start - duration,
        end=current.start,
        label=f"Previous {label}",
    )


def create_time_periods(
    config: AnalysisConfig,
    now: datetime,
    reviews: Optional[Iterable[Review]] = None,
) -> TimePeriodConfig:
    """
    Resolve the configured time period into concrete windows.

    Args:
        config: Analysis configuration
        now: Reference instant (end of the rolling windows)
        reviews: Needed for 'all', whose window starts at the oldest review

    Returns:
        TimePeriodConfig with the current window, the comparison window (None
        when comparison is disabled) and the comparison granularity.
    """
    now = _as_utc(now)
    period = config.time_period
    label = PRESET_LABELS[period]

    if period in PRESET_DAYS:
        start = now - timedelta(days=PRESET_DAYS[period])
        current = DateWindow(start=start, end=now, label=label)
    elif period in PRESET_MONTHS:
        current = DateWindow(start=shift_months(now, -PRESET_MONTHS[period]), end=now, label=label)
    elif period == TimePeriod.CUSTOM:
        current = DateWindow(
            start=_as_utc(config.custom_range.start),
            end=_as_utc(config.custom_range.end),
            label=label,
        )
    else:
        dates = [r.published_at for r in (reviews or []) if r.published_at is not None]
        start = min(dates) if dates else now
        # 'all' has nothing before it: the previous window is empty
        end = max(now, max(dates) + timedelta(microseconds=1)) if dates else now
        current = DateWindow(start=start, end=end, label=label)
        previous = None
        if config.comparison_period != ComparisonPeriod.NONE:
            previous = DateWindow(start=start, end=start, label=f"Previous {label}")
        return TimePeriodConfig(
            current=current,
            previous=previous,
            comparison=_comparison_kind(config),
        )

    return TimePeriodConfig(
        current=current,
        previous=_previous_window(current, config.comparison_period, label),
        comparison=_comparison_kind(config),
    )


def _comparison_kind(config: AnalysisConfig) -> str:
    if config.comparison_period == ComparisonPeriod.NONE:
        return "none"
    if config.comparison_period == ComparisonPeriod.YEAR_OVER_YEAR:
        return "year"
    if config.time_period == TimePeriod.CUSTOM:
        return "custom"
    if config.time_period in (TimePeriod.LAST_90_DAYS, TimePeriod.LAST_6_MONTHS):
        return "quarter"
    if config.time_period == TimePeriod.LAST_12_MONTHS:
        return "year"
    return "month"


def build_period_data(
    window: DateWindow,
    reviews: List[Review],
    sentiment_score: float = 0.0,
    response_rate: float = 0.0,
) -> PeriodData:
    """PeriodData for an already filtered subset."""
    return PeriodData(
        start=window.start,
        end=window.end,
        reviews=reviews,
        metrics=PeriodMetrics(
            average_rating=average_rating(reviews),
            total_reviews=len(reviews),
            sentiment_score=sentiment_score,
            response_rate=response_rate,
        ),
    )
