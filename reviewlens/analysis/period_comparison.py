"""
Period Comparison
=================

Side-by-side view of the current and previous periods:

- review count, average rating and response rate as trends
- sentiment shares in both periods and their shift (percentage points)
- theme turnover: new, declining (gone), improving, consistent
- staff mention counts and their change

Usage:
    from reviewlens.analysis.period_comparison import compare_periods

    comparison = compare_periods(current_period, previous_period)
    print(comparison.average_rating.direction, comparison.themes.new)
"""

import logging
from collections import Counter, OrderedDict
from typing import Dict, List, Optional

from ..reviews.review_models import Review, Sentiment
from ..reviews.theme_lexicon import normalize_theme
from ..scoring.scoring_config import DEFAULT_CONFIG, RatingConfig, TrendConfig
from ..scoring.trend import calculate_trend
from .stats import average_rating, rated, round2, safe_percentage
from .summary_models import (
    PeriodComparison,
    PeriodData,
    SentimentShares,
    StaffMentionChange,
    ThemeShifts,
)

logger = logging.getLogger(__name__)


def sentiment_shares(reviews: List[Review]) -> SentimentShares:
    """Share of each label; unlabeled reviews count as neutral."""
    counts = Counter(r.sentiment_or_neutral for r in reviews)
    total = len(reviews)
    return SentimentShares(
        positive=safe_percentage(counts[Sentiment.POSITIVE.value], total),
        neutral=safe_percentage(counts[Sentiment.NEUTRAL.value], total),
        negative=safe_percentage(counts[Sentiment.NEGATIVE.value], total),
    )


def _reviews_by_theme(reviews: List[Review]) -> Dict[str, List[Review]]:
    by_theme: Dict[str, List[Review]] = OrderedDict()
    for review in reviews:
        for theme in dict.fromkeys(normalize_theme(t) for t in review.themes if t.strip()):
            by_theme.setdefault(theme, []).append(review)
    return by_theme


def compare_themes(
    current_reviews: List[Review],
    previous_reviews: List[Review],
    config: Optional[RatingConfig] = None,
) -> ThemeShifts:
    """
    Theme turnover between two periods.

    A theme present in both periods is improving when the average rating of
    the reviews mentioning it rose by more than the rating direction
    threshold; otherwise it is consistent. Lists are ordered by mention
    count (descending), then name.
    """
    config = config or DEFAULT_CONFIG.rating
    current = _reviews_by_theme(current_reviews)
    previous = _reviews_by_theme(previous_reviews)

    def ranked(themes, source):
        return sorted(themes, key=lambda t: (-len(source[t]), t))

    improving, consistent = [], []
    for theme in ranked([t for t in current if t in previous], current):
        now, before = rated(current[theme]), rated(previous[theme])
        if now and before and average_rating(now) - average_rating(before) > config.direction_threshold_stars:
            improving.append(theme)
        else:
            consistent.append(theme)

    return ThemeShifts(
        new=ranked([t for t in current if t not in previous], current),
        declining=ranked([t for t in previous if t not in current], previous),
        improving=improving,
        consistent=consistent,
    )


def _staff_counts(reviews: List[Review], display: Dict[str, str]) -> Counter:
    counts: Counter = Counter()
    for review in reviews:
        for name in dict.fromkeys(n.strip() for n in review.staff_mentioned if n.strip()):
            key = name.lower()
            display.setdefault(key, name)
            counts[key] += 1
    return counts


def compare_staff_mentions(
    current_reviews: List[Review],
    previous_reviews: List[Review],
) -> List[StaffMentionChange]:
    """Mentions per staff member in both periods, biggest movers first."""
    display: Dict[str, str] = {}
    current = _staff_counts(current_reviews, display)
    previous = _staff_counts(previous_reviews, display)

    changes = [
        StaffMentionChange(
            name=display[key],
            current=current[key],
            previous=previous[key],
            change=current[key] - previous[key],
        )
        for key in set(current) | set(previous)
    ]
    changes.sort(key=lambda c: (-abs(c.change), c.name.lower()))
    return changes


def compare_periods(
    current: PeriodData,
    previous: PeriodData,
    trend_config: Optional[TrendConfig] = None,
    rating_config: Optional[RatingConfig] = None,
) -> PeriodComparison:
    """
    Compare two periods built by build_period_data.

    Args:
        current: Current period (metrics carry the response rate)
        previous: Comparison period
        trend_config: Trend classification thresholds
        rating_config: Rating thresholds (theme improvement)

    Returns:
        PeriodComparison
    """
    trend_config = trend_config or DEFAULT_CONFIG.trend
    now, before = current.metrics, previous.metrics

    sentiment_now = sentiment_shares(current.reviews)
    sentiment_before = sentiment_shares(previous.reviews)

    comparison = PeriodComparison(
        review_count=calculate_trend(now.total_reviews, before.total_reviews, trend_config),
        average_rating=calculate_trend(
            round2(now.average_rating), round2(before.average_rating), trend_config
        ),
        response_rate=calculate_trend(now.response_rate, before.response_rate, trend_config),
        sentiment_current=sentiment_now,
        sentiment_previous=sentiment_before,
        sentiment_change=SentimentShares(
            positive=round2(sentiment_now.positive - sentiment_before.positive),
            neutral=round2(sentiment_now.neutral - sentiment_before.neutral),
            negative=round2(sentiment_now.negative - sentiment_before.negative),
        ),
        themes=compare_themes(current.reviews, previous.reviews, rating_config),
        staff_mentions=compare_staff_mentions(current.reviews, previous.reviews),
    )

    logger.debug(
        f"Period comparison: {now.total_reviews} vs {before.total_reviews} reviews, "
        f"rating {comparison.average_rating.direction}, "
        f"{len(comparison.themes.new)} new themes"
    )
    return comparison
