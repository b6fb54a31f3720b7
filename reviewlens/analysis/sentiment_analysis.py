"""
Sentiment Analysis
==================

Distribution of the precomputed sentiment labels, a quarterly series and a
correlation slice against star ratings. Reviews without a label count as
neutral. No text is parsed here.
"""

from collections import Counter
from typing import Dict, Iterable, List, Optional, Tuple

from ..reviews.review_models import Review, ReviewInput, as_reviews
from ..scoring.scoring_config import DEFAULT_CONFIG, RatingConfig, SentimentConfig
from .stats import safe_percentage
from .summary_models import (
    CountShare,
    PolarityCounts,
    SentimentAnalysis,
    SentimentCorrelation,
    SentimentDistribution,
    SentimentTrendPoint,
)


def _label_counts(reviews: List[Review]) -> Counter:
    return Counter(r.sentiment_or_neutral for r in reviews)


def quarter_key(review: Review) -> Tuple[int, int]:
    moment = review.published_at
    return moment.year, (moment.month - 1) // 3 + 1


def quarterly_trends(reviews: List[Review], max_quarters: int) -> List[SentimentTrendPoint]:
    """Integer sentiment percentages per quarter, oldest first, last N quarters."""
    buckets: Dict[Tuple[int, int], List[Review]] = {}
    for review in reviews:
        if review.published_at is None:
            continue
        buckets.setdefault(quarter_key(review), []).append(review)

    points = []
    for (year, quarter) in sorted(buckets):
        bucket = buckets[(year, quarter)]
        counts = _label_counts(bucket)
        points.append(SentimentTrendPoint(
            period=f"Q{quarter} {year}",
            positive=round(safe_percentage(counts["positive"], len(bucket), decimals=None)),
            neutral=round(safe_percentage(counts["neutral"], len(bucket), decimals=None)),
            negative=round(safe_percentage(counts["negative"], len(bucket), decimals=None)),
        ))
    return points[-max_quarters:] if max_quarters > 0 else []


def calculate_sentiment_analysis(
    reviews: Iterable[ReviewInput],
    config: Optional[SentimentConfig] = None,
    rating_config: Optional[RatingConfig] = None,
) -> SentimentAnalysis:
    config = config or DEFAULT_CONFIG.sentiment
    rating_config = rating_config or DEFAULT_CONFIG.rating
    reviews = as_reviews(reviews)

    counts = _label_counts(reviews)
    total = len(reviews)
    distribution = SentimentDistribution(
        positive=CountShare(counts["positive"], safe_percentage(counts["positive"], total)),
        neutral=CountShare(counts["neutral"], safe_percentage(counts["neutral"], total)),
        negative=CountShare(counts["negative"], safe_percentage(counts["negative"], total)),
    )

    high = _label_counts([r for r in reviews if r.rating is not None and r.rating >= rating_config.high_rating_min])
    low = _label_counts([r for r in reviews if r.rating is not None and r.rating <= rating_config.low_rating_max])

    return SentimentAnalysis(
        distribution=distribution,
        trends=quarterly_trends(reviews, config.max_quarters),
        correlation_with_rating=SentimentCorrelation(
            high_rating=PolarityCounts(positive=high["positive"], negative=high["negative"]),
            low_rating=PolarityCounts(positive=low["positive"], negative=low["negative"]),
        ),
    )
