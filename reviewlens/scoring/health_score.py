"""
Business Health Score
=====================

Deterministic 0-100 composite of four components:

- rating:    average rating / 5 * 100
- sentiment: % of positive reviews in the current period
- response:  % of reviews with an owner response
- volume:    % change in review count vs the previous period (only growth
             counts)

overall = rating*0.4 + sentiment*0.3 + response*0.2 + volume*0.1, clamped to
[0, 100]. The volume term itself is not capped.

Intermediate math is unrounded; every published figure is an integer.

Usage:
    from reviewlens.scoring.health_score import calculate_business_health_score

    score = calculate_business_health_score(current_period, previous_period)
    print(score.overall, score.breakdown)
"""

from typing import Optional

from ..analysis.summary_models import BusinessHealthScore, HealthBreakdown, PeriodData
from .scoring_config import DEFAULT_CONFIG, HealthScoreConfig


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def volume_change_percentage(current: PeriodData, previous: Optional[PeriodData]) -> float:
    """% change in review count; 0 without a usable previous period."""
    if previous is None or previous.metrics.total_reviews <= 0:
        return 0.0
    previous_count = previous.metrics.total_reviews
    return (current.metrics.total_reviews - previous_count) / previous_count * 100


def calculate_business_health_score(
    current: PeriodData,
    previous: Optional[PeriodData] = None,
    config: Optional[HealthScoreConfig] = None,
) -> BusinessHealthScore:
    """
    Score the current period, optionally against the previous one.

    Args:
        current: Current period; its metrics must carry the sentiment score
                 and response rate computed by the calculators
        previous: Comparison period, or None
        config: Weights

    Returns:
        BusinessHealthScore with integer components
    """
    config = config or DEFAULT_CONFIG.health
    metrics = current.metrics

    rating_score = _clamp(metrics.average_rating / 5 * 100)
    sentiment_score = _clamp(metrics.sentiment_score)
    response_score = _clamp(metrics.response_rate)
    volume_trend = volume_change_percentage(current, previous)
    volume_score = max(0.0, volume_trend)

    overall = _clamp(
        rating_score * config.rating_weight
        + sentiment_score * config.sentiment_weight
        + response_score * config.response_weight
        + volume_score * config.volume_weight
    )

    rating_trend = 0.0
    if previous is not None and previous.metrics.total_reviews > 0:
        rating_trend = (metrics.average_rating - previous.metrics.average_rating) * config.rating_trend_scale

    return BusinessHealthScore(
        overall=round(overall),
        rating_trend=round(_clamp(rating_trend, -100.0, 100.0)),
        sentiment_score=round(sentiment_score),
        response_rate=round(response_score),
        volume_trend=round(volume_trend),
        breakdown=HealthBreakdown(
            rating=round(rating_score),
            sentiment=round(sentiment_score),
            response=round(response_score),
            volume=round(volume_score),
        ),
    )
