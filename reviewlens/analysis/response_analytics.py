"""
Response Analytics
==================

How often the owner answers reviews, overall and per star rating.

The ``response_effectiveness`` block is a HEURISTIC kept for dashboard
compatibility: ``improved_subsequent_ratings`` is simply "response rate above
50%" and ``customer_satisfaction_impact`` is the response rate scaled to 0-10.
Neither is measured from subsequent ratings; do not read them as causal.
"""

from typing import Iterable, Optional

from ..reviews.review_models import ReviewInput, as_reviews
from ..scoring.scoring_config import DEFAULT_CONFIG, RatingConfig, ResponseConfig
from .stats import safe_percentage
from .summary_models import ResponseAnalytics, ResponseBucket, ResponseEffectiveness


def calculate_response_analytics(
    reviews: Iterable[ReviewInput],
    config: Optional[ResponseConfig] = None,
    rating_config: Optional[RatingConfig] = None,
) -> ResponseAnalytics:
    config = config or DEFAULT_CONFIG.response
    rating_config = rating_config or DEFAULT_CONFIG.rating
    reviews = as_reviews(reviews)

    responded_total = sum(1 for r in reviews if r.has_owner_response)
    response_rate = safe_percentage(responded_total, len(reviews))

    responses_by_rating = {}
    for star in range(rating_config.min_star, rating_config.max_star + 1):
        bucket = [r for r in reviews if r.rating == star]
        responded = sum(1 for r in bucket if r.has_owner_response)
        responses_by_rating[star] = ResponseBucket(
            total=len(bucket),
            responded=responded,
            rate=safe_percentage(responded, len(bucket)),
        )

    effectiveness = ResponseEffectiveness(
        improved_subsequent_ratings=response_rate > config.improved_ratings_above_rate,
        customer_satisfaction_impact=min(
            response_rate / config.satisfaction_impact_divisor,
            config.satisfaction_impact_cap,
        ),
    )

    return ResponseAnalytics(
        response_rate=response_rate,
        responses_by_rating=responses_by_rating,
        response_effectiveness=effectiveness,
    )
