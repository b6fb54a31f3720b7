"""
Rating Analysis
===============

Star distribution, current vs previous average and named benchmarks.

Percentages are computed over reviews that carry a valid rating, so the
distribution counts always add up to that cohort.
"""

from collections import Counter
from typing import Dict, Iterable, Optional

from ..reviews.review_models import ReviewInput, as_reviews
from ..scoring.scoring_config import DEFAULT_CONFIG, RatingConfig
from .stats import average_rating, rated, safe_percentage
from .summary_models import CountShare, RatingAnalysis, RatingBenchmarks, RatingTrend


def rating_distribution(reviews: Iterable[ReviewInput], config: Optional[RatingConfig] = None) -> Dict[int, CountShare]:
    config = config or DEFAULT_CONFIG.rating
    cohort = rated(as_reviews(reviews))
    counts = Counter(r.rating for r in cohort)
    return {
        star: CountShare(count=counts.get(star, 0), percentage=safe_percentage(counts.get(star, 0), len(cohort)))
        for star in range(config.min_star, config.max_star + 1)
    }


def calculate_rating_analysis(
    current_reviews: Iterable[ReviewInput],
    previous_reviews: Optional[Iterable[ReviewInput]] = None,
    config: Optional[RatingConfig] = None,
) -> RatingAnalysis:
    """
    Rating analysis of the current period, compared with the previous one.

    The direction moves off 'stable' only when the average changes by more
    than 0.1 star. Without a previous cohort (None or no rated review) the
    previous average equals the current one.
    """
    config = config or DEFAULT_CONFIG.rating
    current_reviews = as_reviews(current_reviews)
    distribution = rating_distribution(current_reviews, config)

    current = average_rating(current_reviews)
    previous_cohort = rated(as_reviews(previous_reviews)) if previous_reviews is not None else []
    previous = average_rating(previous_cohort) if previous_cohort else current
    change = current - previous

    direction = "stable"
    if abs(change) > config.direction_threshold_stars:
        direction = "up" if change > 0 else "down"

    def share(stars) -> float:
        return round(sum(distribution[s].percentage for s in stars), 2)

    excellent = share(config.excellent_stars)

    return RatingAnalysis(
        distribution=distribution,
        trends=RatingTrend(
            current=current,
            previous=previous,
            change=change,
            direction=direction,
        ),
        benchmarks=RatingBenchmarks(
            excellent=excellent,
            good=round(excellent + share(config.fair_stars), 2),
            needs_improvement=share(config.needs_improvement_stars),
        ),
    )
