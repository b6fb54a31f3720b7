"""
Guarded arithmetic shared by every calculator.

A ratio over an empty cohort is 0, never NaN or infinity.
"""

from typing import Iterable, Optional, Sequence

from ..reviews.review_models import Review


def safe_divide(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0.0
    return numerator / denominator


def safe_percentage(count: float, total: float, decimals: Optional[int] = 2) -> float:
    """count / total as a percentage clamped to [0, 100]; 0 for an empty cohort."""
    pct = min(100.0, max(0.0, safe_divide(count, total) * 100))
    if decimals is None:
        return pct
    return round(pct, decimals)


def round2(value: float) -> float:
    return round(value, 2)


def mean(values: Sequence[float]) -> float:
    return safe_divide(sum(values), len(values))


def rated(reviews: Iterable[Review]) -> list:
    """Reviews that carry a valid 1..5 rating."""
    return [r for r in reviews if r.rating is not None]


def average_rating(reviews: Iterable[Review]) -> float:
    """Mean star rating; reviews without a rating are excluded."""
    return mean([r.rating for r in rated(reviews)])


def dated(reviews: Iterable[Review]) -> list:
    """Reviews with a parsable published date."""
    return [r for r in reviews if r.published_at is not None]
