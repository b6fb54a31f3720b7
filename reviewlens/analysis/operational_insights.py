"""
Operational Insights
====================

Language mix, when reviews arrive (weekday / month) and how many reviewers
come back.
"""

import calendar
from collections import Counter, defaultdict
from typing import Dict, Iterable, List

from ..reviews.review_models import Review, ReviewInput, as_reviews
from .stats import average_rating, dated, round2, safe_percentage
from .summary_models import CustomerLoyalty, LanguageShare, OperationalInsights, ReviewPatterns

PATTERN_SIZE = 3


def language_diversity(reviews: List[Review]) -> List[LanguageShare]:
    by_language: Dict[str, List[Review]] = defaultdict(list)
    for review in reviews:
        by_language[review.language].append(review)

    shares = [
        LanguageShare(
            language=language,
            count=len(cohort),
            percentage=safe_percentage(len(cohort), len(reviews)),
            average_rating=round2(average_rating(cohort)),
        )
        for language, cohort in by_language.items()
    ]
    shares.sort(key=lambda s: (-s.count, s.language))
    return shares


def review_patterns(reviews: List[Review]) -> ReviewPatterns:
    with_dates = dated(reviews)
    days = Counter(calendar.day_name[r.published_at.weekday()] for r in with_dates)
    months = Counter(calendar.month_name[r.published_at.month] for r in with_dates)

    ranked_days = sorted(days.items(), key=lambda item: (-item[1], item[0]))
    ranked_months = sorted(months.items(), key=lambda item: (-item[1], item[0]))

    return ReviewPatterns(
        peak_days=[day for day, _ in ranked_days[:PATTERN_SIZE]],
        peak_months=[month for month, _ in ranked_months[:PATTERN_SIZE]],
        quiet_periods=[month for month, _ in ranked_months[-PATTERN_SIZE:][::-1]],
    )


def customer_loyalty(reviews: List[Review]) -> CustomerLoyalty:
    names = Counter(r.reviewer_name.lower() for r in reviews if r.reviewer_name)
    repeat = sum(1 for count in names.values() if count > 1)
    return CustomerLoyalty(
        repeat_reviewers=repeat,
        loyalty_score=safe_percentage(repeat, len(names)),
    )


def calculate_operational_insights(reviews: Iterable[ReviewInput]) -> OperationalInsights:
    reviews = as_reviews(reviews)
    return OperationalInsights(
        language_diversity=language_diversity(reviews),
        review_patterns=review_patterns(reviews),
        customer_loyalty=customer_loyalty(reviews),
    )
