"""
Staff Insights
==============

Aggregates the staff names already tagged on reviews (no name extraction
happens here): mention counts, polarity, average rating of the reviews that
mention each person, and whether that average is moving.
"""

from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

from ..reviews.review_models import Review, ReviewInput, as_reviews
from ..scoring.scoring_config import DEFAULT_CONFIG, StaffConfig
from .stats import average_rating, dated, round2, safe_percentage
from .summary_models import StaffInsights, StaffMention


def _mention_trend(mentions: List[Review], config: StaffConfig) -> str:
    """Average rating of the newer half of dated mentions vs the older half."""
    timeline = sorted(
        (r for r in dated(mentions) if r.rating is not None),
        key=lambda r: r.published_at,
    )
    if len(timeline) < 2:
        return "stable"
    half = len(timeline) // 2
    change = average_rating(timeline[half:]) - average_rating(timeline[:half])
    if change > config.trend_threshold_stars:
        return "improving"
    if change < -config.trend_threshold_stars:
        return "declining"
    return "stable"


def _example(review: Review, limit: int) -> str:
    text = " ".join(review.text.split())
    if len(text) <= limit:
        return text
    return text[:limit - 3].rstrip() + "..."


def calculate_staff_insights(
    reviews: Iterable[ReviewInput],
    config: Optional[StaffConfig] = None,
) -> StaffInsights:
    config = config or DEFAULT_CONFIG.staff
    reviews = as_reviews(reviews)

    # Names are grouped case-insensitively; the first spelling seen is shown
    by_name: Dict[str, List[Review]] = OrderedDict()
    display: Dict[str, str] = {}
    for review in reviews:
        for name in dict.fromkeys(n.strip() for n in review.staff_mentioned if n.strip()):
            key = name.lower()
            display.setdefault(key, name)
            by_name.setdefault(key, []).append(review)

    mentions = []
    for key, cohort in by_name.items():
        avg = average_rating(cohort)
        mentions.append(StaffMention(
            name=display[key],
            total_mentions=len(cohort),
            positive_mentions=sum(1 for r in cohort if r.sentiment == "positive"),
            negative_mentions=sum(1 for r in cohort if r.sentiment == "negative"),
            average_rating_in_mentions=round2(avg),
            trend=_mention_trend(cohort, config),
            examples=[_example(r, config.example_length) for r in cohort if r.text.strip()][:config.max_examples],
        ))
    mentions.sort(key=lambda m: (-m.total_mentions, m.name.lower()))

    total_mentions = sum(m.total_mentions for m in mentions)
    positive = sum(m.positive_mentions for m in mentions)

    return StaffInsights(
        mentions=mentions,
        overall_staff_score=round(safe_percentage(positive, total_mentions, decimals=None)),
        training_opportunities=[
            m.name for m in mentions
            if 0 < m.average_rating_in_mentions < config.training_below_rating
        ],
    )
