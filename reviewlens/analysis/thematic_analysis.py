"""
Thematic Analysis
=================

Clusters the precomputed theme tags of each review into dashboard
categories (see reviews.theme_lexicon), then derives:

- top_categories: mention count, share of reviews, average rating, label
- attention_areas: categories whose average rating is below 3.5
- trending_topics: themes over-represented among the most recent reviews
"""

import logging
from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Optional

from ..reviews.review_models import Review, ReviewInput, as_reviews
from ..reviews.theme_lexicon import categorize_theme, normalize_theme
from ..scoring.scoring_config import DEFAULT_CONFIG, ThematicConfig
from .stats import average_rating, dated, round2, safe_percentage
from .summary_models import AttentionArea, ThematicAnalysis, ThemeCategory, TrendingTopic

logger = logging.getLogger(__name__)


def sentiment_for_rating(average: float, config: ThematicConfig) -> str:
    if average >= config.positive_min_rating:
        return "positive"
    if 0 < average <= config.negative_max_rating:
        return "negative"
    return "neutral"


def urgency_for_rating(average: float, config: ThematicConfig) -> str:
    if average < config.urgency_high_below:
        return "high"
    if average < config.urgency_medium_below:
        return "medium"
    return "low"


def _themes_of(review: Review) -> List[str]:
    """Distinct normalized themes of a review, in tag order."""
    seen: Dict[str, None] = {}
    for theme in review.themes:
        seen.setdefault(normalize_theme(theme), None)
    return list(seen)


def _theme_counts(reviews: List[Review]) -> Counter:
    return Counter(theme for r in reviews for theme in _themes_of(r))


def top_categories(reviews: List[Review], config: ThematicConfig) -> List[ThemeCategory]:
    mentioning: Dict[str, List[Review]] = defaultdict(list)
    for review in reviews:
        for category in {categorize_theme(t) for t in _themes_of(review)}:
            mentioning[category].append(review)

    categories = []
    for category, cohort in mentioning.items():
        avg = average_rating(cohort)
        categories.append(ThemeCategory(
            category=category,
            count=len(cohort),
            percentage=safe_percentage(len(cohort), len(reviews)),
            average_rating=round2(avg),
            sentiment=sentiment_for_rating(avg, config),
        ))

    categories.sort(key=lambda c: (-c.count, c.category))
    return categories[:config.top_categories]


def attention_areas(
    categories: List[ThemeCategory],
    reviews: List[Review],
    config: ThematicConfig,
) -> List[AttentionArea]:
    areas = []
    for category in categories:
        if not 0 < category.average_rating < config.attention_below_rating:
            continue
        negative = sum(
            1 for r in reviews
            if r.rating is not None
            and r.rating <= config.negative_max_rating
            and category.category in {categorize_theme(t) for t in _themes_of(r)}
        )
        areas.append(AttentionArea(
            theme=category.category,
            negative_count=negative,
            average_rating=category.average_rating,
            urgency=urgency_for_rating(category.average_rating, config),
        ))
    areas.sort(key=lambda a: (a.average_rating, a.theme))
    return areas


def trending_topics(reviews: List[Review], config: ThematicConfig) -> List[TrendingTopic]:
    """
    Compare each theme's share among recent reviews with its overall share.

    The recent window is the newest max(50, 30% of dated reviews) dated
    reviews, capped at the number of dated reviews.
    """
    with_dates = sorted(dated(reviews), key=lambda r: r.published_at, reverse=True)
    if not with_dates:
        return []
    window = min(
        len(with_dates),
        max(config.recent_min_reviews, int(len(with_dates) * config.recent_share)),
    )
    recent = with_dates[:window]

    overall_counts = _theme_counts(reviews)
    recent_counts = _theme_counts(recent)

    topics = []
    for theme, count in overall_counts.items():
        recent_count = recent_counts.get(theme, 0)
        if recent_count == 0:
            continue
        recent_share = safe_percentage(recent_count, len(recent), decimals=None)
        overall_share = safe_percentage(count, len(reviews), decimals=None)
        trend = "stable"
        if recent_share > overall_share * config.rising_factor:
            trend = "rising"
        elif recent_share < overall_share * config.declining_factor:
            trend = "declining"
        topics.append(TrendingTopic(
            topic=theme,
            count=count,
            trend=trend,
            recent_mentions=recent_count,
        ))

    topics.sort(key=lambda t: (t.trend != "rising", -t.recent_mentions, t.topic))
    return topics[:config.max_trending_topics]


def calculate_thematic_analysis(
    reviews: Iterable[ReviewInput],
    config: Optional[ThematicConfig] = None,
) -> ThematicAnalysis:
    config = config or DEFAULT_CONFIG.thematic
    reviews = as_reviews(reviews)

    categories = top_categories(reviews, config)
    analysis = ThematicAnalysis(
        top_categories=categories,
        trending_topics=trending_topics(reviews, config),
        attention_areas=attention_areas(categories, reviews, config),
    )

    logger.debug(
        f"Thematic: {len(categories)} categories, "
        f"{len(analysis.attention_areas)} attention areas, "
        f"{len(analysis.trending_topics)} trending topics"
    )
    return analysis
