"""
Action Item Synthesizer
=======================

Rule-based recommendations derived from the calculator outputs. No text is
generated by a model here: every item comes from a fixed rule, so the same
inputs always produce the same list.

Rules:
- urgent: negative reviews (rating <= 2) without an owner response
- improvements: one per thematic attention area
- strengths: one per positive top category (first 3)
- monitoring: response rate and average rating against their targets
"""

from typing import Iterable, Optional

from ..reviews.review_models import ReviewInput, as_reviews
from ..scoring.scoring_config import DEFAULT_CONFIG, ActionItemConfig, RatingConfig
from .stats import round2
from .summary_models import (
    ActionItems,
    ImprovementItem,
    MonitoringItem,
    RatingAnalysis,
    ResponseAnalytics,
    StrengthItem,
    ThematicAnalysis,
    UrgentItem,
)


def synthesize_action_items(
    current_reviews: Iterable[ReviewInput],
    thematic: Optional[ThematicAnalysis],
    response: ResponseAnalytics,
    rating: RatingAnalysis,
    config: Optional[ActionItemConfig] = None,
    rating_config: Optional[RatingConfig] = None,
) -> ActionItems:
    config = config or DEFAULT_CONFIG.action_items
    rating_config = rating_config or DEFAULT_CONFIG.rating
    reviews = as_reviews(current_reviews)
    thematic = thematic or ThematicAnalysis()

    urgent = []
    unresponded_negative = [
        r for r in reviews
        if r.rating is not None
        and r.rating <= rating_config.low_rating_max
        and not r.has_owner_response
    ]
    if unresponded_negative:
        count = len(unresponded_negative)
        urgent.append(UrgentItem(
            type="unresponded_negative",
            description=f"{count} negative review{'s' if count != 1 else ''} without an owner response",
            priority="high",
            affected_reviews=count,
            suggested_action="Respond to negative reviews promptly and professionally",
        ))

    improvements = [
        ImprovementItem(
            area=area.theme,
            description=(
                f"{area.theme} averages {area.average_rating:.1f} stars "
                f"across {area.negative_count} negative mention{'s' if area.negative_count != 1 else ''}"
            ),
            potential_impact="high" if area.urgency == "high" else "medium",
            effort="medium",
            suggested_actions=[
                f"Review recent feedback about {area.theme.lower()}",
                f"Set an improvement plan for {area.theme.lower()} with the team",
            ],
        )
        for area in thematic.attention_areas
    ]

    strengths = [
        StrengthItem(
            area=category.category,
            description=(
                f"{category.category} is praised in {category.percentage:.0f}% of reviews "
                f"({category.average_rating:.1f} stars on average)"
            ),
            leverage_opportunities=[
                f"Highlight {category.category.lower()} in marketing",
                "Encourage satisfied customers to share their experience",
            ],
        )
        for category in thematic.top_categories
        if category.sentiment == "positive"
    ][:config.max_strengths]

    monitoring = [
        MonitoringItem(
            metric="response_rate",
            description="Share of reviews with an owner response",
            target_value=config.target_response_rate,
            current_value=round2(response.response_rate),
        ),
        MonitoringItem(
            metric="average_rating",
            description="Average star rating in the current period",
            target_value=config.target_average_rating,
            current_value=round2(rating.trends.current),
        ),
    ]

    return ActionItems(
        urgent=urgent,
        improvements=improvements,
        strengths=strengths,
        monitoring=monitoring,
    )
