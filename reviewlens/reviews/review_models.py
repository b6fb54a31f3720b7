"""
Review Data Model
=================

Normalized, immutable view of one customer review. Built once per raw row
through the field accessor so that downstream calculators only ever see one
spelling of each attribute.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from . import field_accessor as fa


class Sentiment(str, Enum):
    """Precomputed sentiment label attached to a review."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class Review:
    """A single customer review, normalized."""
    review_id: Optional[str] = None
    reviewer_name: Optional[str] = None
    rating: Optional[int] = None             # 1..5, None when missing/invalid
    text: str = ""
    published_at: Optional[datetime] = None  # aware UTC, None when unparsable
    owner_response: Optional[str] = None
    sentiment: Optional[str] = None          # positive | neutral | negative
    staff_mentioned: Tuple[str, ...] = field(default_factory=tuple)
    themes: Tuple[str, ...] = field(default_factory=tuple)
    language: str = fa.DEFAULT_LANGUAGE

    @property
    def has_owner_response(self) -> bool:
        return bool(self.owner_response and self.owner_response.strip())

    @property
    def sentiment_or_neutral(self) -> str:
        """Sentiment label, unlabeled reviews counting as neutral."""
        return self.sentiment or Sentiment.NEUTRAL.value

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Review":
        """
        Build a Review from a raw row in any supported naming convention.

        Never raises on malformed values: bad ratings/dates become None.
        """
        review_id = fa.get_field(record, "id")
        reviewer = fa.get_field(record, "reviewer")
        text = fa.get_field(record, "text", "")
        return cls(
            review_id=str(review_id) if review_id is not None else None,
            reviewer_name=str(reviewer).strip() if reviewer is not None else None,
            rating=fa.get_rating(record),
            text=str(text),
            published_at=fa.get_published_date(record),
            owner_response=fa.get_owner_response(record),
            sentiment=fa.get_sentiment(record),
            staff_mentioned=tuple(fa.get_staff_mentions(record)),
            themes=tuple(fa.get_themes(record)),
            language=fa.get_language(record),
        )


ReviewInput = Union[Review, Mapping[str, Any]]


def as_reviews(reviews: Optional[Iterable[ReviewInput]]) -> List[Review]:
    """Normalize a mixed collection of raw rows and Review objects."""
    if not reviews:
        return []
    return [r if isinstance(r, Review) else Review.from_record(r) for r in reviews]
