"""
Review Field Accessor
=====================

Review rows reach the engine under several naming conventions: the current
Supabase schema (``stars``, ``publishedAtDate``, ``staffMentioned``...), the
lower-cased Postgres columns (``publishedatdate``) and older exports
(``star``, ``originalLanguage``, ``common terms``).

FIELD_ALIASES is the single place where those spellings live. Every other
module reads review attributes through the helpers below (or through the
normalized ``Review`` model built with them), never through raw keys.

Usage:
    rating = get_rating(record)
    published = get_published_date(record)
    themes = get_themes(record)
"""

import re
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple


# =============================================================================
# ALIAS TABLE: current schema name first, legacy spellings after
# =============================================================================

FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "id": ("id", "review_id", "reviewUrl"),
    "reviewer": ("name", "reviewer_name", "author_name"),
    "rating": ("stars", "star", "rating"),
    "text": ("text", "textTranslated", "translatedText", "body"),
    "published_at": ("publishedAtDate", "publishedatdate", "published_at", "review_date"),
    "owner_response": ("responseFromOwnerText", "response_from_owner_text", "owner_response"),
    "sentiment": ("sentiment",),
    "staff_mentioned": ("staffMentioned", "staff_mentioned"),
    "themes": ("mainThemes", "main_themes", "common terms"),
    "language": ("originalLanguage", "language"),
}

DEFAULT_LANGUAGE = "unknown"

# Tags are stored as a single delimited string
TAG_SEPARATOR = re.compile(r"[,;|]")


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, (list, tuple, set)) and not value:
        return True
    return False


def get_field(record: Mapping[str, Any], logical_name: str, default: Any = None) -> Any:
    """
    Return the first non-empty value among the spellings of a logical field.

    Args:
        record: Raw review row (never mutated)
        logical_name: Key of FIELD_ALIASES
        default: Returned when every candidate is missing or empty

    Raises:
        KeyError: If logical_name is not a known logical field
    """
    for key in FIELD_ALIASES[logical_name]:
        value = record.get(key)
        if not _is_empty(value):
            return value
    return default


# =============================================================================
# TYPED ACCESSORS
# =============================================================================

def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a review timestamp into an aware UTC datetime.

    Accepts ISO-8601 strings (with or without 'Z'), datetime/date objects and
    epoch numbers (seconds, or milliseconds when larger than 1e11).
    Naive values are taken as UTC. Anything unparsable yields None.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)):
        seconds = value / 1000 if abs(value) > 1e11 else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_rating(value: Any) -> Optional[int]:
    """Star rating as an int in 1..5, or None when missing/out of range."""
    if value is None or isinstance(value, bool):
        return None
    try:
        rating = float(value)
    except (TypeError, ValueError):
        return None
    if rating != rating or rating < 1 or rating > 5:  # NaN check
        return None
    return int(round(rating))


def split_tags(value: Any) -> List[str]:
    """Split a comma/semicolon/pipe separated tag string into clean tags."""
    if _is_empty(value):
        return []
    if isinstance(value, (list, tuple, set)):
        parts = [str(v) for v in value]
    else:
        parts = TAG_SEPARATOR.split(str(value))
    return [p.strip() for p in parts if p and p.strip()]


def normalize_sentiment(value: Any) -> Optional[str]:
    """Map a free-form sentiment label onto positive/neutral/negative."""
    if _is_empty(value):
        return None
    label = str(value).strip().lower()
    if "positive" in label:
        return "positive"
    if "negative" in label:
        return "negative"
    if "neutral" in label or "mixed" in label:
        return "neutral"
    return None


def get_rating(record: Mapping[str, Any]) -> Optional[int]:
    return parse_rating(get_field(record, "rating"))


def get_published_date(record: Mapping[str, Any]) -> Optional[datetime]:
    return parse_timestamp(get_field(record, "published_at"))


def get_owner_response(record: Mapping[str, Any]) -> Optional[str]:
    value = get_field(record, "owner_response")
    return str(value).strip() if value is not None else None


def has_owner_response(record: Mapping[str, Any]) -> bool:
    return bool(get_owner_response(record))


def get_staff_mentions(record: Mapping[str, Any]) -> List[str]:
    return split_tags(get_field(record, "staff_mentioned"))


def get_themes(record: Mapping[str, Any]) -> List[str]:
    return split_tags(get_field(record, "themes"))


def get_language(record: Mapping[str, Any]) -> str:
    value = get_field(record, "language")
    return str(value).strip().lower() if value is not None else DEFAULT_LANGUAGE


def get_sentiment(record: Mapping[str, Any]) -> Optional[str]:
    return normalize_sentiment(get_field(record, "sentiment"))
