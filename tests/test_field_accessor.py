"""
Tests for review normalization.

Covers the alias table (camelCase exports vs snake_case rows), tolerant
parsing of dates / ratings / tag strings, and Review.from_record.

Usage:
    pytest tests/test_field_accessor.py -v
"""

from datetime import datetime, timezone

import pytest

from reviewlens.reviews import field_accessor as fa
from reviewlens.reviews.review_models import Review, as_reviews


class TestGetField:

    def test_first_alias_wins(self):
        record = {"stars": 4, "rating": 2}
        assert fa.get_rating(record) == 4

    def test_empty_values_fall_through_to_next_alias(self):
        record = {"publishedAtDate": "", "publishedatdate": "2024-03-01T10:00:00Z"}
        assert fa.get_published_date(record) == datetime(2024, 3, 1, 10, tzinfo=timezone.utc)

    def test_missing_field_returns_default(self):
        assert fa.get_field({}, "text", "") == ""

    def test_unknown_logical_field_raises(self):
        with pytest.raises(KeyError):
            fa.get_field({}, "not_a_field")

    def test_record_is_not_mutated(self):
        record = {"stars": "5", "mainThemes": "service, coffee"}
        snapshot = dict(record)
        Review.from_record(record)
        assert record == snapshot


class TestParsers:

    def test_parse_timestamp_date_only(self):
        assert fa.parse_timestamp("2024-03-01") == datetime(2024, 3, 1, tzinfo=timezone.utc)

    def test_parse_timestamp_converts_offsets_to_utc(self):
        parsed = fa.parse_timestamp("2024-03-01T12:00:00+02:00")
        assert parsed == datetime(2024, 3, 1, 10, tzinfo=timezone.utc)

    def test_parse_timestamp_epoch_milliseconds(self):
        assert fa.parse_timestamp(1700000000000) == datetime.fromtimestamp(1700000000, tz=timezone.utc)

    def test_parse_timestamp_garbage_is_none(self):
        assert fa.parse_timestamp("not a date") is None
        assert fa.parse_timestamp("") is None
        assert fa.parse_timestamp(True) is None

    def test_parse_rating(self):
        assert fa.parse_rating("4.0") == 4
        assert fa.parse_rating(5) == 5
        assert fa.parse_rating(0) is None
        assert fa.parse_rating(6) is None
        assert fa.parse_rating("abc") is None
        assert fa.parse_rating(None) is None

    def test_split_tags(self):
        assert fa.split_tags("service, coffee quality;price") == ["service", "coffee quality", "price"]
        assert fa.split_tags(["a", " b ", ""]) == ["a", "b"]
        assert fa.split_tags("") == []

    def test_normalize_sentiment(self):
        assert fa.normalize_sentiment("Positive") == "positive"
        assert fa.normalize_sentiment("NEGATIVE") == "negative"
        assert fa.normalize_sentiment("mixed") == "neutral"
        assert fa.normalize_sentiment("unknown") is None

    def test_language_defaults_to_unknown(self):
        assert fa.get_language({}) == "unknown"
        assert fa.get_language({"originalLanguage": "EN"}) == "en"


class TestReviewFromRecord:

    def test_camel_case_export(self):
        review = Review.from_record({
            "id": 17,
            "name": " Alice ",
            "stars": 5,
            "text": "Lovely coffee",
            "publishedAtDate": "2024-05-01T09:30:00Z",
            "responseFromOwnerText": "Thank you!",
            "sentiment": "positive",
            "staffMentioned": "Anna, Ben",
            "mainThemes": "coffee quality, service",
            "originalLanguage": "en",
        })
        assert review.review_id == "17"
        assert review.reviewer_name == "Alice"
        assert review.rating == 5
        assert review.has_owner_response
        assert review.staff_mentioned == ("Anna", "Ben")
        assert review.themes == ("coffee quality", "service")

    def test_snake_case_row(self):
        review = Review.from_record({
            "review_id": "r1",
            "rating": "2",
            "published_at": "2024-05-01",
            "owner_response": "   ",
            "main_themes": "wait time",
        })
        assert review.rating == 2
        assert review.published_at == datetime(2024, 5, 1, tzinfo=timezone.utc)
        assert not review.has_owner_response
        assert review.themes == ("wait time",)

    def test_malformed_values_become_none(self):
        review = Review.from_record({"stars": "five", "publishedAtDate": "yesterday"})
        assert review.rating is None
        assert review.published_at is None
        assert review.sentiment_or_neutral == "neutral"

    def test_as_reviews_accepts_mixed_input(self):
        existing = Review(rating=3)
        reviews = as_reviews([existing, {"stars": 4}])
        assert reviews[0] is existing
        assert reviews[1].rating == 4
        assert as_reviews(None) == []
