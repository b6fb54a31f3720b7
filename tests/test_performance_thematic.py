"""
Tests for performance metrics and thematic analysis.

Usage:
    pytest tests/test_performance_thematic.py -v
"""

from datetime import datetime, timedelta, timezone

from reviewlens.analysis.analysis_config import AnalysisConfig
from reviewlens.analysis.performance_metrics import (
    calculate_performance_metrics,
    growth_rate,
    month_span,
)
from reviewlens.analysis.periods import create_time_periods
from reviewlens.analysis.thematic_analysis import calculate_thematic_analysis
from reviewlens.reviews.review_models import Review
from reviewlens.reviews.theme_lexicon import categorize_theme


NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def make_review(published_at=None, rating=5, themes=()) -> Review:
    return Review(rating=rating, published_at=published_at, themes=tuple(themes))


def utc(year, month, day) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


# ============================================================================
# PERFORMANCE METRICS
# ============================================================================

class TestPerformanceMetrics:

    def test_growth_from_empty_previous_period_is_guarded(self):
        """5 reviews now, none before: growth stays 0 and is not 'growing'."""
        reviews = [make_review(utc(2024, 6, day)) for day in range(1, 6)]
        periods = create_time_periods(AnalysisConfig(time_period="last30days"), NOW, reviews)
        metrics = calculate_performance_metrics(reviews, periods, NOW)
        assert metrics.growth_rate == 0
        assert not metrics.trends.is_growing
        assert metrics.total_reviews == 5
        assert metrics.reviews_per_month == 5.0
        assert metrics.recent_activity.last_3_months == 5

    def test_growth_over_previous_period(self):
        current = [make_review(utc(2024, 6, day)) for day in range(1, 6)]
        previous = [make_review(utc(2024, 5, day)) for day in range(1, 5)]
        reviews = current + previous
        periods = create_time_periods(AnalysisConfig(time_period="last30days"), NOW, reviews)
        metrics = calculate_performance_metrics(reviews, periods, NOW)
        assert metrics.growth_rate == 25.0
        assert metrics.trends.is_growing
        assert metrics.trends.seasonal_pattern == "growing"

    def test_seasonal_pattern_and_peaks(self):
        reviews = (
            [make_review(utc(2024, 1, 5)), make_review(utc(2024, 2, 5)), make_review(utc(2024, 3, 5))]
            + [make_review(utc(2024, 4, day)) for day in range(1, 11)]
        )
        periods = create_time_periods(AnalysisConfig(comparison_period="none"), NOW, reviews)
        metrics = calculate_performance_metrics(reviews, periods, NOW)
        assert metrics.growth_rate == 0
        assert metrics.trends.seasonal_pattern == "seasonal"
        assert (metrics.peak_year, metrics.peak_month) == ("2024", "04")
        assert metrics.trends.best_periods == ["2024-04", "2024-01", "2024-02"]
        assert metrics.reviews_per_month == 3.25

    def test_undated_collection(self):
        reviews = [make_review(None), make_review(None)]
        periods = create_time_periods(AnalysisConfig(), NOW, reviews)
        metrics = calculate_performance_metrics(reviews, periods, NOW)
        assert metrics.total_reviews == 2
        assert metrics.peak_month == ""
        assert metrics.trends.seasonal_pattern == "stable"

    def test_helpers(self):
        assert growth_rate(5, 0) == 0
        assert growth_rate(6, 4) == 50
        assert month_span(utc(2024, 1, 31), utc(2024, 4, 1)) == 4
        assert month_span(utc(2023, 12, 1), utc(2024, 1, 1)) == 2


# ============================================================================
# THEMATIC ANALYSIS
# ============================================================================

class TestThemeLexicon:

    def test_known_categories(self):
        assert categorize_theme("Coffee quality") == "Food & Drink"
        assert categorize_theme("Friendly staff") == "Service"
        assert categorize_theme("long wait") == "Wait Time"
        assert categorize_theme("parking") == "Location & Access"

    def test_keywords_match_word_starts_only(self):
        assert categorize_theme("breakfast") == "Food & Drink"
        assert categorize_theme("online ordering") == "Online Ordering"

    def test_unknown_theme_is_its_own_category(self):
        assert categorize_theme("  Live   jazz ") == "Live Jazz"


class TestThematicAnalysis:

    def test_single_positive_theme(self):
        reviews = [make_review(utc(2024, 6, d), 5, ["Coffee quality"]) for d in range(1, 5)]
        analysis = calculate_thematic_analysis(reviews)
        top = analysis.top_categories[0]
        assert top.category == "Food & Drink"
        assert top.sentiment == "positive"
        assert top.count == 4
        assert top.percentage == 100.0
        assert analysis.attention_areas == []

    def test_category_counted_once_per_review(self):
        analysis = calculate_thematic_analysis([make_review(None, 4, ["coffee", "food", "fresh pastry"])])
        top = analysis.top_categories[0]
        assert top.count == 1
        assert top.percentage == 100.0

    def test_attention_areas(self):
        reviews = [
            make_review(None, 1, ["long wait"]),
            make_review(None, 2, ["long wait"]),
            make_review(None, 2, ["long wait"]),
            make_review(None, 3, ["parking"]),
            make_review(None, 3, ["parking"]),
            make_review(None, 5, ["coffee"]),
        ]
        areas = calculate_thematic_analysis(reviews).attention_areas
        assert [a.theme for a in areas] == ["Wait Time", "Location & Access"]
        assert areas[0].urgency == "high"
        assert areas[0].negative_count == 3
        assert areas[0].average_rating == 1.67
        assert areas[1].urgency == "low"
        assert areas[1].negative_count == 0

    def test_trending_topics(self):
        """Newest 50 of 100 reviews form the recent window."""
        start = utc(2024, 1, 1)
        reviews = []
        for i in range(100):
            themes = ["coffee"]
            if i >= 80:
                themes.append("terrace")
            if i < 50:
                themes.append("parking")
            reviews.append(make_review(start + timedelta(days=i), 4, themes))

        topics = calculate_thematic_analysis(reviews).trending_topics
        assert [t.topic for t in topics] == ["terrace", "coffee"]
        assert topics[0].trend == "rising"
        assert topics[0].count == 20
        assert topics[0].recent_mentions == 20
        assert topics[1].trend == "stable"

    def test_no_themes(self):
        analysis = calculate_thematic_analysis([make_review(None, 5)])
        assert analysis.top_categories == []
        assert analysis.trending_topics == []
        assert analysis.attention_areas == []
