"""
Tests for the rating, response and sentiment calculators.

Usage:
    pytest tests/test_calculators.py -v
"""

from datetime import datetime, timezone

import pytest

from reviewlens.analysis.rating_analysis import calculate_rating_analysis
from reviewlens.analysis.response_analytics import calculate_response_analytics
from reviewlens.analysis.sentiment_analysis import calculate_sentiment_analysis
from reviewlens.reviews.review_models import Review
from reviewlens.scoring.scoring_config import SentimentConfig


SCENARIO_A_RATINGS = [5, 5, 5, 5, 4, 4, 3, 2, 1, 1]


def make_review(rating=5, sentiment=None, published_at=None, owner_response=None) -> Review:
    return Review(
        rating=rating,
        sentiment=sentiment,
        published_at=published_at,
        owner_response=owner_response,
    )


def utc(year, month, day) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


# ============================================================================
# RATING ANALYSIS
# ============================================================================

class TestRatingAnalysis:

    def setup_method(self):
        self.reviews = [make_review(r) for r in SCENARIO_A_RATINGS]

    def test_distribution(self):
        analysis = calculate_rating_analysis(self.reviews)
        dist = analysis.distribution
        assert [dist[s].count for s in range(1, 6)] == [2, 1, 1, 2, 4]
        assert dist[5].percentage == 40.0
        assert sum(d.count for d in dist.values()) == 10
        assert sum(d.percentage for d in dist.values()) == pytest.approx(100, abs=0.1)

    def test_benchmarks(self):
        benchmarks = calculate_rating_analysis(self.reviews).benchmarks
        assert benchmarks.excellent == 60.0
        assert benchmarks.good == 70.0
        assert benchmarks.needs_improvement == 30.0

    def test_without_previous_period_is_stable(self):
        trends = calculate_rating_analysis(self.reviews).trends
        assert trends.current == pytest.approx(3.5)
        assert trends.previous == pytest.approx(3.5)
        assert trends.change == 0
        assert trends.direction == "stable"

    def test_empty_previous_period_is_stable(self):
        trends = calculate_rating_analysis(self.reviews, []).trends
        assert trends.previous == trends.current
        assert trends.direction == "stable"

    def test_upward_trend(self):
        trends = calculate_rating_analysis(self.reviews, [make_review(3), make_review(3)]).trends
        assert trends.previous == 3.0
        assert trends.change == pytest.approx(0.5)
        assert trends.direction == "up"

    def test_change_within_threshold_is_stable(self):
        trends = calculate_rating_analysis([make_review(4)] * 10, [make_review(4)] * 19 + [make_review(3)]).trends
        assert trends.direction == "stable"

    def test_unrated_reviews_are_excluded(self):
        dist = calculate_rating_analysis([make_review(5), make_review(None)]).distribution
        assert dist[5].count == 1
        assert dist[5].percentage == 100.0

    def test_empty_cohort_reports_zero(self):
        analysis = calculate_rating_analysis([])
        assert all(d.percentage == 0 for d in analysis.distribution.values())
        assert analysis.trends.current == 0
        assert analysis.benchmarks.excellent == 0


# ============================================================================
# RESPONSE ANALYTICS
# ============================================================================

class TestResponseAnalytics:

    def test_no_responses(self):
        analytics = calculate_response_analytics([make_review(r) for r in SCENARIO_A_RATINGS])
        assert analytics.response_rate == 0
        assert analytics.responses_by_rating[5].total == 4
        assert analytics.responses_by_rating[5].rate == 0
        assert not analytics.response_effectiveness.improved_subsequent_ratings

    def test_rates_per_rating(self):
        reviews = [
            make_review(5, owner_response="Thanks"),
            make_review(5, owner_response="Thanks"),
            make_review(5, owner_response="Thanks"),
            make_review(1),
        ]
        analytics = calculate_response_analytics(reviews)
        assert analytics.response_rate == 75.0
        assert analytics.responses_by_rating[5].rate == 100.0
        assert analytics.responses_by_rating[1].rate == 0
        assert analytics.responses_by_rating[3].total == 0
        assert analytics.responses_by_rating[3].rate == 0

    def test_effectiveness_heuristic(self):
        half = [make_review(5, owner_response="ok"), make_review(5)]
        effectiveness = calculate_response_analytics(half).response_effectiveness
        assert not effectiveness.improved_subsequent_ratings  # 50 is not above 50
        assert effectiveness.customer_satisfaction_impact == 5.0
        assert effectiveness.is_heuristic

        everyone = calculate_response_analytics([make_review(5, owner_response="ok")])
        assert everyone.response_effectiveness.improved_subsequent_ratings
        assert everyone.response_effectiveness.customer_satisfaction_impact == 10

    def test_blank_response_does_not_count(self):
        analytics = calculate_response_analytics([make_review(5, owner_response="  ")])
        assert analytics.response_rate == 0


# ============================================================================
# SENTIMENT ANALYSIS
# ============================================================================

class TestSentimentAnalysis:

    def setup_method(self):
        self.reviews = [
            make_review(5, "positive", utc(2024, 1, 10)),
            make_review(4, "positive", utc(2024, 2, 10)),
            make_review(1, "negative", utc(2024, 4, 10)),
            make_review(2, "positive", utc(2024, 4, 20)),
            make_review(3, None, None),
        ]

    def test_distribution_counts_unlabeled_as_neutral(self):
        dist = calculate_sentiment_analysis(self.reviews).distribution
        assert dist.positive.count == 3
        assert dist.positive.percentage == 60.0
        assert dist.neutral.count == 1
        assert dist.negative.percentage == 20.0

    def test_quarterly_trends(self):
        trends = calculate_sentiment_analysis(self.reviews).trends
        assert [t.period for t in trends] == ["Q1 2024", "Q2 2024"]
        assert (trends[0].positive, trends[0].negative) == (100, 0)
        assert (trends[1].positive, trends[1].negative) == (50, 50)

    def test_correlation_with_rating(self):
        correlation = calculate_sentiment_analysis(self.reviews).correlation_with_rating
        assert (correlation.high_rating.positive, correlation.high_rating.negative) == (2, 0)
        assert (correlation.low_rating.positive, correlation.low_rating.negative) == (1, 1)

    def test_keeps_last_quarters_only(self):
        reviews = [
            make_review(5, "positive", utc(2022 + i // 4, 1 + 3 * (i % 4), 1))
            for i in range(10)
        ]
        trends = calculate_sentiment_analysis(reviews, SentimentConfig(max_quarters=8)).trends
        assert len(trends) == 8
        assert trends[0].period == "Q3 2022"
        assert trends[-1].period == "Q2 2024"

    def test_empty_cohort(self):
        analysis = calculate_sentiment_analysis([])
        assert analysis.distribution.positive.percentage == 0
        assert analysis.trends == []


# ============================================================================
# DISTRIBUTION TOTALS
# ============================================================================

SENTIMENT_CYCLE = ("positive", "negative", None, "neutral", "positive")

UNEVEN_COHORTS = [
    [5, None, 2],
    [5, 4, None, 3, 1, 2, None],
    [5, 5, 4, 3, None, 2, 1, 1, 4, None, 3],
]


def make_cohort(ratings):
    return [
        make_review(rating, SENTIMENT_CYCLE[i % len(SENTIMENT_CYCLE)])
        for i, rating in enumerate(ratings)
    ]


class TestDistributionTotals:

    @pytest.mark.parametrize("ratings", UNEVEN_COHORTS, ids=lambda r: f"{len(r)}-reviews")
    def test_rating_distribution_adds_up(self, ratings):
        dist = calculate_rating_analysis(make_cohort(ratings)).distribution
        rated_count = sum(1 for r in ratings if r is not None)
        assert sum(d.count for d in dist.values()) == rated_count
        assert sum(d.percentage for d in dist.values()) == pytest.approx(100, abs=0.1)

    @pytest.mark.parametrize("ratings", UNEVEN_COHORTS, ids=lambda r: f"{len(r)}-reviews")
    def test_sentiment_distribution_adds_up(self, ratings):
        dist = calculate_sentiment_analysis(make_cohort(ratings)).distribution
        shares = (dist.positive, dist.neutral, dist.negative)
        assert sum(s.count for s in shares) == len(ratings)
        assert sum(s.percentage for s in shares) == pytest.approx(100, abs=0.1)
