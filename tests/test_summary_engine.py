"""
End-to-end tests for the AnalysisSummaryEngine.

The engine gets an injected MemoCache driven by a fake clock and a fixed
reference "now", so every run is deterministic.

Usage:
    pytest tests/test_summary_engine.py -v
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from reviewlens import AnalysisSummaryData, generate_analysis_summary
from reviewlens.analysis.analysis_config import AnalysisConfig
from reviewlens.analysis.errors import NoReviewDataError, ReviewLensError
from reviewlens.analysis.summary_engine import AnalysisSummaryEngine, review_fingerprint
from reviewlens.cache.memo_cache import MemoCache
from reviewlens.reviews.review_models import as_reviews
from reviewlens.scoring.scoring_config import AnalysisThresholds, ThematicConfig


NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def make_record(
    rating=5,
    days_ago=1,
    sentiment="positive",
    response=None,
    themes="",
    staff="",
    name=None,
    review_id=None,
) -> dict:
    """Raw row in the scraper export's naming."""
    record = {
        "id": review_id,
        "name": name,
        "stars": rating,
        "text": f"{rating} star visit",
        "publishedAtDate": (NOW - timedelta(days=days_ago)).isoformat() if days_ago is not None else None,
        "sentiment": sentiment,
        "mainThemes": themes,
        "staffMentioned": staff,
        "originalLanguage": "en",
    }
    if response:
        record["responseFromOwnerText"] = response
    return record


SCENARIO_A = [
    make_record(r, days_ago=i + 1, review_id=f"a{i}")
    for i, r in enumerate([5, 5, 5, 5, 4, 4, 3, 2, 1, 1])
]


def make_engine(clock=None):
    clock = clock or FakeClock()
    return AnalysisSummaryEngine(cache=MemoCache(clock=clock), clock=lambda: NOW)


# ============================================================================
# SCENARIOS
# ============================================================================

class TestScenarios:

    def setup_method(self):
        self.engine = make_engine()

    def test_scenario_a_no_responses(self):
        summary = self.engine.generate(SCENARIO_A)
        assert summary.response_analytics.response_rate == 0
        benchmarks = summary.rating_analysis.benchmarks
        assert benchmarks.excellent == 60.0
        assert benchmarks.needs_improvement == 30.0
        distribution = summary.rating_analysis.distribution
        assert sum(d.count for d in distribution.values()) == 10
        assert sum(d.percentage for d in distribution.values()) == pytest.approx(100, abs=0.1)

    def test_scenario_b_empty_input(self):
        with pytest.raises(NoReviewDataError):
            self.engine.generate([])

    def test_empty_generator_is_empty_input(self):
        with pytest.raises(ReviewLensError):
            self.engine.generate(iter([]))

    def test_scenario_c_reviews_outside_window(self):
        records = [make_record(r, days_ago=1500 + i) for i, r in enumerate([5, 4, 1])]
        summary = self.engine.generate(records, AnalysisConfig(time_period="last30days"))

        assert all(d.percentage == 0 for d in summary.rating_analysis.distribution.values())
        assert summary.response_analytics.response_rate == 0
        assert summary.sentiment_analysis.distribution.positive.percentage == 0
        assert summary.business_health_score.overall == 0
        assert summary.performance_metrics.total_reviews == 3
        assert summary.data_source.total_reviews == 3

        payload = json.dumps(summary.to_dict(), allow_nan=False)
        assert "NaN" not in payload

    def test_scenario_d_single_positive_theme(self):
        records = [make_record(5, days_ago=d, themes="coffee quality") for d in range(1, 6)]
        summary = self.engine.generate(records)
        top = summary.thematic_analysis.top_categories[0]
        assert top.sentiment == "positive"
        assert all(a.theme != top.category for a in summary.thematic_analysis.attention_areas)

    def test_scenario_e_guarded_growth(self):
        records = [make_record(4, days_ago=d) for d in range(1, 6)]
        summary = self.engine.generate(records, AnalysisConfig(time_period="last30days"))
        assert summary.performance_metrics.growth_rate == 0
        assert not summary.performance_metrics.trends.is_growing
        assert summary.business_health_score.volume_trend == 0


# ============================================================================
# PERIOD COMPARISON
# ============================================================================

class TestPeriodComparison:

    def setup_method(self):
        self.engine = make_engine()
        self.records = (
            [make_record(5, days_ago=d, response="Thanks!") for d in (1, 2)]
            + [make_record(3, days_ago=d) for d in (40, 41)]
        )

    def test_current_vs_previous(self):
        summary = self.engine.generate(self.records, AnalysisConfig(time_period="last30days"))
        trends = summary.rating_analysis.trends
        assert trends.current == 5.0
        assert trends.previous == 3.0
        assert trends.direction == "up"
        assert summary.business_health_score.rating_trend == 40
        assert summary.response_analytics.response_rate == 100.0
        assert summary.time_period.comparison == "month"

    def test_no_comparison(self):
        config = AnalysisConfig(time_period="last30days", comparison_period="none")
        summary = self.engine.generate(self.records, config)
        assert summary.time_period.previous is None
        assert summary.rating_analysis.trends.direction == "stable"
        assert summary.business_health_score.rating_trend == 0

    def test_all_time_includes_undated_reviews(self):
        records = self.records + [make_record(1, days_ago=None)]
        summary = self.engine.generate(records)
        assert summary.rating_analysis.distribution[1].count == 1
        assert sum(d.count for d in summary.rating_analysis.distribution.values()) == 5

    def test_comparison_section(self):
        summary = self.engine.generate(self.records, AnalysisConfig(time_period="last30days"))
        comparison = summary.period_comparison
        assert comparison.review_count.direction == "stable"
        assert comparison.average_rating.current == 5.0
        assert comparison.average_rating.previous == 3.0
        assert comparison.response_rate.change == 100.0
        assert summary.alerts == []

    def test_no_comparison_section_without_previous_period(self):
        config = AnalysisConfig(time_period="last30days", comparison_period="none")
        summary = self.engine.generate(self.records, config)
        assert summary.period_comparison is None
        assert summary.to_dict()["periodComparison"] is None

    def test_alerts_on_declining_period(self):
        records = (
            [make_record(2, days_ago=1, sentiment="negative")]
            + [make_record(5, days_ago=d, response="Thanks!") for d in range(40, 44)]
        )
        summary = self.engine.generate(records, AnalysisConfig(time_period="last30days"))
        types = [a.type for a in summary.alerts]
        assert types == ["rating", "sentiment", "response_rate", "volume"]
        assert all(a.severity == "critical" for a in summary.alerts)


# ============================================================================
# SECTIONS
# ============================================================================

class TestSections:

    def setup_method(self):
        self.engine = make_engine()
        self.records = [
            make_record(1, days_ago=1, sentiment="negative", themes="long wait", staff="Anna"),
            make_record(2, days_ago=2, sentiment="negative", themes="long wait", staff="Anna"),
            make_record(5, days_ago=3, themes="coffee", staff="Ben", response="Thank you"),
        ]

    def test_all_sections_present(self):
        summary = self.engine.generate(self.records, business_name="Cafe Test")
        assert summary.thematic_analysis.attention_areas[0].theme == "Wait Time"
        assert summary.staff_insights.mentions[0].name == "Anna"
        assert summary.action_items.urgent[0].affected_reviews == 2
        assert summary.action_items.improvements[0].area == "Wait Time"
        assert summary.operational_insights.language_diversity[0].language == "en"
        assert summary.data_source.business_name == "Cafe Test"

    def test_optional_sections_can_be_disabled(self):
        config = AnalysisConfig(
            include_staff_analysis=False,
            include_thematic_analysis=False,
            include_action_items=False,
        )
        summary = self.engine.generate(self.records, config)
        assert summary.thematic_analysis.top_categories == []
        assert summary.staff_insights.mentions == []
        assert summary.action_items.urgent == []
        assert summary.action_items.monitoring == []

    def test_data_source_date_range(self):
        summary = self.engine.generate(self.records)
        assert summary.data_source.date_range.start == NOW - timedelta(days=3)
        assert summary.data_source.date_range.end == NOW - timedelta(days=1)


# ============================================================================
# MEMOIZATION / IDEMPOTENCE
# ============================================================================

class TestMemoization:

    def setup_method(self):
        self.clock = FakeClock()
        self.engine = make_engine(self.clock)

    def test_repeated_call_hits_the_cache(self):
        first = self.engine.generate(SCENARIO_A)
        second = self.engine.generate(SCENARIO_A)
        assert second is first

    def test_idempotent_across_engines(self):
        first = self.engine.generate(SCENARIO_A)
        second = make_engine().generate(SCENARIO_A)
        assert second is not first
        assert second.to_dict() == first.to_dict()

    def test_summary_expires_after_ttl(self):
        first = self.engine.generate(SCENARIO_A)
        self.clock.advance(self.engine.config.cache_ttl.summary_seconds)
        second = self.engine.generate(SCENARIO_A)
        assert second is not first
        assert second == first

    def test_config_is_part_of_the_key(self):
        all_time = self.engine.generate(SCENARIO_A)
        recent = self.engine.generate(SCENARIO_A, AnalysisConfig(time_period="last30days"))
        assert recent is not all_time
        assert recent.time_period.current.label == "Last 30 Days"

    def test_thresholds_are_part_of_the_key(self):
        records = [
            make_record(3, days_ago=d, sentiment="neutral", themes="parking", review_id=f"p{d}")
            for d in range(1, 6)
        ]
        strict = AnalysisSummaryEngine(
            cache=self.engine.cache,
            config=AnalysisThresholds(thematic=ThematicConfig(
                urgency_high_below=1.5,
                urgency_medium_below=2.0,
                attention_below_rating=2.0,
            )),
            clock=lambda: NOW,
        )

        default_summary = self.engine.generate(records)
        strict_summary = strict.generate(records)

        assert [a.theme for a in default_summary.thematic_analysis.attention_areas] == ["Location & Access"]
        assert strict_summary.thematic_analysis.attention_areas == []
        assert strict_summary is not default_summary

    def test_fingerprint_tracks_content(self):
        reviews = as_reviews(SCENARIO_A)
        changed = as_reviews(SCENARIO_A[:-1] + [make_record(5, days_ago=10, review_id="a9")])
        assert review_fingerprint(reviews) == review_fingerprint(as_reviews(SCENARIO_A))
        assert review_fingerprint(reviews) != review_fingerprint(changed)

    def test_calculators_are_memoized(self):
        self.engine.generate(SCENARIO_A)
        keys = self.engine.cache.get_stats()["keys"]
        assert keys >= 7


# ============================================================================
# JSON CONTRACT
# ============================================================================

class TestToDict:

    def setup_method(self):
        self.payload = make_engine().generate(SCENARIO_A).to_dict()

    def test_camel_case_keys(self):
        for key in ("businessHealthScore", "performanceMetrics", "ratingAnalysis",
                    "responseAnalytics", "sentimentAnalysis", "thematicAnalysis",
                    "staffInsights", "operationalInsights", "actionItems",
                    "timePeriod", "generatedAt", "dataSource",
                    "periodComparison", "alerts"):
            assert key in self.payload
        assert set(self.payload["ratingAnalysis"]["distribution"]) == {"1", "2", "3", "4", "5"}

    def test_dates_are_iso_strings(self):
        assert self.payload["generatedAt"] == NOW.isoformat()
        datetime.fromisoformat(self.payload["timePeriod"]["current"]["start"])

    def test_heuristic_fields_are_listed(self):
        assert "responseAnalytics.responseEffectiveness" in self.payload["heuristicFields"]
        assert "performanceMetrics.trends.seasonalPattern" in self.payload["heuristicFields"]
        assert self.payload["responseAnalytics"]["responseEffectiveness"]["isHeuristic"] is True

    def test_json_serializable(self):
        json.dumps(self.payload, allow_nan=False)


def test_generate_analysis_summary_convenience():
    summary = generate_analysis_summary(SCENARIO_A, AnalysisConfig(), business_name="Convenience Cafe")
    assert isinstance(summary, AnalysisSummaryData)
    assert summary.data_source.business_name == "Convenience Cafe"
