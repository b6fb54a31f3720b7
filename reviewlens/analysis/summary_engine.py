"""
Analysis Summary Engine
=======================

Orchestrates the calculators into one AnalysisSummaryData:

    periods -> current / previous subsets
            -> response + sentiment (both periods)
            -> health score
            -> performance, rating, thematic, staff, operational
            -> action items
            -> period comparison, threshold alerts

Every calculator call and the assembled summary are memoized in a MemoCache
under keys derived from a content fingerprint of the reviews involved (count,
rating sum, response and sentiment counts, first/last review) and of the
engine thresholds, so engines with different thresholds can share a cache.
Cached entries are not invalidated when a review list is mutated in place:
replace review collections wholesale.

Usage:
    from reviewlens import AnalysisSummaryEngine, AnalysisConfig

    engine = AnalysisSummaryEngine()
    summary = engine.generate(reviews, AnalysisConfig(time_period="last90days"))
    print(summary.business_health_score.overall)
    payload = summary.to_dict()
"""

import dataclasses
import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Optional

from ..cache.memo_cache import MemoCache, get_cache
from ..reviews.review_models import Review, ReviewInput, as_reviews
from ..scoring.health_score import calculate_business_health_score
from ..scoring.scoring_config import DEFAULT_CONFIG, AnalysisThresholds
from .action_items import synthesize_action_items
from .alerts import check_performance_thresholds
from .analysis_config import DEFAULT_ANALYSIS_CONFIG, AnalysisConfig, TimePeriod
from .errors import NoReviewDataError
from .operational_insights import calculate_operational_insights
from .performance_metrics import calculate_performance_metrics
from .period_comparison import compare_periods
from .periods import build_period_data, create_time_periods, filter_reviews_by_date_range
from .rating_analysis import calculate_rating_analysis
from .response_analytics import calculate_response_analytics
from .sentiment_analysis import calculate_sentiment_analysis
from .staff_insights import calculate_staff_insights
from .stats import dated
from .summary_models import (
    ActionItems,
    AnalysisSummaryData,
    DataSource,
    DateWindow,
    StaffInsights,
    ThematicAnalysis,
    TimePeriodConfig,
)
from .thematic_analysis import calculate_thematic_analysis

logger = logging.getLogger(__name__)

DEFAULT_BUSINESS_NAME = "Current Business"


def review_fingerprint(reviews: List[Review]) -> str:
    """
    Content fingerprint of a review collection.

    Two collections with the same size, rating sum, response count, positive
    count and the same first / last review share a fingerprint.
    """
    if not reviews:
        return MemoCache.compute_hash(0)
    first, last = reviews[0], reviews[-1]
    return MemoCache.compute_hash(
        len(reviews),
        sum(r.rating for r in reviews if r.rating is not None),
        sum(1 for r in reviews if r.has_owner_response),
        sum(1 for r in reviews if r.sentiment == "positive"),
        first.review_id, first.published_at,
        last.review_id, last.published_at,
    )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnalysisSummaryEngine:
    """
    Memoizing orchestrator of the analysis calculators.

    The cache is injectable (tests pass one with a fake clock); by default
    the process-wide MemoCache is shared by every engine.
    """

    def __init__(
        self,
        cache: Optional[MemoCache] = None,
        config: Optional[AnalysisThresholds] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            cache: Memo cache (default: process-wide singleton)
            config: Thresholds and weights (default: DEFAULT_CONFIG)
            clock: Returns the reference "now" as an aware datetime
        """
        self.cache = cache if cache is not None else get_cache()
        self.config = config or DEFAULT_CONFIG
        self.config.validate()
        self._thresholds_key = MemoCache.compute_hash(dataclasses.asdict(self.config))
        self.clock = clock or _utcnow

    # =========================================================================
    # MEMOIZATION
    # =========================================================================

    def _memoize(self, name: str, key_parts: tuple, compute: Callable[[], Any], ttl: int) -> Any:
        key = f"{name}:{MemoCache.compute_hash(self._thresholds_key, *key_parts)}"
        return self.cache.get_or_compute(key, compute, ttl_seconds=ttl)

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def generate(
        self,
        reviews: Iterable[ReviewInput],
        analysis_config: Optional[AnalysisConfig] = None,
        business_name: str = DEFAULT_BUSINESS_NAME,
    ) -> AnalysisSummaryData:
        """
        Build the analysis summary of a review collection.

        Args:
            reviews: Raw review rows (any supported naming) or Review objects
            analysis_config: Period, comparison and optional sections
            business_name: Display name echoed in data_source

        Returns:
            Frozen AnalysisSummaryData

        Raises:
            NoReviewDataError: If reviews is empty
        """
        normalized = as_reviews(reviews)
        if not normalized:
            raise NoReviewDataError(business_name)

        analysis_config = analysis_config or DEFAULT_ANALYSIS_CONFIG
        fingerprint = review_fingerprint(normalized)
        summary_hash = MemoCache.compute_hash(
            self._thresholds_key, fingerprint, analysis_config.cache_fingerprint(), business_name
        )
        summary_key = f"summary:{summary_hash}"

        cached = self.cache.get(summary_key)
        if cached is not None:
            logger.debug(
                f"Summary cache hit for {business_name}",
                extra={"cache_key": summary_key, "stage": "summary"},
            )
            return cached

        started = time.perf_counter()
        summary = self._build(normalized, fingerprint, analysis_config, business_name)
        self.cache.set(summary_key, summary, ttl_seconds=self.config.cache_ttl.summary_seconds)

        duration = time.perf_counter() - started
        logger.info(
            f"Analysis summary for {business_name}: {len(normalized)} reviews, "
            f"health={summary.business_health_score.overall} ({duration:.3f}s)",
            extra={
                "stage": "summary",
                "duration": round(duration, 3),
                "review_count": len(normalized),
                "cache_key": summary_key,
            },
        )
        return summary

    # =========================================================================
    # PIPELINE
    # =========================================================================

    def _build(
        self,
        reviews: List[Review],
        fingerprint: str,
        analysis_config: AnalysisConfig,
        business_name: str,
    ) -> AnalysisSummaryData:
        cfg = self.config
        ttl = cfg.cache_ttl
        now = self.clock()

        periods = create_time_periods(analysis_config, now, reviews)
        if analysis_config.time_period == TimePeriod.ALL:
            current_reviews = reviews
        else:
            current_reviews = filter_reviews_by_date_range(
                reviews, periods.current.start, periods.current.end
            )
        previous_reviews = None
        if periods.previous is not None:
            previous_reviews = filter_reviews_by_date_range(
                reviews, periods.previous.start, periods.previous.end
            )

        current_fp = review_fingerprint(current_reviews)
        previous_fp = review_fingerprint(previous_reviews) if previous_reviews is not None else None

        # Response and sentiment feed the health score
        response = self._memoize(
            "response", (current_fp,),
            lambda: calculate_response_analytics(current_reviews, cfg.response, cfg.rating),
            ttl.calculator_seconds,
        )
        sentiment = self._memoize(
            "sentiment", (current_fp,),
            lambda: calculate_sentiment_analysis(current_reviews, cfg.sentiment, cfg.rating),
            ttl.calculator_seconds,
        )
        current_period = build_period_data(
            periods.current,
            current_reviews,
            sentiment_score=sentiment.distribution.positive.percentage,
            response_rate=response.response_rate,
        )

        previous_period = None
        if previous_reviews is not None:
            previous_response = self._memoize(
                "response", (previous_fp,),
                lambda: calculate_response_analytics(previous_reviews, cfg.response, cfg.rating),
                ttl.calculator_seconds,
            )
            previous_sentiment = self._memoize(
                "sentiment", (previous_fp,),
                lambda: calculate_sentiment_analysis(previous_reviews, cfg.sentiment, cfg.rating),
                ttl.calculator_seconds,
            )
            previous_period = build_period_data(
                periods.previous,
                previous_reviews,
                sentiment_score=previous_sentiment.distribution.positive.percentage,
                response_rate=previous_response.response_rate,
            )

        health = calculate_business_health_score(current_period, previous_period, cfg.health)

        performance = self._memoize(
            "performance", (fingerprint, self._window_key(periods), now),
            lambda: calculate_performance_metrics(reviews, periods, now, cfg.performance),
            ttl.calculator_seconds,
        )
        rating = self._memoize(
            "rating", (current_fp, previous_fp),
            lambda: calculate_rating_analysis(current_reviews, previous_reviews, cfg.rating),
            ttl.calculator_seconds,
        )

        thematic = ThematicAnalysis()
        if analysis_config.include_thematic_analysis:
            thematic = self._memoize(
                "thematic", (current_fp,),
                lambda: calculate_thematic_analysis(current_reviews, cfg.thematic),
                ttl.thematic_seconds,
            )

        staff = StaffInsights()
        if analysis_config.include_staff_analysis:
            staff = self._memoize(
                "staff", (current_fp,),
                lambda: calculate_staff_insights(current_reviews, cfg.staff),
                ttl.calculator_seconds,
            )

        operational = self._memoize(
            "operational", (current_fp,),
            lambda: calculate_operational_insights(current_reviews),
            ttl.calculator_seconds,
        )

        actions = ActionItems()
        if analysis_config.include_action_items:
            actions = self._memoize(
                "actions", (current_fp, previous_fp, analysis_config.include_thematic_analysis),
                lambda: synthesize_action_items(
                    current_reviews, thematic, response, rating,
                    cfg.action_items, cfg.rating,
                ),
                ttl.calculator_seconds,
            )

        comparison = None
        if previous_period is not None:
            comparison = self._memoize(
                "comparison", (current_fp, previous_fp),
                lambda: compare_periods(current_period, previous_period, cfg.trend, cfg.rating),
                ttl.calculator_seconds,
            )
        alerts = self._memoize(
            "alerts", (current_fp, previous_fp),
            lambda: check_performance_thresholds(current_period, previous_period, cfg.alerts),
            ttl.calculator_seconds,
        )

        return AnalysisSummaryData(
            business_health_score=health,
            performance_metrics=performance,
            rating_analysis=rating,
            response_analytics=response,
            sentiment_analysis=sentiment,
            thematic_analysis=thematic,
            staff_insights=staff,
            operational_insights=operational,
            action_items=actions,
            time_period=periods,
            generated_at=now,
            data_source=DataSource(
                total_reviews=len(reviews),
                date_range=self._date_range(reviews, periods),
                business_name=business_name,
            ),
            period_comparison=comparison,
            alerts=alerts,
        )

    @staticmethod
    def _window_key(periods: TimePeriodConfig) -> tuple:
        previous = periods.previous
        return (
            periods.current.start, periods.current.end,
            previous.start if previous else None,
            previous.end if previous else None,
        )

    @staticmethod
    def _date_range(reviews: List[Review], periods: TimePeriodConfig) -> DateWindow:
        """Span of the dated reviews; the current window when none is dated."""
        dates = [r.published_at for r in dated(reviews)]
        if not dates:
            return DateWindow(start=periods.current.start, end=periods.current.end)
        return DateWindow(start=min(dates), end=max(dates))


_default_engine: Optional[AnalysisSummaryEngine] = None


def get_engine() -> AnalysisSummaryEngine:
    """Process-wide engine sharing the default MemoCache."""
    global _default_engine
    if _default_engine is None:
        _default_engine = AnalysisSummaryEngine()
    return _default_engine


def generate_analysis_summary(
    reviews: Iterable[ReviewInput],
    config: Optional[AnalysisConfig] = None,
    business_name: str = DEFAULT_BUSINESS_NAME,
) -> AnalysisSummaryData:
    """Convenience wrapper around the default engine."""
    return get_engine().generate(reviews, config, business_name=business_name)
