"""
Thresholds and weights for the ReviewLens analysis engine.

Every constant the calculators compare against lives here, so that the
dashboard's trend semantics can be tuned and tested without touching the
calculation code.

PHILOSOPHY:
- All thresholds are explicit and documented
- No magic numbers in the calculators
- Fields marked HEURISTIC are rules of thumb, not measurements
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class TrendConfig:
    """
    Generic (current, previous) trend classification, in percent.

    |change%| < stable_below          -> stable / negligible
    |change%| > significant_above     -> significant
    otherwise                         -> minor
    """
    stable_below_pct: float = 2.0
    significant_above_pct: float = 10.0

    # previous == 0: reported change% when current > 0
    from_zero_pct: float = 100.0


@dataclass(frozen=True)
class RatingConfig:
    """
    Rating analysis.

    Rating deltas are measured in stars, not percent, hence a separate
    direction threshold from TrendConfig.
    """
    min_star: int = 1
    max_star: int = 5
    direction_threshold_stars: float = 0.1

    # Benchmarks: which star buckets feed each named benchmark
    excellent_stars: Tuple[int, ...] = (4, 5)
    fair_stars: Tuple[int, ...] = (3,)
    needs_improvement_stars: Tuple[int, ...] = (1, 2)

    # Cohorts used by sentiment correlation and action items
    high_rating_min: int = 4
    low_rating_max: int = 2


@dataclass(frozen=True)
class ResponseConfig:
    """
    Owner-response analytics.

    HEURISTIC: the effectiveness block is a rule of thumb carried over for
    dashboard compatibility. There is no causal link measured between a
    response and later ratings.
    """
    improved_ratings_above_rate: float = 50.0
    satisfaction_impact_divisor: float = 10.0
    satisfaction_impact_cap: float = 10.0


@dataclass(frozen=True)
class SentimentConfig:
    """Quarterly sentiment series."""
    max_quarters: int = 8


@dataclass(frozen=True)
class PerformanceConfig:
    """
    Volume / growth metrics.

    HEURISTIC: seasonal_pattern is a coarse classification from growth rate
    and the monthly spread, not a seasonality test.
    """
    is_growing_above_pct: float = 5.0
    growing_above_pct: float = 20.0
    declining_below_pct: float = -20.0
    seasonal_spread_factor: float = 2.0
    seasonal_min_months: int = 3
    period_rank_size: int = 3

    # Recent activity windows (days back from now)
    recent_windows_days: Tuple[Tuple[str, int], ...] = (
        ("last_3_months", 90),
        ("last_6_months", 180),
        ("last_12_months", 365),
    )


@dataclass(frozen=True)
class ThematicConfig:
    """
    Theme clustering.

    Urgency bands (average rating of the theme):
    - < 2.5 : high
    - < 3.0 : medium
    - < 3.5 : low (still an attention area)
    """
    top_categories: int = 8
    attention_below_rating: float = 3.5
    urgency_high_below: float = 2.5
    urgency_medium_below: float = 3.0
    positive_min_rating: float = 4.0
    negative_max_rating: float = 2.0

    # Trending topics
    recent_share: float = 0.3
    recent_min_reviews: int = 50
    rising_factor: float = 1.2
    declining_factor: float = 0.8
    max_trending_topics: int = 6


@dataclass(frozen=True)
class StaffConfig:
    """Staff mention insights."""
    training_below_rating: float = 3.5
    trend_threshold_stars: float = 0.1
    max_examples: int = 3
    example_length: int = 120


@dataclass(frozen=True)
class HealthScoreConfig:
    """
    Business health score (0-100).

    overall = rating*0.4 + sentiment*0.3 + response*0.2 + max(0, volume)*0.1
    """
    rating_weight: float = 0.4
    sentiment_weight: float = 0.3
    response_weight: float = 0.2
    volume_weight: float = 0.1

    # rating delta (stars) -> -100..100 trend scale
    rating_trend_scale: float = 20.0


@dataclass(frozen=True)
class ActionItemConfig:
    """Rule-based action items."""
    max_strengths: int = 3
    target_response_rate: float = 80.0
    target_average_rating: float = 4.5


@dataclass(frozen=True)
class AlertConfig:
    """
    Threshold alerts on the current period.

    Rating and response rate alert at or below a threshold; negative
    sentiment and volume drop at or above one. Critical wins over warning.
    """
    rating_critical: float = 3.0
    rating_warning: float = 3.5
    negative_sentiment_critical_pct: float = 40.0
    negative_sentiment_warning_pct: float = 25.0
    response_rate_critical_pct: float = 30.0
    response_rate_warning_pct: float = 50.0
    volume_drop_critical_pct: float = 50.0
    volume_drop_warning_pct: float = 25.0


@dataclass(frozen=True)
class CacheTTLConfig:
    """Memoization TTLs, in seconds."""
    calculator_seconds: int = 3 * 60
    thematic_seconds: int = 5 * 60
    summary_seconds: int = 10 * 60


@dataclass
class AnalysisThresholds:
    """
    Global configuration of the analysis engine.

    Aggregates every component configuration; single entry point for
    calibration.
    """
    trend: TrendConfig = field(default_factory=TrendConfig)
    rating: RatingConfig = field(default_factory=RatingConfig)
    response: ResponseConfig = field(default_factory=ResponseConfig)
    sentiment: SentimentConfig = field(default_factory=SentimentConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)
    thematic: ThematicConfig = field(default_factory=ThematicConfig)
    staff: StaffConfig = field(default_factory=StaffConfig)
    health: HealthScoreConfig = field(default_factory=HealthScoreConfig)
    action_items: ActionItemConfig = field(default_factory=ActionItemConfig)
    alerts: AlertConfig = field(default_factory=AlertConfig)
    cache_ttl: CacheTTLConfig = field(default_factory=CacheTTLConfig)

    def validate(self) -> bool:
        """Check configuration consistency."""
        weights = (
            self.health.rating_weight +
            self.health.sentiment_weight +
            self.health.response_weight +
            self.health.volume_weight
        )
        assert abs(weights - 1.0) < 1e-9, \
            f"Health score weights sum to {weights}, expected 1.0"
        assert self.trend.stable_below_pct <= self.trend.significant_above_pct, \
            "Trend stable threshold must not exceed the significant threshold"
        assert (
            self.thematic.urgency_high_below
            <= self.thematic.urgency_medium_below
            <= self.thematic.attention_below_rating
        ), "Thematic urgency bands must be ordered"
        assert self.alerts.rating_critical <= self.alerts.rating_warning, \
            "Rating critical threshold must not exceed the warning threshold"
        assert self.alerts.response_rate_critical_pct <= self.alerts.response_rate_warning_pct, \
            "Response rate critical threshold must not exceed the warning threshold"
        assert (
            self.alerts.negative_sentiment_warning_pct <= self.alerts.negative_sentiment_critical_pct
            and self.alerts.volume_drop_warning_pct <= self.alerts.volume_drop_critical_pct
        ), "Sentiment and volume warning thresholds must not exceed the critical ones"
        return True


DEFAULT_CONFIG = AnalysisThresholds()
