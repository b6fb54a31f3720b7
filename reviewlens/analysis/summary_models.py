"""
Analysis Summary Data Models
============================

Structured outputs of the analysis engine. Everything here is a frozen
dataclass: results are built once per engine call and shared through the
memo cache, so they must not be mutated by consumers.

``AnalysisSummaryData.to_dict()`` renders the dashboard JSON contract
(camelCase keys, ISO-8601 dates, 0-100 percentages).

Fields tagged ``metadata={"heuristic": True}`` are rules of thumb rather than
measurements; their paths are listed under ``heuristicFields`` in the JSON.
"""

import dataclasses
import typing
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from ..reviews.review_models import Review


HEURISTIC = {"heuristic": True}


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def serialize(value: Any) -> Any:
    """Recursively convert dataclasses/enums/dates into JSON-ready values."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            to_camel(f.name): serialize(getattr(value, f.name))
            for f in dataclasses.fields(value)
            if f.repr
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize(v) for v in value]
    return value


# =============================================================================
# TIME PERIODS
# =============================================================================

@dataclass(frozen=True)
class DateWindow:
    """Half-open interval [start, end)."""
    start: datetime
    end: datetime
    label: str = ""

    def contains(self, moment: Optional[datetime]) -> bool:
        return moment is not None and self.start <= moment < self.end


@dataclass(frozen=True)
class TimePeriodConfig:
    current: DateWindow
    previous: Optional[DateWindow]
    comparison: str  # month | quarter | year | custom | none


@dataclass(frozen=True)
class PeriodMetrics:
    average_rating: float
    total_reviews: int
    sentiment_score: float
    response_rate: float


@dataclass(frozen=True)
class PeriodData:
    """Ephemeral slice of the review collection. Never persisted."""
    start: datetime
    end: datetime
    reviews: List[Review]
    metrics: PeriodMetrics


@dataclass(frozen=True)
class TrendCalculation:
    current: float
    previous: float
    change: float
    change_percentage: float
    direction: str     # up | down | stable
    significance: str  # significant | minor | negligible


# =============================================================================
# HEALTH SCORE
# =============================================================================

@dataclass(frozen=True)
class HealthBreakdown:
    rating: int
    sentiment: int
    response: int
    volume: int


@dataclass(frozen=True)
class BusinessHealthScore:
    overall: int           # 0-100
    rating_trend: int      # -100..100
    sentiment_score: int   # 0-100
    response_rate: int     # 0-100
    volume_trend: int      # % change in review count
    breakdown: HealthBreakdown


# =============================================================================
# PERFORMANCE
# =============================================================================

@dataclass(frozen=True)
class RecentActivity:
    last_3_months: int
    last_6_months: int
    last_12_months: int


@dataclass(frozen=True)
class PerformanceTrends:
    is_growing: bool
    seasonal_pattern: str = field(metadata=HEURISTIC)  # stable | seasonal | declining | growing
    best_periods: List[str] = field(default_factory=list)
    worst_periods: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class PerformanceMetrics:
    total_reviews: int
    reviews_per_month: float
    growth_rate: float
    peak_month: str   # "MM"
    peak_year: str    # "YYYY"
    recent_activity: RecentActivity
    trends: PerformanceTrends


# =============================================================================
# RATINGS / RESPONSES / SENTIMENT
# =============================================================================

@dataclass(frozen=True)
class CountShare:
    count: int
    percentage: float


@dataclass(frozen=True)
class RatingTrend:
    current: float
    previous: float
    change: float
    direction: str


@dataclass(frozen=True)
class RatingBenchmarks:
    excellent: float
    good: float
    needs_improvement: float


@dataclass(frozen=True)
class RatingAnalysis:
    distribution: Dict[int, CountShare]
    trends: RatingTrend
    benchmarks: RatingBenchmarks


@dataclass(frozen=True)
class ResponseBucket:
    total: int
    responded: int
    rate: float


@dataclass(frozen=True)
class ResponseEffectiveness:
    """Rule of thumb derived from the response rate; not a causal estimate."""
    improved_subsequent_ratings: bool
    customer_satisfaction_impact: float
    is_heuristic: bool = True


@dataclass(frozen=True)
class ResponseAnalytics:
    response_rate: float
    responses_by_rating: Dict[int, ResponseBucket]
    response_effectiveness: ResponseEffectiveness = field(metadata=HEURISTIC)


@dataclass(frozen=True)
class SentimentDistribution:
    positive: CountShare
    neutral: CountShare
    negative: CountShare


@dataclass(frozen=True)
class SentimentTrendPoint:
    period: str  # "Q<n> <year>"
    positive: int
    neutral: int
    negative: int


@dataclass(frozen=True)
class PolarityCounts:
    positive: int
    negative: int


@dataclass(frozen=True)
class SentimentCorrelation:
    high_rating: PolarityCounts
    low_rating: PolarityCounts


@dataclass(frozen=True)
class SentimentAnalysis:
    distribution: SentimentDistribution
    trends: List[SentimentTrendPoint]
    correlation_with_rating: SentimentCorrelation


# =============================================================================
# THEMES
# =============================================================================

@dataclass(frozen=True)
class ThemeCategory:
    category: str
    count: int
    percentage: float
    average_rating: float
    sentiment: str


@dataclass(frozen=True)
class TrendingTopic:
    topic: str
    count: int
    trend: str  # rising | declining | stable
    recent_mentions: int


@dataclass(frozen=True)
class AttentionArea:
    theme: str
    negative_count: int
    average_rating: float
    urgency: str  # high | medium | low


@dataclass(frozen=True)
class ThematicAnalysis:
    top_categories: List[ThemeCategory] = field(default_factory=list)
    trending_topics: List[TrendingTopic] = field(default_factory=list)
    attention_areas: List[AttentionArea] = field(default_factory=list)


# =============================================================================
# STAFF / OPERATIONS
# =============================================================================

@dataclass(frozen=True)
class StaffMention:
    name: str
    total_mentions: int
    positive_mentions: int
    negative_mentions: int
    average_rating_in_mentions: float
    trend: str  # improving | declining | stable
    examples: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class StaffInsights:
    mentions: List[StaffMention] = field(default_factory=list)
    overall_staff_score: int = 0
    training_opportunities: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class LanguageShare:
    language: str
    count: int
    percentage: float
    average_rating: float


@dataclass(frozen=True)
class ReviewPatterns:
    peak_days: List[str] = field(default_factory=list)
    peak_months: List[str] = field(default_factory=list)
    quiet_periods: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CustomerLoyalty:
    repeat_reviewers: int
    loyalty_score: float


@dataclass(frozen=True)
class OperationalInsights:
    language_diversity: List[LanguageShare]
    review_patterns: ReviewPatterns
    customer_loyalty: CustomerLoyalty


# =============================================================================
# ACTION ITEMS
# =============================================================================

@dataclass(frozen=True)
class UrgentItem:
    type: str       # unresponded_negative | trending_negative | staff_issue | operational_issue
    description: str
    priority: str   # critical | high | medium
    affected_reviews: int
    suggested_action: str


@dataclass(frozen=True)
class ImprovementItem:
    area: str
    description: str
    potential_impact: str  # high | medium | low
    effort: str            # low | medium | high
    suggested_actions: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class StrengthItem:
    area: str
    description: str
    leverage_opportunities: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class MonitoringItem:
    metric: str
    description: str
    target_value: float
    current_value: float


@dataclass(frozen=True)
class ActionItems:
    urgent: List[UrgentItem] = field(default_factory=list)
    improvements: List[ImprovementItem] = field(default_factory=list)
    strengths: List[StrengthItem] = field(default_factory=list)
    monitoring: List[MonitoringItem] = field(default_factory=list)


# =============================================================================
# PERIOD COMPARISON / ALERTS
# =============================================================================

@dataclass(frozen=True)
class SentimentShares:
    positive: float = 0.0
    neutral: float = 0.0
    negative: float = 0.0


@dataclass(frozen=True)
class ThemeShifts:
    new: List[str] = field(default_factory=list)        # current period only
    declining: List[str] = field(default_factory=list)  # previous period only
    improving: List[str] = field(default_factory=list)  # both, rating went up
    consistent: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class StaffMentionChange:
    name: str
    current: int
    previous: int
    change: int


@dataclass(frozen=True)
class PeriodComparison:
    review_count: TrendCalculation
    average_rating: TrendCalculation
    response_rate: TrendCalculation
    sentiment_current: SentimentShares
    sentiment_previous: SentimentShares
    sentiment_change: SentimentShares  # percentage points
    themes: ThemeShifts
    staff_mentions: List[StaffMentionChange] = field(default_factory=list)


@dataclass(frozen=True)
class PerformanceAlert:
    type: str        # rating | sentiment | response_rate | volume
    severity: str    # critical | high | medium
    title: str
    message: str
    value: float
    threshold: float
    comparison: str  # above | below


# =============================================================================
# SUMMARY
# =============================================================================

@dataclass(frozen=True)
class DataSource:
    total_reviews: int
    date_range: DateWindow
    business_name: str


@dataclass(frozen=True)
class AnalysisSummaryData:
    """Single output of the analysis engine."""
    business_health_score: BusinessHealthScore
    performance_metrics: PerformanceMetrics
    rating_analysis: RatingAnalysis
    response_analytics: ResponseAnalytics
    sentiment_analysis: SentimentAnalysis
    thematic_analysis: ThematicAnalysis
    staff_insights: StaffInsights
    operational_insights: OperationalInsights
    action_items: ActionItems
    time_period: TimePeriodConfig
    generated_at: datetime
    data_source: DataSource
    period_comparison: Optional[PeriodComparison] = None  # None without a comparison period
    alerts: List[PerformanceAlert] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Dashboard JSON contract."""
        payload = serialize(self)
        payload["heuristicFields"] = heuristic_field_paths(type(self))
        return payload


def heuristic_field_paths(cls: type, prefix: str = "") -> List[str]:
    """Dotted camelCase paths of every field tagged as heuristic."""
    paths: List[str] = []
    hints = typing.get_type_hints(cls)
    for f in dataclasses.fields(cls):
        path = f"{prefix}{to_camel(f.name)}"
        if f.metadata.get("heuristic"):
            paths.append(path)
        field_type = hints.get(f.name)
        if dataclasses.is_dataclass(field_type):
            paths.extend(heuristic_field_paths(field_type, prefix=f"{path}."))
    return paths
