"""
Performance Alerts
==================

Threshold checks on the current period. Each metric yields at most one
alert; a critical threshold wins over its warning threshold.

    rating          <= rating_critical / rating_warning
    negative share  >= negative_sentiment_critical_pct / _warning_pct
    response rate   <= response_rate_critical_pct / _warning_pct
    volume drop     >= volume_drop_critical_pct / _warning_pct (needs a previous period)

Usage:
    from reviewlens.analysis.alerts import check_performance_thresholds

    for alert in check_performance_thresholds(current_period, previous_period):
        print(alert.severity, alert.title)
"""

import logging
from typing import List, Optional

from ..reviews.review_models import Sentiment
from ..scoring.scoring_config import DEFAULT_CONFIG, AlertConfig
from .stats import rated, round2, safe_percentage
from .summary_models import PerformanceAlert, PeriodData

logger = logging.getLogger(__name__)


def _rating_alert(current: PeriodData, config: AlertConfig) -> Optional[PerformanceAlert]:
    if not rated(current.reviews):
        return None
    value = round2(current.metrics.average_rating)
    if value <= config.rating_critical:
        severity, title, threshold = "critical", "Critical Rating Alert", config.rating_critical
    elif value <= config.rating_warning:
        severity, title, threshold = "high", "Rating Warning", config.rating_warning
    else:
        return None
    return PerformanceAlert(
        type="rating",
        severity=severity,
        title=title,
        message=f"Average rating has dropped to {value:.1f} stars",
        value=value,
        threshold=threshold,
        comparison="below",
    )


def _sentiment_alert(current: PeriodData, config: AlertConfig) -> Optional[PerformanceAlert]:
    negative = sum(1 for r in current.reviews if r.sentiment == Sentiment.NEGATIVE.value)
    value = safe_percentage(negative, len(current.reviews))
    if value >= config.negative_sentiment_critical_pct:
        severity, title = "critical", "Critical Negative Sentiment"
        threshold = config.negative_sentiment_critical_pct
    elif value >= config.negative_sentiment_warning_pct:
        severity, title = "medium", "High Negative Sentiment"
        threshold = config.negative_sentiment_warning_pct
    else:
        return None
    return PerformanceAlert(
        type="sentiment",
        severity=severity,
        title=title,
        message=f"{value:.1f}% of reviews are negative",
        value=value,
        threshold=threshold,
        comparison="above",
    )


def _response_alert(current: PeriodData, config: AlertConfig) -> Optional[PerformanceAlert]:
    value = round2(current.metrics.response_rate)
    if value <= config.response_rate_critical_pct:
        severity, title = "critical", "Critical Low Response Rate"
        threshold = config.response_rate_critical_pct
    elif value <= config.response_rate_warning_pct:
        severity, title = "medium", "Low Response Rate"
        threshold = config.response_rate_warning_pct
    else:
        return None
    return PerformanceAlert(
        type="response_rate",
        severity=severity,
        title=title,
        message=f"Only {value:.1f}% of reviews have owner responses",
        value=value,
        threshold=threshold,
        comparison="below",
    )


def _volume_alert(
    current: PeriodData,
    previous: Optional[PeriodData],
    config: AlertConfig,
) -> Optional[PerformanceAlert]:
    if previous is None or not previous.reviews:
        return None
    before, now = len(previous.reviews), len(current.reviews)
    value = round2((before - now) / before * 100)
    if value >= config.volume_drop_critical_pct:
        severity, title = "critical", "Critical Review Volume Drop"
        threshold = config.volume_drop_critical_pct
    elif value >= config.volume_drop_warning_pct:
        severity, title = "high", "Review Volume Drop"
        threshold = config.volume_drop_warning_pct
    else:
        return None
    return PerformanceAlert(
        type="volume",
        severity=severity,
        title=title,
        message=f"Review volume fell {value:.1f}% ({before} to {now} reviews)",
        value=value,
        threshold=threshold,
        comparison="above",
    )


def check_performance_thresholds(
    current: PeriodData,
    previous: Optional[PeriodData] = None,
    config: Optional[AlertConfig] = None,
) -> List[PerformanceAlert]:
    """
    Alerts for the current period, ordered rating, sentiment, response rate,
    volume.

    An empty current period only produces the volume alert.
    """
    config = config or DEFAULT_CONFIG.alerts

    alerts: List[PerformanceAlert] = []
    if current.reviews:
        for check in (_rating_alert, _sentiment_alert, _response_alert):
            alert = check(current, config)
            if alert is not None:
                alerts.append(alert)

    volume = _volume_alert(current, previous, config)
    if volume is not None:
        alerts.append(volume)

    if alerts:
        logger.info(
            f"{len(alerts)} performance alert(s)",
            extra={"alerts": [f"{a.type}:{a.severity}" for a in alerts]},
        )
    return alerts
