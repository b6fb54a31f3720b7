"""
Analysis Configuration
======================

What the caller asks for: which time window to analyse, what to compare it
with, and which optional sections to compute.

Usage:
    config = AnalysisConfig(time_period=TimePeriod.LAST_90_DAYS)
    config = AnalysisConfig.from_dict({"timePeriod": "custom",
                                       "customRange": {"start": "2024-01-01",
                                                       "end": "2024-04-01"}})
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from ..reviews.field_accessor import parse_timestamp
from .errors import InvalidAnalysisConfigError


class TimePeriod(str, Enum):
    LAST_30_DAYS = "last30days"
    LAST_90_DAYS = "last90days"
    LAST_6_MONTHS = "last6months"
    LAST_12_MONTHS = "last12months"
    ALL = "all"
    CUSTOM = "custom"


class ComparisonPeriod(str, Enum):
    PREVIOUS = "previous"
    YEAR_OVER_YEAR = "yearOverYear"
    NONE = "none"


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class AnalysisConfig:
    time_period: TimePeriod = TimePeriod.ALL
    custom_range: Optional[DateRange] = None
    include_staff_analysis: bool = True
    include_thematic_analysis: bool = True
    include_action_items: bool = True
    comparison_period: ComparisonPeriod = ComparisonPeriod.PREVIOUS

    def __post_init__(self):
        """Coerce plain strings into enums and validate the custom range."""
        try:
            object.__setattr__(self, "time_period", TimePeriod(self.time_period))
            object.__setattr__(
                self, "comparison_period", ComparisonPeriod(self.comparison_period)
            )
        except ValueError as e:
            raise InvalidAnalysisConfigError(str(e)) from e

        if self.time_period == TimePeriod.CUSTOM:
            if self.custom_range is None:
                raise InvalidAnalysisConfigError(
                    "Custom range required for custom time period"
                )
            if self.custom_range.end <= self.custom_range.start:
                raise InvalidAnalysisConfigError(
                    f"Custom range end ({self.custom_range.end.isoformat()}) "
                    f"must be after start ({self.custom_range.start.isoformat()})"
                )

    def cache_fingerprint(self) -> Dict[str, Any]:
        """Stable representation used in cache keys."""
        return {
            "time_period": self.time_period.value,
            "custom_range": (
                [self.custom_range.start.isoformat(), self.custom_range.end.isoformat()]
                if self.custom_range else None
            ),
            "include_staff_analysis": self.include_staff_analysis,
            "include_thematic_analysis": self.include_thematic_analysis,
            "include_action_items": self.include_action_items,
            "comparison_period": self.comparison_period.value,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "AnalysisConfig":
        """
        Build from a camelCase (dashboard) or snake_case mapping.

        Raises:
            InvalidAnalysisConfigError: On unknown enum values, unparsable or
                inverted custom dates.
        """
        data = data or {}

        def pick(camel: str, snake: str, default: Any) -> Any:
            if camel in data and data[camel] is not None:
                return data[camel]
            if snake in data and data[snake] is not None:
                return data[snake]
            return default

        custom_range = None
        raw_range = pick("customRange", "custom_range", None)
        if raw_range:
            start = parse_timestamp(raw_range.get("start"))
            end = parse_timestamp(raw_range.get("end"))
            if start is None or end is None:
                raise InvalidAnalysisConfigError(
                    f"Unparsable custom range: {raw_range!r}"
                )
            custom_range = DateRange(start=start, end=end)

        return cls(
            time_period=pick("timePeriod", "time_period", TimePeriod.ALL),
            custom_range=custom_range,
            include_staff_analysis=bool(pick("includeStaffAnalysis", "include_staff_analysis", True)),
            include_thematic_analysis=bool(pick("includeThematicAnalysis", "include_thematic_analysis", True)),
            include_action_items=bool(pick("includeActionItems", "include_action_items", True)),
            comparison_period=pick("comparisonPeriod", "comparison_period", ComparisonPeriod.PREVIOUS),
        )


DEFAULT_ANALYSIS_CONFIG = AnalysisConfig()
