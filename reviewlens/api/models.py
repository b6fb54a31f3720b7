"""
ReviewLens API Models
=====================

Pydantic request / response models for the REST API.

Field names are camelCase (what the dashboard sends); the snake_case aliases
are accepted too.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..analysis.analysis_config import AnalysisConfig, ComparisonPeriod, DateRange, TimePeriod
from ..reviews.field_accessor import parse_timestamp


class DateRangeModel(BaseModel):
    start: datetime
    end: datetime


class AnalysisConfigModel(BaseModel):
    """Analysis options, mirrored on AnalysisConfig."""
    timePeriod: TimePeriod = Field(TimePeriod.ALL, alias="time_period")
    customRange: Optional[DateRangeModel] = Field(None, alias="custom_range")
    includeStaffAnalysis: bool = Field(True, alias="include_staff_analysis")
    includeThematicAnalysis: bool = Field(True, alias="include_thematic_analysis")
    includeActionItems: bool = Field(True, alias="include_action_items")
    comparisonPeriod: ComparisonPeriod = Field(ComparisonPeriod.PREVIOUS, alias="comparison_period")

    class Config:
        populate_by_name = True

    def to_analysis_config(self) -> AnalysisConfig:
        """
        Raises:
            InvalidAnalysisConfigError: On an incomplete or inverted custom range
        """
        custom_range = None
        if self.customRange is not None:
            custom_range = DateRange(
                start=parse_timestamp(self.customRange.start),
                end=parse_timestamp(self.customRange.end),
            )
        return AnalysisConfig(
            time_period=self.timePeriod,
            custom_range=custom_range,
            include_staff_analysis=self.includeStaffAnalysis,
            include_thematic_analysis=self.includeThematicAnalysis,
            include_action_items=self.includeActionItems,
            comparison_period=self.comparisonPeriod,
        )


class SummaryRequest(BaseModel):
    """Body of POST /api/analysis/summary."""
    reviews: List[Dict[str, Any]] = Field(default_factory=list)
    config: Optional[AnalysisConfigModel] = None
    businessName: str = Field("Current Business", alias="business_name")

    class Config:
        populate_by_name = True


class HealthResponse(BaseModel):
    """Service health."""
    status: str  # healthy, degraded
    version: str
    database: str
    databaseVersion: Optional[str] = Field(None, alias="database_version")
    cache: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        populate_by_name = True
