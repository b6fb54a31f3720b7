"""
Analysis Summary API Routes
===========================

POST /api/analysis/summary: summary of the reviews sent in the body.
GET  /api/businesses/{business_id}/analysis-summary: summary of the reviews
     stored for a business.

Errors:
    404: no review data
    422: invalid analysis configuration
    503: database unavailable
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..analysis.analysis_config import AnalysisConfig, ComparisonPeriod, DateRange, TimePeriod
from ..analysis.errors import InvalidAnalysisConfigError, NoReviewDataError
from ..analysis.summary_engine import AnalysisSummaryEngine
from ..cache.memo_cache import get_cache
from ..data.config import get_settings
from ..data.review_loader import load_reviews_for_business
from ..reviews.field_accessor import parse_timestamp
from ..scoring.scoring_config import AnalysisThresholds
from .models import SummaryRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Analysis"])

_engine: Optional[AnalysisSummaryEngine] = None


def get_summary_engine() -> AnalysisSummaryEngine:
    """Process-wide engine over the shared MemoCache."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = AnalysisSummaryEngine(
            cache=get_cache(),
            config=AnalysisThresholds(cache_ttl=settings.cache.to_ttl_config()),
        )
    return _engine


def _generate(
    engine: AnalysisSummaryEngine,
    reviews,
    config: AnalysisConfig,
    business_name: str,
) -> Dict[str, Any]:
    try:
        return engine.generate(reviews, config, business_name=business_name).to_dict()
    except NoReviewDataError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.post("/analysis/summary")
async def create_analysis_summary(
    request: SummaryRequest,
    engine: AnalysisSummaryEngine = Depends(get_summary_engine),
):
    """Analysis summary of the reviews in the request body."""
    try:
        config = request.config.to_analysis_config() if request.config else AnalysisConfig()
        return _generate(engine, request.reviews, config, request.businessName)
    except HTTPException:
        raise
    except InvalidAnalysisConfigError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except Exception as e:
        logger.error(f"Analysis summary failed for {request.businessName}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/businesses/{business_id}/analysis-summary")
async def get_business_analysis_summary(
    business_id: str,
    timePeriod: TimePeriod = Query(TimePeriod.ALL),
    comparisonPeriod: ComparisonPeriod = Query(ComparisonPeriod.PREVIOUS),
    startDate: Optional[datetime] = Query(None),
    endDate: Optional[datetime] = Query(None),
    businessName: Optional[str] = Query(None),
    engine: AnalysisSummaryEngine = Depends(get_summary_engine),
):
    """Analysis summary of the reviews stored for a business."""
    from . import db

    try:
        custom_range = None
        if startDate is not None and endDate is not None:
            custom_range = DateRange(start=parse_timestamp(startDate), end=parse_timestamp(endDate))
        config = AnalysisConfig(
            time_period=timePeriod,
            custom_range=custom_range,
            comparison_period=comparisonPeriod,
        )

        with db.get_connection() as conn:
            reviews = load_reviews_for_business(
                conn, business_id, limit=get_settings().database.review_limit
            )

        return _generate(engine, reviews, config, businessName or business_id)

    except HTTPException:
        raise
    except InvalidAnalysisConfigError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except ConnectionError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.error(
            f"Analysis summary failed for business {business_id}: {e}",
            extra={"business_id": business_id},
        )
        raise HTTPException(status_code=500, detail=str(e))
