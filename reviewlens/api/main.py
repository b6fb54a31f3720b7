"""
ReviewLens FastAPI Application
==============================

REST API for the review analysis engine.

Endpoints:
    GET  /api/health                                   - Health check
    POST /api/analysis/summary                         - Summary of posted reviews
    GET  /api/businesses/{business_id}/analysis-summary - Summary of stored reviews

Usage:
    uvicorn reviewlens.api.main:app --reload --port 8000

    Or with CLI:
    python -m reviewlens.api.main
"""

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
import os

from .. import __version__
from ..cache.memo_cache import get_cache
from ..data.config import get_settings
from ..orchestrator.logging_config import parse_module_levels, setup_logging
from .models import HealthResponse
from .summary_routes import router as summary_router
from . import db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    log_settings = get_settings().logging
    setup_logging(
        level=log_settings.level,
        json_output=log_settings.json_logs,
        log_file=log_settings.log_file,
        module_levels=parse_module_levels(log_settings.module_levels),
    )
    logger.info("Starting ReviewLens API...")

    # Initialize DB pool
    db.get_pool()

    yield

    # Cleanup
    db.close_pool()
    logger.info("ReviewLens API stopped")


app = FastAPI(
    title="ReviewLens API",
    description="Analysis summaries of customer reviews",
    version=__version__,
    lifespan=lifespan,
)

_default_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
_extra_origins = os.getenv("CORS_ORIGINS", "")
if _extra_origins:
    _default_origins.extend([o.strip() for o in _extra_origins.split(",") if o.strip()])

app.add_middleware(
    CORSMiddleware,
    allow_origins=_default_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include analysis summary routes
app.include_router(summary_router)


# ============================================================================
# HEALTH ENDPOINT
# ============================================================================

@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    The analysis routes that take reviews in the body work without a
    database, so a disconnected database only degrades the service.
    """
    db_health = db.check_health()
    overall = "healthy" if db_health["status"] == "connected" else "degraded"

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_health["status"],
        database_version=db_health.get("version"),
        cache=get_cache().get_stats(),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "reviewlens.api.main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", "8000")),
    )
