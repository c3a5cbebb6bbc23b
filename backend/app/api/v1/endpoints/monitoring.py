"""
Monitoring and Health Check Endpoints
"""

from fastapi import APIRouter
from datetime import datetime, timezone
import structlog

from app.core.config import settings
from app.models.common import HealthStatus
from app.monitoring.metrics import metrics_collector
from app.services.tax_rules_engine import get_tax_rules_engine

router = APIRouter()
logger = structlog.get_logger()


@router.get("/health", response_model=HealthStatus)
async def health_check():
    """Basic health check endpoint"""
    engine = get_tax_rules_engine()
    return HealthStatus(
        timestamp=datetime.now(timezone.utc),
        version=settings.VERSION,
        tax_year=engine.tax_year,
        ruleset_version=engine.ruleset_version
    )


@router.get("/metrics")
async def get_metrics():
    """Get application metrics"""
    return {
        "metrics": metrics_collector.get_metrics_summary(),
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
