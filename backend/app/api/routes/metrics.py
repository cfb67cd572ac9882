"""
Prometheus metrics and log counters
"""
from fastapi import APIRouter
from fastapi.responses import Response

from app.core.logging_config import LoggingConfig
from app.core.metrics import get_metrics, get_metrics_content_type

router = APIRouter(tags=["metrics"])


@router.get("/metrics")
async def metrics():
    """
    Prometheus metrics endpoint

    Returns metrics in Prometheus text format
    """
    return Response(
        content=get_metrics(),
        media_type=get_metrics_content_type()
    )


@router.get("/metrics/logs")
async def log_metrics():
    """Number of log records emitted per level since startup"""
    return LoggingConfig.get_metrics()
