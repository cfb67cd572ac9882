"""
Health check endpoints
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.logging_config import LoggingConfig
from app.utils.datetime_utils import utc_now_iso

logger = LoggingConfig.get_logger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """
    Basic health check endpoint

    Returns:
        dict: Health status
    """
    settings = get_settings()
    return {
        "status": "healthy",
        "timestamp": utc_now_iso(),
        "service": settings.app_name,
        "version": settings.app_version,
    }


@router.get("/health/readiness")
async def readiness_check(db: Session = Depends(get_db)):
    """
    Readiness check - can the service reach its database?

    Returns 503 when the database does not answer.
    """
    settings = get_settings()
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Readiness check failed: {e}", exc_info=True)
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "message": "Database is not reachable",
                "timestamp": utc_now_iso(),
                "error": type(e).__name__,
            },
        )

    return {
        "status": "ready",
        "message": "Service is ready to accept traffic",
        "timestamp": utc_now_iso(),
        "media_host_configured": settings.media_host.is_configured,
    }


@router.get("/health/liveness")
async def liveness_check():
    """
    Liveness check - is the service alive?
    """
    return {
        "status": "alive",
        "timestamp": utc_now_iso()
    }
