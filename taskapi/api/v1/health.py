"""
Health Check API

Health check endpoints for monitoring service status.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from taskapi.config import Settings, get_settings
from taskapi.database import get_db
from taskapi.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Health check endpoint

    Checks connectivity to the database. No authentication required.

    Returns:
        {
            "status": "healthy",
            "app": "Task API",
            "version": "1.0.0",
            "database": "connected"
        }
    """
    health_status = {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }

    try:
        await db.execute(text("SELECT 1"))
        health_status["database"] = "connected"
        logger.debug("Database health check passed")
    except Exception as e:
        health_status["database"] = "disconnected"
        health_status["status"] = "unhealthy"
        logger.error("Database health check failed", error=str(e))

    if health_status["status"] == "unhealthy":
        raise HTTPException(status_code=503, detail="Database unavailable")

    return health_status
