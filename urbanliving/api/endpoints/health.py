"""Health check endpoints for service monitoring.

``/health`` answers as long as the process is up; ``/health/ready`` also
checks the database and the photo storage directory.
"""

import os
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter
from sqlalchemy import text

from urbanliving import __version__
from urbanliving.api.deps import DBSession, PhotoServiceDep, SettingsDep

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=Dict[str, Any],
    summary="Health Check",
    description="Check if the API service is running.",
)
async def health_check(settings: SettingsDep) -> Dict[str, Any]:
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.APP_ENV,
        "version": __version__,
    }


@router.get(
    "/health/ready",
    response_model=Dict[str, Any],
    summary="Readiness Check",
    description="Check if the service is ready to accept requests (database and photo storage).",
)
async def readiness_check(db: DBSession, photo_service: PhotoServiceDep) -> Dict[str, Any]:
    """Perform a readiness check including database connectivity.

    Returns:
        Dictionary with detailed service and dependency status.
    """
    db_status = "healthy"
    db_message = "Connected"
    try:
        result = await db.execute(text("SELECT 1"))
        result.scalar()
    except Exception as e:
        db_status = "unhealthy"
        db_message = str(e)

    storage_path = photo_service.storage.storage_path
    storage_ok = storage_path.is_dir() and os.access(storage_path, os.W_OK)

    ready = db_status == "healthy" and storage_ok
    return {
        "status": "ready" if ready else "not_ready",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {
            "database": {"status": db_status, "message": db_message},
            "storage": {
                "status": "healthy" if storage_ok else "unhealthy",
                "message": "Writable" if storage_ok else "Photo storage is not writable",
            },
        },
    }
