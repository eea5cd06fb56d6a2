from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from shared.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health(request: Request):
    """Liveness plus a record-store round trip."""
    settings = request.app.state.settings
    db = request.app.state.db
    try:
        await db.ping()
        database = "ok"
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        database = "unavailable"

    healthy = database == "ok"
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "ok" if healthy else "degraded",
            "service": settings.PROJECT_NAME,
            "version": settings.PROJECT_VERSION,
            "environment": settings.ENVIRONMENT,
            "database": database,
        },
    )
