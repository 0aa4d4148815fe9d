"""Health, readiness and liveness probes."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from workforce_engine import __version__
from workforce_engine.api.dependencies import DbSession

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Service and store status."""

    status: str
    version: str
    timestamp: datetime
    database: str


async def _database_reachable(db: AsyncSession) -> bool:
    try:
        await db.execute(text("SELECT 1"))
    except Exception:
        logger.warning("Workforce store is unreachable", exc_info=True)
        return False
    return True


@router.get("/health", response_model=HealthResponse)
async def health_check(db: DbSession) -> HealthResponse:
    """Report ``degraded`` instead of failing when the store is down."""
    reachable = await _database_reachable(db)
    return HealthResponse(
        status="healthy" if reachable else "degraded",
        version=__version__,
        timestamp=datetime.now(timezone.utc),
        database="healthy" if reachable else "unhealthy",
    )


@router.get("/ready")
async def readiness_check(db: DbSession) -> dict[str, str]:
    """Ready only once coverage snapshots can be read."""
    if not await _database_reachable(db):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Workforce store is unreachable",
        )
    return {"status": "ready"}


@router.get("/live")
async def liveness_check() -> dict[str, str]:
    return {"status": "alive"}
