"""Health check endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from cineroom.config import settings
from cineroom.database import get_db, ping

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns:
        Simple status message indicating the API is running
    """
    return {"status": "ok"}


@router.get("/health/db", tags=["health"])
async def database_health_check(db: AsyncSession = Depends(get_db)) -> dict[str, str]:
    """Readiness check: the API can reach its database."""
    if not await ping(db):
        raise HTTPException(status_code=503, detail="Database unavailable")
    return {"status": "ok", "database": "ok", "timezone": settings.timezone}
