"""Health check endpoints."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_session

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/health", operation_id="healthCheck")
async def health_check() -> dict[str, str]:
    """Liveness check, no dependencies touched."""
    return {"status": "healthy"}


@router.get("/health/ready", operation_id="readinessCheck")
async def readiness_check(session: Annotated[AsyncSession, Depends(get_session)]) -> dict[str, str]:
    """Readiness check: the database answers a trivial query."""
    try:
        await session.execute(text("SELECT 1"))
    except (sa_exc.OperationalError, sa_exc.InterfaceError, OSError) as e:
        logger.warning("Database not reachable", error=str(e))
        raise HTTPException(status_code=503, detail="Database unavailable")
    return {"status": "ready"}
