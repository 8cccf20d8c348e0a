import logging
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db

logger = logging.getLogger("api")

router = APIRouter(tags=["health"])


# Health check endpoint
@router.get("/health")
async def health_check():
    """Liveness check"""
    logger.info("Health check endpoint called")
    return "pong"


@router.get("/health/db")
async def database_health_check(db: AsyncSession = Depends(get_db)):
    """Readiness check: the database answers a trivial query"""
    await db.execute(text("SELECT 1"))
    return {"database": "ok"}
