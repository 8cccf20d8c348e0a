from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from database import get_db
from .service import positions_service
from .dto import RecordTransactionDto
from .responses import PositionResponse, PerformanceResponse


router = APIRouter(prefix="/trade", tags=["positions"])

logger = logging.getLogger("api")


@router.post("/position/{user_id}", response_model=PositionResponse)
async def record_transaction(
    user_id: str,
    dto: RecordTransactionDto,
    db: AsyncSession = Depends(get_db),
):
    """Record a buy or sell and return the updated position"""
    logger.info(f"✅ Trade validation passed - recording {dto.action.value} for user {user_id}")
    return await positions_service.record_transaction(db, user_id, dto)


@router.get("/positions/{user_id}", response_model=List[PositionResponse])
async def get_positions(
    user_id: str,
    status: str = Query("all", pattern="^(open|closed|all)$", description="open, closed or all"),
    db: AsyncSession = Depends(get_db),
):
    """Get a user's positions filtered by status"""
    return await positions_service.get_positions(db, user_id, status=status)


@router.get("/position/{user_id}/{token_address}/{chain}", response_model=PositionResponse)
async def get_position(
    user_id: str,
    token_address: str,
    chain: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific position"""
    return await positions_service.get_position(db, user_id, token_address, chain)


@router.get("/history/{user_id}", response_model=PerformanceResponse, response_model_exclude_none=True)
async def get_trading_history(
    user_id: str,
    timeframe: Optional[str] = Query("all", description="day, week, month or all"),
    detailed: bool = Query(False, description="Include the per-trade breakdown"),
    db: AsyncSession = Depends(get_db),
):
    """Get realized trading performance"""
    return await positions_service.get_trading_history(
        db, user_id, timeframe=timeframe, detailed=detailed
    )
