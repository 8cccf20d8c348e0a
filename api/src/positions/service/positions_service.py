import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Position, PositionTransaction
from ...common import NotFoundError
from ...common.aggregate import require_user, touch, write_transaction
from ..dto import RecordTransactionDto, TradeAction
from ..ledger import ZERO, apply_buy, apply_sell, check_transaction, compute_performance
from ..responses import PositionResponse, PerformanceResponse

logger = logging.getLogger("api")

POSITION_STATUSES = ("open", "closed", "all")


class PositionsService:
    """Service class for the position ledger"""

    # =================== WRITES ===================

    async def record_transaction(
        self, db: AsyncSession, telegram_id: str, dto: RecordTransactionDto
    ) -> PositionResponse:
        """Append a buy/sell to the user's position and recompute its running totals"""
        async with write_transaction(db, "Failed to update trade position"):
            user = await require_user(db, telegram_id, for_update=True)
            position = await self._find_position(db, user.id, dto.token_address, dto.chain)

            # Everything that can reject the request runs before any mutation
            check_transaction(position, dto.action.value, dto.amount, dto.basis_type)

            now = datetime.utcnow()
            if position is None:
                position = Position(
                    user_id=user.id,
                    token_address=dto.token_address,
                    chain=dto.chain,
                    token_symbol=dto.token_symbol,
                    token_name=dto.token_name,
                    amount=ZERO,
                    average_basis=ZERO,
                    basis_type=dto.basis_type,
                    opened_at=now,
                    transactions=[],
                )
                db.add(position)
                logger.info(f"📈 Opening position {dto.chain}:{dto.token_address} for user {telegram_id}")
            else:
                position.token_symbol = position.token_symbol or dto.token_symbol
                position.token_name = position.token_name or dto.token_name

            position.transactions.append(PositionTransaction(
                action=dto.action.value,
                amount=dto.amount,
                price_basis=dto.price_basis,
                total_value_usd=dto.total_value_usd,
                transaction_hash=dto.transaction_hash,
                wallet_address=dto.wallet_address,
                timestamp=now,
            ))
            await db.flush()

            if dto.action == TradeAction.BUY:
                apply_buy(position, dto.amount, dto.price_basis, now)
            else:
                apply_sell(position, dto.amount, now)
            touch(user)

        logger.info(
            f"✅ {dto.action.value.upper()} {dto.amount} {dto.chain}:{dto.token_address} "
            f"recorded for user {telegram_id} (amount={position.amount}, basis={position.average_basis})"
        )
        return PositionResponse.model_validate(position)

    # =================== READS ===================

    async def get_positions(
        self, db: AsyncSession, telegram_id: str, status: Optional[str] = None
    ) -> List[PositionResponse]:
        """Get a user's positions, optionally only open (amount > 0) or closed (amount == 0)"""
        user = await require_user(db, telegram_id)
        query = select(Position).filter(Position.user_id == user.id).order_by(Position.id)

        if status == "open":
            query = query.filter(Position.amount > 0)
        elif status == "closed":
            query = query.filter(Position.amount == 0)

        result = await db.execute(query)
        positions = result.scalars().all()

        return [PositionResponse.model_validate(position) for position in positions]

    async def get_position(
        self, db: AsyncSession, telegram_id: str, token_address: str, chain: str
    ) -> PositionResponse:
        """Get a single position by token address and chain (case-insensitive)"""
        user = await require_user(db, telegram_id)
        position = await self._find_position(db, user.id, token_address, chain)

        if not position:
            raise NotFoundError(
                "Position not found",
                details={"token_address": token_address, "chain": chain},
            )
        return PositionResponse.model_validate(position)

    async def get_trading_history(
        self,
        db: AsyncSession,
        telegram_id: str,
        timeframe: Optional[str] = None,
        detailed: bool = False,
    ) -> PerformanceResponse:
        """Realized performance over sells in the timeframe"""
        user = await require_user(db, telegram_id)
        result = await db.execute(
            select(Position).filter(Position.user_id == user.id).order_by(Position.id)
        )
        positions = result.scalars().all()

        metrics = compute_performance(positions, timeframe, datetime.utcnow(), detailed=detailed)
        return PerformanceResponse.model_validate(metrics)

    async def _find_position(
        self, db: AsyncSession, user_id: int, token_address: str, chain: str
    ) -> Optional[Position]:
        result = await db.execute(
            select(Position).filter(
                Position.user_id == user_id,
                Position.token_address == token_address.strip().lower(),
                Position.chain == chain.strip().upper(),
            )
        )
        return result.scalars().first()


# Create service instance
positions_service = PositionsService()
