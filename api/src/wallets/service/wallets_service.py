import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User, Wallet
from ...common import NotFoundError, ValidationError
from ...common.aggregate import load_user, require_user, touch, write_transaction
from ...common.responses import MessageResponse
from ..dto import CreateWalletDto, UpdateWalletDto, WalletSettingsDto
from ..responses import WalletResponse, WalletSettingsResponse

logger = logging.getLogger("api")

DEFAULT_SLIPPAGE = Decimal("10")
DEFAULT_GAS_LIMIT = 300000

SLIPPAGE_RANGE = (Decimal("0.1"), Decimal("100"))
GAS_LIMIT_RANGE = (21000, 1000000)


def validate_settings(settings: Optional[WalletSettingsDto]) -> None:
    """Range checks for any provided setting"""
    if settings is None:
        return
    if settings.slippage is not None and not (
        SLIPPAGE_RANGE[0] <= settings.slippage <= SLIPPAGE_RANGE[1]
    ):
        raise ValidationError("Slippage must be between 0.1 and 100 percent")
    if settings.gas_limit is not None and not (
        GAS_LIMIT_RANGE[0] <= settings.gas_limit <= GAS_LIMIT_RANGE[1]
    ):
        raise ValidationError("Gas limit must be between 21000 and 1000000")


def find_wallet(user: User, wallet_name: str) -> Wallet:
    for wallet in user.wallets:
        if wallet.name == wallet_name:
            return wallet
    raise NotFoundError("Wallet not found", details={"wallet_name": wallet_name})


class WalletsService:
    """Service class for EVM wallet storage"""

    async def create_wallet(self, db: AsyncSession, dto: CreateWalletDto) -> WalletResponse:
        """Create a wallet, creating the user on first use"""
        validate_settings(dto.settings)
        settings = dto.settings or WalletSettingsDto()

        async with write_transaction(db, "Failed to create EVM wallet"):
            user = await load_user(db, dto.telegram_id, for_update=True)
            if not user:
                user = User(telegram_id=dto.telegram_id, wallets=[])
                db.add(user)
                logger.info(f"👤 Creating user {dto.telegram_id}")

            if any(wallet.name == dto.name for wallet in user.wallets):
                raise ValidationError("Wallet with this name already exists")

            wallet = Wallet(
                name=dto.name,
                address=dto.address,
                private_key=dto.private_key,
                seed_phrase=dto.seed_phrase,
                slippage=settings.slippage if settings.slippage is not None else DEFAULT_SLIPPAGE,
                gas_limit=settings.gas_limit if settings.gas_limit is not None else DEFAULT_GAS_LIMIT,
            )
            user.wallets.append(wallet)
            touch(user)

        logger.info(f"✅ Wallet '{dto.name}' created for user {dto.telegram_id}")
        return WalletResponse.from_wallet(wallet)

    async def get_wallets(self, db: AsyncSession, telegram_id: str) -> List[WalletResponse]:
        user = await require_user(db, telegram_id)
        return [WalletResponse.from_wallet(wallet) for wallet in user.wallets]

    async def get_wallet(self, db: AsyncSession, telegram_id: str, wallet_name: str) -> WalletResponse:
        user = await require_user(db, telegram_id)
        return WalletResponse.from_wallet(find_wallet(user, wallet_name))

    async def update_wallet(
        self, db: AsyncSession, telegram_id: str, wallet_name: str, dto: UpdateWalletDto
    ) -> WalletResponse:
        """Update only the provided wallet fields"""
        async with write_transaction(db, "Failed to update EVM wallet"):
            user = await require_user(db, telegram_id, for_update=True)
            wallet = find_wallet(user, wallet_name)

            update_data = dto.model_dump(exclude_unset=True, exclude_none=True)
            for field, value in update_data.items():
                setattr(wallet, field, value)
            touch(user)

        logger.info(f"✅ Wallet '{wallet_name}' updated for user {telegram_id}: {sorted(update_data)}")
        return WalletResponse.from_wallet(wallet)

    async def delete_wallet(self, db: AsyncSession, telegram_id: str, wallet_name: str) -> MessageResponse:
        async with write_transaction(db, "Failed to delete EVM wallet"):
            user = await require_user(db, telegram_id, for_update=True)
            wallet = find_wallet(user, wallet_name)
            user.wallets.remove(wallet)
            touch(user)

        logger.info(f"🗑️ Wallet '{wallet_name}' deleted for user {telegram_id}")
        return MessageResponse(message="Wallet deleted successfully")

    async def get_wallet_settings(
        self, db: AsyncSession, telegram_id: str, wallet_name: str
    ) -> WalletSettingsResponse:
        user = await require_user(db, telegram_id)
        return WalletSettingsResponse.model_validate(find_wallet(user, wallet_name))

    async def update_wallet_settings(
        self, db: AsyncSession, telegram_id: str, wallet_name: str, dto: WalletSettingsDto
    ) -> WalletSettingsResponse:
        validate_settings(dto)

        async with write_transaction(db, "Failed to update wallet settings"):
            user = await require_user(db, telegram_id, for_update=True)
            wallet = find_wallet(user, wallet_name)

            if dto.slippage is not None:
                wallet.slippage = dto.slippage
            if dto.gas_limit is not None:
                wallet.gas_limit = dto.gas_limit
            touch(user)

        return WalletSettingsResponse.model_validate(wallet)


# Create service instance
wallets_service = WalletsService()
