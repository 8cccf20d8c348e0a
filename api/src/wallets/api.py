from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from database import get_db
from ..common.responses import MessageResponse
from .service import wallets_service
from .dto import CreateWalletDto, UpdateWalletDto, WalletSettingsDto
from .responses import WalletResponse, WalletSettingsResponse


router = APIRouter(prefix="/wallet/evm", tags=["wallets"])

logger = logging.getLogger("api")


@router.post("", response_model=WalletResponse, status_code=201)
async def create_wallet(
    dto: CreateWalletDto,
    db: AsyncSession = Depends(get_db),
):
    """Create a new EVM wallet"""
    return await wallets_service.create_wallet(db, dto)


@router.get("/{user_id}", response_model=List[WalletResponse])
async def get_wallets(
    user_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get all wallets for a user"""
    return await wallets_service.get_wallets(db, user_id)


@router.get("/{user_id}/{wallet_name}", response_model=WalletResponse)
async def get_wallet(
    user_id: str,
    wallet_name: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific wallet by name"""
    return await wallets_service.get_wallet(db, user_id, wallet_name)


@router.put("/{user_id}/{wallet_name}", response_model=WalletResponse)
async def update_wallet(
    user_id: str,
    wallet_name: str,
    dto: UpdateWalletDto,
    db: AsyncSession = Depends(get_db),
):
    """Update wallet address or credentials"""
    return await wallets_service.update_wallet(db, user_id, wallet_name, dto)


@router.delete("/{user_id}/{wallet_name}", response_model=MessageResponse)
async def delete_wallet(
    user_id: str,
    wallet_name: str,
    db: AsyncSession = Depends(get_db),
):
    """Delete a wallet"""
    return await wallets_service.delete_wallet(db, user_id, wallet_name)


@router.get("/{user_id}/{wallet_name}/settings", response_model=WalletSettingsResponse)
async def get_wallet_settings(
    user_id: str,
    wallet_name: str,
    db: AsyncSession = Depends(get_db),
):
    """Get wallet trading settings"""
    return await wallets_service.get_wallet_settings(db, user_id, wallet_name)


@router.put("/{user_id}/{wallet_name}/settings", response_model=WalletSettingsResponse)
async def update_wallet_settings(
    user_id: str,
    wallet_name: str,
    dto: WalletSettingsDto,
    db: AsyncSession = Depends(get_db),
):
    """Update wallet slippage and/or gas limit"""
    return await wallets_service.update_wallet_settings(db, user_id, wallet_name, dto)
