from pydantic import BaseModel, Field
from typing import Optional

from .wallet_settings_dto import WalletSettingsDto


class CreateWalletDto(BaseModel):
    """DTO for creating a new EVM wallet"""

    # Owner
    telegram_id: str = Field(..., min_length=1, max_length=64, description="Telegram user id")

    # Wallet details
    name: str = Field(..., min_length=1, max_length=100, description="Wallet name, unique per user")
    address: str = Field(..., min_length=1, max_length=100, description="Wallet address")
    private_key: str = Field(..., min_length=1, description="Wallet private key")
    seed_phrase: str = Field(..., min_length=1, description="Wallet seed phrase")

    settings: Optional[WalletSettingsDto] = Field(None, description="Trading settings, defaults applied when omitted")

    class Config:
        json_schema_extra = {
            "example": {
                "telegram_id": "123456789",
                "name": "main",
                "address": "0x742d35Cc6634C0532925a3b844Bc454e4438f44e",
                "private_key": "0x4c0883a69102937d6231471b5dbb6204fe512961708279f3e2a4a1d5a3c6d1f2",
                "seed_phrase": "test test test test test test test test test test test junk",
                "settings": {"slippage": 10, "gas_limit": 300000}
            }
        }
