from pydantic import BaseModel
from datetime import datetime
from typing import Optional

from ...common import DecimalStr


class WalletSettingsResponse(BaseModel):
    """Response schema for wallet trading settings"""
    slippage: DecimalStr
    gas_limit: int

    class Config:
        from_attributes = True


class WalletResponse(BaseModel):
    """Public wallet information; credentials are never returned"""
    name: str
    address: str
    settings: WalletSettingsResponse
    created_at: Optional[datetime]

    @classmethod
    def from_wallet(cls, wallet) -> "WalletResponse":
        return cls(
            name=wallet.name,
            address=wallet.address,
            settings=WalletSettingsResponse.model_validate(wallet),
            created_at=wallet.created_at,
        )
