from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Optional


class WalletSettingsDto(BaseModel):
    """Per-wallet trading settings; ranges are checked by the service"""
    slippage: Optional[Decimal] = Field(None, max_digits=6, decimal_places=2, allow_inf_nan=False, description="Slippage tolerance in percent (0.1-100)")
    gas_limit: Optional[int] = Field(None, description="Gas limit (21000-1000000)")

    class Config:
        json_schema_extra = {
            "example": {
                "slippage": 10,
                "gas_limit": 300000
            }
        }
