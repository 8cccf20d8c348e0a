from pydantic import BaseModel
from datetime import datetime

from ...common import DecimalStr


class TransactionResponse(BaseModel):
    """Response schema for a position transaction"""
    action: str  # buy/sell
    amount: DecimalStr
    price_basis: DecimalStr
    total_value_usd: DecimalStr
    transaction_hash: str
    wallet_address: str
    timestamp: datetime

    class Config:
        from_attributes = True
