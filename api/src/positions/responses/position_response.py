from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from ...common import DecimalStr
from .transaction_response import TransactionResponse


class PositionResponse(BaseModel):
    """Response schema for a trade position"""

    # Position identification
    token_address: str
    chain: str
    token_symbol: Optional[str]
    token_name: Optional[str]

    # Running totals
    amount: DecimalStr
    average_basis: DecimalStr
    basis_type: str  # price/mcap

    # Lifecycle
    opened_at: Optional[datetime]
    closed_at: Optional[datetime]

    transactions: List[TransactionResponse]

    class Config:
        from_attributes = True
