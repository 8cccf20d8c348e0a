from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from ...common import DecimalStr


class TradeBreakdownResponse(BaseModel):
    """One realized sell in a detailed history"""
    token_address: str
    chain: str
    symbol: Optional[str]
    amount: DecimalStr
    sell_price: DecimalStr
    average_basis: DecimalStr
    profit: DecimalStr
    total_value_usd: DecimalStr
    timestamp: datetime

    class Config:
        from_attributes = True


class PerformanceResponse(BaseModel):
    """Realized performance over a timeframe"""
    timeframe: str
    total_trades: int
    winning_trades: int
    losing_trades: int
    total_volume: DecimalStr
    realized_pnl: DecimalStr
    win_rate: DecimalStr
    average_trade_size: DecimalStr
    trades: Optional[List[TradeBreakdownResponse]] = None

    class Config:
        from_attributes = True
