from .transaction_response import TransactionResponse
from .position_response import PositionResponse
from .performance_response import PerformanceResponse, TradeBreakdownResponse

__all__ = [
    "TransactionResponse",
    "PositionResponse",
    "PerformanceResponse",
    "TradeBreakdownResponse",
]
