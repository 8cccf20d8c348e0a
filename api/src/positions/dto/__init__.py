from .record_transaction_dto import RecordTransactionDto, TradeAction

__all__ = [
    "RecordTransactionDto",
    "TradeAction",
]
