from typing import Any, Dict, Optional

from .types import format_decimal


class ApiError(Exception):
    """Base error rendered by the API exception handler as structured JSON"""

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(ApiError):
    """Missing or out-of-range input, detected before any mutation"""
    status_code = 400


class NotFoundError(ApiError):
    """User, wallet, position or referral code does not exist"""
    status_code = 404


class InsufficientBalanceError(ApiError):
    """Sell amount exceeds the held amount"""
    status_code = 400

    def __init__(self, available_amount, requested_amount):
        super().__init__(
            "Insufficient balance",
            details={
                "availableAmount": format_decimal(available_amount),
                "requestedAmount": format_decimal(requested_amount),
            },
        )
        self.available_amount = available_amount
        self.requested_amount = requested_amount


class InternalError(ApiError):
    """Store or transaction failure; the transaction has been rolled back"""
    status_code = 500
