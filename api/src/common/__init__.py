from .exceptions import (
    ApiError, ValidationError, NotFoundError, InsufficientBalanceError, InternalError
)
from .types import DecimalStr, format_decimal

__all__ = [
    "ApiError",
    "ValidationError",
    "NotFoundError",
    "InsufficientBalanceError",
    "InternalError",
    "DecimalStr",
    "format_decimal",
]
