from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

# 20 integer digits
MAX_DECIMAL = Decimal("1e20")


class TradeAction(str, Enum):
    BUY = "buy"
    SELL = "sell"


class RecordTransactionDto(BaseModel):
    """DTO for recording a buy or sell against a position"""

    # Position identification
    token_address: str = Field(..., min_length=1, max_length=100, description="Token contract address")
    chain: str = Field(..., min_length=1, max_length=32, description="Chain identifier (e.g., ETH, BSC)")
    token_symbol: Optional[str] = Field(None, max_length=32, description="Token symbol")
    token_name: Optional[str] = Field(None, max_length=255, description="Token name")

    # Transaction details, bounded to what a NUMERIC(38,18) column holds
    action: TradeAction = Field(..., description="buy or sell")
    amount: Decimal = Field(
        ..., gt=0, lt=MAX_DECIMAL, max_digits=38, decimal_places=18, allow_inf_nan=False,
        description="Token amount",
    )
    price_per_token: Optional[Decimal] = Field(
        None, gt=0, lt=MAX_DECIMAL, max_digits=38, decimal_places=18, allow_inf_nan=False,
        description="Price per token basis",
    )
    mcap: Optional[Decimal] = Field(
        None, gt=0, lt=MAX_DECIMAL, max_digits=38, decimal_places=18, allow_inf_nan=False,
        description="Market cap basis",
    )
    total_value_usd: Decimal = Field(
        ..., gt=0, lt=MAX_DECIMAL, max_digits=38, decimal_places=18, allow_inf_nan=False,
        description="Total USD value",
    )
    transaction_hash: str = Field(..., min_length=1, max_length=100, description="On-chain transaction hash")
    wallet_address: str = Field(..., min_length=1, max_length=100, description="Originating wallet address")

    @field_validator("token_address")
    @classmethod
    def lowercase_address(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("chain")
    @classmethod
    def uppercase_chain(cls, value: str) -> str:
        return value.strip().upper()

    @model_validator(mode="after")
    def exactly_one_basis(self):
        if (self.price_per_token is None) == (self.mcap is None):
            raise ValueError("Exactly one of price_per_token or mcap is required")
        return self

    @property
    def basis_type(self) -> str:
        return "price" if self.price_per_token is not None else "mcap"

    @property
    def price_basis(self) -> Decimal:
        return self.price_per_token if self.price_per_token is not None else self.mcap

    class Config:
        json_schema_extra = {
            "example": {
                "token_address": "0x6982508145454Ce325dDbE47a25d4ec3d2311933",
                "chain": "ETH",
                "token_symbol": "PEPE",
                "token_name": "Pepe",
                "action": "buy",
                "amount": "1000000",
                "price_per_token": "0.0000012",
                "total_value_usd": "1.2",
                "transaction_hash": "0x9f1c...e2",
                "wallet_address": "0x742d35Cc6634C0532925a3b844Bc454e4438f44e"
            }
        }
