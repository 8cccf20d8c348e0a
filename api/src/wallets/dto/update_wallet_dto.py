from pydantic import BaseModel, Field
from typing import Optional


class UpdateWalletDto(BaseModel):
    """DTO for updating a wallet; only provided fields change"""
    address: Optional[str] = Field(None, min_length=1, max_length=100, description="Wallet address")
    private_key: Optional[str] = Field(None, min_length=1, description="Wallet private key")
    seed_phrase: Optional[str] = Field(None, min_length=1, description="Wallet seed phrase")
