"""
SQLAlchemy models for the trade ledger database

A user row is the aggregate root: wallets, positions and their
transactions are child rows mutated under the user's row lock and
version counter.
"""
from datetime import datetime

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .database import Base

# Amounts, prices and USD values
DECIMAL = Numeric(38, 18, asdecimal=True)


class User(Base):
    """Bot user, identified by telegram id"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    telegram_id = Column(String(64), unique=True, nullable=False, index=True)

    # Referral program
    referral_code = Column(String(16), unique=True, nullable=True, index=True)
    referred_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    referral_count = Column(Integer, nullable=False, default=0)
    rewards_earned = Column(DECIMAL, nullable=False, default=0)

    # Optimistic concurrency token, bumped on every aggregate write
    version = Column(Integer, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    wallets = relationship(
        "Wallet", back_populates="user", cascade="all, delete-orphan",
        lazy="selectin", order_by="Wallet.id",
    )

    __mapper_args__ = {"version_id_col": version}


class Wallet(Base):
    """EVM wallet with per-wallet trading settings"""
    __tablename__ = "wallets"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    name = Column(String(100), nullable=False)
    address = Column(String(100), nullable=False)
    private_key = Column(Text, nullable=False)
    seed_phrase = Column(Text, nullable=False)

    # Trading settings
    slippage = Column(Numeric(6, 2, asdecimal=True), nullable=False, default=10)
    gas_limit = Column(Integer, nullable=False, default=300000)

    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="wallets")

    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_wallets_user_name"),
    )


class Position(Base):
    """Running holding of one token on one chain for one user"""
    __tablename__ = "positions"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    token_address = Column(String(100), nullable=False)  # lowercase
    chain = Column(String(32), nullable=False)  # uppercase
    token_symbol = Column(String(32))
    token_name = Column(String(255))

    amount = Column(DECIMAL, nullable=False, default=0)
    average_basis = Column(DECIMAL, nullable=False, default=0)
    basis_type = Column(String(8), nullable=False, default="price")  # price | mcap

    opened_at = Column(DateTime, default=datetime.utcnow)
    closed_at = Column(DateTime, nullable=True)

    transactions = relationship(
        "PositionTransaction", back_populates="position", cascade="all, delete-orphan",
        lazy="selectin", order_by="PositionTransaction.id",
    )

    __table_args__ = (
        UniqueConstraint("user_id", "token_address", "chain", name="uq_positions_user_token_chain"),
        Index("idx_positions_user", "user_id"),
    )


class PositionTransaction(Base):
    """Buy or sell appended to a position; never updated"""
    __tablename__ = "position_transactions"

    id = Column(Integer, primary_key=True)
    position_id = Column(Integer, ForeignKey("positions.id", ondelete="CASCADE"), nullable=False)

    action = Column(String(4), nullable=False)  # buy | sell
    amount = Column(DECIMAL, nullable=False)
    price_basis = Column(DECIMAL, nullable=False)
    total_value_usd = Column(DECIMAL, nullable=False)
    transaction_hash = Column(String(100), nullable=False)
    wallet_address = Column(String(100), nullable=False)

    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow)

    position = relationship("Position", back_populates="transactions")

    __table_args__ = (
        Index("idx_position_transactions_position_ts", "position_id", "timestamp"),
    )
