"""
Trade Ledger API

FastAPI backend for a trading bot: per-user EVM wallets, token positions
with weighted-average basis and realized P&L, and the referral program.
"""

__version__ = "1.0.0"
