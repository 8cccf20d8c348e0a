"""
Position ledger accounting

Pure functions over Position / PositionTransaction rows: applying a buy or
sell to a running position and aggregating realized performance. The
service layer owns persistence and locking; nothing here touches a session.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Context, Decimal, localcontext
from typing import Iterable, List, Optional, Tuple

from ..common import InsufficientBalanceError, ValidationError

ZERO = Decimal("0")
BASIS_QUANT = Decimal("1e-18")
RATE_QUANT = Decimal("0.01")
# Room for 20 integer digits plus 18 decimals (market-cap bases)
QUANT_CONTEXT = Context(prec=60)

TIMEFRAME_WINDOWS = {
    "day": timedelta(days=1),
    "week": timedelta(days=7),
    "month": timedelta(days=30),
}


def window_start(timeframe: Optional[str], now: datetime) -> Optional[datetime]:
    """Start of the history window, or None for all-time"""
    window = TIMEFRAME_WINDOWS.get((timeframe or "").lower())
    return now - window if window else None


def apply_buy(position, amount: Decimal, price_basis: Decimal, now: datetime) -> None:
    old_amount = position.amount or ZERO
    old_basis = position.average_basis or ZERO
    new_amount = QUANT_CONTEXT.add(old_amount, amount)

    if old_amount == 0:
        # Opening, or reopening a closed position
        position.opened_at = now
        position.closed_at = None

    if new_amount != 0:
        with localcontext(QUANT_CONTEXT):
            weighted = old_amount * old_basis + amount * price_basis
            position.average_basis = (weighted / new_amount).quantize(BASIS_QUANT)
    position.amount = new_amount


def apply_sell(position, amount: Decimal, now: datetime) -> None:
    old_amount = position.amount or ZERO
    if old_amount < amount:
        raise InsufficientBalanceError(available_amount=old_amount, requested_amount=amount)

    position.amount = QUANT_CONTEXT.subtract(old_amount, amount)
    if position.amount == 0:
        position.closed_at = now


def check_transaction(position, action: str, amount: Decimal, basis_type: str) -> None:
    """Reject a transaction before any state is touched"""
    if position is not None and position.basis_type != basis_type:
        raise ValidationError(
            "Basis type mismatch",
            details={
                "positionBasisType": position.basis_type,
                "requestBasisType": basis_type,
            },
        )
    if action == "sell":
        held = position.amount if position is not None else ZERO
        if held < amount:
            raise InsufficientBalanceError(available_amount=held, requested_amount=amount)


@dataclass
class TradeBreakdown:
    token_address: str
    chain: str
    symbol: Optional[str]
    amount: Decimal
    sell_price: Decimal
    average_basis: Decimal
    profit: Decimal
    total_value_usd: Decimal
    timestamp: datetime


@dataclass
class PerformanceMetrics:
    timeframe: str
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    total_volume: Decimal = ZERO
    realized_pnl: Decimal = ZERO
    win_rate: Decimal = ZERO
    average_trade_size: Decimal = ZERO
    trades: Optional[List[TradeBreakdown]] = field(default=None)


def compute_performance(
    positions: Iterable,
    timeframe: Optional[str],
    now: datetime,
    detailed: bool = False,
) -> PerformanceMetrics:
    """
    Aggregate realized P&L over sell transactions inside the window.

    Each sell contributes (sell basis - position average basis) * amount;
    a zero or negative contribution counts as a losing trade.
    """
    key = (timeframe or "").lower()
    start = window_start(key, now)
    metrics = PerformanceMetrics(timeframe=key if start else "all")
    trades: List[Tuple[Tuple[int, datetime], TradeBreakdown]] = []

    with localcontext(QUANT_CONTEXT):
        for position in positions:
            for tx in position.transactions:
                if tx.action != "sell":
                    continue
                if start is not None and tx.timestamp < start:
                    continue

                profit = (tx.price_basis - position.average_basis) * tx.amount
                metrics.total_trades += 1
                metrics.total_volume += tx.total_value_usd
                metrics.realized_pnl += profit
                if profit > 0:
                    metrics.winning_trades += 1
                else:
                    metrics.losing_trades += 1

                trades.append(((tx.id or 0, tx.timestamp), TradeBreakdown(
                    token_address=position.token_address,
                    chain=position.chain,
                    symbol=position.token_symbol,
                    amount=tx.amount,
                    sell_price=tx.price_basis,
                    average_basis=position.average_basis,
                    profit=profit,
                    total_value_usd=tx.total_value_usd,
                    timestamp=tx.timestamp,
                )))

        if metrics.total_trades:
            metrics.win_rate = (
                Decimal(metrics.winning_trades) * 100 / metrics.total_trades
            ).quantize(RATE_QUANT)
            metrics.average_trade_size = (
                metrics.total_volume / metrics.total_trades
            ).quantize(BASIS_QUANT)

    if detailed:
        # Append order across all positions
        metrics.trades = [trade for _, trade in sorted(trades, key=lambda item: item[0])]

    return metrics
