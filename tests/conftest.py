"""Shared fixtures."""

from datetime import datetime, timedelta

import pytest

from trade_analytics.core.types import OrderType, Side, Trade

BASE_TIME = datetime(2024, 3, 4, 9, 0)  # Monday


def build_trade(
    pnl: float,
    timestamp: datetime = BASE_TIME,
    symbol: str = "SOL/USDC",
    side: Side = Side.LONG,
    fees: float = 0.0,
    pnl_pct: float = 0.0,
    duration: timedelta = timedelta(minutes=30),
    entry_price: float = 100.0,
    quantity: float = 1.0,
    order_type: OrderType = OrderType.MARKET,
    maker_fee=None,
    taker_fee=None,
    trade_id: str = "t",
) -> Trade:
    return Trade(
        id=trade_id,
        timestamp=timestamp,
        symbol=symbol,
        side=side,
        entry_price=entry_price,
        exit_price=entry_price + pnl / quantity,
        quantity=quantity,
        pnl=pnl,
        pnl_pct=pnl_pct,
        fees=fees,
        order_type=order_type,
        duration=duration,
        maker_fee=maker_fee,
        taker_fee=taker_fee,
    )


@pytest.fixture
def make_trade():
    return build_trade


@pytest.fixture
def spaced_trades():
    """Build trades from pnls, spaced `gap` apart starting at BASE_TIME."""
    def _build(pnls, gap=timedelta(hours=1), **kwargs):
        return [
            build_trade(p, timestamp=BASE_TIME + i * gap, trade_id=f"t{i}", **kwargs)
            for i, p in enumerate(pnls)
        ]
    return _build
