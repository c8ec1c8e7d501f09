"""
Core data types for closed trades.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Tuple


class Side(str, Enum):
    LONG = "long"
    SHORT = "short"


class OrderType(str, Enum):
    MARKET = "market"
    LIMIT = "limit"
    STOP = "stop"


class Outcome(str, Enum):
    WIN = "win"
    LOSS = "loss"


@dataclass(frozen=True)
class Trade:
    """Closed trade for analytics. Immutable; engines never modify it."""
    id: str
    timestamp: datetime
    symbol: str
    side: Side
    entry_price: float
    exit_price: float
    quantity: float
    pnl: float
    pnl_pct: float
    fees: float
    order_type: OrderType
    duration: timedelta
    leverage: Optional[float] = None
    maker_fee: Optional[float] = None
    taker_fee: Optional[float] = None
    notes: Optional[str] = None
    tags: Tuple[str, ...] = ()

    @property
    def net_pnl(self) -> float:
        """PnL after fees."""
        return self.pnl - self.fees

    @property
    def outcome(self) -> Outcome:
        """WIN if pnl > 0, otherwise LOSS (a flat trade counts as a loss)."""
        return Outcome.WIN if self.pnl > 0 else Outcome.LOSS

    @property
    def is_win(self) -> bool:
        return self.outcome is Outcome.WIN

    @property
    def volume(self) -> float:
        """Notional value at entry."""
        return self.entry_price * self.quantity


def sort_by_time(trades) -> list:
    """Chronological copy of trades. Order among equal timestamps is not guaranteed."""
    return sorted(trades, key=lambda t: t.timestamp)


def local_naive(ts: datetime) -> datetime:
    """Timezone-aware datetimes become naive local wall-clock time; naive ones pass through."""
    if ts.tzinfo is None:
        return ts
    return ts.astimezone().replace(tzinfo=None)
