"""Trade filtering by date range, symbol, outcome, side and PnL bounds."""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import FrozenSet, Iterable, List, Optional

from trade_analytics.core.types import Outcome, Side, Trade


@dataclass(frozen=True)
class FilterCriteria:
    """Unset fields match everything. start/end are inclusive."""
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    symbols: FrozenSet[str] = field(default_factory=frozenset)
    outcome: Optional[Outcome] = None
    side: Optional[Side] = None
    min_pnl: Optional[float] = None
    max_pnl: Optional[float] = None

    def matches(self, trade: Trade) -> bool:
        if self.start is not None and trade.timestamp < self.start:
            return False
        if self.end is not None and trade.timestamp > self.end:
            return False
        if self.symbols and trade.symbol not in self.symbols:
            return False
        if self.outcome is not None and trade.outcome is not self.outcome:
            return False
        if self.side is not None and trade.side is not self.side:
            return False
        if self.min_pnl is not None and trade.pnl < self.min_pnl:
            return False
        if self.max_pnl is not None and trade.pnl > self.max_pnl:
            return False
        return True


def filter_trades(trades: Iterable[Trade], criteria: FilterCriteria) -> List[Trade]:
    """New list of the trades matching every set criterion, input order kept."""
    return [t for t in trades if criteria.matches(t)]
