"""
Trade behavior statistics: win rate, expectancy, profit factor, streaks,
symbol breakdown and directional bias.
"""

from __future__ import annotations
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from trade_analytics.analytics.performance import profit_factor as _profit_factor
from trade_analytics.core.types import Outcome, Side, Trade, local_naive, sort_by_time

NEUTRAL_BIAS_PCT = 50.0


class StreakType(str, Enum):
    WIN = "win"
    LOSS = "loss"
    NONE = "none"


@dataclass
class SymbolPerformance:
    symbol: str
    trades: int
    win_rate: float
    total_pnl: float
    average_pnl: float
    volume: float


@dataclass
class StreakStats:
    current_streak: int
    current_streak_type: StreakType
    longest_win_streak: int
    longest_loss_streak: int


@dataclass
class DirectionalBias:
    """Percent of long trades; a window without trades reports 50 (neutral)."""
    overall: float
    recent_month: float
    recent_week: float


@dataclass
class LongShortBreakdown:
    long_trades: int
    short_trades: int
    ratio: float
    long_win_rate: float
    short_win_rate: float


def win_rate(trades: Sequence[Trade]) -> float:
    """Percent of trades with outcome WIN (0-100)."""
    if not trades:
        return 0.0
    return sum(1 for t in trades if t.outcome is Outcome.WIN) / len(trades) * 100.0


def average_win(trades: Iterable[Trade]) -> float:
    wins = [t.pnl for t in trades if t.outcome is Outcome.WIN]
    return sum(wins) / len(wins) if wins else 0.0


def average_loss(trades: Iterable[Trade]) -> float:
    """Average loss magnitude (positive number)."""
    losses = [t.pnl for t in trades if t.outcome is Outcome.LOSS]
    return abs(sum(losses)) / len(losses) if losses else 0.0


def expectancy(trades: Sequence[Trade]) -> float:
    """(win% x avg win) - (loss% x avg loss)."""
    if not trades:
        return 0.0
    wr = win_rate(trades) / 100.0
    return wr * average_win(trades) - (1 - wr) * average_loss(trades)


def profit_factor(trades: Iterable[Trade]) -> float:
    """Gross profit / gross loss. inf if only profits, 0 if no profits."""
    gross_profit = 0.0
    gross_loss = 0.0
    for t in trades:
        if t.outcome is Outcome.WIN:
            gross_profit += t.pnl
        else:
            gross_loss += -t.pnl
    return _profit_factor(gross_profit, gross_loss)


def largest_gain(trades: Iterable[Trade]) -> Optional[Trade]:
    best = None
    for t in trades:
        if t.outcome is Outcome.WIN and (best is None or t.pnl > best.pnl):
            best = t
    return best


def largest_loss(trades: Iterable[Trade]) -> Optional[Trade]:
    worst = None
    for t in trades:
        if t.outcome is Outcome.LOSS and (worst is None or t.pnl < worst.pnl):
            worst = t
    return worst


def average_hold_time(trades: Sequence[Trade]) -> timedelta:
    if not trades:
        return timedelta(0)
    return sum((t.duration for t in trades), timedelta(0)) / len(trades)


def analyze_by_symbol(trades: Iterable[Trade]) -> List[SymbolPerformance]:
    """Per-symbol aggregates, sorted by total PnL descending (ties keep first-seen order)."""
    groups: "OrderedDict[str, List[Trade]]" = OrderedDict()
    for t in trades:
        groups.setdefault(t.symbol, []).append(t)

    result = []
    for symbol, symbol_trades in groups.items():
        total = sum(t.pnl for t in symbol_trades)
        result.append(SymbolPerformance(
            symbol=symbol,
            trades=len(symbol_trades),
            win_rate=win_rate(symbol_trades),
            total_pnl=total,
            average_pnl=total / len(symbol_trades),
            volume=sum(t.volume for t in symbol_trades),
        ))
    return sorted(result, key=lambda s: s.total_pnl, reverse=True)


def long_short_breakdown(trades: Sequence[Trade]) -> LongShortBreakdown:
    longs = [t for t in trades if t.side is Side.LONG]
    shorts = [t for t in trades if t.side is Side.SHORT]
    return LongShortBreakdown(
        long_trades=len(longs),
        short_trades=len(shorts),
        ratio=len(longs) / len(shorts) if shorts else float(len(longs)),
        long_win_rate=win_rate(longs),
        short_win_rate=win_rate(shorts),
    )


def analyze_streaks(trades: Iterable[Trade]) -> StreakStats:
    """
    Current streak counts back from the most recent trade until the outcome changes.
    Longest win/loss streaks come from a separate pass over the whole history.
    """
    ordered = sort_by_time(trades)
    if not ordered:
        return StreakStats(0, StreakType.NONE, 0, 0)

    last = ordered[-1].outcome
    current = 0
    for t in reversed(ordered):
        if t.outcome is not last:
            break
        current += 1

    longest = {Outcome.WIN: 0, Outcome.LOSS: 0}
    run = 0
    prev = None
    for t in ordered:
        run = run + 1 if t.outcome is prev else 1
        prev = t.outcome
        longest[prev] = max(longest[prev], run)

    return StreakStats(
        current_streak=current,
        current_streak_type=StreakType.WIN if last is Outcome.WIN else StreakType.LOSS,
        longest_win_streak=longest[Outcome.WIN],
        longest_loss_streak=longest[Outcome.LOSS],
    )


def _long_pct(trades: Sequence[Trade]) -> float:
    if not trades:
        return NEUTRAL_BIAS_PCT
    return sum(1 for t in trades if t.side is Side.LONG) / len(trades) * 100.0


def analyze_directional_bias(trades: Sequence[Trade], now: Optional[datetime] = None) -> DirectionalBias:
    """
    Long share overall, over the last 30 days and the last 7 days before now.
    Pass now explicitly for reproducible results; it defaults to the local wall clock.
    An aware now is converted to naive local time to match loaded timestamps.
    """
    now = local_naive(now) if now else datetime.now()
    month_ago = now - timedelta(days=30)
    week_ago = now - timedelta(days=7)
    return DirectionalBias(
        overall=_long_pct(trades),
        recent_month=_long_pct([t for t in trades if t.timestamp >= month_ago]),
        recent_week=_long_pct([t for t in trades if t.timestamp >= week_ago]),
    )
