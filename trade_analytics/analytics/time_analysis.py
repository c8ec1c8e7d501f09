"""
Time-based analytics: daily/hourly/session PnL, weekday breakdown,
trade duration statistics and trading frequency.
Dates and hours are taken from each trade's timestamp as given (no timezone conversion).
"""

from __future__ import annotations
import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, Iterable, Optional, Sequence

from trade_analytics.core.types import Outcome, Trade, sort_by_time

logger = logging.getLogger("trade_analytics.time")

# Sunday first; most/least active day ties resolve to the earlier name in this order.
DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

MORNING_END_HOUR = 12
AFTERNOON_END_HOUR = 18


@dataclass
class SessionPerformance:
    """Summed PnL: morning [00,12), afternoon [12,18), evening [18,24)."""
    morning: float = 0.0
    afternoon: float = 0.0
    evening: float = 0.0


@dataclass
class DurationStats:
    average: timedelta = timedelta(0)
    median: timedelta = timedelta(0)
    shortest: timedelta = timedelta(0)
    longest: timedelta = timedelta(0)
    average_win_duration: timedelta = timedelta(0)
    average_loss_duration: timedelta = timedelta(0)


@dataclass
class TradeFrequency:
    trades_per_day: float = 0.0
    trades_per_week: float = 0.0
    trades_per_month: float = 0.0
    most_active_day: Optional[str] = None
    least_active_day: Optional[str] = None


@dataclass
class TimeBasedPerformance:
    daily: "OrderedDict[str, float]" = field(default_factory=OrderedDict)
    hourly: "OrderedDict[int, float]" = field(default_factory=OrderedDict)
    session: SessionPerformance = field(default_factory=SessionPerformance)


def _day_name(trade: Trade) -> str:
    # datetime.weekday() is Monday=0
    return DAY_NAMES[(trade.timestamp.weekday() + 1) % 7]


def analyze_daily(trades: Iterable[Trade]) -> "OrderedDict[str, float]":
    """ISO date -> summed PnL, in date order."""
    daily: "OrderedDict[str, float]" = OrderedDict()
    for t in sort_by_time(trades):
        key = t.timestamp.date().isoformat()
        daily[key] = daily.get(key, 0.0) + t.pnl
    return daily


def analyze_hourly(trades: Iterable[Trade]) -> "OrderedDict[int, float]":
    """Hour of day (0-23) -> summed PnL. All 24 hours are present."""
    hourly: "OrderedDict[int, float]" = OrderedDict((h, 0.0) for h in range(24))
    for t in trades:
        hourly[t.timestamp.hour] += t.pnl
    return hourly


def analyze_session(trades: Iterable[Trade]) -> SessionPerformance:
    session = SessionPerformance()
    for t in trades:
        hour = t.timestamp.hour
        if hour < MORNING_END_HOUR:
            session.morning += t.pnl
        elif hour < AFTERNOON_END_HOUR:
            session.afternoon += t.pnl
        else:
            session.evening += t.pnl
    return session


def analyze_by_day_of_week(trades: Iterable[Trade]) -> "OrderedDict[str, float]":
    """Weekday name -> summed PnL. All seven days are present, Sunday first."""
    by_day: "OrderedDict[str, float]" = OrderedDict((d, 0.0) for d in DAY_NAMES)
    for t in trades:
        by_day[_day_name(t)] += t.pnl
    return by_day


def time_based_performance(trades: Sequence[Trade]) -> TimeBasedPerformance:
    return TimeBasedPerformance(
        daily=analyze_daily(trades),
        hourly=analyze_hourly(trades),
        session=analyze_session(trades),
    )


def _mean(values: Sequence[timedelta]) -> timedelta:
    return sum(values, timedelta(0)) / len(values) if values else timedelta(0)


def duration_metrics(trades: Sequence[Trade]) -> DurationStats:
    """
    Duration statistics. The median of an even-sized sample is the mean of the two
    middle durations.
    """
    if not trades:
        return DurationStats()
    durations = sorted(t.duration for t in trades)
    n = len(durations)
    mid = n // 2
    median = durations[mid] if n % 2 else (durations[mid - 1] + durations[mid]) / 2
    return DurationStats(
        average=_mean(durations),
        median=median,
        shortest=durations[0],
        longest=durations[-1],
        average_win_duration=_mean([t.duration for t in trades if t.outcome is Outcome.WIN]),
        average_loss_duration=_mean([t.duration for t in trades if t.outcome is Outcome.LOSS]),
    )


def analyze_trade_frequency(trades: Sequence[Trade]) -> TradeFrequency:
    """
    Trades per day/week/month over the span between first and last trade.
    A zero span falls back to the raw trade count per day.
    """
    if not trades:
        return TradeFrequency()
    ordered = sort_by_time(trades)
    span_days = (ordered[-1].timestamp - ordered[0].timestamp) / timedelta(days=1)
    per_day = len(trades) / span_days if span_days > 0 else float(len(trades))

    counts: Dict[str, int] = OrderedDict((d, 0) for d in DAY_NAMES)
    for t in trades:
        counts[_day_name(t)] += 1

    most = least = DAY_NAMES[0]
    for day, count in counts.items():
        if count > counts[most]:
            most = day
        if count < counts[least]:
            least = day

    logger.debug("Frequency: %.2f trades/day over %.2f days", per_day, span_days)
    return TradeFrequency(
        trades_per_day=per_day,
        trades_per_week=per_day * 7,
        trades_per_month=per_day * 30,
        most_active_day=most,
        least_active_day=least,
    )
