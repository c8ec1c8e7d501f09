"""
Performance metrics: equity curve, drawdown, ROI, Sharpe, aggregate PnL.
All functions take a trade collection and return new value objects; inputs are never mutated.
"""

from __future__ import annotations
import logging
import math
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

import numpy as np

from trade_analytics.core.types import Outcome, Side, Trade, sort_by_time

logger = logging.getLogger("trade_analytics.performance")

TRADING_DAYS_PER_YEAR = 252


@dataclass
class EquityPoint:
    timestamp: datetime
    value: float


@dataclass
class DrawdownPoint:
    timestamp: datetime
    drawdown_pct: float


@dataclass
class EquityCurve:
    """Equity and drawdown series. peak is the final running peak, valley the lowest equity."""
    equity: List[EquityPoint] = field(default_factory=list)
    drawdown: List[DrawdownPoint] = field(default_factory=list)
    peak: float = 0.0
    valley: float = 0.0


@dataclass
class DrawdownStats:
    max_drawdown: float
    max_drawdown_pct: float
    current_drawdown_pct: float


@dataclass
class PerformanceMetrics:
    """Aggregate performance metrics. Percent fields are 0-100."""
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    win_rate: float = 0.0
    total_pnl: float = 0.0
    realized_pnl: float = 0.0
    unrealized_pnl: float = 0.0
    gross_profit: float = 0.0
    gross_loss: float = 0.0
    net_profit: float = 0.0
    roi: float = 0.0
    average_return: float = 0.0
    average_win: float = 0.0
    average_loss: float = 0.0
    largest_win: float = 0.0
    largest_loss: float = 0.0
    profit_factor: float = 0.0
    expectancy: float = 0.0
    sharpe_ratio: float = 0.0
    max_drawdown: float = 0.0
    max_drawdown_pct: float = 0.0
    current_drawdown_pct: float = 0.0
    long_trades: int = 0
    short_trades: int = 0
    long_short_ratio: float = 0.0
    total_volume: float = 0.0
    total_fees: float = 0.0
    fee_to_profit_ratio: float = 0.0
    average_trade_duration: timedelta = timedelta(0)
    shortest_trade: timedelta = timedelta(0)
    longest_trade: timedelta = timedelta(0)


def profit_factor(gross_profit: float, gross_loss: float) -> float:
    """Gross profit / gross loss magnitude. inf if only profits, 0 if no profits."""
    if gross_loss <= 0:
        return math.inf if gross_profit > 0 else 0.0
    return gross_profit / gross_loss


def roi(total_pnl: float, initial_capital: float) -> float:
    """Return on investment in percent. 0 for non-positive capital."""
    if initial_capital <= 0:
        return 0.0
    return total_pnl / initial_capital * 100.0


def total_pnl(trades: Iterable[Trade], unrealized_pnl: float = 0.0) -> float:
    """Realized PnL plus any unrealized PnL supplied by the caller."""
    return sum(t.pnl for t in trades) + unrealized_pnl


def build_equity_curve(
    trades: Iterable[Trade],
    initial_capital: float = 10000.0,
    now: Optional[datetime] = None,
) -> EquityCurve:
    """
    Equity after each trade's net PnL, plus drawdown from the running peak.
    The first point is initial_capital at the first trade's timestamp, or at now
    (wall clock if not given) when there are no trades.
    """
    ordered = sort_by_time(trades)
    start = ordered[0].timestamp if ordered else (now or datetime.now())
    equity = [EquityPoint(start, initial_capital)]
    running = initial_capital
    for t in ordered:
        running += t.net_pnl
        equity.append(EquityPoint(t.timestamp, running))

    drawdown: List[DrawdownPoint] = []
    peak = initial_capital
    for point in equity:
        if point.value > peak:
            peak = point.value
        drawdown.append(DrawdownPoint(point.timestamp, _pct_below(peak, point.value)))

    return EquityCurve(
        equity=equity,
        drawdown=drawdown,
        peak=peak,
        valley=min(p.value for p in equity),
    )


def _pct_below(peak: float, value: float) -> float:
    """Percent decline of value from peak, capped at 100."""
    if peak <= 0:
        return 0.0
    return min((peak - value) / peak * 100.0, 100.0)


def compute_drawdown(equity: List[EquityPoint]) -> DrawdownStats:
    """
    Max absolute and percent drawdown via running-peak scan.
    Current drawdown compares the last point with the curve's global maximum.
    """
    if not equity:
        return DrawdownStats(0.0, 0.0, 0.0)
    peak = equity[0].value
    max_dd = 0.0
    max_dd_pct = 0.0
    for point in equity:
        if point.value > peak:
            peak = point.value
        dd = peak - point.value
        max_dd = max(max_dd, dd)
        max_dd_pct = max(max_dd_pct, _pct_below(peak, point.value))

    current = equity[-1].value
    global_peak = max(p.value for p in equity)
    return DrawdownStats(max_dd, max_dd_pct, _pct_below(global_peak, current))


def daily_returns(trades: Iterable[Trade], initial_capital: float) -> "OrderedDict[date, float]":
    """Net PnL per local calendar date as percent of initial capital, ordered by date."""
    buckets: "OrderedDict[date, float]" = OrderedDict()
    for t in sort_by_time(trades):
        day = t.timestamp.date()
        buckets[day] = buckets.get(day, 0.0) + t.net_pnl
    return OrderedDict((d, pnl / initial_capital * 100.0) for d, pnl in buckets.items())


def compute_sharpe(trades: Iterable[Trade], initial_capital: float, risk_free_rate: float = 0.02) -> float:
    """Annualized Sharpe from daily percent returns (population std, 252 trading days)."""
    if initial_capital <= 0:
        return 0.0
    returns = list(daily_returns(trades, initial_capital).values())
    if not returns:
        return 0.0
    arr = np.array(returns, dtype=float)
    std = arr.std()
    if std <= 1e-12:
        return 0.0
    daily_rf = risk_free_rate / TRADING_DAYS_PER_YEAR
    return float((arr.mean() - daily_rf) / std * np.sqrt(TRADING_DAYS_PER_YEAR))


def compute_metrics(
    trades: Iterable[Trade],
    initial_capital: float = 10000.0,
    risk_free_rate: float = 0.02,
) -> PerformanceMetrics:
    """Compute full metrics from closed trades. Empty input gives a zero-valued bundle."""
    ordered = sort_by_time(trades)
    n = len(ordered)
    if n == 0:
        return PerformanceMetrics()

    wins = 0
    losses = 0
    gross_profit = 0.0
    gross_loss = 0.0
    largest_win = 0.0
    largest_loss = 0.0
    pnl_sum = 0.0
    net_sum = 0.0
    fees = 0.0
    volume = 0.0
    longs = 0
    for t in ordered:
        pnl_sum += t.pnl
        net_sum += t.net_pnl
        fees += t.fees
        volume += t.volume
        if t.side is Side.LONG:
            longs += 1
        if t.outcome is Outcome.WIN:
            if wins == 0 or t.pnl > largest_win:
                largest_win = t.pnl
            wins += 1
            gross_profit += t.pnl
        else:
            if losses == 0 or t.pnl < largest_loss:
                largest_loss = t.pnl
            losses += 1
            gross_loss += -t.pnl
    shorts = n - longs

    win_rate = wins / n * 100.0
    avg_win = gross_profit / wins if wins else 0.0
    avg_loss = gross_loss / losses if losses else 0.0
    expectancy = win_rate / 100.0 * avg_win - (1 - win_rate / 100.0) * avg_loss

    curve = build_equity_curve(ordered, initial_capital)
    dd = compute_drawdown(curve.equity)

    durations = [t.duration for t in ordered]
    logger.debug("Metrics over %d trades: pnl=%.2f wins=%d losses=%d", n, pnl_sum, wins, losses)

    return PerformanceMetrics(
        total_trades=n,
        winning_trades=wins,
        losing_trades=losses,
        win_rate=win_rate,
        total_pnl=pnl_sum,
        realized_pnl=pnl_sum,
        unrealized_pnl=0.0,
        gross_profit=gross_profit,
        gross_loss=gross_loss,
        net_profit=net_sum,
        roi=roi(net_sum, initial_capital),
        average_return=pnl_sum / n,
        average_win=avg_win,
        average_loss=avg_loss,
        largest_win=largest_win,
        largest_loss=largest_loss,
        profit_factor=profit_factor(gross_profit, gross_loss),
        expectancy=expectancy,
        sharpe_ratio=compute_sharpe(ordered, initial_capital, risk_free_rate),
        max_drawdown=dd.max_drawdown,
        max_drawdown_pct=dd.max_drawdown_pct,
        current_drawdown_pct=dd.current_drawdown_pct,
        long_trades=longs,
        short_trades=shorts,
        long_short_ratio=longs / shorts if shorts else float(longs),
        total_volume=volume,
        total_fees=fees,
        fee_to_profit_ratio=fees / gross_profit * 100.0 if gross_profit > 0 else 0.0,
        average_trade_duration=sum(durations, timedelta(0)) / n,
        shortest_trade=min(durations),
        longest_trade=max(durations),
    )
