"""
Risk analytics: composite risk score, overtrading detection, loss streaks
and trade clustering.

Risk score (0-100, higher = riskier) is the sum of:
  drawdown      min(max drawdown % * 1.5, 30)
  loss streak   min(max consecutive losses * 5, 25)
  volatility    min(population std of pnl % * 2.5, 25)
  overtrading   20 if detected
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable, List, Optional, Sequence

import numpy as np

from trade_analytics.analytics.performance import build_equity_curve, compute_drawdown
from trade_analytics.core.types import Outcome, Trade, sort_by_time

logger = logging.getLogger("trade_analytics.risk")

MAX_SCORE = 100
DRAWDOWN_WEIGHT, DRAWDOWN_CAP = 1.5, 30.0
STREAK_WEIGHT, STREAK_CAP = 5.0, 25.0
VOLATILITY_WEIGHT, VOLATILITY_CAP = 2.5, 25.0
OVERTRADING_POINTS = 20.0

DEFAULT_CLUSTER_WINDOW = timedelta(hours=2)
MIN_CLUSTER_SIZE = 3
STREAK_SHARE = 0.7
# Absolute currency units; scale-dependent.
CHOPPY_PNL_THRESHOLD = 10.0

OVERTRADING_LOOKBACK = 30
OVERTRADING_MIN_TRADES = 10
OVERTRADING_MAX_AVG_GAP = timedelta(minutes=30)
OVERTRADING_MAX_AVG_DURATION = timedelta(hours=1)


class ClusterPattern(str, Enum):
    WINNING_STREAK = "winning-streak"
    LOSING_STREAK = "losing-streak"
    CHOPPY = "choppy"
    NORMAL = "normal"


@dataclass
class TradeCluster:
    start_time: datetime
    end_time: datetime
    trade_count: int
    average_pnl: float
    pattern: ClusterPattern


@dataclass
class ConsecutiveLosses:
    current: int
    maximum: int


@dataclass
class RiskMetrics:
    risk_score: int = 0
    consecutive_losses: int = 0
    max_consecutive_losses: int = 0
    overtrading_flag: bool = False
    performance_consistency: float = 0.0
    avg_daily_trades: float = 0.0


def performance_consistency(trades: Sequence[Trade]) -> float:
    """Population standard deviation of per-trade pnl % (lower = more consistent)."""
    if not trades:
        return 0.0
    return float(np.std(np.array([t.pnl_pct for t in trades], dtype=float)))


def max_drawdown_pct(trades: Iterable[Trade], total_equity: float) -> float:
    """Max drawdown % of the equity curve built on total_equity."""
    curve = build_equity_curve(trades, total_equity)
    return compute_drawdown(curve.equity).max_drawdown_pct


def analyze_consecutive_losses(trades: Iterable[Trade]) -> ConsecutiveLosses:
    """
    current: losses counted back from the most recent trade (0 if it was a win).
    maximum: longest run of losses anywhere in the history.
    """
    ordered = sort_by_time(trades)
    current = 0
    maximum = 0
    run = 0
    counting_current = True
    for t in reversed(ordered):
        if t.outcome is Outcome.LOSS:
            run += 1
            maximum = max(maximum, run)
            if counting_current:
                current += 1
        else:
            run = 0
            counting_current = False
    return ConsecutiveLosses(current=current, maximum=maximum)


def detect_overtrading(
    trades: Iterable[Trade],
    lookback: int = OVERTRADING_LOOKBACK,
    min_trades: int = OVERTRADING_MIN_TRADES,
    max_avg_gap: timedelta = OVERTRADING_MAX_AVG_GAP,
    max_avg_duration: timedelta = OVERTRADING_MAX_AVG_DURATION,
) -> bool:
    """
    Overtrading if, over the most recent `lookback` trades (at least min_trades),
    the average gap between entries is under max_avg_gap AND the average hold
    time is under max_avg_duration. lookback must be positive.
    """
    if lookback < 1:
        raise ValueError(f"lookback must be a positive trade count, got {lookback}")
    ordered = sort_by_time(trades)
    if len(ordered) < min_trades:
        return False
    recent = ordered[-lookback:]
    if len(recent) < min_trades or len(recent) < 2:
        return False
    gaps = sum(
        (b.timestamp - a.timestamp for a, b in zip(recent, recent[1:])),
        timedelta(0),
    )
    avg_gap = gaps / (len(recent) - 1)
    avg_duration = sum((t.duration for t in recent), timedelta(0)) / len(recent)
    flagged = avg_gap < max_avg_gap and avg_duration < max_avg_duration
    if flagged:
        logger.debug("Overtrading: avg gap %s, avg duration %s over %d trades", avg_gap, avg_duration, len(recent))
    return flagged


def _classify_cluster(trades: List[Trade], choppy_threshold: float) -> TradeCluster:
    n = len(trades)
    avg_pnl = sum(t.pnl for t in trades) / n
    wins = sum(1 for t in trades if t.outcome is Outcome.WIN)
    losses = n - wins
    if wins >= n * STREAK_SHARE:
        pattern = ClusterPattern.WINNING_STREAK
    elif losses >= n * STREAK_SHARE:
        pattern = ClusterPattern.LOSING_STREAK
    elif abs(avg_pnl) < choppy_threshold:
        pattern = ClusterPattern.CHOPPY
    else:
        pattern = ClusterPattern.NORMAL
    return TradeCluster(
        start_time=trades[0].timestamp,
        end_time=trades[-1].timestamp,
        trade_count=n,
        average_pnl=avg_pnl,
        pattern=pattern,
    )


def analyze_clusters(
    trades: Iterable[Trade],
    window: timedelta = DEFAULT_CLUSTER_WINDOW,
    min_size: int = MIN_CLUSTER_SIZE,
    choppy_threshold: float = CHOPPY_PNL_THRESHOLD,
) -> List[TradeCluster]:
    """
    Group chronologically consecutive trades whose gap to the previous trade is
    at most `window`; groups smaller than min_size are dropped.
    """
    ordered = sort_by_time(trades)
    if not ordered:
        return []
    clusters = []
    group = [ordered[0]]
    for prev, t in zip(ordered, ordered[1:]):
        if t.timestamp - prev.timestamp <= window:
            group.append(t)
            continue
        if len(group) >= min_size:
            clusters.append(_classify_cluster(group, choppy_threshold))
        group = [t]
    if len(group) >= min_size:
        clusters.append(_classify_cluster(group, choppy_threshold))
    return clusters


def risk_score(
    trades: Sequence[Trade],
    total_equity: float,
    max_drawdown_pct: Optional[float] = None,
    max_consecutive_losses: Optional[int] = None,
    overtrading: Optional[bool] = None,
) -> int:
    """
    Composite risk score in [0, 100]. Upstream drawdown %, loss streak and
    overtrading flag may be passed in; otherwise they are derived from trades.
    """
    if not trades:
        return 0
    if max_drawdown_pct is None:
        max_drawdown_pct = compute_drawdown(build_equity_curve(trades, total_equity).equity).max_drawdown_pct
    if max_consecutive_losses is None:
        max_consecutive_losses = analyze_consecutive_losses(trades).maximum
    if overtrading is None:
        overtrading = detect_overtrading(trades)

    drawdown_pts = min(max(max_drawdown_pct, 0.0) * DRAWDOWN_WEIGHT, DRAWDOWN_CAP)
    streak_pts = min(max_consecutive_losses * STREAK_WEIGHT, STREAK_CAP)
    volatility_pts = min(performance_consistency(trades) * VOLATILITY_WEIGHT, VOLATILITY_CAP)
    overtrading_pts = OVERTRADING_POINTS if overtrading else 0.0

    total = drawdown_pts + streak_pts + volatility_pts + overtrading_pts
    if math.isnan(total):
        logger.warning("Risk score undefined (NaN input), reporting maximum")
        return MAX_SCORE
    score = int(math.floor(total + 0.5))
    return max(0, min(score, MAX_SCORE))


def get_risk_metrics(
    trades: Sequence[Trade],
    total_equity: float,
    lookback: int = OVERTRADING_LOOKBACK,
    min_trades: int = OVERTRADING_MIN_TRADES,
    max_drawdown_pct: Optional[float] = None,
) -> RiskMetrics:
    """All risk metrics for one trade snapshot."""
    if not trades:
        return RiskMetrics()
    losses = analyze_consecutive_losses(trades)
    overtrading = detect_overtrading(trades, lookback=lookback, min_trades=min_trades)
    ordered = sort_by_time(trades)
    span_days = (ordered[-1].timestamp - ordered[0].timestamp) / timedelta(days=1)
    return RiskMetrics(
        risk_score=risk_score(
            trades,
            total_equity,
            max_drawdown_pct=max_drawdown_pct,
            max_consecutive_losses=losses.maximum,
            overtrading=overtrading,
        ),
        consecutive_losses=losses.current,
        max_consecutive_losses=losses.maximum,
        overtrading_flag=overtrading,
        performance_consistency=performance_consistency(trades),
        avg_daily_trades=len(trades) / span_days if span_days > 0 else float(len(trades)),
    )
