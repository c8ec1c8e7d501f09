"""
Full analytics report: runs every engine once on the same trade snapshot.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from trade_analytics.analytics import behavior, fees, performance, risk, time_analysis
from trade_analytics.core.config import AnalyticsConfig
from trade_analytics.core.types import Trade, local_naive

logger = logging.getLogger("trade_analytics.report")


@dataclass
class AnalyticsReport:
    generated_at: datetime
    metrics: performance.PerformanceMetrics
    equity_curve: performance.EquityCurve
    symbols: List[behavior.SymbolPerformance]
    streaks: behavior.StreakStats
    directional_bias: behavior.DirectionalBias
    long_short: behavior.LongShortBreakdown
    time: time_analysis.TimeBasedPerformance
    day_of_week: dict
    durations: time_analysis.DurationStats
    frequency: time_analysis.TradeFrequency
    fee_breakdown: fees.FeeBreakdown
    cumulative_fees: List[fees.CumulativeFeePoint]
    fee_savings: fees.FeeSavingsEstimate
    risk: risk.RiskMetrics
    clusters: List[risk.TradeCluster]


def build_report(trades: Sequence[Trade], config: Optional[AnalyticsConfig] = None) -> AnalyticsReport:
    """Compute every metric structure for trades with the given configuration."""
    config = config or AnalyticsConfig()
    now = local_naive(config.reference_time) if config.reference_time else datetime.now()
    trades = list(trades)
    logger.info("Building report for %d trades (capital %.2f)", len(trades), config.initial_capital)

    metrics = performance.compute_metrics(trades, config.initial_capital, config.risk_free_rate)
    curve = performance.build_equity_curve(trades, config.initial_capital, now=now)
    # Reuse the performance drawdown instead of re-deriving it.
    risk_metrics = risk.get_risk_metrics(
        trades,
        config.initial_capital,
        lookback=config.overtrading_lookback,
        min_trades=config.overtrading_min_trades,
        max_drawdown_pct=metrics.max_drawdown_pct,
    )

    return AnalyticsReport(
        generated_at=now,
        metrics=metrics,
        equity_curve=curve,
        symbols=behavior.analyze_by_symbol(trades),
        streaks=behavior.analyze_streaks(trades),
        directional_bias=behavior.analyze_directional_bias(trades, now),
        long_short=behavior.long_short_breakdown(trades),
        time=time_analysis.time_based_performance(trades),
        day_of_week=time_analysis.analyze_by_day_of_week(trades),
        durations=time_analysis.duration_metrics(trades),
        frequency=time_analysis.analyze_trade_frequency(trades),
        fee_breakdown=fees.fee_composition(trades),
        cumulative_fees=fees.cumulative_fees(trades),
        fee_savings=fees.estimate_fee_savings(trades, config.maker_fee_ratio),
        risk=risk_metrics,
        clusters=risk.analyze_clusters(
            trades,
            window=config.cluster_window,
            min_size=config.min_cluster_size,
            choppy_threshold=config.choppy_pnl_threshold,
        ),
    )


def format_report(report: AnalyticsReport) -> List[str]:
    """Human-readable summary lines."""
    m = report.metrics
    pf = "inf" if math.isinf(m.profit_factor) else f"{m.profit_factor:.2f}"
    lines = [
        "--- Performance ---",
        f"Total trades: {m.total_trades} (wins: {m.winning_trades}, losses: {m.losing_trades})",
        f"Win rate: {m.win_rate:.2f}%",
        f"Total PnL: {m.total_pnl:.2f} | Net profit: {m.net_profit:.2f} | ROI: {m.roi:.2f}%",
        f"Profit factor: {pf} | Expectancy: {m.expectancy:.2f}/trade",
        f"Sharpe ratio: {m.sharpe_ratio:.2f}",
        f"Max drawdown: {m.max_drawdown:.2f} ({m.max_drawdown_pct:.2f}%) | Current: {m.current_drawdown_pct:.2f}%",
        "--- Behavior ---",
        f"Streak: {report.streaks.current_streak} {report.streaks.current_streak_type.value} "
        f"(longest win {report.streaks.longest_win_streak}, longest loss {report.streaks.longest_loss_streak})",
        f"Long bias: {report.directional_bias.overall:.1f}% overall, "
        f"{report.directional_bias.recent_month:.1f}% 30d, {report.directional_bias.recent_week:.1f}% 7d",
    ]
    for s in report.symbols:
        lines.append(f"  {s.symbol}: {s.trades} trades, win {s.win_rate:.1f}%, pnl {s.total_pnl:.2f}")
    lines += [
        "--- Time ---",
        f"Sessions: morning {report.time.session.morning:.2f}, afternoon {report.time.session.afternoon:.2f}, "
        f"evening {report.time.session.evening:.2f}",
        f"Trades/day: {report.frequency.trades_per_day:.2f} | most active: {report.frequency.most_active_day}"
        f" | least active: {report.frequency.least_active_day}",
        f"Duration: avg {report.durations.average} | median {report.durations.median}",
        "--- Fees ---",
        f"Total fees: {m.total_fees:.2f} | fee/profit: {m.fee_to_profit_ratio:.2f}%",
        f"Maker {report.fee_breakdown.maker_pct:.1f}% / taker {report.fee_breakdown.taker_pct:.1f}%"
        f" | est. maker-only savings: {report.fee_savings.potential_savings:.2f}",
        "--- Risk ---",
        f"Risk score: {report.risk.risk_score}/100 | overtrading: {report.risk.overtrading_flag}",
        f"Consecutive losses: {report.risk.consecutive_losses} (max {report.risk.max_consecutive_losses})",
        f"Clusters: {len(report.clusters)}",
    ]
    return lines
