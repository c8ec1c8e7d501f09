"""Analytics engines: performance, behavior, time, fees, risk."""

from trade_analytics.analytics.performance import (
    compute_metrics,
    build_equity_curve,
    compute_drawdown,
    compute_sharpe,
    PerformanceMetrics,
)
from trade_analytics.analytics.behavior import (
    win_rate,
    expectancy,
    profit_factor,
    analyze_by_symbol,
    analyze_streaks,
    analyze_directional_bias,
)
from trade_analytics.analytics.time_analysis import (
    analyze_daily,
    analyze_hourly,
    analyze_session,
    duration_metrics,
    analyze_trade_frequency,
)
from trade_analytics.analytics.fees import (
    total_fees,
    total_volume,
    fee_composition,
    fee_to_profit_ratio,
    cumulative_fees,
    estimate_fee_savings,
)
from trade_analytics.analytics.risk import (
    risk_score,
    detect_overtrading,
    analyze_consecutive_losses,
    analyze_clusters,
    get_risk_metrics,
    ClusterPattern,
)
from trade_analytics.analytics.filters import FilterCriteria, filter_trades

__all__ = [
    "compute_metrics",
    "build_equity_curve",
    "compute_drawdown",
    "compute_sharpe",
    "PerformanceMetrics",
    "win_rate",
    "expectancy",
    "profit_factor",
    "analyze_by_symbol",
    "analyze_streaks",
    "analyze_directional_bias",
    "analyze_daily",
    "analyze_hourly",
    "analyze_session",
    "duration_metrics",
    "analyze_trade_frequency",
    "total_fees",
    "total_volume",
    "fee_composition",
    "fee_to_profit_ratio",
    "cumulative_fees",
    "estimate_fee_savings",
    "risk_score",
    "detect_overtrading",
    "analyze_consecutive_losses",
    "analyze_clusters",
    "get_risk_metrics",
    "ClusterPattern",
    "FilterCriteria",
    "filter_trades",
]
