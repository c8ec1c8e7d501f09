"""Core: config, types, logging."""

from trade_analytics.core.config import load_config, AnalyticsConfig
from trade_analytics.core.types import Trade, Side, OrderType, Outcome, local_naive, sort_by_time
from trade_analytics.core.logger import setup_logging

__all__ = [
    "load_config",
    "AnalyticsConfig",
    "Trade",
    "Side",
    "OrderType",
    "Outcome",
    "sort_by_time",
    "local_naive",
    "setup_logging",
]
