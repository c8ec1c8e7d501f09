"""Utils: window parsing."""

from trade_analytics.utils.timeframes import window_to_timedelta

__all__ = ["window_to_timedelta"]
