"""Data: trade journal ingestion."""

from trade_analytics.data.loader import load_trades_csv, trades_from_frame, TradeValidationError

__all__ = ["load_trades_csv", "trades_from_frame", "TradeValidationError"]
