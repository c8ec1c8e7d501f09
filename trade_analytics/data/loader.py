"""
Trade ingestion: CSV / DataFrame rows -> validated Trade records.
The analytics engines do no defensive filtering; malformed rows are rejected here.

Timestamps carrying an offset (ISO 8601 with Z/+hh:mm, or epoch milliseconds) are
converted to naive local time, the same convention as datetime.now().
"""

from __future__ import annotations
import logging
import math
from datetime import timedelta
from pathlib import Path
from typing import List, Optional

import pandas as pd

from trade_analytics.core.types import OrderType, Side, Trade, local_naive

logger = logging.getLogger("trade_analytics.data")

REQUIRED_COLUMNS = (
    "id", "timestamp", "symbol", "side", "entry_price", "exit_price",
    "quantity", "pnl", "pnl_pct", "fees", "order_type", "duration_ms",
)
TAG_SEPARATOR = ";"


class TradeValidationError(ValueError):
    """Raised when a trade row cannot be turned into a valid Trade."""


def _to_float(value, column: str, line: int) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise TradeValidationError(f"row {line}: {column} is not a number: {value!r}") from None
    if not math.isfinite(number):
        raise TradeValidationError(f"row {line}: {column} is missing or not finite")
    return number


def _required_float(row: pd.Series, column: str, line: int) -> float:
    return _to_float(row[column], column, line)


def _optional_float(row: pd.Series, column: str, line: int) -> Optional[float]:
    value = row.get(column)
    if value is None or pd.isna(value):
        return None
    return _to_float(value, column, line)


def _optional_str(value) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def _parse_iso(value):
    if value is None or pd.isna(value):
        return pd.NaT
    try:
        return pd.Timestamp(str(value).strip())
    except ValueError:
        return pd.NaT


def _parse_timestamps(col: pd.Series) -> pd.Series:
    # Numeric columns are Unix epoch milliseconds (UTC), anything else ISO 8601.
    if pd.api.types.is_numeric_dtype(col):
        return pd.to_datetime(col, unit="ms", errors="coerce", utc=True)
    # Per value, so naive and offset-carrying strings can share a column.
    return col.map(_parse_iso)


def _row_to_trade(row: pd.Series, line: int) -> Trade:
    try:
        side = Side(str(row["side"]).strip().lower())
    except ValueError:
        raise TradeValidationError(f"row {line}: unknown side {row['side']!r}") from None
    try:
        order_type = OrderType(str(row["order_type"]).strip().lower())
    except ValueError:
        raise TradeValidationError(f"row {line}: unknown order type {row['order_type']!r}") from None
    if pd.isna(row["timestamp"]):
        raise TradeValidationError(f"row {line}: unparseable timestamp")

    quantity = _required_float(row, "quantity", line)
    if quantity < 0:
        raise TradeValidationError(f"row {line}: negative quantity {quantity}")
    duration_ms = _required_float(row, "duration_ms", line)
    if duration_ms < 0:
        raise TradeValidationError(f"row {line}: negative duration {duration_ms}")

    tags = _optional_str(row.get("tags"))
    return Trade(
        id=str(row["id"]),
        timestamp=local_naive(row["timestamp"].to_pydatetime()),
        symbol=str(row["symbol"]).strip(),
        side=side,
        entry_price=_required_float(row, "entry_price", line),
        exit_price=_required_float(row, "exit_price", line),
        quantity=quantity,
        pnl=_required_float(row, "pnl", line),
        pnl_pct=_required_float(row, "pnl_pct", line),
        fees=_required_float(row, "fees", line),
        order_type=order_type,
        duration=timedelta(milliseconds=duration_ms),
        leverage=_optional_float(row, "leverage", line),
        maker_fee=_optional_float(row, "maker_fee", line),
        taker_fee=_optional_float(row, "taker_fee", line),
        notes=_optional_str(row.get("notes")),
        tags=tuple(t.strip() for t in tags.split(TAG_SEPARATOR) if t.strip()) if tags else (),
    )


def trades_from_frame(df: pd.DataFrame) -> List[Trade]:
    """Convert a DataFrame with one trade per row. Raises TradeValidationError on bad input."""
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise TradeValidationError(f"missing columns: {', '.join(missing)}")
    df = df.copy()
    df["timestamp"] = _parse_timestamps(df["timestamp"])
    trades = [_row_to_trade(row, i + 1) for i, (_, row) in enumerate(df.iterrows())]
    logger.debug("Parsed %d trades", len(trades))
    return trades


def load_trades_csv(path: Path) -> List[Trade]:
    """Load a trade journal CSV (see REQUIRED_COLUMNS; leverage, maker_fee, taker_fee, notes, tags optional)."""
    path = Path(path)
    try:
        df = pd.read_csv(path)
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise TradeValidationError(f"{path}: {e}") from e
    logger.info("Loaded %d rows from %s", len(df), path)
    return trades_from_frame(df)
