"""
Load configuration from config.yaml and .env. Env variables override the file.
"""

from __future__ import annotations
import os
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from trade_analytics.core.types import local_naive
from trade_analytics.utils.timeframes import window_to_timedelta


def _env_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or Path(__file__).resolve().parents[2]
    return root / ".env"


def load_dotenv_if_exists(project_root: Optional[Path] = None) -> None:
    """Load .env from project root if present."""
    path = _env_path(project_root)
    if path.exists():
        load_dotenv(path)


def load_config(config_path: Optional[Path] = None, project_root: Optional[Path] = None) -> "AnalyticsConfig":
    """Load config.yaml and overlay with env. Returns AnalyticsConfig."""
    load_dotenv_if_exists(project_root)
    root = project_root or Path(__file__).resolve().parents[2]
    path = config_path or root / "config.yaml"
    data: dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    def env(key: str, default: str = "") -> str:
        return os.getenv(key, default).strip()

    def env_int(key: str, default: int = 0) -> int:
        try:
            return int(os.getenv(key, str(default)))
        except ValueError:
            return default

    def env_float(key: str, default: float = 0.0) -> float:
        try:
            return float(os.getenv(key, str(default)))
        except ValueError:
            return default

    def setting(section: dict, key: str, default: Any) -> Any:
        # Blank YAML keys load as None
        value = section.get(key)
        return default if value is None else value

    analytics = data.get("analytics") or {}
    risk = data.get("risk") or {}
    fees = data.get("fees") or {}
    logging_cfg = data.get("logging") or {}

    reference = env("REFERENCE_TIME", str(analytics.get("reference_time") or ""))
    lookback = env_int("OVERTRADING_LOOKBACK", int(setting(risk, "overtrading_lookback", 30)))
    if lookback < 1:
        raise ValueError(f"overtrading_lookback must be a positive trade count, got {lookback}")

    return AnalyticsConfig(
        initial_capital=env_float("INITIAL_CAPITAL", float(setting(analytics, "initial_capital", 10000.0))),
        risk_free_rate=env_float("RISK_FREE_RATE", float(setting(analytics, "risk_free_rate", 0.02))),
        reference_time=local_naive(datetime.fromisoformat(reference)) if reference else None,
        # Risk
        cluster_window=window_to_timedelta(env("CLUSTER_WINDOW", str(setting(risk, "cluster_window", "2h")))),
        min_cluster_size=env_int("MIN_CLUSTER_SIZE", int(setting(risk, "min_cluster_size", 3))),
        choppy_pnl_threshold=env_float("CHOPPY_PNL_THRESHOLD", float(setting(risk, "choppy_pnl_threshold", 10.0))),
        overtrading_lookback=lookback,
        overtrading_min_trades=env_int("OVERTRADING_MIN_TRADES", int(setting(risk, "overtrading_min_trades", 10))),
        # Fees
        maker_fee_ratio=env_float("MAKER_FEE_RATIO", float(setting(fees, "maker_fee_ratio", 0.5))),
        # Logging
        log_level=env("LOG_LEVEL", str(setting(logging_cfg, "level", "INFO"))),
        engine_log_level=env("ENGINE_LOG_LEVEL", str(setting(logging_cfg, "engine_level", ""))) or None,
        log_dir=Path(setting(logging_cfg, "log_dir", "logs")),
        log_file=logging_cfg.get("log_file"),
    )


class AnalyticsConfig:
    """Parameters shared by the analytics engines. Immutable after load."""

    __slots__ = (
        "initial_capital", "risk_free_rate", "reference_time",
        "cluster_window", "min_cluster_size", "choppy_pnl_threshold",
        "overtrading_lookback", "overtrading_min_trades",
        "maker_fee_ratio",
        "log_level", "engine_log_level", "log_dir", "log_file",
    )

    def __init__(
        self,
        initial_capital: float = 10000.0,
        risk_free_rate: float = 0.02,
        reference_time: Optional[datetime] = None,
        cluster_window: timedelta = timedelta(hours=2),
        min_cluster_size: int = 3,
        choppy_pnl_threshold: float = 10.0,
        overtrading_lookback: int = 30,
        overtrading_min_trades: int = 10,
        maker_fee_ratio: float = 0.5,
        log_level: str = "INFO",
        engine_log_level: Optional[str] = None,
        log_dir: Path = None,
        log_file: Optional[str] = None,
    ):
        self.initial_capital = initial_capital
        self.risk_free_rate = risk_free_rate
        # None means "now" at report time
        self.reference_time = reference_time
        self.cluster_window = cluster_window
        self.min_cluster_size = min_cluster_size
        self.choppy_pnl_threshold = choppy_pnl_threshold
        self.overtrading_lookback = overtrading_lookback
        self.overtrading_min_trades = overtrading_min_trades
        self.maker_fee_ratio = maker_fee_ratio
        self.log_level = log_level
        self.engine_log_level = engine_log_level
        self.log_dir = Path(log_dir) if log_dir else Path("logs")
        self.log_file = log_file
