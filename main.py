#!/usr/bin/env python3
"""
Trade Analytics CLI
Usage:
  python main.py report --trades trades.csv [--config config.yaml] [--reference-time 2024-06-01T00:00:00]
"""

from __future__ import annotations
import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

# Project root
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from trade_analytics.analytics.report import build_report, format_report
from trade_analytics.core.config import load_config
from trade_analytics.core.logger import setup_logging
from trade_analytics.core.types import local_naive
from trade_analytics.data.loader import TradeValidationError, load_trades_csv


def run_report(trades_path: Path, config_path: Path | None, reference_time: str | None) -> int:
    """Load a trade journal and print the full analytics report."""
    try:
        config = load_config(config_path, ROOT)
    except ValueError as e:
        setup_logging()
        logging.getLogger("trade_analytics").error("Invalid configuration: %s", e)
        return 1
    setup_logging(config.log_level, config.log_dir, config.log_file, config.engine_log_level)
    logger = logging.getLogger("trade_analytics")
    if reference_time:
        try:
            config.reference_time = local_naive(datetime.fromisoformat(reference_time))
        except ValueError:
            logger.error("Invalid --reference-time %r (expected ISO 8601)", reference_time)
            return 1
    if not trades_path.exists():
        logger.error("Trades file not found: %s", trades_path)
        return 1
    try:
        trades = load_trades_csv(trades_path)
    except TradeValidationError as e:
        logger.error("Invalid trade journal: %s", e)
        return 1
    report = build_report(trades, config)
    print()
    for line in format_report(report):
        print(line)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Trade Analytics CLI")
    parser.add_argument("mode", choices=["report"], help="Print analytics report")
    parser.add_argument("--trades", type=Path, required=True, help="Path to trade journal CSV")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument("--reference-time", default=None, help="ISO timestamp used as 'now' for recent-window stats")
    args = parser.parse_args()
    return run_report(args.trades, args.config, args.reference_time)


if __name__ == "__main__":
    exit(main())
