"""
Logging setup. Console plus optional file, with a separate level for the engines.
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "trade_analytics"
# Engine modules log per-computation detail at DEBUG
ENGINE_LOGGERS = ("performance", "risk", "time")


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def setup_logging(
    level: str = "INFO",
    log_dir: Optional[Path] = None,
    log_file: Optional[str] = None,
    engine_level: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the package logger: console and optional file.
    Modules log under trade_analytics.<area> and inherit these handlers.
    engine_level (e.g. "DEBUG") overrides the level of the engine loggers only,
    so their detail can be turned on without the loader and report chatter.
    """
    root = logging.getLogger(PACKAGE_LOGGER)
    root.setLevel(_level(level))
    root.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_dir and log_file:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / log_file, encoding="utf-8")
        fh.setFormatter(formatter)
        root.addHandler(fh)

    for area in ENGINE_LOGGERS:
        engine = logging.getLogger(f"{PACKAGE_LOGGER}.{area}")
        engine.setLevel(_level(engine_level) if engine_level else logging.NOTSET)

    return root
