"""Unit tests for core.logger."""

import logging

from trade_analytics.core.logger import ENGINE_LOGGERS, setup_logging


def test_engine_level_overrides_engines_only():
    root = setup_logging("INFO", engine_level="DEBUG")
    assert root.level == logging.INFO
    for area in ENGINE_LOGGERS:
        assert logging.getLogger(f"trade_analytics.{area}").getEffectiveLevel() == logging.DEBUG
    assert logging.getLogger("trade_analytics.data").getEffectiveLevel() == logging.INFO


def test_engines_inherit_without_engine_level():
    setup_logging("INFO", engine_level="DEBUG")
    setup_logging("WARNING")
    assert logging.getLogger("trade_analytics.risk").getEffectiveLevel() == logging.WARNING


def test_file_handler(tmp_path):
    root = setup_logging("INFO", log_dir=tmp_path / "logs", log_file="run.log")
    assert len(root.handlers) == 2
    logging.getLogger("trade_analytics.report").info("hello")
    for h in root.handlers:
        h.flush()
    assert "hello" in (tmp_path / "logs" / "run.log").read_text(encoding="utf-8")
    for h in root.handlers:
        h.close()
    root.handlers.clear()
