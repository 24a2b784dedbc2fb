"""Tests for the shared logging helpers."""
from __future__ import annotations

import logging

import pytest

from crm_payroll.core.logger import (
    get_logger,
    init_logging,
    log_context,
    shutdown_logging,
    timeit,
)


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


def test_context_and_timing_reach_daily_log_file(tmp_path) -> None:
    init_logging(log_dir=tmp_path, console=False, queue=False, level="DEBUG")
    try:
        logger = get_logger("crm_payroll.tests")
        with log_context.bound(tenant="t-1", period="2025-01-06"):
            assert log_context.as_dict() == {"tenant": "t-1", "period": "2025-01-06"}
            with timeit("Payroll calculation", logger=logger, unit="assignments", total=3):
                logger.info("computing")
        assert log_context.as_dict() == {}
    finally:
        shutdown_logging()

    text = "".join(path.read_text(encoding="utf-8") for path in tmp_path.glob("*.log"))
    assert "tenant=t-1 period=2025-01-06 computing" in text
    assert "Payroll calculation completed in" in text
    assert "(3 assignments" in text


def test_bound_skips_none_values() -> None:
    with log_context.bound(tenant="t-1", period=None):
        assert log_context.as_dict() == {"tenant": "t-1"}


def test_timeit_logs_failure_and_reraises() -> None:
    logger = logging.getLogger("crm_payroll.tests.timer")
    handler = _ListHandler()
    logger.addHandler(handler)
    try:
        with pytest.raises(RuntimeError):
            with timeit("Distance prefetch", logger=logger, unit="pairs", total=2):
                raise RuntimeError("boom")
    finally:
        logger.removeHandler(handler)

    assert len(handler.messages) == 1
    assert handler.messages[0].startswith("Distance prefetch failed after")
    assert handler.messages[0].endswith("(2 pairs)")
