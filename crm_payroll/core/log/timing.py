"""Timing helpers to log the duration of payroll operations."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from time import perf_counter
from typing import Iterator, Optional


@dataclass
class _Timer:
    label: str
    logger: logging.Logger
    level: int
    unit: str
    expected_total: Optional[int]
    start: float = field(default_factory=perf_counter)

    @property
    def elapsed(self) -> float:
        return perf_counter() - self.start

    def finish(self, success: bool = True) -> None:
        elapsed = self.elapsed
        total = self.expected_total
        if success:
            message = f"{self.label} completed in {elapsed:.2f}s"
            if total is not None:
                message += f" ({total:,} {self.unit}"
                if elapsed > 0 and total:
                    rate = total / elapsed
                    message += f" @ {rate:,.0f} {self.unit}/s"
                message += ")"
            self.logger.log(self.level, message)
        else:
            fail_message = f"{self.label} failed after {elapsed:.2f}s"
            if total:
                fail_message += f" ({total:,} {self.unit})"
            self.logger.error(fail_message)


@contextmanager
def timeit(
    label: str,
    *,
    logger: Optional[logging.Logger] = None,
    level: int = logging.INFO,
    unit: str = "items",
    total: Optional[int] = None,
) -> Iterator[_Timer]:
    """Time the wrapped block and log its duration and throughput.

    Failures are logged at ERROR and re-raised unchanged.
    """
    log = logger or logging.getLogger("crm_payroll.timer")
    timer = _Timer(label=label, logger=log, level=level, unit=unit, expected_total=total)
    try:
        yield timer
    except BaseException:
        timer.finish(success=False)
        raise
    else:
        timer.finish(success=True)
