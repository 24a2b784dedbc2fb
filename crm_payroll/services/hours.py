"""Worked-hour calculation from time-of-day strings."""
from __future__ import annotations

import re

HOURS_PER_DAY = 24.0

_LEADING_DIGITS = re.compile(r"\s*(\d+)")


def _leading_int(part: str) -> int | None:
    match = _LEADING_DIGITS.match(part)
    return int(match.group(1)) if match else None


def parse_time_to_hours(value: str | None) -> float | None:
    """Convert ``HH:MM`` or ``HH:MM:SS`` into hours since midnight.

    Each component is read from its leading digits, so ``"10:30am"`` is 10.5;
    meridiem suffixes are not interpreted. Seconds are ignored. Returns
    ``None`` for missing or unparseable input.
    """
    if not value:
        return None
    parts = value.strip().split(":")
    if len(parts) < 2:
        return None
    hours = _leading_int(parts[0])
    minutes = _leading_int(parts[1])
    if hours is None or minutes is None:
        return None
    return hours + minutes / 60


def calculate_hours(
    start: str | None,
    end: str | None,
    *,
    buffer_minutes: int = 0,
) -> float:
    """Hours between ``start`` and ``end`` on the same shift.

    Missing or unparseable times yield ``0.0``. An end earlier than the start
    is a shift that crosses midnight and is wrapped onto the next day. The
    result is not rounded.
    """
    start_hours = parse_time_to_hours(start)
    end_hours = parse_time_to_hours(end)
    if start_hours is None or end_hours is None:
        return 0.0

    duration = end_hours - start_hours
    if duration < 0:
        duration += HOURS_PER_DAY
    return duration + buffer_minutes / 60
