"""Tests for worked-hour calculation."""
from __future__ import annotations

import pytest

from crm_payroll.services.hours import calculate_hours, parse_time_to_hours


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("09:00", 9.0),
        ("09:30:00", 9.5),
        ("17:45", 17.75),
        (" 08:15 ", 8.25),
        ("10:30am", 10.5),
        ("7:05 PM", 7 + 5 / 60),
    ],
)
def test_parse_time_to_hours(value: str, expected: float) -> None:
    assert parse_time_to_hours(value) == pytest.approx(expected)


@pytest.mark.parametrize("value", [None, "", "9", "ab:cd", "12:xx"])
def test_parse_time_to_hours_rejects_malformed_values(value) -> None:
    assert parse_time_to_hours(value) is None


def test_calculate_hours_basic_shift() -> None:
    assert calculate_hours("10:00", "14:00") == pytest.approx(4.0)


def test_calculate_hours_keeps_fractional_hours_unrounded() -> None:
    assert calculate_hours("09:00", "09:20") == pytest.approx(1 / 3)


@pytest.mark.parametrize(("start", "end"), [(None, "17:00"), ("09:00", None), (None, None)])
def test_calculate_hours_missing_time_is_zero(start, end) -> None:
    assert calculate_hours(start, end) == 0.0


def test_calculate_hours_wraps_shift_past_midnight() -> None:
    assert calculate_hours("22:00", "02:00") == pytest.approx(4.0)


def test_calculate_hours_equal_times_is_zero() -> None:
    assert calculate_hours("12:00", "12:00") == 0.0


def test_calculate_hours_adds_buffer() -> None:
    assert calculate_hours("18:00", "22:00", buffer_minutes=30) == pytest.approx(4.5)


def test_calculate_hours_reads_times_with_suffixes() -> None:
    assert calculate_hours("10:30am", "14:30:00") == pytest.approx(4.0)
