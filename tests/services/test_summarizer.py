"""Tests for period totals."""
from __future__ import annotations

import pytest

from crm_payroll.schemas.payroll import StaffPayrollEntry
from crm_payroll.services.summarizer import summarize


def _entry(user_id: str, **values: float) -> StaffPayrollEntry:
    entry = StaffPayrollEntry(user_id=user_id, first_name=user_id, last_name="X", user_type="staff", **values)
    entry.total_pay = entry.hourly_pay + entry.mileage_pay + entry.flat_rate_pay + entry.reimbursements
    return entry


def test_empty_summary_is_all_zero() -> None:
    totals = summarize([])

    assert totals.staff_count == 0
    assert totals.event_count == 0
    assert totals.model_dump(exclude={"staff_count", "event_count"}) == {
        "total_hours": 0.0,
        "total_miles": 0.0,
        "total_hourly_pay": 0.0,
        "total_mileage_pay": 0.0,
        "total_flat_rate_pay": 0.0,
        "total_reimbursements": 0.0,
        "total_pay": 0.0,
    }


def test_summary_sums_each_field() -> None:
    entries = [
        _entry("a", event_count=2, total_hours=8.5, total_miles=20.0, hourly_pay=170.0, mileage_pay=10.0),
        _entry("b", event_count=1, flat_rate_pay=150.0, reimbursements=25.0),
        _entry("c", event_count=3, total_hours=1.25, hourly_pay=25.0, reimbursements=-5.0),
    ]

    totals = summarize(entries)

    assert totals.staff_count == 3
    assert totals.event_count == 6
    assert totals.total_hours == pytest.approx(9.75)
    assert totals.total_miles == pytest.approx(20.0)
    assert totals.total_hourly_pay == pytest.approx(195.0)
    assert totals.total_mileage_pay == pytest.approx(10.0)
    assert totals.total_flat_rate_pay == pytest.approx(150.0)
    assert totals.total_reimbursements == pytest.approx(20.0)
    assert totals.total_pay == pytest.approx(sum(entry.total_pay for entry in entries))
    assert totals.total_pay == pytest.approx(375.0)


def test_event_count_adds_assignment_counts() -> None:
    # Two assignments on the same event still count as two.
    totals = summarize([_entry("a", event_count=2)])

    assert totals.event_count == 2


def test_summary_does_not_round() -> None:
    totals = summarize([_entry("a", total_hours=1 / 3), _entry("b", total_hours=1 / 3)])

    assert totals.total_hours == pytest.approx(2 / 3)
    assert totals.total_hours != round(totals.total_hours, 2)
