"""Fold per-worker payroll entries into period totals."""
from __future__ import annotations

from collections.abc import Sequence

from crm_payroll.schemas.payroll import PayrollTotals, StaffPayrollEntry


def summarize(entries: Sequence[StaffPayrollEntry]) -> PayrollTotals:
    """Sum every worker's figures without rounding.

    ``event_count`` adds up assignment counts, so a worker booked twice on
    the same event counts twice.
    """
    return PayrollTotals(
        staff_count=len(entries),
        event_count=sum(entry.event_count for entry in entries),
        total_hours=sum(entry.total_hours for entry in entries),
        total_miles=sum(entry.total_miles for entry in entries),
        total_hourly_pay=sum(entry.hourly_pay for entry in entries),
        total_mileage_pay=sum(entry.mileage_pay for entry in entries),
        total_flat_rate_pay=sum(entry.flat_rate_pay for entry in entries),
        total_reimbursements=sum(entry.reimbursements for entry in entries),
        total_pay=sum(entry.total_pay for entry in entries),
    )
