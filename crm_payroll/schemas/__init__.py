"""Pydantic schemas for payroll inputs and results."""

from .payroll import (
    AdjustmentRecord,
    AssignmentRecord,
    EventDateRecord,
    EventPayrollDetail,
    EventRecord,
    LocationRecord,
    PayrollPeriodSchema,
    PayrollResult,
    PayrollSnapshot,
    PayrollTotals,
    PayType,
    StaffPayrollEntry,
    UserRecord,
    UserType,
)

__all__ = [
    "AdjustmentRecord",
    "AssignmentRecord",
    "EventDateRecord",
    "EventPayrollDetail",
    "EventRecord",
    "LocationRecord",
    "PayrollPeriodSchema",
    "PayrollResult",
    "PayrollSnapshot",
    "PayrollTotals",
    "PayType",
    "StaffPayrollEntry",
    "UserRecord",
    "UserType",
]
