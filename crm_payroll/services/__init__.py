"""Service layer entrypoints for payroll logic."""

from .aggregator import build_staff_entries
from .distance import DistanceMatrixClient, DistanceResolver
from .hours import calculate_hours
from .pay_policy import get_effective_pay_type
from .payroll_service import PayrollService, compute_payroll
from .periods import (
    PayrollPeriod,
    get_payroll_period,
    get_payroll_period_options,
    period_from_dates,
    resolve_period,
)
from .summarizer import summarize

__all__ = [
    "DistanceMatrixClient",
    "DistanceResolver",
    "PayrollPeriod",
    "PayrollService",
    "build_staff_entries",
    "calculate_hours",
    "compute_payroll",
    "get_effective_pay_type",
    "get_payroll_period",
    "get_payroll_period_options",
    "period_from_dates",
    "resolve_period",
    "summarize",
]
