"""Database models read by the payroll engine."""
from __future__ import annotations

from .base import Base, TenantScoped
from .events import Event, EventDate, EventStaffAssignment, Location
from .payroll import PayrollAdjustment
from .users import User

__all__ = [
    "Base",
    "TenantScoped",
    "Event",
    "EventDate",
    "EventStaffAssignment",
    "Location",
    "PayrollAdjustment",
    "User",
]
