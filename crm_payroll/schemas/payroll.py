"""Schema definitions for the payroll engine.

Input records mirror the rows the data-fetch layer hands over. They are
normalised once, here, so the calculation code only ever sees plain nested
objects. Output models serialise with camelCase keys for the HTTP layer.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

PayType = Literal["hourly", "flat_rate"]
UserType = Literal["staff", "white_label"]

# Hosted data APIs return embedded joins either as an object or as a
# one-element list, and under the table name rather than the relation name.
_JOIN_KEYS = {
    "event": ("event", "events"),
    "event_date": ("event_date", "event_dates"),
    "user": ("user", "users"),
}


def _unwrap_join(value: Any) -> Any:
    if isinstance(value, list):
        return value[0] if value else None
    return value


class _Record(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, from_attributes=True, frozen=True)


class EventRecord(_Record):
    id: str
    title: str | None = None


class EventDateRecord(_Record):
    id: str
    event_date: date | None = None
    setup_time: str | None = None
    start_time: str | None = None
    end_time: str | None = None


class UserRecord(_Record):
    """Payroll-relevant projection of a worker."""

    id: str
    first_name: str = ""
    last_name: str = ""
    user_type: UserType | None = None
    pay_type: PayType | None = None
    pay_rate: float | None = None
    default_flat_rate: float | None = None
    mileage_enabled: bool | None = None
    mileage_rate: float | None = None
    home_latitude: float | None = None
    home_longitude: float | None = None


class AssignmentRecord(_Record):
    """One worker's participation in one event date, with its joins."""

    id: str
    event_id: str
    user_id: str
    event_date_id: str | None = None
    arrival_time: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    pay_type_override: PayType | None = None
    flat_rate_amount: float | None = None
    event: EventRecord | None = None
    event_date: EventDateRecord | None = None
    user: UserRecord | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalise_joins(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        normalised = dict(data)
        for field_name, keys in _JOIN_KEYS.items():
            value = None
            for key in keys:
                if key in normalised:
                    candidate = _unwrap_join(normalised.pop(key))
                    if candidate is not None:
                        value = candidate
            normalised[field_name] = value
        return normalised


class LocationRecord(_Record):
    id: str
    name: str | None = None
    latitude: float | None = None
    longitude: float | None = None


class AdjustmentRecord(_Record):
    user_id: str
    amount: float | None = None
    notes: str | None = None


class PayrollSnapshot(_Record):
    """Read-only inputs for one payroll computation.

    ``locations`` is keyed by event date id; ``adjustments`` are already
    restricted to the exact period being computed.
    """

    assignments: list[AssignmentRecord] = Field(default_factory=list)
    locations: dict[str, LocationRecord] = Field(default_factory=dict)
    adjustments: list[AdjustmentRecord] = Field(default_factory=list)


class _Output(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PayrollPeriodSchema(_Output):
    start_date: date
    end_date: date
    payout_date: date
    label: str


class EventPayrollDetail(_Output):
    """Per-assignment line item kept for drill-down and audit."""

    assignment_id: str
    event_id: str
    event_name: str
    event_date: date | None = None
    location_name: str
    pay_type: PayType
    arrival_time: str | None = None
    end_time: str | None = None
    hours_worked: float | None = None
    hourly_pay: float | None = None
    distance_oneway: float | None = None
    distance_round_trip: float | None = None
    mileage_pay: float | None = None
    flat_rate_amount: float | None = None


class StaffPayrollEntry(_Output):
    user_id: str
    first_name: str
    last_name: str
    user_type: UserType
    event_count: int = 0
    total_hours: float = 0.0
    total_miles: float = 0.0
    total_flat_rate_amount: float = 0.0
    hourly_rate: float = 0.0
    mileage_rate: float = 0.0
    mileage_enabled: bool = False
    hourly_pay: float = 0.0
    mileage_pay: float = 0.0
    flat_rate_pay: float = 0.0
    reimbursements: float = 0.0
    total_pay: float = 0.0
    events: list[EventPayrollDetail] = Field(default_factory=list)


class PayrollTotals(_Output):
    staff_count: int = 0
    event_count: int = 0
    total_hours: float = 0.0
    total_miles: float = 0.0
    total_hourly_pay: float = 0.0
    total_mileage_pay: float = 0.0
    total_flat_rate_pay: float = 0.0
    total_reimbursements: float = 0.0
    total_pay: float = 0.0


class PayrollResult(_Output):
    period: PayrollPeriodSchema
    staff: list[StaffPayrollEntry] = Field(default_factory=list)
    totals: PayrollTotals = Field(default_factory=PayrollTotals)
