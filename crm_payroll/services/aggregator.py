"""Turn period-filtered assignments into one payroll entry per worker."""
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from crm_payroll.core.config import PayrollSettings, get_settings
from crm_payroll.core.logger import get_logger
from crm_payroll.schemas.payroll import (
    AdjustmentRecord,
    AssignmentRecord,
    EventPayrollDetail,
    LocationRecord,
    StaffPayrollEntry,
    UserRecord,
)

from .distance import Coordinate, CoordinatePair, DistanceResolver, round_trip
from .hours import calculate_hours
from .pay_policy import get_effective_pay_type, resolve_flat_rate

LOGGER = get_logger(__name__)

UNKNOWN_EVENT = "Unknown Event"
UNKNOWN_LOCATION = "Unknown Location"


def group_by_user(assignments: Iterable[AssignmentRecord]) -> dict[str, list[AssignmentRecord]]:
    """Group assignments by worker, dropping rows whose user did not join."""

    grouped: dict[str, list[AssignmentRecord]] = {}
    for assignment in assignments:
        if assignment.user is None:
            LOGGER.warning(
                "Dropping assignment %s: user %s not found",
                assignment.id,
                assignment.user_id,
            )
            continue
        grouped.setdefault(assignment.user_id, []).append(assignment)
    return grouped


def build_adjustment_map(adjustments: Iterable[AdjustmentRecord]) -> dict[str, float]:
    # One amount per user; a later row for the same user replaces an earlier one.
    return {adjustment.user_id: adjustment.amount or 0.0 for adjustment in adjustments}


def staff_sort_key(entry: StaffPayrollEntry) -> tuple[str, str, str]:
    return (entry.last_name.lower(), entry.first_name.lower(), entry.user_id)


def _location_for(
    assignment: AssignmentRecord,
    locations: Mapping[str, LocationRecord],
) -> LocationRecord | None:
    if not assignment.event_date_id:
        return None
    return locations.get(assignment.event_date_id)


def _mileage_leg(user: UserRecord, location: LocationRecord | None) -> CoordinatePair | None:
    """Home-to-venue coordinates when mileage applies and both ends are known."""

    if not user.mileage_enabled or location is None:
        return None
    coordinates = (user.home_latitude, user.home_longitude, location.latitude, location.longitude)
    if any(value is None for value in coordinates):
        return None
    home: Coordinate = (user.home_latitude, user.home_longitude)
    venue: Coordinate = (location.latitude, location.longitude)
    return home, venue


def _pay_type_for(user: UserRecord, assignment: AssignmentRecord):
    return get_effective_pay_type(user.pay_type, user.user_type, assignment.pay_type_override)


def collect_mileage_legs(
    grouped: Mapping[str, Sequence[AssignmentRecord]],
    locations: Mapping[str, LocationRecord],
) -> list[CoordinatePair]:
    legs: list[CoordinatePair] = []
    for assignments in grouped.values():
        user = assignments[0].user
        for assignment in assignments:
            if _pay_type_for(user, assignment) != "hourly":
                continue
            leg = _mileage_leg(user, _location_for(assignment, locations))
            if leg is not None:
                legs.append(leg)
    return legs


async def build_staff_entry(
    user_id: str,
    assignments: Sequence[AssignmentRecord],
    locations: Mapping[str, LocationRecord],
    reimbursements: float,
    resolver: DistanceResolver,
    settings: PayrollSettings,
) -> StaffPayrollEntry:
    """Compute pay for every assignment of one worker and fold the totals."""

    user = assignments[0].user
    hourly_rate = user.pay_rate or 0.0
    mileage_rate = (
        user.mileage_rate if user.mileage_rate is not None else settings.default_mileage_rate
    )
    mileage_enabled = bool(user.mileage_enabled)

    total_hours = 0.0
    total_miles = 0.0
    hourly_pay = 0.0
    mileage_pay = 0.0
    flat_rate_pay = 0.0
    details: list[EventPayrollDetail] = []

    for assignment in assignments:
        event_date = assignment.event_date
        location = _location_for(assignment, locations)
        pay_type = _pay_type_for(user, assignment)

        detail = EventPayrollDetail(
            assignment_id=assignment.id,
            event_id=assignment.event_id,
            event_name=(assignment.event.title if assignment.event else None) or UNKNOWN_EVENT,
            event_date=event_date.event_date if event_date else None,
            location_name=(location.name if location else None) or UNKNOWN_LOCATION,
            pay_type=pay_type,
        )

        if pay_type == "hourly":
            arrival_time = assignment.arrival_time or (
                (event_date.setup_time or event_date.start_time) if event_date else None
            )
            end_time = assignment.end_time or (event_date.end_time if event_date else None)
            hours = calculate_hours(
                arrival_time,
                end_time,
                buffer_minutes=settings.shift_buffer_minutes,
            )
            pay = hours * hourly_rate

            detail.arrival_time = arrival_time
            detail.end_time = end_time
            detail.hours_worked = hours
            detail.hourly_pay = pay
            total_hours += hours
            hourly_pay += pay

            leg = _mileage_leg(user, location)
            if leg is not None:
                (home_lat, home_lon), (venue_lat, venue_lon) = leg
                distance = await resolver.get_driving_distance(
                    home_lat, home_lon, venue_lat, venue_lon
                )
                if distance is not None:
                    miles = round_trip(distance)
                    cost = miles * mileage_rate
                    detail.distance_oneway = distance
                    detail.distance_round_trip = miles
                    detail.mileage_pay = cost
                    total_miles += miles
                    mileage_pay += cost
        else:
            amount = resolve_flat_rate(assignment.flat_rate_amount, user.default_flat_rate)
            detail.flat_rate_amount = amount
            flat_rate_pay += amount

        details.append(detail)

    return StaffPayrollEntry(
        user_id=user_id,
        first_name=user.first_name,
        last_name=user.last_name,
        user_type=user.user_type or "staff",
        event_count=len(assignments),
        total_hours=total_hours,
        total_miles=total_miles,
        total_flat_rate_amount=flat_rate_pay,
        hourly_rate=hourly_rate,
        mileage_rate=mileage_rate,
        mileage_enabled=mileage_enabled,
        hourly_pay=hourly_pay,
        mileage_pay=mileage_pay,
        flat_rate_pay=flat_rate_pay,
        reimbursements=reimbursements,
        total_pay=hourly_pay + mileage_pay + flat_rate_pay + reimbursements,
        events=details,
    )


async def build_staff_entries(
    assignments: Iterable[AssignmentRecord],
    locations: Mapping[str, LocationRecord],
    adjustments: Iterable[AdjustmentRecord],
    resolver: DistanceResolver,
    *,
    settings: PayrollSettings | None = None,
) -> list[StaffPayrollEntry]:
    """Build sorted per-worker entries for assignments already in the period.

    Distinct mileage legs are resolved concurrently up front; the per-worker
    fold then reads distances from the resolver's cache.
    """
    cfg = settings or get_settings().payroll
    grouped = group_by_user(assignments)
    adjustment_map = build_adjustment_map(adjustments)

    await resolver.resolve_many(collect_mileage_legs(grouped, locations))

    entries = [
        await build_staff_entry(
            user_id,
            user_assignments,
            locations,
            adjustment_map.get(user_id, 0.0),
            resolver,
            cfg,
        )
        for user_id, user_assignments in grouped.items()
    ]
    entries.sort(key=staff_sort_key)
    return entries
