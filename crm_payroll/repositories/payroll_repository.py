"""Read-only queries producing the payroll engine's input snapshot."""
from __future__ import annotations

from collections.abc import Collection
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from crm_payroll.core.logger import get_logger
from crm_payroll.models import (
    EventDate,
    EventStaffAssignment,
    Location,
    PayrollAdjustment,
)
from crm_payroll.schemas.payroll import (
    AdjustmentRecord,
    AssignmentRecord,
    LocationRecord,
    PayrollSnapshot,
)

LOGGER = get_logger(__name__)


class PayrollRepository:
    """Fetch tenant-scoped assignment, location and adjustment rows."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def fetch_assignments(
        self,
        tenant_id: str,
        start: date,
        end: date,
    ) -> list[AssignmentRecord]:
        """Assignments whose event date falls within ``start``..``end`` inclusive."""

        statement = (
            select(EventStaffAssignment)
            .join(EventDate, EventDate.id == EventStaffAssignment.event_date_id)
            .options(
                joinedload(EventStaffAssignment.event),
                joinedload(EventStaffAssignment.event_date),
                joinedload(EventStaffAssignment.user),
            )
            .where(
                EventStaffAssignment.tenant_id == tenant_id,
                EventDate.event_date >= start,
                EventDate.event_date <= end,
            )
            .order_by(EventDate.event_date, EventStaffAssignment.id)
        )
        rows = self._session.execute(statement).scalars().unique().all()
        return [AssignmentRecord.model_validate(row) for row in rows]

    def fetch_locations(
        self,
        tenant_id: str,
        event_date_ids: Collection[str],
    ) -> dict[str, LocationRecord]:
        """Venue per event date id; event dates without a venue are omitted."""

        if not event_date_ids:
            return {}
        statement = (
            select(EventDate.id, Location)
            .join(Location, Location.id == EventDate.location_id)
            .where(
                EventDate.tenant_id == tenant_id,
                EventDate.id.in_(list(event_date_ids)),
            )
        )
        return {
            event_date_id: LocationRecord.model_validate(location)
            for event_date_id, location in self._session.execute(statement).all()
        }

    def fetch_adjustments(
        self,
        tenant_id: str,
        start: date,
        end: date,
        user_ids: Collection[str],
    ) -> list[AdjustmentRecord]:
        """Adjustments recorded for exactly this period, oldest first."""

        if not user_ids:
            return []
        statement = (
            select(PayrollAdjustment)
            .where(
                PayrollAdjustment.tenant_id == tenant_id,
                PayrollAdjustment.period_start == start,
                PayrollAdjustment.period_end == end,
                PayrollAdjustment.user_id.in_(list(user_ids)),
            )
            .order_by(PayrollAdjustment.id)
        )
        return [
            AdjustmentRecord.model_validate(row)
            for row in self._session.execute(statement).scalars().all()
        ]

    def load_snapshot(self, tenant_id: str, start: date, end: date) -> PayrollSnapshot:
        assignments = self.fetch_assignments(tenant_id, start, end)
        if not assignments:
            return PayrollSnapshot()

        event_date_ids = {a.event_date_id for a in assignments if a.event_date_id}
        user_ids = {a.user_id for a in assignments}
        locations = self.fetch_locations(tenant_id, event_date_ids)
        adjustments = self.fetch_adjustments(tenant_id, start, end, user_ids)
        LOGGER.debug(
            "Loaded payroll snapshot",
            extra={
                "assignments": len(assignments),
                "locations": len(locations),
                "adjustments": len(adjustments),
            },
        )
        return PayrollSnapshot(
            assignments=assignments,
            locations=locations,
            adjustments=adjustments,
        )
