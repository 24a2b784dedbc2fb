"""Service orchestrating a full payroll computation for one period."""
from __future__ import annotations

from sqlalchemy.orm import Session

from crm_payroll.core.config import PayrollSettings, get_settings
from crm_payroll.core.logger import get_logger, log_context, timeit
from crm_payroll.repositories.payroll_repository import PayrollRepository
from crm_payroll.schemas.payroll import PayrollResult, PayrollSnapshot, PayrollTotals

from .aggregator import build_staff_entries
from .distance import DistanceResolver
from .periods import PayrollPeriod, get_payroll_period_options
from .summarizer import summarize

LOGGER = get_logger(__name__)


def restrict_to_period(snapshot: PayrollSnapshot, period: PayrollPeriod) -> PayrollSnapshot:
    """Drop assignments whose event date is missing or outside ``period``."""

    assignments = [
        assignment
        for assignment in snapshot.assignments
        if assignment.event_date is not None
        and assignment.event_date.event_date is not None
        and period.contains(assignment.event_date.event_date)
    ]
    return snapshot.model_copy(update={"assignments": assignments})


def empty_result(period: PayrollPeriod) -> PayrollResult:
    return PayrollResult(period=period.to_schema(), staff=[], totals=PayrollTotals())


async def compute_payroll(
    snapshot: PayrollSnapshot,
    period: PayrollPeriod,
    resolver: DistanceResolver,
    *,
    settings: PayrollSettings | None = None,
) -> PayrollResult:
    """Compute payroll from an in-memory snapshot.

    The snapshot must already be restricted to ``period``. No I/O happens
    here apart from distance lookups made through ``resolver``.
    """
    if not snapshot.assignments:
        return empty_result(period)

    staff = await build_staff_entries(
        snapshot.assignments,
        snapshot.locations,
        snapshot.adjustments,
        resolver,
        settings=settings,
    )
    return PayrollResult(period=period.to_schema(), staff=staff, totals=summarize(staff))


class PayrollService:
    """Load a tenant's payroll inputs and compute the statement for a period."""

    def __init__(
        self,
        settings: PayrollSettings | None = None,
        resolver_factory=None,
    ) -> None:
        self._settings = settings or get_settings().payroll
        self._resolver_factory = resolver_factory or DistanceResolver.from_settings

    def get_period_options(self) -> list[PayrollPeriod]:
        return get_payroll_period_options(settings=self._settings)

    async def calculate(
        self,
        session: Session,
        tenant_id: str,
        period: PayrollPeriod,
    ) -> PayrollResult:
        with log_context.bound(tenant=tenant_id, period=period.start_date.isoformat()):
            LOGGER.debug("Calculating payroll for period %s", period.label)
            snapshot = PayrollRepository(session).load_snapshot(
                tenant_id, period.start_date, period.end_date
            )
            LOGGER.debug("Filtered %d assignments in period", len(snapshot.assignments))

            with timeit(
                "Payroll calculation",
                logger=LOGGER,
                unit="assignments",
                total=len(snapshot.assignments),
            ):
                async with self._resolver_factory(self._settings) as resolver:
                    result = await compute_payroll(
                        snapshot, period, resolver, settings=self._settings
                    )

            LOGGER.info(
                "Payroll calculated: %d staff, total pay %.2f",
                result.totals.staff_count,
                result.totals.total_pay,
            )
            return result
