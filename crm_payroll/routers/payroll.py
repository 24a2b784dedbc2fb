"""Routes exposing payroll statements and selectable pay periods."""
from __future__ import annotations

from collections.abc import Generator
from datetime import date
from functools import lru_cache

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from sqlalchemy.orm import Session, sessionmaker

from crm_payroll.core.errors import TenantRequiredError
from crm_payroll.core.logger import get_logger
from crm_payroll.db.session import get_sessionmaker
from crm_payroll.schemas.payroll import PayrollPeriodSchema, PayrollResult
from crm_payroll.services import PayrollService, resolve_period

router = APIRouter(prefix="/api/payroll", tags=["payroll"])
LOGGER = get_logger(__name__)


@lru_cache(maxsize=1)
def _session_factory() -> sessionmaker:
    return get_sessionmaker()


def get_db_session() -> Generator[Session, None, None]:
    """Yield a database session for the request lifecycle."""

    session = _session_factory()()
    try:
        yield session
    finally:
        session.close()


def get_payroll_service() -> PayrollService:
    """Return a service instance per request."""

    return PayrollService()


def get_tenant_id(x_tenant_id: str | None = Header(default=None)) -> str:
    """Tenant resolution happens upstream; it arrives here as a header."""

    if not x_tenant_id or not x_tenant_id.strip():
        raise TenantRequiredError("X-Tenant-ID header is required")
    return x_tenant_id.strip()


@router.get("", response_model=PayrollResult)
async def calculate_payroll(
    period_start: date | None = Query(default=None, alias="periodStart"),
    period_end: date | None = Query(default=None, alias="periodEnd"),
    weeks_ago: int | None = Query(default=None, alias="weeksAgo"),
    tenant_id: str = Depends(get_tenant_id),
    session: Session = Depends(get_db_session),
    service: PayrollService = Depends(get_payroll_service),
) -> PayrollResult:
    """Calculate payroll for a period (default: last completed week)."""

    period = resolve_period(period_start, period_end, weeks_ago)

    try:
        return await service.calculate(session, tenant_id, period)
    except Exception as exc:
        LOGGER.exception("Error calculating payroll")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from exc


@router.get("/periods", response_model=list[PayrollPeriodSchema])
async def list_payroll_periods(
    service: PayrollService = Depends(get_payroll_service),
) -> list[PayrollPeriodSchema]:
    """Recent completed pay weeks, most recent first."""

    return [period.to_schema() for period in service.get_period_options()]
