"""HTTP tests for the payroll routes."""
from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from crm_payroll.core.config import PayrollSettings
from crm_payroll.main import create_app
from crm_payroll.routers.payroll import get_db_session, get_payroll_service
from crm_payroll.schemas.payroll import PayrollResult, PayrollTotals
from crm_payroll.services.periods import PayrollPeriod, period_from_dates


class _StubPayrollService:
    """Record calls and return a deterministic payload."""

    def __init__(self, *, fail: bool = False) -> None:
        self.calls: list[tuple[str, PayrollPeriod]] = []
        self.fail = fail

    async def calculate(self, session, tenant_id: str, period: PayrollPeriod) -> PayrollResult:
        self.calls.append((tenant_id, period))
        if self.fail:
            raise RuntimeError("database unavailable")
        return PayrollResult(
            period=period.to_schema(),
            staff=[],
            totals=PayrollTotals(staff_count=0, total_pay=0.0),
        )

    def get_period_options(self) -> list[PayrollPeriod]:
        settings = PayrollSettings()
        return [
            period_from_dates(date(2025, 1, 6), date(2025, 1, 12), settings=settings),
            period_from_dates(date(2024, 12, 30), date(2025, 1, 5), settings=settings),
        ]


@pytest.fixture()
def stub_service() -> _StubPayrollService:
    return _StubPayrollService()


@pytest.fixture()
def client(stub_service: _StubPayrollService) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_db_session] = lambda: None
    app.dependency_overrides[get_payroll_service] = lambda: stub_service
    return TestClient(app)


def test_explicit_period_is_passed_to_service(client: TestClient, stub_service) -> None:
    response = client.get(
        "/api/payroll",
        params={"periodStart": "2025-01-06", "periodEnd": "2025-01-12"},
        headers={"X-Tenant-ID": "tenant-a"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["period"]["payoutDate"] == "2025-01-17"
    assert body["staff"] == []
    assert body["totals"]["staffCount"] == 0
    tenant_id, period = stub_service.calls[0]
    assert tenant_id == "tenant-a"
    assert period.start_date == date(2025, 1, 6)


def test_default_period_is_a_monday_to_sunday_week(client: TestClient, stub_service) -> None:
    response = client.get("/api/payroll", headers={"X-Tenant-ID": "tenant-a"})

    assert response.status_code == 200
    _, period = stub_service.calls[0]
    assert period.start_date.weekday() == 0
    assert (period.end_date - period.start_date).days == 6


def test_missing_tenant_is_rejected(client: TestClient, stub_service) -> None:
    response = client.get("/api/payroll")

    assert response.status_code == 400
    assert "X-Tenant-ID" in response.json()["detail"]
    assert stub_service.calls == []


def test_malformed_dates_fail_validation(client: TestClient) -> None:
    response = client.get(
        "/api/payroll",
        params={"periodStart": "not-a-date", "periodEnd": "2025-01-12"},
        headers={"X-Tenant-ID": "tenant-a"},
    )

    assert response.status_code == 422


def test_half_open_period_is_rejected(client: TestClient) -> None:
    response = client.get(
        "/api/payroll",
        params={"periodStart": "2025-01-06"},
        headers={"X-Tenant-ID": "tenant-a"},
    )

    assert response.status_code == 400


def test_unexpected_failure_returns_generic_500() -> None:
    app = create_app()
    app.dependency_overrides[get_db_session] = lambda: None
    app.dependency_overrides[get_payroll_service] = lambda: _StubPayrollService(fail=True)

    response = TestClient(app).get("/api/payroll", headers={"X-Tenant-ID": "tenant-a"})

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


def test_periods_endpoint_lists_options(client: TestClient) -> None:
    response = client.get("/api/payroll/periods")

    assert response.status_code == 200
    assert response.json() == [
        {
            "startDate": "2025-01-06",
            "endDate": "2025-01-12",
            "payoutDate": "2025-01-17",
            "label": "Jan 6 - Jan 12, 2025",
        },
        {
            "startDate": "2024-12-30",
            "endDate": "2025-01-05",
            "payoutDate": "2025-01-10",
            "label": "Dec 30 - Jan 5, 2025",
        },
    ]
