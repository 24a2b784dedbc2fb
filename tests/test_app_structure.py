from fastapi import FastAPI
from fastapi.testclient import TestClient

from crm_payroll.core.config import Settings, get_settings
from crm_payroll.main import create_app


def test_create_app_registers_payroll_routes() -> None:
    app = create_app()
    assert isinstance(app, FastAPI)
    paths = set(app.openapi()["paths"])
    assert "/api/payroll" in paths
    assert "/api/payroll/periods" in paths


def test_health_endpoint() -> None:
    response = TestClient(create_app()).get("/health")
    assert response.json() == {"status": "ok"}


def test_settings_use_default_configuration(monkeypatch) -> None:
    for name in (
        "DB_HOST",
        "DB_PORT",
        "PAYROLL_TIMEZONE",
        "PAYROLL_PAYOUT_OFFSET_DAYS",
        "PAYROLL_LOOKBACK_WEEKS",
        "PAYROLL_DEFAULT_MILEAGE_RATE",
        "PAYROLL_SHIFT_BUFFER_MINUTES",
        "GOOGLE_MAPS_API_KEY",
        "SQLALCHEMY_ECHO",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.database.host == "127.0.0.1"
    assert settings.database.port == 3306
    assert settings.payroll.timezone == "America/New_York"
    assert settings.payroll.payout_offset_days == 5
    assert settings.payroll.lookback_weeks == 12
    assert settings.payroll.default_mileage_rate == 0.5
    assert settings.payroll.shift_buffer_minutes == 0
    assert settings.payroll.maps_api_key == ""
    assert settings.sqlalchemy_echo is False


def test_settings_read_payroll_overrides(monkeypatch) -> None:
    monkeypatch.setenv("PAYROLL_LOOKBACK_WEEKS", "6")
    monkeypatch.setenv("PAYROLL_SHIFT_BUFFER_MINUTES", "30")
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "abc")

    settings = Settings.from_env()

    assert settings.payroll.lookback_weeks == 6
    assert settings.payroll.shift_buffer_minutes == 30
    assert settings.payroll.maps_api_key == "abc"


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
