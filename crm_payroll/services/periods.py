"""Payroll period resolution.

Pay periods are Monday to Sunday calendar weeks. "Today" is always taken in
the configured reference zone (US Eastern by default) so every caller sees
the same boundaries regardless of the server's locale.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from crm_payroll.core.config import PayrollSettings, get_settings
from crm_payroll.core.errors import InvalidPeriodError
from crm_payroll.schemas.payroll import PayrollPeriodSchema


@dataclass(frozen=True)
class PayrollPeriod:
    """Inclusive Monday-Sunday pay week and the date it pays out."""

    start_date: date
    end_date: date
    payout_date: date
    label: str

    def contains(self, value: date) -> bool:
        return self.start_date <= value <= self.end_date

    def to_schema(self) -> PayrollPeriodSchema:
        return PayrollPeriodSchema(
            start_date=self.start_date,
            end_date=self.end_date,
            payout_date=self.payout_date,
            label=self.label,
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "payoutDate": self.payout_date.isoformat(),
            "label": self.label,
        }


def _payroll_settings(settings: PayrollSettings | None) -> PayrollSettings:
    return settings if settings is not None else get_settings().payroll


def format_period_label(start: date, end: date) -> str:
    """Return labels such as ``Jan 6 - Jan 12, 2025``."""

    return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"


def today_in_reference_zone(settings: PayrollSettings | None = None) -> date:
    cfg = _payroll_settings(settings)
    return datetime.now(ZoneInfo(cfg.timezone)).date()


def period_from_dates(
    start: date,
    end: date,
    *,
    settings: PayrollSettings | None = None,
) -> PayrollPeriod:
    """Build a period from explicit boundaries; the dates are taken as given."""

    cfg = _payroll_settings(settings)
    return PayrollPeriod(
        start_date=start,
        end_date=end,
        payout_date=end + timedelta(days=cfg.payout_offset_days),
        label=format_period_label(start, end),
    )


def get_payroll_period(
    weeks_ago: int = 1,
    *,
    today: date | None = None,
    settings: PayrollSettings | None = None,
) -> PayrollPeriod:
    """Return the pay week ``weeks_ago`` weeks before the current one.

    ``0`` is the current (incomplete) week, ``1`` the last completed week.
    """
    cfg = _payroll_settings(settings)
    reference = today or today_in_reference_zone(cfg)
    target = reference - timedelta(weeks=weeks_ago)
    monday = target - timedelta(days=target.weekday())
    sunday = monday + timedelta(days=6)
    return period_from_dates(monday, sunday, settings=cfg)


def get_payroll_period_options(
    *,
    today: date | None = None,
    settings: PayrollSettings | None = None,
) -> list[PayrollPeriod]:
    """Completed pay weeks for the period picker, most recent first."""

    cfg = _payroll_settings(settings)
    reference = today or today_in_reference_zone(cfg)
    return [
        get_payroll_period(weeks_ago, today=reference, settings=cfg)
        for weeks_ago in range(1, cfg.lookback_weeks + 1)
    ]


def resolve_period(
    start: date | None = None,
    end: date | None = None,
    weeks_ago: int | None = None,
    *,
    today: date | None = None,
    settings: PayrollSettings | None = None,
) -> PayrollPeriod:
    """Pick the period a request asks for.

    Explicit boundaries win over ``weeks_ago``; with neither, the last
    completed week is used.
    """
    if start is not None or end is not None:
        if start is None or end is None:
            raise InvalidPeriodError("periodStart and periodEnd must be supplied together")
        if start > end:
            raise InvalidPeriodError(
                f"periodStart {start.isoformat()} is after periodEnd {end.isoformat()}"
            )
        return period_from_dates(start, end, settings=settings)
    if weeks_ago is not None and weeks_ago < 0:
        raise InvalidPeriodError("weeksAgo cannot be negative")
    return get_payroll_period(1 if weeks_ago is None else weeks_ago, today=today, settings=settings)
