"""Compute a payroll statement from the database or a JSON snapshot."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from datetime import date
from pathlib import Path

from rich.console import Console
from rich.table import Table

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from crm_payroll.core.config import get_settings  # noqa: E402  (import after sys.path manipulation)
from crm_payroll.core.formatting import format_currency, format_hours, format_miles  # noqa: E402
from crm_payroll.core.logger import init_logging, shutdown_logging  # noqa: E402
from crm_payroll.db.session import session_scope  # noqa: E402
from crm_payroll.schemas.payroll import PayrollResult, PayrollSnapshot  # noqa: E402
from crm_payroll.services.distance import DistanceResolver  # noqa: E402
from crm_payroll.services.payroll_service import (  # noqa: E402
    PayrollService,
    compute_payroll,
    restrict_to_period,
)
from crm_payroll.services.periods import PayrollPeriod, resolve_period  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--snapshot", type=Path, help="JSON file with assignments, locations and adjustments")
    source.add_argument("--tenant", type=str, help="Tenant id to load from the configured database")
    parser.add_argument("--start", type=date.fromisoformat, help="Period start (YYYY-MM-DD)")
    parser.add_argument("--end", type=date.fromisoformat, help="Period end (YYYY-MM-DD)")
    parser.add_argument("--weeks-ago", type=int, default=None, help="Pay week offset (1 = last week)")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL for this run")
    return parser.parse_args(argv)


async def _from_snapshot(path: Path, period: PayrollPeriod) -> PayrollResult:
    settings = get_settings().payroll
    snapshot = PayrollSnapshot.model_validate_json(path.read_text(encoding="utf-8"))
    async with DistanceResolver.from_settings(settings) as resolver:
        return await compute_payroll(
            restrict_to_period(snapshot, period), period, resolver, settings=settings
        )


async def _from_database(tenant_id: str, period: PayrollPeriod) -> PayrollResult:
    with session_scope() as session:
        return await PayrollService().calculate(session, tenant_id, period)


def render(result: PayrollResult, console: Console) -> None:
    period = result.period
    table = Table(title=f"Payroll {period.label} (payout {period.payout_date.isoformat()})")
    table.add_column("Staff")
    table.add_column("Type")
    table.add_column("Events", justify="right")
    table.add_column("Hours", justify="right")
    table.add_column("Miles", justify="right")
    table.add_column("Hourly", justify="right")
    table.add_column("Mileage", justify="right")
    table.add_column("Flat rate", justify="right")
    table.add_column("Reimb.", justify="right")
    table.add_column("Total", justify="right", style="bold")

    for entry in result.staff:
        table.add_row(
            f"{entry.last_name}, {entry.first_name}",
            entry.user_type.replace("_", " "),
            str(entry.event_count),
            format_hours(entry.total_hours),
            format_miles(entry.total_miles),
            format_currency(entry.hourly_pay),
            format_currency(entry.mileage_pay),
            format_currency(entry.flat_rate_pay),
            format_currency(entry.reimbursements),
            format_currency(entry.total_pay),
        )

    totals = result.totals
    table.add_section()
    table.add_row(
        f"{totals.staff_count} staff",
        "",
        str(totals.event_count),
        format_hours(totals.total_hours),
        format_miles(totals.total_miles),
        format_currency(totals.total_hourly_pay),
        format_currency(totals.total_mileage_pay),
        format_currency(totals.total_flat_rate_pay),
        format_currency(totals.total_reimbursements),
        format_currency(totals.total_pay),
    )
    console.print(table)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    if args.log_level:
        init_logging(level=args.log_level)
    period = resolve_period(args.start, args.end, args.weeks_ago)

    try:
        if args.snapshot is not None:
            result = asyncio.run(_from_snapshot(args.snapshot, period))
        else:
            result = asyncio.run(_from_database(args.tenant, period))
    finally:
        shutdown_logging()

    if args.json:
        print(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2))
    else:
        render(result, Console())


if __name__ == "__main__":
    main()
