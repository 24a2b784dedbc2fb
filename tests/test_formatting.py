from __future__ import annotations

import pytest

from crm_payroll.core.formatting import format_currency, format_hours, format_miles


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0, "$0.00"), (1234.5, "$1,234.50"), (80, "$80.00"), (-12.345, "-$12.35"), (0.005, "$0.01")],
)
def test_format_currency(value, expected) -> None:
    assert format_currency(value) == expected


def test_format_hours_and_miles() -> None:
    assert format_hours(4) == "4.0"
    assert format_hours(1 / 3) == "0.3"
    assert format_miles(12.25) == "12.3 mi"
