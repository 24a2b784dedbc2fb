"""Helper functions for formatting payroll amounts for display."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def _quantize(value: int | float | Decimal, places: str) -> Decimal:
    return Decimal(str(value)).quantize(Decimal(places), rounding=ROUND_HALF_UP)


def format_currency(value: int | float | Decimal, symbol: str = "$") -> str:
    """Format ``value`` as a currency string with two decimals.

    Negative amounts (e.g. corrective adjustments) keep their sign in front
    of the symbol: ``-$12.50``.
    """
    d = _quantize(value, "0.01")
    sign = "-" if d < 0 else ""
    return f"{sign}{symbol}{abs(d):,.2f}"


def format_hours(value: int | float | Decimal) -> str:
    """Format hours with a single decimal place."""
    return f"{_quantize(value, '0.1'):.1f}"


def format_miles(value: int | float | Decimal) -> str:
    return f"{_quantize(value, '0.1'):.1f} mi"
