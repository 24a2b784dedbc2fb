"""Exceptions raised at the edges of the payroll engine.

The calculation itself degrades gracefully on bad data; these errors are
only raised where a caller supplied something the engine cannot interpret.
"""
from __future__ import annotations


class PayrollError(Exception):
    """Base class for payroll related failures."""


class InvalidPeriodError(PayrollError):
    """Raised when explicit period boundaries are incomplete or inverted."""


class TenantRequiredError(PayrollError):
    """Raised when a request does not identify the tenant it belongs to."""
