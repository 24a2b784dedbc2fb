"""Data-access helpers that hand normalised records to the payroll engine."""

from .payroll_repository import PayrollRepository

__all__ = ["PayrollRepository"]
