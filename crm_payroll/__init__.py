"""Payroll calculation service for the CRM/event-management platform."""

from .core import get_logger, get_settings

__all__ = ["get_logger", "get_settings"]
