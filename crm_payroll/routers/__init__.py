"""FastAPI routers for the payroll service."""

from .payroll import router as payroll_router

__all__ = ["payroll_router"]
