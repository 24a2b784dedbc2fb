"""FastAPI application instance for the payroll service."""
from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from crm_payroll.core import get_logger
from crm_payroll.core.errors import PayrollError
from crm_payroll.routers import payroll_router

LOGGER = get_logger(__name__)


async def _payroll_error_handler(request: Request, exc: PayrollError) -> JSONResponse:
    LOGGER.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(title="CRM Payroll", version="0.1.0")
    app.add_exception_handler(PayrollError, _payroll_error_handler)
    app.include_router(payroll_router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    LOGGER.info("FastAPI application initialised")
    return app


app = create_app()
