# assessment_tax/main.py
"""
FastAPI application for the assessment tax service.

Run with:
    python -m assessment_tax.main
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from assessment_tax.api.routes import admin_deductions, health, tax
from assessment_tax.config.settings import Settings, settings as default_settings
from assessment_tax.core.logging_config import setup_logging
from assessment_tax.domain.models.allowance_config import AllowanceRegistry, CapOutOfRangeError
from assessment_tax.domain.services.allowance_validator import AllowanceValidationError

logger = logging.getLogger("main")


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


async def _request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": f"Invalid JSON: {_format_validation_errors(exc)}"},
    )


async def _bad_request_handler(request: Request, exc: Exception):
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": str(exc)},
    )


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build an app with its own allowance registry."""
    app_settings = app_settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(app_settings.LOG_LEVEL)
        logger.info(
            "Starting %s (%s) with allowance caps %s",
            app_settings.APP_NAME, app_settings.ENVIRONMENT,
            app.state.allowance_registry.to_dict(),
        )
        yield
        logger.info("Shutting down %s", app_settings.APP_NAME)

    app = FastAPI(title=app_settings.APP_NAME, debug=app_settings.DEBUG, lifespan=lifespan)
    app.state.settings = app_settings
    app.state.allowance_registry = AllowanceRegistry.from_settings(app_settings)

    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(AllowanceValidationError, _bad_request_handler)
    app.add_exception_handler(CapOutOfRangeError, _bad_request_handler)

    app.include_router(health.router)
    app.include_router(tax.router)
    app.include_router(admin_deductions.router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)
