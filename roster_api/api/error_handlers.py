"""Error Handlers — global exception handlers for the Roster API.

Invariants:
    - RosterError → exc.to_response() with exc.http_status
      (400 {"error"} for domain rules, 500 {"error", "detail"} for store failures)
    - RequestValidationError → 500 {"error": "Server xatosi", "detail": "<field>: <message>; ..."},
      the same shape as a store rejecting a malformed row (400 is reserved for domain rules)
    - Exception (catch-all) → 500 {"error": "Server xatosi", "detail": str(exc)}

Design Decisions:
    - Three-layer handler: domain (RosterError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py (ADR: ExMA import fan-out < 10)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from roster_api.core.errors import (
    SERVER_ERROR_MESSAGE, RosterError, internal_error_response,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_roster_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_roster_error_handler(app: FastAPI) -> None:
    """Register domain/store error handler."""

    @app.exception_handler(RosterError)
    async def roster_error_handler(request: Request, exc: RosterError):
        """Handle all Roster API domain/store errors."""
        level = logging.WARNING if exc.http_status < 500 else logging.ERROR
        logger.log(
            level,
            f"{request.method} {request.url.path} {exc.code}: "
            f"{getattr(exc, 'detail', exc.message)}",
            extra={
                **exc.log_extra(),
                "path": request.url.path,
                "method": request.method,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors as a rejected write."""
        logger.error(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — reports the raw error as detail."""
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=internal_error_response(exc),
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Flatten field errors into one detail string."""
    detail = "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    )
    return {"error": SERVER_ERROR_MESSAGE, "detail": detail}
