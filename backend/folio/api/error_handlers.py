"""Error Handlers — global exception handlers for the Folio API.

Invariants:
    - FolioError → structured JSON with error code, message, severity, context
    - StoreError → additionally recorded as an ERROR audit event; the event ID
      is returned in the error context
    - RequestValidationError → 400 with field-level error details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (FolioError), validation (Pydantic), catch-all (Exception)
    - StoreError handler is the single place store failures are audited
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from folio.core.errors import FolioError, StoreError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_folio_error_handler(app)
    _register_store_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_folio_error_handler(app: FastAPI) -> None:
    """Register Folio domain error handler."""

    @app.exception_handler(FolioError)
    async def folio_error_handler(request: Request, exc: FolioError):
        """Handle all Folio request and infrastructure errors."""
        exc.context.uri = request.url.path
        log = logger.error if exc.http_status >= 500 else logger.info
        log(
            f"FolioError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "parameter": exc.context.parameter,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_store_error_handler(app: FastAPI) -> None:
    """Register store failure handler (audited)."""

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        """Record the failure as an event, then respond 500 with its ID."""
        exc.context.uri = request.url.path
        services = getattr(request.app.state, "services", None)
        if services is not None:
            exc.context.event_id = await services.audit.store_failure(
                exc, request.url.path,
            )
        logger.error(
            f"StoreError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "event_id": exc.context.event_id,
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
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
