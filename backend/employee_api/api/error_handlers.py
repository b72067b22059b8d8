"""Error Handlers — global exception handlers for the employee API.

Invariants:
    - EmployeeApiError → status from HTTP_STATUS_BY_KIND, body {success: false, error}
    - RequestValidationError (bad path param, non-object body) → 400
    - SQLAlchemyError and any other exception → 500 with the exception message
    - This module is the only place exceptions become HTTP responses
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from employee_api.core.errors import EmployeeApiError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_database_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    @app.exception_handler(EmployeeApiError)
    async def employee_api_error_handler(request: Request, exc: EmployeeApiError):
        """Handle all domain/infrastructure errors."""
        log = logger.error if exc.severity is ErrorSeverity.CRITICAL else logger.warning
        log(
            f"{exc.code}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "employee_id": exc.context.employee_id,
                "operation": exc.context.operation,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle malformed path parameters and request bodies."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_database_error_handler(app: FastAPI) -> None:
    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        """Persistence failures nobody translated — passed through as 500."""
        logger.error(
            f"Database error on {request.url.path}: {exc}",
            extra={"error_code": "DATABASE_ERROR", "path": request.url.path},
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": str(exc)},
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all for unexpected exceptions."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": str(exc) or "Unknown error"},
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    details = "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    )
    return {"success": False, "error": f"Invalid request data: {details}"}
