"""
Error Handlers
==============

Maps pipeline exceptions to actionable HTTP error responses.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.schemas import ErrorResponse
from nl_postgres.exceptions import (
    ExecutionFailed,
    GenerationFailed,
    MissingRelation,
    NLPostgresError,
    NotReadOnly,
)
from observability.logging_config import get_logger

logger = get_logger(__name__)

# (status code, user-facing message); None keeps the exception's own message
ERROR_STATUS: list[tuple[type[NLPostgresError], int, str | None]] = [
    (NotReadOnly, 400, "Only read-only (SELECT) queries are permitted."),
    (
        MissingRelation,
        503,
        "The unicorns dataset has not been loaded yet. Seed the database and try again.",
    ),
    (ExecutionFailed, 502, None),
    (GenerationFailed, 502, None),
]


def error_status(exc: NLPostgresError) -> tuple[int, str]:
    """Resolve the status code and message for a pipeline error."""
    for error_type, status_code, message in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code, message or exc.message
    return 500, exc.message


def register_error_handlers(app: FastAPI) -> None:
    """Install exception handlers on the application."""

    @app.exception_handler(NLPostgresError)
    async def pipeline_error_handler(request: Request, exc: NLPostgresError) -> JSONResponse:
        """Render a pipeline error with its kind preserved."""
        status_code, message = error_status(exc)
        request_id = getattr(request.state, "request_id", None)
        logger.warning(
            "Request failed",
            error=type(exc).__name__,
            status_code=status_code,
            detail=exc.message,
        )
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=type(exc).__name__,
                message=message,
                request_id=request_id,
                details=exc.context or None,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle uncaught exceptions."""
        request_id = getattr(request.state, "request_id", None)
        logger.exception("Unhandled error", error=type(exc).__name__)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="InternalServerError",
                message="An unexpected error occurred",
                request_id=request_id,
            ).model_dump(),
        )
