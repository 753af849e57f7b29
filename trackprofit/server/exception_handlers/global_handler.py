"""
Exception Handlers for the FastAPI Application.

Domain errors are translated into JSON responses with a meaningful status code.
Anything else reaches the global handler, which logs the full context under an
error id that clients can quote when reporting issues.
"""

import traceback
import uuid

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from trackprofit.core.errors import (
    ArchiveError,
    InvalidMonthLabel,
    NarrativeGenerationError,
    RecordNotFound,
)
from trackprofit.core.logging_config import get_logger

logger = get_logger(__name__)


async def invalid_month_label_handler(request: Request, exc: InvalidMonthLabel) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


async def record_not_found_handler(request: Request, exc: RecordNotFound) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def narrative_generation_handler(request: Request, exc: NarrativeGenerationError) -> JSONResponse:
    logger.warning(f"Narrative generation failed in {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "Narrative generation failed", "error": str(exc)},
    )


async def archive_error_handler(request: Request, exc: ArchiveError) -> JSONResponse:
    logger.error(f"Archive failed in {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Archive failed", "error": str(exc), "table": exc.src_table},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    error_id = uuid.uuid4().hex[:12]

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(InvalidMonthLabel, invalid_month_label_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RecordNotFound, record_not_found_handler)  # type: ignore[arg-type]
    app.add_exception_handler(NarrativeGenerationError, narrative_generation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ArchiveError, archive_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
