"""Error handlers for the meal pool FastAPI application.

Every error leaves the API in the same shape:
{"error": {"message": ..., "status_code": ..., "details": {...}}}
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from core.exceptions import AppException
from core.logger import get_logger

logger = get_logger("core.error_handlers")


def create_error_response(message: str, status_code: int = 500, details: dict = None) -> JSONResponse:
    """Create a standardized error response.

    Args:
        message: Error message.
        status_code: HTTP status code.
        details: Optional error details dictionary.

    Returns:
        JSONResponse with error details.
    """
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "message": message,
                "status_code": status_code,
                "details": details or {},
            }
        },
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle domain exceptions raised by the pipeline and the routers.

    Client-side failures (4xx) log at warning level; data problems such as
    malformed rules or pool records (5xx) log at error level.
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "%s: %s [%s %s]",
        type(exc).__name__,
        exc.message,
        request.method,
        request.url.path,
    )
    details = dict(exc.details)
    details.setdefault("type", type(exc).__name__)
    return create_error_response(message=exc.message, status_code=exc.status_code, details=details)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report schema-level request problems (bad JSON, out-of-range quantity) as 422."""
    problems = [
        {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"], "type": err["type"]}
        for err in exc.errors()
    ]
    logger.warning("Request rejected on %s %s: %s", request.method, request.url.path, problems)
    return create_error_response(
        message="Request validation failed",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        details={"type": "request_validation", "validation_errors": problems},
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Database failures that escaped the repositories. The driver message stays in the log."""
    logger.error("Database failure on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return create_error_response(
        message="A database error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details={"type": "database_error", "error_class": type(exc).__name__},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled %s on %s %s", type(exc).__name__, request.method, request.url.path)
    return create_error_response(
        message="An internal server error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details={"type": "internal_error"},
    )


def register_exception_handlers(app) -> None:
    """Attach the handlers above to `app`, most specific first."""
    for exc_class, handler in (
        (AppException, app_exception_handler),
        (RequestValidationError, validation_exception_handler),
        (SQLAlchemyError, sqlalchemy_exception_handler),
        (Exception, generic_exception_handler),
    ):
        app.add_exception_handler(exc_class, handler)
    logger.info("Exception handlers registered")
