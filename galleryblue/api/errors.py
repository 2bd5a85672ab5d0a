"""Render application errors as Connect protocol error responses."""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from galleryblue.utils.error_handling import (
    AppException,
    InternalError,
    ValidationError,
    format_exception_for_logging,
)

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    """Map AppException subclasses, request validation failures and unexpected
    exceptions to Connect errors."""

    @app.exception_handler(AppException)
    async def handle_app_exception(request: Request, exc: AppException) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.url.path} failed: {exc.message}")
        else:
            logger.debug(f"{request.url.path} rejected ({exc.code}): {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_connect_error())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = ValidationError(_describe_validation_error(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_connect_error())

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.url.path}:\n{format_exception_for_logging(exc)}")
        error = InternalError("internal error")
        return JSONResponse(status_code=error.status_code, content=error.to_connect_error())
