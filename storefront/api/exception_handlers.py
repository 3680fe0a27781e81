"""
Exception handlers for the FastAPI application.

Every error leaves the service in the same shape:
{timestamp, status, error, message, path[, details]}.
"""
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException

from storefront.domain.errors import StorefrontError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _body(request: Request, status: int, error: str, message: str, details=None) -> dict:
    body = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": status,
        "error": error,
        "message": message,
        "path": request.url.path,
    }
    if details is not None:
        body["details"] = details
    return body


async def storefront_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status = getattr(exc, "status_code", 500)
    error = getattr(exc, "error", "Internal Server Error")
    message = getattr(exc, "message", str(exc))
    logger.info(f"{request.method} {request.url.path} -> {status} {error}: {message}")
    return JSONResponse(
        status_code=status,
        content=_body(request, status, error, message, getattr(exc, "details", None)),
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    http_exc = exc if isinstance(exc, HTTPException) else HTTPException(status_code=500, detail=str(exc))
    return JSONResponse(
        status_code=http_exc.status_code,
        content=_body(request, http_exc.status_code, "HTTP Error", str(http_exc.detail)),
        headers=http_exc.headers,
    )


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = []
    if isinstance(exc, RequestValidationError):
        for error in exc.errors():
            errors.append(
                {
                    "field": ".".join(str(loc) for loc in error["loc"]),
                    "message": error["msg"],
                }
            )

    logger.warning(f"Validation error on {request.url.path}: {errors}")
    return JSONResponse(
        status_code=400,
        content=_body(request, 400, "Validation Error", "Input validation failed", errors),
    )


async def integrity_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Data integrity violation on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=409,
        content=_body(request, 409, "Data Integrity Violation", "Database constraint violation"),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc!s}",
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content=_body(request, 500, "Internal Server Error", "An unexpected error occurred"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
