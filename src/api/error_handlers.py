"""Exception handlers mapping gateway errors to HTTP responses.

Every error body has the shape ``{"success": false, "error": message}``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.errors import (
    GatewayError,
    ValidationFailure,
    TokenNotFoundError,
    UpstreamServiceError,
)

logger = logging.getLogger(__name__)

STATUS_CODES: dict[type[GatewayError], int] = {
    ValidationFailure: 400,
    TokenNotFoundError: 404,
    UpstreamServiceError: 502,
}


def status_code_for(exc: GatewayError) -> int:
    """HTTP status for a gateway error, 500 if its kind is unmapped."""
    for error_type, status in STATUS_CODES.items():
        if isinstance(exc, error_type):
            return status
    return 500


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, **extra},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        status = status_code_for(exc)
        if status >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} rejected ({status}): {exc.message}")
        return error_response(status, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error: {exc.errors()}")
        return error_response(400, _format_validation_errors(exc.errors()))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return error_response(404, "Endpoint not found", path=request.url.path)
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
        return error_response(500, "Internal server error")


def _format_validation_errors(errors: list) -> str:
    """Convert FastAPI validation errors into a readable string."""
    parts = []
    for err in errors:
        loc = " -> ".join(str(part) for part in err.get("loc", []) if part != "body")
        msg = err.get("msg", "Invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"
