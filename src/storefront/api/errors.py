"""Map domain failures onto HTTP responses.

Every error body has the same shape::

    {"error": {"kind": "...", "message": "...", "details": ...}}

Anything that is not a known domain failure is logged with its traceback and
reported to the caller as an opaque internal error.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidDataError, ObjectNotFoundError, ValidationError

from storefront.shared.errors import NotAuthenticatedError, NotAuthorizedError

logger = structlog.get_logger(__name__)


def error_body(kind: str, message: str, details=None) -> dict:
    return {"error": {"kind": kind, "message": message, "details": details}}


def first_message(messages) -> str:
    """Pick the message for the first violated field."""
    if isinstance(messages, dict):
        for field_messages in messages.values():
            if isinstance(field_messages, (list, tuple)) and field_messages:
                return str(field_messages[0])
            if field_messages:
                return str(field_messages)
        return "Invalid input"
    if isinstance(messages, (list, tuple)):
        return str(messages[0]) if messages else "Invalid input"
    return str(messages)


def _request_validation_details(exc: RequestValidationError) -> dict:
    details: dict[str, list[str]] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path", "header")]
        field_name = ".".join(location) or "request"
        details.setdefault(field_name, []).append(error.get("msg", "Invalid value"))
    return details


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    @app.exception_handler(InvalidDataError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=error_body("validation", first_message(exc.messages), exc.messages),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = _request_validation_details(exc)
        return JSONResponse(
            status_code=400,
            content=error_body("validation", first_message(details), details),
        )

    @app.exception_handler(NotAuthenticatedError)
    async def authentication_error_handler(request: Request, exc: NotAuthenticatedError) -> JSONResponse:
        return JSONResponse(status_code=401, content=error_body("authentication", str(exc)))

    @app.exception_handler(NotAuthorizedError)
    async def authorization_error_handler(request: Request, exc: NotAuthorizedError) -> JSONResponse:
        return JSONResponse(status_code=403, content=error_body("unauthorized", str(exc)))

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_error_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content=error_body("not_found", str(exc)))

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error while serving request",
            method=request.method,
            path=request.url.path,
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content=error_body("internal", "Internal server error"))
