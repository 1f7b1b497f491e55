"""Maps noteshelf errors to HTTP responses.

This is the only place error classes meet status codes. Every error body is
`{"message": ...}`; validation failures add an `errors` list of
`{"field", "message"}` pairs, one per violated field.
"""

import logging
from typing import Any, Dict, List, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from noteshelf.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidTokenError,
    NoTokenError,
    NoteNotFoundError,
    NoteshelfError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

STATUS_CODES = {
    ValidationFailedError: status.HTTP_400_BAD_REQUEST,
    DuplicateEmailError: status.HTTP_400_BAD_REQUEST,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    NoTokenError: status.HTTP_401_UNAUTHORIZED,
    InvalidTokenError: status.HTTP_401_UNAUTHORIZED,
    NoteNotFoundError: status.HTTP_404_NOT_FOUND,
}

INTERNAL_ERROR_MESSAGE = "Server error"
ROUTE_NOT_FOUND_MESSAGE = "Route not found"

FIELD_MESSAGES = {
    "name": "Name must be between 2 and 50 characters",
    "email": "Please provide a valid email address",
    "password": "Password must be at least 6 characters long",
    "title": "Title must be between 1 and 100 characters",
    "content": "Content must be between 1 and 10000 characters",
    "tags": "Each tag must be a string with maximum 20 characters",
    "isPinned": "isPinned must be a boolean",
    "body": "Request body must be valid JSON",
}
TAGS_NOT_ARRAY_MESSAGE = "Tags must be an array"
PASSWORD_REQUIRED_MESSAGE = "Password is required"

# Error types raised by our own validators carry their own message.
CUSTOM_ERROR_TYPES = {"password_nul", "password_required"}


def _field_name(loc: Sequence[Any]) -> str:
    """First named location after the request section, e.g. ("body", "tags", 0) -> "tags"."""
    names = [part for part in loc[1:] if isinstance(part, str)]
    return names[0] if names else str(loc[0]) if loc else "body"


def collect_field_errors(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Collapse pydantic errors to one {field, message} entry per field, in order."""
    seen = {}
    for err in errors:
        field = _field_name(err.get("loc", ()))
        if field in seen:
            continue
        if field == "tags" and err.get("type") == "list_type":
            message = TAGS_NOT_ARRAY_MESSAGE
        elif field == "password" and err.get("type") == "missing":
            message = PASSWORD_REQUIRED_MESSAGE
        elif err.get("type") in CUSTOM_ERROR_TYPES:
            message = err["msg"]
        else:
            message = FIELD_MESSAGES.get(field, err.get("msg", "Invalid value"))
        seen[field] = message
    return [{"field": field, "message": message} for field, message in seen.items()]


def error_response(exc: NoteshelfError) -> JSONResponse:
    status_code = STATUS_CODES.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    body: Dict[str, Any] = {"message": exc.message}
    if isinstance(exc, ValidationFailedError):
        body["errors"] = exc.errors
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, (NoTokenError, InvalidTokenError)) else None
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def noteshelf_error_handler(request: Request, exc: NoteshelfError) -> JSONResponse:
    return error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(ValidationFailedError(collect_field_errors(exc.errors())))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = ROUTE_NOT_FOUND_MESSAGE
    else:
        message = str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"message": message}, headers=exc.headers)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {type(exc).__name__}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR_MESSAGE},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NoteshelfError, noteshelf_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
