"""
Error taxonomy and the handlers that turn it into responses.

Every error leaves the API as ``{"error": {"code", "message", "details"?}}``.
"""
import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(HTTPException):
    """Base application error with a machine readable code."""

    def __init__(
        self,
        status_code: int,
        message: str,
        code: str = "ERROR",
        details: list[dict[str, str]] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.code = code
        self.details = details


class ValidationError(AppError):
    def __init__(self, message: str, details: list[dict[str, str]] | None = None):
        super().__init__(
            status.HTTP_400_BAD_REQUEST, message, "VALIDATION_ERROR", details
        )

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError, prefix: str = "") -> "ValidationError":
        details = []
        for err in exc.errors():
            parts = [str(part) for part in err["loc"]]
            if prefix:
                parts.insert(0, prefix)
            details.append({"field": ".".join(parts), "message": err["msg"]})
        return cls(", ".join(f"{d['field']}: {d['message']}" for d in details), details)


class AuthenticationError(AppError):
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            status.HTTP_401_UNAUTHORIZED, message, "AUTHENTICATION_ERROR"
        )


class AuthorizationError(AppError):
    def __init__(self, message: str = "Forbidden"):
        super().__init__(status.HTTP_403_FORBIDDEN, message, "AUTHORIZATION_ERROR")


class NotFoundError(AppError):
    def __init__(self, resource: str):
        super().__init__(status.HTTP_404_NOT_FOUND, f"{resource} not found", "NOT_FOUND")


class ConflictError(AppError):
    def __init__(self, message: str):
        super().__init__(status.HTTP_409_CONFLICT, message, "CONFLICT_ERROR")


_HTTP_CODES = {
    400: "BAD_REQUEST",
    401: "AUTHENTICATION_ERROR",
    403: "AUTHORIZATION_ERROR",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT_ERROR",
}


def error_body(code: str, message: str, details: list[dict[str, str]] | None = None) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    if details:
        error["details"] = details
    return {"error": error}


def _field_path(loc: tuple) -> str:
    # ("body", "structure", "movements", 0, "name") -> "structure.movements.0.name"
    parts = [str(part) for part in loc]
    if parts and parts[0] in ("body", "query", "path", "cookie", "header"):
        parts = parts[1:] or parts
    return ".".join(parts)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.code, exc.detail, exc.details),
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"field": _field_path(tuple(err.get("loc", ()))), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    message = ", ".join(f"{d['field']}: {d['message']}" for d in details) or "Validation failed"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("VALIDATION_ERROR", message, details),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _HTTP_CODES.get(exc.status_code, "ERROR")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception on %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_ERROR", "An unexpected error occurred"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
