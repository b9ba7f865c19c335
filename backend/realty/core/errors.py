"""Error taxonomy and the centralized FastAPI exception handlers."""

import traceback
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from jose import ExpiredSignatureError, JWTError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException

from realty.core.config import settings
from realty.core.logging import get_logger

logger = get_logger("realty.errors")


class RealtyError(Exception):
    """Base exception for the marketplace backend."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.details = details


class NotFoundError(RealtyError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class UnauthorizedError(RealtyError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Access token required"


class ForbiddenError(RealtyError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Not authorized"


class ConflictError(RealtyError):
    status_code = status.HTTP_409_CONFLICT
    message = "Duplicate entry"


class ValidationFailedError(RealtyError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Validation failed"


class InvalidReferenceError(RealtyError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid reference"


def error_body(error: str, details: Any = None) -> dict:
    body: dict = {"error": error}
    if details is not None:
        body["details"] = details
    return body


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    # postgres: 23505, mysql: 1062, sqlite: "UNIQUE constraint failed"
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == "23505":
        return True
    args = getattr(orig, "args", ())
    if args and args[0] == 1062:
        return True
    return "unique" in str(orig).lower() or "duplicate" in str(orig).lower()


def _is_fk_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == "23503":
        return True
    args = getattr(orig, "args", ())
    if args and args[0] in (1451, 1452):
        return True
    return "foreign key" in str(orig).lower()


async def realty_error_handler(request: Request, exc: RealtyError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(error_body(exc.message, exc.details)),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    if _is_unique_violation(exc):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=error_body("Duplicate entry", "This record already exists"),
        )
    if _is_fk_violation(exc):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("Invalid reference", "Referenced record does not exist"),
        )
    return await unhandled_error_handler(request, exc)


async def jwt_error_handler(request: Request, exc: JWTError) -> JSONResponse:
    message = "Token expired" if isinstance(exc, ExpiredSignatureError) else "Invalid token"
    return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content=error_body(message))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation failed", jsonable_encoder(exc.errors())),
    )


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    body = error_body(str(exc) or "Internal server error")
    if not settings.is_production:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RealtyError, realty_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(JWTError, jwt_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
