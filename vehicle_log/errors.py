"""
Erreurs typees de l'API / Typed API errors.
Chaque erreur porte son code HTTP et un message public.
Every error carries its HTTP status and a public message; handlers render
them as {"error_msg": ..., "code": ...}.
"""

import logging
from contextlib import contextmanager

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)

# Codes SQLSTATE PostgreSQL / PostgreSQL SQLSTATE codes
POSTGRES_UNIQUE_VIOLATION = "23505"
POSTGRES_FOREIGN_KEY_VIOLATION = "23503"


class ApiError(Exception):
    """Erreur de base / Base API error."""

    status_code: int = 500
    message: str = "internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message

    @property
    def public_message(self) -> str:
        return self.message


class NotFound(ApiError):
    status_code = 404
    message = "resource not found"


class DecodeError(ApiError):
    """Ligne incoherente avec son discriminant / Stored row inconsistent with its discriminator."""

    status_code = 500

    def __init__(self, column: str, value: object = None):
        self.column = column
        self.value = value
        if value is not None:
            message = f"could not decode column {column!r}: unrecognized value {value!r}"
        else:
            message = f"could not decode column {column!r}"
        super().__init__(message)

    @property
    def public_message(self) -> str:
        return "problem decoding stored record"


class ConversionError(ApiError):
    status_code = 500

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)

    @property
    def public_message(self) -> str:
        return "problem converting types"


class WrongVariantType(ApiError):
    status_code = 400
    message = "log record is of the wrong type and can't be updated"


class UniqueConstraintViolation(ApiError):
    status_code = 409
    message = "the requested inputs violate a unique constraint"

    def __init__(self, detail: str | None = None):
        self.detail = detail
        super().__init__(detail or self.message)


class ReferenceConstraintViolation(ApiError):
    status_code = 409
    message = "the request conflicts with a referenced or dependent resource"

    def __init__(self, detail: str | None = None):
        self.detail = detail
        super().__init__(detail or self.message)


class MalformedRequestBody(ApiError):
    status_code = 400
    message = "malformed request body"


class DatabaseError(ApiError):
    status_code = 500

    @property
    def public_message(self) -> str:
        return "database error"


def classify_integrity_error(exc: IntegrityError) -> ApiError:
    """Traduire une IntegrityError / Map an IntegrityError to a typed error.

    PostgreSQL expose un SQLSTATE, SQLite seulement un message.
    PostgreSQL exposes a SQLSTATE, SQLite only a message.
    """
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    text = str(orig)
    if code == POSTGRES_UNIQUE_VIOLATION or "UNIQUE constraint failed" in text:
        return UniqueConstraintViolation(detail=getattr(orig, "detail", None) or text)
    if code == POSTGRES_FOREIGN_KEY_VIOLATION or "FOREIGN KEY constraint failed" in text:
        return ReferenceConstraintViolation(detail=getattr(orig, "detail", None) or text)
    return DatabaseError(text)


@contextmanager
def integrity_guard():
    """Convertir les violations de contraintes en erreurs typees / Convert constraint violations to typed errors."""
    try:
        yield
    except IntegrityError as exc:
        raise classify_integrity_error(exc) from exc


def _error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error_msg": message, "code": status_code},
        headers=headers,
    )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.status_code, exc)
    return _error_response(exc.status_code, exc.public_message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Corps ou parametres invalides / Invalid body or parameters -> 400."""
    error = MalformedRequestBody(_summarize_validation_errors(exc))
    return await api_error_handler(request, error)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("%s %s database failure", request.method, request.url.path, exc_info=exc)
    return _error_response(500, DatabaseError().public_message)


def _summarize_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(item) for item in err.get("loc", ()) if item != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "; ".join(parts) or MalformedRequestBody.message
