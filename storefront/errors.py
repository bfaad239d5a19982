# storefront/errors.py
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ValidationError(HTTPException):
    def __init__(self, detail: str = "Invalid request"):
        super().__init__(status_code=400, detail=detail)


class AuthError(HTTPException):
    def __init__(self, detail: str = "Invalid token", status_code: int = 403):
        super().__init__(status_code=status_code, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=404, detail=detail)


class SignatureMismatch(HTTPException):
    def __init__(self, detail: str = "Invalid signature"):
        super().__init__(status_code=400, detail=detail)


class GatewayError(HTTPException):
    def __init__(self, detail: str = "Order creation failed"):
        super().__init__(status_code=500, detail=detail)


class StoreError(HTTPException):
    def __init__(self, detail: str = "Internal Server Error"):
        super().__init__(status_code=500, detail=detail)


def _error_body(message: str) -> dict:
    return {"error_msg": message}


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content=_error_body(str(exc.detail)), headers=exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        # ("body", "username") -> "username"
        location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    logger.debug("Rejected request to %s: %s", request.url.path, message)
    return JSONResponse(status_code=400, content=_error_body(message))


async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Store failure on %s %s", request.method, request.url.path)
    error = StoreError()
    return JSONResponse(status_code=error.status_code, content=_error_body(error.detail))


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    error = StoreError()
    return JSONResponse(status_code=error.status_code, content=_error_body(error.detail))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    # Все остальное тоже отдаем как {"error_msg": ...}
    app.add_exception_handler(Exception, unexpected_error_handler)
