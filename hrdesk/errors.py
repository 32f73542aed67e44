# hrdesk/errors.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

UNREACHABLE_MESSAGE = "No internet connection or database unreachable"

# mysql-connector client errors for "can't reach the server"
UNREACHABLE_ERRNOS = {2002, 2003, 2005, 2006, 2013}
UNREACHABLE_HINTS = (
    "connection refused",
    "can't connect",
    "unknown mysql server host",
    "name or service not known",
    "nodename nor servname",
    "temporary failure in name resolution",
    "server has gone away",
    "lost connection",
)


def is_unreachable(exc: DBAPIError) -> bool:
    if getattr(exc, "connection_invalidated", False):
        return True
    orig = getattr(exc, "orig", None)
    if getattr(orig, "errno", None) in UNREACHABLE_ERRNOS:
        return True
    text = str(orig if orig is not None else exc).lower()
    return any(hint in text for hint in UNREACHABLE_HINTS)


def _field_name(loc) -> str:
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return ".".join(parts) or "body"


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    fields = sorted({_field_name(err.get("loc", ())) for err in exc.errors()})
    return JSONResponse(status_code=400, content={"message": f"Invalid request: {', '.join(fields)}"})


async def database_exception_handler(request: Request, exc: DBAPIError):
    if is_unreachable(exc):
        logger.error("Database unreachable during %s %s: %s", request.method, request.url.path, exc.orig)
        return JSONResponse(status_code=503, content={"message": UNREACHABLE_MESSAGE})
    logger.exception("Database error during %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Server error"})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error during %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DBAPIError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
