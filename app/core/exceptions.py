"""
Global exception handlers for consistent API errors.

- HTTPException -> {"msg": detail} o {"errors": detail} si detail es una lista.
- RequestValidationError -> 400 {"errors": [...]}.
- Cualquier otra excepción -> 500 {"msg": "Server Error"} (detalle sólo en logs).
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.validation import format_errors

SERVER_ERROR = "Server Error"


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def _with_request_id(request: Request, body: Dict[str, Any]) -> Dict[str, Any]:
    rid = _req_id(request)
    if rid:
        body["request_id"] = rid
    return body


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("devconnect.errors")

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        if isinstance(exc.detail, list):
            body: Dict[str, Any] = {"errors": exc.detail}
        else:
            body = {"msg": exc.detail or "HTTP error"}
        return JSONResponse(
            status_code=exc.status_code,
            content=_with_request_id(request, body),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        body: Dict[str, Any] = {"errors": format_errors(exc.errors())}
        return JSONResponse(status_code=400, content=_with_request_id(request, body))

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        rid = _req_id(request)
        log.exception("Unhandled error request_id=%s", rid)
        return JSONResponse(status_code=500, content=_with_request_id(request, {"msg": SERVER_ERROR}))
