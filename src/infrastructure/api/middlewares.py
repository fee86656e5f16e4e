from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def add_default_middlewares(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


def add_exception_handlers(app: FastAPI) -> None:
    """Reduce every error to a bare status code with an empty body."""

    @app.exception_handler(StarletteHTTPException)
    async def bare_http_error(request: Request, exc: StarletteHTTPException) -> Response:
        return Response(status_code=exc.status_code, headers=getattr(exc, "headers", None))

    # Framework-level validation failures are malformed input.
    @app.exception_handler(RequestValidationError)
    async def bare_validation_error(request: Request, exc: RequestValidationError) -> Response:
        logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return Response(status_code=status.HTTP_400_BAD_REQUEST)
