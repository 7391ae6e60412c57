"""
App-wide request timing and store-failure handlers.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from database.users import DuplicateEmailError

logger = logging.getLogger(__name__)

_INTERNAL_ERROR = {"detail": "Internal server error"}


def register_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def time_request(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.debug("%s %s took %.3fs (status %d)",
                     request.method, request.url.path, elapsed, response.status_code)
        return response


def register_exception_handlers(app: FastAPI) -> None:
    """Report store failures as a bare 500; details go to the log only."""

    @app.exception_handler(DuplicateEmailError)
    async def duplicate_email(request: Request, exc: DuplicateEmailError):
        logger.error("Duplicate user records on %s", request.url.path)
        return JSONResponse(status_code=500, content=_INTERNAL_ERROR)

    @app.exception_handler(SQLAlchemyError)
    async def store_failure(request: Request, exc: SQLAlchemyError):
        logger.error("Database error on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content=_INTERNAL_ERROR)
