"""Request context middleware.

Each request carries an ``X-Request-ID``, taken from the client when sent.
It is bound into the structlog context for every log line of the request,
stored on ``request.state`` for the error envelope built in ``main``, and
echoed on the response. Unhandled errors propagate to the exception
handlers registered on the app.
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def elapsed_ms(started: float) -> float:
    """Milliseconds since a ``perf_counter`` reading, rounded for logs."""
    return round((time.perf_counter() - started) * 1000, 2)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds the request ID and logs one access line per request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            try:
                response = await call_next(request)
            except Exception:
                logger.info(
                    "Request failed",
                    method=request.method,
                    path=request.url.path,
                    duration_ms=elapsed_ms(started),
                )
                raise

            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=elapsed_ms(started),
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def setup_middleware(app: FastAPI) -> None:
    """Install request context handling on the app."""
    app.add_middleware(RequestContextMiddleware)
