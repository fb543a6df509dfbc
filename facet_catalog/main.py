"""Facet catalog API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from facet_catalog.api import admin_router, facets_router, health_router, products_router
from facet_catalog.api.middleware import setup_middleware
from facet_catalog.catalog.exceptions import (
    DomainError,
    DuplicateNameError,
    DuplicateValueError,
    NotFoundError,
)
from facet_catalog.infrastructure.config import settings
from facet_catalog.infrastructure.log_config import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    configure_logging(settings.log_level, json_output=settings.log_json)

    logger.info(
        "Starting facet catalog API",
        version=settings.api_version,
        debug=settings.debug,
    )

    yield

    logger.info("Shutting down facet catalog API")


app = FastAPI(
    title="Facet Catalog API",
    description="Faceted attribute filtering for a product catalog",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request ID correlation; unhandled errors reach generic_exception_handler below
setup_middleware(app)

app.include_router(health_router, tags=["Health"])
app.include_router(facets_router)
app.include_router(products_router)
app.include_router(admin_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: list | None = None,
) -> JSONResponse:
    """Build an error response in the common format."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details or [],
            "request_id": getattr(request.state, "request_id", None),
        },
    )


def domain_details(exc: DomainError) -> list[dict]:
    """Flatten domain error details into field/message pairs."""
    return [{"field": key, "message": str(value)} for key, value in exc.details.items()]


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Map missing records to 404."""
    return error_response(request, 404, "NOT_FOUND", exc.message, domain_details(exc))


@app.exception_handler(DuplicateNameError)
@app.exception_handler(DuplicateValueError)
async def duplicate_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Map uniqueness violations to 409."""
    return error_response(request, 409, "DUPLICATE", exc.message, domain_details(exc))


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Map rejected field updates to 422."""
    return error_response(request, 422, "VALIDATION_ERROR", str(exc))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error_code", "ERROR")
        message = detail.get("message", str(detail))
        details = detail.get("details", [])
    else:
        error_code = "ERROR"
        message = str(detail)
        details = []

    return error_response(request, exc.status_code, error_code, message, details)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions with consistent format."""
    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )
    return error_response(request, 500, "INTERNAL_ERROR", "An internal error occurred")
