"""
Employee Search API - FastAPI Application Entry Point

This module initializes the FastAPI application with middleware,
routes, exception handlers and lifecycle event handlers.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from employee_search import __version__
from employee_search.api import employees, health
from employee_search.core.config import settings
from employee_search.core.database import init_db, close_db
from employee_search.core.exceptions import IncorrectResultSizeError
from employee_search.core.logging_config import setup_logging
from employee_search.middleware.request_id import RequestIDMiddleware
from employee_search.middleware.logging import LoggingMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
        - Set up logging
        - Create tables and load the demo dataset (if enabled)

    Shutdown:
        - Close database connections
    """
    setup_logging(level=settings.log_level, json_format=settings.log_json)

    await init_db()

    yield

    await close_db()


app = FastAPI(
    title=settings.project_name,
    version=__version__,
    description="Dynamic, optional-criteria employee search using query by example",
    openapi_url=f"{settings.api_prefix}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# Middleware is executed in reverse order of registration

# Logging middleware (runs after RequestID to access request_id)
app.add_middleware(LoggingMiddleware)

# Request ID middleware (first to run - sets correlation ID)
app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(IncorrectResultSizeError)
async def incorrect_result_size_handler(
    request: Request, exc: IncorrectResultSizeError
) -> JSONResponse:
    logger.warning(
        str(exc),
        extra={
            "path": request.url.path,
            "request_id": getattr(request.state, "request_id", None),
            "actual_size": exc.actual_size,
        }
    )
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "detail": (
                f"Expected a single employee but {exc.actual_size} matched the given example"
            )
        },
    )


app.include_router(health.router, prefix=settings.api_prefix)
app.include_router(employees.router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    """Basic API information."""
    return {
        "message": settings.project_name,
        "version": __version__,
        "docs": "/docs",
    }
