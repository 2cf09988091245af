"""
FastAPI application bootstrap with: \n
- Lifespan-managed schema creation \n
- Logging configured from settings \n
- CORS configured for the frontend \n
- JSON error bodies for the application error taxonomy \n
- The review API mounted under `/api` \n

Environment contract (from `settings`): \n
- CREATE_SCHEMA: if true, create missing tables during startup. \n
- FRONTEND_URL: allowed CORS origin. \n
- LOG_LEVEL: level for the `taxonomy_buddy` loggers. \n

Run with ``uvicorn taxonomy_buddy.main:app``.
"""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from uvicorn.logging import DefaultFormatter

from taxonomy_buddy.api.fast_api import router
from taxonomy_buddy.database.config.config import settings
from taxonomy_buddy.database.config.connection_engine import connection_engine, create_schema
from taxonomy_buddy.database.core.errors import ReviewAppError, ValidationFailure

logger = logging.getLogger("uvicorn")
"""Logger instance for capturing and emitting Uvicorn server logs."""


def configure_logging() -> logging.Logger:
    """
    Attach a stdout handler to the `taxonomy_buddy` logger.

    Module loggers (`taxonomy_buddy.*`) propagate here and stop; records are
    formatted with uvicorn's formatter, like the server's own lines.
    """
    app_logger = logging.getLogger("taxonomy_buddy")
    app_logger.setLevel(settings.LOG_LEVEL.upper())
    if not app_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(DefaultFormatter("%(levelprefix)s %(name)s: %(message)s"))
        app_logger.addHandler(handler)
        app_logger.propagate = False
    return app_logger


configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    App lifespan manager.

    Notes
    ------------
    - On startup: create missing tables when CREATE_SCHEMA is enabled.
    - On shutdown: dispose of the engine's connection pool.
    """
    if settings.CREATE_SCHEMA:
        create_schema()
        logger.info("Database schema ready (%s).", connection_engine.url.get_backend_name())
    else:
        logger.info("Skipping schema creation (CREATE_SCHEMA=false).")

    try:
        yield
    finally:
        connection_engine.dispose()
        logger.info("Connection pool disposed.")


app = FastAPI(title="Code Change Taxonomy Buddy", lifespan=lifespan)
"""The FastAPI application object."""

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ReviewAppError)
async def review_app_error_handler(request: Request, exc: ReviewAppError):
    """Map application errors to `{success: false, error, message}` with their status code."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.kind, "message": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed bodies and parameters as `validation_failure`."""
    messages = [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()]
    return JSONResponse(
        status_code=ValidationFailure.status_code,
        content={"success": False, "error": ValidationFailure.kind, "message": "; ".join(messages)},
    )


app.include_router(router, prefix="/api")
