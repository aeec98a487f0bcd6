"""
Pastebin Lite - Main FastAPI application.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pastebin.config import Settings, settings as default_settings
from pastebin.exceptions import (
    INTERNAL_ERROR,
    InvalidBodyError,
    InvalidContentError,
    InvalidMaxViewsError,
    InvalidTTLError,
    PasteError,
    ValidationError,
)
from pastebin.models import ErrorResponse
from pastebin.routes import health, pastes
from pastebin.service import PasteService
from pastebin.stores import MemoryPasteStore, PasteStore, connect_store

# Configure logging
logging.basicConfig(
    level=default_settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


async def paste_error_handler(request: Request, exc: PasteError) -> JSONResponse:
    """Client errors echo their message; server errors are logged and stay generic."""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
        return _error_response(exc.status_code, INTERNAL_ERROR)
    return _error_response(exc.status_code, exc.message)


# Checked in order: a bad content field wins over ttl, which wins over max_views
FIELD_ERRORS = (
    ("content", InvalidContentError),
    ("ttl_seconds", InvalidTTLError),
    ("max_views", InvalidMaxViewsError),
)


def body_error(exc: RequestValidationError) -> ValidationError:
    """Pick the one error to report for a rejected request body."""
    failed = {
        error["loc"][1]
        for error in exc.errors()
        if len(error["loc"]) > 1 and error["loc"][0] == "body"
    }
    for field, error_cls in FIELD_ERRORS:
        if field in failed:
            return error_cls()
    # unparseable JSON or a body that is not an object
    return InvalidBodyError()


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Rejected body on {request.method} {request.url.path}: {exc.errors()}")
    error = body_error(exc)
    return _error_response(error.status_code, error.message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unexpected error on {request.method} {request.url.path}", exc_info=exc)
    return _error_response(500, INTERNAL_ERROR)


def create_app(settings: Optional[Settings] = None, store: Optional[PasteStore] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use, the process-wide ones when omitted
        store: Pre-built store; when omitted one is connected at startup

    Returns:
        Configured FastAPI app. The store is acquired in the lifespan and
        closed on shutdown.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Pastebin Lite application starting...")
        paste_store = store if store is not None else connect_store(settings)
        if isinstance(paste_store, MemoryPasteStore):
            logger.warning("DATABASE: Using IN-MEMORY storage, data will NOT persist across restarts")

        app.state.store = paste_store
        app.state.service = PasteService(paste_store)
        try:
            yield
        finally:
            logger.info("Pastebin Lite application shutting down...")
            paste_store.close()

    app = FastAPI(
        title="Pastebin Lite",
        description="Share text through short-lived, view-limited links",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(PasteError, paste_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(health.router)
    app.include_router(pastes.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "pastebin.main:app",
        host="0.0.0.0",
        port=8000,
        reload=default_settings.DEBUG,
    )
