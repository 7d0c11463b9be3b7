"""
Cowork FastAPI Application Entry Point.

Run with: uvicorn app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import (
    artifacts,
    auth,
    bindings,
    chat,
    suggestions,
    tasks,
    widgets,
    workspaces,
)
from app.config import get_settings, sanitize_error
from app.db.session import engine
from app.services.errors import CoworkError

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown."""
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Workspace aggregation, suggestions and dashboard widgets API",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# ERROR HANDLERS
# =============================================================================


@app.exception_handler(CoworkError)
async def cowork_error_handler(request: Request, exc: CoworkError) -> JSONResponse:
    """Render domain errors as {"detail", "code"} with the error's status."""
    if exc.status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log the traceback, return a generic 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": sanitize_error(exc), "code": "internal_error"},
    )


# Include routers
app.include_router(auth.router)
app.include_router(workspaces.router)
app.include_router(bindings.router)
app.include_router(artifacts.router)
app.include_router(suggestions.router)
app.include_router(widgets.router)
app.include_router(tasks.router)
app.include_router(chat.router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
