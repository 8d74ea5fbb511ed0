"""
FastAPI application definition.

This module creates and configures the FastAPI application instance,
including logging, middleware, exception handlers, and router registration.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes import router
from src.core.config import settings
from src.engine.client import close_cluster_set

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        await close_cluster_set()


def create_app() -> FastAPI:
    """Build the word search API application."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title="Word Search API",
        description="REST façade translating word and definition searches into engine queries",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS middleware for frontend integration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}", exc_info=exc)
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    @app.get("/ping")
    async def ping():
        """Liveness check of the API itself."""
        return {"message": "pong"}

    return app
