# src/social_api/main.py
"""Main entry point for the social API."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from social_api.api.error_handlers import register_error_handlers
from social_api.api.v1 import (
    auth_router,
    comments_router,
    likes_router,
    posts_router,
    ratings_router,
    users_router,
)
from social_api.core.logging import configure_logging
from social_api.core.settings import settings

configure_logging(settings.log_level)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Social content backend: posts, threaded comments, likes and ratings",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

register_error_handlers(app)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(likes_router, prefix="/api/v1")
app.include_router(ratings_router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("social_api.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
