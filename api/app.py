"""
blogcast REST API

FastAPI application exposing transcription and blog generation over HTTP.

Usage:
    uvicorn api.app:app --reload --port 8000
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.config import APIConfig, API_PREFIX
from api.dependencies import get_app_config
from api.routers import health, transcribe, posts, users
from blogcast import __version__
from blogcast.utils.logging_config import configure_logging

config = APIConfig.load()

app_config = get_app_config()
configure_logging(
    level="debug" if config.debug else app_config.log_level,
    log_file=app_config.log_file,
)

app = FastAPI(
    title="blogcast API",
    description="Transcribes uploaded audio and video with Gemini and turns transcripts into blog posts.",
    version=__version__,
    debug=config.debug,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers under /api/v1 prefix
app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])
app.include_router(transcribe.router, prefix=API_PREFIX, tags=["Transcription"])
app.include_router(posts.router, prefix=API_PREFIX, tags=["Posts"])
app.include_router(users.router, prefix=API_PREFIX, tags=["Users"])


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "blogcast API",
        "version": __version__,
        "docs": "/docs",
        "health": f"{API_PREFIX}/health",
    }
