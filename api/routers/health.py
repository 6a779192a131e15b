"""Health and info endpoints."""

from fastapi import APIRouter, Depends

from api.dependencies import get_app_config
from api.models import HealthResponse
from blogcast import __version__
from blogcast.config import AppConfig

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(config: AppConfig = Depends(get_app_config)):
    """Health check endpoint.

    Reports whether a Gemini credential is configured without revealing it.
    """
    return HealthResponse(
        status="ok",
        version=__version__,
        transcribe_model=config.gemini.transcribe_model,
        blog_model=config.gemini.blog_model,
        credential_configured=bool(config.gemini.api_key),
    )


@router.get("/version")
async def version():
    """Return API version."""
    return {"version": __version__}
