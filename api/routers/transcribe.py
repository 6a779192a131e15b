"""Transcribe endpoint."""

from typing import List

from fastapi import APIRouter, Depends

from api.auth import verify_api_key
from api.dependencies import get_orchestrator
from blogcast.orchestrator import ContentOrchestrator
from blogcast.transcription.models import TranscriptionResult, UploadDescriptor

router = APIRouter()


@router.post("/transcribe", response_model=TranscriptionResult, response_model_by_alias=True)
async def transcribe(
    uploads: List[UploadDescriptor],
    orchestrator: ContentOrchestrator = Depends(get_orchestrator),
    _key=Depends(verify_api_key),
):
    """Transcribe the first uploaded file.

    Failures are reported in the body with ``success: false``; the status
    code stays 200.
    """
    return await orchestrator.transcribe(uploads)
