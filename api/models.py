"""Pydantic request/response models for the REST API.

Field names are camelCase on the wire, matching TranscriptionResult.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Response Models ---

class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    transcribe_model: str
    blog_model: str
    credential_configured: bool


class FailureResponse(BaseModel):
    """Returned when blog generation does not produce a post."""
    success: bool = False
    message: str


class PostResponse(_CamelModel):
    id: int
    user_id: str
    title: str
    content: str
    created_at: datetime


class UserResponse(_CamelModel):
    success: bool = True
    user_id: str


# --- Request Models ---

class TranscriptText(BaseModel):
    text: Optional[str] = None


class GeneratePostRequest(_CamelModel):
    transcriptions: Optional[TranscriptText] = None
    user_id: str = Field(..., min_length=1, description="Owner of the generated post")


class UserUpsertRequest(_CamelModel):
    full_name: str = ""
    email: str = Field(..., min_length=3)
