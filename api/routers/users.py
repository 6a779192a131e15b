"""User endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.auth import verify_api_key
from api.dependencies import get_repository
from api.models import UserResponse, UserUpsertRequest
from blogcast.posts import PostRepository, StorageError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.put("/users/{user_id}", response_model=UserResponse, response_model_by_alias=True)
async def upsert_user(
    user_id: str,
    body: UserUpsertRequest,
    repository: PostRepository = Depends(get_repository),
    _key=Depends(verify_api_key),
):
    """Create the user or refresh name and email, as on each dashboard visit."""
    try:
        await repository.upsert_user(user_id, body.full_name, body.email)
    except StorageError as e:
        logger.error(f"Failed to upsert user {user_id}: {e}")
        raise HTTPException(status_code=503, detail=str(e))
    return UserResponse(user_id=user_id)
