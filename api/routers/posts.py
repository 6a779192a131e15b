"""Blog post endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse

from api.auth import verify_api_key
from api.dependencies import get_orchestrator, get_repository
from api.models import FailureResponse, GeneratePostRequest, PostResponse
from blogcast.orchestrator import ContentOrchestrator, PostCreated
from blogcast.posts import PostRepository

router = APIRouter()


@router.post(
    "/posts",
    response_model=FailureResponse,
    responses={303: {"description": "Post created; redirects to the new post"}},
)
async def create_post(
    body: GeneratePostRequest,
    request: Request,
    orchestrator: ContentOrchestrator = Depends(get_orchestrator),
    _key=Depends(verify_api_key),
):
    """Generate a blog post from a transcript and redirect to it."""
    transcript = body.transcriptions.text if body.transcriptions else None
    outcome = await orchestrator.generate_post(transcript, body.user_id)

    if isinstance(outcome, PostCreated):
        location = request.url_for("get_post", post_id=outcome.post_id).include_query_params(
            user_id=body.user_id
        )
        return RedirectResponse(url=str(location), status_code=303)
    return FailureResponse(message=outcome.message)


@router.get("/posts/{post_id}", response_model=PostResponse, response_model_by_alias=True)
async def get_post(
    post_id: int,
    user_id: str,
    repository: PostRepository = Depends(get_repository),
    _key=Depends(verify_api_key),
):
    """Return one of the user's posts."""
    post = await repository.get_post(user_id, post_id)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return PostResponse(
        id=post.id,
        user_id=post.user_id,
        title=post.title,
        content=post.content,
        created_at=post.created_at,
    )
