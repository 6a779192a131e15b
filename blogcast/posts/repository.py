"""
Post persistence collaborator.

The storage backend is outside this package; workflows only depend on the
PostRepository protocol below. InMemoryPostRepository implements it for
local development, the CLI and tests.

Saving a post is at-most-once: callers never retry ``save_post``.
"""

import itertools
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol, runtime_checkable


logger = logging.getLogger(__name__)

RECENT_POSTS_LIMIT = 3


class StorageError(Exception):
    """Raised when the storage backend fails.

    The message is shown to users, so backend details belong in the log.
    """
    pass


@dataclass
class Post:
    """A stored blog post."""
    id: int
    user_id: str
    title: str
    content: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class User:
    """A user record as kept by the storage backend."""
    user_id: str
    full_name: str
    email: str


@runtime_checkable
class PostRepository(Protocol):
    """Storage operations the application needs."""

    async def save_post(self, user_id: str, title: str, content: str) -> int:
        """Store a post and return its id."""
        ...

    async def get_recent_posts(self, user_id: str, limit: int = RECENT_POSTS_LIMIT) -> List[str]:
        """Return the content of the user's newest posts, newest first."""
        ...

    async def get_post(self, user_id: str, post_id: int) -> Optional[Post]:
        """Return one of the user's posts, or None."""
        ...

    async def upsert_user(self, user_id: str, full_name: str, email: str) -> None:
        """Create the user, or update name and email when it already exists."""
        ...


class InMemoryPostRepository:
    """Process-local PostRepository.

    Methods contain no awaits between reads and writes, so concurrent
    coroutines on one event loop see consistent state without locking.
    """

    def __init__(self):
        self._posts: Dict[int, Post] = {}
        self._users: Dict[str, User] = {}
        self._ids = itertools.count(1)

    async def save_post(self, user_id: str, title: str, content: str) -> int:
        post_id = next(self._ids)
        self._posts[post_id] = Post(id=post_id, user_id=user_id, title=title, content=content)
        logger.info(f"Saved post {post_id} for user {user_id}")
        return post_id

    async def get_recent_posts(self, user_id: str, limit: int = RECENT_POSTS_LIMIT) -> List[str]:
        posts = [post for post in self._posts.values() if post.user_id == user_id]
        posts.sort(key=lambda post: (post.created_at, post.id), reverse=True)
        return [post.content for post in posts[:limit]]

    async def get_post(self, user_id: str, post_id: int) -> Optional[Post]:
        post = self._posts.get(post_id)
        if post is None or post.user_id != user_id:
            return None
        return post

    async def upsert_user(self, user_id: str, full_name: str, email: str) -> None:
        existing = self._users.get(user_id) or next(
            (user for user in self._users.values() if user.email == email), None
        )
        if existing is None:
            self._users[user_id] = User(user_id=user_id, full_name=full_name, email=email)
            logger.info(f"Created user {user_id}")
        else:
            existing.full_name = full_name
            existing.email = email

    def get_user(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)
