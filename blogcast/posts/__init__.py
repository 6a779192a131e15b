"""
Post storage.

Workflows depend on the PostRepository protocol; InMemoryPostRepository is
the bundled implementation.
"""

from blogcast.posts.repository import (
    InMemoryPostRepository,
    Post,
    PostRepository,
    StorageError,
    User,
    RECENT_POSTS_LIMIT,
)

__all__ = [
    "InMemoryPostRepository",
    "Post",
    "PostRepository",
    "StorageError",
    "User",
    "RECENT_POSTS_LIMIT",
]
