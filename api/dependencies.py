"""Shared service instances for the routers.

Tests replace these through ``app.dependency_overrides``.
"""

from functools import lru_cache

from api.config import APIConfig
from blogcast.config import AppConfig
from blogcast.orchestrator import ContentOrchestrator
from blogcast.posts import InMemoryPostRepository, PostRepository


@lru_cache(maxsize=1)
def get_app_config() -> AppConfig:
    """Load blogcast configuration once per process."""
    return AppConfig.load_from_yaml(APIConfig.load().config_path)


@lru_cache(maxsize=1)
def get_repository() -> PostRepository:
    return InMemoryPostRepository()


@lru_cache(maxsize=1)
def get_orchestrator() -> ContentOrchestrator:
    return ContentOrchestrator.from_config(get_app_config(), repository=get_repository())
