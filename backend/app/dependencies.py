from functools import lru_cache

from fastapi import Depends

from app.config import settings
from app.database import get_db
from app.project_linker.service import ProjectLinker
from app.project_linker.store import InMemoryProjectLinkStore, ProjectLinkStore, RedisProjectLinkStore

# Re-export get_db for use in Depends()
get_db = get_db


@lru_cache
def get_project_link_store() -> ProjectLinkStore:
    """One store per process; links must survive across requests."""
    ttl = settings.project_link_ttl_seconds or None
    if settings.project_link_backend == "redis":
        import redis.asyncio as aioredis

        client = aioredis.from_url(settings.redis_url, decode_responses=True)
        return RedisProjectLinkStore(client, ttl_seconds=ttl)
    return InMemoryProjectLinkStore(
        ttl_seconds=ttl,
        max_entries=settings.project_link_max_entries or None,
    )


def get_project_linker(store: ProjectLinkStore = Depends(get_project_link_store)) -> ProjectLinker:
    return ProjectLinker(store, threshold=settings.project_match_threshold)


def get_reconciliation_service():
    from app.reconciliation_engine.service import ReconciliationService
    return ReconciliationService(settings)
