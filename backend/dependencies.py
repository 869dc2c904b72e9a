"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from backend.config import get_settings
from backend.db import DbClient, InMemoryDbClient, PostgresDbClient

_db_client: DbClient | None = None


def get_db_client() -> DbClient:
    """
    Return a singleton DB client so creations persist across requests.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.database_url:
        _db_client = InMemoryDbClient()
    else:
        _db_client = PostgresDbClient(settings.database_url)
    return _db_client
