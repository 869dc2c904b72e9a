"""
Dashboard state: the signed-in user's own creations.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from client.errors import LikeSyncError
from client.pagination import PaginatedReveal
from client.store import CreationStore
from shared.types import Creation

logger = logging.getLogger(__name__)


class DashboardApi(Protocol):
    async def fetch_user_creations(self) -> list[Creation]:
        ...


class DashboardState:
    def __init__(
        self,
        api: DashboardApi,
        store: Optional[CreationStore] = None,
        notify: Optional[Callable[[Exception], None]] = None,
        pagination: Optional[PaginatedReveal] = None,
    ):
        self.api = api
        self.store = store if store is not None else CreationStore()
        self.notify = notify or (lambda e: logger.warning("Dashboard load failed: %s", e))
        self.pagination = pagination or PaginatedReveal()
        self.loading = True
        # Accordion: at most one creation is expanded.
        self.expanded_id: Optional[str] = None

    async def load(self) -> bool:
        try:
            creations = await self.api.fetch_user_creations()
        except LikeSyncError as e:
            self.notify(e)
            return False
        finally:
            self.loading = False
        creations.sort(key=lambda c: c.created_at, reverse=True)
        self.store.replace_all(creations)
        self.pagination.reset(len(self.store))
        return True

    @property
    def total_creations(self) -> int:
        return len(self.store)

    @property
    def visible_creations(self) -> list[Creation]:
        return self.pagination.visible(self.store.all())

    @property
    def has_more(self) -> bool:
        return self.pagination.has_more

    def reveal_more(self) -> int:
        return self.pagination.reveal_more()

    def toggle_expanded(self, creation_id: str) -> None:
        self.expanded_id = None if self.expanded_id == creation_id else creation_id
