"""
Community feed: published creations from every user.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from client.errors import LikeSyncError
from client.store import CreationStore
from shared.types import Creation

logger = logging.getLogger(__name__)

PROMPT_PREVIEW_LENGTH = 50


class FeedApi(Protocol):
    async def fetch_published_creations(self) -> list[Creation]:
        ...


def truncate_prompt(text: str, max_length: int = PROMPT_PREVIEW_LENGTH) -> str:
    return text[:max_length] + "..." if len(text) > max_length else text


class FeedLoader:
    """
    Loads published creations into a store once per sign-in.

    ``loading`` stays True until the first load attempt finishes, whether it
    succeeded or not.
    """

    def __init__(
        self,
        store: CreationStore,
        api: FeedApi,
        notify: Optional[Callable[[Exception], None]] = None,
    ):
        self.store = store
        self.api = api
        self.notify = notify or (lambda e: logger.warning("Feed load failed: %s", e))
        self.loading = True
        self.user_id: Optional[str] = None
        self.expanded_prompt: Optional[str] = None

    async def on_auth_change(self, user_id: Optional[str]) -> bool:
        """
        React to the signed-in user changing.

        Loads only on a transition to a new signed-in user; returns whether a
        load happened. A load that finishes after the user changed again is
        dropped so an older response never replaces the newer feed.
        """
        if user_id == self.user_id:
            return False
        self.user_id = user_id
        if user_id is None:
            return False
        await self.load()
        return True

    async def load(self) -> bool:
        user_id = self.user_id
        try:
            creations = await self.api.fetch_published_creations()
        except LikeSyncError as e:
            if user_id == self.user_id:
                self.notify(e)
            return False
        finally:
            self.loading = False
        if user_id != self.user_id:
            logger.info("Dropping feed loaded for previous user %s", user_id)
            return False
        creations.sort(key=lambda c: c.created_at, reverse=True)
        self.store.replace_all(creations)
        logger.info("Loaded %d published creations", len(creations))
        return True

    def toggle_prompt(self, creation_id: str) -> None:
        self.expanded_prompt = None if self.expanded_prompt == creation_id else creation_id

    def prompt_text(self, creation: Creation) -> str:
        if self.expanded_prompt == creation.id:
            return creation.prompt
        return truncate_prompt(creation.prompt)
