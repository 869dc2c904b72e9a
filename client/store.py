"""
Client-held collection of creations.

The store is the single place the client's view of creations lives. It is
passed by reference to the synchronizer, feed loader and dashboard instead
of being captured in callbacks.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from shared.types import Creation

logger = logging.getLogger(__name__)


class CreationStore:
    """Ordered creations keyed by id.

    Reads return the live records; writes go through ``replace_all`` and
    ``set_liked`` only. Once ``close`` is called (the owning view went away)
    writes are ignored so late network results cannot touch discarded state.
    """

    def __init__(self, creations: Iterable[Creation] = ()):
        self._order: list[str] = []
        self._by_id: Dict[str, Creation] = {}
        self.closed = False
        self.replace_all(creations)

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, creation_id: str) -> bool:
        return creation_id in self._by_id

    def get(self, creation_id: str) -> Optional[Creation]:
        return self._by_id.get(creation_id)

    def all(self) -> list[Creation]:
        return [self._by_id[creation_id] for creation_id in self._order]

    def is_liked(self, creation_id: str, user_id: str) -> Optional[bool]:
        creation = self._by_id.get(creation_id)
        if creation is None:
            return None
        return creation.is_liked_by(user_id)

    def replace_all(self, creations: Iterable[Creation]) -> None:
        if self.closed:
            return
        creations = list(creations)
        self._order = [c.id for c in creations]
        self._by_id = {c.id: c for c in creations}

    def set_liked(self, creation_id: str, user_id: str, liked: bool) -> bool:
        """Make ``user_id``'s membership equal ``liked``.

        Returns False when nothing was written (unknown creation or closed
        store).
        """
        if self.closed:
            return False
        creation = self._by_id.get(creation_id)
        if creation is None:
            logger.debug("Ignoring like update for unknown creation %s", creation_id)
            return False
        if liked:
            creation.likes.add(user_id)
        else:
            creation.likes.discard(user_id)
        return True

    def close(self) -> None:
        self.closed = True
