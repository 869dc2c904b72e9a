"""
Optimistic like/unlike synchronization.

A toggle is applied to the store immediately, then sent to the server. Each
toggle becomes a ``LikeIntent`` carrying the membership it replaced, so a
failed request can be undone without re-reading state that later toggles may
already have changed.

Responses can arrive out of order relative to later local toggles. Two rules
keep the display honest:

* A failed intent is reverted only if it is still the newest intent for that
  creation and actor, the display still shows what it set, and that differs
  from what the server last acknowledged.
* Once no intents are in flight for a creation and actor, the display is set
  to the last acknowledged server state.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol

from client.errors import LikeSyncError, NotFound, TransportFailure
from client.store import CreationStore

logger = logging.getLogger(__name__)

LIKE_ANIMATION_SECONDS = 1.0


class LikeApi(Protocol):
    async def toggle_like(self, creation_id: str, liked: Optional[bool] = None) -> str:
        ...


@dataclass(frozen=True)
class LikeIntent:
    creation_id: str
    actor_id: str
    liked: bool
    previous: bool
    seq: int


@dataclass
class _LikeTrack:
    """Server view of one (creation, actor) pair while intents are in flight."""

    committed: bool
    acked_seq: int = 0
    latest_seq: int = 0
    in_flight: set[int] = field(default_factory=set)


def _log_notification(error: LikeSyncError) -> None:
    logger.warning("Like update failed: %s", error)


class LikeSynchronizer:
    def __init__(
        self,
        store: CreationStore,
        api: LikeApi,
        notify: Optional[Callable[[LikeSyncError], None]] = None,
        animation_seconds: float = LIKE_ANIMATION_SECONDS,
    ):
        self.store = store
        self.api = api
        self.notify = notify or _log_notification
        self.animation_seconds = animation_seconds
        # Creation id currently showing the like animation, if any.
        self.animating: Optional[str] = None
        self.closed = False
        self._animation_timer: Optional[asyncio.TimerHandle] = None
        self._seq = itertools.count(1)
        self._tracks: dict[tuple[str, str], _LikeTrack] = {}
        self._tasks: set[asyncio.Task] = set()

    def toggle(self, creation_id: str, actor_id: str) -> asyncio.Task:
        """
        Flip ``actor_id``'s like on a creation and sync it to the server.

        The store is updated before this returns. The returned task resolves
        to True when the server accepted the change and False otherwise;
        failures are reported through ``notify`` rather than raised.

        Raises:
            NotFound: If the store holds no creation with ``creation_id``.
                It is passed to ``notify`` as well before being raised.
        """
        previous = self.store.is_liked(creation_id, actor_id)
        if previous is None:
            error = NotFound(creation_id)
            self.notify(error)
            raise error

        key = (creation_id, actor_id)
        track = self._tracks.get(key)
        if track is None:
            # Settled, so the display is the acknowledged state.
            track = self._tracks[key] = _LikeTrack(committed=previous)

        intent = LikeIntent(
            creation_id=creation_id,
            actor_id=actor_id,
            liked=not previous,
            previous=previous,
            seq=next(self._seq),
        )
        track.latest_seq = intent.seq
        track.in_flight.add(intent.seq)

        self.store.set_liked(creation_id, actor_id, intent.liked)
        if intent.liked:
            self._start_animation(creation_id)

        task = asyncio.get_running_loop().create_task(self._send(intent))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def is_settled(self, creation_id: str, actor_id: str) -> bool:
        return (creation_id, actor_id) not in self._tracks

    async def drain(self) -> None:
        """Wait for every in-flight request to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def close(self) -> None:
        """Detach from the view. Responses arriving later are dropped."""
        self.closed = True
        self._tracks.clear()
        if self._animation_timer is not None:
            self._animation_timer.cancel()
            self._animation_timer = None
        self.animating = None

    async def _send(self, intent: LikeIntent) -> bool:
        try:
            await self.api.toggle_like(intent.creation_id, intent.liked)
        except LikeSyncError as e:
            self._resolve(intent, e)
            return False
        except Exception as e:
            # Still revert and settle the pair before propagating.
            self._resolve(intent, TransportFailure(str(e) or e.__class__.__name__))
            raise
        self._resolve(intent, None)
        return True

    def _resolve(self, intent: LikeIntent, error: Optional[LikeSyncError]) -> None:
        if self.closed:
            logger.debug("Dropping like response for closed view: %s", intent)
            return
        key = (intent.creation_id, intent.actor_id)
        track = self._tracks.get(key)
        if track is None:
            return
        track.in_flight.discard(intent.seq)

        if error is None:
            if intent.seq > track.acked_seq:
                track.acked_seq = intent.seq
                track.committed = intent.liked
        else:
            self._revert(intent, track)
            self.notify(error)

        if not track.in_flight:
            del self._tracks[key]
            shown = self.store.is_liked(intent.creation_id, intent.actor_id)
            if shown is not None and shown != track.committed:
                self.store.set_liked(
                    intent.creation_id, intent.actor_id, track.committed
                )

    def _revert(self, intent: LikeIntent, track: _LikeTrack) -> None:
        if intent.seq != track.latest_seq:
            # A newer toggle owns the display; its own response settles it.
            return
        if self.store.is_liked(intent.creation_id, intent.actor_id) != intent.liked:
            return
        if intent.liked == track.committed:
            return
        logger.info(
            "Reverting %s on %s for %s",
            "like" if intent.liked else "unlike",
            intent.creation_id,
            intent.actor_id,
        )
        self.store.set_liked(intent.creation_id, intent.actor_id, intent.previous)

    def _start_animation(self, creation_id: str) -> None:
        if self._animation_timer is not None:
            self._animation_timer.cancel()
        self.animating = creation_id
        self._animation_timer = asyncio.get_running_loop().call_later(
            self.animation_seconds, self._clear_animation, creation_id
        )

    def _clear_animation(self, creation_id: str) -> None:
        if self.animating == creation_id:
            self.animating = None
        self._animation_timer = None
