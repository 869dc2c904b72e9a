"""
Client-side "load more" over an already fetched list.
"""

from __future__ import annotations

from typing import Sequence, TypeVar

T = TypeVar("T")

INITIAL_VISIBLE = 15
REVEAL_STEP = 10


class PaginatedReveal:
    """Visible-count cursor; never exceeds the list length."""

    def __init__(
        self, total: int = 0, initial: int = INITIAL_VISIBLE, step: int = REVEAL_STEP
    ):
        if initial < 0 or step <= 0:
            raise ValueError("initial must be >= 0 and step must be > 0")
        self.initial = initial
        self.step = step
        self.total = 0
        self.visible_count = 0
        self.reset(total)

    def reset(self, total: int) -> None:
        self.total = max(total, 0)
        self.visible_count = min(self.initial, self.total)

    @property
    def has_more(self) -> bool:
        return self.visible_count < self.total

    def reveal_more(self) -> int:
        if self.has_more:
            self.visible_count = min(self.visible_count + self.step, self.total)
        return self.visible_count

    def visible(self, items: Sequence[T]) -> list[T]:
        return list(items[: self.visible_count])
