"""
Types shared by the creations API and its client.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum


class CreationType(StrEnum):
    ARTICLE = "article"
    BLOG_TITLE = "blog-title"
    IMAGE = "image"
    RESUME_REVIEW = "resume-review"


@dataclass
class Creation:
    """A stored unit of generated content and the users who liked it."""

    id: str
    user_id: str
    prompt: str
    content: str
    type: CreationType
    publish: bool = False
    likes: set[str] = field(default_factory=set)
    created_at: float = field(default_factory=lambda: time.time())

    def is_liked_by(self, user_id: str) -> bool:
        return user_id in self.likes

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "prompt": self.prompt,
            "content": self.content,
            "type": self.type.value,
            "publish": self.publish,
            # Liker sets have no ordering; sort for stable payloads.
            "likes": sorted(self.likes),
            "created_at": self.created_at,
        }
