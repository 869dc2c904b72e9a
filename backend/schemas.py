"""
Pydantic schemas for the creations API.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from shared.types import Creation


class CreationPayload(BaseModel):
    id: str
    user_id: str
    prompt: str
    content: str
    type: str
    publish: bool
    likes: list[str]
    created_at: float

    @classmethod
    def from_creation(cls, creation: Creation) -> "CreationPayload":
        return cls(**creation.as_dict())


class CreationsResponse(BaseModel):
    success: Literal[True] = True
    creations: list[CreationPayload]


class ToggleLikeRequest(BaseModel):
    id: str = Field(..., max_length=64)
    # Desired membership. Omitted means flip whatever the server holds.
    liked: Optional[bool] = None


class MessageResponse(BaseModel):
    success: bool
    message: str
