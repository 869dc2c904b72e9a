"""
HTTP routes for the creations API.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from backend.auth import get_current_user_id
from backend.db import DbClient
from backend.dependencies import get_db_client
from backend.schemas import (
    CreationPayload,
    CreationsResponse,
    MessageResponse,
    ToggleLikeRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", dependencies=[Depends(get_current_user_id)])


def _failure(message: str) -> MessageResponse:
    return MessageResponse(success=False, message=message)


@router.get(
    "/get-user-creations", response_model=CreationsResponse | MessageResponse
)
def get_user_creations(
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    """All creations owned by the caller, newest first."""
    try:
        creations = db.list_user_creations(user_id)
    except SQLAlchemyError as e:
        logger.exception("Failed to list creations for %s", user_id)
        return _failure(str(e))
    return CreationsResponse(
        creations=[CreationPayload.from_creation(c) for c in creations]
    )


@router.get(
    "/get-published-creations", response_model=CreationsResponse | MessageResponse
)
def get_published_creations(db: DbClient = Depends(get_db_client)):
    """Every published creation, newest first, with its liker set."""
    try:
        creations = db.list_published_creations()
    except SQLAlchemyError as e:
        logger.exception("Failed to list published creations")
        return _failure(str(e))
    return CreationsResponse(
        creations=[CreationPayload.from_creation(c) for c in creations]
    )


@router.post("/toggle-like-creations", response_model=MessageResponse)
def toggle_like_creation(
    payload: ToggleLikeRequest,
    user_id: str = Depends(get_current_user_id),
    db: DbClient = Depends(get_db_client),
):
    """
    Like or unlike a creation for the caller.

    Without ``liked`` the caller's membership is flipped; with it the
    membership is set, so a repeated request has no further effect.
    """
    try:
        liked = db.toggle_like(payload.id, user_id, payload.liked)
    except SQLAlchemyError as e:
        logger.exception("Failed to toggle like on %s", payload.id)
        return _failure(str(e))
    if liked is None:
        return _failure("Creation not found")
    logger.info(
        "User %s %s creation %s", user_id, "liked" if liked else "unliked", payload.id
    )
    return MessageResponse(
        success=True, message="Creation liked" if liked else "Creation unliked"
    )
