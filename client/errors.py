"""
Errors surfaced by the like synchronizer and the API client.

None of these are fatal: they are reported to the user and the next action
proceeds normally.
"""

from __future__ import annotations


class LikeSyncError(Exception):
    pass


class NotFound(LikeSyncError):
    """No local record exists for the creation."""

    def __init__(self, creation_id: str):
        super().__init__(f"Creation not found: {creation_id}")
        self.creation_id = creation_id


class TransportFailure(LikeSyncError):
    """The request got no usable response."""


class RejectedByServer(LikeSyncError):
    """The server answered with ``success: false``."""
