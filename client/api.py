"""
Async HTTP client for the creations API.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

import httpx
from dacite import Config, DaciteError, from_dict

from client.config import ClientSettings, get_client_settings
from client.errors import RejectedByServer, TransportFailure
from shared.types import Creation, CreationType

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Awaitable[str]]

CREATION_CONFIG = Config(
    check_types=False,
    cast=[CreationType],
    type_hooks={set[str]: set},
)


def creation_from_json(data: dict) -> Creation:
    return from_dict(data_class=Creation, data=data, config=CREATION_CONFIG)


class CreationsApi:
    """
    Thin wrapper over ``httpx.AsyncClient`` for the ``/user`` routes.

    Every request carries ``Authorization: Bearer <token>`` from
    ``token_provider``. Failures are raised as ``TransportFailure`` when no
    usable response arrived and ``RejectedByServer`` otherwise.
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        settings: Optional[ClientSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = settings or get_client_settings()
        self._token_provider = token_provider
        self._client = httpx.AsyncClient(
            base_url=settings.base_url.rstrip("/") + settings.api_prefix,
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "CreationsApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            headers = {"Authorization": f"Bearer {await self._token_provider()}"}
            response = await self._client.request(method, path, headers=headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RejectedByServer(
                f"HTTP {e.response.status_code} from {path}"
            ) from e
        except Exception as e:
            # Token lookup and transport errors alike leave us without a response.
            raise TransportFailure(str(e) or e.__class__.__name__) from e

        try:
            data = response.json()
        except ValueError as e:
            raise RejectedByServer(f"Invalid JSON from {path}") from e
        if not isinstance(data, dict):
            raise RejectedByServer(f"Unexpected response body from {path}")
        if not data.get("success"):
            raise RejectedByServer(data.get("message") or "Request failed")
        return data

    async def _fetch_creations(self, path: str) -> list[Creation]:
        data = await self._request("GET", path)
        try:
            return [creation_from_json(item) for item in data.get("creations", [])]
        except (DaciteError, ValueError, TypeError) as e:
            raise RejectedByServer(f"Invalid creation payload from {path}") from e

    async def fetch_published_creations(self) -> list[Creation]:
        return await self._fetch_creations("/user/get-published-creations")

    async def fetch_user_creations(self) -> list[Creation]:
        return await self._fetch_creations("/user/get-user-creations")

    async def toggle_like(self, creation_id: str, liked: Optional[bool] = None) -> str:
        """Ask the server to like (or unlike) a creation; returns its message."""
        body: dict = {"id": creation_id}
        if liked is not None:
            body["liked"] = liked
        data = await self._request("POST", "/user/toggle-like-creations", json=body)
        logger.debug("toggle_like %s -> %s", creation_id, data.get("message"))
        return data.get("message", "")
