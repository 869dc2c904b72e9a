import json
import unittest

import httpx

from client.api import CreationsApi
from client.config import ClientSettings
from client.errors import RejectedByServer, TransportFailure
from shared.types import CreationType

SETTINGS = ClientSettings(base_url="http://backend.test", request_timeout=5.0)


async def _token():
    return "token-123"


class CreationsApiTests(unittest.IsolatedAsyncioTestCase):
    def _api(self, handler):
        self.requests = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        return CreationsApi(_token, settings=SETTINGS, transport=httpx.MockTransport(record))

    async def test_fetch_published_creations(self):
        payload = {
            "success": True,
            "creations": [
                {
                    "id": "c1",
                    "user_id": "u1",
                    "prompt": "a fox",
                    "content": "https://img/fox.png",
                    "type": "image",
                    "publish": True,
                    "likes": ["u2", "u3"],
                    "created_at": 10.5,
                }
            ],
        }
        async with self._api(lambda r: httpx.Response(200, json=payload)) as api:
            creations = await api.fetch_published_creations()

        request = self.requests[0]
        self.assertEqual(request.url.path, "/api/user/get-published-creations")
        self.assertEqual(request.headers["Authorization"], "Bearer token-123")
        self.assertEqual(len(creations), 1)
        self.assertEqual(creations[0].type, CreationType.IMAGE)
        self.assertEqual(creations[0].likes, {"u2", "u3"})

    async def test_toggle_like_sends_desired_state(self):
        response = {"success": True, "message": "Creation liked"}
        async with self._api(lambda r: httpx.Response(200, json=response)) as api:
            message = await api.toggle_like("c1", True)

        self.assertEqual(message, "Creation liked")
        request = self.requests[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(request.url.path, "/api/user/toggle-like-creations")
        self.assertEqual(json.loads(request.content), {"id": "c1", "liked": True})

    async def test_success_false_is_rejection(self):
        response = {"success": False, "message": "Creation not found"}
        async with self._api(lambda r: httpx.Response(200, json=response)) as api:
            with self.assertRaises(RejectedByServer) as ctx:
                await api.toggle_like("missing")
        self.assertIn("Creation not found", str(ctx.exception))

    async def test_http_error_status_is_rejection(self):
        async with self._api(lambda r: httpx.Response(401, json={"detail": "no"})) as api:
            with self.assertRaises(RejectedByServer):
                await api.fetch_user_creations()

    async def test_connection_error_is_transport_failure(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with self._api(refuse) as api:
            with self.assertRaises(TransportFailure):
                await api.toggle_like("c1")


    async def test_token_failure_is_transport_failure(self):
        async def broken_token():
            raise RuntimeError("identity provider unreachable")

        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"success": True})

        api = CreationsApi(
            broken_token, settings=SETTINGS, transport=httpx.MockTransport(handler)
        )
        async with api:
            with self.assertRaises(TransportFailure) as ctx:
                await api.toggle_like("c1", True)
        self.assertIn("identity provider unreachable", str(ctx.exception))
        self.assertEqual(requests, [])

    async def test_unknown_creation_type_is_rejection(self):
        payload = {
            "success": True,
            "creations": [
                {
                    "id": "c1",
                    "user_id": "u1",
                    "prompt": "a clip",
                    "content": "https://cdn/clip.mp4",
                    "type": "video",
                    "publish": True,
                    "likes": [],
                    "created_at": 1.0,
                }
            ],
        }
        async with self._api(lambda r: httpx.Response(200, json=payload)) as api:
            with self.assertRaises(RejectedByServer) as ctx:
                await api.fetch_published_creations()
        self.assertIn("Invalid creation payload", str(ctx.exception))

    async def test_missing_creation_field_is_rejection(self):
        payload = {"success": True, "creations": [{"id": "c1", "type": "image"}]}
        async with self._api(lambda r: httpx.Response(200, json=payload)) as api:
            with self.assertRaises(RejectedByServer):
                await api.fetch_user_creations()

    async def test_non_object_body_is_rejection(self):
        async with self._api(lambda r: httpx.Response(200, json=["not", "an", "object"])) as api:
            with self.assertRaises(RejectedByServer):
                await api.fetch_published_creations()


if __name__ == "__main__":
    unittest.main()
