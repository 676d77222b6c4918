"""Test helpers: an in-process fake registry."""

import json

from aiohttp import web
from aiohttp.test_utils import TestServer

from registry_image_client import ImageReference

LAYER_A = "sha256:" + "a" * 64
LAYER_B = "sha256:" + "b" * 64
LAYER_C = "sha256:" + "c" * 64


def schema2_manifest(*digests: str) -> str:
    """Build a schema 2 manifest body with the given layer digests."""
    return json.dumps(
        {
            "schemaVersion": 2,
            "mediaType": "application/vnd.docker.distribution.manifest.v2+json",
            "config": {
                "mediaType": "application/vnd.docker.container.image.v1+json",
                "size": 1469,
                "digest": "sha256:" + "f" * 64,
            },
            "layers": [
                {
                    "mediaType": "application/vnd.docker.image.rootfs.diff.tar.gzip",
                    "size": 1024,
                    "digest": digest,
                }
                for digest in digests
            ],
        }
    )


def schema1_manifest(*blob_sums: str) -> str:
    """Build a schema 1 manifest body with the given blob sums."""
    return json.dumps(
        {
            "schemaVersion": 1,
            "name": "zendesk/alpine",
            "tag": "latest",
            "architecture": "amd64",
            "fsLayers": [{"blobSum": blob_sum} for blob_sum in blob_sums],
            "history": [],
        }
    )


class FakeRegistry:
    """Registry v2 stub serving queued manifest responses and a token endpoint."""

    def __init__(self) -> None:
        self.responses: list[tuple[int, str, dict]] = []
        self.manifest_requests: list[dict] = []
        self.token_requests: list[dict] = []
        self.token_status = 200
        self.token_body: object = {"token": "secret-token"}

        app = web.Application()
        app.router.add_get("/v2/{name:.+}/manifests/{tag}", self.handle_manifest)
        app.router.add_get("/token", self.handle_token)
        self.server = TestServer(app)

    async def start(self) -> None:
        await self.server.start_server()

    async def close(self) -> None:
        await self.server.close()

    @property
    def host(self) -> str:
        return f"{self.server.host}:{self.server.port}"

    @property
    def url(self) -> str:
        return f"http://{self.host}"

    def reference(self, name: str = "zendesk/alpine", tag: str = "latest") -> ImageReference:
        return ImageReference(registry=self.url, name=name, tag=tag)

    def queue(self, status: int, body: str = "", headers: dict | None = None) -> None:
        self.responses.append((status, body, headers or {}))

    def queue_challenge(self, scope: str = "repository:zendesk/alpine:pull") -> None:
        self.queue(
            401,
            '{"errors":[{"code":"UNAUTHORIZED"}]}',
            {
                "WWW-Authenticate": (
                    f'Bearer realm="{self.url}/token",service="fake-registry",'
                    f'scope="{scope}"'
                )
            },
        )

    async def handle_manifest(self, request: web.Request) -> web.Response:
        self.manifest_requests.append(
            {
                "name": request.match_info["name"],
                "tag": request.match_info["tag"],
                "headers": dict(request.headers),
            }
        )
        if not self.responses:
            return web.Response(status=500, text="no response queued")

        status, body, headers = self.responses.pop(0)
        return web.Response(status=status, text=body, headers=headers)

    async def handle_token(self, request: web.Request) -> web.Response:
        self.token_requests.append(
            {"query": dict(request.query), "headers": dict(request.headers)}
        )
        if isinstance(self.token_body, str):
            return web.Response(status=self.token_status, text=self.token_body)
        return web.json_response(self.token_body, status=self.token_status)
