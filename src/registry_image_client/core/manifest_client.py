"""Manifest retrieval over the Docker Registry HTTP API v2."""

import asyncio
import dataclasses
import logging
from typing import Optional

import aiohttp

from ..auth import Authenticator, TokenAuthenticator
from ..exceptions import (
    AuthenticationFailedError,
    NotFoundError,
    RegistryConnectionError,
    RegistryResponseError,
    UnauthorizedError,
)
from ..layers import unique_layers
from ..manifest import ACCEPTED_MEDIA_TYPES, decode_manifest
from ..models import ImageReference, ManifestRequest
from ..reference import parse_image_reference
from .session import create_session
from .types import RegistryConfig

logger = logging.getLogger(__name__)


class ManifestClient:
    """Fetches image manifests, answering one authentication challenge per fetch."""

    def __init__(
        self,
        config: Optional[RegistryConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
        authenticator: Optional[Authenticator] = None,
    ) -> None:
        """Initialize the manifest client.

        Args:
            config: Registry configuration
            session: Existing aiohttp session; it is not closed by this client
            authenticator: Challenge handler, TokenAuthenticator by default
        """
        self.config = config or RegistryConfig()
        self.session = session
        self.authenticator = authenticator
        self._owns_session = session is None
        if session and not authenticator:
            self.authenticator = TokenAuthenticator(session, self.config)

    async def __aenter__(self) -> "ManifestClient":
        """Enter async context manager."""
        if not self.session:
            self.session = await create_session(self.config)
            self._owns_session = True
        if not self.authenticator:
            self.authenticator = TokenAuthenticator(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()

    async def close(self) -> None:
        """Close the client session if this client created it."""
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def pull(self, image_name: str, insecure: bool = False) -> ImageReference:
        """Parse an image name and fetch its manifest.

        Args:
            image_name: Image reference (e.g. "zendesk/alpine:latest")
            insecure: True for an explicit registry reached over HTTP

        Returns:
            ImageReference with schema version and unique layers
        """
        reference = parse_image_reference(image_name, insecure)
        logger.info(f"pulling image: {reference}")
        return await self.fetch_manifest(reference)

    @staticmethod
    async def _read_body(resp: aiohttp.ClientResponse) -> bytes:
        try:
            return await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RegistryConnectionError(f"reading manifest body: {e}") from e

    async def _authenticate(
        self, resp: aiohttp.ClientResponse, request: ManifestRequest
    ) -> ManifestRequest:
        try:
            return await self.authenticator.authenticate(resp, request)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise AuthenticationFailedError(f"authenticating: {e}") from e

    async def _send(self, request: ManifestRequest) -> tuple[int, bytes]:
        """Send the manifest request, retrying once after a 401 challenge."""
        try:
            async with self.session.get(request.url, headers=request.headers) as resp:
                if resp.status != 401:
                    return resp.status, await self._read_body(resp)

                logger.info("Pull is unauthorized, authenticating")
                authenticated = await self._authenticate(resp, request)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RegistryConnectionError(f"retrieving manifest: {e}") from e

        try:
            async with self.session.get(
                authenticated.url, headers=authenticated.headers
            ) as resp:
                return resp.status, await self._read_body(resp)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RegistryConnectionError(f"retrying manifest: {e}") from e

    async def fetch_manifest(self, reference: ImageReference) -> ImageReference:
        """Retrieve the manifest of a parsed reference.

        Args:
            reference: Parsed image reference

        Returns:
            Copy of ``reference`` with schema version and deduplicated layers

        Raises:
            AuthenticationFailedError: If answering the challenge fails
            UnauthorizedError: If the registry rejects the authenticated request
            NotFoundError: If the registry has no such manifest
            MalformedManifestError: If the manifest cannot be decoded
            RegistryResponseError: On any other non-200 status
            RegistryConnectionError: On transport failures
        """
        request = ManifestRequest(
            url=reference.manifest_url,
            headers={"Accept": ", ".join(ACCEPTED_MEDIA_TYPES)},
        )
        logger.debug(f"GET {request.url}")

        status, body = await self._send(request)

        if status != 200:
            if status == 401:
                raise UnauthorizedError(f"Unauthorized to pull {reference}")
            if status == 404:
                raise NotFoundError(f"Manifest not found for {reference}")
            raise RegistryResponseError(status, body.decode("utf-8", errors="replace"))

        manifest = decode_manifest(body)

        if manifest.schema_version == 1:
            image = dataclasses.replace(
                reference,
                schema_version=1,
                fs_layers=list(manifest.layers),
                layers=[],
            )
        else:
            image = dataclasses.replace(
                reference,
                schema_version=manifest.schema_version,
                fs_layers=[],
                layers=list(manifest.layers),
            )

        unique_layers(image)
        return image
