"""Registry authentication challenge handling.

A registry that requires credentials answers ``401`` with a
``WWW-Authenticate`` header such as::

    Bearer realm="https://auth.docker.io/token",service="registry.docker.io",scope="repository:library/alpine:pull"

The authenticator turns that challenge into an ``Authorization`` header on a
copy of the original request, so the caller can send it once more.
"""

import asyncio
import base64
import logging
import re
from typing import Optional, Protocol

import aiohttp

from .core.types import RegistryConfig
from .exceptions import AuthenticationFailedError
from .models import ManifestRequest

logger = logging.getLogger(__name__)

CHALLENGE_PARAM_PATTERN = re.compile(r'(\w+)="([^"]*)"')


class Authenticator(Protocol):
    """Answers a registry 401 challenge for a request."""

    async def authenticate(
        self, response: aiohttp.ClientResponse, request: ManifestRequest
    ) -> ManifestRequest:
        """Return ``request`` amended with credentials for ``response``'s challenge."""
        ...


def parse_www_authenticate(header: str) -> tuple[str, dict[str, str]]:
    """Split a WWW-Authenticate header into scheme and parameters.

    Example:
        parse_www_authenticate('Bearer realm="https://ghcr.io/token",service="ghcr.io"')
        # ("bearer", {"realm": "https://ghcr.io/token", "service": "ghcr.io"})
    """
    scheme, _, params_str = header.strip().partition(" ")
    params = dict(CHALLENGE_PARAM_PATTERN.findall(params_str))
    return scheme.lower(), params


class TokenAuthenticator:
    """Authenticator for Bearer token and Basic challenges."""

    def __init__(
        self, session: aiohttp.ClientSession, config: Optional[RegistryConfig] = None
    ) -> None:
        self.session = session
        self.config = config or RegistryConfig()

    def _basic_auth(self) -> Optional[str]:
        """Encode configured credentials as a Basic Authorization header value."""
        if not self.config.has_credentials:
            return None
        credentials = f"{self.config.username}:{self.config.password}"
        encoded = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
        return f"Basic {encoded}"

    async def authenticate(
        self, response: aiohttp.ClientResponse, request: ManifestRequest
    ) -> ManifestRequest:
        header = response.headers.get("WWW-Authenticate")
        if not header:
            raise AuthenticationFailedError(
                f"Registry returned 401 without a challenge for {request.url}"
            )

        scheme, params = parse_www_authenticate(header)
        logger.debug(f"Authentication challenge: scheme={scheme}, params={params}")

        if scheme == "bearer":
            token = await self.fetch_token(params)
            return request.with_header("Authorization", f"Bearer {token}")

        if scheme == "basic":
            auth = self._basic_auth()
            if auth is None:
                raise AuthenticationFailedError(
                    "Registry requires basic authentication but no credentials "
                    "are configured"
                )
            return request.with_header("Authorization", auth)

        raise AuthenticationFailedError(f"Unsupported authentication scheme: {scheme}")

    async def fetch_token(self, params: dict[str, str]) -> str:
        """Fetch a bearer token from the challenge's realm.

        Args:
            params: Challenge parameters (realm, service, scope)

        Returns:
            Bearer token

        Raises:
            AuthenticationFailedError: If the token cannot be obtained
        """
        realm = params.get("realm")
        if not realm:
            raise AuthenticationFailedError("Bearer challenge without realm")

        query = {key: params[key] for key in ("service", "scope") if key in params}
        headers = {}
        basic = self._basic_auth()
        if basic:
            headers["Authorization"] = basic

        try:
            async with self.session.get(realm, params=query, headers=headers) as resp:
                if resp.status != 200:
                    text = await resp.text()
                    raise AuthenticationFailedError(
                        f"Token request to {realm} failed: {resp.status} - {text}"
                    )
                data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise AuthenticationFailedError(f"Failed to fetch token: {e}") from e
        except ValueError as e:
            raise AuthenticationFailedError(f"Invalid token response: {e}") from e

        if not isinstance(data, dict):
            raise AuthenticationFailedError(f"Invalid token response from {realm}")

        token = data.get("token") or data.get("access_token")
        if not token:
            raise AuthenticationFailedError(f"Token endpoint {realm} returned no token")

        logger.debug(f"Obtained token from {realm}")
        return token
