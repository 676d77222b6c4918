"""HTTP session factory."""

from typing import Optional

import aiohttp

from .types import RegistryConfig


async def create_session(
    config: Optional[RegistryConfig] = None,
    connector: Optional[aiohttp.BaseConnector] = None,
) -> aiohttp.ClientSession:
    """Create an aiohttp session configured for registry access.

    Args:
        config: Registry configuration (timeout, user agent)
        connector: aiohttp connector for connection pooling

    Returns:
        New client session; the caller owns and closes it
    """
    config = config or RegistryConfig()
    return aiohttp.ClientSession(
        connector=connector,
        timeout=aiohttp.ClientTimeout(total=config.timeout),
        headers={"User-Agent": config.user_agent},
    )
