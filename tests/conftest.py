"""Test configuration and fixtures."""

import pytest_asyncio

from registry_image_client import ManifestClient, RegistryConfig
from tests.helpers import FakeRegistry


@pytest_asyncio.fixture
async def fake_registry():
    """Start an in-process fake registry."""
    registry = FakeRegistry()
    await registry.start()
    yield registry
    await registry.close()


@pytest_asyncio.fixture
async def manifest_client():
    """Manifest client with a short timeout."""
    async with ManifestClient(RegistryConfig(timeout=5)) as client:
        yield client
