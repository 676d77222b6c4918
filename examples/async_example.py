"""Example usage of the async image manifest client."""

import asyncio
import logging
import sys

# Add parent directory to path
sys.path.insert(0, "src")

from registry_image_client import (
    ManifestClient,
    RegistryConfig,
    RegistryError,
    get_manifest_layers,
)

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main():
    """Pull a manifest from a local registry and print blob URLs."""
    image_name = "localhost:15000/nginx:latest"

    try:
        async with ManifestClient(RegistryConfig.from_env()) as client:
            image = await client.pull(image_name, insecure=True)

        logger.info(f"Schema version: {image.schema_version}")
        for layer in image.active_layers:
            logger.info(f"  {image.blobs_uri(layer.blob_sum)}")

    except RegistryError as e:
        logger.error(f"Registry error: {e}")


async def concurrent_pulls():
    """Example of independent concurrent pulls."""
    images = ["localhost:15000/nginx:latest", "localhost:15000/alpine:3.18"]

    results = await asyncio.gather(
        *(get_manifest_layers(name, insecure=True) for name in images),
        return_exceptions=True,
    )

    for name, result in zip(images, results, strict=False):
        if isinstance(result, Exception):
            logger.error(f"{name}: {result}")
        else:
            logger.info(f"{name}: {len(result)} layers")


if __name__ == "__main__":
    print("=== Pull Manifest ===")
    asyncio.run(main())

    print("\n=== Concurrent Pulls ===")
    asyncio.run(concurrent_pulls())
