"""Registry Image Client - Async image reference and manifest client for Docker Registry API v2."""

__version__ = "0.1.0"

from .auth import Authenticator, TokenAuthenticator
from .core.manifest_client import ManifestClient
from .core.types import RegistryConfig
from .exceptions import (
    AuthenticationFailedError,
    DisallowedError,
    MalformedManifestError,
    NotFoundError,
    RegistryConnectionError,
    RegistryError,
    RegistryResponseError,
    UnauthorizedError,
    ValidationError,
)
from .layers import unique_layers
from .manifest import decode_manifest
from .models import ImageReference, Layer
from .reference import HUB_URI, parse_image_reference
from .registry import blobs_uri, get_manifest_layers, parse_reference, pull

__all__ = [
    "ManifestClient",
    "RegistryConfig",
    "Authenticator",
    "TokenAuthenticator",
    "ImageReference",
    "Layer",
    "HUB_URI",
    "parse_image_reference",
    "unique_layers",
    "decode_manifest",
    "parse_reference",
    "pull",
    "get_manifest_layers",
    "blobs_uri",
    "RegistryError",
    "ValidationError",
    "DisallowedError",
    "AuthenticationFailedError",
    "UnauthorizedError",
    "NotFoundError",
    "MalformedManifestError",
    "RegistryResponseError",
    "RegistryConnectionError",
]
