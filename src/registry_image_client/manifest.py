"""Manifest decoding for schema 1 and schema 2 registry manifests."""

import json
from typing import Any

from .exceptions import MalformedManifestError
from .models import Layer, Manifest

MANIFEST_V2 = "application/vnd.docker.distribution.manifest.v2+json"
MANIFEST_V1_SIGNED = "application/vnd.docker.distribution.manifest.v1+prettyjws"
MANIFEST_V1 = "application/vnd.docker.distribution.manifest.v1+json"
OCI_MANIFEST = "application/vnd.oci.image.manifest.v1+json"

ACCEPTED_MEDIA_TYPES = [MANIFEST_V2, OCI_MANIFEST, MANIFEST_V1_SIGNED, MANIFEST_V1]


def parse_manifest_json(body: bytes | str) -> dict[str, Any]:
    """Parse manifest body into a JSON object."""
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedManifestError(f"unmarshalling manifest body: {e}") from e

    if not isinstance(data, dict):
        raise MalformedManifestError("Manifest must be a JSON object")
    return data


def get_schema_version(data: dict[str, Any]) -> int:
    """Read the schemaVersion discriminator."""
    version = data.get("schemaVersion")
    # bool is an int subclass
    if not isinstance(version, int) or isinstance(version, bool):
        raise MalformedManifestError(f"Invalid schemaVersion: {version!r}")
    return version


def extract_layers(entries: Any, digest_field: str) -> list[Layer]:
    """Build layers from a manifest layer array."""
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise MalformedManifestError("Manifest layer list must be an array")

    layers = []
    for entry in entries:
        digest = entry.get(digest_field) if isinstance(entry, dict) else None
        if not isinstance(digest, str):
            raise MalformedManifestError(
                f"Manifest layer entry without {digest_field}: {entry!r}"
            )
        layers.append(Layer(blob_sum=digest))
    return layers


def decode_manifest(body: bytes | str) -> Manifest:
    """Decode a manifest body.

    Schema 1 manifests list layers under ``fsLayers`` with a ``blobSum``
    field, schema 2 and OCI manifests under ``layers`` with a ``digest``
    field. A manifest without a layer list (a manifest list, for instance)
    decodes with no layers.

    Args:
        body: Raw response body

    Returns:
        Manifest with schema version and layers in manifest order

    Raises:
        MalformedManifestError: If the body is not a recognizable manifest
    """
    data = parse_manifest_json(body)
    version = get_schema_version(data)

    if version == 1:
        layers = extract_layers(data.get("fsLayers"), "blobSum")
    else:
        layers = extract_layers(data.get("layers"), "digest")

    return Manifest(schema_version=version, layers=layers)
