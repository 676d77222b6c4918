"""Data models for image references and manifest layers."""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Layer:
    """Filesystem layer identified by its content digest."""

    blob_sum: str


@dataclass
class ImageReference:
    """Image reference resolved against a registry.

    ``registry`` is the API origin (``<scheme>://<host>[:<port>]``) without the
    ``/v2`` path element; the URL builders below add it. ``schema_version`` and
    the layer lists stay empty until a manifest has been fetched. Only one of
    ``fs_layers`` (schema 1) and ``layers`` (schema 2 and later) is populated.
    """

    registry: str
    name: str
    tag: str = "latest"
    schema_version: int = 0
    fs_layers: List[Layer] = field(default_factory=list)
    layers: List[Layer] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.registry}/v2/{self.name}:{self.tag}"

    @property
    def manifest_url(self) -> str:
        """URL of the manifest for this reference's tag."""
        return f"{self.registry}/v2/{self.name}/manifests/{self.tag}"

    @property
    def active_layers(self) -> List[Layer]:
        """Layer list selected by the manifest schema version."""
        if self.schema_version == 1:
            return self.fs_layers
        return self.layers

    def blobs_uri(self, digest: str) -> str:
        """Build the download URL of a blob in this repository.

        Args:
            digest: Blob digest, used verbatim (e.g. "sha256:abc...")

        Returns:
            Fully-qualified blob URL
        """
        return f"{self.registry}/v2/{self.name}/blobs/{digest}"


@dataclass(frozen=True)
class Manifest:
    """Decoded manifest: schema version and its raw layer list."""

    schema_version: int
    layers: List[Layer]


@dataclass(frozen=True)
class ManifestRequest:
    """GET request for a manifest; amended copies carry credentials."""

    url: str
    headers: dict = field(default_factory=dict)

    def with_header(self, name: str, value: str) -> "ManifestRequest":
        """Return a copy of the request with one header set."""
        headers = dict(self.headers)
        headers[name] = value
        return ManifestRequest(url=self.url, headers=headers)
