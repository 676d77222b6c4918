"""Image reference parsing.

Turns strings such as ``register.com:5080/zendesk/alpine:latest`` or
``jgsqware/ubuntu-git`` into :class:`ImageReference` values. Parsing is pure:
no network access happens here.

Policy: an explicit registry host must be requested with ``insecure=True``
and is then reached over plain HTTP; a bare repository name must be parsed
with ``insecure=False`` and resolves against Docker Hub.
"""

from .exceptions import DisallowedError, ValidationError
from .models import ImageReference

HUB_URI = "https://registry-1.docker.io"
DEFAULT_TAG = "latest"


def is_host_like(segment: str) -> bool:
    """Check if a reference segment names a registry host."""
    return "." in segment or ":" in segment or segment == "localhost"


def split_tag(segment: str) -> tuple[str, str]:
    """Split the last path segment into repository segment and tag.

    Examples:
        split_tag("alpine:3.18")  # ("alpine", "3.18")
        split_tag("alpine")       # ("alpine", "latest")
        split_tag("alpine:")      # ("alpine", "latest")
    """
    if ":" in segment:
        name, tag = segment.rsplit(":", 1)
        return name, tag or DEFAULT_TAG
    return segment, DEFAULT_TAG


def _candidate_host(segments: list[str]) -> str:
    # A lone segment may still carry a tag ("alpine:3.18"), which must not
    # make it look like host:port.
    if len(segments) == 1:
        return split_tag(segments[0])[0]
    return segments[0]


def _check_segments(raw: str, segments: list[str]) -> None:
    if any(not segment for segment in segments):
        raise ValidationError(f"Empty path segment in image reference: {raw!r}")


def parse_image_reference(raw: str, insecure: bool = False) -> ImageReference:
    """Parse an image string into an image reference.

    Args:
        raw: Image reference (e.g. "register.com:5080/zendesk/alpine:latest")
        insecure: True when ``raw`` names an explicit registry host

    Returns:
        ImageReference with registry, name and tag set

    Raises:
        ValidationError: If the reference is empty or malformed
        DisallowedError: If host and insecure flag do not agree
    """
    if not raw or not raw.strip():
        raise ValidationError("Image reference must not be empty")

    segments = raw.split("/")
    _check_segments(raw, segments)

    host = _candidate_host(segments)
    explicit = is_host_like(host)

    if explicit and not insecure:
        raise DisallowedError(
            f"Image reference {raw!r} names a registry host; use insecure mode"
        )
    if not explicit and insecure:
        raise DisallowedError(
            f"Image reference {raw!r} has no registry host; insecure mode "
            "requires one"
        )

    if explicit:
        registry = f"http://{segments[0]}"
        path = segments[1:]
        if not path:
            raise ValidationError(f"No repository in image reference: {raw!r}")
    else:
        registry = HUB_URI
        path = segments

    last, tag = split_tag(path[-1])
    if not last:
        raise ValidationError(f"Empty repository name in image reference: {raw!r}")

    repository = path[:-1] + [last]
    # Digest references and stray colons would leave a tag inside the name
    if any(":" in segment or "@" in segment for segment in repository):
        raise ValidationError(f"Invalid repository name in image reference: {raw!r}")

    name = "/".join(repository)
    return ImageReference(registry=registry, name=name, tag=tag)
