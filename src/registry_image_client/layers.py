"""Layer list normalization."""

from .models import ImageReference, Layer


def dedupe_layers(layers: list[Layer]) -> list[Layer]:
    """Drop repeated layers, keeping the first occurrence of each digest."""
    seen: set[Layer] = set()
    result = []
    for layer in layers:
        if layer not in seen:
            seen.add(layer)
            result.append(layer)
    return result


def unique_layers(reference: ImageReference) -> None:
    """Deduplicate the layer list selected by the schema version, in place."""
    if reference.schema_version == 1:
        reference.fs_layers = dedupe_layers(reference.fs_layers)
    else:
        reference.layers = dedupe_layers(reference.layers)
