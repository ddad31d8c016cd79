"""extensions.yaml decoding."""

from __future__ import annotations

from typing import Any, BinaryIO

import yaml

from raw_schematic.common import (
    DecodeError,
    EmptyConfiguration,
    ExtensionLayer,
    ExtensionsConfig,
    LayerMetadata,
)


def parse_extensions_config(stream: BinaryIO) -> ExtensionsConfig:
    """Parse the first YAML document of ``stream`` into an ExtensionsConfig."""
    try:
        document = next(iter(yaml.safe_load_all(stream)), None)
    except yaml.YAMLError as exc:
        raise DecodeError(f"extensions.yaml is not valid YAML: {exc}") from exc

    if document is None:
        raise DecodeError("extensions.yaml is empty")
    if not isinstance(document, dict):
        raise DecodeError(f"extensions.yaml must be a mapping, got {type(document).__name__}")

    layers_raw = document.get("layers") or []
    if not isinstance(layers_raw, list):
        raise DecodeError("extensions.yaml 'layers' must be a sequence")

    return ExtensionsConfig(layers=tuple(_parse_layer(item, index) for index, item in enumerate(layers_raw)))


def decode_raw_schematic(stream: BinaryIO) -> str:
    """Return the extra info text of the last layer in ``stream``."""
    config = parse_extensions_config(stream)
    if not config.layers:
        raise EmptyConfiguration("extensions.yaml has no layers")

    return config.layers[-1].metadata.extra_info


def _parse_layer(item: Any, index: int) -> ExtensionLayer:
    if not isinstance(item, dict):
        raise DecodeError(f"layer {index} must be a mapping")

    metadata_raw = item.get("metadata") or {}
    if not isinstance(metadata_raw, dict):
        raise DecodeError(f"layer {index} metadata must be a mapping")

    extra_info = metadata_raw.get("extraInfo")
    if isinstance(extra_info, (dict, list)):
        raise DecodeError(f"layer {index} metadata.extraInfo must be a string")

    return ExtensionLayer(
        image=_text(item.get("image")),
        metadata=LayerMetadata(
            name=_text(metadata_raw.get("name")),
            version=_text(metadata_raw.get("version")),
            author=_text(metadata_raw.get("author")),
            description=_text(metadata_raw.get("description")),
            compatibility=_text(metadata_raw.get("compatibility")),
            extra_info=_text(extra_info),
        ),
    )


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return yaml.safe_dump(value, default_flow_style=False)
    return str(value)
