"""Shared data models for raw-schematic."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class LayerMetadata:
    name: str = ""
    version: str = ""
    author: str = ""
    description: str = ""
    compatibility: str = ""
    extra_info: str = ""


@dataclass(frozen=True)
class ExtensionLayer:
    image: str
    metadata: LayerMetadata


@dataclass(frozen=True)
class ExtensionsConfig:
    layers: tuple[ExtensionLayer, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ResolveOutcome:
    schematic_id: str
    artifact_path: Path
    downloaded: bool
    raw_schematic: str
