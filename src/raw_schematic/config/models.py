"""Run configuration models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

ARTIFACT_FILENAME_TEMPLATE = "{talos_version}-initramfs-amd64-{schematic_id}.xz"
ARTIFACT_URL_TEMPLATE = "{base_url}/image/{schematic_id}/{talos_version}/initramfs-amd64.xz"


@dataclass(frozen=True)
class ResolverSettings:
    """Defaults shared by every run (resolver section of the settings file)."""

    talos_version: str
    base_url: str
    cache_dir: Path
    download_timeout: float


@dataclass(frozen=True)
class RunConfig:
    """Inputs of a single schematic resolution."""

    schematic_id: str
    talos_version: str
    base_url: str
    cache_dir: Path
    download_timeout: float

    @property
    def cache_file_path(self) -> Path:
        return self.cache_dir / ARTIFACT_FILENAME_TEMPLATE.format(
            talos_version=self.talos_version,
            schematic_id=self.schematic_id,
        )

    @property
    def artifact_url(self) -> str:
        return ARTIFACT_URL_TEMPLATE.format(
            base_url=self.base_url.rstrip("/"),
            schematic_id=self.schematic_id,
            talos_version=self.talos_version,
        )
