"""Pipeline orchestration service."""

from __future__ import annotations

import threading

from raw_schematic.common import ResolveOutcome
from raw_schematic.config import RunConfig
from raw_schematic.download import ensure_artifact_cached
from raw_schematic.extractor import extract_raw_schematic
from raw_schematic.observability import get_logger

logger = get_logger(__name__)


def run_resolve(config: RunConfig, cancel_event: threading.Event | None = None) -> ResolveOutcome:
    """Fetch (or reuse) the schematic's initramfs and extract its raw schematic."""

    logger.info(
        "resolve started: schematic=%s talos=%s",
        config.schematic_id,
        config.talos_version,
    )
    config.cache_dir.mkdir(mode=0o700, parents=True, exist_ok=True)

    artifact_path = config.cache_file_path
    downloaded = ensure_artifact_cached(
        artifact_path,
        config.artifact_url,
        timeout=config.download_timeout,
        cancel_event=cancel_event,
    )

    with open(artifact_path, "rb") as artifact:
        raw_schematic = extract_raw_schematic(artifact)

    logger.info("resolve completed: artifact=%s", artifact_path)
    return ResolveOutcome(
        schematic_id=config.schematic_id,
        artifact_path=artifact_path,
        downloaded=downloaded,
        raw_schematic=raw_schematic,
    )
