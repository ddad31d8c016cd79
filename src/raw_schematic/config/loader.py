"""YAML-backed settings loading."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from raw_schematic.common import UserInputError

from .models import ResolverSettings, RunConfig

logger = logging.getLogger(__name__)

DEFAULT_TALOS_VERSION = "v1.10.6"
DEFAULT_BASE_URL = "https://factory.talos.dev"
DEFAULT_CACHE_DIR_NAME = ".talos-schematic-id-to-raw-schematic-cache"
DEFAULT_DOWNLOAD_TIMEOUT = 300.0

ENV_TALOS_VERSION = "RAW_SCHEMATIC_TALOS_VERSION"
ENV_BASE_URL = "RAW_SCHEMATIC_BASE_URL"
ENV_CACHE_DIR = "RAW_SCHEMATIC_CACHE_DIR"


def default_settings() -> ResolverSettings:
    return ResolverSettings(
        talos_version=DEFAULT_TALOS_VERSION,
        base_url=DEFAULT_BASE_URL,
        cache_dir=Path.home() / DEFAULT_CACHE_DIR_NAME,
        download_timeout=DEFAULT_DOWNLOAD_TIMEOUT,
    )


def load_settings(config_path: Path | None = None) -> ResolverSettings:
    """Load resolver settings. Falls back to defaults when the file is missing or invalid.

    Environment variables override both the file and the defaults.
    """
    settings = default_settings()

    data = _safe_load_yaml(config_path) if config_path is not None else None
    if data is not None:
        try:
            resolver: dict[str, Any] = data.get("resolver", {}) or {}
            cache_dir_raw = resolver.get("cache_dir")
            settings = ResolverSettings(
                talos_version=str(resolver.get("talos_version", settings.talos_version)),
                base_url=str(resolver.get("base_url", settings.base_url)),
                cache_dir=Path(str(cache_dir_raw)).expanduser() if cache_dir_raw else settings.cache_dir,
                download_timeout=float(resolver.get("download_timeout", settings.download_timeout)),
            )
        except (AttributeError, TypeError, ValueError):
            logger.warning("invalid resolver settings, using defaults: %s", config_path)
            settings = default_settings()

    return _apply_env_overrides(settings)


def build_run_config(
    schematic_id: str,
    settings: ResolverSettings,
    talos_version: str | None = None,
    base_url: str | None = None,
    cache_dir: Path | None = None,
    download_timeout: float | None = None,
) -> RunConfig:
    """Combine the schematic ID, settings and explicit overrides into a run config."""
    schematic_id = schematic_id.strip()
    if not schematic_id:
        raise UserInputError("schematic ID must not be empty")
    if "/" in schematic_id or "\\" in schematic_id:
        raise UserInputError(f"schematic ID must not contain path separators: {schematic_id!r}")

    timeout = download_timeout if download_timeout is not None else settings.download_timeout
    if timeout <= 0:
        raise UserInputError(f"download timeout must be positive: {timeout}")

    return RunConfig(
        schematic_id=schematic_id,
        talos_version=talos_version or settings.talos_version,
        base_url=base_url or settings.base_url,
        cache_dir=cache_dir or settings.cache_dir,
        download_timeout=timeout,
    )


def _apply_env_overrides(settings: ResolverSettings) -> ResolverSettings:
    talos_version = os.getenv(ENV_TALOS_VERSION)
    base_url = os.getenv(ENV_BASE_URL)
    cache_dir = os.getenv(ENV_CACHE_DIR)

    return ResolverSettings(
        talos_version=talos_version or settings.talos_version,
        base_url=base_url or settings.base_url,
        cache_dir=Path(cache_dir).expanduser() if cache_dir else settings.cache_dir,
        download_timeout=settings.download_timeout,
    )


def _safe_load_yaml(path: Path) -> dict[str, Any] | None:
    """Load a YAML mapping. Returns None on any failure."""
    try:
        with open(path, encoding="utf-8") as f:
            result = yaml.safe_load(f)
        if isinstance(result, dict):
            return result
        return None
    except (OSError, yaml.YAMLError):
        logger.warning("failed to load YAML settings: %s", path)
        return None
