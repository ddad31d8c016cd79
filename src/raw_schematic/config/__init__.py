"""Run configuration."""

from .loader import build_run_config, default_settings, load_settings
from .models import ResolverSettings, RunConfig

__all__ = [
    "ResolverSettings",
    "RunConfig",
    "build_run_config",
    "default_settings",
    "load_settings",
]
