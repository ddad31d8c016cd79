"""Artifact download layer."""

from .service import ensure_artifact_cached

__all__ = ["ensure_artifact_cached"]
