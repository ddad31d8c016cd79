"""Pipeline module."""

from .service import run_resolve

__all__ = ["run_resolve"]
