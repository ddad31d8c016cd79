"""Resolve Talos Image Factory schematic IDs to raw schematics."""

__version__ = "0.1.0"
