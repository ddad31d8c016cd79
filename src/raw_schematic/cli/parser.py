"""CLI parser."""

from __future__ import annotations

import argparse

from raw_schematic.cli import resolve


def build_parser() -> argparse.ArgumentParser:
    """Create the main ArgumentParser."""
    parser = argparse.ArgumentParser(
        prog="raw-schematic",
        description="Resolve a Talos Image Factory schematic ID to its raw schematic.",
    )
    resolve.configure(parser)
    parser.add_argument("--log-config", required=False, help="YAML logging dictConfig file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser
