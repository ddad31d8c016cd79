"""Logging setup."""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any

import yaml

_DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def setup_logging(config_path: Path | None = None, verbose: bool = False) -> None:
    """Initialise logging. Falls back to basicConfig when the YAML config cannot be applied."""
    if config_path is not None:
        try:
            with open(config_path, encoding="utf-8") as f:
                config: dict[str, Any] = yaml.safe_load(f)
            logging.config.dictConfig(config)
            if verbose:
                logging.getLogger().setLevel(logging.DEBUG)
            return
        except (OSError, ValueError, TypeError, yaml.YAMLError):
            pass

    logging.basicConfig(level=logging.INFO, format=_DEFAULT_FORMAT)
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


def get_logger(name: str) -> logging.Logger:
    """Return a standard logger."""
    return logging.getLogger(name)
