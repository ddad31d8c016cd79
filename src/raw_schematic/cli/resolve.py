"""resolve command handler."""

from __future__ import annotations

import argparse
from contextlib import contextmanager
from pathlib import Path
import signal
import threading
from typing import Iterator

from raw_schematic.config import build_run_config, load_settings
from raw_schematic.observability import get_logger
from raw_schematic.pipeline import run_resolve

logger = get_logger(__name__)

_CANCEL_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def configure(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("schematic_id", help="Image Factory schematic ID.")
    parser.add_argument("--talos-version", required=False)
    parser.add_argument("--base-url", required=False, help="Image Factory base URL.")
    parser.add_argument("--cache-dir", required=False)
    parser.add_argument("--timeout", type=float, required=False, help="Download timeout in seconds.")
    parser.add_argument("--config", required=False, help="YAML settings file.")
    parser.set_defaults(handler=execute)


def execute(args: argparse.Namespace) -> int:
    settings = load_settings(Path(args.config) if args.config else None)
    config = build_run_config(
        args.schematic_id,
        settings,
        talos_version=args.talos_version,
        base_url=args.base_url,
        cache_dir=Path(args.cache_dir).expanduser() if args.cache_dir else None,
        download_timeout=args.timeout,
    )

    with _cancel_on_signals() as cancel_event:
        outcome = run_resolve(config, cancel_event=cancel_event)

    logger.info("raw schematic:\n%s", outcome.raw_schematic)
    print(outcome.raw_schematic)
    logger.info("done, exiting")
    return 0


@contextmanager
def _cancel_on_signals() -> Iterator[threading.Event]:
    """Set the yielded event on SIGINT/SIGTERM, restoring the previous handlers afterwards."""
    cancel_event = threading.Event()

    def _handle(signum: int, _frame: object) -> None:
        logger.warning("received %s, cancelling", signal.Signals(signum).name)
        cancel_event.set()

    previous = {}
    if threading.current_thread() is threading.main_thread():
        for signum in _CANCEL_SIGNALS:
            previous[signum] = signal.signal(signum, _handle)
    try:
        yield cancel_event
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
