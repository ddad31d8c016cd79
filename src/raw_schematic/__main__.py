"""Entry point for the raw-schematic CLI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from raw_schematic.cli import build_parser
from raw_schematic.common import DownloadCancelled, SchematicError, UserInputError
from raw_schematic.observability import setup_logging

logger = logging.getLogger(__name__)

EXIT_CANCELLED = 130


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    setup_logging(Path(args.log_config) if args.log_config else None, verbose=args.verbose)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return int(handler(args))
    except UserInputError as exc:
        logger.error("%s", exc)
        return 1
    except DownloadCancelled as exc:
        logger.error("%s", exc)
        return EXIT_CANCELLED
    except SchematicError as exc:
        logger.error("failed to resolve schematic: %s", exc)
        return 1
    except OSError as exc:
        logger.error("filesystem error: %s", exc)
        return 1
    except Exception as exc:  # pragma: no cover
        logger.error("unexpected failure: %s", exc)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
