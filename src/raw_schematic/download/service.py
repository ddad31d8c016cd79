"""Artifact download into the local cache."""

from __future__ import annotations

import os
from pathlib import Path
import tempfile
import threading
import time

import requests

from raw_schematic.common import DownloadCancelled, DownloadError
from raw_schematic.observability import get_logger

logger = get_logger(__name__)

DEFAULT_CHUNK_SIZE = 1024 * 1024
_USER_AGENT = "raw-schematic/0.1"


def ensure_artifact_cached(
    path: Path,
    url: str,
    timeout: float,
    cancel_event: threading.Event | None = None,
    session: requests.Session | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bool:
    """Download ``url`` to ``path`` unless it is already cached.

    The body is streamed into a ``.partial-*`` file next to ``path`` and
    renamed into place only after it was fully written and synced. Returns
    True when a download took place.
    """
    if path.exists():
        logger.info("using cached artifact at %s", path)
        return False

    path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
    deadline = time.monotonic() + timeout
    _check_interrupt(cancel_event, deadline, url)

    fd, tmp_name = tempfile.mkstemp(prefix=".partial-", dir=str(path.parent))
    tmp_path = Path(tmp_name)
    http = session if session is not None else requests

    logger.info("downloading %s", url)
    written = 0
    try:
        with os.fdopen(fd, "wb") as tmp:
            with http.get(
                url,
                headers={"User-Agent": _USER_AGENT},
                stream=True,
                timeout=timeout,
            ) as response:
                if response.status_code != 200:
                    raise DownloadError(f"download status {response.status_code}: {url}")

                for chunk in response.iter_content(chunk_size=chunk_size):
                    _check_interrupt(cancel_event, deadline, url)
                    if not chunk:
                        continue
                    tmp.write(chunk)
                    written += len(chunk)

            tmp.flush()
            os.fsync(tmp.fileno())

        os.replace(tmp_path, path)
    except requests.RequestException as exc:
        raise DownloadError(f"download failed: {url}: {exc}") from exc
    finally:
        tmp_path.unlink(missing_ok=True)

    logger.info("downloaded %d bytes to %s", written, path)
    return True


def _check_interrupt(cancel_event: threading.Event | None, deadline: float, url: str) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise DownloadCancelled(f"download cancelled: {url}")
    if time.monotonic() > deadline:
        raise DownloadError(f"download timed out: {url}")
