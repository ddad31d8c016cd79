from __future__ import annotations

from typing import Callable, Sequence

import pytest
import yaml

NEWC_BLOCK_SIZE = 512


def _pad4(data: bytes) -> bytes:
    return data + b"\x00" * (-len(data) % 4)


def _newc_entry(name: str, data: bytes, ino: int, mode: int, magic: bytes = b"070701") -> bytes:
    name_bytes = name.encode("utf-8") + b"\x00"
    fields = (ino, mode, 0, 0, 1, 0, len(data), 0, 0, 0, 0, len(name_bytes), 0)
    header = magic + b"".join(f"{value:08X}".encode("ascii") for value in fields)
    return _pad4(_pad4(header + name_bytes) + data)


def build_newc(
    entries: Sequence[tuple[str, bytes]],
    block_size: int = NEWC_BLOCK_SIZE,
    magic: bytes = b"070701",
) -> bytes:
    """Builds a newc cpio archive padded to ``block_size`` like the kernel tooling does."""
    payload = b"".join(
        _newc_entry(name, data, ino=index + 1, mode=0o100644, magic=magic)
        for index, (name, data) in enumerate(entries)
    )
    payload += _newc_entry("TRAILER!!!", b"", ino=0, mode=0, magic=magic)
    if block_size:
        payload += b"\x00" * (-len(payload) % block_size)
    return payload


def build_extensions_yaml(*extra_infos: str) -> bytes:
    layers = [
        {
            "image": f"ghcr.io/siderolabs/extension-{index}:v1.0.0",
            "metadata": {
                "name": f"extension-{index}",
                "version": "v1.0.0",
                "author": "Sidero Labs",
                "description": "test extension",
                "compatibility": {"talos": {"version": ">= v1.0.0"}},
                "extraInfo": extra_info,
            },
        }
        for index, extra_info in enumerate(extra_infos)
    ]
    return yaml.safe_dump({"layers": layers}, sort_keys=False).encode("utf-8")


@pytest.fixture
def newc_archive() -> Callable[..., bytes]:
    return build_newc


@pytest.fixture
def extensions_yaml() -> Callable[..., bytes]:
    return build_extensions_yaml
