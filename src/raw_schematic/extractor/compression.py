"""Compression format detection by magic prefix."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import lzma
from typing import BinaryIO, Callable

import zstandard

from raw_schematic.common import TruncatedStream
from raw_schematic.extractor.stream import ByteSource, PeekableReader

MAGIC_SIZE = 4

XZ_MAGIC = b"\xfd7zX"
ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"


class CompressionLayer(Enum):
    NONE = "none"
    XZ = "xz"
    ZSTD = "zstd"


@dataclass(frozen=True)
class DecompressedLayer:
    """A layer's readable stream plus the action that frees its decoder."""

    kind: CompressionLayer
    stream: ByteSource | BinaryIO
    release: Callable[[], None]


def _noop() -> None:
    return None


def _open_xz(reader: PeekableReader) -> DecompressedLayer:
    stream = lzma.LZMAFile(reader, mode="rb", format=lzma.FORMAT_XZ)
    return DecompressedLayer(kind=CompressionLayer.XZ, stream=stream, release=stream.close)


def _open_zstd(reader: PeekableReader) -> DecompressedLayer:
    stream = zstandard.ZstdDecompressor().stream_reader(
        reader,
        read_across_frames=True,
        closefd=False,
    )
    return DecompressedLayer(kind=CompressionLayer.ZSTD, stream=stream, release=stream.close)


def _open_plain(reader: PeekableReader) -> DecompressedLayer:
    return DecompressedLayer(kind=CompressionLayer.NONE, stream=reader, release=_noop)


_MAGIC_LAYERS = {
    XZ_MAGIC: CompressionLayer.XZ,
    ZSTD_MAGIC: CompressionLayer.ZSTD,
}

_OPENERS: dict[CompressionLayer, Callable[[PeekableReader], DecompressedLayer]] = {
    CompressionLayer.NONE: _open_plain,
    CompressionLayer.XZ: _open_xz,
    CompressionLayer.ZSTD: _open_zstd,
}


def detect_compression(magic: bytes) -> CompressionLayer:
    return _MAGIC_LAYERS.get(bytes(magic[:MAGIC_SIZE]), CompressionLayer.NONE)


def open_layer(reader: PeekableReader) -> DecompressedLayer:
    """Wrap ``reader`` in the decompressor its magic prefix calls for.

    The prefix is peeked, not consumed. Unknown prefixes pass the reader
    through unchanged; the caller owns ``release`` of the returned layer.
    """
    magic = reader.peek(MAGIC_SIZE)
    if len(magic) < MAGIC_SIZE:
        raise TruncatedStream(reader.position, MAGIC_SIZE, len(magic))

    return _OPENERS[detect_compression(magic)](reader)
