"""Forward-only stream primitives.

The artifact is only ever read sequentially: it may be a plain file, but more
often it is the output of a decompressor, which cannot seek. Everything here
keeps that contract and never moves backwards.
"""

from __future__ import annotations

from typing import BinaryIO, Protocol

from raw_schematic.common import InvalidSeek, ShortRead

DEFAULT_BUFFER_SIZE = 64 * 1024


class ByteSource(Protocol):
    def read(self, size: int = -1, /) -> bytes:
        ...


class PeekableReader:
    """Buffered reader with lookahead over a sequential byte source.

    Unlike ``io.BufferedReader.peek`` the lookahead is filled across short
    reads of the underlying source, so ``peek(4)`` returns four bytes unless
    the source is at its end.
    """

    def __init__(self, source: ByteSource | BinaryIO, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        self._source = source
        self._buffer_size = buffer_size
        self._buffer = bytearray()
        self._eof = False
        self._consumed = 0

    @property
    def position(self) -> int:
        """Bytes consumed so far."""
        return self._consumed

    def peek(self, size: int) -> bytes:
        self._fill(size)
        return bytes(self._buffer[:size])

    def read(self, size: int = -1, /) -> bytes:
        if size is None or size < 0:
            chunks = [bytes(self._buffer)]
            self._buffer.clear()
            while not self._eof:
                chunk = self._source.read(self._buffer_size)
                if not chunk:
                    self._eof = True
                    break
                chunks.append(chunk)
            data = b"".join(chunks)
            self._consumed += len(data)
            return data

        self._fill(size)
        data = bytes(self._buffer[:size])
        del self._buffer[:size]
        self._consumed += len(data)
        return data

    def skip(self, size: int) -> int:
        """Consume up to ``size`` bytes, returning how many were dropped."""
        skipped = 0
        while skipped < size:
            chunk = self.read(min(size - skipped, self._buffer_size))
            if not chunk:
                break
            skipped += len(chunk)
        return skipped

    def _fill(self, size: int) -> None:
        while len(self._buffer) < size and not self._eof:
            chunk = self._source.read(max(size - len(self._buffer), self._buffer_size))
            if not chunk:
                self._eof = True
                break
            self._buffer.extend(chunk)


class OffsetReader:
    """Random access by absolute offset over a forward-only stream.

    Offsets must be requested in non-decreasing order. Gaps between the
    cursor and the requested offset are read and dropped.
    """

    def __init__(self, source: PeekableReader) -> None:
        self._source = source
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    def read_at(self, offset: int, size: int) -> bytes:
        if offset < self._position:
            raise InvalidSeek(offset, self._position)

        gap = offset - self._position
        if gap:
            skipped = self._source.skip(gap)
            self._position += skipped
            if skipped != gap:
                raise ShortRead(offset, size, 0)

        data = self._source.read(size)
        self._position += len(data)
        if len(data) != size:
            raise ShortRead(offset, size, len(data))
        return data


def skip_padding(reader: PeekableReader) -> bool:
    """Consume contiguous zero bytes. Returns True if data remains afterwards."""
    while True:
        chunk = reader.peek(DEFAULT_BUFFER_SIZE)
        if not chunk:
            return False

        zeros = len(chunk) - len(chunk.lstrip(b"\x00"))
        reader.skip(zeros)
        if zeros < len(chunk):
            return True
