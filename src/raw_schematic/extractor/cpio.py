"""Streaming reader for SVR4 ``newc`` cpio archives."""

from __future__ import annotations

from dataclasses import dataclass
import io
import re
from typing import Iterator

from raw_schematic.common import MalformedRecord, ShortRead
from raw_schematic.extractor.stream import OffsetReader

HEADER_SIZE = 110
TRAILER_NAME = "TRAILER!!!"

_FIELD_NAMES = (
    "ino",
    "mode",
    "uid",
    "gid",
    "nlink",
    "mtime",
    "filesize",
    "devmajor",
    "devminor",
    "rdevmajor",
    "rdevminor",
    "namesize",
    "check",
)
_HEADER_RE = re.compile(rb"0707(?:01|02)((?:[0-9A-Fa-f]{8}){13})")
_MAGIC_RE = re.compile(rb"0707(?:01|02)")


def _align4(value: int) -> int:
    return (value + 3) & ~3


class RecordBody(io.RawIOBase):
    """Read-only window over one record's data.

    Backed by the archive's forward-only source: the bytes are available only
    until the reader moves on to the next record.
    """

    def __init__(self, source: OffsetReader, start: int, size: int) -> None:
        super().__init__()
        self._source = source
        self._start = start
        self._size = size
        self._pos = 0

    @property
    def size(self) -> int:
        return self._size

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # type: ignore[override]
        count = min(len(buffer), self._size - self._pos)
        if count <= 0:
            return 0
        data = self._source.read_at(self._start + self._pos, count)
        buffer[:count] = data
        self._pos += count
        return count

    def read_at(self, offset: int, size: int) -> bytes:
        """Read ``size`` bytes at ``offset`` within the body, clipped to its end."""
        if offset < 0:
            raise ValueError(f"negative offset: {offset}")
        if offset >= self._size:
            return b""
        return self._source.read_at(self._start + offset, min(size, self._size - offset))


@dataclass(frozen=True)
class CpioRecord:
    name: str
    size: int
    mode: int
    mtime: int
    offset: int
    body: RecordBody


class CpioReader:
    """Lazily yields records until the ``TRAILER!!!`` marker.

    Not restartable. Padding after the trailer is left in the stream.
    """

    def __init__(self, source: OffsetReader) -> None:
        self._source = source
        self._offset = 0
        self._done = False

    def __iter__(self) -> Iterator[CpioRecord]:
        while True:
            record = self.read_record()
            if record is None:
                return
            yield record

    def read_record(self) -> CpioRecord | None:
        if self._done:
            return None

        header_offset = self._offset
        try:
            header = self._source.read_at(header_offset, HEADER_SIZE)
        except ShortRead as exc:
            # clean end of input on a record boundary
            if exc.got == 0 and self._source.position == header_offset:
                self._done = True
                return None
            raise

        fields = _parse_header(header, header_offset)
        name_size = fields["namesize"]
        if name_size == 0:
            raise MalformedRecord(header_offset, "empty name")

        raw_name = self._source.read_at(header_offset + HEADER_SIZE, name_size)
        if raw_name[-1] != 0:
            raise MalformedRecord(header_offset, "name is not NUL-terminated")
        name = raw_name[:-1].decode("utf-8", errors="surrogateescape")

        if name == TRAILER_NAME:
            self._done = True
            return None

        data_offset = _align4(header_offset + HEADER_SIZE + name_size)
        size = fields["filesize"]
        self._offset = _align4(data_offset + size)

        return CpioRecord(
            name=name,
            size=size,
            mode=fields["mode"],
            mtime=fields["mtime"],
            offset=header_offset,
            body=RecordBody(self._source, data_offset, size),
        )


def _parse_header(header: bytes, offset: int) -> dict[str, int]:
    if not _MAGIC_RE.match(header):
        raise MalformedRecord(offset, f"bad magic {header[:6]!r}")

    match = _HEADER_RE.fullmatch(header)
    if match is None:
        raise MalformedRecord(offset, "non-hexadecimal header field")

    digits = match.group(1)
    return {
        name: int(digits[index * 8 : index * 8 + 8], 16)
        for index, name in enumerate(_FIELD_NAMES)
    }
