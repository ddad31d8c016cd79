from __future__ import annotations

import io

import pytest

from raw_schematic.common import InvalidSeek, MalformedRecord, ShortRead
from raw_schematic.extractor import CpioReader, OffsetReader, PeekableReader


def _reader_for(data: bytes) -> tuple[CpioReader, PeekableReader]:
    stream = PeekableReader(io.BytesIO(data))
    return CpioReader(OffsetReader(stream)), stream


def test_single_record_reads_back_body(newc_archive) -> None:
    body = b"layers: []\n"
    archive, _ = _reader_for(newc_archive([("extensions.yaml", body)]))

    record = archive.read_record()
    assert record is not None
    assert record.name == "extensions.yaml"
    assert record.size == len(body)
    assert record.body.read() == body

    assert archive.read_record() is None
    assert archive.read_record() is None


def test_iteration_yields_records_in_order(newc_archive) -> None:
    entries = [("init", b"#!/bin/sh\n"), ("lib/modules", b""), ("etc/os-release", b"NAME=Talos\n")]
    archive, _ = _reader_for(newc_archive(entries))

    names = [record.name for record in archive]

    assert names == ["init", "lib/modules", "etc/os-release"]
    assert list(archive) == []


def test_unread_bodies_are_skipped(newc_archive) -> None:
    entries = [("big.bin", b"\xaa" * 4097), ("extensions.yaml", b"payload")]
    archive, _ = _reader_for(newc_archive(entries))

    records = iter(archive)
    next(records)
    second = next(records)

    assert second.body.read() == b"payload"


def test_body_read_at_is_relative_and_clipped(newc_archive) -> None:
    archive, _ = _reader_for(newc_archive([("data", b"0123456789")]))
    record = archive.read_record()
    assert record is not None

    assert record.body.read_at(2, 3) == b"234"
    assert record.body.read_at(8, 10) == b"89"
    assert record.body.read_at(10, 1) == b""


def test_body_is_gone_once_reader_advances(newc_archive) -> None:
    archive, _ = _reader_for(newc_archive([("first", b"abc"), ("second", b"def")]))
    first = archive.read_record()
    archive.read_record()
    assert first is not None

    with pytest.raises(InvalidSeek):
        first.body.read()


def test_crc_variant_is_accepted(newc_archive) -> None:
    archive, _ = _reader_for(newc_archive([("extensions.yaml", b"x")], magic=b"070702"))

    assert [record.name for record in archive] == ["extensions.yaml"]


def test_trailer_padding_is_left_in_stream(newc_archive) -> None:
    data = newc_archive([("a", b"1")], block_size=512)
    archive, stream = _reader_for(data + b"\xfd7zX")

    assert list(archive) != []
    remaining = stream.read(-1)
    assert remaining.endswith(b"\xfd7zX")
    assert set(remaining[:-4]) == {0}


def test_clean_end_of_input_without_trailer_ends_archive(newc_archive) -> None:
    data = newc_archive([("a", b"1234")], block_size=0)
    trailer_start = data.index(b"0707010000000000")
    archive, _ = _reader_for(data[:trailer_start])

    assert [record.name for record in archive] == ["a"]


def test_bad_magic_is_malformed() -> None:
    archive, _ = _reader_for(b"not a cpio archive".ljust(200, b"!"))

    with pytest.raises(MalformedRecord) as exc:
        archive.read_record()

    assert exc.value.offset == 0


def test_non_hex_field_is_malformed(newc_archive) -> None:
    data = bytearray(newc_archive([("a", b"1")]))
    data[6:14] = b"ZZZZZZZZ"
    archive, _ = _reader_for(bytes(data))

    with pytest.raises(MalformedRecord, match="non-hexadecimal"):
        archive.read_record()


def test_truncated_header_is_short_read(newc_archive) -> None:
    data = newc_archive([("a", b"1")])
    archive, _ = _reader_for(data[:50])

    with pytest.raises(ShortRead):
        archive.read_record()
