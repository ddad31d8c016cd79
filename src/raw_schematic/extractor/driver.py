"""Layer-walking extraction of the raw schematic from an initramfs artifact.

An artifact is a sequence of cpio archives, each possibly compressed, packed
back to back and separated by zero padding. Once a layer is decompressed the
walk continues inside the decompressed stream and never returns outward.
"""

from __future__ import annotations

from contextlib import ExitStack
from enum import Enum
import lzma
from typing import BinaryIO

import zstandard

from raw_schematic.common import DecompressionError, MemberNotFound
from raw_schematic.extractor.compression import CompressionLayer, open_layer
from raw_schematic.extractor.cpio import CpioReader, CpioRecord
from raw_schematic.extractor.decoder import decode_raw_schematic
from raw_schematic.extractor.stream import OffsetReader, PeekableReader, skip_padding
from raw_schematic.observability import get_logger

EXTENSIONS_YAML = "extensions.yaml"

logger = get_logger(__name__)


class ExtractionState(Enum):
    SNIFF = "sniff"
    ITERATE = "iterate"
    FOUND = "found"
    NEXT_LAYER = "next_layer"


def extract_raw_schematic(stream: BinaryIO, member_name: str = EXTENSIONS_YAML) -> str:
    """Walk ``stream`` layer by layer and decode the first ``member_name`` found."""
    reader = PeekableReader(stream)
    state = ExtractionState.SNIFF
    layer_index = 0
    layer_kind = CompressionLayer.NONE
    record: CpioRecord | None = None

    # decoder resources are released in reverse order once the walk ends
    with ExitStack() as releases:
        try:
            while state is not ExtractionState.FOUND:
                if state is ExtractionState.SNIFF:
                    layer = open_layer(reader)
                    releases.callback(layer.release)
                    layer_kind = layer.kind
                    logger.debug("layer %d: compression=%s", layer_index, layer_kind.value)
                    reader = PeekableReader(layer.stream)
                    state = ExtractionState.ITERATE

                elif state is ExtractionState.ITERATE:
                    record = _find_member(CpioReader(OffsetReader(reader)), member_name)
                    state = ExtractionState.NEXT_LAYER if record is None else ExtractionState.FOUND

                elif state is ExtractionState.NEXT_LAYER:
                    if not skip_padding(reader):
                        raise MemberNotFound(member_name, layer_index + 1)
                    layer_index += 1
                    state = ExtractionState.SNIFF

            found: CpioRecord = record  # type: ignore[assignment]
            logger.info("found %s in layer %d (%d bytes)", member_name, layer_index, found.size)
            return decode_raw_schematic(found.body)

        except (lzma.LZMAError, EOFError, zstandard.ZstdError) as exc:
            raise DecompressionError(
                f"layer {layer_index} ({layer_kind.value}) is corrupt: {exc}"
            ) from exc


def _find_member(archive: CpioReader, member_name: str) -> CpioRecord | None:
    for record in archive:
        logger.debug("found record: %r", record.name)
        if record.name == member_name:
            return record
    return None
