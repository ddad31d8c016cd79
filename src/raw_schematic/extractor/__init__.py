"""Artifact extraction layer."""

from .compression import CompressionLayer, DecompressedLayer, detect_compression, open_layer
from .cpio import CpioReader, CpioRecord, RecordBody
from .decoder import decode_raw_schematic, parse_extensions_config
from .driver import EXTENSIONS_YAML, ExtractionState, extract_raw_schematic
from .stream import OffsetReader, PeekableReader, skip_padding

__all__ = [
    "EXTENSIONS_YAML",
    "CompressionLayer",
    "CpioReader",
    "CpioRecord",
    "DecompressedLayer",
    "ExtractionState",
    "OffsetReader",
    "PeekableReader",
    "RecordBody",
    "decode_raw_schematic",
    "detect_compression",
    "extract_raw_schematic",
    "open_layer",
    "parse_extensions_config",
    "skip_padding",
]
