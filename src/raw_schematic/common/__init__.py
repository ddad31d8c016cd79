"""Common models and exceptions."""

from .exceptions import (
    DecodeError,
    DecompressionError,
    DownloadCancelled,
    DownloadError,
    EmptyConfiguration,
    ExtractionError,
    InvalidSeek,
    MalformedRecord,
    MemberNotFound,
    SchematicError,
    ShortRead,
    TruncatedStream,
    UserInputError,
)
from .models import ExtensionLayer, ExtensionsConfig, LayerMetadata, ResolveOutcome

__all__ = [
    "DecodeError",
    "DecompressionError",
    "DownloadCancelled",
    "DownloadError",
    "EmptyConfiguration",
    "ExtensionLayer",
    "ExtensionsConfig",
    "ExtractionError",
    "InvalidSeek",
    "LayerMetadata",
    "MalformedRecord",
    "MemberNotFound",
    "ResolveOutcome",
    "SchematicError",
    "ShortRead",
    "TruncatedStream",
    "UserInputError",
]
