"""Custom exceptions for command exit mapping."""

from __future__ import annotations


class UserInputError(Exception):
    """Raised when user input or environment is invalid."""


class SchematicError(Exception):
    """Base class for failures while resolving a schematic."""


class ExtractionError(SchematicError):
    """Raised when the artifact cannot be walked to the target member."""


class InvalidSeek(ExtractionError):
    """Raised when a read is requested behind the forward-only cursor."""

    def __init__(self, offset: int, position: int) -> None:
        super().__init__(f"negative seek not allowed: offset={offset} < position={position}")
        self.offset = offset
        self.position = position


class ShortRead(ExtractionError):
    """Raised when the stream ends before the requested bytes are available."""

    def __init__(self, offset: int, wanted: int, got: int) -> None:
        super().__init__(f"short read at offset {offset}: wanted {wanted} bytes, got {got}")
        self.offset = offset
        self.wanted = wanted
        self.got = got


class TruncatedStream(ShortRead):
    """Raised when a layer is too short to carry a compression magic prefix."""


class MalformedRecord(ExtractionError):
    """Raised when an archive header cannot be parsed."""

    def __init__(self, offset: int, reason: str) -> None:
        super().__init__(f"malformed cpio record at offset {offset}: {reason}")
        self.offset = offset
        self.reason = reason


class MemberNotFound(ExtractionError):
    """Raised when every layer was exhausted without locating the member."""

    def __init__(self, member_name: str, layers: int) -> None:
        super().__init__(f"{member_name} not found after {layers} layer(s)")
        self.member_name = member_name
        self.layers = layers


class DecompressionError(ExtractionError):
    """Raised when a compressed layer is corrupt."""


class DecodeError(SchematicError):
    """Raised when the configuration member is not well-formed."""


class EmptyConfiguration(DecodeError):
    """Raised when the configuration member declares no layers."""


class DownloadError(SchematicError):
    """Raised when the artifact could not be fetched into the cache."""


class DownloadCancelled(DownloadError):
    """Raised when the download was interrupted by a cancellation request."""
