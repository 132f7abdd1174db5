# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for pngmetadata

Container-level errors (FormatError) abort an extraction. Decode errors
and XMP warnings are recoverable: the extraction pipeline records them
on the resulting tree and keeps decoding the other chunk types.

Copyright 2025 DNAi inc.
"""

from typing import Optional


class PNGMetadataError(Exception):
    """
    Base exception for all pngmetadata errors.

    All pngmetadata exceptions inherit from this class, allowing
    catch-all error handling for any extraction-related errors.
    """
    def __init__(self, message: str = ""):
        """
        Initialize the exception with an optional error message.

        Args:
            message: Descriptive error message explaining what went wrong
        """
        self.message = message
        super().__init__(message)


class FormatError(PNGMetadataError):
    """
    Raised when the PNG container itself cannot be walked.

    Always fatal for the extraction that raised it.
    """
    pass


class BadSignatureError(FormatError):
    """Raised when the stream does not start with the 8-byte PNG signature."""
    pass


class TruncatedChunkError(FormatError):
    """
    Raised when a chunk claims more bytes than remain in the stream.

    This exception is raised when:
    - A chunk header is cut short
    - A chunk payload is shorter than its declared length
    - Skipping a chunk would move past the end of the stream
    """
    pass


class PNGFileNotFoundError(FormatError, FileNotFoundError):
    """Raised when the input path does not exist."""
    pass


class FileNotReadableError(FormatError):
    """Raised when the input path exists but cannot be opened for reading."""
    pass


class DecodeError(PNGMetadataError):
    """
    Raised when a single chunk payload cannot be decoded.

    Recoverable: the chunk is skipped and extraction continues.
    """
    pass


class UnknownEnumError(DecodeError):
    """
    Raised when a fixed lookup table has no entry for a code.

    Attributes:
        field: Output field name (e.g. 'ColorType')
        code: The unmapped numeric code
    """
    def __init__(self, field: str, code: int, message: Optional[str] = None):
        self.field = field
        self.code = code
        super().__init__(message or f"Unknown {field} code: {code}")


class MalformedChunkError(DecodeError):
    """Raised when a captured payload does not have the expected layout."""
    pass


class TagDecoderError(DecodeError):
    """Raised when the EXIF tag decoder fails on an eXIf payload."""
    pass


class XMPWarning(PNGMetadataError):
    """
    Base class for recoverable XMP problems.

    The XMP layer is skipped, all other chunk types are still decoded.
    """
    pass


class UnexpectedXMPRootWarning(XMPWarning):
    """Raised when the XMP document root element is not x:xmpmeta."""
    pass


class XMPParseWarning(XMPWarning):
    """Raised when the XMP payload is not well-formed XML."""
    pass
