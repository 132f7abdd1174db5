# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
pngmetadata - PNG metadata extraction in pure Python

Reads the metadata-bearing chunks of a PNG image (IHDR, bKGD, sRGB,
tEXt, iTXt XMP and eXIf) into one sorted, read-only metadata tree with
colon-separated path lookup and a two-column text rendering.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from pngmetadata.core import PNGMetadata, extract_metadata
from pngmetadata.chunk_reader import ChunkReader, RawChunkSet, read_chunks
from pngmetadata.exceptions import (
    PNGMetadataError,
    FormatError,
    BadSignatureError,
    TruncatedChunkError,
    PNGFileNotFoundError,
    FileNotReadableError,
    DecodeError,
    UnknownEnumError,
    MalformedChunkError,
    TagDecoderError,
    XMPWarning,
    UnexpectedXMPRootWarning,
    XMPParseWarning,
)
from pngmetadata.exif_parser import ExifParser, decode_exif, extract_thumbnail
from pngmetadata.metadata_tree import MetadataTree
from pngmetadata.tree_ops import flatten, merge
from pngmetadata.xmp_extractor import XMPExtractor, extract_xmp

__all__ = [
    "PNGMetadata",
    "extract_metadata",
    "ChunkReader",
    "RawChunkSet",
    "read_chunks",
    "PNGMetadataError",
    "FormatError",
    "BadSignatureError",
    "TruncatedChunkError",
    "PNGFileNotFoundError",
    "FileNotReadableError",
    "DecodeError",
    "UnknownEnumError",
    "MalformedChunkError",
    "TagDecoderError",
    "XMPWarning",
    "UnexpectedXMPRootWarning",
    "XMPParseWarning",
    "ExifParser",
    "decode_exif",
    "extract_thumbnail",
    "MetadataTree",
    "flatten",
    "merge",
    "XMPExtractor",
    "extract_xmp",
]
