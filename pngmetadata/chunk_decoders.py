# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Decoders for the fixed-layout PNG chunks

Each function turns one captured payload (IHDR, bKGD, sRGB, tEXt) into
plain metadata values using fixed lookup tables.

Copyright 2025 DNAi inc.
"""

import struct
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from pngmetadata.chunk_reader import IHDR_FIELD_WIDTHS
from pngmetadata.exceptions import MalformedChunkError, UnknownEnumError

# Output field name for each IHDR field position
IHDR_FIELD_NAMES = (
    'ImageWidth',
    'ImageHeight',
    'BitDepth',
    'ColorType',
    'Compression',
    'Filter',
    'Interlace',
)

# Label for each code of the enumerated IHDR fields
IHDR_VALUE_LABELS = MappingProxyType({
    'ColorType': MappingProxyType({
        0: 'Grayscale',
        2: 'RGB',
        3: 'Palette',
        4: 'Grayscale with Alpha',
        6: 'RGB with Alpha',
    }),
    'Compression': MappingProxyType({
        0: 'Deflate/Inflate',
    }),
    'Filter': MappingProxyType({
        0: 'Adaptive',
    }),
    'Interlace': MappingProxyType({
        0: 'Noninterlaced',
        1: 'Adam7 Interlace',
    }),
})

SRGB_RENDERING_INTENTS = (
    'Perceptual',
    'Relative Colorimetric',
    'Saturation',
    'Absolute Colorimetric',
)


def lookup_label(field: str, code: int) -> str:
    """
    Map an enumerated IHDR code to its label.

    Raises:
        UnknownEnumError: If the table for field has no entry for code
    """
    try:
        return IHDR_VALUE_LABELS[field][code]
    except KeyError:
        raise UnknownEnumError(field, code) from None


def decode_ihdr(
    fields: Sequence[bytes],
    strict: bool = False,
    warnings: Optional[List[Exception]] = None
) -> Dict[str, Any]:
    """
    Decode the IHDR field slices.

    Args:
        fields: Raw field slices as captured by the chunk reader
        strict: If True, unmapped codes raise instead of being reported
        warnings: Optional list collecting UnknownEnumError instances

    Returns:
        Dictionary with ImageWidth, ImageHeight, BitDepth, ColorType,
        Compression, Filter and Interlace

    Raises:
        MalformedChunkError: If a field slice does not have its fixed width
        UnknownEnumError: If strict and a code has no label
    """
    if len(fields) != len(IHDR_FIELD_WIDTHS):
        raise MalformedChunkError(f"IHDR has {len(fields)} fields, expected {len(IHDR_FIELD_WIDTHS)}")
    for name, width, raw in zip(IHDR_FIELD_NAMES, IHDR_FIELD_WIDTHS, fields):
        if len(raw) != width:
            raise MalformedChunkError(f"IHDR field {name} is {len(raw)} bytes, expected {width}")

    metadata: Dict[str, Any] = {
        'ImageWidth': struct.unpack('>I', fields[0])[0],
        'ImageHeight': struct.unpack('>I', fields[1])[0],
        'BitDepth': fields[2][0],
    }

    for name, raw in zip(IHDR_FIELD_NAMES[3:], fields[3:]):
        code = raw[0]
        try:
            metadata[name] = lookup_label(name, code)
        except UnknownEnumError as e:
            if strict:
                raise
            if warnings is not None:
                warnings.append(e)
            metadata[name] = f'Unknown ({code})'

    return metadata


def decode_bkgd(payload: bytes) -> str:
    """
    Decode a bKGD payload.

    A 1-byte payload is a palette index; longer payloads are big-endian
    16-bit samples (1 for grayscale, 3 for RGB).

    Returns:
        Space-joined decimal components in payload order
    """
    if len(payload) < 2:
        values: Tuple[int, ...] = tuple(payload[:1])
    else:
        count = len(payload) // 2
        values = struct.unpack(f'>{count}H', payload[:count * 2])
    return ' '.join(str(v) for v in values)


def decode_srgb(payload: bytes) -> str:
    """Decode the sRGB rendering intent byte."""
    if payload and payload[0] < len(SRGB_RENDERING_INTENTS):
        return SRGB_RENDERING_INTENTS[payload[0]]
    return 'Unknown'


def decode_text(pairs: Iterable[Tuple[str, str]]) -> Dict[str, Any]:
    """
    Group tEXt keyword/value pairs into a nested dictionary.

    Keywords are split on ':' into group, tag and subtag, e.g.
    'exif:thumbnail:Compression' -> {'exif': {'THUMBNAIL': {'Compression': value}}}.
    Later pairs overwrite earlier ones at the same path.

    Args:
        pairs: (keyword, value) pairs in stream order

    Returns:
        Nested dictionary of text metadata
    """
    metadata: Dict[str, Any] = {}

    for keyword, value in pairs:
        parts = keyword.split(':', 2)
        group = parts[0]
        tag = parts[1] if len(parts) > 1 else None
        subtag = parts[2] if len(parts) > 2 else None

        if tag is None:
            metadata[group] = value
            continue

        if tag == 'thumbnail':
            tag = tag.upper()

        if not isinstance(metadata.get(group), dict):
            metadata[group] = {}
        metadata[group][tag] = {subtag: value} if subtag else value

    return metadata
