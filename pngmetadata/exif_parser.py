# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
EXIF metadata parser for PNG eXIf chunks

The eXIf chunk holds a bare TIFF structure (byte order mark, magic 42,
first IFD offset). This module walks IFD0 with its EXIF, GPS and
Interoperability sub-IFDs into one flat mapping, reports IFD1 under
'THUMBNAIL', and locates the embedded JPEG thumbnail.

It is the default tag decoder of PNGMetadata; any callable taking the
raw eXIf bytes and returning a mapping can replace it.

Copyright 2025 DNAi inc.
"""

import struct
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional, Set, Tuple

from pngmetadata.exceptions import TagDecoderError
from pngmetadata.exif_tags import (
    EXIF_IFD_POINTER,
    EXIF_TAG_NAMES,
    GPS_IFD_POINTER,
    GPS_TAG_NAMES,
    INTEROP_IFD_POINTER,
    INTEROP_TAG_NAMES,
    JPEG_INTERCHANGE_FORMAT,
    JPEG_INTERCHANGE_FORMAT_LENGTH,
)

EXIF_HEADER = b'Exif\x00\x00'

# Windows XP tags are BYTE arrays holding UTF-16LE text
XP_TAGS = frozenset({0x9C9B, 0x9C9C, 0x9C9D, 0x9C9E, 0x9C9F})

POINTER_TAGS = {
    EXIF_IFD_POINTER: EXIF_TAG_NAMES,
    GPS_IFD_POINTER: GPS_TAG_NAMES,
    INTEROP_IFD_POINTER: INTEROP_TAG_NAMES,
}

# Sanity limit on directory entries
MAX_IFD_ENTRIES = 1000


class ExifTagType(IntEnum):
    """EXIF tag data types"""
    BYTE = 1
    ASCII = 2
    SHORT = 3
    LONG = 4
    RATIONAL = 5
    SBYTE = 6
    UNDEFINED = 7
    SSHORT = 8
    SLONG = 9
    SRATIONAL = 10


# EXIF tag sizes in bytes
TAG_SIZES = {
    ExifTagType.BYTE: 1,
    ExifTagType.ASCII: 1,
    ExifTagType.SHORT: 2,
    ExifTagType.LONG: 4,
    ExifTagType.RATIONAL: 8,
    ExifTagType.SBYTE: 1,
    ExifTagType.UNDEFINED: 1,
    ExifTagType.SSHORT: 2,
    ExifTagType.SLONG: 4,
    ExifTagType.SRATIONAL: 8,
}

# struct format character for the integer types
INTEGER_FORMATS = {
    ExifTagType.BYTE: 'B',
    ExifTagType.SHORT: 'H',
    ExifTagType.LONG: 'I',
    ExifTagType.SBYTE: 'b',
    ExifTagType.SSHORT: 'h',
    ExifTagType.SLONG: 'i',
}


class ExifParser:
    """
    Parser for the TIFF-structured EXIF block of a PNG eXIf chunk.

    Values are reported the way they are displayed: text as str,
    single integers as int, rationals as 'numerator/denominator',
    multi-valued tags as indexed lists ({0: ..., 1: ...}).
    """

    def __init__(self, file_data: bytes):
        """
        Initialize the EXIF parser.

        Args:
            file_data: Raw eXIf chunk payload
        """
        # Some writers keep the JPEG APP1 header in front of the TIFF data
        if file_data.startswith(EXIF_HEADER):
            file_data = file_data[len(EXIF_HEADER):]
        self.file_data = file_data
        self.endian = '<'
        self._visited: Set[int] = set()

    def read(self) -> Dict[str, Any]:
        """
        Read EXIF metadata from the block.

        Returns:
            Flat dictionary tag name -> value, with IFD1 under 'THUMBNAIL'

        Raises:
            TagDecoderError: If the block is not a valid TIFF structure
        """
        self._visited = set()
        try:
            first_ifd = self._parse_tiff_header()
            metadata, next_ifd = self._parse_ifd(first_ifd, EXIF_TAG_NAMES)

            if next_ifd:
                thumbnail, _ = self._parse_ifd(next_ifd, EXIF_TAG_NAMES)
                if thumbnail:
                    metadata['THUMBNAIL'] = thumbnail

            return metadata
        except (struct.error, IndexError, ValueError) as e:
            raise TagDecoderError(f"Failed to read EXIF data: {str(e)}") from e

    def thumbnail(self) -> Optional[bytes]:
        """
        Locate the JPEG thumbnail referenced by IFD1.

        Returns:
            Raw JPEG bytes, or None when IFD1 has no thumbnail
        """
        self._visited = set()
        try:
            first_ifd = self._parse_tiff_header()
            _, next_ifd = self._parse_ifd(first_ifd, EXIF_TAG_NAMES, follow_pointers=False)
            if not next_ifd:
                return None
            entries = self._read_entries(next_ifd)
        except (TagDecoderError, struct.error, IndexError, ValueError):
            return None

        offset = entries.get(JPEG_INTERCHANGE_FORMAT)
        length = entries.get(JPEG_INTERCHANGE_FORMAT_LENGTH)
        if not isinstance(offset, int) or not isinstance(length, int) or length <= 0:
            return None
        if offset + length > len(self.file_data):
            return None
        return self.file_data[offset:offset + length]

    def _parse_tiff_header(self) -> int:
        """Read byte order and magic; return the first IFD offset."""
        if len(self.file_data) < 8:
            raise TagDecoderError("EXIF block too short for a TIFF header")

        byte_order = self.file_data[:2]
        if byte_order == b'II':
            self.endian = '<'
        elif byte_order == b'MM':
            self.endian = '>'
        else:
            raise TagDecoderError(f"Invalid TIFF byte order: {byte_order!r}")

        magic, first_ifd = struct.unpack(f'{self.endian}HI', self.file_data[2:8])
        if magic != 42:
            raise TagDecoderError(f"Invalid TIFF magic number: {magic}")
        return first_ifd

    def _read_entries(self, ifd_offset: int) -> Dict[int, Any]:
        """Raw tag id -> value for one IFD, without naming or formatting."""
        entries: Dict[int, Any] = {}
        for tag_id, tag_type, count, entry_offset in self._iter_entries(ifd_offset):
            entries[tag_id] = self._read_tag_value(tag_type, count, entry_offset)
        return entries

    def _iter_entries(self, ifd_offset: int):
        if ifd_offset + 2 > len(self.file_data):
            raise TagDecoderError(f"IFD offset {ifd_offset} out of range")

        num_entries = struct.unpack(f'{self.endian}H', self.file_data[ifd_offset:ifd_offset + 2])[0]
        if num_entries > MAX_IFD_ENTRIES:
            raise TagDecoderError(f"IFD at {ifd_offset} claims {num_entries} entries")

        entry_offset = ifd_offset + 2
        for _ in range(num_entries):
            if entry_offset + 12 > len(self.file_data):
                break
            tag_id, tag_type, count = struct.unpack(
                f'{self.endian}HHI', self.file_data[entry_offset:entry_offset + 8]
            )
            yield tag_id, tag_type, count, entry_offset
            entry_offset += 12

    def _next_ifd_offset(self, ifd_offset: int) -> int:
        num_entries = struct.unpack(f'{self.endian}H', self.file_data[ifd_offset:ifd_offset + 2])[0]
        position = ifd_offset + 2 + num_entries * 12
        if position + 4 > len(self.file_data):
            return 0
        return struct.unpack(f'{self.endian}I', self.file_data[position:position + 4])[0]

    def _parse_ifd(
        self,
        ifd_offset: int,
        tag_names: Mapping[int, str],
        follow_pointers: bool = True
    ) -> Tuple[Dict[str, Any], int]:
        """
        Parse an IFD (Image File Directory) structure.

        Args:
            ifd_offset: Offset to the IFD from the start of the TIFF data
            tag_names: Tag name table for this directory
            follow_pointers: If True, merge EXIF/GPS/Interop sub-IFDs

        Returns:
            Tuple of (parsed tags, offset of the next IFD or 0)
        """
        if ifd_offset in self._visited:
            return {}, 0
        self._visited.add(ifd_offset)

        metadata: Dict[str, Any] = {}
        for tag_id, tag_type, count, entry_offset in self._iter_entries(ifd_offset):
            if tag_id in POINTER_TAGS:
                if follow_pointers:
                    sub_offset = self._read_tag_value(tag_type, count, entry_offset)
                    if isinstance(sub_offset, int) and sub_offset:
                        sub_metadata, _ = self._parse_ifd(sub_offset, POINTER_TAGS[tag_id])
                        metadata.update(sub_metadata)
                continue

            value = self._read_tag_value(tag_type, count, entry_offset)
            if value is None:
                continue

            # No ':' in generated names, it separates tree path segments
            tag_name = tag_names.get(tag_id, f'UndefinedTag_0x{tag_id:04X}')
            metadata[tag_name] = self._format_value(tag_id, tag_type, value)

        return metadata, self._next_ifd_offset(ifd_offset)

    def _read_tag_value(self, tag_type: int, count: int, entry_offset: int) -> Any:
        """
        Read the value of an EXIF tag.

        Args:
            tag_type: Type of the tag (ExifTagType)
            count: Number of values
            entry_offset: Offset of the 12-byte directory entry

        Returns:
            Parsed tag value(s), or None for unknown types and bad offsets
        """
        try:
            tag_type_enum = ExifTagType(tag_type)
        except ValueError:
            return None

        total_size = TAG_SIZES[tag_type_enum] * count

        # If value fits in 4 bytes, it's stored inline
        if total_size <= 4:
            data_offset = entry_offset + 8
        else:
            data_offset = struct.unpack(
                f'{self.endian}I', self.file_data[entry_offset + 8:entry_offset + 12]
            )[0]

        if data_offset + total_size > len(self.file_data):
            return None

        data = self.file_data[data_offset:data_offset + total_size]

        if tag_type_enum == ExifTagType.ASCII:
            string_data = data.split(b'\x00', 1)[0]
            try:
                return string_data.decode('utf-8').strip()
            except UnicodeDecodeError:
                return string_data.decode('latin-1').strip()

        if tag_type_enum == ExifTagType.UNDEFINED:
            return data

        if tag_type_enum in (ExifTagType.RATIONAL, ExifTagType.SRATIONAL):
            fmt = 'II' if tag_type_enum == ExifTagType.RATIONAL else 'ii'
            values = [
                struct.unpack(f'{self.endian}{fmt}', data[i * 8:(i + 1) * 8])
                for i in range(count)
            ]
            return values[0] if count == 1 else values

        values = list(struct.unpack(f'{self.endian}{count}{INTEGER_FORMATS[tag_type_enum]}', data))
        return values[0] if count == 1 else values

    @staticmethod
    def _format_value(tag_id: int, tag_type: int, value: Any) -> Any:
        """Turn a raw tag value into its display form."""
        if tag_id in XP_TAGS and isinstance(value, list):
            return bytes(value).decode('utf-16-le', errors='replace').rstrip('\x00')

        if isinstance(value, bytes):
            text = value.rstrip(b'\x00')
            if text and all(32 <= b < 127 for b in text):
                return text.decode('ascii')
            return f'(Binary data {len(value)} bytes)'

        if isinstance(value, tuple):
            return f'{value[0]}/{value[1]}'

        if isinstance(value, list):
            return {i: ExifParser._format_value(tag_id, tag_type, v) for i, v in enumerate(value)}

        return value


def decode_exif(blob: bytes) -> Dict[str, Any]:
    """
    Default tag decoder: decode an eXIf payload.

    Args:
        blob: Raw eXIf chunk payload

    Returns:
        Flat dictionary tag name -> value, IFD1 tags under 'THUMBNAIL'

    Raises:
        TagDecoderError: If the payload is not a valid TIFF structure
    """
    return ExifParser(blob).read()


def extract_thumbnail(blob: bytes) -> Optional[bytes]:
    """
    Return the raw JPEG thumbnail bytes referenced by IFD1, if any.

    The thumbnail is returned as stored; it is not decoded.
    """
    return ExifParser(blob).thumbnail()
