# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
PNG chunk reader

This module walks the PNG container chunk by chunk and isolates the
payloads the metadata decoders need. Pixel data (IDAT) and every other
chunk type is skipped with a seek, never read.

Copyright 2025 DNAi inc.
"""

import io
import logging
import struct
from typing import BinaryIO, Dict, List, NamedTuple, Optional, Tuple

from pngmetadata.exceptions import BadSignatureError, TruncatedChunkError

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'

# Chunk length (4 bytes, big-endian) + chunk type (4 bytes)
CHUNK_HEADER = struct.Struct('>I4s')
CRC_SIZE = 4

IEND = 'IEND'
IHDR = 'IHDR'
TEXT = 'tEXt'

# Chunk types captured as a single raw payload (last one seen wins)
SINGLE_PAYLOAD_TYPES = frozenset({'eXIf', 'sRGB', 'iTXt', 'bKGD'})

# IHDR field widths: width, height, bit depth, color type,
# compression method, filter method, interlace method
IHDR_FIELD_WIDTHS = (4, 4, 1, 1, 1, 1, 1)


class Chunk(NamedTuple):
    """A single chunk as seen by the reader."""
    type: str
    length: int
    payload: bytes = b''


class RawChunkSet:
    """
    Raw payloads collected during one scan of a PNG stream.

    Attributes:
        single: Chunk type -> raw payload for eXIf, sRGB, iTXt and bKGD
        ihdr: The raw IHDR field slices, or None when no IHDR was seen
        text: Ordered (keyword, value) pairs from every tEXt chunk
        chunk_types: Every chunk type encountered, in stream order
    """

    def __init__(self):
        self.single: Dict[str, bytes] = {}
        self.ihdr: Optional[Tuple[bytes, ...]] = None
        self.text: List[Tuple[str, str]] = []
        self.chunk_types: List[str] = []

    def get(self, chunk_type: str) -> Optional[bytes]:
        return self.single.get(chunk_type)

    def __contains__(self, chunk_type: str) -> bool:
        if chunk_type == IHDR:
            return self.ihdr is not None
        if chunk_type == TEXT:
            return bool(self.text)
        return chunk_type in self.single

    def __repr__(self) -> str:
        return (f"RawChunkSet(single={sorted(self.single)}, "
                f"ihdr={self.ihdr is not None}, text={len(self.text)})")


def split_text_payload(payload: bytes) -> Tuple[str, str]:
    """
    Split a tEXt payload into its keyword and text.

    tEXt format: keyword (Latin-1), NUL separator, text (Latin-1).
    A payload without separator is treated as a keyword with empty text.
    """
    keyword, _, text = payload.partition(b'\x00')
    return keyword.decode('latin-1'), text.decode('latin-1')


def split_ihdr_payload(payload: bytes) -> Tuple[bytes, ...]:
    """Slice an IHDR payload into its fixed-width fields."""
    fields = []
    offset = 0
    for width in IHDR_FIELD_WIDTHS:
        fields.append(payload[offset:offset + width])
        offset += width
    return tuple(fields)


class ChunkReader:
    """
    Sequential scanner over a PNG byte stream.

    The stream must be positioned at the PNG signature. Non-seekable
    streams are buffered in memory first.
    """

    def __init__(self, stream: BinaryIO):
        """
        Initialize the chunk reader.

        Args:
            stream: Binary stream positioned at the start of the PNG data
        """
        if not stream.seekable():
            stream = io.BytesIO(stream.read())
        self.stream = stream
        self._start = stream.tell()
        self._end = stream.seek(0, io.SEEK_END)
        stream.seek(self._start)

    def read(self) -> RawChunkSet:
        """
        Scan the stream and collect the payloads of interest.

        Returns:
            RawChunkSet with the captured payloads

        Raises:
            BadSignatureError: If the stream does not start with the PNG signature
            TruncatedChunkError: If a chunk runs past the end of the stream
        """
        self._check_signature()
        chunks = RawChunkSet()

        for chunk in self.iter_chunks():
            chunks.chunk_types.append(chunk.type)
            if chunk.type == TEXT:
                chunks.text.append(split_text_payload(chunk.payload))
            elif chunk.type == IHDR:
                chunks.ihdr = split_ihdr_payload(chunk.payload)
            elif chunk.type in SINGLE_PAYLOAD_TYPES:
                chunks.single[chunk.type] = chunk.payload

        return chunks

    def iter_chunks(self):
        """
        Yield chunks until IEND or the end of the stream.

        Payloads are only read for the chunk types the decoders consume;
        every other chunk is yielded with an empty payload.
        """
        while True:
            header = self.stream.read(CHUNK_HEADER.size)
            if not header:
                logger.debug("End of stream reached without IEND chunk")
                return
            if len(header) < CHUNK_HEADER.size:
                raise TruncatedChunkError(
                    f"Chunk header truncated at offset {self.stream.tell() - len(header)}"
                )

            length, raw_type = CHUNK_HEADER.unpack(header)
            chunk_type = raw_type.decode('latin-1')
            logger.debug("Chunk %s (%d bytes) at offset %d",
                         chunk_type, length, self.stream.tell() - CHUNK_HEADER.size)

            if chunk_type == IEND:
                yield Chunk(chunk_type, length)
                return

            if chunk_type == TEXT:
                payload = self._read_exact(length, chunk_type)
                self._skip(CRC_SIZE, chunk_type)
            elif chunk_type == IHDR or chunk_type in SINGLE_PAYLOAD_TYPES:
                # Capture the payload, then skip from the pre-capture
                # position so the next read lands on the next header
                position = self.stream.tell()
                payload = self._read_exact(length, chunk_type)
                self.stream.seek(position)
                self._skip(length + CRC_SIZE, chunk_type)
            else:
                payload = b''
                self._skip(length + CRC_SIZE, chunk_type)

            yield Chunk(chunk_type, length, payload)

    def _check_signature(self) -> None:
        signature = self.stream.read(len(PNG_SIGNATURE))
        if signature != PNG_SIGNATURE:
            raise BadSignatureError("Invalid PNG file signature")

    def _read_exact(self, size: int, chunk_type: str) -> bytes:
        data = self.stream.read(size)
        if len(data) < size:
            raise TruncatedChunkError(
                f"{chunk_type} chunk claims {size} bytes but only {len(data)} remain"
            )
        return data

    def _skip(self, size: int, chunk_type: str) -> None:
        target = self.stream.tell() + size
        if target > self._end:
            raise TruncatedChunkError(
                f"{chunk_type} chunk runs {target - self._end} bytes past the end of the stream"
            )
        self.stream.seek(target)


def read_chunks(stream: BinaryIO) -> RawChunkSet:
    """
    Read the metadata-bearing chunks of a PNG stream.

    Args:
        stream: Binary stream positioned at the PNG signature

    Returns:
        RawChunkSet with the captured payloads
    """
    return ChunkReader(stream).read()
