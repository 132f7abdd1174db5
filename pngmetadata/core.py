# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Core PNGMetadata class

This module provides the main API for extracting metadata from PNG
images. It combines the chunk reader, the chunk decoders, the XMP
extractor and the EXIF tag decoder into one metadata tree.

Copyright 2025 DNAi inc.
"""

import io
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, BinaryIO, Callable, Dict, List, Optional, Tuple, Union

from pngmetadata.chunk_decoders import decode_bkgd, decode_ihdr, decode_srgb, decode_text
from pngmetadata.chunk_reader import RawChunkSet, read_chunks
from pngmetadata.exceptions import (
    DecodeError,
    FileNotReadableError,
    PNGFileNotFoundError,
    PNGMetadataError,
    TagDecoderError,
    XMPWarning,
)
from pngmetadata.exif_parser import decode_exif, extract_thumbnail
from pngmetadata.metadata_tree import MetadataTree
from pngmetadata.tree_ops import is_composite, merge
from pngmetadata.xmp_extractor import XMPExtractor

logger = logging.getLogger(__name__)

TagDecoder = Callable[[bytes], Mapping]
Source = Union[str, Path, bytes, bytearray, BinaryIO]


class PNGMetadata(Mapping):
    """
    Metadata of a PNG image: IHDR, bKGD, sRGB, tEXt, XMP and EXIF.

    The instance is a read-only mapping over the extracted tree and adds
    path lookup, two-column rendering and thumbnail access.

    Examples:
        >>> meta = PNGMetadata('image.png')
        >>> meta.get('IHDR:ColorType')
        'RGB'
        >>> print(meta)
    """

    def __init__(
        self,
        source: Source,
        tag_decoder: Optional[TagDecoder] = None,
        **options: Any
    ):
        """
        Initialize PNGMetadata and extract the metadata.

        Args:
            source: Path to a PNG file, PNG bytes, or a binary stream
                positioned at the PNG signature
            tag_decoder: Callable decoding the eXIf payload into a flat
                mapping (default: the built-in EXIF parser)
            **options: Option values, see available_options()

        Raises:
            PNGFileNotFoundError: If the path does not exist
            FileNotReadableError: If the path cannot be opened
            BadSignatureError: If the data is not a PNG stream
            TruncatedChunkError: If a chunk runs past the end of the data
        """
        self.source = source
        self._stream_start: Optional[int] = None
        if hasattr(source, 'read') and source.seekable():
            self._stream_start = source.tell()
        self.tag_decoder: TagDecoder = tag_decoder or decode_exif

        # Initialize API options with defaults
        self.options: Dict[str, Any] = {}
        self._initialize_default_options()
        for option_name, value in options.items():
            self.set_option(option_name, value)

        self._warnings: List[PNGMetadataError] = []
        self._exif_data: bytes = b''
        self._xmp_namespaces: Dict[str, str] = {}
        self._chunk_types: Tuple[str, ...] = ()
        self._tree = MetadataTree({})

        self.load()

    @staticmethod
    def available_options() -> Dict[str, Dict[str, Any]]:
        """
        Return a dictionary of available API options.

        Returns:
            Dictionary mapping option names to their description, type
            and default value
        """
        return {
            'NoWarning': {
                'description': 'Do not log recoverable warnings (they are still collected)',
                'type': 'bool',
                'default': False,
            },
            'ExtractXMP': {
                'description': 'Decode the XMP packet of the iTXt chunk',
                'type': 'bool',
                'default': True,
            },
            'ExtractEXIF': {
                'description': 'Run the tag decoder on the eXIf chunk',
                'type': 'bool',
                'default': True,
            },
            'StrictEnums': {
                'description': 'Raise on IHDR codes missing from the lookup tables',
                'type': 'bool',
                'default': False,
            },
        }

    def _initialize_default_options(self) -> None:
        for option_name, option_info in self.available_options().items():
            self.options[option_name] = option_info['default']

    def set_option(self, option_name: str, value: Any) -> None:
        """
        Set an API option value.

        Takes effect on the next call to load().

        Args:
            option_name: Name of the option (e.g., 'NoWarning')
            value: Value to set for the option

        Raises:
            ValueError: If option name is not recognized
        """
        available = self.available_options()
        if option_name not in available:
            raise ValueError(f"Unknown option: {option_name}. Use available_options() to see valid options.")

        if available[option_name]['type'] == 'bool' and not isinstance(value, bool):
            # Accept 'true'/'false' style strings from config sources
            if isinstance(value, str):
                value = value.lower() in ('true', '1', 'yes', 'on')
            else:
                value = bool(value)

        self.options[option_name] = value

    def get_option(self, option_name: str, default: Any = None) -> Any:
        return self.options.get(option_name, default)

    @classmethod
    def extract(cls, source: Source, **kwargs: Any) -> Optional['PNGMetadata']:
        """
        Extract metadata, returning None instead of raising on failure.

        Args:
            source: Path, bytes or binary stream
            **kwargs: Passed to the constructor

        Returns:
            PNGMetadata instance, or None if the source could not be read
        """
        try:
            return cls(source, **kwargs)
        except (PNGMetadataError, OSError) as e:
            logger.debug("Metadata extraction failed for %r: %s", source, e)
            return None

    def load(self) -> MetadataTree:
        """
        Read the PNG chunks and build the metadata tree.

        Container errors propagate; problems with a single chunk type are
        recorded in `warnings` and the other chunk types are still decoded.

        Returns:
            The new metadata tree
        """
        self._warnings = []
        self._exif_data = b''
        self._xmp_namespaces = {}

        chunks = self._read_chunks()
        self._chunk_types = tuple(chunks.chunk_types)

        metadata: Dict[str, Any] = {}
        self._extract_xmp(chunks, metadata)
        self._extract_text(chunks, metadata)
        metadata = self._extract_exif(chunks, metadata)
        self._extract_bkgd(chunks, metadata)
        self._extract_srgb(chunks, metadata)
        self._extract_ihdr(chunks, metadata)

        self._tree = MetadataTree(metadata, self._warnings)
        return self._tree

    def _read_chunks(self) -> RawChunkSet:
        source = self.source
        if isinstance(source, (bytes, bytearray)):
            return read_chunks(io.BytesIO(bytes(source)))
        if hasattr(source, 'read'):
            if self._stream_start is not None:
                source.seek(self._stream_start)
            return read_chunks(source)

        file_path = Path(source)
        if not file_path.exists():
            raise PNGFileNotFoundError(f"File not found: {file_path}")
        try:
            with open(str(file_path), 'rb') as f:
                return read_chunks(f)
        except (PermissionError, IsADirectoryError) as e:
            raise FileNotReadableError(f"File is not readable: {file_path}") from e

    def _warn(self, error: PNGMetadataError) -> None:
        self._warnings.append(error)
        if not self.get_option('NoWarning'):
            logger.warning("%s", error.message)

    def _extract_xmp(self, chunks: RawChunkSet, metadata: Dict[str, Any]) -> None:
        payload = chunks.get('iTXt')
        if payload is None or not self.get_option('ExtractXMP'):
            return

        extractor = XMPExtractor(payload)
        if not extractor.is_xmp():
            return

        try:
            result = extractor.extract()
            self._xmp_namespaces = extractor.namespaces()
        except XMPWarning as e:
            self._warn(e)
            return

        if result:
            metadata['xmp'] = result

    def _extract_text(self, chunks: RawChunkSet, metadata: Dict[str, Any]) -> None:
        for group, value in decode_text(chunks.text).items():
            if is_composite(value) and is_composite(metadata.get(group)):
                metadata[group] = {**metadata[group], **value}
            else:
                metadata[group] = value

    def _extract_exif(self, chunks: RawChunkSet, metadata: Dict[str, Any]) -> Dict[str, Any]:
        payload = chunks.get('eXIf')
        if payload is None or not self.get_option('ExtractEXIF'):
            return metadata

        self._exif_data = payload
        try:
            exif = self.tag_decoder(payload)
        except TagDecoderError as e:
            self._warn(e)
            return metadata
        except Exception as e:
            # Third-party decoders may raise anything; EXIF is optional
            self._warn(TagDecoderError(f"Tag decoder failed: {e}"))
            return metadata

        if not exif:
            return metadata
        return merge(metadata, {'exif': dict(exif)})

    def _extract_bkgd(self, chunks: RawChunkSet, metadata: Dict[str, Any]) -> None:
        payload = chunks.get('bKGD')
        if payload is not None:
            metadata['bKGD'] = decode_bkgd(payload)

    def _extract_srgb(self, chunks: RawChunkSet, metadata: Dict[str, Any]) -> None:
        payload = chunks.get('sRGB')
        if payload is not None:
            metadata['sRGB'] = decode_srgb(payload)

    def _extract_ihdr(self, chunks: RawChunkSet, metadata: Dict[str, Any]) -> None:
        if chunks.ihdr is None:
            return

        enum_warnings: List[PNGMetadataError] = []
        try:
            metadata['IHDR'] = decode_ihdr(
                chunks.ihdr,
                strict=self.get_option('StrictEnums'),
                warnings=enum_warnings,
            )
        except DecodeError as e:
            if self.get_option('StrictEnums'):
                raise
            self._warn(e)
        for warning in enum_warnings:
            self._warn(warning)

    @property
    def tree(self) -> MetadataTree:
        return self._tree

    @property
    def warnings(self) -> Tuple[PNGMetadataError, ...]:
        """Recoverable problems met during the last load()."""
        return tuple(self._warnings)

    @property
    def chunk_types(self) -> Tuple[str, ...]:
        """Chunk types of the image, in stream order."""
        return self._chunk_types

    @property
    def xmp_namespaces(self) -> Dict[str, str]:
        """Known XMP namespaces (prefix -> URI) used by the XMP packet."""
        return dict(self._xmp_namespaces)

    def get_thumbnail(self) -> Optional[bytes]:
        """
        Get the EXIF thumbnail.

        Returns:
            Raw JPEG bytes of the IFD1 thumbnail, or None
        """
        if not self._exif_data:
            return None
        return extract_thumbnail(self._exif_data)

    def get(self, path: str, default: Any = None) -> Any:
        """
        Return a metadata value by colon-separated path.

        Args:
            path: A path such as 'exif:THUMBNAIL:Compression'
            default: Returned when the path does not exist

        Returns:
            Scalar or mapping at the path, or default
        """
        return self._tree.get(path, default)

    def to_dict(self) -> Dict[str, Any]:
        return self._tree.to_dict()

    def render(self) -> List[Tuple[str, str]]:
        return self._tree.render()

    def render_text(self, html: bool = False) -> str:
        return self._tree.render_text(html=html)

    def __getitem__(self, key):
        return self._tree[key]

    def __iter__(self):
        return iter(self._tree)

    def __len__(self) -> int:
        return len(self._tree)

    def __str__(self) -> str:
        return self._tree.render_text()

    def __repr__(self) -> str:
        return f"PNGMetadata({self.source!r})" if isinstance(self.source, (str, Path)) \
            else f"PNGMetadata(<{type(self.source).__name__}>)"

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        pass


def extract_metadata(source: Source, **kwargs: Any) -> MetadataTree:
    """
    Extract the metadata tree of a PNG image.

    Args:
        source: Path, bytes or binary stream
        **kwargs: Passed to PNGMetadata

    Returns:
        MetadataTree of the image
    """
    return PNGMetadata(source, **kwargs).tree
