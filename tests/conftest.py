"""
Shared fixtures for pngmetadata tests.
"""

import pytest

from pngdata import (
    ASCII,
    RATIONAL,
    SHORT,
    THUMBNAIL_JPEG,
    XMP_SAMPLE,
    build_png,
    build_tiff,
    chunk,
    idat,
    ihdr,
    itxt_xmp,
    text,
)


@pytest.fixture
def exif_blob():
    """TIFF block with IFD0, an EXIF sub-IFD and a thumbnail IFD1."""
    return build_tiff(
        ifd0=[
            (0x010F, ASCII, 'Canon'),
            (0x0110, ASCII, 'EOS R5'),
            (0x0112, SHORT, 1),
            (0x011A, RATIONAL, (72, 1)),
        ],
        exif_ifd=[
            (0x829A, RATIONAL, (1, 125)),
            (0x8827, SHORT, 100),
        ],
        ifd1=[(0x0103, SHORT, 6)],
        thumbnail=THUMBNAIL_JPEG,
    )


@pytest.fixture
def full_png(exif_blob):
    """PNG carrying every metadata chunk type the extractor decodes."""
    return build_png(
        ihdr(width=640, height=480, bit_depth=8, color_type=2),
        chunk(b'sRGB', b'\x00'),
        chunk(b'bKGD', b'\x00\xff\x00\x80\x00\x00'),
        itxt_xmp(XMP_SAMPLE),
        chunk(b'eXIf', exif_blob),
        text('Title', 'Holiday'),
        text('exif:Make', 'Canon'),
        idat(),
    )


@pytest.fixture
def png_file(tmp_path, full_png):
    """The full PNG written to a temporary file."""
    path = tmp_path / "image.png"
    path.write_bytes(full_png)
    return path
