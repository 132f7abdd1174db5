"""
Tests for the PNGMetadata extraction pipeline.
"""

import io
import logging
from types import MappingProxyType

import pytest

from pngmetadata import PNGMetadata, extract_metadata
from pngmetadata.exceptions import (
    BadSignatureError,
    FileNotReadableError,
    MalformedChunkError,
    PNGFileNotFoundError,
    TagDecoderError,
    TruncatedChunkError,
    UnexpectedXMPRootWarning,
    UnknownEnumError,
    XMPParseWarning,
)
from pngmetadata.metadata_tree import display_value
from pngdata import (
    SHORT,
    THUMBNAIL_JPEG,
    build_png,
    build_tiff,
    chunk,
    idat,
    ihdr,
    itxt_xmp,
    text,
)


def test_full_extraction(full_png):
    metadata = PNGMetadata(full_png)

    assert list(metadata) == ['IHDR', 'Title', 'bKGD', 'exif', 'sRGB', 'xmp']
    assert metadata['IHDR'] == {
        'ImageWidth': 640,
        'ImageHeight': 480,
        'BitDepth': 8,
        'ColorType': 'RGB',
        'Compression': 'Deflate/Inflate',
        'Filter': 'Adaptive',
        'Interlace': 'Noninterlaced',
    }
    assert metadata['sRGB'] == 'Perceptual'
    assert metadata['bKGD'] == '255 128 0'
    assert metadata['Title'] == 'Holiday'
    assert metadata.get('xmp:title') == 'Sunset'
    assert metadata.get('xmp:subject:0') == 'beach'
    assert metadata.warnings == ()


def test_exif_merges_with_text_group(full_png):
    metadata = PNGMetadata(full_png)

    # tEXt exif:Make and the decoded Make agree
    assert metadata.get('exif:Make') == 'Canon'
    assert metadata.get('exif:Model') == 'EOS R5'
    assert metadata.get('exif:THUMBNAIL:Compression') == 6


def test_unequal_exif_values_are_joined():
    png = build_png(ihdr(), text('exif:Make', 'Canon'), chunk(b'eXIf', b'blob'))
    metadata = PNGMetadata(png, tag_decoder=lambda blob: {'Make': 'Nikon'})

    assert metadata.get('exif:Make') == 'Canon,Nikon'


def test_custom_tag_decoder_receives_payload():
    seen = []

    def decoder(blob):
        seen.append(blob)
        return {'Custom': 'yes'}

    metadata = PNGMetadata(build_png(ihdr(), chunk(b'eXIf', b'raw exif')), tag_decoder=decoder)

    assert seen == [b'raw exif']
    assert metadata.get('exif:Custom') == 'yes'


def test_minimal_image():
    metadata = PNGMetadata(build_png(ihdr(width=1, height=1), idat()))

    assert list(metadata) == ['IHDR']
    assert metadata.chunk_types == ('IHDR', 'IDAT', 'IEND')


def test_image_without_ihdr():
    assert dict(PNGMetadata(build_png(text('Title', 'x')))) == {'Title': 'x'}


def test_top_level_keys_are_sorted():
    png = build_png(text('zeta', '1'), text('Alpha', '2'), text('beta', '3'), ihdr())

    assert list(PNGMetadata(png)) == ['Alpha', 'IHDR', 'beta', 'zeta']


def test_tree_is_read_only(full_png):
    metadata = PNGMetadata(full_png)

    assert isinstance(metadata['IHDR'], MappingProxyType)
    with pytest.raises(TypeError):
        metadata['IHDR']['ImageWidth'] = 1


def test_rendered_paths_resolve(full_png):
    metadata = PNGMetadata(full_png)

    for path, value in metadata.render():
        assert display_value(metadata.get(path)) == value


def test_str_renders_two_columns(full_png):
    rendered = str(PNGMetadata(full_png))

    assert rendered.startswith('--Metadata--')
    assert 'IHDR:ImageWidth' in rendered
    assert 'xmp:CreatorTool' in rendered


def test_to_dict(full_png):
    data = PNGMetadata(full_png).to_dict()

    assert data['IHDR']['ColorType'] == 'RGB'
    assert data['xmp']['subject'] == {0: 'beach', 1: 'sea'}


def test_reads_from_path(png_file):
    assert PNGMetadata(png_file).get('IHDR:ImageWidth') == 640
    assert PNGMetadata(str(png_file)).get('IHDR:ImageWidth') == 640


def test_reads_from_stream(full_png):
    with PNGMetadata(io.BytesIO(full_png)) as metadata:
        assert metadata.get('sRGB') == 'Perceptual'


def test_missing_file(tmp_path):
    with pytest.raises(PNGFileNotFoundError) as exc_info:
        PNGMetadata(tmp_path / 'missing.png')

    assert isinstance(exc_info.value, FileNotFoundError)


def test_directory_is_not_readable(tmp_path):
    with pytest.raises(FileNotReadableError):
        PNGMetadata(tmp_path)


def test_not_a_png():
    with pytest.raises(BadSignatureError):
        PNGMetadata(b'\xff\xd8\xff\xe0 not a png')


def test_truncated_png():
    with pytest.raises(TruncatedChunkError):
        PNGMetadata(build_png(ihdr())[:20])


def test_extract_returns_none_on_failure(tmp_path):
    assert PNGMetadata.extract(tmp_path / 'missing.png') is None
    assert PNGMetadata.extract(b'garbage') is None


def test_extract_returns_metadata(full_png):
    assert PNGMetadata.extract(full_png).get('Title') == 'Holiday'


def test_extract_metadata_function(full_png):
    assert extract_metadata(full_png).get('IHDR:BitDepth') == 8


def test_broken_xmp_is_a_warning():
    png = build_png(ihdr(), itxt_xmp('<x:xmpmeta xmlns:x="adobe:ns:meta/">'), text('Title', 'x'))
    metadata = PNGMetadata(png)

    assert 'xmp' not in metadata
    assert metadata.get('Title') == 'x'
    assert [type(w) for w in metadata.warnings] == [XMPParseWarning]
    assert metadata.tree.warnings == metadata.warnings


def test_unexpected_xmp_root_is_a_warning():
    png = build_png(ihdr(), itxt_xmp('<root/>'))
    metadata = PNGMetadata(png)

    assert 'xmp' not in metadata
    assert isinstance(metadata.warnings[0], UnexpectedXMPRootWarning)


def test_failing_tag_decoder_is_a_warning():
    def decoder(blob):
        raise ValueError('boom')

    metadata = PNGMetadata(build_png(ihdr(), chunk(b'eXIf', b'x')), tag_decoder=decoder)

    assert 'exif' not in metadata
    assert 'IHDR' in metadata
    assert isinstance(metadata.warnings[0], TagDecoderError)
    assert 'boom' in metadata.warnings[0].message


def test_invalid_exif_is_a_warning():
    metadata = PNGMetadata(build_png(ihdr(), chunk(b'eXIf', b'not tiff at all')))

    assert 'exif' not in metadata
    assert isinstance(metadata.warnings[0], TagDecoderError)


def test_unknown_color_type():
    metadata = PNGMetadata(build_png(ihdr(color_type=5)))

    assert metadata.get('IHDR:ColorType') == 'Unknown (5)'
    assert isinstance(metadata.warnings[0], UnknownEnumError)


def test_unknown_color_type_strict():
    with pytest.raises(UnknownEnumError):
        PNGMetadata(build_png(ihdr(color_type=5)), StrictEnums=True)


def test_short_ihdr_is_a_warning():
    png = build_png(chunk(b'IHDR', b'\x00' * 10), text('Title', 'x'))
    metadata = PNGMetadata(png)

    assert 'IHDR' not in metadata
    assert isinstance(metadata.warnings[0], MalformedChunkError)


def test_warnings_are_logged(caplog):
    with caplog.at_level(logging.WARNING, logger='pngmetadata'):
        PNGMetadata(build_png(ihdr(color_type=5)))

    assert 'Unknown ColorType code: 5' in caplog.text


def test_no_warning_option_silences_log(caplog):
    with caplog.at_level(logging.WARNING, logger='pngmetadata'):
        metadata = PNGMetadata(build_png(ihdr(color_type=5)), NoWarning=True)

    assert caplog.text == ''
    assert len(metadata.warnings) == 1


def test_extract_xmp_option(full_png):
    metadata = PNGMetadata(full_png, ExtractXMP=False)

    assert 'xmp' not in metadata
    assert metadata.xmp_namespaces == {}


def test_extract_exif_option(full_png):
    calls = []
    metadata = PNGMetadata(full_png, tag_decoder=lambda blob: calls.append(blob), ExtractEXIF=False)

    assert calls == []
    assert metadata.get('exif') == {'Make': 'Canon'}
    assert metadata.get_thumbnail() is None


def test_options():
    metadata = PNGMetadata(build_png(ihdr()))

    assert set(metadata.available_options()) == {'NoWarning', 'ExtractXMP', 'ExtractEXIF', 'StrictEnums'}
    assert metadata.get_option('ExtractXMP') is True

    metadata.set_option('NoWarning', 'yes')
    assert metadata.get_option('NoWarning') is True

    with pytest.raises(ValueError):
        metadata.set_option('NoSuchOption', True)


def test_unknown_option_in_constructor():
    with pytest.raises(ValueError):
        PNGMetadata(build_png(ihdr()), Verbose=True)


def test_reload_after_option_change(full_png):
    metadata = PNGMetadata(io.BytesIO(full_png))
    assert 'xmp' in metadata

    metadata.set_option('ExtractXMP', False)
    metadata.load()

    assert 'xmp' not in metadata
    assert 'IHDR' in metadata


def test_xmp_namespaces(full_png):
    assert list(PNGMetadata(full_png).xmp_namespaces) == ['dc', 'rdf', 'xmp']


def test_get_thumbnail(full_png):
    assert PNGMetadata(full_png).get_thumbnail() == THUMBNAIL_JPEG


def test_get_thumbnail_without_exif():
    assert PNGMetadata(build_png(ihdr())).get_thumbnail() is None


def test_short_input_is_not_a_png():
    with pytest.raises(BadSignatureError):
        PNGMetadata(b'\x89PNG')


def test_rendered_paths_start_with_top_level_keys():
    png = build_png(ihdr(), text('Empty', ''), text('exif:Make', 'Canon'), chunk(b'bKGD', b'\x03'))
    metadata = PNGMetadata(png)

    first_segments = []
    for path, _ in metadata.render():
        segment = path.split(':')[0]
        if segment not in first_segments:
            first_segments.append(segment)

    assert first_segments == list(metadata)


def test_deeply_nested_xmp_does_not_stop_other_chunks():
    depth = 3000
    xml = ('<x:xmpmeta xmlns:x="adobe:ns:meta/" xmlns:foo="http://example.com/foo/">'
           + '<foo:a>' * depth + 'v' + '</foo:a>' * depth + '</x:xmpmeta>')
    png = build_png(ihdr(), itxt_xmp(xml), chunk(b'sRGB', b'\x00'))

    metadata = PNGMetadata(png)

    assert 'xmp' not in metadata
    assert metadata.get('sRGB') == 'Perceptual'
    assert isinstance(metadata.warnings[0], XMPParseWarning)
    assert PNGMetadata.extract(png) is not None


def test_numeric_exif_value_mirrored_in_text():
    exif = build_tiff(ifd0=[(0x0112, SHORT, 1)])
    png = build_png(ihdr(), text('exif:Orientation', '1'), chunk(b'eXIf', exif))

    assert PNGMetadata(png).get('exif:Orientation') == '1'


def test_empty_group_keyword_renders_resolvable_path():
    metadata = PNGMetadata(build_png(ihdr(), text(':Foo', 'bar')))

    assert metadata.get(':Foo') == 'bar'
    assert (':Foo', 'bar') in metadata.render()
