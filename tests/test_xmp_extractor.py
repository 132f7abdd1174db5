"""
Tests for the XMP extractor.
"""

import pytest

from pngmetadata.exceptions import UnexpectedXMPRootWarning, XMPParseWarning, XMPWarning
from pngmetadata.xmp_extractor import XMPExtractor, extract_xmp, split_tag_name
from pngdata import XMP_SAMPLE

MARKER = b'XML:com.adobe.xmp\x00\x00\x00\x00\x00'


def xmp_payload(xml: str) -> bytes:
    return MARKER + xml.encode('utf-8')


def description(body: str, attributes: str = '') -> str:
    return (
        '<x:xmpmeta xmlns:x="adobe:ns:meta/">'
        '<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#">'
        '<rdf:Description'
        ' xmlns:dc="http://purl.org/dc/elements/1.1/"'
        ' xmlns:xmp="http://ns.adobe.com/xap/1.0/"'
        ' xmlns:foo="http://example.com/foo/"'
        f' {attributes}>{body}</rdf:Description>'
        '</rdf:RDF></x:xmpmeta>'
    )


def test_extracts_sample_document():
    assert extract_xmp(xmp_payload(XMP_SAMPLE)) == {
        'title': 'Sunset',
        'subject': {0: 'beach', 1: 'sea'},
        'about': '',
        'CreatorTool': 'GIMP',
        'xmptk': 'XMP Core 5.5.0',
    }


def test_non_xmp_itxt_is_ignored():
    assert extract_xmp(b'Comment\x00\x00\x00\x00\x00hello') is None
    assert not XMPExtractor(b'Comment\x00').is_xmp()


def test_trailing_nuls_are_stripped():
    payload = xmp_payload(description('<xmp:Label>Red</xmp:Label>')) + b'\x00\x00'

    assert extract_xmp(payload) == {'Label': 'Red'}


def test_repeated_property_becomes_list():
    xml = description('<xmp:Label>Red</xmp:Label><xmp:Label>Blue</xmp:Label>')

    assert extract_xmp(xmp_payload(xml)) == {'Label': {0: 'Red', 1: 'Blue'}}


def test_sequence_items_keep_document_order():
    xml = description(
        '<dc:creator><rdf:Seq>'
        '<rdf:li>First</rdf:li><rdf:li>Second</rdf:li><rdf:li>Third</rdf:li>'
        '</rdf:Seq></dc:creator>'
    )

    assert extract_xmp(xmp_payload(xml)) == {'creator': {0: 'First', 1: 'Second', 2: 'Third'}}


def test_unknown_prefix_is_nested():
    xml = description('<foo:Bar>x</foo:Bar>')

    assert extract_xmp(xmp_payload(xml)) == {'foo': {'Bar': 'x'}}


def test_attributes_are_keyed_by_local_name():
    xml = description('', attributes='xmp:Rating="5" xmp:Label="Green"')

    assert extract_xmp(xmp_payload(xml)) == {'Rating': '5', 'Label': 'Green'}


def test_namespace_declarations_are_not_properties():
    result = extract_xmp(xmp_payload(description('<xmp:Label>Red</xmp:Label>')))

    assert not any(str(key).startswith('xmlns') for key in result)
    assert 'dc' not in result


def test_cdata_text():
    xml = description('<xmp:Label><![CDATA[ Red ]]></xmp:Label>')

    assert extract_xmp(xmp_payload(xml)) == {'Label': 'Red'}


def test_empty_document():
    assert extract_xmp(xmp_payload('<x:xmpmeta xmlns:x="adobe:ns:meta/"/>')) == {}


def test_unexpected_root():
    with pytest.raises(UnexpectedXMPRootWarning):
        extract_xmp(xmp_payload('<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"/>'))


def test_malformed_xml():
    with pytest.raises(XMPParseWarning):
        extract_xmp(xmp_payload('<x:xmpmeta xmlns:x="adobe:ns:meta/"><unclosed>'))


def test_xmp_warnings_share_base_class():
    assert issubclass(UnexpectedXMPRootWarning, XMPWarning)
    assert issubclass(XMPParseWarning, XMPWarning)


def test_namespaces_used_by_document():
    namespaces = XMPExtractor(xmp_payload(XMP_SAMPLE)).namespaces()

    assert namespaces == {
        'dc': 'http://purl.org/dc/elements/1.1/',
        'rdf': 'http://www.w3.org/1999/02/22-rdf-syntax-ns#',
        'xmp': 'http://ns.adobe.com/xap/1.0/',
    }


def test_parse_is_cached():
    extractor = XMPExtractor(xmp_payload(XMP_SAMPLE))

    assert extractor.parse() is extractor.parse()


def test_split_tag_name():
    assert split_tag_name('dc:title') == ('dc', 'title')
    assert split_tag_name('title') == (None, 'title')


def test_deeply_nested_document_is_a_parse_warning():
    depth = 3000
    xml = ('<x:xmpmeta xmlns:x="adobe:ns:meta/" xmlns:foo="http://example.com/foo/">'
           + '<foo:a>' * depth + 'v' + '</foo:a>' * depth + '</x:xmpmeta>')

    with pytest.raises(XMPParseWarning):
        extract_xmp(xmp_payload(xml))
