# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
XMP namespace tables

Prefixes and URIs of the XMP schemas the extractor recognizes, based on
the Exiv2 XMP tag reference, plus the RDF structural markers that carry
no meaning of their own in the extracted tree.

Copyright 2025 DNAi inc.
"""

from types import MappingProxyType

XMP_NAMESPACES = MappingProxyType({
    'dc': 'http://purl.org/dc/elements/1.1/',
    'rdf': 'http://www.w3.org/1999/02/22-rdf-syntax-ns#',
    'xmp': 'http://ns.adobe.com/xap/1.0/',
    'xmpRights': 'http://ns.adobe.com/xap/1.0/rights/',
    'xmpMM': 'http://ns.adobe.com/xap/1.0/mm/',
    'xmpBJ': 'http://ns.adobe.com/xap/1.0/bj/',
    'xmpTPg': 'http://ns.adobe.com/xap/1.0/t/pg/',
    'xmpDM': 'http://ns.adobe.com/xmp/1.0/DynamicMedia/',
    'pdf': 'http://ns.adobe.com/pdf/1.3/',
    'photoshop': 'http://ns.adobe.com/photoshop/1.0/',
    'crs': 'http://ns.adobe.com/camera-raw-settings/1.0/',
    'crss': 'http://ns.adobe.com/camera-raw-saved-settings/1.0/',
    'tiff': 'http://ns.adobe.com/tiff/1.0/',
    'exif': 'http://ns.adobe.com/exif/1.0/',
    'exifEX': 'http://cipa.jp/exif/1.0/',
    'aux': 'http://ns.adobe.com/exif/1.0/aux/',
    'Iptc4xmpCore': 'http://iptc.org/std/Iptc4xmpCore/1.0/xmlns/',
    'Iptc4xmpExt': 'http://iptc.org/std/Iptc4xmpExt/2008-02-29/',
    'plus': 'http://ns.useplus.org/ldf/xmp/1.0/',
    'mwg-rs': 'http://www.metadataworkinggroup.com/schemas/regions/',
    'mwg-kw': 'http://www.metadataworkinggroup.com/schemas/keywords/',
    'dwc': 'http://rs.tdwg.org/dwc/index.htm',
    'dcterms': 'http://purl.org/dc/terms/',
    'digiKam': 'http://www.digikam.org/ns/1.0/',
    'kipi': 'http://www.digikam.org/ns/kipi/1.0/',
    'GPano': 'http://ns.google.com/photos/1.0/panorama/',
    'lr': 'http://ns.adobe.com/lightroom/1.0/',
    'acdsee': 'http://ns.acdsee.com/iptc/1.0/',
    'mediapro': 'http://ns.iview-multimedia.com/mediapro/1.0/',
    'expressionmedia': 'http://ns.microsoft.com/expressionmedia/1.0/',
    'MicrosoftPhoto': 'http://ns.microsoft.com/photo/1.0/',
    'MP': 'http://ns.microsoft.com/photo/1.2/',
    'MPRI': 'http://ns.microsoft.com/photo/1.2/t/RegionInfo#',
    'MPReg': 'http://ns.microsoft.com/photo/1.2/t/Region#',
})

# Schema prefixes whose elements become keys named after their local part
XMP_TAGS = frozenset(prefix for prefix in XMP_NAMESPACES if prefix != 'rdf')

# RDF containers, references and event markers: plumbing, not keys
XMP_STRUCTURE_TAGS = frozenset({
    'stRef', 'rdf', 'li', 'Alt', 'stEvt', 'Bag', 'Seq', 'crs',
})

XMP_ROOT_TAG = 'x:xmpmeta'

# iTXt keyword announcing an XMP packet
XMP_ITXT_KEYWORD = b'XML:com.adobe.xmp'
