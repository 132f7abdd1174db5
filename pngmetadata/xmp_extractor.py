# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
XMP (Extensible Metadata Platform) tree extractor

This module turns the XMP packet stored in a PNG iTXt chunk into a
nested dictionary. Elements are classified by their namespace prefix:
schema prefixes (dc, xmp, tiff, ...) become keys named after the local
part, RDF plumbing (rdf:Seq, rdf:li, ...) disappears, and repeated
properties are comma-joined by the tree merge.

Copyright 2025 DNAi inc.
"""

import logging
from typing import Any, Dict, Optional, Tuple
from xml.dom import minidom, Node
from xml.parsers.expat import ExpatError

from pngmetadata.exceptions import UnexpectedXMPRootWarning, XMPParseWarning
from pngmetadata.namespaces import (
    XMP_ITXT_KEYWORD,
    XMP_NAMESPACES,
    XMP_ROOT_TAG,
    XMP_STRUCTURE_TAGS,
    XMP_TAGS,
)
from pngmetadata.tree_ops import MetadataValue, append_item, flatten, is_composite, merge

logger = logging.getLogger(__name__)

TEXT_NODE_TYPES = (Node.TEXT_NODE, Node.CDATA_SECTION_NODE)


def split_tag_name(tag_name: str) -> Tuple[Optional[str], str]:
    """
    Split a qualified name into (prefix, local name).

    Unprefixed names have no prefix.
    """
    if ':' in tag_name:
        prefix, suffix = tag_name.split(':', 1)
        return prefix, suffix
    return None, tag_name


def is_namespace_declaration(attr_name: str) -> bool:
    return attr_name == 'xmlns' or attr_name.startswith('xmlns:')


class XMPExtractor:
    """
    Extractor for the XMP document embedded in an iTXt payload.

    The payload must start with the 'XML:com.adobe.xmp' keyword; the
    bytes after it, minus the NUL run of the iTXt header fields, are
    parsed as XML.
    """

    def __init__(self, payload: bytes):
        """
        Initialize the extractor.

        Args:
            payload: Raw iTXt chunk payload
        """
        self.payload = payload
        self._root: Optional[minidom.Element] = None

    def is_xmp(self) -> bool:
        """Return True when the iTXt payload carries an XMP packet."""
        return self.payload[:len(XMP_ITXT_KEYWORD)] == XMP_ITXT_KEYWORD

    def parse(self) -> minidom.Element:
        """
        Parse the XMP packet and return its root element.

        Raises:
            XMPParseWarning: If the packet is not well-formed XML
            UnexpectedXMPRootWarning: If the root element is not x:xmpmeta
        """
        if self._root is not None:
            return self._root

        xml_data = self.payload[len(XMP_ITXT_KEYWORD):].lstrip(b'\x00').rstrip(b'\x00')
        try:
            document = minidom.parseString(xml_data)
        except ExpatError as e:
            raise XMPParseWarning(f"Malformed XMP packet: {e}") from e

        root = document.documentElement
        if root.tagName != XMP_ROOT_TAG:
            raise UnexpectedXMPRootWarning(
                f"XMP root node must be of type {XMP_ROOT_TAG}, found {root.tagName}"
            )

        self._root = root
        return root

    def extract(self) -> Dict[Any, Any]:
        """
        Extract the XMP document into a flattened nested dictionary.

        Returns:
            Dictionary of XMP properties keyed by local name

        Raises:
            XMPParseWarning: If the packet is not well-formed XML or is
                nested deeper than the extraction can follow
            UnexpectedXMPRootWarning: If the root element is not x:xmpmeta
        """
        root = self.parse()
        try:
            value = self.extract_node(root)
            if not is_composite(value):
                # Root holding bare text only
                return {}
            result = flatten(value)
        except RecursionError:
            raise XMPParseWarning("XMP document nested too deeply") from None
        logger.debug("Extracted %d top-level XMP properties", len(result))
        return result

    def extract_node(self, node: Node) -> MetadataValue:
        """
        Recursively extract one DOM node.

        Args:
            node: Element, text or CDATA node

        Returns:
            Trimmed text for text nodes, a dictionary or a scalar for elements
        """
        if node.nodeType in TEXT_NODE_TYPES:
            return node.data.strip()
        if node.nodeType != Node.ELEMENT_NODE:
            return {}

        output: MetadataValue = {}

        for child in node.childNodes:
            child_value = self.extract_node(child)

            if child.nodeType == Node.ELEMENT_NODE:
                if not is_composite(output):
                    # Text content already decided this element's value
                    continue
                output = self._add_child(output, child.tagName, child_value)
            elif isinstance(child_value, str) and child_value:
                output = child_value

        if is_composite(output) and node.attributes is not None and node.attributes.length:
            attributes = {
                attr.localName or attr.name: attr.value
                for attr in node.attributes.values()
                if not is_namespace_declaration(attr.name)
            }
            if attributes:
                output = merge(output, attributes)

        return output

    def _add_child(self, output: Dict[Any, Any], tag_name: str, value: MetadataValue) -> Dict[Any, Any]:
        """Fold one child element's value into the accumulator."""
        prefix, suffix = split_tag_name(tag_name)

        if is_composite(value):
            if prefix in XMP_TAGS:
                return merge(output, {suffix: value})
            return merge(output, value)

        if prefix is None or prefix in XMP_STRUCTURE_TAGS or prefix in XMP_TAGS:
            if suffix in XMP_STRUCTURE_TAGS:
                return append_item(output, value)
            return self._append_under(output, suffix, value)

        # Unrecognized namespace: keep the full qualified name as two levels
        if prefix not in output:
            output[prefix] = {}
        elif not is_composite(output[prefix]):
            output[prefix] = {0: output[prefix]}
        self._append_under(output[prefix], suffix, value)
        return output

    @staticmethod
    def _append_under(output: Dict[Any, Any], key: str, value: MetadataValue) -> Dict[Any, Any]:
        existing = output.get(key)
        if existing is None:
            output[key] = {0: value}
        elif is_composite(existing):
            append_item(existing, value)
        else:
            output[key] = {0: existing, 1: value}
        return output

    def namespaces(self) -> Dict[str, str]:
        """
        Known XMP namespaces used by the document.

        Returns:
            Prefix -> URI for every table prefix found on an element or
            attribute, in table order
        """
        used = set()
        stack = [self.parse()]
        while stack:
            element = stack.pop()
            used.add(split_tag_name(element.tagName)[0])
            for attr_name in element.attributes.keys():
                if not is_namespace_declaration(attr_name):
                    used.add(split_tag_name(attr_name)[0])
            stack.extend(c for c in element.childNodes if c.nodeType == Node.ELEMENT_NODE)

        return {prefix: uri for prefix, uri in XMP_NAMESPACES.items() if prefix in used}


def extract_xmp(payload: bytes) -> Optional[Dict[Any, Any]]:
    """
    Extract XMP metadata from an iTXt payload.

    Args:
        payload: Raw iTXt chunk payload

    Returns:
        Flattened XMP dictionary, or None when the payload is not XMP

    Raises:
        XMPParseWarning: If the packet is not well-formed XML
        UnexpectedXMPRootWarning: If the root element is not x:xmpmeta
    """
    extractor = XMPExtractor(payload)
    if not extractor.is_xmp():
        return None
    return extractor.extract()
