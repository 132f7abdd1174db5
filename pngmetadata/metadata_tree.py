# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Read-only metadata tree

The tree returned by an extraction: top-level keys sorted, nested maps
exposed read-only, values addressable by colon-separated paths such as
'exif:THUMBNAIL:Compression', and printable as two columns.

Copyright 2025 DNAi inc.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from pngmetadata.tree_ops import copy_node, is_composite, is_indexed_list

PATH_SEPARATOR = ':'
HEADER_KEY = '--Metadata--'
HEADER_VALUE = '--Value--'
COLUMN_PADDING = 10


def _freeze(value: Any) -> Any:
    if is_composite(value):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    return value


def display_value(value: Any) -> str:
    """Single-line display form of a node; composites are comma-joined."""
    if is_composite(value):
        return ','.join(display_value(v) for v in value.values())
    return str(value)


class MetadataTree(Mapping):
    """
    Finalized metadata of one PNG image.

    Behaves as a read-only mapping. Recoverable problems met during
    extraction are available in `warnings`.
    """

    def __init__(self, metadata: Mapping, warnings: Iterable[Exception] = ()):
        """
        Initialize the tree.

        Args:
            metadata: Nested metadata; top-level keys are sorted here
            warnings: Recoverable diagnostics collected during extraction
        """
        self._data = {key: _freeze(metadata[key]) for key in sorted(metadata, key=str)}
        self._warnings = tuple(warnings)

    def __getitem__(self, key):
        return self._data[key]

    def __iter__(self) -> Iterator:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"MetadataTree({list(self._data)})"

    def __str__(self) -> str:
        return self.render_text()

    @property
    def warnings(self) -> Tuple[Exception, ...]:
        return self._warnings

    def get(self, path: str, default: Any = None) -> Any:
        """
        Look up a value by colon-separated path.

        Args:
            path: Path such as 'IHDR:ColorType' or 'exif:THUMBNAIL:Compression'
            default: Returned when any segment is missing

        Returns:
            Scalar or read-only mapping at the path, or default
        """
        node: Any = self._data
        for segment in path.split(PATH_SEPARATOR):
            if not is_composite(node):
                return default
            if segment in node:
                node = node[segment]
            elif segment.isdigit() and int(segment) in node:
                node = node[int(segment)]
            else:
                return default
        return node

    def to_dict(self) -> Dict[Any, Any]:
        """Plain nested dictionary copy of the tree."""
        return copy_node(self._data)

    def render(self) -> List[Tuple[str, str]]:
        """
        Flatten the tree into (path, display value) rows.

        Indexed lists become one comma-joined row, other maps recurse
        with their key appended to the path.
        """
        rows: List[Tuple[str, str]] = []
        self._render_rows(None, self._data, rows)
        return rows

    def _render_rows(self, prefix: Optional[str], mapping: Mapping, rows: List[Tuple[str, str]]) -> None:
        for key, value in mapping.items():
            path = f'{prefix}{PATH_SEPARATOR}{key}' if prefix is not None else str(key)
            if not is_composite(value):
                rows.append((path, str(value)))
            elif is_indexed_list(value):
                rows.append((path, display_value(value)))
            elif not value:
                rows.append((path, ''))
            else:
                self._render_rows(path, value, rows)

    def render_text(self, html: bool = False, rows: Optional[List[Tuple[str, str]]] = None) -> str:
        """
        Render the tree as two padded columns.

        Args:
            html: If True, wrap the output in a <pre> block
            rows: Rows to print instead of the whole tree

        Returns:
            Header line followed by one line per metadata path
        """
        if rows is None:
            rows = self.render()
        width = max((len(path) for path, _ in rows), default=0) + COLUMN_PADDING

        lines = [HEADER_KEY.ljust(width) + HEADER_VALUE]
        lines.extend(path.strip().ljust(width) + value for path, value in rows)
        text = '\n'.join(lines) + '\n'

        if html:
            return f'<pre>{text}</pre>'
        return text
