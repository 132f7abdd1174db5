# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for pngmetadata

Prints the metadata of one or more PNG files as a two-column listing,
as JSON, or as selected tag values.

Copyright 2025 DNAi inc.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from pngmetadata import __version__
from pngmetadata.core import PNGMetadata
from pngmetadata.exceptions import PNGMetadataError
from pngmetadata.metadata_tree import display_value
from pngmetadata.tree_ops import copy_node

logger = logging.getLogger(__name__)


def format_output(metadata: Dict[str, Any], format_type: str = "text") -> str:
    """
    Format selected tag values.

    Args:
        metadata: Dictionary of tag path -> value
        format_type: Output format ('text' or 'json')

    Returns:
        Formatted output string
    """
    if format_type == "json":
        return json.dumps(metadata, indent=2, ensure_ascii=False, default=str)

    lines = []
    for tag, value in metadata.items():
        lines.append(f"{tag}: {display_value(value)}")
    return "\n".join(lines)


def read_metadata(
    file_path: str,
    tags: Optional[List[str]] = None,
    format_type: str = "text",
    html: bool = False,
    **options: Any
) -> str:
    """
    Read and format the metadata of one file.

    Args:
        file_path: Path to the PNG file
        tags: Optional list of tag paths to print
        format_type: 'text' or 'json'
        html: Wrap the text listing in a <pre> block
        **options: PNGMetadata options

    Returns:
        Formatted metadata string

    Raises:
        PNGMetadataError: If the file cannot be read as PNG
    """
    metadata = PNGMetadata(file_path, **options)

    if tags:
        selected = {}
        for tag in tags:
            value = metadata.get(tag)
            if value is None:
                logger.warning("Tag not found: %s", tag)
                continue
            selected[tag] = copy_node(value)
        return format_output(selected, format_type)

    if format_type == "json":
        return format_output(metadata.to_dict(), "json")
    return metadata.render_text(html=html).rstrip('\n')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pngmetadata",
        description="pngmetadata - Read metadata from PNG images (100% Pure Python)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print all metadata
  pngmetadata image.png

  # Print specific tags
  pngmetadata -t IHDR:ColorType -t exif:Make image.png

  # JSON output
  pngmetadata --json image.png
        """
    )

    parser.add_argument('files', nargs='+', help='PNG file(s) to process')
    parser.add_argument('-j', '--json', action='store_true', help='Output metadata in JSON format')
    parser.add_argument('-t', '--tag', action='append', dest='tags', metavar='PATH',
                        help='Print only the value at PATH (repeatable)')
    parser.add_argument('--html', action='store_true', help='Wrap the listing in an HTML <pre> block')
    parser.add_argument('--no-xmp', action='store_true', help='Do not decode the XMP packet')
    parser.add_argument('--no-exif', action='store_true', help='Do not decode the eXIf chunk')
    parser.add_argument('--strict', action='store_true', help='Fail on unknown IHDR codes')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose (debug) logging')
    parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    options = {
        'ExtractXMP': not args.no_xmp,
        'ExtractEXIF': not args.no_exif,
        'StrictEnums': args.strict,
    }
    format_type = "json" if args.json else "text"

    exit_code = 0
    for file_path in args.files:
        if len(args.files) > 1:
            print(f"======== {file_path}")
        try:
            print(read_metadata(file_path, args.tags, format_type, args.html, **options))
        except PNGMetadataError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            exit_code = 1

    return exit_code
