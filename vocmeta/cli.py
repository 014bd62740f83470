# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for VOCMeta

Prints the metadata of one or more Creative Voice Files as text,
JSON or CSV.

Copyright 2025 DNAi inc.
"""

import argparse
import csv
import io
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from vocmeta import __version__
from vocmeta.core import VocMeta
from vocmeta.exceptions import VocMetaError


def _json_default(value: Any) -> Any:
    return str(value)


def _value_rows(metadata: Dict[str, Any]) -> List[Tuple[str, str]]:
    # VOC:Warning holds a list (one row per entry); raw VOC:BlockTypes is a code->count dict
    rows = []
    for tag, value in metadata.items():
        if isinstance(value, list):
            rows.extend((tag, str(item)) for item in value)
        elif isinstance(value, dict):
            rows.append((tag, ', '.join(f"{key}={count}" for key, count in value.items())))
        else:
            rows.append((tag, str(value)))
    return rows


def format_output(metadata: Dict[str, Any], format_type: str = "text") -> str:
    """
    Format metadata output based on format type.

    Args:
        metadata: Dictionary of metadata
        format_type: Output format ('text', 'json', 'csv')

    Returns:
        Formatted output string
    """
    if format_type == "json":
        return json.dumps(metadata, indent=2, ensure_ascii=False, default=_json_default)

    rows = _value_rows(metadata)
    if format_type == "csv":
        buffer = io.StringIO()
        buffer.write("Tag,Value\n")
        csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n").writerows(rows)
        return buffer.getvalue().rstrip("\n")
    return "\n".join(f"{tag}: {value}" for tag, value in rows)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vocmeta",
        description="VOCMeta - Read metadata from Creative Voice (VOC) files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Read all metadata
  vocmeta sound.voc

  # Include per-block details, JSON output
  vocmeta -b -j sound.voc

  # VOC data embedded at an offset inside a larger file
  vocmeta --offset 4096 --end 90112 resource.voc
        """
    )
    parser.add_argument('files', nargs='+', help='VOC file(s) to process')
    parser.add_argument('-j', '--json', action='store_true', help='Output metadata in JSON format')
    parser.add_argument('-csv', action='store_true', help='Output metadata in CSV format')
    parser.add_argument('-b', '--blocks', action='store_true', help='Include per-block tags')
    parser.add_argument('-n', '--raw', action='store_true', help='Print raw values instead of formatted ones')
    parser.add_argument('--no-warnings', action='store_true', help='Omit VOC:Warning tags')
    parser.add_argument('-q', '--quiet', action='store_true', help='Do not print warnings to stderr')
    parser.add_argument('--offset', type=int, default=0, help='Offset of the VOC header within the file')
    parser.add_argument('--end', type=int, default=None, help='End offset of the audio data region')
    parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command-line interface.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)

    if args.json:
        format_type = "json"
    elif args.csv:
        format_type = "csv"
    else:
        format_type = "text"

    options = {
        'IncludeBlocks': args.blocks,
        'NoWarning': args.no_warnings,
        'PrintConv': not args.raw,
    }

    exit_code = 0
    json_results = []
    multiple = len(args.files) > 1

    for file_name in args.files:
        file_path = Path(file_name)
        try:
            with VocMeta(file_path, avdataoffset=args.offset, avdataend=args.end, options=options) as voc:
                metadata = voc.get_all_metadata()
                warnings = voc.get_tag('VOC:Warning', [])
        except (VocMetaError, OSError) as e:
            print(f"Error: {file_path}: {e}", file=sys.stderr)
            exit_code = 1
            continue

        if not args.quiet:
            for warning in warnings:
                print(f"Warning: {file_path.name}: {warning}", file=sys.stderr)

        if format_type == "json":
            json_results.append({'SourceFile': str(file_path), **metadata})
            continue

        if multiple and format_type == "text":
            print(f"======== {file_path}")
        print(format_output(metadata, format_type))

    if format_type == "json" and json_results:
        print(json.dumps(json_results, indent=2, ensure_ascii=False, default=_json_default))

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
