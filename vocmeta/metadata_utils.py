# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Metadata utility functions for common operations.

This module provides utility functions for batch processing
and metadata manipulation.

Copyright 2025 DNAi inc.
"""

from typing import Dict, List, Optional, Union, Any, Callable
from pathlib import Path
from vocmeta.core import VocMeta
from vocmeta.voc_tags import VOC_MAGIC, block_type_name


def has_metadata(file_path: Union[str, Path]) -> bool:
    """
    Quickly check if a file carries a VOC header without parsing its blocks.

    Args:
        file_path: Path to the file to check

    Returns:
        True if the file starts with the Creative Voice File signature

    Example:
        >>> if has_metadata('sound.voc'):
        ...     pass
    """
    path = Path(file_path)

    if not path.exists():
        return False

    try:
        with open(path, 'rb') as f:
            return f.read(len(VOC_MAGIC)) == VOC_MAGIC
    except OSError:
        return False


def batch_read_metadata(
    file_paths: List[Union[str, Path]],
    tags: Optional[List[str]] = None,
    error_handler: Optional[Callable[[Path, Exception], None]] = None,
    skip_no_metadata: bool = False,
    options: Optional[Dict[str, Any]] = None,
) -> Dict[Path, Dict[str, Any]]:
    """
    Read metadata from multiple files in batch.

    Args:
        file_paths: List of file paths to read
        tags: Optional list of specific tags to read (if None, reads all)
        error_handler: Optional callback function for handling errors (path, exception)
        skip_no_metadata: If True, skip files without a VOC signature
        options: API options passed to every VocMeta instance

    Returns:
        Dictionary mapping file paths to metadata dictionaries

    Example:
        >>> metadata = batch_read_metadata(['a.voc', 'b.voc'])
        >>> print(metadata[Path('a.voc')]['Audio:SampleRate'])
    """
    results = {}

    for file_path in file_paths:
        path = Path(file_path)

        if skip_no_metadata and not has_metadata(path):
            continue

        try:
            with VocMeta(path, options=options) as voc:
                if tags:
                    metadata = voc.get_tags(tags)
                else:
                    metadata = voc.get_all_metadata()
                results[path] = metadata
        except Exception as e:
            if error_handler:
                error_handler(path, e)
            else:
                # Default: store error in results
                results[path] = {'_error': str(e)}

    return results


def filter_metadata_by_groups(
    metadata: Dict[str, Any],
    groups: List[str],
    include: bool = True
) -> Dict[str, Any]:
    """
    Filter metadata by group names.

    A group is a tag-name prefix ending at a ':' boundary and is matched
    case-insensitively, so 'VOC' selects every VOC tag while 'VOC:Block1'
    selects only the tags of the second recorded block.

    Args:
        metadata: Metadata dictionary
        groups: List of group prefixes (e.g., ['Audio', 'VOC:Block0'])
        include: If True, include only specified groups; if False, exclude specified groups

    Returns:
        Filtered metadata dictionary
    """
    prefixes = tuple(group.rstrip(':').lower() + ':' for group in groups)

    return {
        tag_name: value
        for tag_name, value in metadata.items()
        if tag_name.lower().startswith(prefixes) == include
    }


def get_metadata_summary(
    metadata: Dict[str, Any],
    include_counts: bool = True
) -> Dict[str, Any]:
    """
    Summarise the tags produced for one VOC file.

    Args:
        metadata: Metadata dictionary (raw values, as from VOCParser.parse())
        include_counts: Whether to include tag counts by group

    Returns:
        Dictionary with 'total_tags', 'block_count', 'block_types' (block
        names mapped to occurrence counts), 'recorded_blocks' (number of
        blocks with VOC:Block<N> tags), 'warnings', 'terminated' and, when
        include_counts is set, 'groups'

    Example:
        >>> summary = get_metadata_summary({'VOC:BlockTypes': {0: 1, 1: 2}, 'VOC:BlockCount': 3})
        >>> # summary['block_types'] == {'Terminator': 1, 'Sound Data': 2}
    """
    block_types = metadata.get('VOC:BlockTypes')
    block_indexes = {
        tag_name.split(':')[1]
        for tag_name in metadata
        if tag_name.startswith('VOC:Block') and tag_name.count(':') == 2
    }
    warnings = metadata.get('VOC:Warning') or []

    summary: Dict[str, Any] = {
        'total_tags': len(metadata),
        'block_count': metadata.get('VOC:BlockCount', 0),
        'block_types': {
            block_type_name(int(code)): count for code, count in block_types.items()
        } if isinstance(block_types, dict) else {},
        'recorded_blocks': len(block_indexes),
        'warnings': len(warnings) if isinstance(warnings, list) else 1,
        'terminated': bool(metadata.get('VOC:Terminated', False)),
    }

    if include_counts:
        group_counts: Dict[str, int] = {}
        for tag_name in metadata.keys():
            group = tag_name.split(':', 1)[0] if ':' in tag_name else 'Unknown'
            group_counts[group] = group_counts.get(group, 0) + 1
        summary['groups'] = dict(sorted(group_counts.items()))

    return summary
