# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
VOCMeta - A Pure Python Creative Voice File Metadata Reader

Reads the header and block structure of Creative Voice (VOC) audio
files and derives sample rate, channel count, bit depth, compression,
playtime and bitrate. All parsing is done by directly reading the
binary block structure.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from vocmeta.exceptions import (
    VocMetaError,
    MetadataReadError,
    FormatMismatchError,
    UnsupportedFormatError,
)
from vocmeta.models import (
    Header,
    AudioProperties,
    Block,
    SoundDataBlock,
    ExtendedBlock,
    StereoDataBlock,
    DecodeResult,
    Precision,
)
from vocmeta.stream import ByteStream
from vocmeta.voc_tags import BlockType
from vocmeta.voc_decoder import analyze, read_header
from vocmeta.voc_parser import VOCParser
from vocmeta.core import VocMeta
from vocmeta.format_detector import FormatDetector
from vocmeta.metadata_utils import (
    has_metadata,
    batch_read_metadata,
    filter_metadata_by_groups,
    get_metadata_summary,
)

__all__ = [
    "VocMeta",
    "VOCParser",
    "analyze",
    "read_header",
    "ByteStream",
    "BlockType",
    "Header",
    "AudioProperties",
    "Block",
    "SoundDataBlock",
    "ExtendedBlock",
    "StereoDataBlock",
    "DecodeResult",
    "Precision",
    "FormatDetector",
    "VocMetaError",
    "MetadataReadError",
    "FormatMismatchError",
    "UnsupportedFormatError",
    "has_metadata",
    "batch_read_metadata",
    "filter_metadata_by_groups",
    "get_metadata_summary",
]
