# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Creative Voice File lookup tables

Block type codes, sound-data compression names and the wFormat codes
used by the type 9 (stereo/16-bit) data block.

Copyright 2025 DNAi inc.
"""

from enum import IntEnum
from typing import Dict, Optional


# First 19 bytes of every VOC file; byte 19 is 0x1A (EOF marker for DOS type)
VOC_MAGIC = b'Creative Voice File'

# Fixed preamble read before the first block
VOC_HEADER_SIZE = 26

# Block descriptor: 1 byte type + 3 bytes little-endian size
BLOCK_DESCRIPTOR_SIZE = 4


class BlockType(IntEnum):
    """Block type codes handled by the block walker."""
    TERMINATOR = 0
    SOUND_DATA = 1
    SOUND_CONTINUE = 2
    SILENCE = 3
    MARKER = 4
    REPEAT = 6
    END_REPEAT = 7
    EXTENDED = 8
    STEREO_DATA = 9  # supersedes 1 and 8

    @classmethod
    def lookup(cls, code: int) -> Optional['BlockType']:
        """Return the BlockType for a code, or None for unknown codes."""
        try:
            return cls(code)
        except ValueError:
            return None


BLOCK_TYPE_NAMES: Dict[int, str] = {
    BlockType.TERMINATOR: "Terminator",
    BlockType.SOUND_DATA: "Sound Data",
    BlockType.SOUND_CONTINUE: "Sound Continue",
    BlockType.SILENCE: "Silence",
    BlockType.MARKER: "Marker",
    BlockType.REPEAT: "Repeat",
    BlockType.END_REPEAT: "End Repeat",
    BlockType.EXTENDED: "Extended",
    BlockType.STEREO_DATA: "Stereo/16-bit Data",
}

# Sound data (type 1) compression codes
VOC_COMPRESSION_TYPES: Dict[int, str] = {
    0: '8-bit',
    1: '4-bit',
    2: '2.6-bit',
    3: '2-bit',
}

# Type 9 wFormat codes
VOC_WFORMAT_NAMES: Dict[int, str] = {
    0x0000: '8-bit unsigned PCM',
    0x0001: 'Creative 8-bit to 4-bit ADPCM',
    0x0002: 'Creative 8-bit to 3-bit ADPCM',
    0x0003: 'Creative 8-bit to 2-bit ADPCM',
    0x0004: '16-bit signed PCM',
    0x0006: 'CCITT a-Law',
    0x0007: 'CCITT u-Law',
    0x2000: 'Creative 16-bit to 4-bit ADPCM',
}

VOC_WFORMAT_BITS_PER_SAMPLE: Dict[int, int] = {
    0x0000: 8,
    0x0001: 4,
    0x0002: 3,
    0x0003: 2,
    0x0004: 16,
    0x0006: 8,
    0x0007: 8,
    0x2000: 4,
}


def compression_type_name(code: int) -> str:
    """
    Name a type 1 compression code.

    Codes above 3 denote multi-DAC output; the label carries the channel
    count (code - 3).
    """
    if code in VOC_COMPRESSION_TYPES:
        return VOC_COMPRESSION_TYPES[code]
    return f'Multi DAC ({code - 3}) channels'


def wformat_name(code: int) -> Optional[str]:
    return VOC_WFORMAT_NAMES.get(code)


def wformat_bits_per_sample(code: int) -> Optional[int]:
    return VOC_WFORMAT_BITS_PER_SAMPLE.get(code)


def block_type_name(code: int) -> str:
    return BLOCK_TYPE_NAMES.get(code, f"Unknown ({code})")
