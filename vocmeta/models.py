# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Data structures produced by the VOC decoder

Header, block records, the audio property accumulator and the
decode result returned to callers.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Union


class Precision(IntEnum):
    """Precision of the block that last set an audio property."""
    UNSET = 0
    TIME_CONSTANT = 1  # type 1, 8-bit time constant
    EXTENDED = 2  # type 8, 16-bit time constant
    EXPLICIT = 3  # type 9, values stored directly


class WalkState(Enum):
    """State of the block walker."""
    SCANNING = "scanning"
    TERMINATED = "terminated"
    END_OF_STREAM = "end_of_stream"
    FAILED = "failed"


@dataclass
class RankedValue:
    """A property value together with the precision of its source."""
    value: Any = None
    precision: Precision = Precision.UNSET

    @property
    def is_set(self) -> bool:
        return self.precision > Precision.UNSET

    def offer(self, value: Any, precision: Precision, replace_equal: bool = True) -> bool:
        """
        Store value if its source is at least as precise as the current one.

        Args:
            value: Candidate value
            precision: Precision of the block supplying it
            replace_equal: Whether a source of the same precision may
                replace the stored value

        Returns:
            True if the value was stored
        """
        if precision > self.precision or (replace_equal and precision == self.precision):
            self.value = value
            self.precision = precision
            return True
        return False


@dataclass(frozen=True)
class Header:
    """Fixed VOC preamble."""
    block_offset: int
    minor_version: int
    major_version: int

    @property
    def version(self) -> str:
        return f"{self.major_version}.{self.minor_version}"


@dataclass
class AudioProperties:
    """
    Audio stream properties refined block by block.

    channels and bits_per_sample start from format defaults (mono, 8-bit)
    with UNSET precision, so any block may replace them.
    """
    channels: RankedValue = field(default_factory=lambda: RankedValue(1))
    bits_per_sample: RankedValue = field(default_factory=lambda: RankedValue(8))
    sample_rate: RankedValue = field(default_factory=RankedValue)
    compressed_bits_per_sample: RankedValue = field(default_factory=RankedValue)
    dataformat: str = 'voc'
    bitrate_mode: str = 'cbr'
    lossless: bool = True

    def as_dict(self) -> Dict[str, Any]:
        """Plain values, omitting properties that were never established."""
        result: Dict[str, Any] = {
            'dataformat': self.dataformat,
            'bitrate_mode': self.bitrate_mode,
            'lossless': self.lossless,
            'channels': self.channels.value,
            'bits_per_sample': self.bits_per_sample.value,
        }
        if self.sample_rate.is_set:
            result['sample_rate'] = self.sample_rate.value
        if self.compressed_bits_per_sample.is_set:
            result['compressed_bits_per_sample'] = self.compressed_bits_per_sample.value
        return result


@dataclass(frozen=True)
class Block:
    """Envelope shared by every recorded block."""
    offset: int
    type_id: int
    declared_size: int


@dataclass(frozen=True)
class SoundDataBlock(Block):
    sample_rate_id: int
    compression_type: int
    compression_name: str


@dataclass(frozen=True)
class ExtendedBlock(Block):
    time_constant: int
    pack_method: int
    stereo: bool


@dataclass(frozen=True)
class StereoDataBlock(Block):
    sample_rate: int
    bits_per_sample: int
    channels: int
    format_code: int
    compression_name: Optional[str]


AnyBlock = Union[SoundDataBlock, ExtendedBlock, StereoDataBlock]


@dataclass
class DecodeResult:
    """Everything the decoder learned from one VOC stream."""
    header: Header
    audio: AudioProperties
    blocks: List[AnyBlock]
    histogram: Dict[int, int]
    data_start_offset: int
    warnings: List[str]
    avdataoffset: int
    avdataend: int
    end_offset: int
    terminated: bool
    walk_state: WalkState = WalkState.END_OF_STREAM
    playtime_seconds: Optional[float] = None
    bitrate: Optional[float] = None
    fileformat: str = 'voc'
