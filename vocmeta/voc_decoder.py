# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Creative Voice File (VOC) block decoder

Reads the fixed 26-byte VOC preamble, then walks the chain of
self-describing blocks that follows it. Each block starts with a 4-byte
descriptor:

    byte 0      block type
    bytes 1-3   block size, 24-bit little-endian

Sound data (1), extended (8) and stereo/16-bit data (9) blocks carry
audio format fields; their values are merged into one AudioProperties
record with precedence 9 > 8 > 1. The terminator block (0) has no size
field, so the walker leaves the stream one byte past its type byte.

Copyright 2025 DNAi inc.
"""

import struct
from typing import Dict, List, Optional

from vocmeta.exceptions import FormatMismatchError, MetadataReadError
from vocmeta.models import (
    AnyBlock,
    AudioProperties,
    DecodeResult,
    ExtendedBlock,
    Header,
    Precision,
    SoundDataBlock,
    StereoDataBlock,
    WalkState,
)
from vocmeta.stream import ByteStream
from vocmeta.value_formatter import print_hex_bytes
from vocmeta.voc_tags import (
    BLOCK_DESCRIPTOR_SIZE,
    VOC_HEADER_SIZE,
    VOC_MAGIC,
    BlockType,
    compression_type_name,
    wformat_bits_per_sample,
    wformat_name,
)


# Header byte layout
#   00-18   'Creative Voice File'
#   19      1A
#   20-21   offset of first data block (usually 1A 00)
#   22-23   version number (minor, major)
#   24-25   2's complement of version + 1234h
def read_header(stream: ByteStream) -> Header:
    """
    Read and validate the VOC preamble at the current stream position.

    Consumes 26 bytes. Block iteration starts right after them, whatever
    the stored first-block offset says.

    Args:
        stream: Stream positioned at the start of the VOC data

    Returns:
        Parsed Header

    Raises:
        FormatMismatchError: If the magic does not match
        MetadataReadError: If the preamble is truncated
    """
    offset = stream.tell()
    data = stream.read(VOC_HEADER_SIZE)

    if data[:len(VOC_MAGIC)] != VOC_MAGIC:
        raise FormatMismatchError(
            expected=print_hex_bytes(VOC_MAGIC),
            actual=print_hex_bytes(data[:len(VOC_MAGIC)]),
            offset=offset,
        )
    if len(data) < 24:
        raise MetadataReadError(f"Invalid VOC file: truncated header at offset {offset}")

    return Header(
        block_offset=struct.unpack('<H', data[20:22])[0],
        minor_version=data[22],
        major_version=data[23],
    )


class _DecodeSession:
    """State of a single block walk. Not reused between streams."""

    def __init__(self, stream: ByteStream):
        self.stream = stream
        self.audio = AudioProperties()
        self.blocks: List[AnyBlock] = []
        self.histogram: Dict[int, int] = {}
        self.warnings: List[str] = []
        self.data_start_offset: Optional[int] = None
        self.state = WalkState.SCANNING
        self.terminator_offset: Optional[int] = None

    def walk(self) -> None:
        while self.state is WalkState.SCANNING:
            if self.stream.at_end():
                self.state = WalkState.END_OF_STREAM
                break
            self._step()

        if self.state is WalkState.TERMINATED:
            # Terminator has no size field; only its type byte belongs to the block
            self.stream.seek(self.terminator_offset + 1)

    def _step(self) -> None:
        block_offset = self.stream.tell()
        descriptor = self.stream.read(BLOCK_DESCRIPTOR_SIZE)

        if len(descriptor) < BLOCK_DESCRIPTOR_SIZE:
            if descriptor and descriptor[0] == BlockType.TERMINATOR:
                self._count(int(BlockType.TERMINATOR))
                self._terminate(block_offset)
            elif descriptor:
                self.warnings.append(
                    f"Truncated block descriptor at offset {block_offset} "
                    f"({len(descriptor)} of {BLOCK_DESCRIPTOR_SIZE} bytes)"
                )
                self.state = WalkState.FAILED
            else:
                self.state = WalkState.END_OF_STREAM
            return

        type_id = descriptor[0]
        declared_size = struct.unpack('<I', descriptor[1:4] + b'\x00')[0]
        self._count(type_id)

        block_type = BlockType.lookup(type_id)
        block: Optional[AnyBlock] = None

        if block_type is None:
            self.warnings.append(f'Unhandled block type "{type_id}" at offset {block_offset}')
            self.stream.seek_relative(declared_size)
        elif block_type is BlockType.TERMINATOR:
            self._terminate(block_offset)
        elif block_type is BlockType.SOUND_DATA:
            block = self._read_sound_data(block_offset, declared_size)
        elif block_type is BlockType.EXTENDED:
            block = self._read_extended(block_offset, declared_size)
        elif block_type is BlockType.STEREO_DATA:
            block = self._read_stereo_data(block_offset, declared_size)
        else:
            # sound continue, silence, marker, repeat, end repeat
            self.stream.seek_relative(declared_size)

        if block is not None:
            self.blocks.append(block)

    def _count(self, type_id: int) -> None:
        self.histogram[type_id] = self.histogram.get(type_id, 0) + 1

    def _terminate(self, block_offset: int) -> None:
        self.terminator_offset = block_offset
        self.state = WalkState.TERMINATED

    def _read_fields(self, block_offset: int, type_id: int, length: int) -> Optional[bytes]:
        data = self.stream.read(length)
        if len(data) < length:
            self.warnings.append(
                f"Truncated block type {type_id} at offset {block_offset}: "
                f"expected {length} field bytes, found {len(data)}"
            )
            self.state = WalkState.END_OF_STREAM
            return None
        return data

    def _skip_to_next_block(self, block_offset: int, type_id: int, declared_size: int, consumed: int) -> None:
        if declared_size < consumed:
            self.warnings.append(
                f"Block type {type_id} at offset {block_offset} declares {declared_size} bytes, "
                f"smaller than its {consumed} field bytes"
            )
        # Next block starts where the declared size says, even if that is behind us
        self.stream.seek(block_offset + BLOCK_DESCRIPTOR_SIZE + declared_size)

    def _mark_data_start(self) -> None:
        if self.data_start_offset is None:
            self.data_start_offset = self.stream.tell()

    def _read_sound_data(self, block_offset: int, declared_size: int) -> Optional[SoundDataBlock]:
        data = self._read_fields(block_offset, BlockType.SOUND_DATA, 2)
        if data is None:
            return None
        self._mark_data_start()
        self._skip_to_next_block(block_offset, BlockType.SOUND_DATA, declared_size, 2)

        sample_rate_id = data[0]
        compression_type = data[1]
        compression_name = compression_type_name(compression_type)

        if compression_type <= 3:
            bits = int(float(compression_name.replace('-bit', '')))
            self.audio.compressed_bits_per_sample.offer(bits, Precision.TIME_CONSTANT)

        # SR byte = 256 - (1000000 / sample_rate); less accurate than type 8,
        # so only used while nothing better is known
        channels = self.audio.channels.value
        if not self.audio.sample_rate.is_set and channels:
            self.audio.sample_rate.offer(
                1000000 // (256 - sample_rate_id) // channels,
                Precision.TIME_CONSTANT,
                replace_equal=False,
            )

        return SoundDataBlock(
            offset=block_offset,
            type_id=int(BlockType.SOUND_DATA),
            declared_size=declared_size,
            sample_rate_id=sample_rate_id,
            compression_type=compression_type,
            compression_name=compression_name,
        )

    def _read_extended(self, block_offset: int, declared_size: int) -> Optional[ExtendedBlock]:
        data = self._read_fields(block_offset, BlockType.EXTENDED, 4)
        if data is None:
            return None

        # Time constant:
        #   mono:   65536 - (256000000 / sample_rate)
        #   stereo: 65536 - (256000000 / (sample_rate * 2))
        time_constant = struct.unpack('<H', data[0:2])[0]
        pack_method = data[2]
        stereo = bool(data[3])

        channels = 2 if stereo else 1
        self.audio.channels.offer(channels, Precision.EXTENDED)
        self.audio.sample_rate.offer(
            256000000 // (65536 - time_constant) // channels,
            Precision.EXTENDED,
        )

        return ExtendedBlock(
            offset=block_offset,
            type_id=int(BlockType.EXTENDED),
            declared_size=declared_size,
            time_constant=time_constant,
            pack_method=pack_method,
            stereo=stereo,
        )

    def _read_stereo_data(self, block_offset: int, declared_size: int) -> Optional[StereoDataBlock]:
        data = self._read_fields(block_offset, BlockType.STEREO_DATA, 12)
        if data is None:
            return None
        self._mark_data_start()
        self._skip_to_next_block(block_offset, BlockType.STEREO_DATA, declared_size, 12)

        sample_rate, bits_per_sample, channels, format_code = struct.unpack('<IBBH', data[0:8])

        actual_bits = wformat_bits_per_sample(format_code)
        if actual_bits:
            self.audio.compressed_bits_per_sample.offer(actual_bits, Precision.EXPLICIT)

        self.audio.sample_rate.offer(sample_rate, Precision.EXPLICIT)
        self.audio.bits_per_sample.offer(bits_per_sample, Precision.EXPLICIT)
        self.audio.channels.offer(channels, Precision.EXPLICIT)

        return StereoDataBlock(
            offset=block_offset,
            type_id=int(BlockType.STEREO_DATA),
            declared_size=declared_size,
            sample_rate=sample_rate,
            bits_per_sample=bits_per_sample,
            channels=channels,
            format_code=format_code,
            compression_name=wformat_name(format_code),
        )


def analyze(stream: ByteStream, avdataoffset: int = 0, avdataend: Optional[int] = None) -> DecodeResult:
    """
    Decode a VOC stream.

    Args:
        stream: Seekable stream holding the VOC data
        avdataoffset: Offset of the VOC preamble within the stream
        avdataend: End of the audio data region; defaults to the stream size

    Returns:
        DecodeResult describing the header, blocks and audio properties

    Raises:
        FormatMismatchError: If the stream does not hold a VOC preamble at avdataoffset
        MetadataReadError: If the preamble is truncated
    """
    if avdataend is None:
        avdataend = stream.size

    stream.seek(avdataoffset)
    header = read_header(stream)

    session = _DecodeSession(stream)
    session.walk()

    data_start_offset = session.data_start_offset
    if data_start_offset is None:
        data_start_offset = avdataoffset

    result = DecodeResult(
        header=header,
        audio=session.audio,
        blocks=session.blocks,
        histogram=dict(sorted(session.histogram.items())),
        data_start_offset=data_start_offset,
        warnings=session.warnings,
        avdataoffset=avdataoffset,
        avdataend=avdataend,
        end_offset=stream.tell(),
        terminated=session.state is WalkState.TERMINATED,
        walk_state=session.state,
    )
    _compute_playtime(result)
    return result


def _compute_playtime(result: DecodeResult) -> None:
    audio = result.audio
    compressed_bits = audio.compressed_bits_per_sample.value
    sample_rate = audio.sample_rate.value
    channels = audio.channels.value
    if not compressed_bits or not sample_rate or not channels:
        return

    data_bits = (result.avdataend - result.data_start_offset) * 8
    result.playtime_seconds = data_bits / (compressed_bits * channels * sample_rate)
    if result.playtime_seconds:
        result.bitrate = data_bits / result.playtime_seconds
