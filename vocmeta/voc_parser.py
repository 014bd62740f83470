# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
VOC (Creative Voice File) audio metadata parser

This module handles reading metadata from VOC files.
VOC files have a fixed header followed by a chain of typed blocks;
audio format information is spread across sound data (1), extended (8)
and stereo/16-bit data (9) blocks.

Copyright 2025 DNAi inc.
"""

from typing import Dict, Any, Optional
from pathlib import Path

from vocmeta.exceptions import MetadataReadError, VocMetaError
from vocmeta.models import (
    DecodeResult,
    ExtendedBlock,
    SoundDataBlock,
    StereoDataBlock,
)
from vocmeta.stream import ByteStream
from vocmeta.value_formatter import format_duration
from vocmeta.voc_decoder import analyze
from vocmeta.voc_tags import block_type_name


class VOCParser:
    """
    Parser for VOC metadata.

    VOC files have limited metadata:
    - Header with format version and first block offset
    - Sound format fields inside data blocks
    - Block type counts
    """

    def __init__(
        self,
        file_path: Optional[str] = None,
        file_data: Optional[bytes] = None,
        avdataoffset: int = 0,
        avdataend: Optional[int] = None,
        include_blocks: bool = True,
    ):
        """
        Initialize VOC parser.

        Args:
            file_path: Path to VOC file
            file_data: VOC file data bytes
            avdataoffset: Offset of the VOC header within the data
            avdataend: End of the audio data region (default: end of data)
            include_blocks: Emit per-block VOC:Block<N>:* tags
        """
        if file_path:
            self.file_path = Path(file_path)
            self.file_data = None
        elif file_data:
            self.file_data = file_data
            self.file_path = None
        else:
            raise ValueError("Either file_path or file_data must be provided")
        self.avdataoffset = avdataoffset
        self.avdataend = avdataend
        self.include_blocks = include_blocks
        self.result: Optional[DecodeResult] = None

    def decode(self) -> DecodeResult:
        """
        Run the block decoder.

        Returns:
            DecodeResult for the file

        Raises:
            FormatMismatchError: If the data is not a VOC file
        """
        if self.file_data is None:
            with ByteStream.open(self.file_path) as stream:
                self.result = analyze(stream, self.avdataoffset, self.avdataend)
        else:
            stream = ByteStream.from_bytes(self.file_data)
            self.result = analyze(stream, self.avdataoffset, self.avdataend)
        return self.result

    def parse(self) -> Dict[str, Any]:
        """
        Parse VOC metadata.

        Returns:
            Dictionary of VOC metadata
        """
        try:
            result = self.decode()
        except VocMetaError:
            raise
        except Exception as e:
            raise MetadataReadError(f"Failed to parse VOC metadata: {str(e)}") from e

        return self.build_tags(result)

    def build_tags(self, result: DecodeResult) -> Dict[str, Any]:
        """
        Flatten a DecodeResult into group-prefixed tags.

        Args:
            result: Decoder output

        Returns:
            Dictionary of tags
        """
        metadata: Dict[str, Any] = {}
        metadata['File:FileType'] = 'VOC'
        metadata['File:FileTypeExtension'] = 'voc'
        metadata['File:MIMEType'] = 'audio/x-voc'

        header = result.header
        metadata['VOC:HasSignature'] = True
        metadata['VOC:DataBlockOffset'] = header.block_offset
        metadata['VOC:MinorVersion'] = header.minor_version
        metadata['VOC:MajorVersion'] = header.major_version
        metadata['VOC:Version'] = header.version
        metadata['VOC:BlockCount'] = sum(result.histogram.values())
        metadata['VOC:BlockTypes'] = dict(result.histogram)
        metadata['VOC:Terminated'] = result.terminated
        metadata['VOC:DataOffset'] = result.data_start_offset

        audio = result.audio.as_dict()
        if 'compressed_bits_per_sample' in audio:
            metadata['VOC:CompressedBitsPerSample'] = audio['compressed_bits_per_sample']

        compression = None
        for block in result.blocks:
            if isinstance(block, (SoundDataBlock, StereoDataBlock)) and block.compression_name:
                compression = block.compression_name
        if compression:
            metadata['VOC:Compression'] = compression

        if self.include_blocks:
            for index, block in enumerate(result.blocks):
                metadata.update(self._block_tags(index, block))

        metadata['Audio:DataFormat'] = audio['dataformat']
        metadata['Audio:BitrateMode'] = audio['bitrate_mode']
        metadata['Audio:Lossless'] = audio['lossless']
        metadata['Audio:NumChannels'] = audio['channels']
        metadata['Audio:BitsPerSample'] = audio['bits_per_sample']
        if 'sample_rate' in audio:
            metadata['Audio:SampleRate'] = audio['sample_rate']

        if result.playtime_seconds is not None:
            metadata['Audio:PlaytimeSeconds'] = result.playtime_seconds
            metadata['Audio:Duration'] = format_duration(result.playtime_seconds)
        if result.bitrate is not None:
            metadata['Audio:Bitrate'] = result.bitrate

        if result.warnings:
            metadata['VOC:Warning'] = list(result.warnings)

        return metadata

    def _block_tags(self, index: int, block) -> Dict[str, Any]:
        prefix = f'VOC:Block{index}'
        tags: Dict[str, Any] = {
            f'{prefix}:Offset': block.offset,
            f'{prefix}:Type': block.type_id,
            f'{prefix}:TypeName': block_type_name(block.type_id),
            f'{prefix}:Size': block.declared_size,
        }
        if isinstance(block, SoundDataBlock):
            tags[f'{prefix}:SampleRateID'] = block.sample_rate_id
            tags[f'{prefix}:CompressionType'] = block.compression_type
            tags[f'{prefix}:Compression'] = block.compression_name
        elif isinstance(block, ExtendedBlock):
            tags[f'{prefix}:TimeConstant'] = block.time_constant
            tags[f'{prefix}:PackMethod'] = block.pack_method
            tags[f'{prefix}:Stereo'] = block.stereo
        elif isinstance(block, StereoDataBlock):
            tags[f'{prefix}:SampleRate'] = block.sample_rate
            tags[f'{prefix}:BitsPerSample'] = block.bits_per_sample
            tags[f'{prefix}:NumChannels'] = block.channels
            tags[f'{prefix}:FormatCode'] = f'0x{block.format_code:04X}'
            if block.compression_name:
                tags[f'{prefix}:Compression'] = block.compression_name
        return tags
