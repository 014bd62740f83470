"""Helpers that assemble Creative Voice File byte streams for tests."""

import struct

MAGIC = b'Creative Voice File'
TERMINATOR = b'\x00'


def voc_header(block_offset: int = 0x1A, minor: int = 0x0A, major: int = 0x01) -> bytes:
    version = (major << 8) | minor
    checksum = (~version + 0x1234) & 0xFFFF
    return MAGIC + b'\x1a' + struct.pack('<HBBH', block_offset, minor, major, checksum)


def block(type_id: int, payload: bytes = b'', declared_size: int = None) -> bytes:
    if declared_size is None:
        declared_size = len(payload)
    return bytes([type_id]) + struct.pack('<I', declared_size)[:3] + payload


def sound_data(sample_rate_id: int, compression: int, samples: bytes = b'', declared_size: int = None) -> bytes:
    return block(1, bytes([sample_rate_id, compression]) + samples, declared_size)


def extended(time_constant: int, pack_method: int = 0, stereo: int = 0) -> bytes:
    return block(8, struct.pack('<HBB', time_constant, pack_method, stereo))


def stereo_data(sample_rate: int, bits: int, channels: int, format_code: int, samples: bytes = b'') -> bytes:
    fields = struct.pack('<IBBH', sample_rate, bits, channels, format_code) + b'\x00' * 4
    return block(9, fields + samples)


def voc_file(*blocks: bytes, terminator: bytes = TERMINATOR) -> bytes:
    return voc_header() + b''.join(blocks) + terminator
