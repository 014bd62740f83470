# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Value formatter for converting raw VOC values to human-readable strings.

Copyright 2025 DNAi inc.
"""

from typing import Any


def print_hex_bytes(data: bytes) -> str:
    """
    Render bytes as space-separated uppercase hex pairs.

    Args:
        data: Raw bytes

    Returns:
        String such as "43 72 65"
    """
    return ' '.join(f'{b:02X}' for b in data)


def format_duration(seconds: float) -> str:
    """
    Format duration in seconds.

    Uses:
    - "0 s" for zero durations
    - "H:MM:SS" format for durations >= 60 seconds
    - "X.XX s" format for durations < 60 seconds

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    if seconds == 0:
        return "0 s"

    if seconds >= 60:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        secs = int(seconds % 60)
        return f"{hours}:{minutes:02d}:{secs:02d}"

    return f"{seconds:.2f} s"


def format_bitrate(bits_per_second: float) -> str:
    """Format a bitrate as "N kbps" (or "N bps" below one kilobit)."""
    if bits_per_second < 1000:
        return f"{int(round(bits_per_second))} bps"
    return f"{int(round(bits_per_second / 1000))} kbps"


def format_voc_value(tag_name: str, value: Any) -> Any:
    """
    Format VOC tag value for display.

    Args:
        tag_name: Tag name (e.g., "Audio:Bitrate", "Audio:SampleRate")
        value: Raw tag value

    Returns:
        Formatted value; values without a display form are returned unchanged
    """
    if value is None:
        return ""

    tag_key = tag_name.split(':')[-1]

    if tag_key == 'Bitrate' and isinstance(value, (int, float)):
        return format_bitrate(value)
    if tag_key == 'SampleRate' and isinstance(value, (int, float)):
        return f"{int(value)} Hz"
    if tag_key == 'Lossless' and isinstance(value, bool):
        return "Yes" if value else "No"
    if tag_key == 'BlockTypes' and isinstance(value, dict):
        return ', '.join(f"{code}={count}" for code, count in value.items())
    if tag_key == 'Stereo' and isinstance(value, bool):
        return "Stereo" if value else "Mono"

    return value
