# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
File format detector

This module detects Creative Voice Files from their signature
and file extension.

Copyright 2025 DNAi inc.
"""

from typing import Optional, Dict
from pathlib import Path

from vocmeta.voc_tags import VOC_MAGIC


class FormatDetector:
    """
    Detects file formats from file signatures and extensions.
    """

    # Format signatures (magic numbers)
    FORMAT_SIGNATURES: Dict[bytes, str] = {
        VOC_MAGIC: 'VOC',
    }

    # Extension to format mapping
    EXTENSION_FORMATS: Dict[str, str] = {
        '.voc': 'VOC',
    }

    @classmethod
    def detect_format(cls, file_path: Optional[str] = None, file_data: Optional[bytes] = None) -> Optional[str]:
        """
        Detect file format from file path and/or data.

        The signature wins over the extension when data is given.

        Args:
            file_path: Path to file
            file_data: File data (first few bytes)

        Returns:
            Format name or None if not detected
        """
        if file_data:
            for signature, format_name in cls.FORMAT_SIGNATURES.items():
                if file_data.startswith(signature):
                    return format_name

        if file_path:
            ext = Path(file_path).suffix.lower()
            if ext in cls.EXTENSION_FORMATS:
                return cls.EXTENSION_FORMATS[ext]

        return None

    @classmethod
    def is_supported_format(cls, format_name: str) -> bool:
        """
        Check if format is supported for metadata operations.

        Args:
            format_name: Format name

        Returns:
            True if format is supported
        """
        return format_name.upper() in set(cls.EXTENSION_FORMATS.values())
