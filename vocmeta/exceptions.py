# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for VOCMeta

This module defines custom exceptions for the VOCMeta library.
Advisory problems found while walking blocks are not exceptions;
they are collected as warnings on the decode result.

Copyright 2025 DNAi inc.
"""

from typing import Optional


class VocMetaError(Exception):
    """
    Base exception for all VOCMeta errors.

    All VOCMeta exceptions inherit from this class, allowing
    catch-all error handling for any VOCMeta-related errors.
    """
    def __init__(self, message: str = ""):
        """
        Initialize the exception with an optional error message.

        Args:
            message: Descriptive error message explaining what went wrong
        """
        self.message = message
        super().__init__(message)


class MetadataReadError(VocMetaError):
    """
    Raised when metadata cannot be read from a file.

    This exception is raised when:
    - The VOC header is truncated
    - The stream cannot be read or positioned
    - An unexpected structure aborts parsing
    """
    pass


class FormatMismatchError(MetadataReadError):
    """
    Raised when the stream does not start with the Creative Voice File magic.

    Carries both byte sequences, hex-rendered, and the offset of the check
    so callers can report exactly what was found.
    """
    def __init__(self, expected: str, actual: str, offset: int, message: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        self.offset = offset
        if message is None:
            message = f'Expecting "{expected}" at offset {offset}, found "{actual}"'
        super().__init__(message)


class UnsupportedFormatError(VocMetaError):
    """
    Raised when the file format is not supported.

    This exception is raised when:
    - File extension is not in the supported formats list
    - File signature does not match any known format
    """
    pass
