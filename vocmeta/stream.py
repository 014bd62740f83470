# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Seekable byte stream used by the VOC decoder

Wraps a binary file object (or an in-memory buffer) behind the small
read/seek/tell interface the block walker relies on.

Copyright 2025 DNAi inc.
"""

import io
import os
from pathlib import Path
from typing import BinaryIO, Optional, Union


class ByteStream:
    """
    Seekable byte source borrowed by the decoder.

    The stream does not own the wrapped file object unless it was created
    with ByteStream.open(), in which case close() (or leaving the
    ``with`` block) closes it.
    """

    def __init__(self, fp: BinaryIO, size: Optional[int] = None):
        """
        Initialize the stream.

        Args:
            fp: Binary file object supporting read/seek/tell
            size: Total size of the data; measured from fp if omitted
        """
        self._fp = fp
        self._owns_fp = False
        if size is None:
            position = fp.tell()
            fp.seek(0, os.SEEK_END)
            size = fp.tell()
            fp.seek(position, os.SEEK_SET)
        self.size = size

    @classmethod
    def from_bytes(cls, data: bytes) -> 'ByteStream':
        """Create a stream over an in-memory buffer."""
        return cls(io.BytesIO(data), size=len(data))

    @classmethod
    def open(cls, file_path: Union[str, Path]) -> 'ByteStream':
        """
        Open a file for reading and wrap it.

        Args:
            file_path: Path to the file

        Returns:
            ByteStream that closes the file when closed
        """
        fp = open(file_path, 'rb')
        stream = cls(fp)
        stream._owns_fp = True
        return stream

    def read(self, n: int) -> bytes:
        """Read up to n bytes; fewer are returned near the end of data."""
        if n <= 0:
            return b''
        return self._fp.read(n)

    def seek(self, offset: int) -> None:
        """Move to an absolute offset."""
        if offset < 0:
            raise ValueError(f"Cannot seek to negative offset {offset}")
        self._fp.seek(offset, os.SEEK_SET)

    def seek_relative(self, delta: int) -> None:
        """Move relative to the current position."""
        self.seek(self.tell() + delta)

    def tell(self) -> int:
        return self._fp.tell()

    def at_end(self) -> bool:
        """True once the position is at or past the end of the data."""
        return self.tell() >= self.size

    def close(self) -> None:
        if self._owns_fp:
            self._fp.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
