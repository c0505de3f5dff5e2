"""
Read-only local file loader using mmap + memoryview, capped at the EDID size limit.
"""

from __future__ import annotations

import mmap
import os
from dataclasses import dataclass
from typing import Optional

# Base block plus extensions never come close to this.
MAX_EDID_SIZE = 4096


@dataclass
class LocalFileSource:
    """Local file source with zero-copy memory mapping.

    Attributes:
        path: Path to the local file.
        max_size: Bytes beyond this offset are never mapped.
    """

    path: str
    max_size: int = MAX_EDID_SIZE

    def open(self) -> "MappedFile":
        """Open and memory-map the file read-only."""
        return MappedFile(self.path, self.max_size)


class MappedFile:
    """Context manager that wraps an mmapped file and exposes a memoryview."""

    __slots__ = ("_fd", "_m", "_mv", "size", "path", "max_size")

    def __init__(self, path: str, max_size: int = MAX_EDID_SIZE):
        self.path = path
        self.max_size = max_size
        self._fd: Optional[int] = None
        self._m: Optional[mmap.mmap] = None
        self._mv: Optional[memoryview] = None
        self.size: int = 0

    def __enter__(self) -> "MappedFile":
        self._fd = os.open(self.path, os.O_RDONLY)
        try:
            self.size = min(os.fstat(self._fd).st_size, self.max_size)
            if self.size:
                self._m = mmap.mmap(self._fd, self.size, access=mmap.ACCESS_READ)
                self._mv = memoryview(self._m)
            else:
                # mmap refuses zero-length files
                self._mv = memoryview(b"")
        except BaseException:
            self.__exit__(None, None, None)
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._mv is not None:
            self._mv.release()
            self._mv = None
        if self._m is not None:
            self._m.close()
            self._m = None
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    @property
    def view(self) -> memoryview:
        """Zero-copy memoryview over the file bytes."""
        if self._mv is None:
            raise RuntimeError("MappedFile is not entered")
        return self._mv
