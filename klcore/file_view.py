"""Read-only memory-mapped view of a file's contents."""

from __future__ import annotations

import mmap
import os
from types import TracebackType


class FileView:
    """Maps a whole file read-only and exposes its bytes as a memoryview."""

    def __init__(self, file_path: str | os.PathLike[str]) -> None:
        self._mmap: mmap.mmap | None = None
        with open(file_path, "rb") as handle:
            size = os.fstat(handle.fileno()).st_size
            if size == 0:
                self._data = memoryview(b"")
            else:
                self._mmap = mmap.mmap(handle.fileno(), 0, access=mmap.ACCESS_READ)
                self._data = memoryview(self._mmap)

    @property
    def data(self) -> memoryview:
        """The file's contents."""
        return self._data

    def close(self) -> None:
        """Release the mapping; the view becomes empty."""
        self._data.release()
        self._data = memoryview(b"")
        if self._mmap is not None:
            self._mmap.close()
            self._mmap = None

    def __enter__(self) -> FileView:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self._data)