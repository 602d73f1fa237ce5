"""Bounds-checked reading from an in-memory byte buffer."""

from __future__ import annotations


class ReadError(EOFError):
    """Raised when a read or seek goes past the end of the data."""


class ByteReader:
    """Sequential reader over a fixed block of bytes."""

    def __init__(self, data: bytes | bytearray | memoryview = b"") -> None:
        self._data = bytes(data)
        self._pos = 0

    def __len__(self) -> int:
        return len(self._data)

    def seek(self, pos: int) -> None:
        if pos < 0 or pos > len(self._data):
            raise ReadError("EOF in seek()")
        self._pos = pos

    def tell(self) -> int:
        return self._pos

    def skip(self, step: int) -> None:
        self.seek(self._pos + step)

    def get(self) -> int:
        if self._pos >= len(self._data):
            raise ReadError("EOF in get()")
        value = self._data[self._pos]
        self._pos += 1
        return value

    def read(self, n: int) -> bytes:
        if n < 0 or self._pos + n > len(self._data):
            raise ReadError("EOF in read()")
        chunk = self._data[self._pos:self._pos + n]
        self._pos += n
        return chunk

    def try_read(self, n: int) -> bytes | None:
        """Read n bytes, or return None without moving if fewer remain."""
        if n < 0 or self._pos + n > len(self._data):
            return None
        return self.read(n)