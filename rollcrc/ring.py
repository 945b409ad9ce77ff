from __future__ import annotations

from typing import Iterator

from .errors import RingBufferFull


class RingBuffer:
    """Fixed-capacity circular buffer of byte values.

    Fills by :meth:`append` until ``capacity`` bytes are held; from then on
    :meth:`replace` overwrites the oldest byte. ``cursor`` always indexes the
    slot of the oldest byte once the buffer is full.
    """

    __slots__ = ("_buf", "_len", "cursor")

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError("Ring buffer capacity must be non-negative")
        self._buf = bytearray(capacity)
        self._len = 0
        self.cursor = 0

    @property
    def capacity(self) -> int:
        return len(self._buf)

    def __len__(self) -> int:
        return self._len

    def is_full(self) -> bool:
        return self._len == len(self._buf)

    def append(self, byte: int) -> None:
        if self._len >= len(self._buf):
            raise RingBufferFull(f"Ring buffer full ({len(self._buf)} bytes)")
        self._buf[self._len] = byte
        self._len += 1

    def replace(self, byte: int) -> int:
        """Overwrite the oldest byte with ``byte`` and return the evicted one."""
        if not self.is_full() or not self._buf:
            raise RingBufferFull("replace() requires a full, non-empty ring buffer")
        pos = self.cursor
        evicted = self._buf[pos]
        self._buf[pos] = byte
        pos += 1
        if pos == len(self._buf):
            pos = 0
        self.cursor = pos
        return evicted

    def __iter__(self) -> Iterator[int]:
        # Oldest first
        if not self.is_full():
            return iter(self._buf[: self._len])
        return iter(self._buf[self.cursor :] + self._buf[: self.cursor])

    def to_bytes(self) -> bytes:
        return bytes(iter(self))

    def copy(self) -> "RingBuffer":
        other = RingBuffer.__new__(RingBuffer)
        other._buf = bytearray(self._buf)
        other._len = self._len
        other.cursor = self.cursor
        return other

    def __repr__(self) -> str:
        return f"RingBuffer(capacity={self.capacity}, len={self._len}, cursor={self.cursor})"
