"""
Per-stream rolling CRC-32 engine.

A :class:`RollingCRC` is bound to one :class:`~rollcrc.context.RollingContext`
and consumes bytes one at a time. Its state is keyed only by how many bytes
have been pushed (``count``) relative to the window size ``w``:

- filling (``count < w``, or always when ``w == 0``): bytes are buffered and
  no checksum is available;
- first full window (``count == w``): the checksum is folded directly over
  the buffered window;
- rolling (``count > w``): the checksum is updated in constant time from the
  previous open CRC, the incoming byte, and the byte leaving the window.

Engines hold mutable state and must be driven by a single owner at a time;
use :meth:`RollingCRC.clone` to fork an independent copy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator, Optional, Tuple, Union

from .errors import EngineStateError
from .ring import RingBuffer
from .stream import iter_checksum_results, iter_checksums
from .tables import finish_crc, update_crc

if TYPE_CHECKING:  # pragma: no cover
    from .context import RollingContext


class RollingCRC:
    def __init__(self, context: "RollingContext"):
        self.context = context
        self.count = 0
        self.window = RingBuffer(context.window_size)
        self.last_open_crc: Optional[int] = None

    @property
    def window_size(self) -> int:
        return self.context.window_size

    @property
    def cursor(self) -> int:
        return self.window.cursor

    @property
    def checksum(self) -> Optional[int]:
        """Closed checksum of the current window, if one is available."""
        if self.last_open_crc is None:
            return None
        return finish_crc(self.last_open_crc)

    @property
    def position(self) -> Optional[int]:
        """Start offset of the current window, if a checksum is available."""
        if self.last_open_crc is None:
            return None
        return self.count - self.context.window_size

    def push(self, byte: int) -> Optional[int]:
        """Add one byte; return the closed checksum of the window ending at it.

        Returns ``None`` until the window has filled, and always for a window
        size of 0.
        """
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"Byte value out of range: {byte!r}")
        w = self.context.window_size
        self.count += 1
        if w == 0:
            return None
        if self.count < w:
            self.window.append(byte)
            return None
        if self.count == w:
            self.window.append(byte)
            crc = self.context.checksum(self.window)
            self.last_open_crc = finish_crc(crc)
            return crc
        last = self.last_open_crc
        if last is None:
            raise EngineStateError(
                f"No open CRC after {self.count} bytes with window size {w}"
            )
        evicted = self.window.replace(byte)
        crc = update_crc(last, self.context.table, byte) ^ self.context.rolling_table[evicted]
        self.last_open_crc = crc
        return finish_crc(crc)

    def update(self, data: Iterable[int]) -> Optional[int]:
        """Push every byte of ``data``; return the result of the last push."""
        crc = None
        for b in data:
            crc = self.push(b)
        return crc

    def clone(self) -> "RollingCRC":
        """Return an independent engine with a copy of this engine's state."""
        other = RollingCRC.__new__(RollingCRC)
        other.context = self.context
        other.count = self.count
        other.window = self.window.copy()
        other.last_open_crc = self.last_open_crc
        return other

    __copy__ = clone

    def iter(self, source: Iterable[int]) -> Iterator[Tuple[int, int]]:
        """Lazily yield ``(position, checksum)`` for every full window in ``source``."""
        return iter_checksums(self, source)

    def iter_result(
        self, source: Iterable[Union[int, Exception]]
    ) -> Iterator[Union[Tuple[int, int], Exception]]:
        """Like :meth:`iter`, forwarding exception items from ``source`` in place."""
        return iter_checksum_results(self, source)

    def __repr__(self) -> str:
        return (
            f"RollingCRC(window_size={self.context.window_size}, count={self.count}, "
            f"cursor={self.window.cursor})"
        )
