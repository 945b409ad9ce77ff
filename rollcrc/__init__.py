"""
rollcrc — CRC-32 over a sliding fixed-size window, updated in O(1) per byte.

Features:

- Standard CRC-32 (ISO 3309 / IEEE 802.3, reflected polynomial 0xEDB88320);
  checksums inside the window agree with ``zlib.crc32``.
- Per-window-size rolling table that retires the oldest byte with one lookup.
- Immutable, thread-shareable contexts; cheap per-stream engines that can be
  cloned.
- Lazy generator adapters yielding ``(offset, checksum)`` pairs, including a
  variant that forwards in-band source errors.
- ``rollcrc`` CLI for substring containment, window dumps and plain sums.

Typical use::

    ctx = RollingContext(len(needle))
    target = ctx.checksum(needle)
    hits = [pos for pos, crc in ctx.engine().iter(haystack) if crc == target]
"""

from .constants import CRC_CHECK, CRC_INIT, CRC_POLY
from .context import RollingContext, base_table
from .engine import RollingCRC
from .errors import EngineStateError, RingBufferFull, RollCRCError, TargetError
from .ring import RingBuffer
from .stream import is_error, iter_checksum_results, iter_checksums
from .tables import (
    calc_crc,
    finish_crc,
    make_crc_table,
    make_crc_table_bitwise,
    make_rolling_crc_table,
    make_rolling_crc_table_fast,
    update_crc,
)

__version__ = "0.1"

__all__ = [
    "CRC_CHECK",
    "CRC_INIT",
    "CRC_POLY",
    "RollingContext",
    "RollingCRC",
    "RingBuffer",
    "base_table",
    "calc_crc",
    "finish_crc",
    "update_crc",
    "make_crc_table",
    "make_crc_table_bitwise",
    "make_rolling_crc_table",
    "make_rolling_crc_table_fast",
    "iter_checksums",
    "iter_checksum_results",
    "is_error",
    "RollCRCError",
    "EngineStateError",
    "RingBufferFull",
    "TargetError",
]
