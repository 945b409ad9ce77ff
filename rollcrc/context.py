from __future__ import annotations

import threading
from typing import Iterable, Optional

from .constants import CRC_INIT, TABLE_SIZE
from .engine import RollingCRC
from .tables import CRCTable, calc_crc, make_crc_table, make_rolling_crc_table


_BASE_TABLE: Optional[CRCTable] = None
_BASE_TABLE_LOCK = threading.Lock()

_UNUSED_TABLE: CRCTable = (0,) * TABLE_SIZE


def base_table() -> CRCTable:
    """Return the shared standard CRC-32 table, building it on first use.

    Construction runs at most once per process even when several threads ask
    for the table concurrently; afterwards the tuple is only ever read.
    """
    global _BASE_TABLE
    tbl = _BASE_TABLE
    if tbl is not None:
        return tbl
    with _BASE_TABLE_LOCK:
        if _BASE_TABLE is None:
            _BASE_TABLE = make_crc_table()
        return _BASE_TABLE


class RollingContext:
    """Tables needed to roll a CRC-32 over windows of one fixed size.

    Immutable once built: a context may be shared by any number of
    :class:`~rollcrc.engine.RollingCRC` engines and threads. Building one costs
    ``O(256 * window_size)``; a window size of 0 skips the rolling table and
    yields engines that never report a checksum.
    """

    __slots__ = ("_window_size", "_table", "_rolling_table")

    def __init__(self, window_size: int):
        if isinstance(window_size, bool) or not isinstance(window_size, int):
            raise TypeError(f"window_size must be an int, not {type(window_size).__name__}")
        if window_size < 0:
            raise ValueError("window_size must be non-negative")
        table = base_table()
        if window_size == 0:
            rolling = _UNUSED_TABLE
        else:
            rolling = make_rolling_crc_table(window_size, table, CRC_INIT)
        object.__setattr__(self, "_window_size", window_size)
        object.__setattr__(self, "_table", table)
        object.__setattr__(self, "_rolling_table", rolling)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def window_size(self) -> int:
        return self._window_size

    @property
    def table(self) -> CRCTable:
        return self._table

    @property
    def rolling_table(self) -> CRCTable:
        return self._rolling_table

    def checksum(self, data: Iterable[int]) -> int:
        """Standard (non-rolling) CRC-32 of ``data``, using the base table only."""
        return calc_crc(data, self._table)

    def engine(self) -> RollingCRC:
        return RollingCRC(self)

    def __copy__(self) -> "RollingContext":
        return self

    def __deepcopy__(self, memo) -> "RollingContext":
        return self

    def __reduce__(self):
        return (RollingContext, (self._window_size,))

    def __repr__(self) -> str:
        return f"RollingContext(window_size={self._window_size})"
