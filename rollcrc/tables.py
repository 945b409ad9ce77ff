"""
CRC-32 table construction and the byte-at-a-time primitives built on them.

Two tables are involved:

- the *base* table maps a byte to its partial-CRC contribution and depends
  only on the polynomial;
- the *rolling* table maps the byte leaving a window of ``w`` bytes to the
  XOR correction that removes its contribution from an open CRC.

Based on Igor Pavlov's and Bulat Ziganshin's public domain "Fast CRC table
construction and rolling CRC hash calculation" (crc.c, 2009/2013).
"""

from __future__ import annotations

from typing import Iterable, Tuple

from .constants import BYTE_MASK, CRC_INIT, CRC_MASK, CRC_POLY, TABLE_SIZE

CRCTable = Tuple[int, ...]


def update_crc(crc: int, table: CRCTable, byte: int) -> int:
    """Return the open CRC ``crc`` extended by one byte."""
    return table[(crc ^ byte) & BYTE_MASK] ^ (crc >> 8)


def finish_crc(crc: int) -> int:
    """Close an open CRC.

    The XOR is its own inverse, so this also re-opens a closed CRC so it can
    be extended.
    """
    return crc ^ CRC_INIT


def _reduce_bit(r: int) -> int:
    # One step of the reflected shift register
    if r & 1:
        return (r >> 1) ^ CRC_POLY
    return r >> 1


def make_crc_table_bitwise(poly: int = CRC_POLY) -> CRCTable:
    tbl = []
    for n in range(TABLE_SIZE):
        c = n
        for _ in range(8):
            if c & 1:
                c = (c >> 1) ^ poly
            else:
                c >>= 1
        tbl.append(c & CRC_MASK)
    return tuple(tbl)


def make_crc_table(seed: int = CRC_POLY) -> CRCTable:
    """Build a 256-entry table by bootstrap doubling.

    ``seed`` becomes entry 128. Entries 64, 32, ..., 1 are successive one-bit
    reductions of it, and every other entry is the XOR of the entries for
    its set bits (the table is linear in its index). With the default seed
    this is the standard CRC-32 table; other seeds are used by
    :func:`make_rolling_crc_table_fast`.
    """
    tbl = [0] * TABLE_SIZE
    r = seed & CRC_MASK
    tbl[128] = r
    i = 64
    while i > 0:
        r = _reduce_bit(r)
        tbl[i] = r
        i >>= 1
    i = 2
    while i < TABLE_SIZE:
        for j in range(1, i):
            tbl[i + j] = tbl[i] ^ tbl[j]
        i <<= 1
    return tuple(tbl)


def calc_crc(data: Iterable[int], table: CRCTable, init: int = CRC_INIT) -> int:
    """Closed (non-rolling) CRC of ``data``."""
    crc = init
    for b in data:
        crc = table[(crc ^ b) & BYTE_MASK] ^ (crc >> 8)
    return crc ^ init


# Linearity of CRC over XOR: for equal-length X and Y,
#
#     CRC(X ^ Y) == CRC(X) ^ CRC(Y)
#
# Rolling a window of w bytes forward means turning the open CRC of
# [x, b1 .. b(w-1)] into the open CRC of [b1 .. b(w-1), y]. Extending the old
# CRC by y gives the CRC of the w+1 bytes [x, b1 .. b(w-1), y]; what is left to
# cancel is x sitting w positions before the end, plus the difference in the
# init term between a w+1 byte run and a w byte run. Both are captured by
#
#     rolling[x] = open CRC(x, 0 * w) ^ open CRC(0 * w)
#
# which is only a function of x and w, so it can be tabulated.


def make_rolling_crc_table(window_size: int, table: CRCTable, init: int = CRC_INIT) -> CRCTable:
    """Build the rolling correction table for a window of ``window_size`` bytes.

    Cost is proportional to ``256 * window_size``; it is paid once per window
    size, never per byte.
    """
    if window_size < 1:
        raise ValueError("Rolling table needs a window of at least one byte")
    # y does not depend on the evicted byte, so it is computed once
    y = init
    for _ in range(window_size):
        y = update_crc(y, table, 0)
    rolling = []
    for c in range(TABLE_SIZE):
        x = update_crc(init, table, c)
        for _ in range(window_size):
            x = update_crc(x, table, 0)
        rolling.append(x ^ y)
    return tuple(rolling)


def make_rolling_crc_table_fast(window_size: int, table: CRCTable) -> CRCTable:
    """O(256) rolling table construction, valid only for a zero init value.

    With a zero register the rolling table is itself linear in the evicted
    byte, so it can be bootstrapped from the entry for byte 128 exactly like
    the base table.
    """
    if window_size < 1:
        raise ValueError("Rolling table needs a window of at least one byte")
    crc = update_crc(0, table, 128)
    for _ in range(window_size):
        crc = update_crc(crc, table, 0)
    return make_crc_table(crc)
