from __future__ import annotations

import random
import unittest
import zlib

from rollcrc.constants import CRC_CHECK, CRC_INIT, CRC_POLY
from rollcrc.tables import (
    calc_crc,
    finish_crc,
    make_crc_table,
    make_crc_table_bitwise,
    make_rolling_crc_table,
    make_rolling_crc_table_fast,
    update_crc,
)


def _reference_crc32(data: bytes) -> int:
    # Bit-at-a-time CRC-32, no tables
    crc = 0xFFFFFFFF
    for b in data:
        crc ^= b
        for _ in range(8):
            crc = (crc >> 1) ^ (0xEDB88320 if crc & 1 else 0)
    return crc ^ 0xFFFFFFFF


def _pattern(n: int) -> bytes:
    # Deterministic, non-repeating-looking filler
    return bytes((11 + i * 31 + i // 17) & 0xFF for i in range(n))


class BaseTableTests(unittest.TestCase):
    def test_doubling_matches_bitwise(self):
        fast = make_crc_table()
        slow = make_crc_table_bitwise()
        self.assertEqual(len(fast), 256)
        self.assertEqual(fast, slow)

    def test_known_entries(self):
        tbl = make_crc_table()
        self.assertEqual(tbl[0], 0)
        self.assertEqual(tbl[1], 0x77073096)
        self.assertEqual(tbl[128], CRC_POLY)
        self.assertEqual(tbl[255], 0x2D02EF8D)
        self.assertTrue(all(0 <= v <= 0xFFFFFFFF for v in tbl))

    def test_table_is_linear_in_index(self):
        tbl = make_crc_table()
        for a in (1, 3, 0x5A, 0x80):
            for b in (2, 0x0F, 0xA5, 0xFF):
                self.assertEqual(tbl[a ^ b], tbl[a] ^ tbl[b])

    def test_check_value(self):
        self.assertEqual(calc_crc(b"123456789", make_crc_table()), CRC_CHECK)

    def test_finish_is_self_inverse(self):
        for v in (0, 1, 0xDEADBEEF, 0xFFFFFFFF, CRC_CHECK):
            self.assertEqual(finish_crc(finish_crc(v)), v)
        self.assertEqual(finish_crc(0), CRC_INIT)


class FoldTests(unittest.TestCase):
    def test_fold_matches_zlib_and_reference(self):
        tbl = make_crc_table()
        rng = random.Random(3309)
        for n in list(range(0, 20)) + [63, 64, 65, 255, 256, 1000]:
            data = bytes(rng.randrange(256) for _ in range(n))
            got = calc_crc(data, tbl)
            self.assertEqual(got, zlib.crc32(data), n)
            self.assertEqual(got, _reference_crc32(data), n)

    def test_fold_accepts_any_byte_iterable(self):
        tbl = make_crc_table()
        data = b"hello world"
        self.assertEqual(calc_crc(bytearray(data), tbl), zlib.crc32(data))
        self.assertEqual(calc_crc(list(data), tbl), zlib.crc32(data))
        self.assertEqual(calc_crc(iter(data), tbl), zlib.crc32(data))

    def test_incremental_updates_match_fold(self):
        tbl = make_crc_table()
        data = _pattern(40)
        crc = CRC_INIT
        for b in data[:17]:
            crc = update_crc(crc, tbl, b)
        # Close, reopen, continue
        crc = finish_crc(finish_crc(crc))
        for b in data[17:]:
            crc = update_crc(crc, tbl, b)
        self.assertEqual(finish_crc(crc), zlib.crc32(data))


class RollingTableTests(unittest.TestCase):
    def test_rejects_empty_window(self):
        tbl = make_crc_table()
        with self.assertRaises(ValueError):
            make_rolling_crc_table(0, tbl)
        with self.assertRaises(ValueError):
            make_rolling_crc_table_fast(0, tbl)

    def test_manual_roll_matches_recompute(self):
        tbl = make_crc_table()
        for winsize in range(1, 16):
            rolling = make_rolling_crc_table(winsize, tbl)
            test_size = 2 * winsize
            buf = _pattern(winsize + test_size)
            # Open the CRC of the first window, then roll over the rest
            crc = finish_crc(calc_crc(buf[:winsize], tbl))
            for i in range(winsize, winsize + test_size):
                crc = update_crc(crc, tbl, buf[i]) ^ rolling[buf[i - winsize]]
                window = buf[i - winsize + 1 : i + 1]
                self.assertEqual(finish_crc(crc), zlib.crc32(window), (winsize, i))

    def test_zero_byte_correction_is_init_difference(self):
        # Evicting a zero byte only has to fix up the init term
        tbl = make_crc_table()
        for w in (1, 4, 9):
            rolling = make_rolling_crc_table(w, tbl)
            a = CRC_INIT
            for _ in range(w):
                a = update_crc(a, tbl, 0)
            b = update_crc(a, tbl, 0)
            self.assertEqual(rolling[0], a ^ b)

    def test_fast_table_matches_zero_init_table(self):
        tbl = make_crc_table()
        for w in range(1, 17):
            self.assertEqual(
                make_rolling_crc_table_fast(w, tbl),
                make_rolling_crc_table(w, tbl, init=0),
                w,
            )

    def test_zero_init_tables_roll_zero_init_crc(self):
        tbl = make_crc_table()
        w = 5
        rolling = make_rolling_crc_table_fast(w, tbl)
        buf = _pattern(20)
        crc = calc_crc(buf[:w], tbl, init=0)
        for i in range(w, len(buf)):
            crc = update_crc(crc, tbl, buf[i]) ^ rolling[buf[i - w]]
            self.assertEqual(crc, calc_crc(buf[i - w + 1 : i + 1], tbl, init=0))


if __name__ == "__main__":
    unittest.main()
