#!/usr/bin/env python3
"""Microbenchmark: rolling CRC update vs. recomputing every window"""
from __future__ import annotations

import argparse
import os
import random
import sys
import time
from typing import Optional

from rollcrc.context import RollingContext
from rollcrc.errors import RollCRCError


def bench_rolling(ctx: RollingContext, data: bytes) -> tuple[float, int]:
    t0 = time.perf_counter()
    n = sum(1 for _ in ctx.engine().iter(data))
    return time.perf_counter() - t0, n


def bench_recompute(ctx: RollingContext, data: bytes) -> tuple[float, int]:
    w = ctx.window_size
    t0 = time.perf_counter()
    n = 0
    for i in range(len(data) - w + 1):
        ctx.checksum(data[i : i + w])
        n += 1
    return time.perf_counter() - t0, n


def bench_table(window: int) -> float:
    t0 = time.perf_counter()
    RollingContext(window)
    return time.perf_counter() - t0


def main(argv: Optional[list[str]] = None) -> None:
    ap = argparse.ArgumentParser(prog="rollcrc.bench", description="Compare rolling and recomputed window CRCs")
    ap.add_argument("--size", type=int, default=64 * 1024, help="Input size in bytes (default 65536)")
    ap.add_argument("--window", type=int, action="append", help="Window size; repeatable (default 16, 64, 256)")
    ap.add_argument("--seed", type=int, default=None, help="PRNG seed for reproducibility")
    ap.add_argument("--skip-recompute", action="store_true", help="Only time the rolling path")
    args = ap.parse_args(argv)

    if args.seed is None:
        data = os.urandom(args.size)
    else:
        rng = random.Random(args.seed)
        data = bytes(rng.randrange(256) for _ in range(args.size))

    try:
        for w in args.window or [16, 64, 256]:
            if w < 1 or w > len(data):
                raise ValueError(f"window {w} out of range (1..{len(data)})")
            t_tab = bench_table(w)
            ctx = RollingContext(w)
            t_roll, n = bench_rolling(ctx, data)
            line = f"w={w:5d} table={t_tab * 1e3:8.2f}ms rolling={t_roll:7.3f}s ({n / t_roll:,.0f} win/s)"
            if not args.skip_recompute:
                t_full, _ = bench_recompute(ctx, data)
                line += f" recompute={t_full:7.3f}s speedup={t_full / t_roll:5.1f}x"
            print(line)
    except (RollCRCError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
