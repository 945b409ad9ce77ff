from __future__ import annotations

import argparse
import os
import sys
from typing import BinaryIO, Iterator, List, Optional, Tuple, Union

from rollcrc.constants import CRC_INIT, DEFAULT_READ_SIZE
from rollcrc.context import RollingContext, base_table
from rollcrc.engine import RollingCRC
from rollcrc.errors import RollCRCError, TargetError
from rollcrc.stream import is_error
from rollcrc.tables import finish_crc, update_crc


def _iter_stream_bytes(fh: BinaryIO, read_size: int = DEFAULT_READ_SIZE) -> Iterator[Union[int, Exception]]:
    """Yield the bytes of ``fh`` one at a time; a read failure is yielded, not raised."""
    while True:
        try:
            buf = fh.read(read_size)
        except OSError as exc:
            yield exc
            return
        if not buf:
            return
        yield from buf


def _iter_inputs(paths: List[str]) -> Iterator[Tuple[Optional[str], BinaryIO]]:
    """Yield ``(name, handle)`` for each input, opening one file at a time.

    Args:
        paths: Input file paths. Empty, or ``"-"``, means standard input
            (reported with a name of None).
    """
    if not paths:
        yield None, sys.stdin.buffer
        return
    for p in paths:
        if p == "-":
            yield None, sys.stdin.buffer
            continue
        with open(p, "rb") as fh:
            yield p, fh


def _windows(engine: RollingCRC, fh: BinaryIO, read_size: int) -> Iterator[Tuple[int, int]]:
    for item in engine.iter_result(_iter_stream_bytes(fh, read_size)):
        if is_error(item):
            raise item
        yield item


def cmd_contains(target: bytes, paths: List[str], *, read_size: int = DEFAULT_READ_SIZE) -> bool:
    """Print the offset of every window whose CRC matches ``target``'s.

    Offsets are printed as ``FILE: OFFSET`` for files and bare ``OFFSET`` for
    standard input, as soon as each file is scanned.

    Args:
        target: Byte pattern to search for; its length sets the window size.
        paths: Input files; empty means standard input.
        read_size: Number of bytes requested per read.

    Returns:
        True if at least one match was found.

    Raises:
        TargetError: If ``target`` is empty.
        OSError: If an input cannot be opened or read.
    """
    if not target:
        raise TargetError("empty target")
    ctx = RollingContext(len(target))
    target_crc = ctx.checksum(target)
    proto = ctx.engine()
    found = False
    for name, fh in _iter_inputs(paths):
        engine = proto.clone()
        for index, crc in _windows(engine, fh, read_size):
            if crc != target_crc:
                continue
            found = True
            if name is None:
                print(index)
            else:
                print(f"{name}: {index}")
    return found


def cmd_scan(window: int, paths: List[str], *, read_size: int = DEFAULT_READ_SIZE) -> bool:
    """Print ``OFFSET<TAB>CRC`` for every full window of each input.

    With more than one input each line is prefixed by the input name.

    Args:
        window: Window size in bytes; 0 prints nothing.
        paths: Input files; empty means standard input.
        read_size: Number of bytes requested per read.

    Returns:
        True once every input has been scanned.
    """
    ctx = RollingContext(window)
    multi = len(paths) > 1
    for name, fh in _iter_inputs(paths):
        for index, crc in _windows(ctx.engine(), fh, read_size):
            if multi:
                print(f"{name or '-'}\t{index}\t{crc:08x}")
            else:
                print(f"{index}\t{crc:08x}")
    return True


def cmd_sum(paths: List[str], *, read_size: int = DEFAULT_READ_SIZE) -> bool:
    """Print ``CRC<TAB>NAME`` with the plain CRC-32 of each input.

    Args:
        paths: Input files; empty means standard input (named ``-``).
        read_size: Number of bytes requested per read.

    Returns:
        True once every input has been summed.
    """
    table = base_table()
    for name, fh in _iter_inputs(paths):
        crc = CRC_INIT
        for item in _iter_stream_bytes(fh, read_size):
            if is_error(item):
                raise item
            crc = update_crc(crc, table, item)
        print(f"{finish_crc(crc):08x}\t{name or '-'}")
    return True


def _window_arg(value: str) -> int:
    n = int(value, 0)
    if n < 0:
        raise argparse.ArgumentTypeError("window size must be non-negative")
    return n


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="rollcrc",
        description="Rolling CRC-32 over a fixed-size window of a byte stream",
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_contains = sub.add_parser("contains", help="Report offsets where TARGET occurs (CRC match)")
    ap_contains.add_argument("target", help="Byte string to search for (taken as the raw argv bytes)")
    ap_contains.add_argument("files", nargs="*", help="Input files (default: standard input)")
    ap_contains.add_argument("--read-size", type=int, default=DEFAULT_READ_SIZE, help="Read granularity in bytes")

    ap_scan = sub.add_parser("scan", help="Print the checksum of every full window")
    ap_scan.add_argument("--window", "-w", type=_window_arg, required=True, help="Window size in bytes")
    ap_scan.add_argument("files", nargs="*", help="Input files (default: standard input)")
    ap_scan.add_argument("--read-size", type=int, default=DEFAULT_READ_SIZE, help="Read granularity in bytes")

    ap_sum = sub.add_parser("sum", help="Print the plain CRC-32 of each input")
    ap_sum.add_argument("files", nargs="*", help="Input files (default: standard input)")
    ap_sum.add_argument("--read-size", type=int, default=DEFAULT_READ_SIZE, help="Read granularity in bytes")

    # Sub-command options may sit between positionals (e.g. TARGET --read-size N FILE);
    # argparse only supports that on a parser without sub-parsers, so dispatch first.
    subcommands = {"contains": ap_contains, "scan": ap_scan, "sum": ap_sum}
    if argv is None:
        argv = sys.argv[1:]
    if argv and argv[0] in subcommands:
        args = subcommands[argv[0]].parse_intermixed_args(argv[1:], argparse.Namespace(cmd=argv[0]))
    else:
        args = ap.parse_args(argv)
    if args.read_size <= 0:
        ap.error("--read-size must be positive")
    try:
        if args.cmd == "contains":
            found = cmd_contains(os.fsencode(args.target), args.files, read_size=args.read_size)
            sys.exit(0 if found else 1)
        elif args.cmd == "scan":
            cmd_scan(args.window, args.files, read_size=args.read_size)
        elif args.cmd == "sum":
            cmd_sum(args.files, read_size=args.read_size)
        else:
            raise RuntimeError("Unknown command")
    except (RollCRCError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
