"""
Lazy stream adapters that drive a rolling engine over a byte source.

Both adapters are plain generators: they pull one item from the source per
step, never read ahead, and can be abandoned at any point. They are
single-pass and finite exactly when the source is.

The result-preserving variant accepts sources that interleave byte values
with ``Exception`` instances (for example a reader that reports an I/O failure
in-band instead of raising). Exceptions are passed through in order, in the
spirit of ``asyncio.gather(..., return_exceptions=True)``; they are never
pushed into the engine and do not advance the byte count.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator, Tuple, Union

if TYPE_CHECKING:  # pragma: no cover
    from .engine import RollingCRC


Window = Tuple[int, int]  # (start offset, closed checksum)


def is_error(item: object) -> bool:
    """True for the in-band error items of a result stream."""
    return isinstance(item, Exception)


def iter_checksums(engine: "RollingCRC", source: Iterable[int]) -> Iterator[Window]:
    w = engine.context.window_size
    for b in source:
        crc = engine.push(b)
        if crc is not None:
            yield engine.count - w, crc


def iter_checksum_results(
    engine: "RollingCRC", source: Iterable[Union[int, Exception]]
) -> Iterator[Union[Window, Exception]]:
    w = engine.context.window_size
    for item in source:
        if is_error(item):
            yield item
            continue
        crc = engine.push(item)
        if crc is not None:
            yield engine.count - w, crc
