"""
Logical (grapheme) indexing and slicing.

Offsets count grapheme clusters from 0; negative offsets count from the end
(``length + offset``). Out-of-range offsets never raise: single lookups give
None and slices give ``b""``.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..unicode.graphemes import (
    advance,
    grapheme_widths,
    iter_grapheme_spans,
    length,
    next_boundary,
    split_at as boundary_at,
)
from ..unicode.properties import UnicodeProperties, resolve


def first(buffer: bytes, properties: Optional[UnicodeProperties] = None) -> Optional[bytes]:
    """The first grapheme, or None for an empty buffer."""
    end = next_boundary(buffer, 0, properties)
    return None if end is None else buffer[:end]


def last(buffer: bytes, properties: Optional[UnicodeProperties] = None) -> Optional[bytes]:
    """The last grapheme, or None for an empty buffer."""
    span = None
    for span in iter_grapheme_spans(buffer, properties):
        pass
    return None if span is None else buffer[span[0] : span[1]]


def at(
    buffer: bytes, index: int, properties: Optional[UnicodeProperties] = None
) -> Optional[bytes]:
    """The grapheme at ``index``, or None when it resolves outside the buffer."""
    props = resolve(properties)
    if index < 0:
        index = length(buffer, props) + index
        if index < 0:
            return None

    offset, exhausted = advance(buffer, 0, index, props)
    if exhausted:
        return None
    end = next_boundary(buffer, offset, props)
    return None if end is None else buffer[offset:end]


def split_at(
    buffer: bytes, index: int, properties: Optional[UnicodeProperties] = None
) -> Tuple[bytes, bytes]:
    """
    Split the buffer in two at grapheme ``index``.

    The index is capped to the buffer, so ``head + tail == buffer`` for
    every integer.
    """
    boundary = boundary_at(buffer, index, properties)
    return buffer[: boundary.offset], buffer[boundary.offset :]


def slice_from(
    buffer: bytes,
    start: int,
    count: int,
    properties: Optional[UnicodeProperties] = None,
) -> bytes:
    """
    Up to ``count`` graphemes starting at grapheme ``start``.

    ``count`` past the end is clamped; a start past the end or a non-positive
    ``count`` gives ``b""``.
    """
    if count <= 0:
        return b""
    props = resolve(properties)
    if start < 0:
        start = length(buffer, props) + start
        if start < 0:
            return b""

    offset, exhausted = advance(buffer, 0, start, props)
    if exhausted:
        return b""
    end, _ = advance(buffer, offset, count, props)
    return buffer[offset:end]


def slice_range(
    buffer: bytes,
    first: int,
    last: Optional[int] = None,
    properties: Optional[UnicodeProperties] = None,
) -> bytes:
    """
    Graphemes ``first`` through ``last``, both inclusive.

    ``last=None`` runs to the end. Non-negative bounds are resolved in one
    forward pass; a negative bound needs the total length, so every cluster
    width is collected first and both bounds are resolved against it.
    """
    if not buffer:
        return b""
    props = resolve(properties)

    if first >= 0 and (last is None or last == -1):
        offset, exhausted = advance(buffer, 0, first, props)
        return b"" if exhausted else buffer[offset:]

    if last is None:
        last = -1

    if first >= 0 and last >= 0:
        if last < first:
            return b""
        return slice_from(buffer, first, last - first + 1, props)

    widths = grapheme_widths(buffer, props)
    total = len(widths)
    if first < 0:
        first = total + first
    if last < 0:
        last = total + last
    if first < 0 or first > last or first > total:
        return b""

    stop = min(last + 1, total)
    start_byte = sum(widths[:first])
    end_byte = start_byte + sum(widths[first:stop])
    return buffer[start_byte:end_byte]
