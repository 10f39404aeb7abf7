"""
Splitting buffers on whitespace, literal patterns or regular expressions.

Eager ``split`` and lazy ``splitter`` share one step function,
``SplitCursor.next``, which consumes the next pattern occurrence and returns
the preceding segment together with a new cursor. Splitting on the empty
literal walks grapheme clusters instead.
"""

from __future__ import annotations

import dataclasses
from typing import Iterator, List, Optional, Tuple

from ..core.errors import ArgumentError
from ..unicode.codepoints import Codepoint, iter_units
from ..unicode.graphemes import next_boundary
from ..unicode.properties import UnicodeProperties, resolve
from .patterns import (
    CompiledPattern,
    PatternLike,
    compile_pattern,
    is_empty_literal,
    is_regex,
    regex_subject,
    to_buffer,
)


@dataclasses.dataclass(frozen=True)
class SplitCursor:
    """Position in a split; ``next`` is a pure step to the following cursor."""

    buffer: bytes
    pos: int = 0
    pattern: Optional[CompiledPattern] = None  # None splits on graphemes
    trim: bool = False
    done: bool = False
    properties: Optional[UnicodeProperties] = None

    @property
    def remainder(self) -> bytes:
        return b"" if self.done else self.buffer[self.pos :]

    def next(self) -> Optional[Tuple[bytes, "SplitCursor"]]:
        """Return ``(segment, next_cursor)``, or None when nothing is left."""
        if self.done:
            return None
        buffer, pos, size = self.buffer, self.pos, len(self.buffer)

        if pos >= size:
            if self.trim:
                return None
            return b"", dataclasses.replace(self, done=True)

        if self.pattern is None:
            end = next_boundary(buffer, pos, self.properties)
            return buffer[pos:end], dataclasses.replace(self, pos=end)

        while True:
            span = self.pattern.find(buffer, pos)
            if span is None:
                return buffer[pos:], dataclasses.replace(self, pos=size, done=True)
            start, end = span
            if start == pos and self.trim:
                pos = end
                if pos >= size:
                    return None
                continue
            return buffer[pos:start], dataclasses.replace(self, pos=end)


class Splitter:
    """Lazy, on-demand split; iterating steps a fresh cursor each time."""

    def __init__(self, cursor: SplitCursor):
        self.cursor = cursor

    def __iter__(self) -> Iterator[bytes]:
        cursor = self.cursor
        while True:
            step = cursor.next()
            if step is None:
                return
            segment, cursor = step
            yield segment


def _make_cursor(
    buffer: bytes,
    pattern: PatternLike,
    trim: bool,
    properties: Optional[UnicodeProperties],
) -> SplitCursor:
    compiled = None if is_empty_literal(pattern) else compile_pattern(pattern)
    return SplitCursor(buffer, pattern=compiled, trim=trim, properties=resolve(properties))


def _parts_limit(parts: Optional[int]) -> Optional[int]:
    if parts is None:
        return None
    if isinstance(parts, bool) or not isinstance(parts, int) or parts <= 0:
        raise ArgumentError(f"parts must be a positive integer or None, got {parts!r}")
    return parts


def split_whitespace(
    buffer: bytes, properties: Optional[UnicodeProperties] = None
) -> List[bytes]:
    """Split on runs of Unicode whitespace, dropping empty leading/trailing parts."""
    props = resolve(properties)
    parts: List[bytes] = []
    start: Optional[int] = None
    for pos, unit in iter_units(buffer):
        if isinstance(unit, Codepoint) and props.is_whitespace(unit.value):
            if start is not None:
                parts.append(buffer[start:pos])
                start = None
        elif start is None:
            start = pos
    if start is not None:
        parts.append(buffer[start:])
    return parts


def _split_regex(buffer: bytes, expr, limit: Optional[int], trim: bool) -> List[bytes]:
    subject = regex_subject(expr, buffer)
    out: List[bytes] = []

    def emit(segment) -> None:
        if segment or not trim:
            out.append(to_buffer(segment))

    pos = 0
    for found in expr.finditer(subject):
        if limit is not None and len(out) >= limit - 1:
            break
        start, end = found.span()
        # An empty match where the current segment begins would emit nothing
        if start == end == pos:
            continue
        emit(subject[pos:start])
        pos = end
    emit(subject[pos:])
    return out


def split(
    buffer: bytes,
    pattern: Optional[PatternLike] = None,
    *,
    parts: Optional[int] = None,
    trim: bool = False,
    properties: Optional[UnicodeProperties] = None,
) -> List[bytes]:
    """
    Split the buffer into segments.

    Args:
        buffer: Bytes to split.
        pattern: Literal, list of literals, compiled pattern or regex. When
            omitted the buffer is split on Unicode whitespace.
        parts: Maximum number of segments; the last one is the whole
            unconsumed remainder. None means unlimited.
        trim: Drop empty segments.

    Returns:
        The segments in order.

    Raises:
        ArgumentError: ``parts`` is not a positive integer, or ``parts`` /
            ``trim`` were given without a pattern.
    """
    if pattern is None:
        if parts is not None or trim:
            raise ArgumentError("parts and trim require a pattern")
        return split_whitespace(buffer, properties)

    limit = _parts_limit(parts)
    if is_regex(pattern):
        return _split_regex(buffer, pattern, limit, trim)

    cursor = _make_cursor(buffer, pattern, trim, properties)
    out: List[bytes] = []
    while True:
        if limit is not None and len(out) == limit - 1:
            rest = cursor.remainder
            if not cursor.done and (rest or not trim):
                out.append(rest)
            return out
        step = cursor.next()
        if step is None:
            return out
        segment, cursor = step
        out.append(segment)


def splitter(
    buffer: bytes,
    pattern: PatternLike,
    *,
    trim: bool = False,
    properties: Optional[UnicodeProperties] = None,
) -> Splitter:
    """Lazy counterpart of ``split`` without a ``parts`` limit.

    Regular expressions are not supported here.
    """
    if is_regex(pattern):
        raise ArgumentError("splitter() does not accept regular expressions; use split()")
    return Splitter(_make_cursor(buffer, pattern, trim, properties))
