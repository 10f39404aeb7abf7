"""Substitution of pattern occurrences in byte buffers."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple, Union

from ..core.errors import ArgumentError
from ..unicode.graphemes import iter_grapheme_spans
from ..unicode.properties import UnicodeProperties
from .patterns import (
    PatternLike,
    compile_pattern,
    is_empty_literal,
    is_regex,
    regex_subject,
    to_buffer,
)

InsertReplaced = Union[int, Sequence[int], None]


def _insert_offsets(insert_replaced: InsertReplaced, replacement: bytes) -> Tuple[int, ...]:
    if insert_replaced is None:
        return ()
    if isinstance(insert_replaced, int) and not isinstance(insert_replaced, bool):
        offsets: Sequence[int] = (insert_replaced,)
    else:
        offsets = insert_replaced  # type: ignore[assignment]

    checked: List[int] = []
    for offset in offsets:
        if isinstance(offset, bool) or not isinstance(offset, int):
            raise ArgumentError(f"insert_replaced offsets must be integers, got {offset!r}")
        if offset < 0 or offset > len(replacement):
            raise ArgumentError(
                f"insert_replaced offset {offset} is outside the replacement "
                f"(length {len(replacement)})"
            )
        checked.append(offset)
    return tuple(sorted(checked))


def _expand(replacement: bytes, matched: bytes, offsets: Tuple[int, ...]) -> bytes:
    if not offsets:
        return replacement
    pieces: List[bytes] = []
    prev = 0
    for offset in offsets:
        pieces.append(replacement[prev:offset])
        pieces.append(matched)
        prev = offset
    pieces.append(replacement[prev:])
    return b"".join(pieces)


def replace(
    buffer: bytes,
    pattern: PatternLike,
    replacement: bytes,
    *,
    global_: bool = True,
    insert_replaced: InsertReplaced = None,
    properties: Optional[UnicodeProperties] = None,
) -> bytes:
    """
    Replace occurrences of ``pattern`` with ``replacement``.

    Args:
        buffer: Bytes to search.
        pattern: Literal, list of literals, compiled pattern or regex.
        replacement: Replacement bytes. For a regex this is a template in
            the regex engine's syntax (``\\1``, ``\\g<name>``).
        global_: Replace every occurrence (default) or only the first.
        insert_replaced: Offset, or list of offsets, into ``replacement`` at
            which the matched bytes are re-inserted.

    Raises:
        ArgumentError: an ``insert_replaced`` offset is negative or beyond
            the replacement, or ``insert_replaced`` was combined with a regex.
    """
    if is_regex(pattern):
        if insert_replaced is not None:
            raise ArgumentError("insert_replaced cannot be combined with a regular expression")
        subject = regex_subject(pattern, buffer)
        template = regex_subject(pattern, replacement)
        return to_buffer(pattern.sub(template, subject, count=0 if global_ else 1))  # type: ignore[union-attr]

    offsets = _insert_offsets(insert_replaced, replacement)

    if is_empty_literal(pattern):
        # The empty pattern matches at every grapheme boundary
        filler = _expand(replacement, b"", offsets)
        if not global_:
            return filler + buffer
        pieces = [filler]
        for start, end in iter_grapheme_spans(buffer, properties):
            pieces.append(buffer[start:end])
            pieces.append(filler)
        return b"".join(pieces)

    compiled = compile_pattern(pattern)
    out: List[bytes] = []
    pos = 0
    while True:
        span = compiled.find(buffer, pos)
        if span is None:
            break
        start, end = span
        out.append(buffer[pos:start])
        out.append(_expand(replacement, buffer[start:end], offsets))
        pos = end
        if not global_:
            break
    out.append(buffer[pos:])
    return b"".join(out)


def replace_leading(buffer: bytes, match: bytes, replacement: bytes) -> bytes:
    """Replace every consecutive occurrence of ``match`` at the start."""
    if not match:
        return buffer
    pos = 0
    count = 0
    while buffer.startswith(match, pos):
        pos += len(match)
        count += 1
    if not count:
        return buffer
    return replacement * count + buffer[pos:]


def replace_trailing(buffer: bytes, match: bytes, replacement: bytes) -> bytes:
    """Replace every consecutive occurrence of ``match`` at the end."""
    if not match:
        return buffer
    end = len(buffer)
    count = 0
    while buffer.endswith(match, 0, end):
        end -= len(match)
        count += 1
    if not count:
        return buffer
    return buffer[:end] + replacement * count


def replace_prefix(buffer: bytes, match: PatternLike, replacement: bytes) -> bytes:
    """
    Replace ``match`` once if the buffer starts with it.

    ``match`` may be a list of literals or a compiled pattern; the longest
    literal at the start of the buffer is the one replaced. An empty literal
    matches everywhere, so the replacement is prepended.
    """
    if is_empty_literal(match):
        return replacement + buffer
    end = compile_pattern(match).match_at(buffer, 0)
    if end is None:
        return buffer
    return replacement + buffer[end:]


def replace_suffix(buffer: bytes, match: bytes, replacement: bytes) -> bytes:
    """Replace ``match`` once if the buffer ends with it."""
    if buffer.endswith(match):
        return buffer[: len(buffer) - len(match)] + replacement
    return buffer
