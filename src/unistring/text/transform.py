"""Whole-buffer transforms: reverse, duplicate, justify and strip."""

from __future__ import annotations

from typing import Optional

from ..core.config import SETTINGS
from ..core.errors import ArgumentError
from ..unicode.codepoints import Codepoint, decode_next, iter_units
from ..unicode.graphemes import iter_grapheme_spans, length
from ..unicode.properties import UnicodeProperties, resolve
from .replace import replace_leading, replace_trailing


def _single_codepoint(value: bytes, name: str) -> bytes:
    unit = decode_next(value, 0)
    if not isinstance(unit, Codepoint) or unit.width != len(value):
        raise ArgumentError(f"{name} must be exactly one encoded codepoint, got {value!r}")
    return value


def reverse(buffer: bytes, properties: Optional[UnicodeProperties] = None) -> bytes:
    """Reverse the order of grapheme clusters.

    Reversing twice need not give back the input: a combining mark that
    started the buffer joins the preceding cluster once moved.
    """
    spans = list(iter_grapheme_spans(buffer, properties))
    return b"".join(buffer[start:end] for start, end in reversed(spans))


def duplicate(buffer: bytes, times: int) -> bytes:
    if times < 0:
        raise ArgumentError(f"duplicate() count must be non-negative, got {times}")
    return buffer * times


def _justify(
    buffer: bytes,
    width: int,
    pad: Optional[bytes],
    right: bool,
    properties: Optional[UnicodeProperties],
) -> bytes:
    if width < 0:
        raise ArgumentError(f"Justify width must be non-negative, got {width}")
    fill_unit = _single_codepoint(
        pad if pad is not None else SETTINGS.DEFAULT_PAD.encode("utf-8"), "pad"
    )
    if width == 0:
        return buffer
    current = length(buffer, properties)
    if current >= width:
        return buffer
    fill = fill_unit * (width - current)
    return fill + buffer if right else buffer + fill


def ljust(
    buffer: bytes,
    width: int,
    pad: Optional[bytes] = None,
    properties: Optional[UnicodeProperties] = None,
) -> bytes:
    """Left-justify to ``width`` graphemes, padding on the right."""
    return _justify(buffer, width, pad, False, properties)


def rjust(
    buffer: bytes,
    width: int,
    pad: Optional[bytes] = None,
    properties: Optional[UnicodeProperties] = None,
) -> bytes:
    """Right-justify to ``width`` graphemes, padding on the left."""
    return _justify(buffer, width, pad, True, properties)


def lstrip(
    buffer: bytes,
    char: Optional[bytes] = None,
    properties: Optional[UnicodeProperties] = None,
) -> bytes:
    """Remove leading whitespace, or leading repeats of ``char``."""
    if char is not None:
        return replace_leading(buffer, _single_codepoint(char, "char"), b"")
    props = resolve(properties)
    for pos, unit in iter_units(buffer):
        if not (isinstance(unit, Codepoint) and props.is_whitespace(unit.value)):
            return buffer[pos:]
    return b""


def rstrip(
    buffer: bytes,
    char: Optional[bytes] = None,
    properties: Optional[UnicodeProperties] = None,
) -> bytes:
    """Remove trailing whitespace, or trailing repeats of ``char``."""
    if char is not None:
        return replace_trailing(buffer, _single_codepoint(char, "char"), b"")
    props = resolve(properties)
    end = 0
    for pos, unit in iter_units(buffer):
        if not (isinstance(unit, Codepoint) and props.is_whitespace(unit.value)):
            end = pos + unit.width
    return buffer[:end]


def strip(
    buffer: bytes,
    char: Optional[bytes] = None,
    properties: Optional[UnicodeProperties] = None,
) -> bytes:
    """Remove leading and trailing whitespace, or repeats of ``char``."""
    return rstrip(lstrip(buffer, char, properties), char, properties)
