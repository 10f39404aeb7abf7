"""
Codepoint decoding over UTF-8 byte buffers.

Decoding is self-synchronizing: bytes that do not start a well-formed
sequence come back as a one-byte ``InvalidUnit`` and the scan resumes at the
next byte, so a single bad byte never hides the text after it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple, Union

from ..core.errors import ArgumentError


@dataclass(frozen=True, slots=True)
class Codepoint:
    """A decoded scalar value and the number of bytes it occupied."""

    value: int
    width: int


@dataclass(frozen=True, slots=True)
class InvalidUnit:
    """One byte that does not begin a valid UTF-8 sequence."""

    byte: int
    width: int = 1


Unit = Union[Codepoint, InvalidUnit]

# Control characters accepted by printable() besides the visible ranges:
# \n \r \t \v \b \f \e DEL BEL
_PRINTABLE_CONTROLS = frozenset({0x0A, 0x0D, 0x09, 0x0B, 0x08, 0x0C, 0x1B, 0x7F, 0x07})

CHUNK_TRAITS = ("valid", "printable")


def decode_next(buffer: bytes, pos: int = 0) -> Optional[Unit]:
    """Decode the unit starting at ``pos``; None once ``pos`` reaches the end."""
    size = len(buffer)
    if pos >= size:
        return None

    lead = buffer[pos]
    if lead < 0x80:
        return Codepoint(lead, 1)

    if 0xC2 <= lead <= 0xDF:
        width, value, low, high = 2, lead & 0x1F, 0x80, 0xBF
    elif 0xE0 <= lead <= 0xEF:
        width, value = 3, lead & 0x0F
        # E0 excludes overlongs, ED excludes surrogates
        low = 0xA0 if lead == 0xE0 else 0x80
        high = 0x9F if lead == 0xED else 0xBF
    elif 0xF0 <= lead <= 0xF4:
        width, value = 4, lead & 0x07
        # F0 excludes overlongs, F4 caps at U+10FFFF
        low = 0x90 if lead == 0xF0 else 0x80
        high = 0x8F if lead == 0xF4 else 0xBF
    else:
        return InvalidUnit(lead)

    if pos + width > size:
        return InvalidUnit(lead)

    second = buffer[pos + 1]
    if not low <= second <= high:
        return InvalidUnit(lead)
    value = (value << 6) | (second & 0x3F)

    for offset in range(2, width):
        cont = buffer[pos + offset]
        if not 0x80 <= cont <= 0xBF:
            return InvalidUnit(lead)
        value = (value << 6) | (cont & 0x3F)

    return Codepoint(value, width)


def iter_units(buffer: bytes) -> Iterator[Tuple[int, Unit]]:
    """Yield ``(offset, unit)`` for every unit in the buffer."""
    pos = 0
    while True:
        unit = decode_next(buffer, pos)
        if unit is None:
            return
        yield pos, unit
        pos += unit.width


def next_codepoint(buffer: bytes) -> Optional[Tuple[bytes, bytes]]:
    """Split off the first codepoint (or invalid byte) of the buffer."""
    unit = decode_next(buffer, 0)
    if unit is None:
        return None
    return buffer[: unit.width], buffer[unit.width :]


def codepoints(buffer: bytes) -> List[bytes]:
    """All codepoints of the buffer as byte strings, invalid bytes included."""
    return [buffer[pos : pos + unit.width] for pos, unit in iter_units(buffer)]


def is_noncharacter(value: int) -> bool:
    """True for U+FDD0..U+FDEF and the last two codepoints of every plane."""
    return 0xFDD0 <= value <= 0xFDEF or (value & 0xFFFE) == 0xFFFE


def is_valid_unit(unit: Unit) -> bool:
    return isinstance(unit, Codepoint) and not is_noncharacter(unit.value)


def is_printable_unit(unit: Unit) -> bool:
    if not isinstance(unit, Codepoint):
        return False
    value = unit.value
    return (
        0x20 <= value <= 0x7E
        or 0xA0 <= value <= 0xD7FF
        or 0xE000 <= value <= 0xFFFD
        or 0x10000 <= value <= 0x10FFFF
        or value in _PRINTABLE_CONTROLS
    )


def valid(buffer: bytes) -> bool:
    """Check the buffer is well-formed UTF-8 holding no noncharacters."""
    return all(is_valid_unit(unit) for _, unit in iter_units(buffer))


def printable(buffer: bytes) -> bool:
    """Check every unit is a visible codepoint or an allowed control."""
    return all(is_printable_unit(unit) for _, unit in iter_units(buffer))


def chunk(buffer: bytes, trait: str) -> List[bytes]:
    """
    Split the buffer into maximal runs of units sharing ``trait``.

    ``trait`` is "valid" or "printable". Each chunk holds only units for which
    the trait predicate gives the same answer; an empty buffer gives ``[]``.
    """
    predicates: dict[str, Callable[[Unit], bool]] = {
        "valid": is_valid_unit,
        "printable": is_printable_unit,
    }
    if trait not in predicates:
        raise ArgumentError(f"Unknown chunk trait {trait!r}; expected one of {CHUNK_TRAITS}")
    predicate = predicates[trait]

    chunks: List[bytes] = []
    start = 0
    flag: Optional[bool] = None
    for pos, unit in iter_units(buffer):
        current = predicate(unit)
        if flag is not None and current != flag:
            chunks.append(buffer[start:pos])
            start = pos
        flag = current

    if start < len(buffer):
        chunks.append(buffer[start:])
    return chunks
