"""
Extended grapheme cluster segmentation (Unicode Standard Annex #29).

Clusters are found with a single forward scan. The look-behind conditions of
GB9c, GB11 and GB12/13 only ever refer to codepoints inside the cluster being
built, so they are tracked as small pieces of forward state instead of by
re-scanning. Invalid units always form a cluster of their own.

https://www.unicode.org/reports/tr29/
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, List, NamedTuple, Optional, Tuple

from .codepoints import Codepoint, decode_next
from .properties import GCB, InCB, UnicodeProperties, resolve

_CONTROLS = (GCB.CONTROL, GCB.CR, GCB.LF)
_HANGUL_AFTER_L = (GCB.L, GCB.V, GCB.LV, GCB.LVT)

# Emoji state (GB11): none, inside ExtPict Extend*, right after ExtPict Extend* ZWJ
_PICT_NONE, _PICT_SEEN, _PICT_ZWJ = 0, 1, 2
# Indic conjunct state (GB9c): none, after Consonant, after Consonant ... Linker
_INCB_NONE, _INCB_CONSONANT, _INCB_LINKED = 0, 1, 2


class BoundaryKind(Enum):
    """Where a requested grapheme boundary fell relative to the buffer."""

    BEFORE_START = "before_start"
    WITHIN = "within"
    PAST_END = "past_end"


class GraphemeBoundary(NamedTuple):
    """Byte offset of a grapheme boundary plus how it was resolved."""

    offset: int
    kind: BoundaryKind


class _ClusterState:
    __slots__ = ("prev", "pict", "incb", "ri_count")

    def __init__(self, cp: int, gcb: GCB, props: UnicodeProperties):
        self.prev = gcb
        self.pict = _PICT_NONE
        self.incb = _INCB_NONE
        self.ri_count = 0
        self.advance(cp, gcb, props)

    def advance(self, cp: int, gcb: GCB, props: UnicodeProperties) -> None:
        if props.is_extended_pictographic(cp):
            self.pict = _PICT_SEEN
        elif self.pict == _PICT_SEEN and gcb == GCB.EXTEND:
            pass
        elif self.pict == _PICT_SEEN and gcb == GCB.ZWJ:
            self.pict = _PICT_ZWJ
        else:
            self.pict = _PICT_NONE

        incb = props.indic_conjunct_break(cp)
        if incb == InCB.CONSONANT:
            self.incb = _INCB_CONSONANT
        elif incb == InCB.LINKER and self.incb != _INCB_NONE:
            self.incb = _INCB_LINKED
        elif incb != InCB.EXTEND:
            self.incb = _INCB_NONE

        self.ri_count = self.ri_count + 1 if gcb == GCB.REGIONAL_INDICATOR else 0
        self.prev = gcb

    def is_boundary(self, cp: int, curr: GCB, props: UnicodeProperties) -> bool:
        prev = self.prev
        # GB3
        if prev == GCB.CR and curr == GCB.LF:
            return False
        # GB4, GB5
        if prev in _CONTROLS or curr in _CONTROLS:
            return True
        # GB6, GB7, GB8
        if prev == GCB.L and curr in _HANGUL_AFTER_L:
            return False
        if prev in (GCB.LV, GCB.V) and curr in (GCB.V, GCB.T):
            return False
        if prev in (GCB.LVT, GCB.T) and curr == GCB.T:
            return False
        # GB9, GB9a, GB9b
        if curr in (GCB.EXTEND, GCB.ZWJ, GCB.SPACING_MARK) or prev == GCB.PREPEND:
            return False
        # GB9c
        if self.incb == _INCB_LINKED and props.indic_conjunct_break(cp) == InCB.CONSONANT:
            return False
        # GB11
        if prev == GCB.ZWJ and self.pict == _PICT_ZWJ and props.is_extended_pictographic(cp):
            return False
        # GB12, GB13
        if prev == GCB.REGIONAL_INDICATOR and curr == GCB.REGIONAL_INDICATOR:
            return self.ri_count % 2 == 0
        # GB999
        return True


def next_boundary(
    buffer: bytes, pos: int = 0, properties: Optional[UnicodeProperties] = None
) -> Optional[int]:
    """Return the end offset of the cluster starting at ``pos``, None at the end."""
    props = resolve(properties)
    unit = decode_next(buffer, pos)
    if unit is None:
        return None
    end = pos + unit.width
    if not isinstance(unit, Codepoint):
        return end

    state = _ClusterState(unit.value, props.grapheme_break(unit.value), props)
    while True:
        unit = decode_next(buffer, end)
        if not isinstance(unit, Codepoint):
            return end
        gcb = props.grapheme_break(unit.value)
        if state.is_boundary(unit.value, gcb, props):
            return end
        state.advance(unit.value, gcb, props)
        end += unit.width


def iter_grapheme_spans(
    buffer: bytes, properties: Optional[UnicodeProperties] = None
) -> Iterator[Tuple[int, int]]:
    """Yield the ``(start, end)`` byte span of every cluster, in order."""
    props = resolve(properties)
    pos = 0
    while True:
        end = next_boundary(buffer, pos, props)
        if end is None:
            return
        yield pos, end
        pos = end


def next_grapheme_size(
    buffer: bytes, properties: Optional[UnicodeProperties] = None
) -> Optional[Tuple[int, bytes]]:
    """Byte size of the first grapheme and the remainder, or None if empty."""
    end = next_boundary(buffer, 0, properties)
    if end is None:
        return None
    return end, buffer[end:]


def next_grapheme(
    buffer: bytes, properties: Optional[UnicodeProperties] = None
) -> Optional[Tuple[bytes, bytes]]:
    """The first grapheme and the remainder, or None if the buffer is empty."""
    end = next_boundary(buffer, 0, properties)
    if end is None:
        return None
    return buffer[:end], buffer[end:]


def graphemes(buffer: bytes, properties: Optional[UnicodeProperties] = None) -> List[bytes]:
    """All grapheme clusters of the buffer."""
    return [buffer[start:end] for start, end in iter_grapheme_spans(buffer, properties)]


def grapheme_widths(
    buffer: bytes, properties: Optional[UnicodeProperties] = None
) -> List[int]:
    """Byte width of every cluster; the list length is the grapheme count."""
    return [end - start for start, end in iter_grapheme_spans(buffer, properties)]


def length(buffer: bytes, properties: Optional[UnicodeProperties] = None) -> int:
    """Number of grapheme clusters in the buffer."""
    return sum(1 for _ in iter_grapheme_spans(buffer, properties))


def advance(
    buffer: bytes,
    start: int,
    count: int,
    properties: Optional[UnicodeProperties] = None,
) -> Tuple[int, bool]:
    """
    Move ``count`` clusters forward from byte offset ``start``.

    Returns ``(offset, exhausted)``. ``exhausted`` is True when the buffer
    ran out before ``count`` clusters were passed; ``offset`` is then the end
    of the buffer. Reaching the end exactly is not exhaustion.
    """
    props = resolve(properties)
    pos = start
    for _ in range(count):
        end = next_boundary(buffer, pos, props)
        if end is None:
            return pos, True
        pos = end
    return pos, False


def split_at(
    buffer: bytes, n: int, properties: Optional[UnicodeProperties] = None
) -> GraphemeBoundary:
    """
    Byte offset of the ``n``-th grapheme boundary.

    A negative ``n`` counts from the end (``length + n``); if that is still
    negative the boundary is reported as BEFORE_START at offset 0. When ``n``
    exceeds the cluster count the offset is the end of the buffer and the
    kind is PAST_END.
    """
    props = resolve(properties)
    if n < 0:
        n = length(buffer, props) + n
        if n < 0:
            return GraphemeBoundary(0, BoundaryKind.BEFORE_START)

    offset, exhausted = advance(buffer, 0, n, props)
    return GraphemeBoundary(offset, BoundaryKind.PAST_END if exhausted else BoundaryKind.WITHIN)
