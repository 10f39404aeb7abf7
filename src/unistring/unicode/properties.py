"""
Unicode property lookups used by the segmenter and the case routines.

Algorithms in this package never embed property tables. They ask a
``UnicodeProperties`` provider instead, which keeps the bulky Unicode data
with the ``regex`` library (and ``unicodedata`` for normalization) and lets
callers inject their own tables.
"""

from __future__ import annotations

import unicodedata
from enum import IntEnum
from functools import lru_cache
from typing import Callable, Optional, Protocol

import regex

from ..core.config import SETTINGS
from ..core.errors import ArgumentError

NORMALIZATION_FORMS = ("nfc", "nfd", "nfkc", "nfkd")


class GCB(IntEnum):
    """Grapheme_Cluster_Break property values."""

    OTHER = 0
    CR = 1
    LF = 2
    CONTROL = 3
    EXTEND = 4
    ZWJ = 5
    REGIONAL_INDICATOR = 6
    PREPEND = 7
    SPACING_MARK = 8
    L = 9
    V = 10
    T = 11
    LV = 12
    LVT = 13


class InCB(IntEnum):
    """Indic_Conjunct_Break property values."""

    NONE = 0
    LINKER = 1
    CONSONANT = 2
    EXTEND = 3


class UnicodeProperties(Protocol):
    """Lookup capability consumed by the algorithms in this package."""

    def grapheme_break(self, cp: int) -> GCB: ...

    def is_extended_pictographic(self, cp: int) -> bool: ...

    def indic_conjunct_break(self, cp: int) -> InCB: ...

    def is_whitespace(self, cp: int) -> bool: ...

    def upper(self, cp: int) -> str: ...

    def lower(self, cp: int) -> str: ...

    def title(self, cp: int) -> str: ...

    def normalize(self, text: str, form: str) -> str: ...


# Checked in order; CR, LF and ZWJ are single codepoints handled up front.
_GCB_CLASSES: tuple[tuple[GCB, str], ...] = (
    (GCB.CONTROL, "Control"),
    (GCB.EXTEND, "Extend"),
    (GCB.REGIONAL_INDICATOR, "Regional_Indicator"),
    (GCB.PREPEND, "Prepend"),
    (GCB.SPACING_MARK, "SpacingMark"),
    (GCB.L, "L"),
    (GCB.V, "V"),
    (GCB.T, "T"),
    (GCB.LV, "LV"),
    (GCB.LVT, "LVT"),
)

_INCB_CLASSES: tuple[tuple[InCB, str], ...] = (
    (InCB.LINKER, "Linker"),
    (InCB.CONSONANT, "Consonant"),
    (InCB.EXTEND, "Extend"),
)


class RegexProperties:
    """Property provider backed by the ``regex`` library's Unicode data."""

    def __init__(self, cache_size: Optional[int] = None):
        size = SETTINGS.PROPERTY_CACHE_SIZE if cache_size is None else cache_size
        self._gcb = [
            (value, regex.compile(rf"\p{{Grapheme_Cluster_Break={name}}}"))
            for value, name in _GCB_CLASSES
        ]
        self._pict = regex.compile(r"\p{Extended_Pictographic}")
        self._space = regex.compile(r"\p{White_Space}")
        self._incb = [
            (value, regex.compile(rf"\p{{InCB={name}}}")) for value, name in _INCB_CLASSES
        ]

        self.grapheme_break: Callable[[int], GCB] = lru_cache(maxsize=size)(
            self._grapheme_break
        )
        self.is_extended_pictographic: Callable[[int], bool] = lru_cache(maxsize=size)(
            self._is_extended_pictographic
        )
        self.indic_conjunct_break: Callable[[int], InCB] = lru_cache(maxsize=size)(
            self._indic_conjunct_break
        )
        self.is_whitespace: Callable[[int], bool] = lru_cache(maxsize=size)(
            self._is_whitespace
        )

    def _grapheme_break(self, cp: int) -> GCB:
        if cp == 0x0D:
            return GCB.CR
        if cp == 0x0A:
            return GCB.LF
        if cp == 0x200D:
            return GCB.ZWJ
        ch = chr(cp)
        for value, pattern in self._gcb:
            if pattern.match(ch):
                return value
        return GCB.OTHER

    def _is_extended_pictographic(self, cp: int) -> bool:
        return self._pict.match(chr(cp)) is not None

    def _indic_conjunct_break(self, cp: int) -> InCB:
        ch = chr(cp)
        for value, pattern in self._incb:
            if pattern.match(ch):
                return value
        return InCB.NONE

    def _is_whitespace(self, cp: int) -> bool:
        return self._space.match(chr(cp)) is not None

    def upper(self, cp: int) -> str:
        return chr(cp).upper()

    def lower(self, cp: int) -> str:
        return chr(cp).lower()

    def title(self, cp: int) -> str:
        return chr(cp).title()

    def normalize(self, text: str, form: str) -> str:
        if form not in NORMALIZATION_FORMS:
            raise ArgumentError(
                f"Unknown normalization form {form!r}; expected one of {NORMALIZATION_FORMS}"
            )
        return unicodedata.normalize(form.upper(), text)


_default: Optional[RegexProperties] = None


def get_properties() -> RegexProperties:
    """Return the process-wide default provider, creating it on first use."""
    global _default
    if _default is None:
        _default = RegexProperties()
    return _default


def resolve(properties: Optional[UnicodeProperties]) -> UnicodeProperties:
    """Pick the injected provider, falling back to the default one."""
    return properties if properties is not None else get_properties()
