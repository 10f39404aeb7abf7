"""
Unicode layer: codepoint decoding, grapheme segmentation and the injected
property provider those algorithms consult.
"""

from .codepoints import (
    Codepoint,
    InvalidUnit,
    chunk,
    codepoints,
    decode_next,
    iter_units,
    next_codepoint,
    printable,
    valid,
)
from .graphemes import (
    BoundaryKind,
    GraphemeBoundary,
    graphemes,
    iter_grapheme_spans,
    length,
    next_grapheme,
    next_grapheme_size,
)
from .properties import GCB, InCB, RegexProperties, UnicodeProperties, get_properties

__all__ = [
    "BoundaryKind",
    "Codepoint",
    "GCB",
    "GraphemeBoundary",
    "InCB",
    "InvalidUnit",
    "RegexProperties",
    "UnicodeProperties",
    "chunk",
    "codepoints",
    "decode_next",
    "get_properties",
    "graphemes",
    "iter_grapheme_spans",
    "iter_units",
    "length",
    "next_codepoint",
    "next_grapheme",
    "next_grapheme_size",
    "printable",
    "valid",
]
