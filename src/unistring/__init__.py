"""
unistring: Unicode-aware operations on UTF-8 byte buffers.

Codepoints, grapheme clusters and raw bytes are kept distinct. Every
operation is total: malformed bytes decode to one-byte invalid units and
out-of-range offsets give None or an empty result instead of raising.
"""

from .core.errors import ArgumentError
from .text import (
    CompiledPattern,
    SplitCursor,
    Splitter,
    at,
    compile_pattern,
    contains,
    duplicate,
    ends_with,
    first,
    jaro_distance,
    last,
    ljust,
    lstrip,
    match,
    replace,
    replace_leading,
    replace_prefix,
    replace_suffix,
    replace_trailing,
    reverse,
    rjust,
    rstrip,
    slice_from,
    slice_range,
    split,
    split_at,
    splitter,
    starts_with,
    strip,
)
from .unicode import (
    chunk,
    codepoints,
    graphemes,
    length,
    next_codepoint,
    next_grapheme,
    next_grapheme_size,
    printable,
    valid,
)
from .unicode.casing import capitalize, downcase, equivalent, normalize, upcase

__version__ = "0.1.0"

__all__ = [
    "ArgumentError",
    "CompiledPattern",
    "SplitCursor",
    "Splitter",
    "at",
    "capitalize",
    "chunk",
    "codepoints",
    "compile_pattern",
    "contains",
    "downcase",
    "duplicate",
    "ends_with",
    "equivalent",
    "first",
    "graphemes",
    "jaro_distance",
    "last",
    "length",
    "ljust",
    "lstrip",
    "match",
    "next_codepoint",
    "next_grapheme",
    "next_grapheme_size",
    "normalize",
    "printable",
    "replace",
    "replace_leading",
    "replace_prefix",
    "replace_suffix",
    "replace_trailing",
    "reverse",
    "rjust",
    "rstrip",
    "slice_from",
    "slice_range",
    "split",
    "split_at",
    "splitter",
    "starts_with",
    "strip",
    "upcase",
    "valid",
]
