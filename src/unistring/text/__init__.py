"""
Text operations over UTF-8 byte buffers: grapheme slicing, pattern
matching, splitting, replacement, similarity and whole-buffer transforms.
"""

from .patterns import CompiledPattern, compile_pattern, contains, ends_with, match, starts_with
from .replace import replace, replace_leading, replace_prefix, replace_suffix, replace_trailing
from .similarity import jaro_distance
from .slicing import at, first, last, slice_from, slice_range, split_at
from .splitting import SplitCursor, Splitter, split, splitter
from .transform import duplicate, ljust, lstrip, reverse, rjust, rstrip, strip

__all__ = [
    "CompiledPattern",
    "SplitCursor",
    "Splitter",
    "at",
    "compile_pattern",
    "contains",
    "duplicate",
    "ends_with",
    "first",
    "jaro_distance",
    "last",
    "ljust",
    "lstrip",
    "match",
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
]
