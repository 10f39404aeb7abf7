"""Jaro similarity between grapheme sequences."""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..unicode.graphemes import graphemes
from ..unicode.properties import UnicodeProperties, resolve


def _count_matches(short: List[bytes], long: List[bytes], window: int) -> Tuple[int, int]:
    """Greedy matching of ``short`` against ``long`` within ``window``.

    Each grapheme of ``short`` takes the first unconsumed equal grapheme of
    ``long`` inside ``[idx - window, idx + window]``. A match whose position
    in ``long`` is below the previous match's position is a transposition.
    """
    consumed = [False] * len(long)
    matches = 0
    transpositions = 0
    former = -1
    for idx, grapheme in enumerate(short):
        low = max(0, idx - window)
        high = min(len(long), idx + window + 1)
        for pos in range(low, high):
            if not consumed[pos] and long[pos] == grapheme:
                consumed[pos] = True
                matches += 1
                if pos < former:
                    transpositions += 1
                former = pos
                break
    return matches, transpositions


def jaro_distance(
    first: bytes, second: bytes, properties: Optional[UnicodeProperties] = None
) -> float:
    """
    Jaro similarity of two buffers, from 0.0 (nothing shared) to 1.0 (equal).

    Both buffers are compared grapheme by grapheme. The matching window is
    ``max(len1, len2) // 2 - 1``; the shorter sequence is matched against the
    longer one (equal lengths are ordered by content so the score is
    symmetric).
    """
    if first == second:
        return 1.0
    if not first or not second:
        return 0.0

    props = resolve(properties)
    chars1 = graphemes(first, props)
    chars2 = graphemes(second, props)
    len1, len2 = len(chars1), len(chars2)

    short, long = sorted((chars1, chars2), key=lambda chars: (len(chars), chars))
    window = max(0, len(long) // 2 - 1)
    matches, transpositions = _count_matches(short, long, window)
    if matches == 0:
        return 0.0

    return (matches / len1 + matches / len2 + (matches - transpositions) / matches) / 3
