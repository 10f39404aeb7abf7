"""
Pattern matching over byte buffers.

A pattern is a literal ``bytes`` value, a list of literals, a
``CompiledPattern`` built once from either, or a compiled regular
expression. Literal forms all go through ``CompiledPattern.find``, which
returns the leftmost match; when several literals match at that offset the
longest one wins.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence, Tuple, Union

import regex

from ..core.errors import ArgumentError

# Compiled expressions from either engine are accepted
REGEX_TYPES = (re.Pattern, type(regex.compile("")))


class CompiledPattern:
    """Reusable multi-literal matcher; immutable and safe to share."""

    __slots__ = ("literals", "_expr")

    def __init__(self, literals: Sequence[bytes]):
        # Longest first so the alternation prefers the longest literal at a tie
        ordered = sorted(set(literals), key=lambda lit: (-len(lit), lit))
        self.literals: Tuple[bytes, ...] = tuple(ordered)
        self._expr = None
        if len(ordered) > 1:
            self._expr = re.compile(b"|".join(re.escape(lit) for lit in ordered))

    def find(self, buffer: bytes, start: int = 0) -> Optional[Tuple[int, int]]:
        """Leftmost ``(start, end)`` match at or after ``start``."""
        if self._expr is None:
            literal = self.literals[0]
            pos = buffer.find(literal, start)
            return None if pos < 0 else (pos, pos + len(literal))
        found = self._expr.search(buffer, start)
        return None if found is None else found.span()

    def match_at(self, buffer: bytes, pos: int) -> Optional[int]:
        """End offset of the longest literal matching exactly at ``pos``."""
        for literal in self.literals:
            if buffer.startswith(literal, pos):
                return pos + len(literal)
        return None

    def __repr__(self) -> str:
        return f"CompiledPattern({list(self.literals)!r})"


PatternLike = Union[bytes, Sequence[bytes], CompiledPattern]


def is_regex(pattern: object) -> bool:
    return isinstance(pattern, REGEX_TYPES)


def compile_pattern(pattern: PatternLike) -> CompiledPattern:
    """
    Build a reusable matcher from a literal or a list of literals.

    Raises:
        ArgumentError: the list is empty, holds an empty literal, or the
            value is not a literal form at all.
    """
    if isinstance(pattern, CompiledPattern):
        return pattern
    if isinstance(pattern, (bytes, bytearray)):
        literals = [bytes(pattern)]
    elif isinstance(pattern, (list, tuple)):
        literals = list(pattern)
        if not literals:
            raise ArgumentError("Cannot compile an empty list of patterns")
    else:
        raise ArgumentError(f"Unsupported pattern type: {type(pattern).__name__}")

    for literal in literals:
        if not isinstance(literal, (bytes, bytearray)):
            raise ArgumentError(f"Pattern literals must be bytes, got {type(literal).__name__}")
        if not literal:
            raise ArgumentError("Cannot compile an empty literal into a pattern")
    return CompiledPattern([bytes(lit) for lit in literals])


def is_empty_literal(pattern: object) -> bool:
    return isinstance(pattern, (bytes, bytearray)) and len(pattern) == 0


def _literals(pattern: PatternLike) -> Tuple[bytes, ...]:
    if isinstance(pattern, CompiledPattern):
        return pattern.literals
    if isinstance(pattern, (bytes, bytearray)):
        return (bytes(pattern),)
    return tuple(bytes(lit) for lit in pattern)


def regex_subject(expr: "re.Pattern", buffer: bytes) -> Union[str, bytes]:
    """The buffer in the form ``expr`` scans: text for str patterns, else bytes."""
    if isinstance(expr.pattern, str):
        return buffer.decode("utf-8", "surrogateescape")
    return buffer


def to_buffer(value: Union[str, bytes]) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8", "surrogateescape")
    return value


def find(
    buffer: bytes, pattern: PatternLike, start: int = 0
) -> Optional[Tuple[int, int]]:
    """Leftmost match of a literal pattern, as a byte span."""
    return compile_pattern(pattern).find(buffer, start)


def contains(buffer: bytes, pattern: PatternLike) -> bool:
    """True if any literal of ``pattern`` (or the regex) occurs in the buffer.

    An empty list never matches; an empty literal always does.
    """
    if is_regex(pattern):
        return pattern.search(regex_subject(pattern, buffer)) is not None  # type: ignore[union-attr]
    literals = _literals(pattern)
    if not literals:
        return False
    if any(not lit for lit in literals):
        return True
    return compile_pattern(pattern).find(buffer) is not None


def starts_with(buffer: bytes, prefix: PatternLike) -> bool:
    """True if the buffer starts with ``prefix`` or any prefix in the list."""
    return any(buffer.startswith(lit) for lit in _literals(prefix))


def ends_with(buffer: bytes, suffix: PatternLike) -> bool:
    """True if the buffer ends with ``suffix`` or any suffix in the list."""
    return any(buffer.endswith(lit) for lit in _literals(suffix))


def match(buffer: bytes, expr: "re.Pattern") -> bool:
    """True if the regular expression matches anywhere in the buffer."""
    if not is_regex(expr):
        raise ArgumentError(f"match() expects a compiled regular expression, got {type(expr).__name__}")
    return expr.search(regex_subject(expr, buffer)) is not None
