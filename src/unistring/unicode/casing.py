"""Case mapping and normalization over byte buffers."""

from __future__ import annotations

from typing import Callable, List, Optional

from .codepoints import Codepoint, decode_next, iter_units
from .properties import UnicodeProperties, resolve


def _map_codepoints(
    buffer: bytes, mapping: Callable[[int], str], start: int = 0
) -> bytes:
    # Invalid units are copied through untouched
    out: List[bytes] = []
    for _, unit in iter_units(buffer[start:]):
        if isinstance(unit, Codepoint):
            out.append(mapping(unit.value).encode("utf-8"))
        else:
            out.append(bytes((unit.byte,)))
    return b"".join(out)


def upcase(buffer: bytes, properties: Optional[UnicodeProperties] = None) -> bytes:
    return _map_codepoints(buffer, resolve(properties).upper)


def downcase(buffer: bytes, properties: Optional[UnicodeProperties] = None) -> bytes:
    return _map_codepoints(buffer, resolve(properties).lower)


def capitalize(buffer: bytes, properties: Optional[UnicodeProperties] = None) -> bytes:
    """Titlecase the first codepoint and lowercase the rest.

    No attempt is made to titlecase every word.
    """
    props = resolve(properties)
    unit = decode_next(buffer, 0)
    if unit is None:
        return b""
    head = _map_codepoints(buffer[: unit.width], props.title)
    return head + _map_codepoints(buffer, props.lower, start=unit.width)


def normalize(
    buffer: bytes, form: str, properties: Optional[UnicodeProperties] = None
) -> bytes:
    """Convert the buffer to normalization form ``form`` (nfd, nfc, nfkd, nfkc).

    Invalid bytes are carried through with ``surrogateescape`` and come back
    unchanged.
    """
    text = buffer.decode("utf-8", "surrogateescape")
    return resolve(properties).normalize(text, form).encode("utf-8", "surrogateescape")


def equivalent(
    first: bytes, second: bytes, properties: Optional[UnicodeProperties] = None
) -> bool:
    """True if both buffers are canonically equivalent (equal under NFD)."""
    props = resolve(properties)
    return normalize(first, "nfd", props) == normalize(second, "nfd", props)
