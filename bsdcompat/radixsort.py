"""Sorting of byte strings in radix order, with an optional byte table.

Each string ends at its first byte whose translated value is the end
value (or at the end of the object).  Strings are compared byte by byte
on their translated values.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple, Union

BytesLike = Union[bytes, bytearray, memoryview]


def _translation(table: Optional[BytesLike], endbyte: int) -> Tuple[bytes, int]:
    """Return the translation table and the translated end value."""
    if not 0 <= endbyte <= 0xFF:
        raise ValueError(f"end byte must be in 0..255, got {endbyte}")
    if table is None:
        tr = bytes(
            c + 1 if c < endbyte else 0 if c == endbyte else c
            for c in range(256)
        )
        return tr, 0
    tr = bytes(table)
    if len(tr) != 256:
        raise ValueError(f"translation table must hold 256 bytes, got {len(tr)}")
    endch = tr[endbyte]
    if endch not in (0, 0xFF):
        raise ValueError("the end byte must translate to 0 or 255")
    return tr, endch


def _sort_key(s: BytesLike, tr: bytes, endch: int) -> bytes:
    out = bytearray()
    for b in bytes(s):
        t = tr[b]
        out.append(t)
        if t == endch:
            return bytes(out)
    out.append(endch)
    return bytes(out)


def _sorted(strings: Iterable[BytesLike], table: Optional[BytesLike],
            endbyte: int) -> List[BytesLike]:
    if strings is None:
        raise TypeError("strings must be an iterable of byte strings")
    tr, endch = _translation(table, endbyte)
    return sorted(strings, key=lambda s: _sort_key(s, tr, endch))


def radixsort(strings: Iterable[BytesLike], table: Optional[BytesLike] = None,
              endbyte: int = 0) -> List[BytesLike]:
    """Return *strings* sorted; the order of equal strings is unspecified.

    Without a *table*, bytes sort by value except that *endbyte* ends a
    string and sorts before every other byte.  With a *table*, each byte
    is translated through it and ``table[endbyte]`` must be 0 or 255.
    Raises :class:`ValueError` for a bad table or end byte.
    """
    return _sorted(strings, table, endbyte)


def sradixsort(strings: Iterable[BytesLike], table: Optional[BytesLike] = None,
               endbyte: int = 0) -> List[BytesLike]:
    """Stable version of :func:`radixsort`: equal strings keep their order."""
    return _sorted(strings, table, endbyte)