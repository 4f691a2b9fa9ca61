"""Visual encoding of bytes into printable, unambiguous text.

Every byte becomes either itself, when it is safe to show, or an escape
sequence beginning with a backslash (or ``%`` in HTTP style) that can be
decoded again with :mod:`bsdcompat.unvis`.
"""

from __future__ import annotations

import enum
from typing import Iterable, Tuple, Union

ByteLike = Union[int, str, bytes]
Source = Union[bytes, bytearray, memoryview, str]


class VisFlags(enum.IntFlag):
    """Options controlling how characters are encoded."""

    OCTAL = 0x01
    CSTYLE = 0x02
    SP = 0x04
    TAB = 0x08
    NL = 0x10
    WHITE = 0x1C
    SAFE = 0x20
    NOSLASH = 0x40
    HTTPSTYLE = 0x80
    GLOB = 0x100


_BACKSLASH = 0x5C
_HTTP_SAFE = frozenset(b"$-_.+!*'(),")
_GLOB_CHARS = frozenset(b"*?[#")
_SAFE_CONTROLS = frozenset((0x08, 0x07, 0x0D))
_CSTYLE_ESCAPES = {
    0x0A: "n",
    0x0D: "r",
    0x08: "b",
    0x07: "a",
    0x0B: "v",
    0x09: "t",
    0x0C: "f",
    0x20: "s",
}


def _ord(c: ByteLike) -> int:
    """Return *c* as an unsigned byte value."""
    if isinstance(c, int):
        return c & 0xFF
    if isinstance(c, (str, bytes)) and len(c) == 1:
        value = ord(c)
        if value > 0xFF:
            raise ValueError(f"character {c!r} does not fit in a byte")
        return value
    raise ValueError(f"expected a single byte, got {c!r}")


def _as_bytes(src: Source) -> bytes:
    if isinstance(src, str):
        return src.encode("utf-8")
    return bytes(src)


def _isgraph(c: int) -> bool:
    return 0x21 <= c <= 0x7E


def _isalnum(c: int) -> bool:
    return c < 0x80 and chr(c).isalnum()


def _isoctal(c: int) -> bool:
    return 0x30 <= c <= 0x37


def _plain_whitespace(c: int, flags: VisFlags) -> bool:
    return (
        (not flags & VisFlags.SP and c == 0x20)
        or (not flags & VisFlags.TAB and c == 0x09)
        or (not flags & VisFlags.NL and c == 0x0A)
    )


def _isvisible(c: int, flags: VisFlags) -> bool:
    """Whether a byte is copied verbatim by :func:`strnvis`."""
    return (
        (c < 0x80
         and not (flags & VisFlags.GLOB and c in _GLOB_CHARS)
         and _isgraph(c))
        or _plain_whitespace(c, flags)
        or bool(flags & VisFlags.SAFE and (c in _SAFE_CONTROLS or _isgraph(c)))
    )


def vis(c: ByteLike, flags: int = 0, nextc: ByteLike = 0) -> str:
    """Encode the single byte *c*.

    *nextc* is the byte that follows, used to keep a C-style ``\\0``
    unambiguous before an octal digit.
    """
    c = _ord(c)
    nextc = _ord(nextc)
    flags = VisFlags(flags)

    if flags & VisFlags.HTTPSTYLE and not (_isalnum(c) or c in _HTTP_SAFE):
        return f"%{c:02X}"

    glob_special = bool(flags & VisFlags.GLOB) and c in _GLOB_CHARS
    if not glob_special and (
        _isgraph(c)
        or _plain_whitespace(c, flags)
        or (flags & VisFlags.SAFE and c in _SAFE_CONTROLS)
    ):
        if c == _BACKSLASH and not flags & VisFlags.NOSLASH:
            return "\\\\"
        return chr(c)

    if flags & VisFlags.CSTYLE:
        if c in _CSTYLE_ESCAPES:
            return "\\" + _CSTYLE_ESCAPES[c]
        if c == 0:
            return "\\000" if _isoctal(nextc) else "\\0"

    if (c & 0x7F) == 0x20 or _isgraph(c) or flags & VisFlags.OCTAL:
        return f"\\{c:03o}"

    parts = [] if flags & VisFlags.NOSLASH else ["\\"]
    if c & 0x80:
        c &= 0x7F
        parts.append("M")
    if c < 0x20 or c == 0x7F:
        parts.append("^?" if c == 0x7F else "^" + chr(c + 0x40))
    else:
        parts.append("-" + chr(c))
    return "".join(parts)


def _pieces(data: bytes, flags: VisFlags) -> Iterable[str]:
    for index, c in enumerate(data):
        nextc = data[index + 1] if index + 1 < len(data) else 0
        yield vis(c, flags, nextc)


def _until_nul(data: bytes) -> bytes:
    index = data.find(b"\0")
    return data if index < 0 else data[:index]


def strvis(src: Source, flags: int = 0) -> str:
    """Encode *src* up to its first NUL byte."""
    data = _until_nul(_as_bytes(src))
    return "".join(_pieces(data, VisFlags(flags)))


def strnvis(src: Source, size: int, flags: int = 0) -> Tuple[str, int]:
    """Encode *src* into a buffer of *size* characters.

    Returns the text that fits (at most ``size - 1`` characters, never
    splitting an escape sequence) and the length the full encoding needs.
    """
    if size < 0:
        raise ValueError(f"size must not be negative, got {size}")
    flags = VisFlags(flags)
    data = _until_nul(_as_bytes(src))
    end = size - 1
    out = []
    written = 0
    last = 0
    pos = 0
    while pos < len(data) and written < end:
        c = data[pos]
        if _isvisible(c, flags):
            last = 1
            if c == _BACKSLASH and not flags & VisFlags.NOSLASH:
                if written + 2 > end:
                    last = 2
                    break
                out.append("\\\\")
                written += 2
            else:
                out.append(chr(c))
                written += 1
            pos += 1
        else:
            nextc = data[pos + 1] if pos + 1 < len(data) else 0
            piece = vis(c, flags, nextc)
            last = len(piece)
            if written + last > end:
                break
            out.append(piece)
            written += last
            pos += 1
    needed = written
    if written + last > end:
        needed += sum(len(piece) for piece in _pieces(data[pos:], flags))
    return "".join(out), needed


def strvisx(src: Source, length: int, flags: int = 0) -> str:
    """Encode exactly the first *length* bytes of *src*, NUL bytes included."""
    data = _as_bytes(src)
    if length < 0 or length > len(data):
        raise ValueError(f"length {length} is outside the source of {len(data)} bytes")
    return "".join(_pieces(data[:length], VisFlags(flags)))