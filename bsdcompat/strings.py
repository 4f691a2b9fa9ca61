"""Size-bounded string copying, concatenation and searching.

Strings are treated the way a C string is: anything from the first NUL
character onwards is ignored.  Sizes count characters (or bytes) of the
destination buffer, including the room for the terminating NUL.
"""

from __future__ import annotations

from typing import AnyStr, Optional, Tuple


def _terminate(s: AnyStr) -> AnyStr:
    """Return *s* cut at its first NUL, if it holds one."""
    nul = "\0" if isinstance(s, str) else b"\0"
    index = s.find(nul)
    return s if index < 0 else s[:index]


def _check_size(size: int) -> None:
    if size < 0:
        raise ValueError(f"size must not be negative, got {size}")


def _require_str(*values: object) -> None:
    for value in values:
        if not isinstance(value, str):
            raise TypeError(f"expected str, got {type(value).__name__}")


def strlcpy(src: AnyStr, size: int) -> Tuple[AnyStr, int]:
    """Copy *src* into a buffer of *size* units.

    Returns the copied text and the full length of *src*; the copy was
    truncated when that length is ``>= size``.
    """
    _check_size(size)
    src = _terminate(src)
    return src[: max(size - 1, 0)], len(src)


def strlcat(dst: AnyStr, src: AnyStr, size: int) -> Tuple[AnyStr, int]:
    """Append *src* to *dst*, where *size* is the full size of the buffer.

    Returns the resulting text and ``min(size, len(dst)) + len(src)``;
    truncation occurred when that value is ``>= size``.
    """
    _check_size(size)
    dst = _terminate(dst)
    src = _terminate(src)
    dlen = min(len(dst), size)
    room = size - dlen
    if room == 0:
        return dst[:dlen], dlen + len(src)
    return dst + src[: room - 1], dlen + len(src)


def wcslcpy(src: str, size: int) -> Tuple[str, int]:
    """Wide-character version of :func:`strlcpy`."""
    _require_str(src)
    return strlcpy(src, size)


def wcslcat(dst: str, src: str, size: int) -> Tuple[str, int]:
    """Wide-character version of :func:`strlcat`."""
    _require_str(dst, src)
    return strlcat(dst, src, size)


def strnstr(s: AnyStr, find: AnyStr, slen: int) -> Optional[int]:
    """Find *find* within the first *slen* units of *s*.

    Returns the index of the first occurrence that lies wholly inside
    that limit, or ``None``.  An empty *find* matches at index 0.
    """
    _check_size(slen)
    s = _terminate(s)
    find = _terminate(find)
    if not find:
        return 0
    index = s[:slen].find(find)
    return None if index < 0 else index