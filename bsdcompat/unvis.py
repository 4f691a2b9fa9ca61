"""Decoding of text produced by :mod:`bsdcompat.vis`."""

from __future__ import annotations

import enum
from typing import Iterator, Optional, Tuple, Union

from bsdcompat.vis import VisFlags

Source = Union[bytes, bytearray, memoryview, str]


class UnvisResult(enum.Enum):
    """Outcome of feeding one character to the decoder."""

    PENDING = 0
    VALID = 1
    VALIDPUSH = 2
    NOCHAR = 3


class UnvisError(ValueError):
    """Raised on a malformed escape sequence."""


class _State(enum.Enum):
    GROUND = enum.auto()
    START = enum.auto()
    META = enum.auto()
    META1 = enum.auto()
    CTRL = enum.auto()
    OCTAL2 = enum.auto()
    OCTAL3 = enum.auto()
    HEX2 = enum.auto()


_BACKSLASH = 0x5C
_SIMPLE_ESCAPES = {
    ord("\\"): 0x5C,
    ord("n"): 0x0A,
    ord("r"): 0x0D,
    ord("b"): 0x08,
    ord("a"): 0x07,
    ord("v"): 0x0B,
    ord("t"): 0x09,
    ord("f"): 0x0C,
    ord("s"): 0x20,
    ord("E"): 0x1B,
}
_HIDDEN = frozenset((0x0A, ord("$")))


def _ord(c: Union[int, str, bytes]) -> int:
    if isinstance(c, int):
        return c & 0xFF
    if isinstance(c, (str, bytes)) and len(c) == 1 and ord(c) <= 0xFF:
        return ord(c)
    raise ValueError(f"expected a single byte, got {c!r}")


def _isdigit(c: int) -> bool:
    return 0x30 <= c <= 0x39


def _isoctal(c: int) -> bool:
    return 0x30 <= c <= 0x37


def _tolower(c: int) -> int:
    return c + 0x20 if 0x41 <= c <= 0x5A else c


def _ishex(c: int) -> bool:
    return _isdigit(c) or 0x61 <= c <= 0x66


class Unvis:
    """Incremental decoder, fed one character at a time.

    :meth:`feed` returns the result and, for ``VALID`` and ``VALIDPUSH``,
    the decoded byte.  After ``VALIDPUSH`` the same character must be fed
    again.
    """

    def __init__(self, flags: int = 0) -> None:
        self.flags = VisFlags(flags)
        self._state = _State.GROUND
        self._http = False
        self._cp = 0

    def _done(self, result: UnvisResult = UnvisResult.VALID) -> Tuple[UnvisResult, int]:
        self._state = _State.GROUND
        return result, self._cp & 0xFF

    def _pending(self, state: _State) -> Tuple[UnvisResult, None]:
        self._state = state
        return UnvisResult.PENDING, None

    def _bad(self) -> UnvisError:
        self._state = _State.GROUND
        return UnvisError("malformed escape sequence")

    def feed(self, c: Union[int, str, bytes]) -> Tuple[UnvisResult, Optional[int]]:
        """Feed one character; raise :class:`UnvisError` on bad syntax."""
        c = _ord(c)
        state = self._state

        if state is _State.GROUND:
            self._cp = 0
            if c == _BACKSLASH:
                self._http = False
                return self._pending(_State.START)
            if self.flags & VisFlags.HTTPSTYLE and c == ord("%"):
                self._http = True
                return self._pending(_State.START)
            self._cp = c
            return self._done()

        if state is _State.START:
            http, self._http = self._http, False
            if http and _ishex(_tolower(c)):
                self._cp = c - 0x30 if _isdigit(c) else _tolower(c) - ord("a")
                return self._pending(_State.HEX2)
            if c in _SIMPLE_ESCAPES:
                self._cp = _SIMPLE_ESCAPES[c]
                return self._done()
            if _isoctal(c):
                self._cp = c - 0x30
                return self._pending(_State.OCTAL2)
            if c == ord("M"):
                self._cp = 0o200
                return self._pending(_State.META)
            if c == ord("^"):
                return self._pending(_State.CTRL)
            if c in _HIDDEN:
                self._state = _State.GROUND
                return UnvisResult.NOCHAR, None
            raise self._bad()

        if state is _State.META:
            if c == ord("-"):
                return self._pending(_State.META1)
            if c == ord("^"):
                return self._pending(_State.CTRL)
            raise self._bad()

        if state is _State.META1:
            self._cp |= c
            return self._done()

        if state is _State.CTRL:
            self._cp |= 0o177 if c == ord("?") else c & 0o37
            return self._done()

        if state is _State.OCTAL2:
            if _isoctal(c):
                self._cp = (self._cp << 3) + (c - 0x30)
                return self._pending(_State.OCTAL3)
            return self._done(UnvisResult.VALIDPUSH)

        if state is _State.OCTAL3:
            if _isoctal(c):
                self._cp = (self._cp << 3) + (c - 0x30)
                return self._done()
            return self._done(UnvisResult.VALIDPUSH)

        # HEX2: second hex digit
        lc = _tolower(c)
        if _ishex(lc):
            digit = c - 0x30 if _isdigit(c) else lc - ord("a") + 10
            self._cp = (self._cp << 4) + digit
        return self._done()

    def finish(self) -> Optional[int]:
        """Signal end of input.

        Returns a pending octal byte, ``None`` if nothing was pending, and
        raises :class:`UnvisError` when input ended inside an escape.
        """
        state = self._state
        if state in (_State.OCTAL2, _State.OCTAL3):
            self._state = _State.GROUND
            return self._cp & 0xFF
        if state is _State.GROUND:
            return None
        raise self._bad()


def _as_bytes(src: Source) -> bytes:
    if isinstance(src, str):
        return src.encode("utf-8")
    return bytes(src)


def _decode(src: Source, flags: int) -> Iterator[int]:
    decoder = Unvis(flags)
    for c in _as_bytes(src):
        if c == 0:
            break
        while True:
            result, value = decoder.feed(c)
            if value is not None:
                yield value
            if result is not UnvisResult.VALIDPUSH:
                break
    try:
        last = decoder.finish()
    except UnvisError:
        last = None
    if last is not None:
        yield last


def strunvis(src: Source) -> bytes:
    """Decode *src* up to its first NUL; raise :class:`UnvisError` on bad input."""
    return bytes(_decode(src, 0))


def strnunvis(src: Source, size: int) -> Tuple[bytes, int]:
    """Decode *src* into a buffer of *size* bytes.

    Returns the bytes that fit (at most ``size - 1``) and the full decoded
    length.
    """
    if size < 0:
        raise ValueError(f"size must not be negative, got {size}")
    full = bytes(_decode(src, 0))
    return full[: max(size - 1, 0)], len(full)


def strunvisx(src: Source, flags: int = 0) -> bytes:
    """Decode *src* with the given flags, e.g. ``VisFlags.HTTPSTYLE``."""
    return bytes(_decode(src, flags))