"""Reliable conversion of a decimal string to a bounded integer."""

from __future__ import annotations

import errno
import re

LLONG_MIN = -(2**63)
LLONG_MAX = 2**63 - 1

_NUMBER = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


class StrtonumError(ValueError):
    """Raised when a string cannot be converted.

    ``errstr`` is one of ``"invalid"``, ``"too small"`` or ``"too large"``;
    ``errno`` is the matching error number.
    """

    def __init__(self, errstr: str, code: int) -> None:
        super().__init__(errstr)
        self.errstr = errstr
        self.errno = code


def strtonum(numstr: str, minval: int, maxval: int) -> int:
    """Convert *numstr* to an integer within ``[minval, maxval]``.

    The string may carry leading whitespace and a sign, and must hold
    nothing else but decimal digits.  Values are limited to the range of
    a 64-bit signed integer.
    """
    if minval > maxval:
        raise StrtonumError("invalid", errno.EINVAL)
    match = _NUMBER.fullmatch(numstr)
    if match is None:
        raise StrtonumError("invalid", errno.EINVAL)
    value = int(match.group(1))
    if value < LLONG_MIN or value < minval:
        raise StrtonumError("too small", errno.ERANGE)
    if value > LLONG_MAX or value > maxval:
        raise StrtonumError("too large", errno.ERANGE)
    return value