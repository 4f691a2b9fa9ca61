"""Conversion of time values between fixed-width integer representations.

The native time type is taken to be 64 bits wide, ``long`` 64 bits and
``int`` 32 bits; narrowing conversions wrap the way a C cast does.
"""

from __future__ import annotations


def _wrap(value: int, bits: int) -> int:
    """Reduce *value* to a signed integer of *bits* bits, two's complement."""
    span = 1 << bits
    value &= span - 1
    return value - span if value >= span >> 1 else value


def time32_to_time(t32: int) -> int:
    """Convert a 32-bit time value to the native time type."""
    return _wrap(t32, 32)


def time_to_time32(t: int) -> int:
    """Truncate a native time value to 32 bits."""
    return _wrap(t, 32)


def time64_to_time(t64: int) -> int:
    """Convert a 64-bit time value to the native time type."""
    return _wrap(t64, 64)


def time_to_time64(t: int) -> int:
    """Convert a native time value to 64 bits."""
    return _wrap(t, 64)


def time_to_long(t: int) -> int:
    """Convert a native time value to a ``long``."""
    return time_to_time64(t)


def long_to_time(tlong: int) -> int:
    """Convert a ``long`` to the native time type."""
    return _wrap(tlong, 64)


def time_to_int(t: int) -> int:
    """Convert a native time value to an ``int``."""
    return _wrap(t, 32)


def int_to_time(tint: int) -> int:
    """Convert an ``int`` to the native time type."""
    return time32_to_time(tint)