"""The short name of the running program."""

from __future__ import annotations

import sys
from typing import Optional

_progname: Optional[str] = None


def getprogname() -> Optional[str]:
    """Return the program name.

    Until :func:`setprogname` is called, the name is taken from the last
    path component of ``sys.argv[0]``; ``None`` is returned if there is
    nothing to take it from.
    """
    if _progname is None and sys.argv and sys.argv[0]:
        setprogname(sys.argv[0])
    return _progname


def setprogname(progname: str) -> None:
    """Set the program name to the last path component of *progname*."""
    global _progname
    _progname = progname.rpartition("/")[2]