"""Render a file mode as the symbolic string used by ``ls -l``."""

from __future__ import annotations

import stat

_TYPE_CHARS = {
    stat.S_IFDIR: "d",
    stat.S_IFCHR: "c",
    stat.S_IFBLK: "b",
    stat.S_IFREG: "-",
    stat.S_IFLNK: "l",
    stat.S_IFSOCK: "s",
    stat.S_IFIFO: "p",
    stat.S_IFWHT: "w",
}

_S_IFMT = 0o170000


def _triplet(mode: int, read: int, write: int, execute: int, special: int,
             special_chars: str) -> str:
    lower, upper = special_chars
    r = "r" if mode & read else "-"
    w = "w" if mode & write else "-"
    has_x = bool(mode & execute)
    if mode & special:
        x = lower if has_x else upper
    else:
        x = "x" if has_x else "-"
    return r + w + x


def strmode(mode: int) -> str:
    """Return the 11-character symbolic form of *mode*.

    The first character is the file type, then three permission triplets,
    then a trailing space.
    """
    type_char = _TYPE_CHARS.get(mode & _S_IFMT, "?")
    return (
        type_char
        + _triplet(mode, stat.S_IRUSR, stat.S_IWUSR, stat.S_IXUSR, stat.S_ISUID, "sS")
        + _triplet(mode, stat.S_IRGRP, stat.S_IWGRP, stat.S_IXGRP, stat.S_ISGID, "sS")
        + _triplet(mode, stat.S_IROTH, stat.S_IWOTH, stat.S_IXOTH, stat.S_ISVTX, "tT")
        + " "
    )