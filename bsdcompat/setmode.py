"""Parsing of chmod(1)-style mode strings and applying them to file modes.

:func:`setmode` compiles an absolute (octal) or symbolic mode such as
``"u+x,go-w"`` into a :class:`ModeSet`, which :meth:`ModeSet.apply` (or
:func:`getmode`) then applies to an existing mode.
"""

from __future__ import annotations

import os
import re
import stat
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

S_ISTXT = stat.S_ISVTX
STANDARD_BITS = (
    stat.S_ISUID | stat.S_ISGID | stat.S_IRWXU | stat.S_IRWXG | stat.S_IRWXO
)

_MODE_T_MASK = 0xFFFFFFFF

_CMD2_CLR = 0x01
_CMD2_SET = 0x02
_CMD2_GBITS = 0x04
_CMD2_OBITS = 0x08
_CMD2_UBITS = 0x10

_OCTAL = re.compile(r"[0-7]+")
_DIGITS = frozenset("0123456789")

_WHO_BITS = {
    "a": STANDARD_BITS,
    "u": stat.S_ISUID | stat.S_IRWXU,
    "g": stat.S_ISGID | stat.S_IRWXG,
    "o": stat.S_IRWXO,
}
_OPERATORS = ("+", "-", "=")
_COPY_CMDS = ("u", "g", "o")
_BIT_CMDS = ("+", "-", "X")

_ALL_READ = stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH
_ALL_WRITE = stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH
_ALL_EXEC = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


@dataclass(frozen=True)
class _BitCmd:
    cmd: str
    cmd2: int
    bits: int


@dataclass(frozen=True)
class ModeSet:
    """A compiled mode string: a sequence of bit operations."""

    commands: Tuple[_BitCmd, ...]

    def apply(self, omode: int) -> int:
        """Return the mode that results from applying this set to *omode*."""
        newmode = omode
        for command in self.commands:
            cmd, cmd2, bits = command.cmd, command.cmd2, command.bits
            if cmd in _COPY_CMDS:
                if cmd == "u":
                    value = (newmode & stat.S_IRWXU) >> 6
                elif cmd == "g":
                    value = (newmode & stat.S_IRWXG) >> 3
                else:
                    value = newmode & stat.S_IRWXO
                if cmd2 & _CMD2_CLR:
                    clrval = stat.S_IRWXO if cmd2 & _CMD2_SET else value
                    if cmd2 & _CMD2_UBITS:
                        newmode &= ~((clrval << 6) & bits)
                    if cmd2 & _CMD2_GBITS:
                        newmode &= ~((clrval << 3) & bits)
                    if cmd2 & _CMD2_OBITS:
                        newmode &= ~(clrval & bits)
                if cmd2 & _CMD2_SET:
                    if cmd2 & _CMD2_UBITS:
                        newmode |= (value << 6) & bits
                    if cmd2 & _CMD2_GBITS:
                        newmode |= (value << 3) & bits
                    if cmd2 & _CMD2_OBITS:
                        newmode |= value & bits
            elif cmd == "+":
                newmode |= bits
            elif cmd == "-":
                newmode &= ~bits
            elif cmd == "X":
                if omode & (stat.S_IFDIR | _ALL_EXEC):
                    newmode |= bits
        return newmode


def getmode(modeset: ModeSet, omode: int) -> int:
    """Apply *modeset* to *omode* and return the new mode."""
    return modeset.apply(omode)


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _addcmd(op: str, who: int, oparg: Union[int, str], mask: int) -> List[_BitCmd]:
    if op == "=":
        return [
            _BitCmd("-", 0, who if who else STANDARD_BITS),
            _BitCmd("+", 0, (who if who else mask) & oparg),
        ]
    if op in _BIT_CMDS:
        return [_BitCmd(op, 0, (who if who else mask) & oparg)]
    # Copy commands: 'u', 'g' or 'o'.
    if who:
        cmd2 = (
            (_CMD2_UBITS if who & stat.S_IRUSR else 0)
            | (_CMD2_GBITS if who & stat.S_IRGRP else 0)
            | (_CMD2_OBITS if who & stat.S_IROTH else 0)
        )
        bits = _MODE_T_MASK
    else:
        cmd2 = _CMD2_UBITS | _CMD2_GBITS | _CMD2_OBITS
        bits = mask
    if oparg == "+":
        cmd2 |= _CMD2_SET
    elif oparg == "-":
        cmd2 |= _CMD2_CLR
    elif oparg == "=":
        cmd2 |= _CMD2_SET | _CMD2_CLR
    return [_BitCmd(op, cmd2, bits)]


def _compress(commands: List[_BitCmd]) -> Tuple[_BitCmd, ...]:
    """Merge each run of '+', '-' and 'X' commands into at most one of each."""
    out: List[_BitCmd] = []
    index = 0
    while index < len(commands):
        if commands[index].cmd not in _BIT_CMDS:
            out.append(commands[index])
            index += 1
            continue
        setbits = clrbits = xbits = 0
        while index < len(commands) and commands[index].cmd in _BIT_CMDS:
            command = commands[index]
            if command.cmd == "-":
                clrbits |= command.bits
                setbits &= ~command.bits
                xbits &= ~command.bits
            elif command.cmd == "+":
                setbits |= command.bits
                clrbits &= ~command.bits
                xbits &= ~command.bits
            else:
                xbits |= command.bits & ~setbits
            index += 1
        if clrbits:
            out.append(_BitCmd("-", 0, clrbits))
        if setbits:
            out.append(_BitCmd("+", 0, setbits))
        if xbits:
            out.append(_BitCmd("X", 0, xbits))
    return tuple(out)


def setmode(mode_str: str, umask: Optional[int] = None) -> ModeSet:
    """Compile *mode_str* into a :class:`ModeSet`.

    *umask* limits the bits set by clauses that name no user class; when
    it is ``None`` the process umask is used.  Raises :class:`ValueError`
    for a malformed mode string.
    """
    if not mode_str:
        raise ValueError("empty mode string")
    if umask is None:
        umask = _current_umask()
    mask = ~umask & _MODE_T_MASK

    if mode_str[0] in _DIGITS:
        if not _OCTAL.fullmatch(mode_str):
            raise ValueError(f"invalid octal mode {mode_str!r}")
        perm = int(mode_str, 8)
        if perm & ~(STANDARD_BITS | S_ISTXT):
            raise ValueError(f"mode {mode_str!r} has bits outside the permission set")
        return ModeSet(tuple(_addcmd("=", STANDARD_BITS | S_ISTXT, perm, mask)))

    def at(index: int) -> str:
        return mode_str[index] if index < len(mode_str) else ""

    commands: List[_BitCmd] = []

    def add(op: str, who: int, oparg: Union[int, str]) -> None:
        commands.extend(_addcmd(op, who, oparg, mask))

    pos = 0
    equalopdone = False
    while True:
        who = 0
        while at(pos) in _WHO_BITS:
            who |= _WHO_BITS[at(pos)]
            pos += 1

        while True:
            op = at(pos)
            pos += 1
            if op not in _OPERATORS:
                raise ValueError(f"invalid mode string {mode_str!r}")
            if op == "=":
                equalopdone = False

            who &= ~S_ISTXT
            perm = 0
            perm_x_bits = 0
            while True:
                c = at(pos)
                if c == "r":
                    perm |= _ALL_READ
                elif c == "s":
                    if who == 0 or who & ~stat.S_IRWXO:
                        perm |= stat.S_ISUID | stat.S_ISGID
                elif c == "t":
                    if who == 0 or who & ~stat.S_IRWXO:
                        who |= S_ISTXT
                        perm |= S_ISTXT
                elif c == "w":
                    perm |= _ALL_WRITE
                elif c == "X":
                    perm_x_bits = _ALL_EXEC
                elif c == "x":
                    perm |= _ALL_EXEC
                elif c in _COPY_CMDS and c:
                    if perm:
                        add(op, who, perm)
                        perm = 0
                    if op == "=":
                        equalopdone = True
                    if op == "+" and perm_x_bits:
                        add("X", who, perm_x_bits)
                        perm_x_bits = 0
                    add(c, who, op)
                else:
                    if perm or (op == "=" and not equalopdone):
                        if op == "=":
                            equalopdone = True
                        add(op, who, perm)
                        perm = 0
                    if perm_x_bits:
                        add("X", who, perm_x_bits)
                        perm_x_bits = 0
                    break
                pos += 1

            if at(pos) in ("", ","):
                break

        if at(pos) == "":
            break
        pos += 1

    return ModeSet(_compress(commands))