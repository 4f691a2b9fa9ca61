"""Reading a passphrase from the terminal with echo turned off."""

from __future__ import annotations

import copy
import enum
import errno
import os
import signal
import termios
import threading
from typing import Callable, Dict, List, Optional, Tuple

_PATH_TTY = "/dev/tty"
_STDIN_FILENO = 0
_STDERR_FILENO = 2
_TCSASOFT = getattr(termios, "TCSASOFT", 0)
_POSIX_VDISABLE = b"\xff"
_LFLAG = 3
_CC = 6


class RppFlags(enum.IntFlag):
    """Options for :func:`readpassphrase`."""

    ECHO_OFF = 0x00
    ECHO_ON = 0x01
    REQUIRE_TTY = 0x02
    FORCELOWER = 0x04
    FORCEUPPER = 0x08
    SEVENBIT = 0x10
    STDIN = 0x20


def _signals(*names: str) -> Tuple[int, ...]:
    return tuple(getattr(signal, name) for name in names if hasattr(signal, name))


_CAUGHT = _signals(
    "SIGALRM", "SIGHUP", "SIGINT", "SIGPIPE", "SIGQUIT",
    "SIGTERM", "SIGTSTP", "SIGTTIN", "SIGTTOU",
)
_JOB_CONTROL = frozenset(_signals("SIGTSTP", "SIGTTIN", "SIGTTOU"))
_BACKGROUND = frozenset(_signals("SIGTTIN", "SIGTTOU"))


class _Interrupted(Exception):
    pass


class _SignalCatcher:
    """Records the last signal received; interrupts a read in progress."""

    def __init__(self) -> None:
        self.signo = 0
        self.reading = False
        self._saved: Dict[int, object] = {}

    def _handler(self, signo: int, frame: object) -> None:
        self.signo = signo
        if self.reading:
            raise _Interrupted()

    def install(self) -> None:
        if threading.current_thread() is not threading.main_thread():
            return
        for signo in _CAUGHT:
            previous = signal.signal(signo, self._handler)
            self._saved[signo] = signal.SIG_DFL if previous is None else previous

    def restore(self) -> None:
        for signo, previous in self._saved.items():
            signal.signal(signo, previous)
        self._saved.clear()


def _transform(ch: int, flags: RppFlags) -> int:
    if flags & RppFlags.SEVENBIT:
        ch &= 0x7F
    if 0x41 <= ch <= 0x5A or 0x61 <= ch <= 0x7A:
        if flags & RppFlags.FORCELOWER:
            ch = ord(chr(ch).lower())
        if flags & RppFlags.FORCEUPPER:
            ch = ord(chr(ch).upper())
    return ch


def _read_line(fd: int, bufsiz: int, flags: RppFlags,
               catcher: _SignalCatcher) -> Tuple[bytes, Optional[OSError]]:
    """Read one line; return what fits in the buffer and any read error."""
    chars = bytearray()
    limit = bufsiz - 1
    catcher.reading = True
    try:
        while True:
            if catcher.signo:
                raise _Interrupted()
            try:
                data = os.read(fd, 1)
            except OSError as exc:
                return bytes(chars), exc
            if not data or data in (b"\n", b"\r"):
                return bytes(chars), None
            if len(chars) < limit:
                chars.append(_transform(data[0], flags))
    except _Interrupted:
        return bytes(chars), OSError(errno.EINTR, os.strerror(errno.EINTR))
    finally:
        catcher.reading = False


def _quiet_write(fd: int, data: bytes) -> None:
    try:
        os.write(fd, data)
    except OSError:
        pass


def _restore_terminal(fd: int, attrs: List) -> None:
    while True:
        try:
            termios.tcsetattr(fd, termios.TCSAFLUSH | _TCSASOFT, attrs)
            return
        except InterruptedError:
            continue
        except termios.error as exc:
            if exc.args and exc.args[0] == errno.EINTR:
                continue
            return


def _attempt(prompt: str, bufsiz: int, flags: RppFlags,
             catcher: _SignalCatcher) -> Tuple[Optional[bytes], Optional[OSError]]:
    tty_fd: Optional[int] = None
    if not flags & RppFlags.STDIN:
        try:
            tty_fd = os.open(_PATH_TTY, os.O_RDWR)
        except OSError:
            tty_fd = None
    if tty_fd is None:
        if flags & RppFlags.REQUIRE_TTY:
            raise OSError(errno.ENOTTY, os.strerror(errno.ENOTTY))
        input_fd, output_fd = _STDIN_FILENO, _STDERR_FILENO
    else:
        input_fd = output_fd = tty_fd

    catcher.install()
    old_attrs: Optional[List] = None
    new_attrs: Optional[List] = None
    try:
        if tty_fd is not None:
            try:
                old_attrs = termios.tcgetattr(input_fd)
            except termios.error:
                old_attrs = None
        echo = True
        if old_attrs is not None:
            new_attrs = copy.deepcopy(old_attrs)
            if not flags & RppFlags.ECHO_ON:
                new_attrs[_LFLAG] &= ~(termios.ECHO | termios.ECHONL)
            vstatus = getattr(termios, "VSTATUS", None)
            if vstatus is not None and new_attrs[_CC][vstatus] != _POSIX_VDISABLE:
                new_attrs[_CC][vstatus] = _POSIX_VDISABLE
            try:
                termios.tcsetattr(input_fd, termios.TCSAFLUSH | _TCSASOFT, new_attrs)
            except termios.error:
                pass
            echo = bool(new_attrs[_LFLAG] & termios.ECHO)

        text: Optional[bytes] = None
        error: Optional[OSError] = OSError(errno.EINTR, os.strerror(errno.EINTR))
        if catcher.signo not in _BACKGROUND:
            if not flags & RppFlags.STDIN:
                _quiet_write(output_fd, prompt.encode("utf-8"))
            text, error = _read_line(input_fd, bufsiz, flags, catcher)
            if not echo:
                _quiet_write(output_fd, b"\n")
    finally:
        if old_attrs is not None and new_attrs != old_attrs:
            _restore_terminal(input_fd, old_attrs)
        catcher.restore()
        if tty_fd is not None:
            os.close(tty_fd)
    return (None, error) if error is not None else (text, None)


def readpassphrase(prompt: str, bufsiz: int, flags: int = RppFlags.ECHO_OFF) -> str:
    """Print *prompt* and read a line from the terminal.

    At most ``bufsiz - 1`` characters are kept; the rest of the line is
    read and dropped.  Input comes from ``/dev/tty`` when it can be opened,
    otherwise from standard input with the prompt suppressed.  Signals
    received while reading are delivered again once the terminal is
    restored.  Raises :class:`ValueError` for a zero *bufsiz* and
    :class:`OSError` when reading fails or is interrupted.
    """
    flags = RppFlags(flags)
    if bufsiz <= 0:
        raise ValueError(f"buffer size must be positive, got {bufsiz}")
    while True:
        catcher = _SignalCatcher()
        text, error = _attempt(prompt, bufsiz, flags, catcher)
        if catcher.signo:
            os.kill(os.getpid(), catcher.signo)
            if catcher.signo in _JOB_CONTROL:
                continue
        if error is not None:
            raise error
        return text.decode("utf-8", errors="surrogateescape")