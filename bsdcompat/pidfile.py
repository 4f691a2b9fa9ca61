"""Exclusive, locked PID files for daemons.

:func:`pidfile_open` creates and locks the file; :meth:`PidFile.write`
stores the current process ID in it.  A second process that tries to
open the same file gets :class:`PidFileExistsError` carrying the PID of
the running daemon.
"""

from __future__ import annotations

import errno
import fcntl
import os
import re
import time
from typing import Optional, Union

from bsdcompat.progname import getprogname

PathLike = Union[str, "os.PathLike[str]"]

_PID_BUFSIZE = 16
_RETRIES = 3
_RETRY_DELAY = 0.005
_PID_TEXT = re.compile(rb"[ \t\n\v\f\r]*([+-]?[0-9]+)")


def _error(code: int, filename: Optional[str] = None) -> OSError:
    return OSError(code, os.strerror(code), filename)


class PidFileExistsError(FileExistsError):
    """Raised when the PID file is locked by a running process."""

    def __init__(self, path: str, pid: int) -> None:
        super().__init__(errno.EEXIST, f"locked by process {pid}", path)
        self.pid = pid


def _read_pid(path: str) -> int:
    fd = os.open(path, os.O_RDONLY)
    try:
        data = os.read(fd, _PID_BUFSIZE - 1)
    finally:
        os.close(fd)
    if not data:
        raise _error(errno.EAGAIN, path)
    match = _PID_TEXT.fullmatch(data)
    if match is None:
        raise _error(errno.EINVAL, path)
    return int(match.group(1))


def _locked_error(path: str) -> OSError:
    """Describe why *path* could not be locked, naming its owner if possible."""
    attempt = 0
    while True:
        try:
            return PidFileExistsError(path, _read_pid(path))
        except OSError as exc:
            attempt += 1
            if exc.errno != errno.EAGAIN or attempt > _RETRIES:
                return exc
            time.sleep(_RETRY_DELAY)


def _flopen(path: str, mode: int) -> int:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_NONBLOCK, mode)
    try:
        fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        os.ftruncate(fd, 0)
    except BaseException:
        os.close(fd)
        raise
    return fd


class PidFile:
    """An open, locked PID file; obtained from :func:`pidfile_open`."""

    def __init__(self, path: str, fd: int, dev: int, ino: int) -> None:
        self.path = path
        self._fd: Optional[int] = fd
        self._dev = dev
        self._ino = ino

    def _verify(self) -> int:
        if self._fd is None:
            raise _error(errno.EINVAL, self.path)
        st = os.fstat(self._fd)
        if st.st_dev != self._dev or st.st_ino != self._ino:
            raise _error(errno.EINVAL, self.path)
        return self._fd

    def write(self) -> None:
        """Store the current process ID, replacing any earlier contents.

        On a write failure the file is removed before the error is raised.
        """
        fd = self._verify()
        pid = str(os.getpid()).encode("ascii")
        try:
            os.ftruncate(fd, 0)
            written = os.pwrite(fd, pid, 0)
            if written != len(pid):
                raise _error(errno.EIO, self.path)
        except OSError:
            self._remove_quietly()
            raise

    def close(self) -> None:
        """Close the file, releasing the lock but leaving the file in place."""
        fd = self._verify()
        self._fd = None
        os.close(fd)

    def remove(self) -> None:
        """Delete the file and close it, releasing the lock."""
        fd = self._verify()
        self._fd = None
        first_error: Optional[OSError] = None
        try:
            os.unlink(self.path)
        except OSError as exc:
            first_error = exc
        try:
            os.close(fd)
        except OSError as exc:
            first_error = first_error or exc
        if first_error is not None:
            raise first_error

    def _remove_quietly(self) -> None:
        try:
            self.remove()
        except OSError:
            pass

    @property
    def closed(self) -> bool:
        """Whether the file has been closed or removed."""
        return self._fd is None

    def __enter__(self) -> "PidFile":
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._fd is not None:
            self.remove()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r}, closed={self.closed})"


def pidfile_open(path: Optional[PathLike] = None, mode: int = 0o600) -> PidFile:
    """Create and exclusively lock a PID file.

    Without *path*, ``/var/run/<program name>.pid`` is used.  Raises
    :class:`PidFileExistsError` when another process holds the lock and
    its PID can be read, and :class:`OSError` otherwise (``EAGAIN`` when
    the locked file stays empty).
    """
    if path is None:
        path = f"/var/run/{getprogname()}.pid"
    path = os.fspath(path)
    try:
        fd = _flopen(path, mode)
    except BlockingIOError:
        raise _locked_error(path) from None
    try:
        st = os.fstat(fd)
    except OSError:
        try:
            os.unlink(path)
        except OSError:
            pass
        os.close(fd)
        raise
    return PidFile(path, fd, st.st_dev, st.st_ino)