# bsdcompat

Pure-Python versions of BSD C library helpers, for code that needs the same
results those routines give: same truncation rules, same encodings and the
same error cases.

## Installation

```
pip install bsdcompat
```

The package has no runtime dependencies.

## What is included

| Module | Provides |
| --- | --- |
| `bsdcompat.strings` | `strlcpy`, `strlcat`, `wcslcpy`, `wcslcat`, `strnstr` |
| `bsdcompat.strtonum` | `strtonum`, `StrtonumError` |
| `bsdcompat.strmode` | `strmode` |
| `bsdcompat.vis` | `vis`, `strvis`, `strnvis`, `strvisx`, `VisFlags` |
| `bsdcompat.unvis` | `Unvis`, `strunvis`, `strnunvis`, `strunvisx`, `UnvisResult`, `UnvisError` |
| `bsdcompat.stringlist` | `StringList` |
| `bsdcompat.setmode` | `setmode`, `getmode`, `ModeSet` |
| `bsdcompat.timeconv` | `time32_to_time`, `time_to_time32`, `time64_to_time`, `time_to_time64`, `time_to_long`, `long_to_time`, `time_to_int`, `int_to_time` |
| `bsdcompat.radixsort` | `radixsort`, `sradixsort` |
| `bsdcompat.chacha` | `ChaCha` |
| `bsdcompat.progname` | `getprogname`, `setprogname` |
| `bsdcompat.pidfile` | `pidfile_open`, `PidFile`, `PidFileExistsError` |
| `bsdcompat.readpassphrase` | `readpassphrase`, `RppFlags` |

## Examples

Convert permission bits to the string `ls -l` shows:

```python
import stat
from bsdcompat.strmode import strmode

strmode(0o755 | stat.S_IFDIR)   # 'drwxr-xr-x '
```

Parse a bounded integer. Errors are raised as exceptions, not returned as status codes:

```python
from bsdcompat.strtonum import strtonum, StrtonumError

strtonum("42", 0, 100)          # 42
try:
    strtonum("420", 0, 100)
except StrtonumError as exc:
    print(exc)                  # too large
```

Apply a symbolic mode the way `chmod` does:

```python
from bsdcompat.setmode import setmode

modeset = setmode("u+x,go-w", umask=0o022)
modeset.apply(0o666)            # 0o744
```

Encode text so it can be shown safely, then decode it back:

```python
from bsdcompat.vis import strvis, VisFlags
from bsdcompat.unvis import strunvis

encoded = strvis("tab\there", VisFlags.TAB | VisFlags.CSTYLE)
strunvis(encoded)               # 'tab\there'
```

Write a pid file with an exclusive lock:

```python
from bsdcompat.pidfile import pidfile_open, PidFileExistsError

try:
    pf = pidfile_open("/tmp/mydaemon.pid", 0o600)
except PidFileExistsError as exc:
    print("already running as", exc.pid)
else:
    pf.write()
    ...
    pf.remove()
```

## Running the tests

```
pip install -e .[test]
pytest
```