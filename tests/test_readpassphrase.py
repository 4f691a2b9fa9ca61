import errno
import os
import signal

import pytest

from bsdcompat.readpassphrase import RppFlags, readpassphrase


@pytest.fixture
def feed_stdin():
    saved = os.dup(0)

    def feed(data):
        read_end, write_end = os.pipe()
        os.write(write_end, data)
        os.close(write_end)
        os.dup2(read_end, 0)
        os.close(read_end)

    yield feed
    os.dup2(saved, 0)
    os.close(saved)


def test_zero_buffer_is_rejected():
    with pytest.raises(ValueError):
        readpassphrase("Passphrase: ", 0, RppFlags.STDIN)


def test_reads_line_from_stdin(feed_stdin):
    feed_stdin(b"password\nsecond line\n")
    assert readpassphrase("Passphrase: ", 64, RppFlags.STDIN) == "password"


def test_carriage_return_ends_line(feed_stdin):
    feed_stdin(b"password\rrest")
    assert readpassphrase("", 64, RppFlags.STDIN) == "password"


def test_end_of_input_without_newline(feed_stdin):
    feed_stdin(b"password")
    assert readpassphrase("", 64, RppFlags.STDIN) == "password"


def test_empty_input_gives_empty_string(feed_stdin):
    feed_stdin(b"")
    assert readpassphrase("", 64, RppFlags.STDIN) == ""


def test_truncates_to_buffer_size(feed_stdin):
    feed_stdin(b"password\n")
    result = readpassphrase("", 5, RppFlags.STDIN)
    assert result == "pass"
    assert len(result) == 4


def test_force_upper(feed_stdin):
    feed_stdin(b"password\n")
    flags = RppFlags.STDIN | RppFlags.FORCEUPPER
    assert readpassphrase("", 64, flags) == "PASSWORD"


def test_force_lower(feed_stdin):
    feed_stdin(b"PassWord\n")
    flags = RppFlags.STDIN | RppFlags.FORCELOWER
    assert readpassphrase("", 64, flags) == "password"


def test_force_lower_leaves_digits(feed_stdin):
    feed_stdin(b"Secret42\n")
    flags = RppFlags.STDIN | RppFlags.FORCELOWER
    assert readpassphrase("", 64, flags) == "secret42"


def test_seven_bit_strips_high_bit(feed_stdin):
    feed_stdin(b"\xf0a\n")
    flags = RppFlags.STDIN | RppFlags.SEVENBIT
    assert readpassphrase("", 64, flags) == "pa"


def test_require_tty_with_stdin_fails():
    flags = RppFlags.STDIN | RppFlags.REQUIRE_TTY
    with pytest.raises(OSError) as info:
        readpassphrase("", 64, flags)
    assert info.value.errno == errno.ENOTTY


def test_signal_handlers_are_restored(feed_stdin):
    before = signal.getsignal(signal.SIGINT)
    feed_stdin(b"password\n")
    assert readpassphrase("", 64, RppFlags.STDIN) == "password"
    assert signal.getsignal(signal.SIGINT) is before