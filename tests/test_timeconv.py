import pytest

from bsdcompat.timeconv import (
    int_to_time,
    long_to_time,
    time32_to_time,
    time64_to_time,
    time_to_int,
    time_to_long,
    time_to_time32,
    time_to_time64,
)

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


@pytest.mark.parametrize("t", [0, 1, -1, 1_000_000_000, INT32_MAX, INT32_MIN])
def test_time32_round_trip(t):
    assert time32_to_time(time_to_time32(t)) == t


@pytest.mark.parametrize("t", [0, -1, 2**40, INT64_MAX, INT64_MIN])
def test_time64_round_trip(t):
    assert time64_to_time(time_to_time64(t)) == t


@pytest.mark.parametrize("t", [0, 12345, -12345, 2**40, INT64_MAX, INT64_MIN])
def test_long_round_trip(t):
    assert long_to_time(time_to_long(t)) == t


@pytest.mark.parametrize("t", [0, 7, -7, INT32_MAX, INT32_MIN])
def test_int_round_trip(t):
    assert int_to_time(time_to_int(t)) == t


def test_time32_wraps_past_2038():
    assert time_to_time32(INT32_MAX + 1) == INT32_MIN


def test_time32_truncates_high_bits():
    assert time_to_time32(2**32 + 5) == 5


def test_time64_wraps_past_limit():
    assert time_to_time64(INT64_MAX + 1) == INT64_MIN


@pytest.mark.parametrize("t", [2**33 + 17, -(2**35) - 3, INT32_MAX + 10])
def test_int_matches_time32(t):
    assert time_to_int(t) == time_to_time32(t)


@pytest.mark.parametrize("t", [2**33 + 17, -(2**35) - 3])
def test_long_matches_time64(t):
    assert time_to_long(t) == time_to_time64(t)


@pytest.mark.parametrize("t", [INT32_MIN, -1, 0, INT32_MAX])
def test_int32_values_unchanged(t):
    assert time32_to_time(t) == t
    assert int_to_time(t) == t


@pytest.mark.parametrize("t", [2**40, -(2**40), INT32_MAX + 1])
def test_wide_values_survive_64_bit(t):
    assert time_to_time64(t) == t
    assert time_to_long(t) == t