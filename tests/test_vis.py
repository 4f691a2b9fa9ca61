import pytest

from bsdcompat.unvis import strunvis
from bsdcompat.vis import VisFlags, strnvis, strvis, strvisx, vis

ALL_BYTES = bytes(range(256))

ROUND_TRIP_FLAGS = [
    VisFlags(0),
    VisFlags.CSTYLE,
    VisFlags.OCTAL,
    VisFlags.WHITE,
    VisFlags.SAFE,
    VisFlags.GLOB,
    VisFlags.CSTYLE | VisFlags.WHITE,
    VisFlags.OCTAL | VisFlags.GLOB,
]


def test_graphic_text_is_unchanged():
    assert strvis(b"hello, world") == "hello, world"


def test_backslash_is_doubled():
    assert strvis(b"a\\b") == "a\\\\b"


def test_noslash_keeps_single_backslash():
    assert strvis(b"a\\b", VisFlags.NOSLASH) == "a\\b"


def test_cstyle_newline():
    assert vis("\n", VisFlags.CSTYLE | VisFlags.NL) == "\\n"


def test_httpstyle_space():
    assert vis(" ", VisFlags.HTTPSTYLE) == "%20"


def test_vis_accepts_int_str_and_bytes():
    assert vis(ord("a")) == vis("a") == vis(b"a") == "a"


def test_vis_rejects_multiple_characters():
    with pytest.raises(ValueError):
        vis("ab")


@pytest.mark.parametrize("flags", ROUND_TRIP_FLAGS)
def test_round_trip_all_bytes(flags):
    encoded = strvisx(ALL_BYTES, len(ALL_BYTES), flags)
    assert strunvis(encoded) == ALL_BYTES


@pytest.mark.parametrize("flags", ROUND_TRIP_FLAGS)
def test_output_is_ascii_without_nul(flags):
    encoded = strvisx(ALL_BYTES, len(ALL_BYTES), flags)
    assert encoded.isascii()
    assert "\0" not in encoded


def test_cstyle_nul_before_octal_digit_round_trips():
    data = b"\x000\x00x\x007"
    encoded = strvisx(data, len(data), VisFlags.CSTYLE)
    assert strunvis(encoded) == data


def test_strvis_stops_at_nul():
    assert strvis(b"ab\0cd") == strvis(b"ab")


def test_strvisx_encodes_only_length_bytes():
    assert strvisx(b"abc", 2) == strvis(b"ab")


def test_strvisx_length_too_long():
    with pytest.raises(ValueError):
        strvisx(b"abc", 4)


def test_glob_characters_are_encoded():
    encoded = strvis(b"*?[#", VisFlags.GLOB)
    assert not set(encoded) & set("*?[#")
    assert strunvis(encoded) == b"*?[#"


def test_strnvis_safe_glob_keeps_glob_characters():
    text, needed = strnvis(b"*", 10, VisFlags.SAFE | VisFlags.GLOB)
    assert text == "*"
    assert needed == 1


def test_strnvis_negative_size():
    with pytest.raises(ValueError):
        strnvis(b"abc", -1)