import pytest

from bsdcompat.chacha import ChaCha

ZERO_KEY = bytes(32)
ZERO_IV = bytes(8)


def test_known_keystream_for_zero_key_and_iv():
    expected = bytes.fromhex(
        "76b8e0ada0f13d90405d6ae55386bd28bdd219b8a08ded1aa836efcc8b770dc7"
        "da41597c5157488d7724e03fb8d84a376a43b8f41518a11cc387b669b2ee6586"
    )
    assert ChaCha(ZERO_KEY, ZERO_IV).keystream(64) == expected


def test_encrypt_round_trip():
    key = bytes(range(32))
    iv = bytes(range(8))
    message = b"attack at dawn, " * 9 + b"tail"
    ciphertext = ChaCha(key, iv).encrypt(message)
    assert len(ciphertext) == len(message)
    assert ChaCha(key, iv).encrypt(ciphertext) == message


def test_encrypting_zeros_gives_keystream():
    key = bytes(range(16))
    assert ChaCha(key).encrypt(bytes(100)) == ChaCha(key).keystream(100)


def test_whole_blocks_continue_the_stream():
    first = ChaCha(ZERO_KEY)
    joined = first.keystream(64) + first.keystream(64)
    assert joined == ChaCha(ZERO_KEY).keystream(128)


def test_partial_block_is_discarded():
    cipher = ChaCha(ZERO_KEY)
    cipher.keystream(10)
    assert cipher.keystream(64) == ChaCha(ZERO_KEY).keystream(128)[64:]


def test_empty_request_does_not_advance():
    cipher = ChaCha(ZERO_KEY)
    assert cipher.keystream(0) == b""
    assert cipher.keystream(64) == ChaCha(ZERO_KEY).keystream(64)


def test_short_key_uses_its_own_constants():
    short = bytes(range(16))
    stream16 = ChaCha(short).keystream(64)
    stream32 = ChaCha(short + short).keystream(64)
    assert len(stream16) == 64
    assert stream16 != stream32


@pytest.mark.parametrize("key", [b"", bytes(15), bytes(24), bytes(33)])
def test_bad_key_length(key):
    with pytest.raises(ValueError):
        ChaCha(key)


def test_bad_iv_length():
    with pytest.raises(ValueError):
        ChaCha(ZERO_KEY, bytes(12))


def test_negative_length():
    with pytest.raises(ValueError):
        ChaCha(ZERO_KEY).keystream(-1)