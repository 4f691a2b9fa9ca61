"""The ChaCha20 stream cipher with a 64-bit nonce and 64-bit block counter."""

from __future__ import annotations

import struct
from typing import List, Union

BytesLike = Union[bytes, bytearray, memoryview]

_MASK = 0xFFFFFFFF
_SIGMA = b"expand 32-byte k"
_TAU = b"expand 16-byte k"
_ROUNDS = 20
_BLOCK = 64


def _rotl(v: int, n: int) -> int:
    return ((v << n) & _MASK) | (v >> (32 - n))


def _quarter(x: List[int], a: int, b: int, c: int, d: int) -> None:
    x[a] = (x[a] + x[b]) & _MASK
    x[d] = _rotl(x[d] ^ x[a], 16)
    x[c] = (x[c] + x[d]) & _MASK
    x[b] = _rotl(x[b] ^ x[c], 12)
    x[a] = (x[a] + x[b]) & _MASK
    x[d] = _rotl(x[d] ^ x[a], 8)
    x[c] = (x[c] + x[d]) & _MASK
    x[b] = _rotl(x[b] ^ x[c], 7)


class ChaCha:
    """ChaCha20 keyed with a 16- or 32-byte key and an 8-byte IV.

    Every call consumes whole 64-byte blocks; what is left of the last
    block of a call is discarded, and the next call starts a new block.
    """

    def __init__(self, key: BytesLike, iv: BytesLike = bytes(8)) -> None:
        key = bytes(key)
        iv = bytes(iv)
        if len(key) == 32:
            constants, second = _SIGMA, key[16:]
        elif len(key) == 16:
            constants, second = _TAU, key
        else:
            raise ValueError(f"key must be 16 or 32 bytes, got {len(key)}")
        if len(iv) != 8:
            raise ValueError(f"iv must be 8 bytes, got {len(iv)}")
        self._state = list(
            struct.unpack("<4I", constants)
            + struct.unpack("<4I", key[:16])
            + struct.unpack("<4I", second)
            + (0, 0)
            + struct.unpack("<2I", iv)
        )

    def _block(self) -> bytes:
        x = list(self._state)
        for _ in range(_ROUNDS // 2):
            _quarter(x, 0, 4, 8, 12)
            _quarter(x, 1, 5, 9, 13)
            _quarter(x, 2, 6, 10, 14)
            _quarter(x, 3, 7, 11, 15)
            _quarter(x, 0, 5, 10, 15)
            _quarter(x, 1, 6, 11, 12)
            _quarter(x, 2, 7, 8, 13)
            _quarter(x, 3, 4, 9, 14)
        out = struct.pack("<16I", *((a + b) & _MASK for a, b in zip(x, self._state)))
        self._state[12] = (self._state[12] + 1) & _MASK
        if self._state[12] == 0:
            self._state[13] = (self._state[13] + 1) & _MASK
        return out

    def keystream(self, n: int) -> bytes:
        """Return the next *n* bytes of keystream."""
        if n < 0:
            raise ValueError(f"length must not be negative, got {n}")
        blocks = -(-n // _BLOCK)
        return b"".join(self._block() for _ in range(blocks))[:n]

    def encrypt(self, data: BytesLike) -> bytes:
        """XOR *data* with the keystream; decryption is the same operation."""
        data = bytes(data)
        stream = self.keystream(len(data))
        return bytes(a ^ b for a, b in zip(data, stream))