"""
MD5 Message-Digest Engine
==========================

Pure-Python implementation of MD5 exposed through a ``hashlib``-style
object (``update`` / ``digest`` / ``hexdigest`` / ``copy``).

The message is padded with a single ``1`` bit, zeros up to 56 bytes
modulo 64, and the original length in bits as a 64-bit little-endian
integer. Each 64-byte block is read as sixteen little-endian 32-bit words
and mixed into the four-word state over 64 steps (four rounds of sixteen
using F, G, H and I). Python integers are unbounded, so every addition is
masked back to 32 bits.

MD5 is broken for collision resistance. It is provided for compatibility
and fingerprinting, never for protecting secrets.

References:
    - Rivest, R. (1992). RFC 1321: The MD5 Message-Digest Algorithm.
    - Wang, X. & Yu, H. (2005). How to Break MD5 and Other Hash
      Functions. EUROCRYPT 2005.
"""

from __future__ import annotations

import math
import struct

_MASK = 0xFFFFFFFF

_SHIFTS: tuple[int, ...] = (
    (7, 12, 17, 22) * 4
    + (5, 9, 14, 20) * 4
    + (4, 11, 16, 23) * 4
    + (6, 10, 15, 21) * 4
)

# K[i] = floor(2**32 * |sin(i + 1)|)
_CONSTANTS: tuple[int, ...] = tuple(
    int(abs(math.sin(i + 1)) * 2**32) & _MASK for i in range(64)
)

_INITIAL_STATE: tuple[int, int, int, int] = (
    0x67452301,
    0xEFCDAB89,
    0x98BADCFE,
    0x10325476,
)

BLOCK_SIZE = 64
DIGEST_SIZE = 16


def _rotate_left(value: int, amount: int) -> int:
    return ((value << amount) | (value >> (32 - amount))) & _MASK


def _compress(
    state: tuple[int, int, int, int], block: bytes
) -> tuple[int, int, int, int]:
    """Mix one 64-byte block into *state* and return the new state."""
    words = struct.unpack("<16I", block)
    a, b, c, d = state

    for i in range(64):
        if i < 16:
            f = (b & c) | (~b & d)
            g = i
        elif i < 32:
            f = (d & b) | (~d & c)
            g = (5 * i + 1) % 16
        elif i < 48:
            f = b ^ c ^ d
            g = (3 * i + 5) % 16
        else:
            f = c ^ (b | (~d & _MASK))
            g = (7 * i) % 16

        f = (f + a + _CONSTANTS[i] + words[g]) & _MASK
        a, d, c = d, c, b
        b = (b + _rotate_left(f, _SHIFTS[i])) & _MASK

    return (
        (state[0] + a) & _MASK,
        (state[1] + b) & _MASK,
        (state[2] + c) & _MASK,
        (state[3] + d) & _MASK,
    )


class Md5Engine:
    """Incremental MD5 hasher with the ``hashlib`` object interface.

    Usage::

        Md5Engine(b"abc").hexdigest()
        # '900150983cd24fb0d6963f7d28e17f72'

        h = Md5Engine()
        h.update(b"ab")
        h.update(b"c")
        h.hexdigest()
    """

    name = "md5"
    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE

    def __init__(self, data: bytes = b"") -> None:
        self._state = _INITIAL_STATE
        self._buffer = b""
        self._length = 0
        if data:
            self.update(data)

    def update(self, data: bytes) -> None:
        """Feed more bytes into the hash."""
        data = bytes(data)
        self._length += len(data)
        buffer = self._buffer + data

        full = len(buffer) - len(buffer) % BLOCK_SIZE
        state = self._state
        for offset in range(0, full, BLOCK_SIZE):
            state = _compress(state, buffer[offset : offset + BLOCK_SIZE])
        self._state = state
        self._buffer = buffer[full:]

    def digest(self) -> bytes:
        """Return the 16-byte digest of everything fed so far."""
        bit_length = (self._length * 8) & 0xFFFFFFFFFFFFFFFF
        padding_length = (55 - len(self._buffer)) % BLOCK_SIZE
        tail = (
            self._buffer
            + b"\x80"
            + b"\x00" * padding_length
            + struct.pack("<Q", bit_length)
        )

        state = self._state
        for offset in range(0, len(tail), BLOCK_SIZE):
            state = _compress(state, tail[offset : offset + BLOCK_SIZE])
        return struct.pack("<4I", *state)

    def hexdigest(self) -> str:
        """Return the digest as 32 lowercase hex characters."""
        return self.digest().hex()

    def copy(self) -> Md5Engine:
        clone = Md5Engine()
        clone._state = self._state
        clone._buffer = self._buffer
        clone._length = self._length
        return clone


def md5_hexdigest(message: str | bytes) -> str:
    """MD5 of *message* (UTF-8 encoded when given as text) as lowercase hex."""
    if isinstance(message, str):
        message = message.encode("utf-8")
    return Md5Engine(message).hexdigest()
