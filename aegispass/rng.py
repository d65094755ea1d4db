"""
Deterministic bit sources and the unbiased range sampler.

A bit source turns the 32-byte master seed into an unbounded, repeatable
stream of 32-bit words. The filler and the shuffler only ever call
``next_u32()``; which generator sits behind it is the preset's choice.
"""

from __future__ import annotations

import struct

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

from .config import MASTER_SEED_LEN, RngAlgorithm

MAX32 = 0xFFFFFFFF


class BitSource:
    """
    Produces the next 32-bit word of a seeded, deterministic stream.
    """

    def next_u32(self) -> int:
        raise NotImplementedError


def _check_seed(seed: bytes) -> bytes:
    seed = bytes(seed)
    if len(seed) != MASTER_SEED_LEN:
        raise ValueError(
            f"Bit source seed must be {MASTER_SEED_LEN} bytes, got {len(seed)}"
        )
    return seed


class ChaCha20Source(BitSource):
    """
    ChaCha20 keystream read as little-endian 32-bit words.

    Key = the seed, nonce = 0, block counter starting at 0: the same word
    sequence as a ChaCha20Rng seeded with ``from_seed``.
    """

    # Keystream bytes produced per refill (four 64-byte blocks).
    BUFFER_BYTES = 256

    def __init__(self, seed: bytes) -> None:
        key = _check_seed(seed)
        cipher = Cipher(algorithms.ChaCha20(key, b"\x00" * 16), mode=None)
        self._encryptor = cipher.encryptor()
        self._words: tuple[int, ...] = ()
        self._pos = 0

    def _refill(self) -> None:
        # Encrypting zeros yields the raw keystream.
        block = self._encryptor.update(b"\x00" * self.BUFFER_BYTES)
        self._words = struct.unpack(f"<{self.BUFFER_BYTES // 4}I", block)
        self._pos = 0

    def next_u32(self) -> int:
        if self._pos >= len(self._words):
            self._refill()
        word = self._words[self._pos]
        self._pos += 1
        return word


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & MAX32


def _rotl(x: int, n: int) -> int:
    return ((x << n) | (x >> (32 - n))) & MAX32


def _f1(x: int) -> int:
    return _rotr(x, 7) ^ _rotr(x, 18) ^ (x >> 3)


def _f2(x: int) -> int:
    return _rotr(x, 17) ^ _rotr(x, 19) ^ (x >> 10)


class Hc128Source(BitSource):
    """
    HC-128 keystream words.

    Key = seed[0:16], IV = seed[16:32], each read as four little-endian
    words: the same word sequence as an Hc128Rng seeded with ``from_seed``.
    """

    def __init__(self, seed: bytes) -> None:
        words = struct.unpack("<8I", _check_seed(seed))
        key, iv = words[:4], words[4:]

        # Expand key and IV into the 1280-word W array; P and Q are its tail.
        w = list(key) + list(key) + list(iv) + list(iv) + [0] * (1280 - 16)
        for i in range(16, 1280):
            w[i] = (_f2(w[i - 2]) + w[i - 7] + _f1(w[i - 15]) + w[i - 16] + i) & MAX32
        self._p = w[256:768]
        self._q = w[768:1280]
        self._counter = 0

        # 1024 warm-up steps; each output replaces the table entry it updated.
        for _ in range(1024):
            j = self._counter & 0x1FF
            table = self._p if self._counter < 512 else self._q
            table[j] = self._step()

    def _step(self) -> int:
        i = self._counter
        self._counter = (i + 1) & 0x3FF
        j = i & 0x1FF

        if i < 512:
            p, q = self._p, self._q
            p[j] = (
                p[j]
                + (_rotr(p[(j - 3) & 0x1FF], 10) ^ _rotr(p[(j + 1) & 0x1FF], 23))
                + _rotr(p[(j - 10) & 0x1FF], 8)
            ) & MAX32
            x = p[(j - 12) & 0x1FF]
            h = (q[x & 0xFF] + q[256 + ((x >> 16) & 0xFF)]) & MAX32
            return h ^ p[j]

        p, q = self._p, self._q
        q[j] = (
            q[j]
            + (_rotl(q[(j - 3) & 0x1FF], 10) ^ _rotl(q[(j + 1) & 0x1FF], 23))
            + _rotl(q[(j - 10) & 0x1FF], 8)
        ) & MAX32
        x = q[(j - 12) & 0x1FF]
        h = (p[x & 0xFF] + p[256 + ((x >> 16) & 0xFF)]) & MAX32
        return h ^ q[j]

    def next_u32(self) -> int:
        return self._step()


def create_bit_source(seed: bytes, algorithm: RngAlgorithm | str) -> BitSource:
    """Seed the preset's generator directly from the master seed."""
    algorithm = RngAlgorithm(algorithm)
    if algorithm is RngAlgorithm.CHACHA20:
        return ChaCha20Source(seed)
    if algorithm is RngAlgorithm.HC128:
        return Hc128Source(seed)
    raise ValueError(f"Unknown RNG algorithm: {algorithm!r}")  # pragma: no cover


def random_below(source: BitSource, n: int) -> int:
    """
    Uniform integer in [0, n) drawn from 32-bit words without modulo bias.

    Words at or above ``zone`` fall in the uneven tail of the 32-bit range
    and are discarded. The zone formula (and therefore which words get
    discarded) is part of the output format.
    """
    if n < 1 or n > MAX32 + 1:
        raise ValueError(f"Range bound must be in [1, 2**32], got {n}")
    if n == MAX32 + 1:
        return source.next_u32()

    zone = MAX32 - (MAX32 % n)
    while True:
        value = source.next_u32()
        if value < zone:
            return value % n
