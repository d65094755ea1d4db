from collections import Counter

import pytest

from aegispass.config import RngAlgorithm
from aegispass.rng import (
    MAX32,
    ChaCha20Source,
    Hc128Source,
    create_bit_source,
    random_below,
)

from conftest import SequenceSource


def test_chacha20_zero_seed_known_answer():
    src = ChaCha20Source(bytes(32))
    words = [src.next_u32() for _ in range(4)]
    assert words == [0xADE0B876, 0x903DF1A0, 0xE56A5D40, 0x28BD8653]


def test_hc128_zero_seed_known_answer():
    src = Hc128Source(bytes(32))
    words = [src.next_u32() for _ in range(8)]
    assert words == [
        0x73150082,
        0x3BFD03A0,
        0xFB2FD77F,
        0xAA63AF0E,
        0xDE122FC6,
        0xA7DC29B6,
        0x62A68527,
        0x8B75EC68,
    ]


def test_chacha20_stream_continues_across_refills():
    a = ChaCha20Source(bytes(range(32)))
    b = ChaCha20Source(bytes(range(32)))
    first = [a.next_u32() for _ in range(200)]
    assert first == [b.next_u32() for _ in range(200)]
    # 200 words span more than one 64-word refill; no word repeats the start.
    assert first[64:68] != first[0:4]


@pytest.mark.parametrize("algorithm", list(RngAlgorithm))
def test_create_bit_source_is_repeatable(algorithm):
    seed = bytes(range(32))
    a = create_bit_source(seed, algorithm)
    b = create_bit_source(seed, algorithm.value)
    assert [a.next_u32() for _ in range(50)] == [b.next_u32() for _ in range(50)]


def test_generators_differ_for_same_seed():
    seed = bytes(range(32))
    chacha = create_bit_source(seed, RngAlgorithm.CHACHA20)
    hc = create_bit_source(seed, RngAlgorithm.HC128)
    assert [chacha.next_u32() for _ in range(8)] != [hc.next_u32() for _ in range(8)]


@pytest.mark.parametrize("bad", [b"", bytes(16), bytes(33)])
def test_bit_source_rejects_wrong_seed_size(bad):
    with pytest.raises(ValueError):
        ChaCha20Source(bad)
    with pytest.raises(ValueError):
        Hc128Source(bad)


def test_random_below_rejects_tail_words():
    # n = 2 -> zone = MAX32 - 1; both MAX32 - 1 and MAX32 are discarded.
    src = SequenceSource([MAX32, MAX32 - 1, 5])
    assert random_below(src, 2) == 1


def test_random_below_bound_one_is_always_zero():
    assert random_below(SequenceSource([12345]), 1) == 0
    # MAX32 is outside the zone even for n = 1.
    assert random_below(SequenceSource([MAX32, 7]), 1) == 0


def test_random_below_full_range_returns_word():
    assert random_below(SequenceSource([MAX32]), 2 ** 32) == MAX32


@pytest.mark.parametrize("bad", [0, -1, 2 ** 32 + 1])
def test_random_below_rejects_bad_bound(bad):
    with pytest.raises(ValueError):
        random_below(SequenceSource([0]), bad)


def test_random_below_zero_seed_chacha_draws():
    src = ChaCha20Source(bytes(32))
    assert [random_below(src, 3) for _ in range(5)] == [0, 0, 0, 2, 2]


def test_random_below_is_uniform_for_small_bound():
    src = ChaCha20Source(bytes(range(32)))
    samples = 30_000
    counts = Counter(random_below(src, 3) for _ in range(samples))

    assert set(counts) == {0, 1, 2}
    expected = samples / 3
    # Standard deviation is about 82; 500 is more than 6 sigma.
    for value in range(3):
        assert abs(counts[value] - expected) < 500
