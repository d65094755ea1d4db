"""
Mapping logic: turn the master seed and a bit source into password characters.

- Coverage: one character per charset group, picked straight from seed bytes.
- Filling: the remaining slots drawn from the union of all groups.
- Shuffling: one Fisher-Yates pass over the whole buffer.
"""

from __future__ import annotations

from typing import List, Sequence

from .config import CHUNK_SIZE, ShuffleAlgorithm
from .rng import BitSource, random_below


def inject_coverage(seed: bytes, charsets: Sequence[str]) -> List[str]:
    """
    Pick one character from every group, in declared order.

    Group ``i`` reads seed bytes ``[4*i, 4*i + 4)`` as a little-endian
    integer and reduces it with plain modulo against the group size. The
    caller has already checked that the seed holds enough 4-byte slices.
    """
    chars: List[str] = []
    for i, group in enumerate(charsets):
        chunk = seed[i * CHUNK_SIZE : (i + 1) * CHUNK_SIZE]
        index_seed = int.from_bytes(chunk, "little")
        chars.append(group[index_seed % len(group)])
    return chars


def combined_charset(charsets: Sequence[str]) -> str:
    # Concatenation, not a set: a character declared twice is drawn twice as often.
    return "".join(charsets)


def fill_remaining(
    chars: List[str],
    charsets: Sequence[str],
    count: int,
    source: BitSource,
) -> List[str]:
    """Append ``count`` characters sampled with replacement from the union."""
    if count <= 0:
        return chars

    pool = combined_charset(charsets)
    pool_size = len(pool)
    for _ in range(count):
        chars.append(pool[random_below(source, pool_size)])
    return chars


def fisher_yates(chars: List[str], source: BitSource) -> List[str]:
    """Backward Fisher-Yates: for i = len-1 .. 1 swap i with j in [0, i]."""
    for i in range(len(chars) - 1, 0, -1):
        j = random_below(source, i + 1)
        chars[i], chars[j] = chars[j], chars[i]
    return chars


def shuffle_in_place(
    chars: List[str],
    source: BitSource,
    algorithm: ShuffleAlgorithm | str = ShuffleAlgorithm.FISHER_YATES,
) -> List[str]:
    algorithm = ShuffleAlgorithm(algorithm)
    if algorithm is ShuffleAlgorithm.FISHER_YATES:
        return fisher_yates(chars, source)
    raise ValueError(f"Unknown shuffle algorithm: {algorithm!r}")  # pragma: no cover
