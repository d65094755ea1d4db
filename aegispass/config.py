"""
Configuration for the AegisPass deterministic password generator.

A preset fixes every algorithm choice and the output shape, so that the
same (secret, label, preset) triple yields the same password on any machine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class HashAlgorithm(str, Enum):
    """Seed-derivation function. Values are the preset JSON spellings."""

    SHA256 = "sha256"
    BLAKE3 = "blake3"
    SHA3_256 = "sha3_256"
    ARGON2ID = "argon2id"
    SCRYPT = "scrypt"


class RngAlgorithm(str, Enum):
    """Deterministic bit source seeded from the master seed."""

    CHACHA20 = "chaCha20"
    HC128 = "hc128"


class ShuffleAlgorithm(str, Enum):
    """Final permutation step. Only the unbiased Fisher-Yates exists."""

    FISHER_YATES = "fisherYates"


# Master seed size in bytes. Every hash choice produces exactly this much.
MASTER_SEED_LEN = 32

# Seed bytes consumed per charset group by coverage injection.
CHUNK_SIZE = 4

# Largest number of charset groups the seed can cover (32 // 4).
MAX_CHARSET_GROUPS = MASTER_SEED_LEN // CHUNK_SIZE

# Prefix of the canonical seed input.
FORMAT_TAG = "AegisPass_V"

# Only preset schema version understood by this release.
SUPPORTED_PRESET_VERSION = 1

# Memory-hard KDF cost parameters. These are part of the output format:
# changing any of them changes every password derived with that hash choice.
ARGON2_MEMORY_COST_KIB = 19456
ARGON2_TIME_COST = 2
ARGON2_PARALLELISM = 1

SCRYPT_N = 2 ** 15
SCRYPT_R = 8
SCRYPT_P = 1


@dataclass(frozen=True)
class Preset:
    # Display label only; never mixed into the seed.
    name: str

    # Schema version, folded into the canonical seed input.
    version: int

    hash_algorithm: HashAlgorithm
    rng_algorithm: RngAlgorithm
    shuffle_algorithm: ShuffleAlgorithm

    # Exact number of characters in the generated password.
    length: int

    # Mixed into the seed; SHA-256 of it is the salt for memory-hard KDFs.
    platform_id: str

    # Ordered character groups. Order decides which seed bytes pick the
    # coverage character for each group; duplicates across groups are kept.
    charsets: Tuple[str, ...]

    def __post_init__(self) -> None:
        # Accept plain spellings ("sha256") as well as enum members.
        object.__setattr__(self, "hash_algorithm", HashAlgorithm(self.hash_algorithm))
        object.__setattr__(self, "rng_algorithm", RngAlgorithm(self.rng_algorithm))
        object.__setattr__(
            self, "shuffle_algorithm", ShuffleAlgorithm(self.shuffle_algorithm)
        )
        # A bare string would otherwise split into one group per character.
        if isinstance(self.charsets, str) or not isinstance(self.charsets, (list, tuple)):
            raise TypeError(
                f"charsets must be a list or tuple of strings, got {type(self.charsets).__name__}"
            )
        if not all(isinstance(group, str) for group in self.charsets):
            raise TypeError("every charset group must be a string")
        object.__setattr__(self, "charsets", tuple(self.charsets))


# Default preset you can import elsewhere (mirrors aegispass/default.json).
DEFAULT_PRESET = Preset(
    name="AegisPass - Default",
    version=SUPPORTED_PRESET_VERSION,
    hash_algorithm=HashAlgorithm.SHA256,
    rng_algorithm=RngAlgorithm.CHACHA20,
    shuffle_algorithm=ShuffleAlgorithm.FISHER_YATES,
    length=16,
    platform_id="aegispass.takuron.com",
    charsets=(
        "0123456789",
        "abcdefghijklmnopqrstuvwxyz",
        "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
        "!@#$%^&*()_+-=",
    ),
)
