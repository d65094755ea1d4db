"""
Seed derivation:
Folds the secret, the label and the preset fields into one canonical string
and condenses it into the 32-byte master seed with the preset's hash choice.
"""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Sequence

import blake3
from argon2.exceptions import HashingError
from argon2.low_level import Type as Argon2Type, hash_secret_raw
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from .config import (
    ARGON2_MEMORY_COST_KIB,
    ARGON2_PARALLELISM,
    ARGON2_TIME_COST,
    FORMAT_TAG,
    MASTER_SEED_LEN,
    SCRYPT_N,
    SCRYPT_P,
    SCRYPT_R,
    HashAlgorithm,
    Preset,
)
from .errors import HashingFailed

logger = logging.getLogger(__name__)


def charsets_json(charsets: Sequence[str]) -> str:
    """
    Compact JSON array of the charset groups.

    No whitespace, non-ASCII characters kept verbatim, standard escaping
    for quotes, backslashes and control characters.
    """
    return json.dumps(list(charsets), ensure_ascii=False, separators=(",", ":"))


def canonical_input(secret: str, label: str, preset: Preset) -> bytes:
    """
    Build the canonical byte string every hash choice consumes.

    Field order and separators are part of the output format; any change
    here changes every previously generated password.
    """
    text = "{tag}{version}:{platform}:{length}:{secret}:{label}:{charsets}".format(
        tag=FORMAT_TAG,
        version=preset.version,
        platform=preset.platform_id,
        length=preset.length,
        secret=secret,
        label=label,
        charsets=charsets_json(preset.charsets),
    )
    return text.encode("utf-8")


def platform_salt(platform_id: str) -> bytes:
    """32-byte salt for the memory-hard KDFs: SHA-256 of the platform id."""
    return hashlib.sha256(platform_id.encode("utf-8")).digest()


def _argon2id(data: bytes, salt: bytes) -> bytes:
    try:
        return hash_secret_raw(
            secret=data,
            salt=salt,
            time_cost=ARGON2_TIME_COST,
            memory_cost=ARGON2_MEMORY_COST_KIB,
            parallelism=ARGON2_PARALLELISM,
            hash_len=MASTER_SEED_LEN,
            type=Argon2Type.ID,
            version=19,
        )
    except HashingError as exc:
        raise HashingFailed(f"argon2id: {exc}") from exc


def _scrypt(data: bytes, salt: bytes) -> bytes:
    try:
        kdf = Scrypt(salt=salt, length=MASTER_SEED_LEN, n=SCRYPT_N, r=SCRYPT_R, p=SCRYPT_P)
        return kdf.derive(data)
    except (UnsupportedAlgorithm, ValueError, MemoryError) as exc:
        raise HashingFailed(f"scrypt: {exc}") from exc


def derive_master_seed(secret: str, label: str, preset: Preset) -> bytes:
    """
    Map (secret, label, preset) to the 32-byte master seed.

    Fast digests hash the canonical input directly. Memory-hard KDFs run
    over the same input salted with SHA-256(platform_id), with fixed cost
    parameters so that a preset derives the same seed on every machine.

    Raises HashingFailed if a KDF fails.
    """
    data = canonical_input(secret, label, preset)
    algorithm = HashAlgorithm(preset.hash_algorithm)
    logger.debug("Deriving master seed with %s", algorithm.value)

    if algorithm is HashAlgorithm.SHA256:
        seed = hashlib.sha256(data).digest()
    elif algorithm is HashAlgorithm.SHA3_256:
        seed = hashlib.sha3_256(data).digest()
    elif algorithm is HashAlgorithm.BLAKE3:
        seed = blake3.blake3(data).digest()
    elif algorithm is HashAlgorithm.ARGON2ID:
        seed = _argon2id(data, platform_salt(preset.platform_id))
    elif algorithm is HashAlgorithm.SCRYPT:
        seed = _scrypt(data, platform_salt(preset.platform_id))
    else:  # pragma: no cover - closed enum
        raise ValueError(f"Unknown hash algorithm: {algorithm!r}")

    if len(seed) != MASTER_SEED_LEN:
        raise HashingFailed(
            f"{algorithm.value} produced {len(seed)} bytes, expected {MASTER_SEED_LEN}"
        )
    return seed
