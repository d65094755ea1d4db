"""
Command-line interface and high-level generator function.
"""
from __future__ import annotations

import argparse
import logging
import math
import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence

from . import __version__
from .config import CHUNK_SIZE, HashAlgorithm, Preset, RngAlgorithm, ShuffleAlgorithm
from .entropy import derive_master_seed
from .errors import (
    AegisPassError,
    EmptyCharset,
    InputEmpty,
    LengthTooShort,
    TooManyCharsetGroups,
)
from .logging_config import setup_logging
from .mapping import combined_charset, fill_remaining, inject_coverage, shuffle_in_place
from .preset import load_preset
from .rng import create_bit_source

logger = logging.getLogger(__name__)


@dataclass
class GenerationMeta:
    """
    Full result of one derivation. The master seed is deliberately absent.
    """
    # Final password
    password: str

    # Algorithm choices actually used
    hash_algorithm: HashAlgorithm
    rng_algorithm: RngAlgorithm
    shuffle_algorithm: ShuffleAlgorithm

    # Characters contributed by coverage injection vs. the filler
    coverage_count: int
    filler_count: int

    # Strength estimate: length * log2(distinct characters in the union)
    entropy_bits: float


def validate_inputs(secret: str, label: str, preset: Preset) -> None:
    """
    Input-only checks that run before any hashing.

    Raises InputEmpty, LengthTooShort or EmptyCharset (in that order). A
    preset with no groups at all counts as EmptyCharset.
    """
    if not secret or not label:
        raise InputEmpty()
    if preset.length < len(preset.charsets):
        raise LengthTooShort(preset.length, len(preset.charsets))
    if not preset.charsets or any(len(group) == 0 for group in preset.charsets):
        raise EmptyCharset()


def _check_group_budget(seed: bytes, preset: Preset) -> None:
    # Each group consumes its own 4-byte slice of the seed.
    max_groups = len(seed) // CHUNK_SIZE
    if len(preset.charsets) > max_groups:
        raise TooManyCharsetGroups(len(preset.charsets), max_groups)


def derive_with_meta(secret: str, label: str, preset: Preset) -> GenerationMeta:
    """
    Derivation pipeline with metadata:

    - Validate the inputs.
    - Derive the 32-byte master seed.
    - Check the seed can cover every charset group.
    - Pick one coverage character per group from the seed bytes.
    - Seed the bit source and fill the remaining slots.
    - Shuffle everything once.
    """
    validate_inputs(secret, label, preset)

    master_seed = derive_master_seed(secret, label, preset)
    _check_group_budget(master_seed, preset)

    # --- coverage: one character per group ---
    chars: List[str] = inject_coverage(master_seed, preset.charsets)
    coverage_count = len(chars)

    # --- filling and shuffling share one bit source ---
    source = create_bit_source(master_seed, preset.rng_algorithm)
    filler_count = preset.length - coverage_count
    fill_remaining(chars, preset.charsets, filler_count, source)
    shuffle_in_place(chars, source, preset.shuffle_algorithm)

    password = "".join(chars)

    distinct = len(set(combined_charset(preset.charsets)))
    entropy_bits = len(password) * math.log2(distinct) if distinct > 1 else 0.0

    logger.debug(
        "Derived %d-character password (%d coverage, %d filler) with %s/%s",
        len(password),
        coverage_count,
        filler_count,
        preset.hash_algorithm.value,
        preset.rng_algorithm.value,
    )

    return GenerationMeta(
        password=password,
        hash_algorithm=preset.hash_algorithm,
        rng_algorithm=preset.rng_algorithm,
        shuffle_algorithm=preset.shuffle_algorithm,
        coverage_count=coverage_count,
        filler_count=filler_count,
        entropy_bits=entropy_bits,
    )


def derive(secret: str, label: str, preset: Preset) -> str:
    """
    Derive the password for (secret, label, preset).

    Pure and stateless: the same arguments always give the same password.
    Raises an AegisPassError subclass on invalid input or KDF failure.
    """
    return derive_with_meta(secret, label, preset).password


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aegispass",
        description="A deterministic password generator.",
        epilog=(
            "Derives a strong password from your master password, a "
            "distinguish key and a preset file."
        ),
    )
    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE_PATH",
        help="Preset JSON file (default: $AEGISPASS_PRESET or the bundled default.json).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress to stderr.",
    )
    parser.add_argument(
        "--log-file",
        metavar="LOG_PATH",
        help="Append a full debug log (no secrets) to this file.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "password_source",
        help="Your master password, known only to you.",
    )
    parser.add_argument(
        "distinguish_key",
        help="Key that tells sites or apps apart (e.g. 'example.com').",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Entry point for the `aegispass` console script and `run_aegispass.py`.

    Prints the password to stdout and returns 0, or prints the error to
    stderr and returns 1.
    """
    args = build_parser().parse_args(argv)
    try:
        setup_logging(verbose=args.verbose, log_file=args.log_file)
    except OSError as exc:
        print(f"Error: cannot open log file '{args.log_file}': {exc}", file=sys.stderr)
        return 1

    try:
        preset = load_preset(args.config)
        password = derive(args.password_source, args.distinguish_key, preset)
    except AegisPassError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(password)
    return 0


if __name__ == "__main__":
    sys.exit(main())
