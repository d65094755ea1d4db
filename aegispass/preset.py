"""
Preset files: locate, read and decode the JSON presets the CLI feeds to
``derive``.

Preset file format (JSON text, camelCase keys, unknown keys ignored):
{
  "name": "AegisPass - Default",
  "version": 1,
  "hashAlgorithm": "sha256",
  "rngAlgorithm": "chaCha20",
  "shuffleAlgorithm": "fisherYates",
  "length": 16,
  "platformId": "aegispass.takuron.com",
  "charsets": ["0123456789", "abcdefghijklmnopqrstuvwxyz", ...]
}
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping

from .config import (
    SUPPORTED_PRESET_VERSION,
    HashAlgorithm,
    Preset,
    RngAlgorithm,
    ShuffleAlgorithm,
)
from .errors import PresetDecodeFailed, UnsupportedPresetVersion

logger = logging.getLogger(__name__)

PRESET_ENV_VAR = "AEGISPASS_PRESET"
DEFAULT_PRESET_FILE = Path(__file__).resolve().parent / "default.json"


def default_preset_path() -> Path:
    """
    Preset used when no --config is given: $AEGISPASS_PRESET if set,
    otherwise the default.json shipped with the package.
    """
    override = os.getenv(PRESET_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_PRESET_FILE


def _require(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise PresetDecodeFailed(f"missing field `{key}`") from None


def _require_str(data: Mapping[str, Any], key: str) -> str:
    value = _require(data, key)
    if not isinstance(value, str):
        raise PresetDecodeFailed(f"field `{key}` must be a string")
    return value


def _require_int(data: Mapping[str, Any], key: str, *, minimum: int = 0) -> int:
    value = _require(data, key)
    # bool is an int subclass; a JSON true/false is not a number here.
    if isinstance(value, bool) or not isinstance(value, int):
        raise PresetDecodeFailed(f"field `{key}` must be an integer")
    if value < minimum:
        raise PresetDecodeFailed(f"field `{key}` must be >= {minimum}, got {value}")
    return value


def _require_enum(data: Mapping[str, Any], key: str, enum_cls):
    value = _require_str(data, key)
    try:
        return enum_cls(value)
    except ValueError:
        expected = ", ".join(member.value for member in enum_cls)
        raise PresetDecodeFailed(
            f"unknown variant `{value}` for `{key}`, expected one of: {expected}"
        ) from None


def preset_from_dict(data: Mapping[str, Any]) -> Preset:
    """
    Map a decoded JSON object onto a Preset.

    Only the shape is checked here, plus a non-empty group list. Checks that
    need the inputs (empty groups, length versus group count) belong to
    ``derive``.
    """
    if not isinstance(data, Mapping):
        raise PresetDecodeFailed("preset must be a JSON object")

    charsets = _require(data, "charsets")
    if not isinstance(charsets, list) or not all(isinstance(c, str) for c in charsets):
        raise PresetDecodeFailed("field `charsets` must be a list of strings")
    if not charsets:
        raise PresetDecodeFailed("field `charsets` must not be empty")

    return Preset(
        name=_require_str(data, "name"),
        version=_require_int(data, "version"),
        hash_algorithm=_require_enum(data, "hashAlgorithm", HashAlgorithm),
        rng_algorithm=_require_enum(data, "rngAlgorithm", RngAlgorithm),
        shuffle_algorithm=_require_enum(data, "shuffleAlgorithm", ShuffleAlgorithm),
        length=_require_int(data, "length", minimum=1),
        platform_id=_require_str(data, "platformId"),
        charsets=tuple(charsets),
    )


def preset_to_dict(preset: Preset) -> Dict[str, Any]:
    return {
        "name": preset.name,
        "version": preset.version,
        "hashAlgorithm": HashAlgorithm(preset.hash_algorithm).value,
        "rngAlgorithm": RngAlgorithm(preset.rng_algorithm).value,
        "shuffleAlgorithm": ShuffleAlgorithm(preset.shuffle_algorithm).value,
        "length": preset.length,
        "platformId": preset.platform_id,
        "charsets": list(preset.charsets),
    }


def parse_preset(text: str) -> Preset:
    """Decode preset JSON text. Raises PresetDecodeFailed on any problem."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PresetDecodeFailed(str(exc)) from exc
    return preset_from_dict(data)


def check_version(preset: Preset) -> Preset:
    if preset.version != SUPPORTED_PRESET_VERSION:
        raise UnsupportedPresetVersion(preset.version)
    return preset


def load_preset(path: Path | str | None = None) -> Preset:
    """
    Read, decode and version-check a preset file.

    With no path, the default preset location is used (see
    ``default_preset_path``).
    """
    path = Path(path) if path is not None else default_preset_path()
    logger.debug("Loading preset from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PresetDecodeFailed(f"cannot read preset file '{path}': {exc}") from exc

    preset = check_version(parse_preset(raw))
    logger.debug(
        "Loaded preset %r (%s/%s, length %d, %d groups)",
        preset.name,
        preset.hash_algorithm.value,
        preset.rng_algorithm.value,
        preset.length,
        len(preset.charsets),
    )
    return preset
