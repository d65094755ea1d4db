"""
AegisPass deterministic password generator package.
"""

__version__ = "1.0.0"

from .config import (
    DEFAULT_PRESET,
    HashAlgorithm,
    Preset,
    RngAlgorithm,
    ShuffleAlgorithm,
)
from .errors import (
    AegisPassError,
    EmptyCharset,
    HashingFailed,
    InputEmpty,
    LengthTooShort,
    PresetDecodeFailed,
    TooManyCharsetGroups,
    UnsupportedPresetVersion,
)
from .preset import load_preset, parse_preset
from .cli import GenerationMeta, derive, derive_with_meta

__all__ = [
    "__version__",
    "Preset",
    "HashAlgorithm",
    "RngAlgorithm",
    "ShuffleAlgorithm",
    "DEFAULT_PRESET",
    "AegisPassError",
    "InputEmpty",
    "LengthTooShort",
    "EmptyCharset",
    "TooManyCharsetGroups",
    "HashingFailed",
    "PresetDecodeFailed",
    "UnsupportedPresetVersion",
    "GenerationMeta",
    "derive",
    "derive_with_meta",
    "load_preset",
    "parse_preset",
]
