"""
Error types raised by password derivation and preset loading.

Every failure is a deterministic function of the inputs, so callers should
report the error and stop; retrying with the same arguments cannot help.
"""

from __future__ import annotations


class AegisPassError(Exception):
    """Base class for all AegisPass failures."""

    def _key(self) -> tuple:
        return (type(self), self.args)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AegisPassError):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())


class InputEmpty(AegisPassError):
    """The secret or the distinguishing label is empty."""

    def __init__(self) -> None:
        super().__init__()

    def __str__(self) -> str:
        return (
            "Master password (passwordSource) and distinguish key "
            "(distinguishKey) cannot be empty."
        )


class LengthTooShort(AegisPassError):
    def __init__(self, requested: int, group_count: int) -> None:
        super().__init__(requested, group_count)
        self.requested = requested
        self.group_count = group_count

    def __str__(self) -> str:
        return (
            f"Password length ({self.requested}) is too short to guarantee "
            f"inclusion of characters from all {self.group_count} charset groups."
        )


class EmptyCharset(AegisPassError):
    def __init__(self) -> None:
        super().__init__()

    def __str__(self) -> str:
        return "All charset groups must contain at least one character."


class TooManyCharsetGroups(AegisPassError):
    def __init__(self, group_count: int, max_supported: int) -> None:
        super().__init__(group_count, max_supported)
        self.group_count = group_count
        self.max_supported = max_supported

    def __str__(self) -> str:
        return (
            f"The number of charset groups ({self.group_count}) is too large; "
            f"this algorithm supports a maximum of {self.max_supported} groups."
        )


class HashingFailed(AegisPassError):
    """A memory-hard KDF rejected its parameters or failed internally."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"Seed derivation failed: {self.detail}"


class PresetDecodeFailed(AegisPassError):
    """The preset file could not be read or does not have the preset shape."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"Failed to parse the preset JSON: {self.detail}"


class UnsupportedPresetVersion(PresetDecodeFailed):
    def __init__(self, version: int) -> None:
        super().__init__(f"unsupported preset version {version}")
        self.version = version
        # Keep equality keyed on the version, not the rendered detail.
        self.args = (version,)
