import pytest

from aegispass.config import HashAlgorithm, Preset, RngAlgorithm, ShuffleAlgorithm
from aegispass.rng import BitSource

SECRET = "MySecretPassword123!"

CHARSETS = (
    "0123456789",
    "abcdefghijklmnopqrstuvwxyz",
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "!@#$%^&*()_+-=",
)


class SequenceSource(BitSource):
    """Bit source that replays a fixed list of words."""

    def __init__(self, words):
        self._words = iter(words)

    def next_u32(self):
        return next(self._words)


@pytest.fixture
def example_preset():
    return Preset(
        name="AegisPass - Example",
        version=1,
        hash_algorithm=HashAlgorithm.SHA256,
        rng_algorithm=RngAlgorithm.CHACHA20,
        shuffle_algorithm=ShuffleAlgorithm.FISHER_YATES,
        length=16,
        platform_id="aegispass.example",
        charsets=CHARSETS,
    )
