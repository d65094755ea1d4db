import pytest

from aegispass.mapping import (
    combined_charset,
    fill_remaining,
    fisher_yates,
    inject_coverage,
    shuffle_in_place,
)

from conftest import SequenceSource


def test_inject_coverage_reads_little_endian_slices():
    seed = (7).to_bytes(4, "little") + (30).to_bytes(4, "little") + bytes(24)
    assert inject_coverage(seed, ["0123456789", "abc"]) == ["7", "a"]


def test_inject_coverage_uses_plain_modulo():
    # 0xFFFFFFFF % 10 == 5
    seed = b"\xff\xff\xff\xff" + bytes(28)
    assert inject_coverage(seed, ["0123456789"]) == ["5"]


def test_inject_coverage_counts_code_points():
    seed = (4).to_bytes(4, "little") + bytes(28)
    assert inject_coverage(seed, ["äöü"]) == ["ö"]


def test_inject_coverage_one_char_per_group_in_order():
    seed = bytes(range(32))
    groups = ["a", "b", "c", "d", "e", "f", "g", "h"]
    assert inject_coverage(seed, groups) == groups


def test_combined_charset_keeps_duplicates():
    assert combined_charset(["ab", "a", "c"]) == "abac"


def test_fill_remaining_draws_from_union():
    chars = ["x"]
    fill_remaining(chars, ["ab", "a"], 3, SequenceSource([0, 1, 2]))
    assert chars == ["x", "a", "b", "a"]


def test_fill_remaining_nothing_to_fill():
    chars = ["x", "y"]
    # An empty source would raise StopIteration if drawn from.
    assert fill_remaining(chars, ["xy"], 0, SequenceSource([])) == ["x", "y"]


def test_fisher_yates_backward_swaps():
    # Every draw is 0, so each position i swaps with position 0.
    chars = list("abcd")
    fisher_yates(chars, SequenceSource([0, 0, 0]))
    assert chars == list("bcda")


def test_fisher_yates_identity_draws():
    # Drawing j == i at every step leaves the order unchanged.
    chars = list("abcd")
    fisher_yates(chars, SequenceSource([3, 2, 1]))
    assert chars == list("abcd")


@pytest.mark.parametrize("chars", [[], ["only"]])
def test_fisher_yates_trivial_lengths(chars):
    assert fisher_yates(list(chars), SequenceSource([])) == chars


def test_shuffle_in_place_accepts_json_spelling():
    chars = list("abcd")
    shuffle_in_place(chars, SequenceSource([0, 0, 0]), "fisherYates")
    assert chars == list("bcda")


def test_shuffle_in_place_rejects_unknown_algorithm():
    with pytest.raises(ValueError):
        shuffle_in_place(list("ab"), SequenceSource([0]), "bogoSort")
