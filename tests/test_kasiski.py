from vigenere_tools.alphabet import STANDARD_ALPHABET, Alphabet, build_keyed_alphabet
from vigenere_tools.kasiski import (
    KEY_LENGTH_CEILING,
    estimate_key_lengths,
    extract_alphabet_only,
    factors,
    find_repeats,
)

THREE_REPEATS = "ABCDEFGHIJABCKLMNOPQABC"


def test_extract_keeps_alphabet_members_and_offsets():
    assert extract_alphabet_only("Ab, c!", STANDARD_ALPHABET) == ("ABC", [0, 1, 4])


def test_extract_is_idempotent(lemon_ciphertext):
    projected, _ = extract_alphabet_only(lemon_ciphertext, STANDARD_ALPHABET)
    again, positions = extract_alphabet_only(projected, STANDARD_ALPHABET)
    assert again == projected
    assert positions == list(range(len(projected)))


def test_single_repeat_positions():
    assert find_repeats(THREE_REPEATS, 3, 3) == {"ABC": [0, 10, 20]}


def test_longer_repeats_come_first():
    repeats = find_repeats("ABCDABCD", 2, 4)
    assert list(repeats) == ["ABCD", "ABC", "BCD", "AB", "BC", "CD"]
    assert repeats["ABCD"] == [0, 4]


def test_max_len_capped_at_half_the_text():
    assert find_repeats("ABAB", 1, 8) == {"AB": [0, 2], "A": [0, 2], "B": [1, 3]}


def test_no_repeats():
    assert find_repeats("", 3, 8) == {}
    assert find_repeats("ABCDEFGHIJ", 3, 8) == {}
    assert estimate_key_lengths({}) == []


def test_factors():
    assert factors(12) == [2, 3, 4, 6, 12]
    assert factors(12, 5) == [2, 3, 4]
    assert factors(-10) == [2, 5, 10]
    assert factors(1) == []


def test_votes_from_pairwise_distances():
    # distances 10, 10 and 20: 2, 5 and 10 get three votes, 4 and 20 one each
    repeats = find_repeats(THREE_REPEATS, 3, 3)
    assert estimate_key_lengths(repeats, max_key_len=30, top_n=10) == [2, 5, 10, 4, 20]


def test_top_n_and_ceiling():
    repeats = {"XYZ": [0, 120]}
    assert estimate_key_lengths(repeats, max_key_len=10, top_n=3) == [2, 3, 4]
    ranked = estimate_key_lengths(repeats, max_key_len=500, top_n=100)
    assert max(ranked) <= KEY_LENGTH_CEILING
    assert 120 not in ranked


def test_ties_prefer_shorter_lengths():
    assert estimate_key_lengths({"AAA": [0, 6]}, top_n=5) == [2, 3, 6]


def test_true_key_length_is_a_candidate(lemon_ciphertext):
    projected, _ = extract_alphabet_only(lemon_ciphertext, STANDARD_ALPHABET)
    candidates = estimate_key_lengths(find_repeats(projected, 3, 8), max_key_len=20, top_n=8)
    assert 5 in candidates


def test_extract_with_lowercase_alphabet():
    assert extract_alphabet_only("Ab, c!", Alphabet("abcdefghijklmnopqrstuvwxyz")) == ("ABC", [0, 1, 4])
    assert extract_alphabet_only("xßA", build_keyed_alphabet("ßABC")) == ("ßA", [1, 2])
