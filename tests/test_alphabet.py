import pytest

from vigenere_tools.alphabet import STANDARD_ALPHABET, Alphabet, as_alphabet, build_keyed_alphabet


def test_keyword_letters_come_first():
    assert build_keyed_alphabet(STANDARD_ALPHABET, "KRYPTOS") == "KRYPTOSABCDEFGHIJLMNQUVWXZ"


def test_empty_keyphrase_gives_upper_cased_base():
    assert build_keyed_alphabet("abcdef", "") == "ABCDEF"
    assert build_keyed_alphabet("abcdef", None) == "ABCDEF"


def test_keyphrase_symbols_outside_base_are_ignored():
    assert build_keyed_alphabet("ABCDE", "e-d! x") == "EDABC"


@pytest.mark.parametrize("phrase", ["", "LEMON", "kryptos", "hello world!", "ZZZZ", "the quick brown fox"])
def test_result_is_a_permutation_of_the_base(phrase):
    alphabet = build_keyed_alphabet(STANDARD_ALPHABET, phrase)
    assert len(alphabet) == 26
    assert sorted(alphabet.symbols) == sorted(STANDARD_ALPHABET)
    assert len(set(alphabet.symbols)) == 26


def test_custom_length_alphabet():
    alphabet = build_keyed_alphabet("ABCDEFGHIJ0123456789", "9a")
    assert alphabet == "9ABCDEFGHIJ012345678"
    assert len(alphabet) == 20


def test_index_is_case_insensitive():
    alphabet = Alphabet("KRYPTOSABCDEFGHIJLMNQUVWXZ")
    assert alphabet.index("k") == 0
    assert alphabet.index("A") == 7
    assert alphabet.index("!") is None
    assert "y" in alphabet
    assert "?" not in alphabet


def test_as_alphabet_accepts_strings():
    assert as_alphabet("xyz") == Alphabet("XYZ")
    existing = Alphabet("ABC")
    assert as_alphabet(existing) is existing


def test_lowercase_symbols_are_folded():
    alphabet = Alphabet("abcdefghijklmnopqrstuvwxyz")
    assert alphabet == STANDARD_ALPHABET
    assert alphabet.index("L") == 11
    assert "q" in alphabet


def test_symbols_that_expand_when_upper_cased_are_kept():
    alphabet = build_keyed_alphabet("ßABC", "")
    assert alphabet == "ßABC"
    assert len(alphabet) == 4
    assert alphabet.index("ß") == 0
    assert build_keyed_alphabet("abcß", "ß") == "ßABC"
