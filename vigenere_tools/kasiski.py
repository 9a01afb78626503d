"""
kasiski.py — Kasiski examination
--------------------------------
Repeated n-grams in the letters-only stream -> distances -> factor votes.
The most-voted factors are the likely key lengths.
"""

import logging
from collections import Counter, defaultdict

from vigenere_tools.alphabet import as_alphabet, fold

log = logging.getLogger(__name__)

# factors above this are never considered key lengths
KEY_LENGTH_CEILING = 50


def extract_alphabet_only(ciphertext: str, alphabet):
    """
    Returns (projected, positions): the upper-cased alphabet members of the
    ciphertext and the offset each one had in the original text.
    """
    alphabet = as_alphabet(alphabet)
    letters = []
    positions = []
    for i, ch in enumerate(ciphertext):
        if ch in alphabet:
            letters.append(fold(ch))
            positions.append(i)
    return "".join(letters), positions


def find_repeats(projected: str, min_len: int = 3, max_len: int = 8):
    """
    Every substring of length min_len..max_len seen at least twice, mapped to
    its start offsets. Longer substrings come first.
    """
    n = len(projected)
    min_len = max(1, min_len)
    max_len = min(max_len, n // 2)

    repeats = {}
    for L in range(max_len, min_len - 1, -1):
        positions = defaultdict(list)
        for i in range(0, n - L + 1):
            positions[projected[i:i + L]].append(i)

        for ng, pos_list in positions.items():
            if len(pos_list) >= 2:
                repeats[ng] = pos_list

    log.debug("found %d repeated substrings in %d letters", len(repeats), n)
    return repeats


def factors(distance: int, max_factor: int = KEY_LENGTH_CEILING):
    distance = abs(distance)
    return [f for f in range(2, min(max_factor, distance) + 1) if distance % f == 0]


def estimate_key_lengths(repeats, max_key_len: int = 30, top_n: int = 5):
    """
    One vote per factor of every pairwise distance between occurrences.
    Ties go to the shorter length. An empty table gives an empty list, so the
    caller has to bring its own fallback range.
    """
    max_key_len = min(max_key_len, KEY_LENGTH_CEILING)
    votes = Counter()

    for pos_list in repeats.values():
        for i in range(len(pos_list)):
            for j in range(i + 1, len(pos_list)):
                d = pos_list[j] - pos_list[i]
                if d <= 0:
                    continue
                for f in factors(d, max_key_len):
                    votes[f] += 1

    if not votes:
        return []

    ranked = sorted(votes.items(), key=lambda kv: (-kv[1], kv[0]))
    return [length for length, _count in ranked[:top_n]]
