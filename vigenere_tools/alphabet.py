"""
alphabet.py — Keyed alphabets for the Vigenère tools
-----------------------------------------------------
The substitution domain used by both encryption and decryption arithmetic.
A keyword pulls its letters to the front, the rest of the base follows.
"""

import string

STANDARD_ALPHABET = string.ascii_uppercase


def fold(ch: str) -> str:
    """Upper-case one symbol, unless that would turn it into several (e.g. "ß")."""
    up = ch.upper()
    return up if len(up) == 1 else ch


class Alphabet:
    """Ordered, duplicate-free symbols with a case-insensitive index."""

    def __init__(self, symbols: str):
        self.symbols = "".join(fold(ch) for ch in symbols)
        self._index = {ch: i for i, ch in enumerate(self.symbols)}

    def index(self, ch: str):
        """Position of `ch` (case-folded), or None when it is not a member."""
        return self._index.get(fold(ch))

    def __contains__(self, ch):
        return fold(ch) in self._index

    def __getitem__(self, i):
        return self.symbols[i]

    def __len__(self):
        return len(self.symbols)

    def __iter__(self):
        return iter(self.symbols)

    def __eq__(self, other):
        if isinstance(other, Alphabet):
            return self.symbols == other.symbols
        if isinstance(other, str):
            return self.symbols == other
        return NotImplemented

    def __hash__(self):
        return hash(self.symbols)

    def __str__(self):
        return self.symbols

    def __repr__(self):
        return f"Alphabet({self.symbols!r})"


def build_keyed_alphabet(base: str = STANDARD_ALPHABET, key_phrase: str = "") -> Alphabet:
    base = "".join(fold(ch) for ch in base)
    seen = set()
    out = []

    for ch in map(fold, key_phrase or ""):
        if ch in base and ch not in seen:
            seen.add(ch)
            out.append(ch)

    for ch in base:
        if ch not in seen:
            seen.add(ch)
            out.append(ch)

    return Alphabet("".join(out))


def as_alphabet(alphabet) -> Alphabet:
    """Accept an Alphabet or a plain string of symbols."""
    if isinstance(alphabet, Alphabet):
        return alphabet
    return build_keyed_alphabet(alphabet or STANDARD_ALPHABET)
